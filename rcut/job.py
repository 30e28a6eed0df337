from __future__ import annotations

import logging
from typing import Sequence

from .models import CutJob, LiteralDelimiter, WhitespaceDelimiter
from .selector import parse_selector

LOGGER = logging.getLogger(__name__)

DEFAULT_OUTPUT_SEPARATOR = " "


class MissingSelectorError(ValueError):
    pass


def assemble_job(
    *,
    fields: str | None,
    delimiter: str | None,
    output_separator: str | None,
    positionals: Sequence[str],
) -> tuple[CutJob, list[str]]:
    """Build the job and the list of sources left to read.

    An explicit ``fields`` expression always wins; the positionals are then
    source names. Without it, the positionals are the selector and the
    input comes from standard input.
    """
    if fields is not None:
        expression = fields
        sources = list(positionals)
    else:
        if not positionals:
            raise MissingSelectorError("no field selector given (use -f LIST or positional fields)")
        expression = ",".join(positionals)
        sources = []

    selector = parse_selector(expression)

    if delimiter is None:
        input_delim = WhitespaceDelimiter()
    else:
        input_delim = LiteralDelimiter(separator=delimiter)

    if output_separator is None:
        output_separator = delimiter if delimiter is not None else DEFAULT_OUTPUT_SEPARATOR

    job = CutJob(input_delim=input_delim, selector=selector, output_separator=output_separator)
    LOGGER.debug("Cut job: %s", job.model_dump_json())
    LOGGER.debug("Sources: %s", sources or ["-"])
    return job, sources
