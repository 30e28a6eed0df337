from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import IO, Sequence

from pydantic import ValidationError

from . import __version__
from .config import CutSettings, load_settings
from .cutting_engine import LineCutter, SourceError
from .job import MissingSelectorError, assemble_job
from .selector import SelectorParseError

LOGGER = logging.getLogger(__name__)

STDIN_NAME = "-"

EXIT_OK = 0
EXIT_SOURCE_FAILURE = 1
EXIT_USAGE = 2


def _setup_logging(verbose: bool, default_level: str = "WARNING") -> None:
    level = logging.DEBUG if verbose else getattr(logging, default_level, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )


def _stdin_reader() -> IO[bytes] | IO[str]:
    return getattr(sys.stdin, "buffer", sys.stdin)


def _silence_stdout() -> None:
    # Interpreter shutdown flushes stdout again; point it at devnull so a
    # closed pipe does not produce a second error.
    try:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
    except (AttributeError, OSError, ValueError):
        pass


def _process_sources(
    cutter: LineCutter,
    sources: list[str],
    output: IO[str],
    encoding: str,
) -> SourceError | None:
    first_failure: SourceError | None = None

    for source in sources or [STDIN_NAME]:
        try:
            if source == STDIN_NAME:
                cutter.process_reader(
                    _stdin_reader(), output, source_name=STDIN_NAME, encoding=encoding
                )
            else:
                cutter.process_path(Path(source), output, encoding=encoding)
        except SourceError as error:
            LOGGER.error("%s", error)
            if first_failure is None:
                first_failure = error

    return first_failure


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rcut",
        description="cut-like tool with smoother aesthetics: negative, repeated and reordered fields.",
        epilog=(
            "Selectors are comma-separated field numbers or A-B spans, e.g. 1,3-5,-1. "
            "Pass a selector starting with '-' as -f=LIST or as a lone positional number."
        ),
    )
    parser.add_argument("-d", "--delimiter", default=None, help="field delimiter (default: runs of whitespace)")
    parser.add_argument(
        "-o",
        "--output-separator",
        "--output_separator",
        dest="output_separator",
        default=None,
        help="separator used when printing fields (default: the delimiter, or a space)",
    )
    parser.add_argument("-f", "--fields", default=None, help="fields to select")
    parser.add_argument("--encoding", default=None, choices=["utf-8", "latin-1"], help="input encoding")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logs.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("args", nargs="*", help="file(s) to process or field selectors")
    return parser


def _resolve_options(args: argparse.Namespace, settings: CutSettings) -> tuple[str | None, str | None]:
    delimiter = args.delimiter if args.delimiter is not None else settings.delimiter
    output_separator = args.output_separator
    if output_separator is None and args.delimiter is None:
        output_separator = settings.output_separator
    return delimiter, output_separator


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = load_settings()
    _setup_logging(verbose=args.verbose, default_level=settings.log_level)
    LOGGER.debug("Settings loaded from %s", settings.source)

    delimiter, output_separator = _resolve_options(args, settings)
    try:
        job, sources = assemble_job(
            fields=args.fields,
            delimiter=delimiter,
            output_separator=output_separator,
            positionals=args.args,
        )
    except (SelectorParseError, MissingSelectorError) as error:
        LOGGER.error("%s", error)
        return EXIT_USAGE
    except ValidationError as error:
        LOGGER.error("Invalid options: %s", error)
        return EXIT_USAGE

    encoding = args.encoding or settings.encoding
    cutter = LineCutter(job)
    try:
        failure = _process_sources(cutter, sources, sys.stdout, encoding)
        sys.stdout.flush()
    except BrokenPipeError:
        LOGGER.debug("Output closed by reader, stopping.")
        _silence_stdout()
        return EXIT_OK
    except OSError as error:
        LOGGER.error("Unable to write output: %s", error)
        return EXIT_SOURCE_FAILURE

    if failure is not None:
        return EXIT_SOURCE_FAILURE
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
