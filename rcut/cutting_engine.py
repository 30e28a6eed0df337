from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import IO, Iterable, Iterator

from .models import CutJob, Delimiter, FieldRange, FieldSelector, LiteralDelimiter

LOGGER = logging.getLogger(__name__)

# ASCII whitespace: space, tab, LF, CR, FF.
_WHITESPACE_FIELD = re.compile(r"[^ \t\n\r\f]+")


class SourceError(RuntimeError):
    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"{source}: {message}")
        self.source = source


class SourceOpenError(SourceError):
    pass


class SourceReadError(SourceError):
    pass


def split_fields(line: str, delimiter: Delimiter) -> list[str]:
    if isinstance(delimiter, LiteralDelimiter):
        return line.split(delimiter.separator)
    return _WHITESPACE_FIELD.findall(line)


def resolve_position(index: int, field_count: int) -> int:
    """Map a raw selector index to a 1-based field position.

    Negative indexes count back from the last field. The result may fall
    outside ``[1, field_count]``; callers treat that as a miss.
    """
    if index < 0:
        return field_count + index + 1
    return index


def _reachable_indexes(field_range: FieldRange, field_count: int) -> Iterator[int]:
    """Walk ``field_range`` in order, limited to ``[-field_count, -1]`` and ``[1, field_count]``."""
    start, stop = field_range.start, field_range.stop
    if start <= stop:
        yield from range(max(start, -field_count), min(stop, -1) + 1)
        yield from range(max(start, 1), min(stop, field_count) + 1)
    else:
        yield from range(min(start, field_count), max(stop, 1) - 1, -1)
        yield from range(min(start, -1), max(stop, -field_count) - 1, -1)


def select_fields(fields: list[str], selector: FieldSelector) -> list[str]:
    field_count = len(fields)
    selected: list[str] = []
    for field_range in selector:
        for index in _reachable_indexes(field_range, field_count):
            position = resolve_position(index, field_count)
            if 1 <= position <= field_count:
                selected.append(fields[position - 1])
    return selected


def evaluate_line(line: str, job: CutJob) -> str:
    fields = split_fields(line, job.input_delim)
    return job.output_separator.join(select_fields(fields, job.selector)) + "\n"


def _strip_terminator(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


class LineCutter:
    def __init__(self, job: CutJob) -> None:
        self.job = job

    def cut_line(self, line: str) -> str:
        return evaluate_line(line, self.job)

    def process_reader(
        self,
        reader: Iterable[bytes] | Iterable[str],
        output: IO[str],
        source_name: str = "-",
        encoding: str = "utf-8",
    ) -> int:
        """Cut every line of ``reader`` into ``output``.

        Byte lines are decoded one at a time, so reading stops exactly at the
        first undecodable or unreadable line. Output already written for
        earlier lines is kept.
        """
        line_count = 0
        lines = iter(reader)
        while True:
            try:
                raw_line = next(lines)
            except StopIteration:
                break
            except UnicodeDecodeError as error:
                raise SourceReadError(
                    source_name, f"invalid text after line {line_count}: {error}"
                ) from error
            except OSError as error:
                raise SourceReadError(source_name, str(error)) from error

            if isinstance(raw_line, bytes):
                try:
                    line = raw_line.decode(encoding, errors="strict")
                except UnicodeDecodeError as error:
                    raise SourceReadError(
                        source_name, f"invalid text on line {line_count + 1}: {error}"
                    ) from error
            else:
                line = raw_line

            output.write(self.cut_line(_strip_terminator(line)))
            line_count += 1

        output.flush()
        LOGGER.debug("Processed %s line(s) from %s", line_count, source_name)
        return line_count

    def process_path(self, input_path: Path, output: IO[str], encoding: str = "utf-8") -> int:
        try:
            handle = input_path.open("rb")
        except OSError as error:
            reason = error.strerror or str(error)
            raise SourceOpenError(str(input_path), reason) from error

        with handle:
            return self.process_reader(handle, output, source_name=str(input_path), encoding=encoding)
