from __future__ import annotations

import logging
import re

from .models import FieldRange, FieldSelector

LOGGER = logging.getLogger(__name__)

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


class SelectorParseError(RuntimeError):
    pass


class EmptyRangeError(SelectorParseError):
    def __init__(self, expression: str) -> None:
        super().__init__(f"empty field range in selector '{expression}'")
        self.expression = expression


class InvalidIntegerError(SelectorParseError):
    def __init__(self, value: str) -> None:
        super().__init__(f"invalid field index '{value}'")
        self.value = value


def _parse_integer(value: str) -> int:
    if not _INTEGER_PATTERN.fullmatch(value):
        raise InvalidIntegerError(value)
    return int(value)


def _parse_token(token: str, expression: str) -> FieldRange:
    if token == "":
        raise EmptyRangeError(expression)

    if _INTEGER_PATTERN.fullmatch(token):
        value = int(token)
        return FieldRange(start=value, stop=value)

    # A leading '-' is the sign of the start value, so the span separator is
    # the first '-' after it. Any later '-' belongs to the stop value.
    split_at = token.find("-", 1)
    if split_at == -1:
        raise InvalidIntegerError(token)

    start = _parse_integer(token[:split_at])
    stop = _parse_integer(token[split_at + 1 :])
    return FieldRange(start=start, stop=stop)


def parse_selector(expression: str) -> FieldSelector:
    """Compile a selector expression such as ``"1,3-5,-1"``.

    Ranges keep their endpoints verbatim; negative positions are resolved
    per line by the cutting engine.
    """
    if expression.startswith("-") and _INTEGER_PATTERN.fullmatch(expression):
        # Lone negative field, as handed over from positional arguments.
        value = int(expression)
        selector = FieldSelector(ranges=(FieldRange(start=value, stop=value),))
    else:
        ranges = tuple(_parse_token(token, expression) for token in expression.split(","))
        selector = FieldSelector(ranges=ranges)

    LOGGER.debug("Selector %r compiled to %s range(s)", expression, len(selector))
    return selector
