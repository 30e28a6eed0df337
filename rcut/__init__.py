"""Field extraction from delimited text lines, a cut(1) with negative and reordered fields."""

__version__ = "1.0"

from .cutting_engine import LineCutter, evaluate_line
from .models import (
    CutJob,
    Delimiter,
    FieldRange,
    FieldSelector,
    LiteralDelimiter,
    WhitespaceDelimiter,
)
from .selector import parse_selector

__all__ = [
    "CutJob",
    "Delimiter",
    "FieldRange",
    "FieldSelector",
    "LineCutter",
    "LiteralDelimiter",
    "WhitespaceDelimiter",
    "evaluate_line",
    "parse_selector",
]
