from __future__ import annotations

from collections.abc import Iterator
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class WhitespaceDelimiter(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["whitespace"] = "whitespace"


class LiteralDelimiter(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["literal"] = "literal"
    separator: str = Field(min_length=1)


Delimiter = Annotated[
    WhitespaceDelimiter | LiteralDelimiter,
    Field(discriminator="kind"),
]


class FieldRange(BaseModel):
    """Closed interval of field positions, stored exactly as written.

    Endpoints may be negative (counted from the end of the line) and ``start``
    may exceed ``stop``, in which case the interval is walked downwards.
    """

    model_config = ConfigDict(frozen=True)

    start: int
    stop: int

    @property
    def is_single(self) -> bool:
        return self.start == self.stop

    @property
    def is_descending(self) -> bool:
        return self.start > self.stop

    def indexes(self) -> Iterator[int]:
        if self.is_descending:
            return iter(range(self.start, self.stop - 1, -1))
        return iter(range(self.start, self.stop + 1))


class FieldSelector(BaseModel):
    model_config = ConfigDict(frozen=True)

    ranges: tuple[FieldRange, ...] = Field(min_length=1)

    def __iter__(self) -> Iterator[FieldRange]:  # type: ignore[override]
        return iter(self.ranges)

    def __len__(self) -> int:
        return len(self.ranges)


class CutJob(BaseModel):
    model_config = ConfigDict(frozen=True)

    input_delim: Delimiter = Field(default_factory=WhitespaceDelimiter)
    selector: FieldSelector
    output_separator: str = " "
