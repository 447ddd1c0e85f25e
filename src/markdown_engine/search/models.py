"""Value types shared by find/replace."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List


class Direction(str, Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


@dataclass(frozen=True, slots=True)
class SearchOptions:
    case_sensitive: bool = False
    whole_word: bool = False


@dataclass(frozen=True, slots=True)
class Match:
    """One occurrence of the pattern, as an offset/length pair."""

    offset: int
    length: int

    def __post_init__(self) -> None:
        if self.offset < 0:
            raise ValueError("match offset cannot be negative")
        if self.length <= 0:
            raise ValueError("match length must be positive")

    @property
    def end(self) -> int:
        return self.offset + self.length

    def shifted(self, delta: int) -> "Match":
        return Match(offset=self.offset + delta, length=self.length)


@dataclass(frozen=True, slots=True)
class ReplaceOutcome:
    """Buffer and match list that must be used together after a replacement."""

    text: str
    matches: List[Match]
    count: int = 1


__all__ = ["Direction", "Match", "ReplaceOutcome", "SearchOptions"]
