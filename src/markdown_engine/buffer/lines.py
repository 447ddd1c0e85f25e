"""Line/offset helpers over plain string buffers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Sequence, Tuple

Position = Tuple[int, int]  # (row, column), both 0-based

_WORD_SPLIT = re.compile(r"\s+")


def split_lines(text: str) -> List[str]:
    """Split on ``\\n`` only, keeping a trailing empty line after a final newline.

    Line numbers reported to users are ``index + 1`` into this list.
    """

    return text.split("\n")


def line_start_offsets(lines: Sequence[str]) -> List[int]:
    offsets: List[int] = []
    running = 0
    for line in lines:
        offsets.append(running)
        running += len(line) + 1  # newline
    return offsets


def offset_to_position(text: str, offset: int) -> Position:
    if offset < 0 or offset > len(text):
        raise ValueError(f"offset {offset} outside buffer of length {len(text)}")
    row = text.count("\n", 0, offset)
    line_start = text.rfind("\n", 0, offset) + 1
    return (row, offset - line_start)


@dataclass(frozen=True, slots=True)
class DocumentStats:
    words: int
    characters: int
    lines: int


def document_stats(text: str) -> DocumentStats:
    stripped = text.strip()
    words = len([w for w in _WORD_SPLIT.split(stripped) if w]) if stripped else 0
    return DocumentStats(
        words=words,
        characters=len(text),
        lines=len(split_lines(text)),
    )


__all__ = [
    "DocumentStats",
    "Position",
    "document_stats",
    "line_start_offsets",
    "offset_to_position",
    "split_lines",
]
