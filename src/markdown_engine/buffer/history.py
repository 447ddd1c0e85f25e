"""Snapshot-based undo history."""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterable, Optional

from markdown_engine.errors import NothingToUndo

DEFAULT_HISTORY_LIMIT = 50


class HistoryStore:
    """Bounded stack of whole-buffer snapshots.

    The top entry is the current state. Adjacent duplicates are never stored
    and the oldest entry is evicted once ``limit`` is exceeded. Undone states
    are discarded; there is no redo.
    """

    def __init__(
        self,
        *,
        limit: int = DEFAULT_HISTORY_LIMIT,
        entries: Optional[Iterable[str]] = None,
    ) -> None:
        if limit < 2:
            raise ValueError("history limit must allow at least two snapshots")
        self.limit = limit
        self._entries: Deque[str] = deque(maxlen=limit)
        for text in entries or ():
            self.commit(text)

    def commit(self, buffer: str) -> None:
        if self._entries and self._entries[-1] == buffer:
            return
        self._entries.append(buffer)

    def can_undo(self) -> bool:
        return len(self._entries) >= 2

    def undo(self) -> str:
        if not self.can_undo():
            raise NothingToUndo()
        self._entries.pop()
        return self._entries[-1]

    @property
    def top(self) -> Optional[str]:
        return self._entries[-1] if self._entries else None

    @property
    def entries(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["DEFAULT_HISTORY_LIMIT", "HistoryStore"]
