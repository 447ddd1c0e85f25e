"""Result and notification types exchanged with the host UI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from markdown_engine.buffer.lines import Position


@dataclass(slots=True)
class EditResult:
    """Outcome of one session command.

    ``changed`` tells the host whether the buffer was replaced. ``status`` is
    ``"ok"`` or a specific outcome such as ``"no_matches"``.
    """

    changed: bool
    status: str = "ok"
    message: Optional[str] = None
    cursor: Optional[int] = None
    selection: Optional[Tuple[int, int]] = None
    count: Optional[int] = None
    position: Optional[Position] = None  # (row, column) of the selection start


class EditorBus:
    """Synchronous pub/sub for session notifications."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def unsubscribe(self, event: str, callback: Callable[[object], None]) -> None:
        callbacks = self._subscribers.get(event, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, [])):
            callback(payload)


__all__ = ["EditResult", "EditorBus"]
