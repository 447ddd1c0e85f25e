"""Poll-driven debouncing for work that hosts run off the editing hot path."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Iterator, Optional

from . import telemetry

Clock = Callable[[], float]


@dataclass(slots=True)
class CancellationToken:
    """Handle for one scheduled task; cancelling it makes the task a no-op."""

    key: str
    generation: int
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass(slots=True)
class PendingTask:
    deadline: float
    delay_ms: int
    callback: Callable[[], object]
    token: CancellationToken = field(repr=False)


class DebouncedScheduler:
    """Keyed debouncer: rescheduling a key supersedes the pending task.

    Nothing runs on its own. Hosts call ``process_due`` from whatever loop or
    timer they already have; ``flush`` runs pending work immediately.
    """

    def __init__(self, *, clock: Optional[Clock] = None) -> None:
        self._clock = clock or time.monotonic
        self._pending: Dict[str, PendingTask] = {}
        self._generation = 0

    def schedule(
        self, key: str, delay_ms: int, callback: Callable[[], object]
    ) -> CancellationToken:
        if delay_ms < 0:
            raise ValueError("delay_ms cannot be negative")
        self.cancel(key)
        self._generation += 1
        token = CancellationToken(key=key, generation=self._generation)
        self._pending[key] = PendingTask(
            deadline=self._clock() + delay_ms / 1000.0,
            delay_ms=delay_ms,
            callback=callback,
            token=token,
        )
        return token

    def cancel(self, key: str) -> bool:
        task = self._pending.pop(key, None)
        if task is None:
            return False
        task.token.cancel()
        return True

    def pending(self) -> tuple[str, ...]:
        return tuple(
            key for key, task in self._pending.items() if not task.token.cancelled
        )

    def process_due(self, now: Optional[float] = None) -> Dict[str, object]:
        """Run every task whose deadline has passed and return their results."""

        current = self._clock() if now is None else now
        due = [key for key, task in self._pending.items() if task.deadline <= current]
        return {key: result for key, result in self._run(due)}

    def flush(self, key: Optional[str] = None) -> Dict[str, object]:
        keys = [key] if key is not None else list(self._pending)
        return {name: result for name, result in self._run(keys)}

    def _run(self, keys: Iterable[str]) -> Iterator[tuple[str, object]]:
        for key in keys:
            task = self._pending.pop(key, None)
            if task is None:
                continue
            if task.token.cancelled:
                continue
            with telemetry.span(
                f"scheduler::{key}",
                component="scheduler",
                metadata={"delay_ms": task.delay_ms, "generation": task.token.generation},
            ):
                yield key, task.callback()


__all__ = ["CancellationToken", "DebouncedScheduler", "PendingTask"]
