"""Persistence boundary: key-value store protocol and editor storage keys."""

from __future__ import annotations

import json
import time
from typing import Callable, Dict, Mapping, Optional, Protocol

from markdown_engine.errors import QuotaExceeded
from markdown_engine.runtime import telemetry

CONTENT_KEY = "markdown-content"
TIMESTAMP_KEY = "markdown-timestamp"
PLACEHOLDERS_KEY = "templateVariables"


class KeyValueStore(Protocol):
    """What the editor needs from durable storage (e.g. browser localStorage)."""

    def set(self, key: str, value: str) -> None:
        """Store ``value``; may raise ``QuotaExceeded``."""
        ...

    def get(self, key: str) -> Optional[str]:
        ...

    def remove(self, key: str) -> None:
        ...


class InMemoryStore:
    """Dictionary-backed store with an optional size quota in characters."""

    def __init__(self, *, quota: Optional[int] = None) -> None:
        self.quota = quota
        self._data: Dict[str, str] = {}

    def set(self, key: str, value: str) -> None:
        if self.quota is not None:
            used = sum(
                len(k) + len(v) for k, v in self._data.items() if k != key
            )
            if used + len(key) + len(value) > self.quota:
                raise QuotaExceeded(key=key)
        self._data[key] = value

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> tuple[str, ...]:
        return tuple(self._data)


class EditorStorage:
    """Reads and writes the editor's three logical keys.

    Write failures propagate as ``QuotaExceeded``; the session decides how to
    surface them. Read failures never raise.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.store = store
        self._clock = clock or time.time

    def save_content(self, text: str) -> int:
        """Persist the buffer and return the saved-at timestamp in epoch ms."""

        stamp = int(self._clock() * 1000)
        self.store.set(CONTENT_KEY, text)
        self.store.set(TIMESTAMP_KEY, str(stamp))
        return stamp

    def load_content(self) -> Optional[str]:
        return self.store.get(CONTENT_KEY) or None

    def last_saved(self) -> Optional[int]:
        raw = self.store.get(TIMESTAMP_KEY)
        if not raw:
            return None
        try:
            return int(raw)
        except ValueError:
            telemetry.record_event(
                "storage.bad_timestamp", level="warning", data={"value": raw}
            )
            return None

    def save_placeholders(self, values: Mapping[str, str]) -> None:
        self.store.set(PLACEHOLDERS_KEY, json.dumps(dict(values), sort_keys=True))

    def load_placeholders(self) -> Dict[str, str]:
        raw = self.store.get(PLACEHOLDERS_KEY)
        if not raw:
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            telemetry.record_event(
                "storage.bad_placeholders", level="error", data={"error": str(exc)}
            )
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(key): str(value) for key, value in data.items() if value}

    def clear(self) -> None:
        for key in (CONTENT_KEY, TIMESTAMP_KEY, PLACEHOLDERS_KEY):
            self.store.remove(key)


__all__ = [
    "CONTENT_KEY",
    "PLACEHOLDERS_KEY",
    "TIMESTAMP_KEY",
    "EditorStorage",
    "InMemoryStore",
    "KeyValueStore",
]
