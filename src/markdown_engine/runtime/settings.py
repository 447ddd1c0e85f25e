"""Environment-driven settings shared by the engine and its boundary helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "MARKDOWN_ENGINE_"


def env(
    name: str,
    default: Optional[str] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> Optional[str]:
    source = os.environ if environ is None else environ
    return source.get(f"{ENV_PREFIX}{name}", default)


def env_flag(
    name: str, default: bool, *, environ: Optional[Mapping[str, str]] = None
) -> bool:
    raw = env(name, environ=environ)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def env_int(
    name: str, default: int, *, environ: Optional[Mapping[str, str]] = None
) -> int:
    raw = env(name, environ=environ)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{ENV_PREFIX}{name} must be positive, got {value}")
    return value


@dataclass(frozen=True, slots=True)
class EngineSettings:
    """Tunables for history, debouncing, and lint thresholds."""

    history_limit: int = 50
    autosave_delay_ms: int = 1000
    history_delay_ms: int = 3000
    preview_delay_ms: int = 300
    trailing_whitespace_limit: int = 2

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineSettings":
        defaults = cls()
        return cls(
            history_limit=env_int(
                "HISTORY_LIMIT", defaults.history_limit, environ=environ
            ),
            autosave_delay_ms=env_int(
                "AUTOSAVE_DELAY_MS", defaults.autosave_delay_ms, environ=environ
            ),
            history_delay_ms=env_int(
                "HISTORY_DELAY_MS", defaults.history_delay_ms, environ=environ
            ),
            preview_delay_ms=env_int(
                "PREVIEW_DELAY_MS", defaults.preview_delay_ms, environ=environ
            ),
            trailing_whitespace_limit=env_int(
                "TRAILING_WHITESPACE_LIMIT",
                defaults.trailing_whitespace_limit,
                environ=environ,
            ),
        )


__all__ = ["ENV_PREFIX", "EngineSettings", "env", "env_flag", "env_int"]
