"""Runtime services: settings, telemetry, and host-side scheduling."""

from .settings import EngineSettings

__all__ = ["EngineSettings", "scheduler", "settings", "telemetry"]
