"""Collaborator boundaries: persistence and preview rendering."""

from .rendering import PreviewResult, RenderError, Renderer, render_preview
from .storage import (
    CONTENT_KEY,
    PLACEHOLDERS_KEY,
    TIMESTAMP_KEY,
    EditorStorage,
    InMemoryStore,
    KeyValueStore,
)

__all__ = [
    "PreviewResult",
    "RenderError",
    "Renderer",
    "render_preview",
    "CONTENT_KEY",
    "PLACEHOLDERS_KEY",
    "TIMESTAMP_KEY",
    "EditorStorage",
    "InMemoryStore",
    "KeyValueStore",
]
