"""Preview boundary: the core hands text to a renderer and never inspects output."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol


class RenderError(RuntimeError):
    """Raised by renderers that cannot parse the buffer."""

    def __init__(self, message: str, *, line: Optional[int] = None) -> None:
        super().__init__(message)
        self.line = line


class Renderer(Protocol):
    def render(self, text: str) -> str:
        """Return rendered markup for ``text`` or raise ``RenderError``."""
        ...


@dataclass(frozen=True, slots=True)
class PreviewResult:
    status: str  # "rendered", "empty", or "render_error"
    markup: str = ""
    error: Optional[str] = None


def render_preview(renderer: Renderer, text: str) -> PreviewResult:
    if not text.strip():
        return PreviewResult(status="empty")
    try:
        markup = renderer.render(text)
    except RenderError as exc:
        return PreviewResult(status="render_error", error=str(exc))
    return PreviewResult(status="rendered", markup=markup)


__all__ = ["PreviewResult", "RenderError", "Renderer", "render_preview"]
