"""UI-agnostic Markdown authoring engine."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "errors",
    "lint",
    "runtime",
    "search",
    "sections",
    "session",
]

__version__ = "0.1.0"
