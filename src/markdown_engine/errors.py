"""Error kinds signaled by the editing services.

Core components raise these; ``EditorSession`` turns them into ``EditResult``
values carrying the same ``status`` string, so a caller never sees a half
applied edit.
"""

from __future__ import annotations


class EditorError(RuntimeError):
    """Base class for every recoverable editing condition."""

    status = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class EmptyQuery(EditorError):
    """Search or replace was invoked without a pattern."""

    status = "empty_query"

    def __init__(self, message: str = "Enter text to find") -> None:
        super().__init__(message)


class NoMatches(EditorError):
    """A well-formed search found zero occurrences."""

    status = "no_matches"

    def __init__(self, message: str = "No matches found", *, pattern: str = "") -> None:
        super().__init__(message)
        self.pattern = pattern


class NoMatchSelected(EditorError):
    status = "no_selection"

    def __init__(self, message: str = "No match selected", *, index: int = -1) -> None:
        super().__init__(message)
        self.index = index


class NothingToUndo(EditorError):
    status = "nothing_to_undo"

    def __init__(self, message: str = "Nothing to undo") -> None:
        super().__init__(message)


class SectionAlreadyPresent(EditorError):
    """Insertion declined because the document already has the section."""

    status = "section_exists"

    def __init__(self, section: str) -> None:
        super().__init__(f"The '{section}' section already exists in the document")
        self.section = section


class UnknownSection(EditorError):
    status = "unknown_section"

    def __init__(self, section: str) -> None:
        super().__init__(f"Section '{section}' is not in the catalog")
        self.section = section


class UnknownFormat(EditorError):
    status = "unknown_format"

    def __init__(self, kind: str) -> None:
        super().__init__(f"Unknown formatting command '{kind}'")
        self.kind = kind


class QuotaExceeded(EditorError):
    """A persistence write was rejected; the in-memory buffer stays valid."""

    status = "storage_warning"

    def __init__(
        self,
        message: str = "Storage quota exceeded. Your content may not be saved.",
        *,
        key: str | None = None,
    ) -> None:
        super().__init__(message)
        self.key = key


__all__ = [
    "EditorError",
    "EmptyQuery",
    "NoMatches",
    "NoMatchSelected",
    "NothingToUndo",
    "SectionAlreadyPresent",
    "UnknownSection",
    "UnknownFormat",
    "QuotaExceeded",
]
