"""Line-by-line structural lint for Markdown buffers."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

from markdown_engine.buffer.lines import split_lines
from markdown_engine.runtime.telemetry import span


class FenceState(str, Enum):
    UNFENCED = "unfenced"
    BACKTICK = "backtick-fenced"
    TILDE = "tilde-fenced"


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    line: int  # 1-based
    message: str
    code: str = ""


_HEADING = re.compile(r"^#{1,6}")
_HEADING_OK = re.compile(r"^#{1,6}\s")
_BULLET = re.compile(r"^[ \t]*(?:\*(?!\*)|\+(?!\+)|-(?!-))")
_NUMBERED = re.compile(r"^[ \t]*\d+\.")
_QUOTE = re.compile(r"^[ \t]*>")
_QUOTE_OK = re.compile(r"^[ \t]*>\s")
_TASK = re.compile(r"^[ \t]*-\s\[[ xX]\]")
_TASK_OK = re.compile(r"^[ \t]*-\s\[[ xX]\]\s")
_LEADING_TAB = re.compile(r"^\t+")
_TRAILING_WS = re.compile(r"[ \t]+$")
_EMPTY_LINK = re.compile(r"\[[^\]]+\]\(\s*\)")

MESSAGES = {
    "heading-space": "Add a space after the # characters in headings.",
    "list-space": "List markers (-, *, +) need a space before the text.",
    "ordered-list-space": "Numbered lists need a space after the period.",
    "blockquote-space": "Add a space after the blockquote (>) marker.",
    "task-space": "Add a space after task list checkboxes.",
    "leading-tab": "Replace leading tabs with spaces for consistent rendering.",
    "trailing-whitespace": "Remove trailing spaces at the end of the line.",
    "empty-link": "Links should contain a destination URL.",
    "unclosed-backtick-fence": "Code fence opened with ``` is not closed.",
    "unclosed-tilde-fence": "Code fence opened with ~~~ is not closed.",
}


def _marker_needs_space(pattern: re.Pattern[str], line: str) -> bool:
    found = pattern.match(line)
    if not found:
        return False
    remainder = line[found.end() :]
    return bool(remainder.strip()) and not remainder[:1].isspace()


@dataclass
class _ScanState:
    fence: FenceState = FenceState.UNFENCED
    opened_at: Optional[int] = None
    issues: List[ValidationIssue] = field(default_factory=list)

    def add(self, line: int, code: str) -> None:
        self.issues.append(ValidationIssue(line=line, message=MESSAGES[code], code=code))


class StructuralValidator:
    """Single pass over the buffer's lines with fence tracking.

    Fenced lines only take part in fence-boundary detection. Every other line
    runs all content checks; one line may report several issues.
    """

    def __init__(self, *, trailing_whitespace_limit: int = 2) -> None:
        self.trailing_whitespace_limit = trailing_whitespace_limit
        self._checks: tuple[Callable[[str], Optional[str]], ...] = (
            self._check_heading,
            self._check_bullet,
            self._check_numbered,
            self._check_blockquote,
            self._check_task,
            self._check_leading_tab,
            self._check_trailing_whitespace,
            self._check_empty_link,
        )

    def validate(self, buffer: str) -> List[ValidationIssue]:
        with span("lint::validate", component="lint") as handle:
            state = _ScanState()
            for number, line in enumerate(split_lines(buffer), start=1):
                if self._track_fence(state, number, line.strip()):
                    continue
                if state.fence is not FenceState.UNFENCED:
                    continue
                for check in self._checks:
                    code = check(line)
                    if code:
                        state.add(number, code)

            if state.fence is FenceState.BACKTICK and state.opened_at is not None:
                state.add(state.opened_at, "unclosed-backtick-fence")
            elif state.fence is FenceState.TILDE and state.opened_at is not None:
                state.add(state.opened_at, "unclosed-tilde-fence")

            handle.add_metadata("issues", len(state.issues))
            return state.issues

    def _track_fence(self, state: _ScanState, number: int, trimmed: str) -> bool:
        """Advance the fence state machine; True when the line was a boundary."""

        if trimmed.startswith("```"):
            kind = FenceState.BACKTICK
        elif trimmed.startswith("~~~"):
            kind = FenceState.TILDE
        else:
            return False

        if state.fence is FenceState.UNFENCED:
            state.fence = kind
            state.opened_at = number
            return True
        if state.fence is kind:
            state.fence = FenceState.UNFENCED
            state.opened_at = None
            return True
        # The other fence kind is plain content inside the open fence.
        return False

    @staticmethod
    def _check_heading(line: str) -> Optional[str]:
        normalized = line.lstrip()
        if _HEADING.match(normalized) and not _HEADING_OK.match(normalized):
            return "heading-space"
        return None

    @staticmethod
    def _check_bullet(line: str) -> Optional[str]:
        return "list-space" if _marker_needs_space(_BULLET, line) else None

    @staticmethod
    def _check_numbered(line: str) -> Optional[str]:
        return "ordered-list-space" if _marker_needs_space(_NUMBERED, line) else None

    @staticmethod
    def _check_blockquote(line: str) -> Optional[str]:
        normalized = line.lstrip()
        if _QUOTE.match(normalized) and not _QUOTE_OK.match(normalized):
            return "blockquote-space"
        return None

    @staticmethod
    def _check_task(line: str) -> Optional[str]:
        if _TASK.match(line) and not _TASK_OK.match(line):
            return "task-space"
        return None

    @staticmethod
    def _check_leading_tab(line: str) -> Optional[str]:
        return "leading-tab" if _LEADING_TAB.match(line) else None

    def _check_trailing_whitespace(self, line: str) -> Optional[str]:
        found = _TRAILING_WS.search(line)
        if found and len(found.group(0)) > self.trailing_whitespace_limit:
            return "trailing-whitespace"
        return None

    @staticmethod
    def _check_empty_link(line: str) -> Optional[str]:
        return "empty-link" if _EMPTY_LINK.search(line) else None


def validate(buffer: str) -> List[ValidationIssue]:
    return StructuralValidator().validate(buffer)


__all__ = [
    "FenceState",
    "MESSAGES",
    "StructuralValidator",
    "ValidationIssue",
    "validate",
]
