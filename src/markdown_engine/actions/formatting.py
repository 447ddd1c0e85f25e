"""Manual formatting commands applied to a selection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Tuple

from markdown_engine.errors import UnknownFormat
from markdown_engine.runtime.telemetry import span

# Each builder takes the selected text and returns (replacement, cursor offset
# relative to the selection start).
FormatBuilder = Callable[[str], Tuple[str, int]]


@dataclass(frozen=True, slots=True)
class FormatResult:
    text: str
    cursor: int
    kind: str


def _wrap(marker: str, placeholder: str) -> FormatBuilder:
    def build(selected: str) -> Tuple[str, int]:
        replacement = f"{marker}{selected or placeholder}{marker}"
        return replacement, len(replacement) if selected else len(marker)

    return build


def _prefix(marker: str, placeholder: str) -> FormatBuilder:
    def build(selected: str) -> Tuple[str, int]:
        replacement = f"{marker}{selected or placeholder}"
        return replacement, len(replacement)

    return build


def _per_line(marker: Callable[[int], str], fallback: str) -> FormatBuilder:
    def build(selected: str) -> Tuple[str, int]:
        if selected:
            lines = selected.split("\n")
            replacement = "\n".join(
                f"{marker(index)}{line}" for index, line in enumerate(lines)
            )
        else:
            replacement = fallback
        return replacement, len(replacement)

    return build


def _link(selected: str) -> Tuple[str, int]:
    replacement = f"[{selected or 'link text'}](url)"
    # With a selection the cursor lands inside the parentheses, on "url".
    return replacement, len(replacement) - 4 if selected else 1


def _codeblock(selected: str) -> Tuple[str, int]:
    replacement = f"```javascript\n{selected or '// Code here'}\n```"
    return replacement, len(replacement) - 4 if selected else replacement.index("\n") + 1


def _table(selected: str) -> Tuple[str, int]:
    del selected
    replacement = (
        "| Column 1 | Column 2 | Column 3 |\n"
        "|----------|----------|----------|\n"
        "| Cell 1   | Cell 2   | Cell 3   |\n"
        "| Cell 4   | Cell 5   | Cell 6   |"
    )
    return replacement, len(replacement)


def _rule(selected: str) -> Tuple[str, int]:
    del selected
    return "---", 3


def _details(selected: str) -> Tuple[str, int]:
    replacement = (
        f"<details>\n<summary>{selected or 'Click to expand'}</summary>"
        "\n\nContent here\n\n</details>"
    )
    return replacement, replacement.index("Content here")


FORMATTERS: Dict[str, FormatBuilder] = {
    "bold": _wrap("**", "bold text"),
    "italic": _wrap("*", "italic text"),
    "strike": _wrap("~~", "strikethrough text"),
    "code": _wrap("`", "code"),
    "link": _link,
    "h1": _prefix("# ", "Heading 1"),
    "h2": _prefix("## ", "Heading 2"),
    "h3": _prefix("### ", "Heading 3"),
    "quote": _prefix("> ", "Quote text"),
    "ul": _per_line(lambda _i: "- ", "- List item 1\n- List item 2\n- List item 3"),
    "ol": _per_line(
        lambda i: f"{i + 1}. ", "1. List item 1\n2. List item 2\n3. List item 3"
    ),
    "task": _per_line(lambda _i: "- [ ] ", "- [ ] Task 1\n- [ ] Task 2\n- [ ] Task 3"),
    "codeblock": _codeblock,
    "table": _table,
    "hr": _rule,
    "details": _details,
}


def apply_format(buffer: str, start: int, end: int, kind: str) -> FormatResult:
    """Replace ``buffer[start:end]`` with its formatted version.

    The returned cursor is an absolute offset into the new buffer.
    """

    builder = FORMATTERS.get(kind)
    if builder is None:
        raise UnknownFormat(kind)
    if start > end:
        start, end = end, start
    start = max(0, min(start, len(buffer)))
    end = max(start, min(end, len(buffer)))

    with span("actions::format", component="actions", metadata={"kind": kind}):
        replacement, cursor_offset = builder(buffer[start:end])
        text = buffer[:start] + replacement + buffer[end:]
        return FormatResult(text=text, cursor=start + cursor_offset, kind=kind)


__all__ = ["FORMATTERS", "FormatResult", "apply_format"]
