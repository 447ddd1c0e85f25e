"""Whole-document whitespace normalization."""

from __future__ import annotations

import re

from markdown_engine.runtime.telemetry import span

_BEFORE_HEADING = re.compile(r"([^\n])\n(#{1,6} .+)")
_AFTER_HEADING = re.compile(r"(#{1,6} .+)\n([^\n#])")
_BULLET_INDENT = re.compile(r"^[ \t]*[-*+] ", re.MULTILINE)
_NUMBER_INDENT = re.compile(r"^[ \t]*(\d+)\. ", re.MULTILINE)
_TRAILING_WS = re.compile(r"[ \t]+$", re.MULTILINE)
_BLANK_RUNS = re.compile(r"\n{3,}")


def prettify(buffer: str) -> str:
    """Return ``buffer`` with normalized spacing; blank input is returned as is.

    Steps run in order: CRLF to LF, a blank line around headings, list
    indentation removed, trailing whitespace stripped, runs of blank lines
    collapsed to one, exactly one final newline.
    """

    if not buffer.strip():
        return buffer

    with span("actions::prettify", component="actions"):
        text = buffer.replace("\r\n", "\n")
        text = _BEFORE_HEADING.sub(r"\1\n\n\2", text)
        text = _AFTER_HEADING.sub(r"\1\n\n\2", text)
        text = _BULLET_INDENT.sub("- ", text)
        text = _NUMBER_INDENT.sub(r"\1. ", text)
        text = _TRAILING_WS.sub("", text)
        text = _BLANK_RUNS.sub("\n\n", text)
        return text.rstrip("\n") + "\n"


__all__ = ["prettify"]
