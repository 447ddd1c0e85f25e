"""Template insertion at the canonically correct spot in a document."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Mapping, Optional

from markdown_engine.buffer.lines import line_start_offsets, split_lines
from markdown_engine.errors import SectionAlreadyPresent
from markdown_engine.runtime.telemetry import span

from .analyzer import SectionAnalyzer
from .catalog import SectionCatalog
from .placeholders import resolve_template

_HEADER_LINE = re.compile(r"^##?\s+")
_SEPARATOR = "\n\n"


@dataclass(frozen=True, slots=True)
class InsertionResult:
    text: str
    offset: int
    section: str


class TemplateInserter:
    def __init__(
        self,
        catalog: Optional[SectionCatalog] = None,
        *,
        analyzer: Optional[SectionAnalyzer] = None,
    ) -> None:
        self.analyzer = analyzer or SectionAnalyzer(catalog)
        self.catalog = catalog or self.analyzer.catalog

    def find_insertion_point(self, buffer: str, target: str) -> int:
        """Offset of the first heading that names a section ordered after ``target``.

        Falls back to the end of the buffer when ``target`` is not in the
        catalog or no later section heading exists.
        """

        later = self.catalog.later_than(target)
        if not later:
            return len(buffer)
        phrases = [spec.header_phrase for spec in later]
        lines = split_lines(buffer)
        offsets = line_start_offsets(lines)
        for index, line in enumerate(lines):
            lowered = line.lower()
            if not _HEADER_LINE.match(lowered):
                continue
            if any(phrase in lowered for phrase in phrases):
                return offsets[index]
        return len(buffer)

    def render(self, target: str, values: Optional[Mapping[str, str]] = None) -> str:
        return resolve_template(self.catalog.get(target).template, values)

    def insert(
        self,
        buffer: str,
        target: str,
        values: Optional[Mapping[str, str]] = None,
    ) -> InsertionResult:
        with span(
            "sections::insert",
            component="sections",
            metadata={"section": target},
        ) as handle:
            template = self.render(target, values)
            if self.analyzer.analyze(buffer).get(target):
                raise SectionAlreadyPresent(target)

            if not buffer.strip():
                handle.add_metadata("offset", 0)
                return InsertionResult(text=template, offset=0, section=target)

            position = self.find_insertion_point(buffer, target)
            prefix = ""
            suffix = ""
            if position > 0 and buffer[position - 1] != "\n":
                prefix = _SEPARATOR
            if position < len(buffer) and buffer[position] != "\n":
                suffix = _SEPARATOR

            text = buffer[:position] + prefix + template + suffix + buffer[position:]
            offset = position + len(prefix)
            handle.add_metadata("offset", offset)
            return InsertionResult(text=text, offset=offset, section=target)


__all__ = ["InsertionResult", "TemplateInserter"]
