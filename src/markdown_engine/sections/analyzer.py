"""Heuristic detection of which catalog sections a document already has."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from markdown_engine.buffer.lines import split_lines
from markdown_engine.runtime.telemetry import span

from .catalog import SectionCatalog
from .defaults import default_catalog
from .models import SectionSpec


@dataclass(frozen=True, slots=True)
class AnalysisSummary:
    found: int
    total: int


class SectionAnalyzer:
    """Pure classifier; patterns are deliberately broad, so false positives happen."""

    def __init__(self, catalog: Optional[SectionCatalog] = None) -> None:
        self.catalog = catalog or default_catalog()

    def analyze(self, buffer: str) -> Dict[str, bool]:
        with span(
            "sections::analyze",
            component="sections",
            metadata={"catalog_version": self.catalog.version},
        ) as handle:
            lowered = buffer.lower()
            lines = split_lines(buffer)
            found = {
                spec.name: _detect(spec, lowered, lines) for spec in self.catalog
            }
            handle.add_metadata("found", sum(found.values()))
            return found

    def present(self, buffer: str) -> tuple[str, ...]:
        return tuple(name for name, hit in self.analyze(buffer).items() if hit)

    def summary(self, buffer: str) -> AnalysisSummary:
        found = self.analyze(buffer)
        return AnalysisSummary(found=sum(found.values()), total=len(found))


def _detect(spec: SectionSpec, lowered: str, lines: list[str]) -> bool:
    for pattern in spec.patterns:
        if pattern.search(lowered):
            return True
        if any(pattern.search(line) for line in lines):
            return True
    return False


__all__ = ["AnalysisSummary", "SectionAnalyzer"]
