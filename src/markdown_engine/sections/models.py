"""Dataclasses describing catalog sections."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

_PLACEHOLDER = re.compile(r"\{\{(\w+)\}\}")
_CASE_BOUNDARY = re.compile(r"([A-Z])")


def _compile_patterns(patterns: Iterable[str | re.Pattern[str]]) -> tuple[re.Pattern[str], ...]:
    compiled = []
    for pattern in patterns:
        if isinstance(pattern, re.Pattern):
            compiled.append(pattern)
        else:
            compiled.append(re.compile(pattern, re.IGNORECASE))
    return tuple(compiled)


def header_phrase(name: str) -> str:
    """``"quickPR"`` -> ``"quick p r"``: words a heading must contain."""

    return _CASE_BOUNDARY.sub(r" \1", name).strip().lower()


@dataclass(frozen=True, slots=True)
class SectionSpec:
    """A named template unit with detection heuristics."""

    name: str
    template: str
    patterns: tuple[re.Pattern[str], ...] = ()
    description: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("section name cannot be empty")
        if not self.template:
            raise ValueError(f"section '{self.name}' needs a template body")
        object.__setattr__(self, "patterns", _compile_patterns(self.patterns))

    @property
    def header_phrase(self) -> str:
        return header_phrase(self.name)

    @property
    def placeholders(self) -> tuple[str, ...]:
        return tuple(dict.fromkeys(_PLACEHOLDER.findall(self.template)))


__all__ = ["SectionSpec", "header_phrase"]
