"""Ordered registry of section specs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from markdown_engine.errors import UnknownSection
from markdown_engine.runtime.telemetry import span

from .models import SectionSpec


@dataclass(slots=True)
class CatalogStats:
    section_count: int
    version: str
    revision: int


class SectionCatalog:
    """Owns section specs and their canonical insertion order.

    Registration order is canonical order. Replacing a section keeps its
    original position.
    """

    def __init__(self, *, version: str = "custom", logger_name: str | None = None) -> None:
        self.version = version
        self._sections: Dict[str, SectionSpec] = {}
        self._order: List[str] = []
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def register(self, spec: SectionSpec, *, replace: bool = False) -> SectionSpec:
        with span(
            "sections::register",
            logger_name=self._logger_name,
            component="sections",
            metadata={"section": spec.name},
        ):
            if spec.name in self._sections:
                if not replace:
                    raise ValueError(f"Section '{spec.name}' already registered")
            else:
                self._order.append(spec.name)
            self._sections[spec.name] = spec
            self._revision += 1
            return spec

    def unregister(self, name: str) -> Optional[SectionSpec]:
        spec = self._sections.pop(name, None)
        if spec is None:
            return None
        self._order.remove(name)
        self._revision += 1
        return spec

    def get(self, name: str) -> SectionSpec:
        try:
            return self._sections[name]
        except KeyError as exc:
            raise UnknownSection(name) from exc

    def index_of(self, name: str) -> int:
        """Canonical position of ``name``, or -1 when it is not registered."""

        try:
            return self._order.index(name)
        except ValueError:
            return -1

    def later_than(self, name: str) -> tuple[SectionSpec, ...]:
        index = self.index_of(name)
        if index == -1:
            return ()
        return tuple(self._sections[n] for n in self._order[index + 1 :])

    @property
    def order(self) -> tuple[str, ...]:
        return tuple(self._order)

    def stats(self) -> CatalogStats:
        return CatalogStats(
            section_count=len(self._order),
            version=self.version,
            revision=self._revision,
        )

    def __contains__(self, name: object) -> bool:
        return name in self._sections

    def __iter__(self) -> Iterator[SectionSpec]:
        for name in self._order:
            yield self._sections[name]

    def __len__(self) -> int:
        return len(self._order)


__all__ = ["CatalogStats", "SectionCatalog"]
