"""Section catalog, detection heuristics, and template insertion."""

from .analyzer import AnalysisSummary, SectionAnalyzer
from .catalog import CatalogStats, SectionCatalog
from .defaults import (
    CATALOG_VERSION,
    DEFAULT_SECTIONS,
    default_catalog,
    load_default_sections,
)
from .inserter import InsertionResult, TemplateInserter
from .models import SectionSpec, header_phrase
from .placeholders import (
    DEFAULT_PLACEHOLDERS,
    PLACEHOLDER_NAMES,
    default_for,
    resolve_template,
)

__all__ = [
    "AnalysisSummary",
    "SectionAnalyzer",
    "CatalogStats",
    "SectionCatalog",
    "CATALOG_VERSION",
    "DEFAULT_SECTIONS",
    "default_catalog",
    "load_default_sections",
    "InsertionResult",
    "TemplateInserter",
    "SectionSpec",
    "header_phrase",
    "DEFAULT_PLACEHOLDERS",
    "PLACEHOLDER_NAMES",
    "default_for",
    "resolve_template",
]
