"""``{{name}}`` placeholder resolution with built-in defaults."""

from __future__ import annotations

import re
from datetime import date
from types import MappingProxyType
from typing import Callable, Mapping, Optional

_TOKEN = re.compile(r"\{\{(\w+)\}\}")

DEFAULT_PLACEHOLDERS: Mapping[str, str] = MappingProxyType(
    {
        "projectName": "Project Name",
        "username": "username",
        "repo": "repo",
        "ticketNumber": "00000",
        "prTitle": "[Title]",
        "apiUrl": "https://api.example.com/v1",
        "contactEmail": "contact@example.com",
        "projectDesc": (
            "A clear and concise description of what this project does "
            "and who it's for."
        ),
        "licenseType": "MIT",
        "buildStatus": "passing",
        "buildVersion": "1.0.0",
    }
)

# Names whose default is computed at resolution time.
DYNAMIC_PLACEHOLDERS: Mapping[str, Callable[[], str]] = MappingProxyType(
    {"date": lambda: date.today().isoformat()}
)

PLACEHOLDER_NAMES: tuple[str, ...] = tuple(DEFAULT_PLACEHOLDERS) + tuple(
    DYNAMIC_PLACEHOLDERS
)


def default_for(name: str) -> Optional[str]:
    if name in DEFAULT_PLACEHOLDERS:
        return DEFAULT_PLACEHOLDERS[name]
    factory = DYNAMIC_PLACEHOLDERS.get(name)
    return factory() if factory else None


def resolve_template(template: str, values: Optional[Mapping[str, str]] = None) -> str:
    """Substitute every ``{{name}}`` token.

    Missing or empty values fall back to the default for that name. Tokens
    with neither a value nor a default are left as written.
    """

    supplied = values or {}

    def _substitute(found: re.Match[str]) -> str:
        name = found.group(1)
        value = supplied.get(name)
        if value:
            return value
        fallback = default_for(name)
        return fallback if fallback is not None else found.group(0)

    return _TOKEN.sub(_substitute, template)


__all__ = [
    "DEFAULT_PLACEHOLDERS",
    "DYNAMIC_PLACEHOLDERS",
    "PLACEHOLDER_NAMES",
    "default_for",
    "resolve_template",
]
