"""Structural lint checks."""

from .validator import (
    MESSAGES,
    FenceState,
    StructuralValidator,
    ValidationIssue,
    validate,
)

__all__ = [
    "MESSAGES",
    "FenceState",
    "StructuralValidator",
    "ValidationIssue",
    "validate",
]
