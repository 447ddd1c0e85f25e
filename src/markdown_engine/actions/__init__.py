"""Editing commands that rewrite the buffer."""

from .formatting import FORMATTERS, FormatResult, apply_format
from .prettify import prettify

__all__ = ["FORMATTERS", "FormatResult", "apply_format", "prettify"]
