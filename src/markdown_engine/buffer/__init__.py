"""Buffer helpers and the undo history store."""

from .history import DEFAULT_HISTORY_LIMIT, HistoryStore
from .lines import (
    DocumentStats,
    Position,
    document_stats,
    line_start_offsets,
    offset_to_position,
    split_lines,
)

__all__ = [
    "DEFAULT_HISTORY_LIMIT",
    "HistoryStore",
    "DocumentStats",
    "Position",
    "document_stats",
    "line_start_offsets",
    "offset_to_position",
    "split_lines",
]
