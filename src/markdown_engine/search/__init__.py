"""Find/replace with literal patterns and incremental match tracking."""

from .engine import MatchEngine, compile_literal
from .models import Direction, Match, ReplaceOutcome, SearchOptions

__all__ = [
    "Direction",
    "Match",
    "MatchEngine",
    "ReplaceOutcome",
    "SearchOptions",
    "compile_literal",
]
