"""Literal find/replace over string buffers."""

from __future__ import annotations

import re
from typing import List, Sequence

from markdown_engine.errors import EmptyQuery, NoMatches, NoMatchSelected
from markdown_engine.runtime.telemetry import span

from .models import Direction, Match, ReplaceOutcome, SearchOptions

_DEFAULT_OPTIONS = SearchOptions()


def compile_literal(
    pattern: str, options: SearchOptions = _DEFAULT_OPTIONS
) -> re.Pattern[str]:
    """Build a regex that matches ``pattern`` verbatim.

    This is the only place a search pattern is constructed; user text never
    reaches ``re`` unescaped.
    """

    if not pattern:
        raise EmptyQuery()
    source = re.escape(pattern)
    if options.whole_word:
        source = rf"\b{source}\b"
    flags = 0 if options.case_sensitive else re.IGNORECASE
    return re.compile(source, flags)


class MatchEngine:
    """Stateless search and replace; callers own the match list between calls."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._logger_name = logger_name

    def search(
        self,
        buffer: str,
        pattern: str,
        options: SearchOptions = _DEFAULT_OPTIONS,
    ) -> List[Match]:
        with span(
            "search::find",
            logger_name=self._logger_name,
            component="search",
            metadata={"pattern_length": len(pattern)},
        ) as handle:
            regex = compile_literal(pattern, options)
            matches = [
                Match(offset=found.start(), length=found.end() - found.start())
                for found in regex.finditer(buffer)
            ]
            handle.add_metadata("matches", len(matches))
            return matches

    def advance(
        self,
        matches: Sequence[Match],
        current_index: int,
        direction: Direction | str = Direction.FORWARD,
    ) -> int:
        if not matches:
            raise NoMatches()
        count = len(matches)
        # Anything outside the list counts as "no current match".
        if not 0 <= current_index < count:
            current_index = -1
        if Direction(direction) is Direction.FORWARD:
            return (current_index + 1) % count
        if current_index <= 0:
            return count - 1
        return current_index - 1

    def replace_one(
        self,
        buffer: str,
        matches: Sequence[Match],
        index: int,
        replacement: str,
    ) -> ReplaceOutcome:
        """Replace ``matches[index]`` and return the buffer with the updated list.

        Entries before ``index`` keep their offsets; later entries shift by the
        length difference. Offsets are not recomputed against the new buffer.
        """

        if index < 0 or index >= len(matches):
            raise NoMatchSelected(index=index)
        target = matches[index]
        with span(
            "search::replace_one",
            logger_name=self._logger_name,
            component="search",
            metadata={"index": index, "offset": target.offset},
        ):
            text = buffer[: target.offset] + replacement + buffer[target.end :]
            delta = len(replacement) - target.length
            remaining = list(matches[:index])
            remaining.extend(match.shifted(delta) for match in matches[index + 1 :])
            return ReplaceOutcome(text=text, matches=remaining, count=1)

    def replace_all(
        self,
        buffer: str,
        pattern: str,
        replacement: str,
        options: SearchOptions = _DEFAULT_OPTIONS,
    ) -> ReplaceOutcome:
        with span(
            "search::replace_all",
            logger_name=self._logger_name,
            component="search",
            metadata={"pattern_length": len(pattern)},
        ) as handle:
            regex = compile_literal(pattern, options)
            # A callable keeps the replacement literal (no \1 or \g<name>).
            text, count = regex.subn(lambda _found: replacement, buffer)
            if count == 0:
                raise NoMatches(pattern=pattern)
            handle.add_metadata("count", count)
            return ReplaceOutcome(text=text, matches=[], count=count)


__all__ = ["MatchEngine", "compile_literal"]
