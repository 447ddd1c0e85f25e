"""Editor session: the buffer plus every service that derives state from it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional

from markdown_engine.actions import apply_format, prettify
from markdown_engine.adapters.rendering import PreviewResult, Renderer, render_preview
from markdown_engine.adapters.storage import EditorStorage
from markdown_engine.buffer import (
    DocumentStats,
    HistoryStore,
    document_stats,
    offset_to_position,
)
from markdown_engine.errors import EditorError, NoMatchSelected, QuotaExceeded
from markdown_engine.lint import StructuralValidator, ValidationIssue
from markdown_engine.runtime import telemetry
from markdown_engine.runtime.settings import EngineSettings
from markdown_engine.search import Direction, Match, MatchEngine, SearchOptions
from markdown_engine.sections import SectionAnalyzer, SectionCatalog, TemplateInserter

from .events import EditorBus, EditResult


@dataclass(slots=True)
class FindState:
    query: str = ""
    options: SearchOptions = SearchOptions()
    matches: List[Match] | None = None
    index: int = -1

    def reset(self) -> None:
        self.matches = None
        self.index = -1

    @property
    def current(self) -> Optional[Match]:
        if not self.matches or not 0 <= self.index < len(self.matches):
            return None
        return self.matches[self.index]


class EditorSession:
    """Owns one document and its history for a single caller.

    Commands never raise for expected conditions (empty query, nothing to
    undo, section already present, storage full); they return an
    ``EditResult`` whose ``status`` names the condition. Commands that rewrite
    the buffer commit to history before and after the change.
    """

    def __init__(
        self,
        text: str = "",
        *,
        catalog: Optional[SectionCatalog] = None,
        settings: Optional[EngineSettings] = None,
        storage: Optional[EditorStorage] = None,
        bus: Optional[EditorBus] = None,
        history: Optional[HistoryStore] = None,
    ) -> None:
        self.settings = settings or EngineSettings()
        self.text = text
        self.history = history or HistoryStore(limit=self.settings.history_limit)
        self.bus = bus or EditorBus()
        self.storage = storage
        self.placeholders: Dict[str, str] = {}
        self.find_state = FindState()
        self.engine = MatchEngine(logger_name="markdown_engine.search")
        self.analyzer = SectionAnalyzer(catalog)
        self.inserter = TemplateInserter(self.analyzer.catalog, analyzer=self.analyzer)
        self.validator = StructuralValidator(
            trailing_whitespace_limit=self.settings.trailing_whitespace_limit
        )
        self._prettify_snapshot: Optional[str] = None

    # -- buffer and history -------------------------------------------------

    def replace_text(self, text: str) -> EditResult:
        """Keystroke path: swap the buffer without touching history."""

        changed = text != self.text
        if changed:
            self._set_text(text, reason="input")
        return EditResult(changed=changed)

    def commit(self) -> bool:
        """Record the current buffer in history; False for a duplicate."""

        appended = self.history.top != self.text
        self.history.commit(self.text)
        if appended:
            self.bus.emit("history.commit", {"depth": len(self.history)})
        return appended

    def undo(self) -> EditResult:
        try:
            previous = self.history.undo()
        except EditorError as exc:
            return self._decline(exc)
        self._set_text(previous, reason="undo")
        telemetry.record_event(
            "history.undo",
            data={"depth": len(self.history)},
            logger_name="markdown_engine.session",
        )
        return EditResult(changed=True, status="undone")

    # -- editing commands ---------------------------------------------------

    def apply_format(self, kind: str, start: int, end: Optional[int] = None) -> EditResult:
        try:
            result = apply_format(self.text, start, start if end is None else end, kind)
        except EditorError as exc:
            return self._decline(exc)
        self._rewrite(result.text, reason=f"format:{kind}")
        return EditResult(changed=True, cursor=result.cursor, message=kind)

    def insert_section(
        self, name: str, values: Optional[Mapping[str, str]] = None
    ) -> EditResult:
        merged = {**self.placeholders, **(values or {})}
        try:
            result = self.inserter.insert(self.text, name, merged)
        except EditorError as exc:
            return self._decline(exc)
        self._rewrite(result.text, reason=f"insert:{name}")
        self.bus.emit("section.inserted", {"section": name, "offset": result.offset})
        return EditResult(
            changed=True, status="inserted", cursor=result.offset, message=name
        )

    def prettify(self) -> EditResult:
        if not self.text.strip():
            return EditResult(changed=False, status="empty")
        snapshot = self.text
        updated = prettify(snapshot)
        if updated == snapshot:
            return EditResult(changed=False, status="unchanged")
        self._prettify_snapshot = snapshot
        self._rewrite(updated, reason="prettify")
        return EditResult(changed=True, status="prettified")

    def undo_prettify(self) -> EditResult:
        if self._prettify_snapshot is None:
            return EditResult(changed=False, status="nothing_to_undo")
        restored, self._prettify_snapshot = self._prettify_snapshot, None
        self._set_text(restored, reason="undo_prettify")
        self.commit()
        return EditResult(changed=True, status="undone")

    def clear(self) -> EditResult:
        if not self.text.strip():
            return EditResult(changed=False, status="empty")
        self._rewrite("", reason="clear")
        return EditResult(changed=True, status="cleared", cursor=0)

    def load_document(self, text: str) -> EditResult:
        """Replace the buffer with loaded file content and report section coverage."""

        self._set_text(text, reason="load")
        self.commit()
        summary = self.analyzer.summary(text)
        if summary.found:
            message = (
                f"Document loaded! Found {summary.found}/{summary.total} sections."
            )
        else:
            message = "Document loaded! Add standard sections from the catalog."
        return EditResult(
            changed=True, status="loaded", message=message, count=summary.found
        )

    # -- find / replace -----------------------------------------------------

    def find(
        self,
        query: Optional[str] = None,
        direction: Direction | str = Direction.FORWARD,
        *,
        options: Optional[SearchOptions] = None,
    ) -> EditResult:
        """Select the next (or previous) match, recomputing matches first.

        The position is kept while the query and options stay the same, so
        repeated calls walk through the document.
        """

        state = self.find_state
        query = state.query if query is None else query
        options = state.options if options is None else options
        if query != state.query or options != state.options:
            state.query, state.options = query, options
            state.index = -1

        try:
            matches = self.engine.search(self.text, query, options)
            index = self.engine.advance(matches, state.index, direction)
        except EditorError as exc:
            state.reset()
            return self._decline(exc)

        state.matches = matches
        state.index = index
        return self._select_current("match")

    def replace_current(self, replacement: str) -> EditResult:
        state = self.find_state
        if state.current is None or state.matches is None:
            return self._decline(NoMatchSelected(index=state.index))
        outcome = self.engine.replace_one(
            self.text, state.matches, state.index, replacement
        )
        self._rewrite(outcome.text, reason="replace", keep_matches=True)
        state.matches = outcome.matches

        if not state.matches:
            state.index = -1
            return EditResult(
                changed=True,
                status="all_replaced",
                message="All matches replaced",
                count=0,
            )
        if state.index >= len(state.matches):
            state.index = 0
        result = self._select_current("replaced")
        result.changed = True
        return result

    def replace_all(
        self,
        replacement: str,
        query: Optional[str] = None,
        *,
        options: Optional[SearchOptions] = None,
    ) -> EditResult:
        state = self.find_state
        query = state.query if query is None else query
        options = state.options if options is None else options
        try:
            outcome = self.engine.replace_all(self.text, query, replacement, options)
        except EditorError as exc:
            return self._decline(exc)

        state.query, state.options = query, options
        self._rewrite(outcome.text, reason="replace_all")
        telemetry.record_event(
            "search.replace_all",
            data={"count": outcome.count},
            logger_name="markdown_engine.session",
        )
        plural = "s" if outcome.count > 1 else ""
        return EditResult(
            changed=True,
            status="replaced_all",
            message=f"Replaced {outcome.count} occurrence{plural}",
            count=outcome.count,
        )

    # -- read-only services -------------------------------------------------

    def validate(self) -> List[ValidationIssue]:
        return self.validator.validate(self.text)

    def analyze(self) -> Dict[str, bool]:
        return self.analyzer.analyze(self.text)

    def stats(self) -> DocumentStats:
        return document_stats(self.text)

    def render(self, renderer: Renderer) -> PreviewResult:
        return render_preview(renderer, self.text)

    # -- placeholders and persistence -----------------------------------------

    def set_placeholder(self, name: str, value: str) -> EditResult:
        if value:
            self.placeholders[name] = value
        else:
            self.placeholders.pop(name, None)
        if self.storage is None:
            return EditResult(changed=False)
        try:
            self.storage.save_placeholders(self.placeholders)
        except QuotaExceeded as exc:
            return self._storage_warning(exc)
        return EditResult(changed=False)

    def save(self) -> EditResult:
        if self.storage is None:
            return EditResult(changed=False, status="no_storage")
        try:
            self.storage.save_content(self.text)
        except QuotaExceeded as exc:
            return self._storage_warning(exc)
        self.bus.emit("storage.saved", {"length": len(self.text)})
        return EditResult(changed=False, status="saved")

    def restore(self) -> EditResult:
        """Load placeholders and the saved buffer, if any, from storage."""

        if self.storage is None:
            return EditResult(changed=False, status="no_storage")
        self.placeholders.update(self.storage.load_placeholders())
        content = self.storage.load_content()
        if content is None:
            return EditResult(changed=False, status="nothing_saved")
        self._set_text(content, reason="restore")
        self.commit()
        return EditResult(changed=True, status="restored")

    # -- internals --------------------------------------------------------------

    def _set_text(self, text: str, *, reason: str, keep_matches: bool = False) -> None:
        self.text = text
        if not keep_matches:
            self.find_state.reset()
        self.bus.emit("buffer.changed", {"reason": reason, "length": len(text)})

    def _rewrite(self, text: str, *, reason: str, keep_matches: bool = False) -> None:
        self.commit()
        self._set_text(text, reason=reason, keep_matches=keep_matches)
        self.commit()

    def _select_current(self, status: str) -> EditResult:
        state = self.find_state
        match = state.current
        if match is None or state.matches is None:
            return self._decline(NoMatchSelected(index=state.index))
        total = len(state.matches)
        selection = (match.offset, match.end)
        position = offset_to_position(self.text, match.offset)
        self.bus.emit(
            "search.select",
            {"index": state.index, "selection": selection, "position": position},
        )
        return EditResult(
            changed=False,
            status=status,
            message=f"Match {state.index + 1} of {total}",
            selection=selection,
            cursor=match.end,
            count=total,
            position=position,
        )

    def _decline(self, exc: EditorError) -> EditResult:
        self.bus.emit("session.declined", {"status": exc.status, "message": exc.message})
        return EditResult(changed=False, status=exc.status, message=exc.message)

    def _storage_warning(self, exc: QuotaExceeded) -> EditResult:
        telemetry.record_event(
            "storage.quota_exceeded",
            level="warning",
            data={"key": exc.key},
            logger_name="markdown_engine.session",
        )
        self.bus.emit("storage.warning", {"message": exc.message, "key": exc.key})
        return EditResult(changed=False, status=exc.status, message=exc.message)


__all__ = ["EditorSession", "FindState"]
