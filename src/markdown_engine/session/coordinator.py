"""Host-side glue that debounces previews, autosaves and history commits."""

from __future__ import annotations

from functools import partial
from typing import Dict, Optional

from markdown_engine.adapters.rendering import Renderer
from markdown_engine.runtime.scheduler import CancellationToken, DebouncedScheduler
from markdown_engine.runtime.settings import EngineSettings

from .editor import EditorSession
from .events import EditResult

AUTOSAVE_TASK = "autosave"
HISTORY_TASK = "history"
PREVIEW_TASK = "preview"


class EditCoordinator:
    """Debounces the side effects of typing.

    Every edit pushes the preview, autosave and history deadlines back; the
    session is only touched when ``tick`` finds a deadline has passed. The
    preview is only scheduled when a renderer was supplied.
    """

    def __init__(
        self,
        session: EditorSession,
        scheduler: Optional[DebouncedScheduler] = None,
        *,
        settings: Optional[EngineSettings] = None,
        renderer: Optional[Renderer] = None,
    ) -> None:
        self.session = session
        self.renderer = renderer
        self.scheduler = scheduler or DebouncedScheduler()
        self.settings = settings or session.settings
        self.tokens: Dict[str, CancellationToken] = {}

    def notify_edit(self, text: str) -> EditResult:
        result = self.session.replace_text(text)
        if not result.changed:
            return result
        if self.renderer is not None:
            self.tokens[PREVIEW_TASK] = self.scheduler.schedule(
                PREVIEW_TASK,
                self.settings.preview_delay_ms,
                partial(self.session.render, self.renderer),
            )
        if self.session.storage is not None:
            self.tokens[AUTOSAVE_TASK] = self.scheduler.schedule(
                AUTOSAVE_TASK, self.settings.autosave_delay_ms, self.session.save
            )
        self.tokens[HISTORY_TASK] = self.scheduler.schedule(
            HISTORY_TASK, self.settings.history_delay_ms, self.session.commit
        )
        return result

    def tick(self, now: Optional[float] = None) -> Dict[str, object]:
        return self.scheduler.process_due(now)

    def flush(self) -> Dict[str, object]:
        return self.scheduler.flush()

    def cancel_pending(self) -> None:
        for key in (PREVIEW_TASK, AUTOSAVE_TASK, HISTORY_TASK):
            self.scheduler.cancel(key)
        self.tokens.clear()


__all__ = ["AUTOSAVE_TASK", "HISTORY_TASK", "PREVIEW_TASK", "EditCoordinator"]
