"""Session object tying the editing services to one buffer."""

from .coordinator import AUTOSAVE_TASK, HISTORY_TASK, PREVIEW_TASK, EditCoordinator
from .editor import EditorSession, FindState
from .events import EditorBus, EditResult

__all__ = [
    "AUTOSAVE_TASK",
    "HISTORY_TASK",
    "PREVIEW_TASK",
    "EditCoordinator",
    "EditorSession",
    "FindState",
    "EditorBus",
    "EditResult",
]
