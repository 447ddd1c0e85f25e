import pytest

from markdown_engine.adapters import EditorStorage, InMemoryStore
from markdown_engine.buffer import (
    document_stats,
    line_start_offsets,
    offset_to_position,
    split_lines,
)
from markdown_engine.errors import NothingToUndo
from markdown_engine.runtime import EngineSettings, telemetry
from markdown_engine.runtime.scheduler import DebouncedScheduler
from markdown_engine.session import (
    AUTOSAVE_TASK,
    HISTORY_TASK,
    PREVIEW_TASK,
    EditCoordinator,
    EditorSession,
)


class FakeClock:
    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingRenderer:
    def __init__(self) -> None:
        self.calls: list[str] = []

    def render(self, text: str) -> str:
        self.calls.append(text)
        return f"<p>{text}</p>"


def make_coordinator(
    *, storage: bool = True, renderer: RecordingRenderer | None = None
) -> tuple[EditCoordinator, FakeClock]:
    clock = FakeClock()
    store = EditorStorage(InMemoryStore(), clock=clock) if storage else None
    session = EditorSession("start", storage=store)
    session.commit()
    coordinator = EditCoordinator(
        session, DebouncedScheduler(clock=clock), renderer=renderer
    )
    return coordinator, clock


# -- settings -------------------------------------------------------------------


def test_settings_defaults() -> None:
    settings = EngineSettings.from_env({})

    assert settings == EngineSettings()
    assert settings.history_limit == 50
    assert settings.autosave_delay_ms == 1000
    assert settings.history_delay_ms == 3000
    assert settings.preview_delay_ms == 300


def test_settings_from_environment() -> None:
    settings = EngineSettings.from_env(
        {
            "MARKDOWN_ENGINE_HISTORY_LIMIT": "10",
            "MARKDOWN_ENGINE_TRAILING_WHITESPACE_LIMIT": "4",
        }
    )

    assert settings.history_limit == 10
    assert settings.trailing_whitespace_limit == 4
    assert EditorSession(settings=settings).history.limit == 10


@pytest.mark.parametrize("value", ["ten", "0", "-3"])
def test_settings_reject_bad_integers(value: str) -> None:
    with pytest.raises(ValueError):
        EngineSettings.from_env({"MARKDOWN_ENGINE_AUTOSAVE_DELAY_MS": value})


# -- scheduler -------------------------------------------------------------------


def test_scheduler_runs_only_due_tasks() -> None:
    clock = FakeClock()
    scheduler = DebouncedScheduler(clock=clock)
    scheduler.schedule("fast", 100, lambda: "fast-done")
    scheduler.schedule("slow", 500, lambda: "slow-done")

    clock.advance(0.2)

    assert scheduler.process_due() == {"fast": "fast-done"}
    assert scheduler.pending() == ("slow",)


def test_rescheduling_supersedes_previous_task() -> None:
    clock = FakeClock()
    scheduler = DebouncedScheduler(clock=clock)
    calls: list[str] = []

    first = scheduler.schedule("save", 100, lambda: calls.append("first"))
    clock.advance(0.05)
    second = scheduler.schedule("save", 100, lambda: calls.append("second"))
    clock.advance(0.06)

    assert scheduler.process_due() == {}
    clock.advance(0.05)
    scheduler.process_due()

    assert calls == ["second"]
    assert first.cancelled and not second.cancelled
    assert second.generation > first.generation


def test_cancel_and_flush() -> None:
    scheduler = DebouncedScheduler(clock=FakeClock())
    scheduler.schedule("a", 1000, lambda: 1)
    scheduler.schedule("b", 1000, lambda: 2)

    assert scheduler.cancel("a") is True
    assert scheduler.cancel("a") is False
    assert scheduler.flush() == {"b": 2}
    assert scheduler.pending() == ()


def test_schedule_rejects_negative_delay() -> None:
    with pytest.raises(ValueError):
        DebouncedScheduler().schedule("x", -1, lambda: None)


# -- coordinator -----------------------------------------------------------------


def test_coordinator_debounces_autosave_and_history() -> None:
    coordinator, clock = make_coordinator()
    session = coordinator.session

    coordinator.notify_edit("start!")
    clock.advance(0.5)
    coordinator.notify_edit("start!!")

    assert set(coordinator.scheduler.pending()) == {AUTOSAVE_TASK, HISTORY_TASK}

    clock.advance(1.0)
    results = coordinator.tick()

    assert results[AUTOSAVE_TASK].status == "saved"  # type: ignore[attr-defined]
    assert session.storage is not None
    assert session.storage.load_content() == "start!!"
    assert session.history.entries == ("start",)

    clock.advance(2.0)
    assert coordinator.tick() == {HISTORY_TASK: True}
    assert session.history.entries == ("start", "start!!")


def test_coordinator_preview_is_debounced_by_later_edits() -> None:
    renderer = RecordingRenderer()
    coordinator, clock = make_coordinator(storage=False, renderer=renderer)

    coordinator.notify_edit("start!")
    clock.advance(0.2)
    coordinator.notify_edit("start!!")

    assert coordinator.tick(clock.now + 0.29) == {}
    results = coordinator.tick(clock.now + 0.31)

    assert renderer.calls == ["start!!"]
    assert results[PREVIEW_TASK].markup == "<p>start!!</p>"  # type: ignore[attr-defined]
    assert coordinator.scheduler.pending() == (HISTORY_TASK,)


def test_coordinator_without_renderer_skips_preview() -> None:
    coordinator, _clock = make_coordinator()

    coordinator.notify_edit("changed")

    assert PREVIEW_TASK not in coordinator.scheduler.pending()


def test_coordinator_ignores_unchanged_text() -> None:
    coordinator, _clock = make_coordinator()

    coordinator.notify_edit("start")

    assert coordinator.scheduler.pending() == ()


def test_coordinator_without_storage_only_schedules_history() -> None:
    coordinator, _clock = make_coordinator(storage=False)

    coordinator.notify_edit("changed")

    assert coordinator.scheduler.pending() == (HISTORY_TASK,)


def test_coordinator_flush_and_cancel() -> None:
    coordinator, _clock = make_coordinator()
    coordinator.notify_edit("one")

    flushed = coordinator.flush()

    assert set(flushed) == {AUTOSAVE_TASK, HISTORY_TASK}
    assert coordinator.session.history.top == "one"

    coordinator.notify_edit("two")
    coordinator.cancel_pending()
    assert coordinator.scheduler.pending() == ()
    assert coordinator.tokens == {}


# -- buffer helpers --------------------------------------------------------------


def test_split_lines_keeps_trailing_empty_line() -> None:
    assert split_lines("a\nb\n") == ["a", "b", ""]
    assert line_start_offsets(["a", "bc", ""]) == [0, 2, 5]


def test_offset_position_conversion() -> None:
    text = "ab\ncde\n"

    assert offset_to_position(text, 4) == (1, 1)
    assert offset_to_position(text, len(text)) == (2, 0)
    with pytest.raises(ValueError):
        offset_to_position(text, 99)


def test_document_stats() -> None:
    stats = document_stats("  Hello   world\nagain ")

    assert (stats.words, stats.characters, stats.lines) == (3, 22, 2)
    assert document_stats("").words == 0


# -- telemetry -------------------------------------------------------------------


def test_span_propagates_editor_errors_and_failures() -> None:
    with pytest.raises(NothingToUndo):
        with telemetry.span("test::decline", component="tests"):
            raise NothingToUndo()

    with pytest.raises(KeyError):
        with telemetry.span("test::fail", metadata={"key": "value"}):
            raise KeyError("boom")


def test_span_handle_collects_metadata() -> None:
    with telemetry.span("test::meta", metadata={"size": 3}) as handle:
        handle.add_metadata("found", [1, 2])

    assert handle.metadata == {"size": "3", "found": "[1, 2]"}


def test_configure_rejects_unknown_preset() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="verbose")


def test_record_event_rejects_unknown_level() -> None:
    with pytest.raises(ValueError):
        telemetry.record_event("test.event", level="shout")
