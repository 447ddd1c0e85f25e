import pytest

from markdown_engine.buffer import HistoryStore
from markdown_engine.errors import NothingToUndo


def make_history(*states: str, limit: int = 50) -> HistoryStore:
    history = HistoryStore(limit=limit)
    for state in states:
        history.commit(state)
    return history


def test_commit_suppresses_adjacent_duplicates() -> None:
    history = make_history("a", "b", "b", "c")

    assert history.entries == ("a", "b", "c")


def test_undo_returns_prior_state_and_drops_top() -> None:
    history = make_history("a", "b", "b", "c")

    assert history.undo() == "b"
    assert history.entries == ("a", "b")


def test_first_commit_always_appends() -> None:
    history = HistoryStore()

    history.commit("")

    assert history.entries == ("",)


def test_non_adjacent_duplicates_are_kept() -> None:
    history = make_history("a", "b", "a")

    assert len(history) == 3


def test_undo_requires_two_entries() -> None:
    history = make_history("only")

    with pytest.raises(NothingToUndo):
        history.undo()

    assert history.entries == ("only",)


def test_undo_on_empty_history() -> None:
    with pytest.raises(NothingToUndo):
        HistoryStore().undo()


def test_cap_keeps_most_recent_fifty() -> None:
    history = make_history(*(f"state-{i}" for i in range(60)))

    assert len(history) == 50
    assert history.entries[0] == "state-10"
    assert history.top == "state-59"


def test_commit_after_undo_discards_undone_state() -> None:
    history = make_history("a", "b", "c")

    history.undo()
    history.commit("d")

    assert history.entries == ("a", "b", "d")
    assert history.undo() == "b"


def test_undo_until_exhausted() -> None:
    history = make_history("a", "b", "c")

    assert history.undo() == "b"
    assert history.undo() == "a"
    assert not history.can_undo()
    with pytest.raises(NothingToUndo):
        history.undo()


def test_limit_must_allow_undo() -> None:
    with pytest.raises(ValueError):
        HistoryStore(limit=1)
