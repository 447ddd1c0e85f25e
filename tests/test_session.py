from markdown_engine.adapters import EditorStorage, InMemoryStore
from markdown_engine.search import SearchOptions
from markdown_engine.session import EditorBus, EditorSession


def make_session(text: str = "", *, quota: int | None = None, storage: bool = False) -> EditorSession:
    store = EditorStorage(InMemoryStore(quota=quota)) if storage or quota else None
    session = EditorSession(text, storage=store)
    session.commit()
    return session


def record(bus: EditorBus, event: str) -> list[object]:
    seen: list[object] = []
    bus.subscribe(event, seen.append)
    return seen


# -- history ------------------------------------------------------------------


def test_typing_does_not_commit_until_asked() -> None:
    session = make_session("a")

    session.replace_text("ab")
    session.replace_text("abc")

    assert session.history.entries == ("a",)
    assert session.commit() is True
    assert session.commit() is False
    assert session.history.entries == ("a", "abc")


def test_undo_restores_previous_snapshot() -> None:
    session = make_session("first")
    session.replace_text("second")
    session.commit()

    result = session.undo()

    assert result.status == "undone"
    assert result.changed
    assert session.text == "first"


def test_undo_with_single_snapshot_is_declined() -> None:
    session = make_session("only")
    declined = record(session.bus, "session.declined")

    result = session.undo()

    assert result.status == "nothing_to_undo"
    assert not result.changed
    assert session.text == "only"
    assert declined == [{"status": "nothing_to_undo", "message": "Nothing to undo"}]


# -- formatting, templates, prettify --------------------------------------------


def test_apply_format_commits_before_and_after() -> None:
    session = make_session("hello")
    session.replace_text("hello world")

    result = session.apply_format("bold", 6, 11)

    assert session.text == "hello **world**"
    assert result.cursor == len(session.text)
    assert session.history.entries == ("hello", "hello world", "hello **world**")
    session.undo()
    assert session.text == "hello world"


def test_apply_format_unknown_kind() -> None:
    session = make_session("x")

    result = session.apply_format("blink", 0, 1)

    assert result.status == "unknown_format"
    assert session.text == "x"


def test_insert_section_uses_session_placeholders() -> None:
    session = make_session()
    session.set_placeholder("licenseType", "Apache-2.0")
    inserted = record(session.bus, "section.inserted")

    result = session.insert_section("license")

    assert result.status == "inserted"
    assert result.cursor == 0
    assert "Apache-2.0 License" in session.text
    assert inserted == [{"section": "license", "offset": 0}]


def test_insert_section_values_override_session_placeholders() -> None:
    session = make_session()
    session.set_placeholder("licenseType", "Apache-2.0")

    session.insert_section("license", {"licenseType": "BSD"})

    assert "BSD License" in session.text


def test_insert_existing_section_is_declined() -> None:
    session = make_session("## License\n\nMIT\n")

    result = session.insert_section("license")

    assert result.status == "section_exists"
    assert session.text == "## License\n\nMIT\n"


def test_insert_unknown_section_is_declined() -> None:
    assert make_session("x").insert_section("appendix").status == "unknown_section"


def test_prettify_and_undo_prettify() -> None:
    original = "# A\nbody   "
    session = make_session(original)

    assert session.prettify().status == "prettified"
    assert session.text == "# A\n\nbody\n"
    assert session.prettify().status == "unchanged"

    assert session.undo_prettify().status == "undone"
    assert session.text == original
    assert session.undo_prettify().status == "nothing_to_undo"


def test_prettify_empty_buffer() -> None:
    assert make_session("   ").prettify().status == "empty"


def test_clear_is_undoable() -> None:
    session = make_session("content")

    assert session.clear().status == "cleared"
    assert session.text == ""
    session.undo()
    assert session.text == "content"
    assert session.clear().changed is True
    assert make_session("").clear().status == "empty"


def test_load_document_reports_sections() -> None:
    session = make_session()

    result = session.load_document("# Tool\n\n## Usage\n\n## License\n")

    assert result.status == "loaded"
    assert result.message == "Document loaded! Found 2/16 sections."
    assert result.count == 2
    assert session.history.top == session.text


def test_load_document_without_sections() -> None:
    result = make_session().load_document("just notes")

    assert result.message == "Document loaded! Add standard sections from the catalog."


# -- find / replace -------------------------------------------------------------


def test_find_walks_through_matches() -> None:
    session = make_session("Foo bar foo FOO")
    selections = record(session.bus, "search.select")

    first = session.find("foo")
    second = session.find()
    third = session.find()
    wrapped = session.find()

    assert first.selection == (0, 3)
    assert first.message == "Match 1 of 3"
    assert second.selection == (8, 11)
    assert third.selection == (12, 15)
    assert wrapped.selection == (0, 3)
    assert len(selections) == 4


def test_find_backward_from_unset_goes_to_last() -> None:
    session = make_session("a b a b a")

    result = session.find("a", "backward")

    assert result.selection == (8, 9)
    assert result.message == "Match 3 of 3"


def test_find_restarts_when_query_changes() -> None:
    session = make_session("ab ab")
    session.find("ab")
    session.find("ab")

    result = session.find("b")

    assert result.selection == (1, 2)


def test_find_empty_query_and_no_matches() -> None:
    session = make_session("text")

    assert session.find("").status == "empty_query"
    assert session.find("zzz").status == "no_matches"
    assert session.find_state.matches is None


def test_find_respects_options() -> None:
    session = make_session("Foo foo")

    result = session.find("Foo", options=SearchOptions(case_sensitive=True))

    assert result.count == 1


def test_edit_invalidates_matches() -> None:
    session = make_session("foo foo")
    session.find("foo")

    session.replace_text("foo foo foo")

    assert session.find_state.matches is None
    assert session.replace_current("x").status == "no_selection"


def test_replace_current_advances_to_next_match() -> None:
    session = make_session("foo x foo y foo")
    session.find("foo")
    session.find()

    result = session.replace_current("quux")

    assert session.text == "foo x quux y foo"
    assert result.status == "replaced"
    assert result.changed
    assert result.selection == (13, 16)
    assert result.message == "Match 2 of 2"


def test_replace_current_last_match_wraps_to_first() -> None:
    session = make_session("foo foo")
    session.find("foo", "backward")

    result = session.replace_current("bar")

    assert session.text == "foo bar"
    assert result.selection == (0, 3)


def test_replace_current_until_exhausted() -> None:
    session = make_session("foo foo")
    session.find("foo")

    session.replace_current("a")
    result = session.replace_current("b")

    assert session.text == "a b"
    assert result.status == "all_replaced"
    assert result.count == 0
    assert session.replace_current("c").status == "no_selection"


def test_replace_all_reports_count() -> None:
    session = make_session("foo Foo foo")

    result = session.replace_all(
        "baz", "foo", options=SearchOptions(case_sensitive=True)
    )

    assert session.text == "baz Foo baz"
    assert result.status == "replaced_all"
    assert result.message == "Replaced 2 occurrences"
    assert result.count == 2
    session.undo()
    assert session.text == "foo Foo foo"


def test_replace_all_singular_message_and_no_matches() -> None:
    session = make_session("one two")

    assert session.replace_all("2", "two").message == "Replaced 1 occurrence"
    declined = session.replace_all("3", "three")
    assert declined.status == "no_matches"
    assert session.text == "one 2"


def test_replace_all_reuses_find_query() -> None:
    session = make_session("a-b-c")
    session.find("-")

    session.replace_all("+")

    assert session.text == "a+b+c"


# -- read-only services and persistence ------------------------------------------


def test_read_only_services_do_not_touch_history() -> None:
    session = make_session("#Bad\n\n## Usage\n")

    assert [issue.line for issue in session.validate()] == [1]
    assert session.analyze()["usage"] is True
    assert session.stats().words == 3
    assert session.history.entries == ("#Bad\n\n## Usage\n",)


def test_buffer_changed_events() -> None:
    session = make_session("a")
    changes = record(session.bus, "buffer.changed")

    session.replace_text("a")
    session.replace_text("ab")

    assert changes == [{"reason": "input", "length": 2}]


def test_save_and_restore_through_storage() -> None:
    session = make_session("# Saved", storage=True)
    session.set_placeholder("repo", "engine")

    assert session.save().status == "saved"

    fresh = EditorSession(storage=session.storage)
    result = fresh.restore()

    assert result.status == "restored"
    assert fresh.text == "# Saved"
    assert fresh.placeholders == {"repo": "engine"}


def test_storage_statuses_without_store_or_content() -> None:
    assert make_session("x").save().status == "no_storage"
    assert make_session("x").restore().status == "no_storage"
    assert make_session("x", storage=True).restore().status == "nothing_saved"


def test_quota_exceeded_is_a_warning() -> None:
    session = make_session("a very long document that will not fit", quota=20)
    warnings = record(session.bus, "storage.warning")

    result = session.save()

    assert result.status == "storage_warning"
    assert not result.changed
    assert session.text == "a very long document that will not fit"
    assert warnings and warnings[0]["key"] == "markdown-content"  # type: ignore[index]


def test_set_placeholder_empty_value_removes_it() -> None:
    session = make_session()
    session.set_placeholder("repo", "x")
    session.set_placeholder("repo", "")

    assert session.placeholders == {}


class UpperRenderer:
    def render(self, text: str) -> str:
        return text.upper()


def test_render_hands_buffer_to_renderer() -> None:
    assert make_session("# hi").render(UpperRenderer()).markup == "# HI"
    assert make_session("").render(UpperRenderer()).status == "empty"


def test_find_reports_row_and_column_of_match() -> None:
    session = make_session("# Title\n\nsee foo here\nfoo")
    selections = record(session.bus, "search.select")

    first = session.find("foo")
    second = session.find()

    assert first.position == (2, 4)
    assert second.position == (3, 0)
    assert selections[1] == {"index": 1, "selection": (22, 25), "position": (3, 0)}


def test_selecting_without_current_match_is_declined() -> None:
    session = make_session("foo")
    session.find("foo")
    session.find_state.index = 4

    result = session._select_current("match")

    assert result.status == "no_selection"
    assert not result.changed
