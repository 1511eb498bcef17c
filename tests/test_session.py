from __future__ import annotations

from typing import Dict, List, Sequence

import pytest

from modal_edit.buffer import Document
from modal_edit.runtime.settings import MAX_RECENT_FILES, EditorSettings
from modal_edit.session import (
    EditorSession,
    InvariantGuardError,
    Severity,
    StorageError,
    UserError,
)


class MemoryStorage:
    def __init__(self, files: Dict[str, List[bytes]] | None = None) -> None:
        self.files = dict(files or {})
        self.denied: set[str] = set()

    def read_lines(self, path: str) -> List[bytes]:
        if path in self.denied:
            raise PermissionError(13, "Permission denied", path)
        if path not in self.files:
            raise FileNotFoundError(path)
        return list(self.files[path])

    def write_lines(self, path: str, lines: Sequence[bytes]) -> None:
        if path in self.denied:
            raise PermissionError(13, "Permission denied", path)
        self.files[path] = list(lines)


def make_session(files: Dict[str, List[bytes]] | None = None, **settings) -> EditorSession:
    return EditorSession(settings=EditorSettings(**settings), storage=MemoryStorage(files))


def test_new_session_has_one_scratch_document() -> None:
    session = make_session()

    assert len(session.documents) == 1
    assert session.document.has_filename is False
    assert session.running is True
    assert session.mode == "normal"


def test_open_document_replaces_scratch() -> None:
    session = make_session({"a.txt": [b"one", b"two"]})

    document = session.open_document("a.txt")

    assert session.documents == [document]
    assert document.lines() == (b"one", b"two")
    assert session.status is not None
    assert session.status.text == "Opened: a.txt (2 lines)"
    assert session.recent_files == ["a.txt"]


def test_open_missing_file_creates_named_document() -> None:
    session = make_session()

    document = session.open_document("new.txt")

    assert document.filename == "new.txt"
    assert document.lines() == (b"",)
    assert session.status is not None
    assert session.status.text == "New file: new.txt"


def test_open_already_open_path_switches() -> None:
    session = make_session({"a.txt": [b"a"], "b.txt": [b"b"]})
    session.open_document("a.txt")
    session.open_document("b.txt")

    session.open_document("a.txt")

    assert len(session.documents) == 2
    assert session.active_index == 0
    assert session.status is not None
    assert session.status.text == "Switched to buffer 1: a.txt"


def test_open_unreadable_file_raises_storage_error() -> None:
    storage = MemoryStorage({"secret": [b"x"]})
    storage.denied.add("secret")
    session = EditorSession(settings=EditorSettings(), storage=storage)

    with pytest.raises(StorageError) as excinfo:
        session.open_document("secret")

    assert excinfo.value.message == "Cannot open secret: Permission denied"
    assert excinfo.value.path == "secret"
    assert len(session.documents) == 1


def test_open_empty_path_is_error() -> None:
    session = make_session()

    with pytest.raises(UserError) as excinfo:
        session.open_document("")

    assert excinfo.value.severity is Severity.ERROR


def test_reporting_turns_errors_into_status() -> None:
    session = make_session()

    with session.reporting():
        session.save()

    assert session.status is not None
    assert session.status.text == "No filename. Use :w <filename>"
    assert session.status.severity is Severity.WARNING


def test_save_and_save_as() -> None:
    session = make_session()
    session.document.insert_char(0, 0, ord("x"))

    session.save_as("out.txt")

    assert session.storage.files["out.txt"] == [b"x"]  # type: ignore[attr-defined]
    assert session.document.modified is False
    assert session.document.filename == "out.txt"
    assert session.status is not None
    assert session.status.text == "Saved as: out.txt"

    session.document.insert_char(0, 1, ord("y"))
    session.save()
    assert session.storage.files["out.txt"] == [b"xy"]  # type: ignore[attr-defined]
    assert session.status.text == "Saved: out.txt"


def test_save_failure_keeps_document_modified() -> None:
    storage = MemoryStorage()
    storage.denied.add("locked.txt")
    session = EditorSession(
        settings=EditorSettings(),
        storage=storage,
        documents=[Document.from_text("abc", filename="locked.txt")],
    )
    session.document.insert_char(0, 0, ord("x"))

    with pytest.raises(StorageError) as excinfo:
        session.save()

    assert excinfo.value.reason == "Permission denied"
    assert session.document.modified is True


def test_new_document_and_cycling() -> None:
    session = make_session()

    session.new_document()
    assert len(session.documents) == 2
    assert session.active_index == 1
    assert session.status is not None
    assert session.status.text == "New buffer 2 created"

    session.next_document()
    assert session.active_index == 0
    session.prev_document()
    assert session.active_index == 1


def test_cycling_with_single_document_fails() -> None:
    session = make_session()

    with pytest.raises(UserError, match="No other buffers"):
        session.next_document()


def test_close_document_guards() -> None:
    session = make_session()

    with pytest.raises(InvariantGuardError, match="Cannot close last buffer"):
        session.close_document(force=True)

    session.new_document()
    session.document.insert_char(0, 0, ord("x"))
    with pytest.raises(InvariantGuardError, match="Unsaved changes"):
        session.close_document()

    session.close_document(force=True)
    assert len(session.documents) == 1
    assert session.active_index == 0


def test_quit_guard_and_force() -> None:
    session = make_session()
    session.document.insert_char(0, 0, ord("x"))

    with pytest.raises(InvariantGuardError):
        session.quit()
    assert session.running is True

    session.quit(force=True)
    assert session.running is False


def test_recent_files_are_capped_and_most_recent_first() -> None:
    files = {f"f{n}.txt": [b""] for n in range(MAX_RECENT_FILES + 2)}
    session = make_session(files)

    for name in files:
        session.open_document(name)

    assert len(session.recent_files) == MAX_RECENT_FILES
    assert session.recent_files[0] == f"f{MAX_RECENT_FILES + 1}.txt"


def test_open_recent_index_validation() -> None:
    session = make_session({"a.txt": [b"a"]})
    session.open_document("a.txt")
    session.new_document()

    session.open_recent(0)
    assert session.document.filename == "a.txt"

    with pytest.raises(UserError, match="Invalid recent file index"):
        session.open_recent(5)


def test_toggles_update_settings_and_status() -> None:
    session = make_session()

    session.set_line_numbers(False)
    assert session.settings.gutter == 0
    assert session.status is not None
    assert session.status.text == "Line numbers disabled"

    session.set_auto_indent(False)
    assert session.settings.auto_indent is False

    session.set_syntax_highlight(True)
    assert session.status.text == "Syntax highlighting enabled"


def test_search_remembers_only_non_empty_query() -> None:
    session = EditorSession(
        settings=EditorSettings(), documents=[Document.from_text("abc abc")]
    )

    session.search(b"abc")
    assert session.last_search == b"abc"
    assert session.document.cursor == (0, 4)

    session.search(b"")
    assert session.last_search == b"abc"


def test_search_next_requires_previous_search() -> None:
    session = make_session()

    with pytest.raises(UserError, match="No previous search"):
        session.search_next()


def test_replace_all_reports_count() -> None:
    session = EditorSession(
        settings=EditorSettings(), documents=[Document.from_text("a-a\na")]
    )

    assert session.replace_all(b"a", b"b") == 3
    assert session.document.lines() == (b"b-b", b"b")
    assert session.status is not None
    assert session.status.text == "Replaced 3 occurrence(s)"


def test_mirror_reflects_viewport_and_highlighting() -> None:
    text = "\n".join(f"set x{n}" for n in range(40))
    session = EditorSession(
        settings=EditorSettings(viewport_height=5),
        documents=[Document.from_text(text, filename="prog.droy")],
    )
    session.document.set_cursor(20, 2)
    session.reconcile()

    mirror = session.mirror()

    assert [line.number for line in mirror.lines] == [17, 18, 19, 20, 21]
    assert mirror.screen_cursor == (4, 2 + session.settings.gutter)
    assert mirror.lines[0].tokens
    assert mirror.attributes["position"] == "21:3"
    assert mirror.filename == "prog.droy"

    session.set_syntax_highlight(False)
    assert session.mirror().lines[0].tokens == ()


def test_resize_clamps_to_positive() -> None:
    session = make_session()

    session.resize(0, 0)

    assert session.settings.viewport_height == 1
    assert session.viewport.width == 1


def test_narrow_window_keeps_cursor_on_screen() -> None:
    session = EditorSession(
        settings=EditorSettings(), documents=[Document.from_text("hello world")]
    )

    session.resize(10, session.settings.gutter + 6)
    mirror = session.mirror()

    assert mirror.scroll_col == 0
    assert mirror.screen_cursor == (0, session.settings.gutter)

    session.document.set_cursor(0, 9)
    session.reconcile()
    _, col = session.mirror().screen_cursor
    assert session.settings.gutter <= col < session.settings.gutter + 6


def test_failed_save_as_keeps_old_filename() -> None:
    storage = MemoryStorage()
    storage.denied.add("locked.txt")
    session = EditorSession(
        settings=EditorSettings(),
        storage=storage,
        documents=[Document.from_text("abc", filename="notes.txt")],
    )

    with pytest.raises(StorageError):
        session.save_as("locked.txt")

    assert session.document.filename == "notes.txt"
    assert "locked.txt" not in session.recent_files
