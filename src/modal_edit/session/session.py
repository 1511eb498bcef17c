"""Editor session: open documents, clipboard, search memory, and named operations.

The session is what an external ``:``-command parser or a key binding talks
to. Named operations raise :class:`~modal_edit.session.errors.EditorError`
subclasses when they refuse or fail; callers that want the editor behaviour
wrap them in :meth:`EditorSession.reporting`, which turns the error into a
status message.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterable, Iterator, List, Optional

from modal_edit.buffer import Clipboard, Cursor, Document, FileStorage, Storage
from modal_edit.buffer.sync import DocumentMirror, MirrorLine
from modal_edit.navigation import Viewport, follow_cursor, screen_position, visible_rows
from modal_edit.navigation.viewport import center_on_cursor
from modal_edit.runtime import telemetry
from modal_edit.runtime.settings import MAX_RECENT_FILES, EditorSettings
from modal_edit.search import engine as search_engine
from modal_edit.syntax import tokenize

from .errors import EditorError, InvariantGuardError, StorageError, UserError
from .status import Severity, StatusMessage


class EditorSession:
    """Owns every document plus the state shared between them."""

    def __init__(
        self,
        *,
        settings: Optional[EditorSettings] = None,
        storage: Optional[Storage] = None,
        documents: Optional[Iterable[Document]] = None,
    ) -> None:
        self.settings = settings or EditorSettings.from_env()
        self.storage: Storage = storage or FileStorage()
        self.documents: List[Document] = list(documents or ()) or [Document()]
        self.active_index = 0
        self.clipboard = Clipboard()
        self.last_search = b""
        self.recent_files: List[str] = []
        self.status: Optional[StatusMessage] = None
        self.running = True
        self.mode = "normal"
        self.prompt = ""
        self.logger = telemetry.get_logger("modal_edit.session")

    # -- accessors ---------------------------------------------------------

    @property
    def document(self) -> Document:
        return self.documents[self.active_index]

    @property
    def viewport(self) -> Viewport:
        width = max(self.settings.viewport_width - self.settings.gutter, 1)
        return Viewport(
            height=self.settings.viewport_height,
            width=width,
            margin=self.settings.scroll_margin,
        )

    def resize(self, height: int, width: int) -> None:
        self.settings.viewport_height = max(height, 1)
        self.settings.viewport_width = max(width, 1)
        self.reconcile()

    # -- status ------------------------------------------------------------

    def notify(self, text: str, severity: Severity = Severity.SUCCESS) -> StatusMessage:
        self.status = StatusMessage(text, severity)
        return self.status

    def clear_status(self) -> None:
        self.status = None

    @contextmanager
    def reporting(self) -> Iterator["EditorSession"]:
        """Turn :class:`EditorError` raised inside the block into a status message."""

        try:
            yield self
        except EditorError as exc:
            self.notify(exc.message, exc.severity)
            telemetry.record_event(
                "session.error",
                level="debug",
                data={"kind": type(exc).__name__, "message": exc.message},
                logger_name="modal_edit.session",
            )

    # -- documents ---------------------------------------------------------

    def open_document(self, path: str) -> Document:
        if not path:
            raise UserError("No filename specified", severity=Severity.ERROR)

        for index, existing in enumerate(self.documents):
            if existing.filename == path:
                self.active_index = index
                self.notify(f"Switched to buffer {index + 1}: {path}")
                return existing

        try:
            lines = self.storage.read_lines(path)
        except FileNotFoundError:
            document = Document(filename=path)
            message = f"New file: {path}"
        except OSError as exc:
            reason = exc.strerror or str(exc)
            raise StorageError(
                f"Cannot open {path}: {reason}", path=path, reason=reason
            ) from exc
        else:
            document = Document.from_lines(lines, filename=path)
            message = f"Opened: {path} ({document.line_count} lines)"

        self._add_document(document)
        self._remember(path)
        telemetry.record_event(
            "document.open",
            data={"path": path, "lines": document.line_count},
            logger_name="modal_edit.session",
        )
        self.notify(message)
        return document

    def new_document(self) -> Document:
        document = Document()
        self.documents.append(document)
        self.active_index = len(self.documents) - 1
        self.notify(f"New buffer {len(self.documents)} created")
        return document

    def save(self) -> None:
        document = self.document
        if not document.has_filename:
            raise UserError("No filename. Use :w <filename>")
        self._write(document, document.filename)
        self.notify(f"Saved: {document.filename}")

    def save_as(self, path: str) -> None:
        if not path:
            raise UserError("No filename specified", severity=Severity.ERROR)
        document = self.document
        self._write(document, path)
        document.filename = path
        self._remember(path)
        self.notify(f"Saved as: {path}")

    def close_document(self, *, force: bool = False) -> None:
        """Close the active document.

        The last remaining document can never be closed; ``force`` only
        overrides the unsaved-changes guard.
        """

        if len(self.documents) <= 1:
            raise InvariantGuardError("Cannot close last buffer")
        document = self.document
        if document.modified and not force:
            raise InvariantGuardError("Unsaved changes! Use :bd! to force close.")
        del self.documents[self.active_index]
        self.active_index = min(self.active_index, len(self.documents) - 1)
        telemetry.record_event(
            "document.close",
            data={"name": document.name, "forced": force},
            logger_name="modal_edit.session",
        )
        self.notify(f"Buffer closed. {len(self.documents)} buffer(s) remaining.")

    def next_document(self) -> Document:
        return self._cycle(1)

    def prev_document(self) -> Document:
        return self._cycle(-1)

    def open_recent(self, index: int) -> Document:
        """Reopen ``recent_files[index]`` (0 is the most recent)."""

        if index < 0 or index >= len(self.recent_files):
            raise UserError("Invalid recent file index", severity=Severity.ERROR)
        return self.open_document(self.recent_files[index])

    def quit(self, *, force: bool = False) -> None:
        if not force and any(document.modified for document in self.documents):
            raise InvariantGuardError("Unsaved changes! Use :q! to force quit.")
        self.running = False

    # -- toggles -----------------------------------------------------------

    def set_line_numbers(self, enabled: bool) -> None:
        self.settings.show_line_numbers = enabled
        self.notify(f"Line numbers {_state(enabled)}")

    def set_auto_indent(self, enabled: bool) -> None:
        self.settings.auto_indent = enabled
        self.notify(f"Auto-indent {_state(enabled)}")

    def set_syntax_highlight(self, enabled: bool) -> None:
        self.settings.syntax_highlight = enabled
        self.notify(f"Syntax highlighting {_state(enabled)}")

    # -- search ------------------------------------------------------------

    def search(self, query: bytes) -> None:
        """Forward search; a non-empty query becomes the last search."""

        if not query:
            return
        self.last_search = query
        document = self.document
        self._jump(
            search_engine.search_forward(document.store, document.cursor, query), query
        )

    def search_next(self) -> None:
        query = self._require_last_search()
        document = self.document
        self._jump(
            search_engine.search_forward(document.store, document.cursor, query), query
        )

    def search_prev(self) -> None:
        query = self._require_last_search()
        document = self.document
        self._jump(
            search_engine.search_backward(document.store, document.cursor, query), query
        )

    def replace_once(self, replacement: bytes) -> None:
        """Replace the last search at/after the cursor on the current line."""

        if not self.last_search:
            raise UserError("No previous search")
        column = search_engine.replace_once(self.document, self.last_search, replacement)
        if column is None:
            self._miss(self.last_search)
        self.notify("Replaced")

    def replace_all(self, find: bytes, replacement: bytes) -> int:
        if not find:
            raise UserError("Nothing to replace")
        count = search_engine.replace_all(self.document, find, replacement)
        self.notify(f"Replaced {count} occurrence(s)")
        return count

    # -- dispatcher / renderer surface ---------------------------------------

    def reconcile(self) -> None:
        """Re-clamp the cursor and scroll so it stays on screen."""

        document = self.document
        document.clamp_cursor()
        follow_cursor(document.state, self.viewport)

    def mirror(self) -> DocumentMirror:
        document = self.document
        highlight = self.settings.syntax_highlight
        lines = []
        for row in visible_rows(document.state, document.store, self.viewport):
            data = document.line(row).data
            tokens = tuple(tokenize(data)) if highlight else ()
            lines.append(MirrorLine(number=row + 1, text=data, tokens=tokens))
        status = self.status
        return DocumentMirror(
            filename=document.name,
            modified=document.modified,
            line_count=document.line_count,
            cursor=document.cursor,
            screen_cursor=screen_position(document.state, self.settings.gutter),
            lines=tuple(lines),
            mode=self.mode,
            gutter=self.settings.gutter,
            scroll_col=document.state.scroll_col,
            prompt=self.prompt,
            status=status.text if status else "",
            severity=status.severity.value if status else Severity.INFO.value,
            attributes={
                "buffer": f"{self.active_index + 1}/{len(self.documents)}",
                "position": f"{document.cursor[0] + 1}:{document.cursor[1] + 1}",
            },
        )

    # -- internals ---------------------------------------------------------

    def _add_document(self, document: Document) -> None:
        # A pristine scratch document gives way to the first real file.
        if len(self.documents) == 1 and _is_scratch(self.documents[0]):
            self.documents[0] = document
            self.active_index = 0
            return
        self.documents.append(document)
        self.active_index = len(self.documents) - 1

    def _remember(self, path: str) -> None:
        if path in self.recent_files:
            self.recent_files.remove(path)
        self.recent_files.insert(0, path)
        del self.recent_files[MAX_RECENT_FILES:]

    def _write(self, document: Document, path: str) -> None:
        try:
            self.storage.write_lines(path, document.lines())
        except OSError as exc:
            reason = exc.strerror or str(exc)
            raise StorageError(
                f"Failed to save: {reason}", path=path, reason=reason
            ) from exc
        document.mark_saved()
        telemetry.record_event(
            "document.save",
            data={"path": path, "lines": document.line_count},
            logger_name="modal_edit.session",
        )

    def _cycle(self, step: int) -> Document:
        count = len(self.documents)
        if count <= 1:
            raise UserError("No other buffers")
        self.active_index = (self.active_index + step) % count
        document = self.document
        self.notify(f"Buffer {self.active_index + 1}/{count}: {document.filename}")
        return document

    def _require_last_search(self) -> bytes:
        if not self.last_search:
            raise UserError("No previous search")
        return self.last_search

    def _jump(self, target: Optional[Cursor], query: bytes) -> None:
        if target is None:
            self._miss(query)
        document = self.document
        document.set_cursor(*target)
        center_on_cursor(document.state, document.store, self.viewport)
        self.clear_status()

    def _miss(self, query: bytes) -> None:
        telemetry.record_event(
            "search.miss",
            level="debug",
            data={"query": query},
            logger_name="modal_edit.session",
        )
        raise UserError("Pattern not found")


def _state(enabled: bool) -> str:
    return "enabled" if enabled else "disabled"


def _is_scratch(document: Document) -> bool:
    return (
        not document.has_filename
        and not document.modified
        and document.lines() == (b"",)
    )


__all__ = ["EditorSession"]
