"""Executable Textual app that hosts the editor."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from rich.text import Text

try:  # pragma: no cover - imported only when the app is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use modal_edit.adapters.textual.app"
    ) from exc

from modal_edit.buffer import DocumentMirror
from modal_edit.modes.mode_manager import ModeManager, create_mode_manager
from modal_edit.runtime import telemetry
from modal_edit.runtime.settings import EditorSettings
from modal_edit.session import EditorSession
from modal_edit.syntax import TokenKind

from .controller import TextualEditorAdapter, TextualUIHooks

TOKEN_STYLES: dict[TokenKind, str] = {
    TokenKind.KEYWORD: "bold magenta",
    TokenKind.VARIABLE: "cyan",
    TokenKind.STRING: "green",
    TokenKind.NUMBER: "yellow",
    TokenKind.COMMENT: "dim italic",
    TokenKind.OPERATOR: "red",
    TokenKind.FUNCTION: "blue",
    TokenKind.SPECIAL: "bold cyan",
}

SEVERITY_STYLES: dict[str, str] = {
    "info": "cyan",
    "success": "green",
    "warning": "yellow",
    "error": "bold red",
}


def render_document(mirror: DocumentMirror, width: int) -> Text:
    """Paint the visible rows: gutter, highlighted text, and the cursor cell."""

    text_width = max(width - mirror.gutter, 1)
    cursor_row, cursor_col = mirror.screen_cursor
    rendered = Text()
    for index, line in enumerate(mirror.lines):
        if index:
            rendered.append("\n")
        if mirror.gutter:
            rendered.append(f"{line.number:>{mirror.gutter - 1}} ", style="dim")
        start = mirror.scroll_col
        # latin-1 keeps one character per byte so token offsets line up.
        body = Text(line.text[start:start + text_width].decode("latin-1"))
        for token in line.tokens:
            style = TOKEN_STYLES.get(token.kind)
            if style is None:
                continue
            body.stylize(style, max(token.start - start, 0), max(token.end - start, 0))
        if index == cursor_row:
            column = cursor_col - mirror.gutter
            if column >= len(body):
                body.append(" " * (column - len(body) + 1))
            body.stylize("reverse", column, column + 1)
        rendered.append_text(body)
    return rendered


def render_status(mirror: DocumentMirror) -> Text:
    flag = " [+]" if mirror.modified else ""
    status = Text(
        f" {mirror.mode.upper()} | {mirror.filename}{flag} | "
        f"{mirror.attributes.get('position', '')} | "
        f"buf {mirror.attributes.get('buffer', '')} ",
        style="reverse",
    )
    if mirror.status:
        status.append(" ")
        status.append(mirror.status, style=SEVERITY_STYLES.get(mirror.severity, ""))
    return status


class ModalEditApp(App[None]):
    """Textual UI embedding the editor session."""

    CSS = """
    Screen {
        layout: vertical;
    }

    #document-view {
        height: 1fr;
        content-align: left top;
    }

    #status-line {
        height: 1;
    }

    #prompt-line {
        height: 1;
    }
    """

    # Routed through the keymaps so the unsaved-changes guard applies.
    BINDINGS = [
        Binding("ctrl+q", "editor_key('ctrl+q')", show=False, priority=True),
        Binding("ctrl+c", "editor_key('ctrl+c')", show=False, priority=True),
    ]

    def __init__(self, session: EditorSession) -> None:
        super().__init__()
        self.session = session
        self.manager: ModeManager | None = None
        self.adapter: TextualEditorAdapter | None = None
        self._document_widget: Static | None = None
        self._status_widget: Static | None = None
        self._prompt_widget: Static | None = None

    def compose(self) -> ComposeResult:
        self._document_widget = Static("", id="document-view")
        self._status_widget = Static("", id="status-line")
        self._prompt_widget = Static("", id="prompt-line")
        yield self._document_widget
        yield self._status_widget
        yield self._prompt_widget

    def on_mount(self) -> None:
        self.manager = create_mode_manager(self.session)
        hooks = TextualUIHooks(update_document=self._update_document, exit=self.exit)
        self.adapter = TextualEditorAdapter(self.manager, hooks)
        self._resize_to_screen()
        self.set_interval(0.1, self._process_timeouts)

    def on_resize(self, event: events.Resize) -> None:
        del event
        self._resize_to_screen()

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        self.adapter.handle_textual_key(event.key, character=event.character)
        event.stop()

    def action_editor_key(self, key: str) -> None:
        if self.adapter:
            self.adapter.handle_textual_key(key)

    def _process_timeouts(self) -> None:
        if self.adapter:
            self.adapter.process_timeouts()

    def _resize_to_screen(self) -> None:
        if self.adapter:
            width, height = self.size
            # Two rows go to the status and prompt lines.
            self.adapter.resize(max(height - 2, 1), max(width, 1))

    def _update_document(self, mirror: DocumentMirror) -> None:
        if self._document_widget:
            width = self.session.settings.viewport_width
            self._document_widget.update(render_document(mirror, width))
        if self._status_widget:
            self._status_widget.update(render_status(mirror))
        if self._prompt_widget:
            self._prompt_widget.update(mirror.prompt)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the modal text editor.")
    parser.add_argument("files", nargs="*", help="Files to open, one buffer each")
    parser.add_argument(
        "--log-preset",
        choices=("production", "development"),
        default="production",
        help="Telemetry preset; development logs to the console (default: production)",
    )
    return parser.parse_args(argv)


def build_session(files: Sequence[str]) -> EditorSession:
    session = EditorSession(settings=EditorSettings.from_env())
    for path in files:
        with session.reporting():
            session.open_document(path)
    return session


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset=args.log_preset)
    session = build_session(args.files)
    ModalEditApp(session).run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
