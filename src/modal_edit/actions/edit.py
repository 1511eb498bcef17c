"""Editing actions for normal and insert mode."""

from __future__ import annotations

from typing import TYPE_CHECKING

from modal_edit.editing import operations
from modal_edit.modes.base_mode import ModeContext, ModeResult
from modal_edit.navigation import motions
from modal_edit.session.errors import UserError

if TYPE_CHECKING:  # pragma: no cover
    from modal_edit.keymaps import ResolutionMatch


def _edited(changed: bool = True) -> ModeResult:
    return ModeResult(consumed=True, status="edited" if changed else "noop")


def delete_char(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    return _edited(operations.delete_char(context.document))


def delete_char_before(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    # Step left (wrapping to the previous line end) then delete there.
    del match
    document = context.document
    before = document.cursor
    document.set_cursor(*motions.move_left(document.store, before))
    if document.cursor == before:
        return _edited(False)
    return _edited(operations.delete_char(document))


def delete_line(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    operations.delete_line(context.document)
    return _edited()


def delete_word(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    return _edited(operations.delete_word(context.document))


def delete_to_line_end(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    return _edited(operations.delete_to_line_end(context.document))


def copy_line(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    operations.copy_line(context.document, context.clipboard)
    context.session.notify("Line copied")
    return ModeResult(consumed=True, status="yanked")


def paste(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    with context.session.reporting():
        if not operations.paste(context.document, context.clipboard):
            raise UserError("Nothing to paste")
        context.session.notify("Pasted")
    return _edited(bool(context.clipboard))


def join_lines(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    return _edited(operations.join_lines(context.document))


def indent(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    operations.indent(context.document, context.settings.tab_size)
    return _edited()


def unindent(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    return _edited(bool(operations.unindent(context.document, context.settings.tab_size)))


def lowercase_word(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    return _edited(operations.lowercase_word(context.document))


def uppercase_word(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    return _edited(operations.uppercase_word(context.document))


def toggle_comment(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    operations.toggle_comment(context.document)
    return _edited()


def transpose_chars(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    return _edited(operations.transpose_chars(context.document))


def delete_to_line_start(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    return _edited(operations.delete_to_line_start(context.document))


def duplicate_line(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    operations.duplicate_line(context.document)
    return _edited()


def move_line_up(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    return _edited(operations.move_line_up(context.document))


def move_line_down(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    return _edited(operations.move_line_down(context.document))


# -- insert mode -----------------------------------------------------------


def insert_newline(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    operations.insert_newline(
        context.document, auto_indent=context.settings.auto_indent
    )
    return _edited()


def backspace(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    return _edited(operations.backspace(context.document))


def insert_tab(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    operations.insert_tab(context.document, context.settings.tab_size)
    return _edited()


__all__ = [
    "delete_char",
    "delete_char_before",
    "delete_line",
    "delete_word",
    "delete_to_line_end",
    "copy_line",
    "paste",
    "join_lines",
    "indent",
    "unindent",
    "lowercase_word",
    "uppercase_word",
    "toggle_comment",
    "transpose_chars",
    "delete_to_line_start",
    "duplicate_line",
    "move_line_up",
    "move_line_down",
    "insert_newline",
    "backspace",
    "insert_tab",
]
