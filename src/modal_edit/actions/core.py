"""Mode-switching actions shared across modes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from modal_edit.editing import operations
from modal_edit.modes.base_mode import ModeContext, ModeResult
from modal_edit.navigation import motions
from modal_edit.session.status import Severity

if TYPE_CHECKING:  # pragma: no cover
    from modal_edit.keymaps import ResolutionMatch

HELP_TEXT = "h/j/k/l=move, i=insert, :w=save, :q=quit, :wq=save&quit"


def enter_insert_mode(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    return ModeResult(consumed=True, switch_to="insert", message="enter_insert")


def insert_at_line_start(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    document = context.document
    document.set_cursor(*motions.line_start(document.store, document.cursor))
    return ModeResult(consumed=True, switch_to="insert", message="enter_insert")


def append_after_cursor(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    document = context.document
    document.set_cursor(*motions.move_right(document.store, document.cursor))
    return ModeResult(consumed=True, switch_to="insert", message="enter_insert")


def append_at_line_end(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    document = context.document
    document.set_cursor(*motions.line_end(document.store, document.cursor))
    return ModeResult(consumed=True, switch_to="insert", message="enter_insert")


def open_line_below(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    operations.open_line_below(
        context.document, auto_indent=context.settings.auto_indent
    )
    return ModeResult(consumed=True, switch_to="insert", message="enter_insert")


def open_line_above(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    operations.open_line_above(
        context.document, auto_indent=context.settings.auto_indent
    )
    return ModeResult(consumed=True, switch_to="insert", message="enter_insert")


def leave_insert_mode(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    """Back to normal, stepping one column left without leaving the line."""

    del match
    document = context.document
    row, col = document.cursor
    document.set_cursor(row, max(col - 1, 0))
    return ModeResult(consumed=True, switch_to="normal", message="exit_insert")


def exit_to_normal_mode(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to="normal", message="cancel")


def enter_visual_mode(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    return ModeResult(consumed=True, switch_to="visual", message="enter_visual")


def enter_command_mode(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    return ModeResult(consumed=True, switch_to="command", message="enter_command")


def enter_search_mode(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    return ModeResult(consumed=True, switch_to="search", message="enter_search")


def enter_replace_mode(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    return ModeResult(consumed=True, switch_to="replace", message="enter_replace")


def show_help(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    context.session.notify(HELP_TEXT, Severity.SUCCESS)
    return ModeResult(consumed=True, status="help")


def next_buffer(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    with context.session.reporting():
        context.session.next_document()
    return ModeResult(consumed=True, status="buffer")


def prev_buffer(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    with context.session.reporting():
        context.session.prev_document()
    return ModeResult(consumed=True, status="buffer")


def quit_editor(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    with context.session.reporting():
        context.session.quit()
    return ModeResult(consumed=True, status="quit")


__all__ = [
    "HELP_TEXT",
    "enter_insert_mode",
    "insert_at_line_start",
    "append_after_cursor",
    "append_at_line_end",
    "open_line_below",
    "open_line_above",
    "leave_insert_mode",
    "exit_to_normal_mode",
    "enter_visual_mode",
    "enter_command_mode",
    "enter_search_mode",
    "enter_replace_mode",
    "show_help",
    "next_buffer",
    "prev_buffer",
    "quit_editor",
]
