"""Built-in keymaps that seed each mode with the editor's default keys."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable

from modal_edit.actions import command as command_actions
from modal_edit.actions import core as core_actions
from modal_edit.actions import edit as edit_actions
from modal_edit.actions import motion as motion_actions
from modal_edit.actions import search as search_actions

from .models import ActionRef, Binding, KeySequence
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef("core.enter_insert", core_actions.enter_insert_mode, "Enter insert mode"),
    ActionRef("core.insert_line_start", core_actions.insert_at_line_start, "Insert at line start"),
    ActionRef("core.append", core_actions.append_after_cursor, "Append after cursor"),
    ActionRef("core.append_line_end", core_actions.append_at_line_end, "Append at line end"),
    ActionRef("core.open_below", core_actions.open_line_below, "Open line below"),
    ActionRef("core.open_above", core_actions.open_line_above, "Open line above"),
    ActionRef("core.leave_insert", core_actions.leave_insert_mode, "Leave insert mode"),
    ActionRef("core.exit_to_normal", core_actions.exit_to_normal_mode, "Return to normal mode"),
    ActionRef("core.enter_visual", core_actions.enter_visual_mode, "Enter visual mode"),
    ActionRef("core.enter_command", core_actions.enter_command_mode, "Enter command-line mode"),
    ActionRef("core.enter_search", core_actions.enter_search_mode, "Search forward"),
    ActionRef("core.enter_replace", core_actions.enter_replace_mode, "Replace next match"),
    ActionRef("core.help", core_actions.show_help, "Show key help"),
    ActionRef("core.next_buffer", core_actions.next_buffer, "Next buffer"),
    ActionRef("core.prev_buffer", core_actions.prev_buffer, "Previous buffer"),
    ActionRef("core.quit", core_actions.quit_editor, "Quit unless buffers are unsaved"),
    ActionRef("motion.left", motion_actions.move_left, "Move left"),
    ActionRef("motion.right", motion_actions.move_right, "Move right"),
    ActionRef("motion.up", motion_actions.move_up, "Move up"),
    ActionRef("motion.down", motion_actions.move_down, "Move down"),
    ActionRef("motion.line_start", motion_actions.line_start, "Line start"),
    ActionRef("motion.line_end", motion_actions.line_end, "Line end"),
    ActionRef("motion.word_forward", motion_actions.word_forward, "Next word"),
    ActionRef("motion.word_backward", motion_actions.word_backward, "Previous word"),
    ActionRef("motion.page_up", motion_actions.page_up, "Page up"),
    ActionRef("motion.page_down", motion_actions.page_down, "Page down"),
    ActionRef("motion.file_start", motion_actions.file_start, "First line"),
    ActionRef("motion.file_end", motion_actions.file_end, "Last line"),
    ActionRef("motion.matching_bracket", motion_actions.matching_bracket, "Matching bracket"),
    ActionRef("edit.delete_char", edit_actions.delete_char, "Delete character"),
    ActionRef("edit.delete_char_before", edit_actions.delete_char_before, "Delete previous character"),
    ActionRef("edit.delete_line", edit_actions.delete_line, "Delete line"),
    ActionRef("edit.delete_word", edit_actions.delete_word, "Delete word"),
    ActionRef("edit.delete_to_line_end", edit_actions.delete_to_line_end, "Delete to line end"),
    ActionRef("edit.copy_line", edit_actions.copy_line, "Copy line"),
    ActionRef("edit.paste", edit_actions.paste, "Paste below"),
    ActionRef("edit.join_lines", edit_actions.join_lines, "Join lines"),
    ActionRef("edit.indent", edit_actions.indent, "Indent line"),
    ActionRef("edit.unindent", edit_actions.unindent, "Unindent line"),
    ActionRef("edit.lowercase_word", edit_actions.lowercase_word, "Lowercase word"),
    ActionRef("edit.uppercase_word", edit_actions.uppercase_word, "Uppercase word"),
    ActionRef("edit.toggle_comment", edit_actions.toggle_comment, "Toggle comment"),
    ActionRef("edit.transpose_chars", edit_actions.transpose_chars, "Transpose characters"),
    ActionRef("edit.delete_to_line_start", edit_actions.delete_to_line_start, "Delete to line start"),
    ActionRef("edit.duplicate_line", edit_actions.duplicate_line, "Duplicate line"),
    ActionRef("edit.move_line_up", edit_actions.move_line_up, "Move line up"),
    ActionRef("edit.move_line_down", edit_actions.move_line_down, "Move line down"),
    ActionRef("edit.newline", edit_actions.insert_newline, "Split line"),
    ActionRef("edit.backspace", edit_actions.backspace, "Delete backwards"),
    ActionRef("edit.tab", edit_actions.insert_tab, "Insert tab stop"),
    ActionRef("search.next", search_actions.search_next, "Next match"),
    ActionRef("search.prev", search_actions.search_prev, "Previous match"),
    ActionRef("search.word", search_actions.search_word_under_cursor, "Search word under cursor"),
    ActionRef("search.submit", search_actions.submit_search, "Run search"),
    ActionRef("replace.submit", search_actions.submit_replace, "Replace next match"),
    ActionRef("command.submit_line", command_actions.submit_command_line, "Evaluate the command line"),
)


def _bindings(mode: str, table: Iterable[tuple[str, tuple[str, ...], str]]) -> tuple[Binding, ...]:
    return tuple(
        Binding(
            id=f"{mode}.{name}",
            mode=mode,
            sequence=KeySequence.from_strings(*keys),
            action_id=action_id,
        )
        for name, keys, action_id in table
    )


_CANCEL_KEYS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("escape", ("ESC",)),
    ("ctrl_c", ("ctrl+c",)),
    ("interrupt", ("INTERRUPT",)),
)

_NORMAL = (
    ("insert", ("i",), "core.enter_insert"),
    ("insert_line_start", ("I",), "core.insert_line_start"),
    ("append", ("a",), "core.append"),
    ("append_line_end", ("A",), "core.append_line_end"),
    ("open_below", ("o",), "core.open_below"),
    ("open_above", ("O",), "core.open_above"),
    ("left", ("h",), "motion.left"),
    ("down", ("j",), "motion.down"),
    ("up", ("k",), "motion.up"),
    ("right", ("l",), "motion.right"),
    ("arrow_left", ("LEFT",), "motion.left"),
    ("arrow_down", ("DOWN",), "motion.down"),
    ("arrow_up", ("UP",), "motion.up"),
    ("arrow_right", ("RIGHT",), "motion.right"),
    ("line_start", ("0",), "motion.line_start"),
    ("home", ("HOME",), "motion.line_start"),
    ("line_end", ("$",), "motion.line_end"),
    ("end", ("END",), "motion.line_end"),
    ("word_forward", ("w",), "motion.word_forward"),
    ("word_backward", ("b",), "motion.word_backward"),
    ("page_up", ("PAGE_UP",), "motion.page_up"),
    ("page_down", ("PAGE_DOWN",), "motion.page_down"),
    ("file_start", ("g", "g"), "motion.file_start"),
    ("file_end", ("G",), "motion.file_end"),
    ("matching_bracket", ("%",), "motion.matching_bracket"),
    ("delete_char", ("x",), "edit.delete_char"),
    ("delete_char_before", ("X",), "edit.delete_char_before"),
    ("delete_line", ("d", "d"), "edit.delete_line"),
    ("delete_word", ("d", "w"), "edit.delete_word"),
    ("delete_to_line_end", ("D",), "edit.delete_to_line_end"),
    ("copy_line", ("y", "y"), "edit.copy_line"),
    ("paste", ("p",), "edit.paste"),
    ("join_lines", ("J",), "edit.join_lines"),
    ("indent", (">",), "edit.indent"),
    ("unindent", ("<",), "edit.unindent"),
    ("lowercase_word", ("g", "u"), "edit.lowercase_word"),
    ("uppercase_word", ("g", "U"), "edit.uppercase_word"),
    ("toggle_comment", ("g", "c"), "edit.toggle_comment"),
    ("transpose_chars", ("ctrl+t",), "edit.transpose_chars"),
    ("delete_to_line_start", ("d", "0"), "edit.delete_to_line_start"),
    ("duplicate_line", ("ctrl+d",), "edit.duplicate_line"),
    ("move_line_up", ("ctrl+UP",), "edit.move_line_up"),
    ("move_line_down", ("ctrl+DOWN",), "edit.move_line_down"),
    ("search", ("/",), "core.enter_search"),
    ("search_next", ("n",), "search.next"),
    ("search_prev", ("N",), "search.prev"),
    ("search_word", ("*",), "search.word"),
    ("replace", ("R",), "core.enter_replace"),
    ("command", (":",), "core.enter_command"),
    ("visual", ("v",), "core.enter_visual"),
    ("next_buffer", ("ctrl+n",), "core.next_buffer"),
    ("prev_buffer", ("ctrl+p",), "core.prev_buffer"),
    ("help", ("?",), "core.help"),
    ("quit", ("ctrl+q",), "core.quit"),
)

_INSERT = tuple(
    (name, keys, "core.leave_insert") for name, keys in _CANCEL_KEYS
) + (
    ("newline", ("ENTER",), "edit.newline"),
    ("backspace", ("BACKSPACE",), "edit.backspace"),
    ("delete", ("DELETE",), "edit.delete_char"),
    ("tab", ("TAB",), "edit.tab"),
    ("arrow_left", ("LEFT",), "motion.left"),
    ("arrow_down", ("DOWN",), "motion.down"),
    ("arrow_up", ("UP",), "motion.up"),
    ("arrow_right", ("RIGHT",), "motion.right"),
)


def _prompt(submit_action: str) -> tuple[tuple[str, tuple[str, ...], str], ...]:
    return tuple(
        (name, keys, "core.exit_to_normal") for name, keys in _CANCEL_KEYS
    ) + (("submit", ("ENTER",), submit_action),)


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    _bindings("normal", _NORMAL)
    + _bindings("insert", _INSERT)
    + _bindings("command", _prompt("command.submit_line"))
    + _bindings("search", _prompt("search.submit"))
    + _bindings("replace", _prompt("replace.submit"))
    + _bindings(
        "visual", tuple((name, keys, "core.exit_to_normal") for name, keys in _CANCEL_KEYS)
    )
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    default_sequence_timeout_ms: int | None = None,
) -> None:
    """Register built-in actions and bindings for every mode."""

    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        registry.register_binding(
            _binding_with_timeout(binding, default_sequence_timeout_ms),
            replace=replace,
        )

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=replace)


def _binding_with_timeout(binding: Binding, timeout_ms: int | None) -> Binding:
    if timeout_ms is None:
        return binding
    sequence = KeySequence(binding.sequence.strokes, timeout_ms=timeout_ms)
    return replace(binding, sequence=sequence)


__all__ = ["load_default_keymaps", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS"]
