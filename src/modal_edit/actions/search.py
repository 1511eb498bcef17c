"""Search and replace actions plus the prompt submit handlers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from modal_edit.editing import operations
from modal_edit.modes.base_mode import ModeContext, ModeResult
from modal_edit.modes.keymap_helpers import line_input_state
from modal_edit.session.errors import UserError

if TYPE_CHECKING:  # pragma: no cover
    from modal_edit.keymaps import ResolutionMatch


def search_next(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    with context.session.reporting():
        context.session.search_next()
    return ModeResult(consumed=True, status="search")


def search_prev(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    with context.session.reporting():
        context.session.search_prev()
    return ModeResult(consumed=True, status="search")


def search_word_under_cursor(
    context: ModeContext, match: "ResolutionMatch"
) -> ModeResult:
    del match
    session = context.session
    with session.reporting():
        word = operations.current_word(context.document)
        if not word:
            raise UserError("No word under cursor")
        session.search(word)
    return ModeResult(consumed=True, status="search")


def submit_search(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    query = str(line_input_state(context).get("text", ""))
    with context.session.reporting():
        context.session.search(query.encode("utf-8"))
    return ModeResult(consumed=True, switch_to="normal", status="search_submit")


def submit_replace(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    replacement = str(line_input_state(context).get("text", ""))
    with context.session.reporting():
        context.session.replace_once(replacement.encode("utf-8"))
    return ModeResult(consumed=True, switch_to="normal", status="replace_submit")


__all__ = [
    "search_next",
    "search_prev",
    "search_word_under_cursor",
    "submit_search",
    "submit_replace",
]
