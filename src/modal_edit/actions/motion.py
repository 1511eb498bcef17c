"""Cursor-motion actions wrapping the pure navigator functions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from modal_edit.modes.base_mode import ModeContext, ModeResult
from modal_edit.navigation import Motion, motions

if TYPE_CHECKING:  # pragma: no cover
    from modal_edit.keymaps import ResolutionMatch

MotionAction = Callable[[ModeContext, "ResolutionMatch"], ModeResult]


def motion_action(motion: Motion) -> MotionAction:
    def handler(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
        del match
        document = context.document
        document.set_cursor(*motion(document.store, document.cursor))
        return ModeResult(consumed=True, status="moved")

    handler.__name__ = motion.__name__
    return handler


move_left = motion_action(motions.move_left)
move_right = motion_action(motions.move_right)
move_up = motion_action(motions.move_up)
move_down = motion_action(motions.move_down)
line_start = motion_action(motions.line_start)
line_end = motion_action(motions.line_end)
word_forward = motion_action(motions.word_forward)
word_backward = motion_action(motions.word_backward)
file_start = motion_action(motions.file_start)
file_end = motion_action(motions.file_end)
matching_bracket = motion_action(motions.matching_bracket)


def page_up(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    document = context.document
    height = context.session.viewport.height
    document.set_cursor(*motions.page_up(document.store, document.cursor, height))
    return ModeResult(consumed=True, status="moved")


def page_down(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    document = context.document
    height = context.session.viewport.height
    document.set_cursor(*motions.page_down(document.store, document.cursor, height))
    return ModeResult(consumed=True, status="moved")


__all__ = [
    "motion_action",
    "move_left",
    "move_right",
    "move_up",
    "move_down",
    "line_start",
    "line_end",
    "word_forward",
    "word_backward",
    "page_up",
    "page_down",
    "file_start",
    "file_end",
    "matching_bracket",
]
