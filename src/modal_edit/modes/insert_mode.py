"""Insert mode: bound keys edit, printable keys are typed into the document."""

from __future__ import annotations

from modal_edit.editing import operations

from .base_mode import KeyInput, ModeResult
from .keymap_helpers import KeymapMode


class InsertMode(KeymapMode):
    name = "insert"

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        byte = key.printable
        if byte is None:
            return ModeResult(consumed=False, status="miss")
        operations.insert_char(self.context.document, byte)
        return ModeResult(consumed=True, status="inserted")
