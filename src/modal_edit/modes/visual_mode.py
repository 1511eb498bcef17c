"""Visual mode placeholder.

The mode can be entered and left, but selection semantics are undefined, so
every other key is reported as unsupported and changes nothing.
"""

from __future__ import annotations

from modal_edit.session.status import Severity

from .base_mode import KeyInput, ModeResult
from .keymap_helpers import KeymapMode


class VisualMode(KeymapMode):
    name = "visual"

    def on_enter(self, previous: str | None) -> None:
        del previous
        self.context.session.notify(
            "-- VISUAL -- (selection not supported)", Severity.INFO
        )

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        return ModeResult(consumed=False, status="unsupported", message=key.token)
