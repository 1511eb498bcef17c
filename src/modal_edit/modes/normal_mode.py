"""Normal mode: every key is a binding; unbound keys are ignored."""

from __future__ import annotations

from .keymap_helpers import KeymapMode


class NormalMode(KeymapMode):
    name = "normal"
