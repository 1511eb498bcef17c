"""Mode Dispatcher: key inputs, modes, and their shared context.

:class:`~modal_edit.modes.mode_manager.ModeManager` is imported from its own
module since it loads the default keymaps and therefore the actions.
"""

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeResult
from .command_mode import CommandMode, LineInputMode, ReplaceMode, SearchMode
from .insert_mode import InsertMode
from .keymap_helpers import KeymapMode
from .normal_mode import NormalMode
from .visual_mode import VisualMode

__all__ = [
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "KeymapMode",
    "NormalMode",
    "InsertMode",
    "LineInputMode",
    "CommandMode",
    "SearchMode",
    "ReplaceMode",
    "VisualMode",
]
