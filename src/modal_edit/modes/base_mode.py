"""Base classes and shared utilities for editor modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, Optional, Tuple

from modal_edit.buffer import Clipboard, Document
from modal_edit.buffer.charclass import is_printable
from modal_edit.keymaps.models import make_token

if TYPE_CHECKING:  # pragma: no cover
    from modal_edit.runtime.settings import EditorSettings
    from modal_edit.session import EditorSession

# Named keys understood by the dispatcher. Adapters translate host key names
# into these; printable keys use the character itself.
ESCAPE = "ESC"
INTERRUPT = "INTERRUPT"
ENTER = "ENTER"
BACKSPACE = "BACKSPACE"
DELETE = "DELETE"
TAB = "TAB"
LEFT = "LEFT"
RIGHT = "RIGHT"
UP = "UP"
DOWN = "DOWN"
HOME = "HOME"
END = "END"
PAGE_UP = "PAGE_UP"
PAGE_DOWN = "PAGE_DOWN"


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to modes."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    @classmethod
    def char(cls, value: str) -> "KeyInput":
        return cls(key=value, text=value)

    @classmethod
    def named(cls, name: str) -> "KeyInput":
        return cls(key=name)

    @classmethod
    def ctrl(cls, value: str) -> "KeyInput":
        # Letters fold to lower case; named keys such as "UP" keep their name.
        key = value.lower() if len(value) == 1 else value
        return cls(key=key, modifiers=("ctrl",))

    @property
    def token(self) -> str:
        return make_token(self.key, self.modifiers)

    @property
    def printable(self) -> Optional[int]:
        """The byte to insert for a plain printable ASCII key, else ``None``."""

        if self.modifiers or not self.text or len(self.text) != 1:
            return None
        code = ord(self.text)
        return code if is_printable(code) else None


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_key``."""

    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None
    timeout_ms: Optional[int] = None


@dataclass(slots=True)
class ModeContext:
    """Shared services every mode can access."""

    session: "EditorSession"
    bus: "ModeBus"
    extras: Dict[str, object] = field(default_factory=dict)

    @property
    def document(self) -> Document:
        return self.session.document

    @property
    def clipboard(self) -> Clipboard:
        return self.session.clipboard

    @property
    def settings(self) -> "EditorSettings":
        return self.session.settings


class ModeBus:
    """Minimal event bus letting modes exchange structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


class Mode:
    """Base class all concrete editor modes inherit from."""

    name: str = "mode"

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    def on_enter(self, previous: Optional[str]) -> None:
        del previous

    def on_exit(self, next_mode: Optional[str]) -> None:
        del next_mode

    def handle_key(
        self, key: KeyInput
    ) -> ModeResult:  # pragma: no cover - abstract override
        raise NotImplementedError

    def handle_timeout(self) -> ModeResult:
        """Invoked by the manager when a pending key sequence expires."""

        return ModeResult(consumed=False, status="timeout")


__all__ = [
    "KeyInput",
    "ModeResult",
    "ModeContext",
    "ModeBus",
    "Mode",
    "ESCAPE",
    "INTERRUPT",
    "ENTER",
    "BACKSPACE",
    "DELETE",
    "TAB",
    "LEFT",
    "RIGHT",
    "UP",
    "DOWN",
    "HOME",
    "END",
    "PAGE_UP",
    "PAGE_DOWN",
]
