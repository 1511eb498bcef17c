"""Textual adapter that wires ModeManager results into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from modal_edit.buffer import DocumentMirror
from modal_edit.modes import KeyInput, ModeResult
from modal_edit.modes import base_mode as keys
from modal_edit.modes.mode_manager import ModeManager
from modal_edit.runtime import telemetry

# Textual key names for keys that have no printable character.
TEXTUAL_NAMED_KEYS: Dict[str, str] = {
    "escape": keys.ESCAPE,
    "enter": keys.ENTER,
    "backspace": keys.BACKSPACE,
    "ctrl+h": keys.BACKSPACE,
    "delete": keys.DELETE,
    "tab": keys.TAB,
    "left": keys.LEFT,
    "right": keys.RIGHT,
    "up": keys.UP,
    "down": keys.DOWN,
    "home": keys.HOME,
    "end": keys.END,
    "pageup": keys.PAGE_UP,
    "pagedown": keys.PAGE_DOWN,
}

LIFECYCLE_EVENTS = (
    "command.start",
    "command.end",
    "command.submit",
    "command.error",
    "search.start",
    "search.end",
    "replace.start",
    "replace.end",
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


def translate_key(key: str, character: Optional[str] = None) -> Optional[KeyInput]:
    """Map a Textual ``events.Key`` (name plus character) onto a ``KeyInput``."""

    named = TEXTUAL_NAMED_KEYS.get(key)
    if named is not None:
        return KeyInput.named(named)
    if key.startswith("ctrl+"):
        rest = key[len("ctrl+"):]
        if len(rest) == 1:
            return KeyInput.ctrl(rest)
        if rest in TEXTUAL_NAMED_KEYS:
            return KeyInput.ctrl(TEXTUAL_NAMED_KEYS[rest])
        return None
    if character and len(character) == 1 and character.isprintable():
        return KeyInput.char(character)
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_document: Callable[[DocumentMirror], None]
    handle_event: Callable[[str, object | None], None] = _noop
    exit: Callable[[], None] = _noop


class TextualEditorAdapter:
    """Bridges ModeManager and bus events to a Textual-friendly surface."""

    def __init__(self, manager: ModeManager, hooks: TextualUIHooks) -> None:
        self.manager = manager
        self.hooks = hooks
        self.logger = telemetry.get_logger("modal_edit.adapters.textual")
        self._subscribe_events()
        self.refresh()

    @property
    def session(self):
        return self.manager.session

    def handle_textual_key(
        self, key: str, *, character: Optional[str] = None
    ) -> Optional[ModeResult]:
        """Translate a Textual key event and dispatch it; ``None`` if unmapped."""

        key_input = translate_key(key, character)
        if key_input is None:
            telemetry.record_event(
                "adapter.unmapped_key",
                level="debug",
                data={"key": key},
                logger_name="modal_edit.adapters.textual",
            )
            return None
        result = self.manager.handle_key(key_input)
        self._after_mode_result()
        return result

    def process_timeouts(self) -> Dict[str, ModeResult]:
        """Forward expired timers and repaint if any fired."""

        results = self.manager.process_timeouts()
        if results:
            self._after_mode_result()
        return results

    def resize(self, height: int, width: int) -> None:
        self.session.resize(height, width)
        self.refresh()

    def refresh(self) -> None:
        self.hooks.update_document(self.session.mirror())

    def _after_mode_result(self) -> None:
        self.refresh()
        if not self.session.running:
            self.hooks.exit()

    def _subscribe_events(self) -> None:
        bus = self.manager.context.bus
        for event in LIFECYCLE_EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self.hooks.handle_event(name, payload)
            )


__all__ = [
    "TEXTUAL_NAMED_KEYS",
    "TextualEditorAdapter",
    "TextualUIHooks",
    "translate_key",
]
