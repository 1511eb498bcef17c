"""Prompt-line modes: ``:`` commands, ``/`` search, and replace text entry."""

from __future__ import annotations

from typing import List

from .base_mode import BACKSPACE, KeyInput, ModeContext, ModeResult
from .keymap_helpers import KeymapMode, line_input_state


class LineInputMode(KeymapMode):
    """Collects a line of text; ENTER/ESC are bindings, the rest is typing.

    The scratch text starts empty on every entry. BACKSPACE on an empty line
    cancels back to normal mode.
    """

    prompt: str = ""

    def __init__(
        self,
        context: ModeContext,
        *,
        default_pending_timeout_ms: int = 1000,
    ) -> None:
        super().__init__(
            context, default_pending_timeout_ms=default_pending_timeout_ms
        )
        self._typed: List[str] = []

    @property
    def text(self) -> str:
        return "".join(self._typed)

    def on_enter(self, previous: str | None) -> None:
        del previous
        self._typed.clear()
        self.context.bus.emit(f"{self.name}.start", None)
        self._sync()

    def on_exit(self, next_mode: str | None) -> None:
        super().on_exit(next_mode)
        self.context.bus.emit(f"{self.name}.end", self.text)
        self._typed.clear()
        self.context.session.prompt = ""
        line_input_state(self.context).update(mode=None, text="")

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        if key.key == BACKSPACE and not key.modifiers:
            if not self._typed:
                return ModeResult(
                    consumed=True, switch_to="normal", status="cancel"
                )
            self._typed.pop()
            self._sync()
            return ModeResult(consumed=True, status="editing")

        byte = key.printable
        if byte is not None:
            self._typed.append(chr(byte))
            self._sync()
            return ModeResult(consumed=True, status="editing")

        return ModeResult(consumed=False, status="miss", message="unhandled")

    def _sync(self) -> None:
        line_input_state(self.context).update(mode=self.name, text=self.text)
        self.context.session.prompt = f"{self.prompt}{self.text}"


class CommandMode(LineInputMode):
    name = "command"
    prompt = ":"


class SearchMode(LineInputMode):
    name = "search"
    prompt = "/"


class ReplaceMode(LineInputMode):
    """Types the replacement for the next match of the last search."""

    name = "replace"
    prompt = "Replace with: "


__all__ = ["LineInputMode", "CommandMode", "SearchMode", "ReplaceMode"]
