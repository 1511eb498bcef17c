"""Keymap-driven mode base shared by every concrete mode."""

from __future__ import annotations

from typing import List, MutableMapping, cast

from modal_edit.keymaps import KeymapResolver, ResolutionMatch
from modal_edit.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult

LINE_INPUT_STATE = "line_input"


def key_to_token(key: KeyInput) -> str:
    return key.token


def require_keymap_resolver(context: ModeContext) -> KeymapResolver:
    resolver = context.extras.get("keymap_resolver")
    if not isinstance(resolver, KeymapResolver):
        raise RuntimeError("ModeContext.extras missing 'keymap_resolver'")
    return resolver


def line_input_state(context: ModeContext) -> MutableMapping[str, object]:
    state = cast(
        MutableMapping[str, object],
        context.extras.setdefault(LINE_INPUT_STATE, {}),
    )
    state.setdefault("mode", None)
    state.setdefault("text", "")
    return state


class KeymapMode(Mode):
    """Resolves keys through the trie, holding back prefixes of compound keys.

    The pending prefix is a two-state machine: idle, or waiting for exactly
    one more key. A key that does not complete a sequence while waiting is
    dropped together with the prefix, and so is an expired timeout.
    """

    def __init__(
        self,
        context: ModeContext,
        *,
        default_pending_timeout_ms: int = 1000,
    ) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger(f"modal_edit.modes.{self.name}")
        self._resolver = require_keymap_resolver(context)
        self._pending: List[str] = []
        self._default_timeout_ms = default_pending_timeout_ms

    @property
    def pending(self) -> tuple[str, ...]:
        return tuple(self._pending)

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self._pending.clear()

    def handle_key(self, key: KeyInput) -> ModeResult:
        waiting = bool(self._pending)
        self._pending.append(key_to_token(key))
        result = self._resolver.resolve(self.name, tuple(self._pending))

        if result.status == "match" and result.match:
            self._pending.clear()
            return self._execute_match(result.match)

        if result.status == "pending":
            return ModeResult(
                consumed=True,
                status="pending",
                message="awaiting_sequence",
                timeout_ms=result.timeout_ms or self._default_timeout_ms,
            )

        discarded = " ".join(self._pending)
        self._pending.clear()
        if waiting:
            return ModeResult(consumed=True, status="discarded", message=discarded)
        return self.handle_unbound(key)

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        del key
        return ModeResult(consumed=False, status="miss")

    def handle_timeout(self) -> ModeResult:
        if not self._pending:
            return ModeResult(consumed=False, status="timeout")
        discarded = " ".join(self._pending)
        self._pending.clear()
        return ModeResult(
            consumed=True, status="discarded", message=f"pending_timeout:{discarded}"
        )

    def _execute_match(self, match: ResolutionMatch) -> ModeResult:
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(self.context, match)

        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(consumed=True)


__all__ = [
    "LINE_INPUT_STATE",
    "KeymapMode",
    "key_to_token",
    "require_keymap_resolver",
    "line_input_state",
]
