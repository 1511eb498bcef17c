"""Mode dispatcher: one active mode, key routing and the pending-prefix timer."""

from __future__ import annotations

from dataclasses import dataclass
import time
from typing import TYPE_CHECKING, Callable, Dict, Optional, Type

from modal_edit.keymaps import KeymapRegistry, KeymapResolver
from modal_edit.keymaps.defaults import load_default_keymaps
from modal_edit.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeResult
from .command_mode import CommandMode, ReplaceMode, SearchMode
from .insert_mode import InsertMode
from .normal_mode import NormalMode
from .visual_mode import VisualMode

if TYPE_CHECKING:  # pragma: no cover
    from modal_edit.session import EditorSession

STANDARD_MODES: tuple[Type[Mode], ...] = (
    NormalMode,
    InsertMode,
    CommandMode,
    SearchMode,
    ReplaceMode,
    VisualMode,
)


@dataclass(frozen=True)
class PendingTimeout:
    mode: str
    deadline: float
    timeout_ms: int

    def expired(self, now: float) -> bool:
        return self.deadline <= now


class ModeManager:
    """Routes keys to the active mode and applies the transitions it asks for.

    Only the active mode can hold a pending key prefix, so there is at most
    one timer; switching modes drops it.  After every handled key and every
    expired timer the session is reconciled (cursor clamped, scroll follows).
    """

    def __init__(
        self,
        context: ModeContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        load_defaults: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.context = context
        self.logger = telemetry.get_logger("modal_edit.modes")
        self._modes: Dict[str, Mode] = {}
        self._active: Optional[str] = None
        self._previous: Optional[str] = None
        self._timer: Optional[PendingTimeout] = None
        self._clock = clock

        if keymap_registry is None:
            keymap_registry = KeymapRegistry(logger_name="modal_edit.keymaps")
            if load_defaults:
                load_default_keymaps(keymap_registry)
        self.keymap_registry = keymap_registry
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            keymap_registry, logger_name="modal_edit.keymaps"
        )
        context.extras.setdefault("keymap_registry", self.keymap_registry)
        context.extras.setdefault("keymap_resolver", self.keymap_resolver)
        context.extras.setdefault("mode_manager", self)

    @property
    def session(self) -> "EditorSession":
        return self.context.session

    @property
    def active_mode(self) -> Optional[Mode]:
        return self._modes.get(self._active) if self._active else None

    @property
    def active_name(self) -> Optional[str]:
        return self._active

    @property
    def previous_name(self) -> Optional[str]:
        return self._previous

    def get_mode(self, name: str) -> Mode:
        return self._modes[name]

    def register_mode(self, mode_cls: Type[Mode], /, *args: object, **kwargs: object) -> Mode:
        """Instantiate and add a mode; the first one registered becomes active."""

        mode = mode_cls(self.context, *args, **kwargs)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._enter(mode.name, previous=None)
        return mode

    def switch_mode(self, name: str) -> None:
        if name not in self._modes:
            raise KeyError(f"Unknown mode '{name}'")
        if name == self._active:
            return
        self._timer = None
        current = self.active_mode
        if current is not None:
            current.on_exit(name)
        self._previous = self._active
        self._enter(name, previous=self._previous)
        telemetry.record_event(
            "mode.switch", data={"mode": name, "previous": self._previous}
        )

    def _enter(self, name: str, *, previous: Optional[str]) -> None:
        self._active = name
        self.session.mode = name
        self._modes[name].on_enter(previous)

    def handle_key(self, key: KeyInput) -> ModeResult:
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        with telemetry.span(
            f"mode::{mode.name}",
            component=True,
            metadata={"key": key.token, "mode": mode.name},
        ):
            result = mode.handle_key(key)
        return self._finish(mode, result)

    def _finish(self, mode: Mode, result: ModeResult) -> ModeResult:
        if result.timeout_ms:
            self._timer = PendingTimeout(
                mode=mode.name,
                deadline=self._clock() + result.timeout_ms / 1000.0,
                timeout_ms=result.timeout_ms,
            )
        else:
            self._timer = None
        if result.switch_to:
            self.switch_mode(result.switch_to)
        self.session.reconcile()
        return result

    def has_pending(self, mode_name: Optional[str] = None) -> bool:
        if self._timer is None:
            return False
        return mode_name is None or self._timer.mode == mode_name

    def process_timeouts(self) -> Dict[str, ModeResult]:
        """Fire the pending timer if its deadline has passed."""

        timer = self._timer
        if timer is None or not timer.expired(self._clock()):
            return {}
        return {timer.mode: self._fire(timer)}

    def force_timeout(self, mode_name: Optional[str] = None) -> Dict[str, ModeResult]:
        timer = self._timer
        if timer is None or (mode_name is not None and timer.mode != mode_name):
            return {}
        return {timer.mode: self._fire(timer)}

    def _fire(self, timer: PendingTimeout) -> ModeResult:
        self._timer = None
        mode = self._modes[timer.mode]
        with telemetry.span(
            f"mode_timeout::{timer.mode}",
            component=True,
            metadata={"mode": timer.mode, "timeout_ms": timer.timeout_ms},
        ):
            result = mode.handle_timeout()
        return self._finish(mode, result)


def create_mode_manager(
    session: "EditorSession",
    *,
    bus: Optional[ModeBus] = None,
    keymap_registry: KeymapRegistry | None = None,
    clock: Callable[[], float] = time.monotonic,
) -> ModeManager:
    """Build a manager with every standard mode registered, starting in normal."""

    timeout_ms = session.settings.pending_timeout_ms
    if keymap_registry is None:
        keymap_registry = KeymapRegistry(logger_name="modal_edit.keymaps")
        load_default_keymaps(keymap_registry, default_sequence_timeout_ms=timeout_ms)
    context = ModeContext(session=session, bus=bus or ModeBus())
    manager = ModeManager(context, keymap_registry=keymap_registry, clock=clock)
    for mode_cls in STANDARD_MODES:
        manager.register_mode(mode_cls, default_pending_timeout_ms=timeout_ms)
    return manager


__all__ = ["ModeManager", "PendingTimeout", "STANDARD_MODES", "create_mode_manager"]
