"""Action and binding tables shared by every mode."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from modal_edit.runtime.telemetry import span

from .models import ActionRef, Binding


@dataclass(slots=True)
class RegistryStats:
    action_count: int
    binding_count: int
    modes: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """Two bindings of the same mode share one key sequence."""

    def __init__(self, binding: Binding, existing: Binding):
        super().__init__(
            f"Binding '{binding.id}' conflicts with '{existing.id}' "
            f"on '{binding.key_signature}' in mode '{binding.mode}'"
        )
        self.binding = binding
        self.existing = existing


class KeymapRegistry:
    """Actions by id, bindings by id and by ``(mode, key signature)``.

    Every change to the binding table bumps ``revision()`` so resolvers can
    tell when a cached trie went stale.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._by_mode: Dict[str, Dict[str, Binding]] = {}
        self._logger_name = logger_name
        self._revision = 0

    def _span(self, name: str, **metadata: str):
        return span(
            f"keymaps::{name}",
            logger_name=self._logger_name,
            component="keymaps",
            metadata=metadata,
        )

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        action = self._actions.get(action_id)
        if action is None:
            raise KeyError(f"Action '{action_id}' is not registered")
        return action

    def get_binding(self, binding_id: str) -> Binding:
        binding = self._bindings.get(binding_id)
        if binding is None:
            raise KeyError(f"Binding '{binding_id}' is not registered")
        return binding

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        with self._span("register_action", action_id=action.id):
            if action.id in self._actions and not replace:
                raise ValueError(f"Action '{action.id}' already registered")
            self._actions[action.id] = action
            return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        """Add ``binding``; with ``replace`` it evicts whatever it collides with."""

        with self._span("register_binding", binding_id=binding.id, mode=binding.mode) as handle:
            evicted = self._check(binding, replace=replace, handle=handle)
            for old in evicted:
                self._discard(old)
            self._bindings[binding.id] = binding
            self._by_mode.setdefault(binding.mode, {})[binding.key_signature] = binding
            self._revision += 1
            return binding

    def _check(self, binding: Binding, *, replace: bool, handle) -> list[Binding]:
        if binding.action_id not in self._actions:
            handle.add_metadata("missing_action", binding.action_id)
            raise KeyError(
                f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
            )
        evicted = []
        clash = self.lookup(binding.mode, binding.key_signature)
        if clash is not None and clash.id != binding.id:
            if not replace:
                handle.add_metadata("conflict", clash.id)
                raise KeymapConflictError(binding, clash)
            evicted.append(clash)
        previous = self._bindings.get(binding.id)
        if previous is not None:
            if not replace:
                raise ValueError(f"Binding id '{binding.id}' already registered")
            evicted.append(previous)
        return evicted

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        with self._span("unregister_binding", binding_id=binding_id):
            binding = self._bindings.get(binding_id)
            if binding is not None:
                self._discard(binding)
                self._revision += 1
            return binding

    def lookup(self, mode: str, signature: str) -> Optional[Binding]:
        return self._by_mode.get(mode, {}).get(signature)

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        if mode is None:
            return iter(tuple(self._bindings.values()))
        return iter(tuple(self._by_mode.get(mode, {}).values()))

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            modes=tuple(sorted(self._by_mode)),
        )

    def _discard(self, binding: Binding) -> None:
        self._bindings.pop(binding.id, None)
        table = self._by_mode.get(binding.mode, {})
        if table.get(binding.key_signature) is binding:
            del table[binding.key_signature]
        if not table:
            self._by_mode.pop(binding.mode, None)


__all__ = [
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
]
