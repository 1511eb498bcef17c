"""Per-mode trie lookup turning key tokens into match / pending / miss."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Literal, Optional, Sequence

from modal_edit.runtime.telemetry import span

from .models import ActionRef, Binding
from .registry import KeymapRegistry


@dataclass(slots=True)
class TrieNode:
    binding: Optional[Binding] = None
    children: Dict[str, "TrieNode"] = field(default_factory=dict)
    # Smallest sequence timeout among the bindings strictly below this node.
    shortest_timeout: Optional[int] = None


@dataclass(slots=True)
class KeymapTrie:
    """Bindings of one mode, keyed token by token."""

    mode: str
    revision: int = -1
    root: TrieNode = field(default_factory=TrieNode)

    @classmethod
    def build(cls, mode: str, revision: int, bindings: Iterable[Binding]) -> "KeymapTrie":
        trie = cls(mode=mode, revision=revision)
        for binding in bindings:
            node = trie.root
            for token in binding.sequence.tokens:
                node = node.children.setdefault(token, TrieNode())
            node.binding = binding
        _annotate_timeouts(trie.root)
        return trie

    def walk(self, tokens: Sequence[str]) -> tuple[Optional[TrieNode], int]:
        """Follow ``tokens``; ``None`` plus the accepted count on a dead end."""

        node = self.root
        for consumed, token in enumerate(tokens):
            child = node.children.get(token)
            if child is None:
                return None, consumed
            node = child
        return node, len(tokens)


def _annotate_timeouts(node: TrieNode) -> Optional[int]:
    below: list[int] = []
    for child in node.children.values():
        if child.binding is not None:
            below.append(child.binding.sequence.timeout_ms)
        deeper = _annotate_timeouts(child)
        if deeper is not None:
            below.append(deeper)
    node.shortest_timeout = min(below) if below else None
    return node.shortest_timeout


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """Outcome of one lookup.

    ``pending`` means the tokens are a strict prefix of at least one binding
    and the caller should wait up to ``timeout_ms`` for one of
    ``next_expected``.
    """

    status: Literal["match", "pending", "miss"]
    match: Optional[ResolutionMatch] = None
    consumed: int = 0
    next_expected: tuple[str, ...] = ()
    timeout_ms: Optional[int] = None


class KeymapResolver:
    """Resolves token sequences against tries rebuilt on registry revisions."""

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._tries: Dict[str, KeymapTrie] = {}

    @property
    def registry(self) -> KeymapRegistry:
        return self._registry

    def trie(self, mode: str) -> KeymapTrie:
        revision = self._registry.revision()
        trie = self._tries.get(mode)
        if trie is None or trie.revision != revision:
            trie = KeymapTrie.build(mode, revision, self._registry.iter_bindings(mode))
            self._tries[mode] = trie
        return trie

    def reset(self, mode: Optional[str] = None) -> None:
        if mode is None:
            self._tries.clear()
        else:
            self._tries.pop(mode, None)

    def resolve(self, mode: str, tokens: Sequence[str]) -> ResolutionResult:
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": mode, "length": len(tokens)},
        ) as handle:
            result = self._classify(*self.trie(mode).walk(tokens))
            handle.add_metadata("status", result.status)
            if result.match is not None:
                handle.add_metadata("binding_id", result.match.binding.id)
            return result

    def _classify(self, node: Optional[TrieNode], consumed: int) -> ResolutionResult:
        if node is None:
            return ResolutionResult(status="miss", consumed=consumed)
        if node.binding is not None:
            action = self._registry.get_action(node.binding.action_id)
            return ResolutionResult(
                status="match",
                match=ResolutionMatch(binding=node.binding, action=action),
                consumed=consumed,
            )
        if consumed and node.children:
            return ResolutionResult(
                status="pending",
                consumed=consumed,
                next_expected=tuple(sorted(node.children)),
                timeout_ms=node.shortest_timeout,
            )
        return ResolutionResult(status="miss", consumed=consumed)


__all__ = [
    "KeymapResolver",
    "KeymapTrie",
    "ResolutionResult",
    "ResolutionMatch",
]
