"""Declarative key bindings: models, registry, and the trie resolver.

Built-in bindings live in :mod:`modal_edit.keymaps.defaults`; it is imported
on demand because it pulls in the action handlers.
"""

from .models import ActionRef, Binding, KeySequence, KeyStroke, make_token
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .resolver import KeymapResolver, ResolutionMatch, ResolutionResult

__all__ = [
    "ActionRef",
    "Binding",
    "KeySequence",
    "KeyStroke",
    "make_token",
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
]
