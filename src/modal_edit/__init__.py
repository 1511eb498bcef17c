"""Modal terminal text editor core with a Textual host adapter."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "editing",
    "keymaps",
    "modes",
    "navigation",
    "runtime",
    "search",
    "session",
    "syntax",
]

__version__ = "0.1.0"
