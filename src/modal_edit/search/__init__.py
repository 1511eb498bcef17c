"""Search Engine."""

from .engine import replace_all, replace_once, search_backward, search_forward

__all__ = ["search_forward", "search_backward", "replace_once", "replace_all"]
