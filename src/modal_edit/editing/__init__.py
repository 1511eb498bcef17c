"""Edit Engine operations."""

from . import operations

__all__ = ["operations"]
