"""Recoverable editor errors, reported on the status line and never fatal."""

from __future__ import annotations

from typing import Optional

from .status import Severity


class EditorError(Exception):
    """Base class; ``severity`` picks the status-line colour."""

    severity: Severity = Severity.ERROR

    def __init__(self, message: str, *, severity: Optional[Severity] = None) -> None:
        super().__init__(message)
        self.message = message
        if severity is not None:
            self.severity = severity


class UserError(EditorError):
    """The request cannot apply here (nothing to paste, pattern not found)."""

    severity = Severity.WARNING


class StorageError(EditorError):
    """A file could not be read or written; carries the OS reason string."""

    severity = Severity.ERROR

    def __init__(self, message: str, *, path: str, reason: str) -> None:
        super().__init__(message)
        self.path = path
        self.reason = reason


class InvariantGuardError(EditorError):
    """Refused because it would lose work or leave the session empty.

    A forced variant of the same request bypasses the unsaved-changes guard.
    """

    severity = Severity.WARNING


__all__ = ["EditorError", "UserError", "StorageError", "InvariantGuardError"]
