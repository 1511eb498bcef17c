"""Editor session, status messages, and the recoverable error taxonomy."""

from .errors import EditorError, InvariantGuardError, StorageError, UserError
from .session import EditorSession
from .status import Severity, StatusMessage

__all__ = [
    "EditorSession",
    "EditorError",
    "UserError",
    "StorageError",
    "InvariantGuardError",
    "Severity",
    "StatusMessage",
]
