"""Line storage, documents, and the data they exchange with the outside."""

from .clipboard import Clipboard
from .document import Document, Transaction
from .line import Line
from .line_store import LineStore
from .state import BufferState, Cursor
from .storage import FileStorage, Storage
from .sync import DocumentMirror, MirrorLine
from .validation import BoundaryError, clamp_cursor

__all__ = [
    "Line",
    "LineStore",
    "Document",
    "Transaction",
    "BufferState",
    "Cursor",
    "Clipboard",
    "Storage",
    "FileStorage",
    "DocumentMirror",
    "MirrorLine",
    "BoundaryError",
    "clamp_cursor",
]
