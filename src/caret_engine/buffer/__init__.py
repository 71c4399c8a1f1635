"""Text buffer, cursor, and the session that owns them."""

from .cursor import Cursor, CursorPos
from .document import TextBuffer
from .session import EditorSession, EditTransaction
from .state import DIRECTIONS, EditResult
from .sync import BufferMirror

__all__ = [
    "TextBuffer",
    "Cursor",
    "CursorPos",
    "EditorSession",
    "EditTransaction",
    "EditResult",
    "DIRECTIONS",
    "BufferMirror",
]
