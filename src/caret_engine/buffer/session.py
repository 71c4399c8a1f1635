"""Editor session owning one text buffer and its cursor."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import ContextManager, Optional

from caret_engine.config import DEFAULT_INITIAL_OFFSET, DEFAULT_LINE_ENDING, EditorConfig
from caret_engine.runtime import telemetry

from .cursor import Cursor, CursorPos
from .document import TextBuffer
from .state import DIRECTIONS, EditResult
from .sync import BufferMirror


class EditorSession:
    """Entry points used by input handlers and renderers.

    Input handlers call ``insert_char``, ``remove_before``, ``remove_after``
    and ``move``; renderers read ``get_text``, ``get_cursor_pos``,
    ``get_current_char`` or a whole ``mirror()`` snapshot.
    """

    def __init__(
        self,
        text: str = "",
        *,
        line_ending: str = DEFAULT_LINE_ENDING,
        offset: int = DEFAULT_INITIAL_OFFSET,
        name: str = "default",
    ) -> None:
        self.name = name
        self.buffer = TextBuffer(text, line_ending=line_ending)
        self.cursor = Cursor(self.buffer, offset)

    @classmethod
    def from_config(cls, config: EditorConfig, *, name: str = "default") -> "EditorSession":
        return cls(
            config.initial_text,
            line_ending=config.line_ending,
            offset=config.initial_offset,
            name=name,
        )

    @property
    def line_ending(self) -> str:
        return self.buffer.line_ending

    def get_text(self) -> str:
        return self.buffer.get_text()

    def get_cursor_pos(self) -> CursorPos:
        return self.cursor.get_cursor_pos()

    def get_current_char(self) -> Optional[str]:
        return self.cursor.get_current_char()

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            text=self.buffer.get_text(),
            cursor=self.cursor.get_cursor_pos(),
            offset=self.cursor.offset,
            current_char=self.cursor.get_current_char(),
            line_ending=self.buffer.line_ending,
            version=self.buffer.version,
            attributes=dict(attributes or {}),
        )

    def insert_char(self, char: str) -> EditResult:
        with EditTransaction(self, "insert_char"):
            self.buffer.insert(self.cursor.offset, char)
            self.cursor.next()
        return self._result("insert_char", True)

    def insert_line_ending(self) -> EditResult:
        return self.insert_char(self.buffer.line_ending)

    def remove_before(self) -> EditResult:
        if self.cursor.offset <= 0:
            return self._result("remove_before", False)
        with EditTransaction(self, "remove_before"):
            self.buffer.remove_before(self.cursor.offset)
            self.cursor.prev()
        return self._result("remove_before", True)

    def remove_after(self) -> EditResult:
        with EditTransaction(self, "remove_after"):
            changed = self.buffer.remove_after(self.cursor.offset)
        return self._result("remove_after", changed)

    def move(self, direction: str) -> EditResult:
        if direction not in DIRECTIONS:
            raise ValueError(f"Unknown direction '{direction}', expected one of {DIRECTIONS}")
        step = {
            "up": self.cursor.up,
            "down": self.cursor.down,
            "left": self.cursor.prev,
            "right": self.cursor.next,
        }[direction]
        return self._result(f"move_{direction}", step())

    def move_to(self, offset: int) -> EditResult:
        previous = self.cursor.offset
        self.cursor.move_to(offset)
        return self._result("move_to", previous != offset)

    def _result(self, action: str, changed: bool) -> EditResult:
        return EditResult(
            action=action,
            changed=changed,
            offset=self.cursor.offset,
            version=self.buffer.version,
        )


class EditTransaction(AbstractContextManager["EditTransaction"]):
    """Wraps one text mutation in a telemetry span."""

    def __init__(self, session: EditorSession, label: str) -> None:
        self.session = session
        self.label = label
        self._span_cm: Optional[ContextManager[telemetry.SpanHandle]] = None
        self._handle: Optional[telemetry.SpanHandle] = None
        self._version_before = 0

    def __enter__(self) -> "EditTransaction":
        self._version_before = self.session.buffer.version
        self._span_cm = telemetry.span(
            f"session::{self.label}",
            component="session",
            metadata={
                "session": self.session.name,
                "offset": self.session.cursor.offset,
            },
        )
        self._handle = self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._handle is not None and exc_type is None:
            self._handle.note(
                "commit",
                version=self.session.buffer.version,
                changed=self.session.buffer.version != self._version_before,
            )
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["EditorSession", "EditTransaction"]
