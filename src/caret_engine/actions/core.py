"""Editing and navigation actions bound to keys."""

from __future__ import annotations

from typing import TYPE_CHECKING

from caret_engine.buffer import EditorSession, EditResult

if TYPE_CHECKING:
    from caret_engine.keymaps.models import KeyStroke


def insert_text(session: EditorSession, stroke: KeyStroke) -> EditResult:
    char = stroke.typed_char
    if char is None:
        return EditResult(
            action="insert_char",
            changed=False,
            offset=session.cursor.offset,
            version=session.buffer.version,
        )
    return session.insert_char(char)


def insert_line_ending(session: EditorSession, stroke: KeyStroke) -> EditResult:
    del stroke
    return session.insert_line_ending()


def remove_before(session: EditorSession, stroke: KeyStroke) -> EditResult:
    del stroke
    return session.remove_before()


def remove_after(session: EditorSession, stroke: KeyStroke) -> EditResult:
    del stroke
    return session.remove_after()


def move_up(session: EditorSession, stroke: KeyStroke) -> EditResult:
    del stroke
    return session.move("up")


def move_down(session: EditorSession, stroke: KeyStroke) -> EditResult:
    del stroke
    return session.move("down")


def move_left(session: EditorSession, stroke: KeyStroke) -> EditResult:
    del stroke
    return session.move("left")


def move_right(session: EditorSession, stroke: KeyStroke) -> EditResult:
    del stroke
    return session.move("right")


__all__ = [
    "insert_text",
    "insert_line_ending",
    "remove_before",
    "remove_after",
    "move_up",
    "move_down",
    "move_left",
    "move_right",
]
