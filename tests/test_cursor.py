from __future__ import annotations

import pytest

from caret_engine.buffer import Cursor, CursorPos, TextBuffer

RAGGED = "a" * 10 + "\n" + "bb" + "\n" + "c" * 10


def make_cursor(text: str, offset: int = 0) -> Cursor:
    return Cursor(TextBuffer(text), offset)


@pytest.mark.parametrize(
    "text",
    ["", "abc", "a\nb", "a\n", "\n\n", "a\n\nb", RAGGED, "x\ny\n\nzz\n"],
)
def test_cursor_pos_inverts_offset(text: str) -> None:
    cursor = make_cursor(text)
    starts = cursor.buffer.line_starts

    for offset in range(len(text) + 1):
        cursor.move_to(offset)
        pos = cursor.get_cursor_pos()
        assert starts[pos.line] + pos.col == offset
        assert starts[pos.line] <= offset
        if pos.line + 1 < len(starts):
            assert starts[pos.line + 1] > offset


def test_cursor_pos_at_end_of_text() -> None:
    cursor = make_cursor("ab\ncd", 5)

    assert cursor.get_cursor_pos() == CursorPos(line=1, col=2)


def test_prev_at_start_is_noop() -> None:
    cursor = make_cursor("abc", 0)

    assert cursor.prev() is False
    assert cursor.prev() is False
    assert cursor.offset == 0


def test_next_stops_before_last_index() -> None:
    cursor = make_cursor("abc", 1)

    assert cursor.next() is True
    assert cursor.offset == 2
    assert cursor.next() is False
    assert cursor.offset == 2


def test_vertical_moves_keep_memorized_column() -> None:
    cursor = make_cursor(RAGGED, 7)

    assert cursor.down() is True
    assert cursor.get_cursor_pos() == CursorPos(line=1, col=2)
    assert cursor.memorized_column == 7

    assert cursor.down() is True
    assert cursor.get_cursor_pos() == CursorPos(line=2, col=7)


def test_up_through_short_line_restores_column() -> None:
    cursor = make_cursor(RAGGED, 21)

    cursor.up()
    assert cursor.get_cursor_pos() == CursorPos(line=1, col=2)
    cursor.up()
    assert cursor.get_cursor_pos() == CursorPos(line=0, col=7)


def test_up_on_first_line_keeps_offset_and_memorizes() -> None:
    cursor = make_cursor(RAGGED, 4)

    assert cursor.up() is False
    assert cursor.offset == 4
    assert cursor.memorized_column == 4


def test_down_on_last_line_keeps_memorized_column() -> None:
    cursor = make_cursor(RAGGED, 7)
    cursor.down()
    cursor.down()

    assert cursor.down() is False
    assert cursor.offset == 21
    assert cursor.memorized_column == 7


def test_horizontal_move_clears_memorized_column() -> None:
    cursor = make_cursor(RAGGED, 7)
    cursor.down()

    cursor.next()

    assert cursor.memorized_column is None


def test_blocked_prev_leaves_memorized_column() -> None:
    cursor = make_cursor("ab\ncd", 0)
    cursor.up()

    cursor.prev()

    assert cursor.memorized_column == 0


def test_move_to_clears_memorized_column_without_clamping() -> None:
    cursor = make_cursor(RAGGED, 7)
    cursor.down()

    cursor.move_to(100)

    assert cursor.offset == 100
    assert cursor.memorized_column is None


def test_down_into_last_line_stops_before_final_character() -> None:
    cursor = make_cursor("abc\ndefg", 3)

    cursor.down()

    assert cursor.get_cursor_pos() == CursorPos(line=1, col=2)


@pytest.mark.parametrize(
    ("text", "offset", "expected_offset", "expected_pos"),
    [
        ("abc\nd", 1, 3, CursorPos(line=0, col=3)),
        ("a\n\n", 0, 1, CursorPos(line=0, col=1)),
    ],
)
def test_down_into_short_last_line_lands_on_terminator(
    text: str, offset: int, expected_offset: int, expected_pos: CursorPos
) -> None:
    cursor = make_cursor(text, offset)

    assert cursor.down() is True
    assert cursor.offset == expected_offset
    assert cursor.get_cursor_pos() == expected_pos
    assert cursor.memorized_column == offset


def test_down_with_trailing_line_ending() -> None:
    cursor = make_cursor("ab\ncd\n", 1)

    cursor.down()

    assert cursor.offset == 4


def test_current_char() -> None:
    cursor = make_cursor("ab", 1)

    assert cursor.get_current_char() == "b"
    cursor.move_to(2)
    assert cursor.get_current_char() is None


def test_stale_offset_after_set_text() -> None:
    cursor = make_cursor("a\nbcdef", 6)

    cursor.buffer.set_text("ab")

    assert cursor.offset == 6
    assert cursor.get_cursor_pos() == CursorPos(line=0, col=6)
    assert cursor.get_current_char() is None
