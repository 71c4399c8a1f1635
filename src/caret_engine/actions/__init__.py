"""Action handlers invoked by key bindings."""

from .core import (
    insert_line_ending,
    insert_text,
    move_down,
    move_left,
    move_right,
    move_up,
    remove_after,
    remove_before,
)

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
