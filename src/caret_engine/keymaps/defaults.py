"""Built-in actions and the arrow/backspace/delete/enter bindings."""

from __future__ import annotations

from typing import Iterable, Sequence

from caret_engine.actions import core as core_actions

from .models import ActionRef, Binding, KeyStroke
from .registry import KeymapRegistry
from .resolver import INSERT_TEXT_ACTION

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id=INSERT_TEXT_ACTION,
        handler=core_actions.insert_text,
        description="Insert the typed character at the cursor",
    ),
    ActionRef(
        id="edit.insert_line_ending",
        handler=core_actions.insert_line_ending,
        description="Split the line at the cursor",
    ),
    ActionRef(
        id="edit.remove_before",
        handler=core_actions.remove_before,
        description="Delete the character before the cursor",
    ),
    ActionRef(
        id="edit.remove_after",
        handler=core_actions.remove_after,
        description="Delete the character under the cursor",
    ),
    ActionRef(
        id="cursor.up",
        handler=core_actions.move_up,
        description="Move to the previous line",
    ),
    ActionRef(
        id="cursor.down",
        handler=core_actions.move_down,
        description="Move to the next line",
    ),
    ActionRef(
        id="cursor.left",
        handler=core_actions.move_left,
        description="Move one character back",
    ),
    ActionRef(
        id="cursor.right",
        handler=core_actions.move_right,
        description="Move one character forward",
    ),
)

DEFAULT_BINDINGS: tuple[Binding, ...] = (
    Binding(id="key.up", stroke=KeyStroke("UP"), action_id="cursor.up"),
    Binding(id="key.down", stroke=KeyStroke("DOWN"), action_id="cursor.down"),
    Binding(id="key.left", stroke=KeyStroke("LEFT"), action_id="cursor.left"),
    Binding(id="key.right", stroke=KeyStroke("RIGHT"), action_id="cursor.right"),
    Binding(
        id="key.backspace",
        stroke=KeyStroke("BACKSPACE"),
        action_id="edit.remove_before",
    ),
    Binding(
        id="key.delete",
        stroke=KeyStroke("DELETE"),
        action_id="edit.remove_after",
    ),
    Binding(
        id="key.enter",
        stroke=KeyStroke("ENTER"),
        action_id="edit.insert_line_ending",
    ),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register the built-in actions and bindings on ``registry``."""

    excluded = set(exclude_bindings or ())

    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if binding.id in excluded:
            continue
        registry.register_binding(binding, replace=replace)

    for binding in extra_bindings or ():
        registry.register_binding(binding, replace=True)


__all__ = ["load_default_keymaps", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS"]
