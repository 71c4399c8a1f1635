from __future__ import annotations

from caret_engine.buffer import CursorPos, EditorSession
from caret_engine.dispatch import KeyDispatcher
from caret_engine.keymaps import (
    ActionRef,
    Binding,
    KeyStroke,
    KeymapRegistry,
    KeymapResolver,
    load_default_keymaps,
)


def make_dispatcher(text: str, offset: int = 0) -> KeyDispatcher:
    return KeyDispatcher(EditorSession(text, offset=offset))


def test_printable_key_inserts_character() -> None:
    dispatcher = make_dispatcher("ab", offset=1)

    result = dispatcher.handle_key(KeyStroke("c", text="c"))

    assert dispatcher.session.get_text() == "acb"
    assert dispatcher.session.cursor.offset == 2
    assert result.changed is True


def test_ctrl_chord_is_ignored() -> None:
    dispatcher = make_dispatcher("ab", offset=1)

    result = dispatcher.press("ctrl+s", text="s")

    assert result.action == "unbound"
    assert result.changed is False
    assert dispatcher.session.get_text() == "ab"


def test_arrow_keys_move_cursor() -> None:
    dispatcher = make_dispatcher("abc\ndef", offset=1)

    dispatcher.press("DOWN")
    assert dispatcher.session.get_cursor_pos() == CursorPos(line=1, col=1)
    dispatcher.press("RIGHT")
    assert dispatcher.session.cursor.offset == 6
    dispatcher.press("UP")
    assert dispatcher.session.get_cursor_pos() == CursorPos(line=0, col=2)
    dispatcher.press("LEFT")
    assert dispatcher.session.cursor.offset == 1


def test_backspace_delete_and_enter() -> None:
    dispatcher = make_dispatcher("abcd", offset=2)

    dispatcher.press("BACKSPACE")
    assert dispatcher.session.get_text() == "acd"
    assert dispatcher.session.cursor.offset == 1

    dispatcher.press("DELETE")
    assert dispatcher.session.get_text() == "ad"

    dispatcher.press("ENTER")
    assert dispatcher.session.get_text() == "a\nd"
    assert dispatcher.session.get_cursor_pos() == CursorPos(line=1, col=0)


def test_boundary_keys_are_silent() -> None:
    dispatcher = make_dispatcher("ab", offset=0)

    for token in ("BACKSPACE", "LEFT", "UP", "BACKSPACE"):
        assert dispatcher.press(token).changed is False

    assert dispatcher.session.get_text() == "ab"
    assert dispatcher.session.cursor.offset == 0


def test_type_text_splits_on_line_ending() -> None:
    dispatcher = make_dispatcher("!", offset=0)

    results = dispatcher.type_text("hi\nyo")

    assert dispatcher.session.get_text() == "hi\nyo!"
    assert all(result.changed for result in results)
    assert dispatcher.session.get_cursor_pos() == CursorPos(line=1, col=2)


def test_custom_registry_and_plain_action_result() -> None:
    calls: list[str] = []

    def shout(session: EditorSession, stroke: KeyStroke) -> None:
        calls.append(stroke.token)

    registry = KeymapRegistry()
    load_default_keymaps(registry)
    registry.register_action(ActionRef(id="debug.shout", handler=shout))
    registry.register_binding(
        Binding(id="key.f1", stroke=KeyStroke("F1"), action_id="debug.shout")
    )
    session = EditorSession("ab")
    dispatcher = KeyDispatcher(session, resolver=KeymapResolver(registry))

    result = dispatcher.press("F1")

    assert calls == ["F1"]
    assert result.action == "debug.shout"
    assert dispatcher.registry is registry
