from __future__ import annotations

from typing import List

import pytest

from caret_engine.adapters.textual import (
    EditorAlreadyRunningError,
    TextualEditorAdapter,
    TextualUIHooks,
    normalize_textual_key,
    render_frame_text,
)
from caret_engine.adapters.textual.view import CARET_FILLED, CARET_OUTLINE
from caret_engine.buffer import EditorSession
from caret_engine.keymaps import KeyStroke
from caret_engine.render import Frame, GlyphMetrics, compose_frame


def make_adapter(
    text: str = "ab\ncd", offset: int = 0
) -> tuple[TextualEditorAdapter, List[Frame], List[str], List[str]]:
    frames: List[Frame] = []
    statuses: List[str] = []
    logs: List[str] = []
    hooks = TextualUIHooks(
        update_frame=frames.append,
        update_status=statuses.append,
        log=logs.append,
    )
    adapter = TextualEditorAdapter(
        EditorSession(text, offset=offset), hooks, clock=lambda: 0.0
    )
    return adapter, frames, statuses, logs


@pytest.mark.parametrize(
    ("key", "character", "expected"),
    [
        ("a", "a", KeyStroke("a", text="a")),
        ("A", "A", KeyStroke("A", text="A")),
        ("space", " ", KeyStroke(" ", text=" ")),
        ("up", None, KeyStroke("UP")),
        ("backspace", None, KeyStroke("BACKSPACE")),
        ("enter", "\r", KeyStroke("ENTER", text="\r")),
        ("ctrl+s", "\x13", KeyStroke("s", modifiers=("ctrl",), text="\x13")),
        ("ctrl+h", None, KeyStroke("BACKSPACE")),
    ],
)
def test_normalize_textual_key(
    key: str, character: str | None, expected: KeyStroke
) -> None:
    assert normalize_textual_key(key, character) == expected


def test_quit_keys_are_left_to_host() -> None:
    assert normalize_textual_key("ctrl+q") is None
    assert normalize_textual_key("ctrl+c") is None


def test_adapter_updates_frame_and_status() -> None:
    adapter, frames, statuses, _ = make_adapter(offset=1)

    result = adapter.handle_textual_key("x", text="x")

    assert result is not None and result.changed
    assert adapter.session.get_text() == "axb\ncd"
    assert frames and frames[-1].version == adapter.session.buffer.version
    assert statuses[-1] == "Ln 1, Col 3  offset 2"


def test_adapter_routes_navigation_keys() -> None:
    adapter, _, statuses, _ = make_adapter("ab\ncdef", offset=1)

    adapter.handle_textual_key("down")

    assert adapter.session.cursor.offset == 4
    assert statuses[-1].startswith("Ln 2, Col 2")


def test_adapter_emits_log_lines() -> None:
    adapter, _, _, logs = make_adapter()

    adapter.handle_textual_key("left")

    assert any(line.startswith("key ->") for line in logs)
    assert any("changed=False" in line for line in logs)


def test_start_twice_raises() -> None:
    adapter, frames, _, _ = make_adapter()

    adapter.start()
    with pytest.raises(EditorAlreadyRunningError):
        adapter.start()

    assert len(frames) == 1
    adapter.stop()
    assert adapter.running is False
    adapter.start()


def test_tick_uses_clock_for_blink_phase() -> None:
    adapter, frames, _, _ = make_adapter()

    adapter.tick()
    adapter.tick(now_ms=750)

    assert frames[0].caret_filled is True
    assert frames[1].caret_filled is False
    assert adapter.frames == 2


def test_render_frame_text_marks_caret_cell() -> None:
    session = EditorSession("ab\ncd", offset=4)

    text = render_frame_text(compose_frame(session, now_ms=0))

    assert text.plain == "ab\ncd"
    assert len(text.spans) == 1
    span = text.spans[0]
    assert text.plain[span.start : span.end] == "d"
    assert span.style == CARET_FILLED


def test_render_frame_text_pads_caret_past_line_end() -> None:
    session = EditorSession("ab\ncd", offset=2)

    text = render_frame_text(compose_frame(session, now_ms=900))

    assert text.plain == "ab \ncd"
    assert text.spans[0].style == CARET_OUTLINE


def test_adapter_frames_use_configured_metrics() -> None:
    metrics = GlyphMetrics(font_size=10, char_width=6)
    adapter = TextualEditorAdapter(
        EditorSession("ab", offset=1),
        TextualUIHooks(update_frame=lambda frame: None),
        metrics=metrics,
        clock=lambda: 0.0,
    )

    frame = adapter.tick()

    assert frame.caret_rect == metrics.caret_rect(0, 1)
