"""Textual-facing adapter wiring key events and frame ticks to the session."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from caret_engine.buffer import EditorSession, EditResult
from caret_engine.config import DEFAULT_BLINK_MS
from caret_engine.dispatch import KeyDispatcher
from caret_engine.keymaps import KeyStroke
from caret_engine.render import Frame, GlyphMetrics, compose_frame
from caret_engine.runtime import telemetry

# Textual key names that differ from the engine's tokens.
_KEY_ALIASES = {
    "return": "ENTER",
    "ctrl+h": "BACKSPACE",
}


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


def _monotonic_ms() -> float:
    return time.monotonic() * 1000


class EditorAlreadyRunningError(RuntimeError):
    """Raised when ``start`` is called on an adapter that is already ticking."""


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_frame: Callable[[Frame], None]
    update_status: Callable[[str], None] = _noop
    # Optional debug line sink, e.g. a Textual Log widget
    log: Callable[[str], None] = _noop


def normalize_textual_key(
    key: str, character: Optional[str] = None
) -> Optional[KeyStroke]:
    """Turn a Textual ``(key, character)`` pair into a ``KeyStroke``.

    Returns ``None`` for keys the host keeps for itself (quit bindings).
    """

    if key in {"ctrl+c", "ctrl+q"}:
        return None
    if key in _KEY_ALIASES:
        return KeyStroke(_KEY_ALIASES[key])

    modifiers: tuple[str, ...] = ()
    base = key
    if "+" in key and not key.endswith("+"):
        *mods, base = key.split("+")
        modifiers = tuple(mods)

    stroke_text = character if character and len(character) == 1 else None
    if stroke_text is not None and stroke_text.isprintable() and not modifiers:
        return KeyStroke(stroke_text, text=stroke_text)
    if len(base) > 1:
        base = base.upper()
    return KeyStroke(base, modifiers=modifiers, text=stroke_text)


class TextualEditorAdapter:
    """Bridges a session + dispatcher to a Textual-friendly surface."""

    def __init__(
        self,
        session: EditorSession,
        hooks: TextualUIHooks,
        *,
        dispatcher: Optional[KeyDispatcher] = None,
        blink_ms: int = DEFAULT_BLINK_MS,
        metrics: Optional[GlyphMetrics] = None,
        clock: Callable[[], float] = _monotonic_ms,
    ) -> None:
        self.session = session
        self.hooks = hooks
        self.dispatcher = dispatcher or KeyDispatcher(session)
        self.blink_ms = blink_ms
        self.metrics = metrics or GlyphMetrics()
        self._clock = clock
        self._running = False
        self.frames = 0

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> Frame:
        if self._running:
            raise EditorAlreadyRunningError("Editor is already running")
        self._running = True
        telemetry.record_event(
            "adapter.start",
            data={"session": self.session.name, "blink_ms": self.blink_ms},
        )
        return self.tick()

    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        telemetry.record_event(
            "adapter.stop", data={"session": self.session.name, "frames": self.frames}
        )

    def tick(self, now_ms: Optional[float] = None) -> Frame:
        """Compose one frame and hand it to the host."""

        now = self._clock() if now_ms is None else now_ms
        frame = compose_frame(
            self.session, now, blink_ms=self.blink_ms, metrics=self.metrics
        )
        self.frames += 1
        self.hooks.update_frame(frame)
        return frame

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> Optional[EditResult]:
        """Normalize a Textual key event and dispatch it."""

        stroke = normalize_textual_key(key, text)
        if stroke is None:
            return None
        extra = tuple(str(mod) for mod in modifiers)
        if extra:
            stroke = KeyStroke(
                stroke.key, modifiers=stroke.modifiers + extra, text=stroke.text
            )
        self._log_state("key ->", token=stroke.token, text=stroke.text)
        result = self.dispatcher.handle_key(stroke)
        self._log_state(
            "result <-", action=result.action, changed=result.changed
        )
        self.hooks.update_status(self.status_line())
        self.tick()
        return result

    def status_line(self) -> str:
        pos = self.session.get_cursor_pos()
        return f"Ln {pos.line + 1}, Col {pos.col + 1}  offset {self.session.cursor.offset}"

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        cursor = self.session.cursor
        return {
            "offset": cursor.offset,
            "memorized_column": cursor.memorized_column,
            "buffer_version": self.session.buffer.version,
        }


__all__ = [
    "EditorAlreadyRunningError",
    "TextualEditorAdapter",
    "TextualUIHooks",
    "normalize_textual_key",
]
