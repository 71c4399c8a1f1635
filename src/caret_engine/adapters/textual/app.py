"""Executable Textual app hosting a single editor session."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use caret_engine.adapters.textual.app"
    ) from exc

from caret_engine.buffer import EditorSession
from caret_engine.config import EditorConfig
from caret_engine.render import Frame, GlyphMetrics
from caret_engine.runtime import telemetry

from .controller import TextualEditorAdapter, TextualUIHooks
from .view import render_frame_text


class CaretEditorApp(App[None]):
    """Full-screen editor: buffer view plus a one-line status bar."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
		content-align: left top;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, config: Optional[EditorConfig] = None) -> None:
        super().__init__()
        self.config = config or EditorConfig.from_env()
        self.session = EditorSession.from_config(self.config)
        self.adapter: TextualEditorAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_frame=self._update_frame,
            update_status=self._update_status,
        )
        self.adapter = TextualEditorAdapter(
            self.session,
            hooks,
            blink_ms=self.config.blink_ms,
            metrics=GlyphMetrics.from_config(self.config),
        )
        self.adapter.start()
        self._update_status(self.adapter.status_line())
        self.set_interval(self.config.frame_interval, self._tick)

    def on_unmount(self) -> None:
        if self.adapter:
            self.adapter.stop()

    def _tick(self) -> None:
        if self.adapter and self.adapter.running:
            self.adapter.tick()

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        result = self.adapter.handle_textual_key(event.key, text=event.character)
        if result is not None:
            event.stop()
            event.prevent_default()

    def _update_frame(self, frame: Frame) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(render_frame_text(frame))

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)


def build_config(args: argparse.Namespace) -> EditorConfig:
    config = EditorConfig.from_env()
    text: Optional[str] = None
    if args.text_file:
        text = Path(args.text_file).read_text(encoding="utf-8")
    return config.with_overrides(
        initial_text=text,
        initial_offset=args.offset,
        blink_ms=args.blink_ms,
        fps=args.fps,
    )


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the caret-engine editor.")
    parser.add_argument(
        "--text-file",
        help="Load the initial buffer contents from this file (never written back)",
    )
    parser.add_argument(
        "--offset",
        type=int,
        default=None,
        help="Initial cursor offset (default: CARET_ENGINE_INITIAL_OFFSET or 41)",
    )
    parser.add_argument(
        "--blink-ms",
        type=int,
        default=None,
        help="Caret blink period in milliseconds (default: 1000)",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=None,
        help="Frame ticks per second (default: 30)",
    )
    parser.add_argument(
        "--log-preset",
        choices=telemetry.PRESETS,
        default="production",
        help="telelog preset; 'development' logs to the console (default: production)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset=args.log_preset)
    app = CaretEditorApp(build_config(args))
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
