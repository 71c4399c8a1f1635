"""Editor constants with environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

ENV_PREFIX = "CARET_ENGINE_"

DEFAULT_LINE_ENDING = "\n"
DEFAULT_INITIAL_OFFSET = 41
DEFAULT_BLINK_MS = 1000
DEFAULT_FPS = 30

DEFAULT_TEXT = '''class Cursor:

    offset = 0

    def move_to(self, offset):
        self.offset = offset

    def next(self):
        self.offset += 1
'''

_LINE_ENDING_ALIASES = {
    "lf": "\n",
    "\\n": "\n",
    "cr": "\r",
    "\\r": "\r",
}


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Static knobs read once when a session and its host are built."""

    line_ending: str = DEFAULT_LINE_ENDING
    initial_offset: int = DEFAULT_INITIAL_OFFSET
    initial_text: str = DEFAULT_TEXT
    blink_ms: int = DEFAULT_BLINK_MS
    fps: int = DEFAULT_FPS
    font_size: int = 32
    line_gap_coef: float = 0.2
    char_gap_coef: float = 0.025

    def __post_init__(self) -> None:
        if len(self.line_ending) != 1:
            raise ValueError(
                f"line_ending must be a single character, got {self.line_ending!r}"
            )
        if self.blink_ms <= 0:
            raise ValueError("blink_ms must be positive")
        if self.fps <= 0:
            raise ValueError("fps must be positive")
        if self.font_size <= 0:
            raise ValueError("font_size must be positive")

    @property
    def frame_interval(self) -> float:
        return 1.0 / self.fps

    def with_overrides(self, **changes: object) -> "EditorConfig":
        """Return a copy with ``changes`` applied, skipping ``None`` values."""

        filtered = {key: value for key, value in changes.items() if value is not None}
        if not filtered:
            return self
        return replace(self, **filtered)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EditorConfig":
        env = os.environ if environ is None else environ
        defaults = cls()
        raw_ending = env.get(f"{ENV_PREFIX}LINE_ENDING")
        line_ending = defaults.line_ending
        if raw_ending:
            line_ending = _LINE_ENDING_ALIASES.get(raw_ending.lower(), raw_ending)
        return cls(
            line_ending=line_ending,
            initial_offset=_env_int(
                env, "INITIAL_OFFSET", defaults.initial_offset
            ),
            blink_ms=_env_int(env, "BLINK_MS", defaults.blink_ms),
            fps=_env_int(env, "FPS", defaults.fps),
            font_size=_env_int(env, "FONT_SIZE", defaults.font_size),
        )


def _env_int(env: Mapping[str, str], key: str, fallback: int) -> int:
    value = env.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


__all__ = [
    "DEFAULT_BLINK_MS",
    "DEFAULT_FPS",
    "DEFAULT_INITIAL_OFFSET",
    "DEFAULT_LINE_ENDING",
    "DEFAULT_TEXT",
    "EditorConfig",
]
