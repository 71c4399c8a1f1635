"""Frame layout: glyph cells, caret geometry and blink phase.

Renderers draw whatever ``compose_frame`` returns; nothing here touches a
drawing surface.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from caret_engine.buffer import CursorPos, EditorSession
from caret_engine.config import DEFAULT_BLINK_MS, EditorConfig

# Advance of a monospace glyph relative to its font size.
MONOSPACE_ASPECT = 0.6


@dataclass(frozen=True, slots=True)
class Glyph:
    line: int
    col: int
    char: str


@dataclass(frozen=True, slots=True)
class Rect:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True, slots=True)
class GlyphMetrics:
    """Pixel metrics for a monospace grid."""

    font_size: float = 32
    char_width: Optional[float] = None
    line_gap_coef: float = 0.2
    char_gap_coef: float = 0.025
    gap_between_lines: float = 1
    gap_between_chars: float = 1

    @classmethod
    def from_config(cls, config: EditorConfig) -> "GlyphMetrics":
        return cls(
            font_size=config.font_size,
            line_gap_coef=config.line_gap_coef,
            char_gap_coef=config.char_gap_coef,
        )

    @property
    def advance(self) -> float:
        if self.char_width is not None:
            return self.char_width
        return self.font_size * MONOSPACE_ASPECT

    @property
    def glyph_inset(self) -> float:
        """Horizontal padding centring a glyph inside its font-size box."""

        return (self.font_size - self.advance) / 2

    def column_x(self, col: int) -> float:
        gap = self.font_size * self.char_gap_coef * self.gap_between_chars
        return col * self.advance + col * gap

    def line_y(self, line: int) -> float:
        gap = self.font_size * self.line_gap_coef * self.gap_between_lines
        return line * self.font_size + line * gap

    def cell_origin(self, line: int, col: int) -> Tuple[float, float]:
        """Baseline origin of the glyph at ``(line, col)``."""

        return (
            self.column_x(col) + self.glyph_inset,
            self.line_y(line) + self.font_size,
        )

    def caret_rect(self, line: int, col: int) -> Rect:
        height = (
            self.font_size
            + self.line_gap_coef * self.font_size
            + 0.5 * self.font_size * self.line_gap_coef * self.gap_between_lines
        )
        return Rect(
            x=self.column_x(col) + self.glyph_inset - 1,
            y=self.line_y(line),
            width=self.advance + 1,
            height=height,
        )


@dataclass(frozen=True, slots=True)
class Frame:
    """Everything a renderer needs for one tick."""

    glyphs: Tuple[Glyph, ...]
    caret: CursorPos
    caret_char: Optional[str]
    caret_filled: bool
    line_count: int
    version: int
    # Pixel box for canvas hosts; cell-based hosts only need ``caret``.
    caret_rect: Rect

    def iter_lines(self) -> Iterator[List[Glyph]]:
        """Yield glyphs grouped per line, including empty lines."""

        rows: List[List[Glyph]] = [[] for _ in range(self.line_count)]
        for glyph in self.glyphs:
            while glyph.line >= len(rows):
                rows.append([])
            rows[glyph.line].append(glyph)
        yield from rows


def iter_glyphs(text: str, line_ending: str = "\n") -> Iterator[Glyph]:
    line = 0
    col = 0
    for char in text:
        if char == line_ending:
            line += 1
            col = 0
            continue
        yield Glyph(line, col, char)
        col += 1


def layout_glyphs(text: str, line_ending: str = "\n") -> Tuple[Glyph, ...]:
    return tuple(iter_glyphs(text, line_ending))


def caret_filled(now_ms: float, blink_ms: int = DEFAULT_BLINK_MS) -> bool:
    """Solid block for the first half of every blink period, outline after."""

    if blink_ms <= 0:
        raise ValueError("blink_ms must be positive")
    return (now_ms % blink_ms) <= blink_ms / 2


def compose_frame(
    session: EditorSession,
    now_ms: float,
    *,
    blink_ms: int = DEFAULT_BLINK_MS,
    metrics: Optional[GlyphMetrics] = None,
) -> Frame:
    metrics = metrics or GlyphMetrics()
    text = session.get_text()
    glyphs = layout_glyphs(text, session.line_ending)
    caret = session.get_cursor_pos()
    visual_lines = text.count(session.line_ending) + 1
    return Frame(
        glyphs=glyphs,
        caret=caret,
        caret_char=session.get_current_char(),
        caret_filled=caret_filled(now_ms, blink_ms),
        line_count=max(visual_lines, caret.line + 1),
        version=session.buffer.version,
        caret_rect=metrics.caret_rect(caret.line, caret.col),
    )


__all__ = [
    "Frame",
    "Glyph",
    "GlyphMetrics",
    "Rect",
    "caret_filled",
    "compose_frame",
    "iter_glyphs",
    "layout_glyphs",
]
