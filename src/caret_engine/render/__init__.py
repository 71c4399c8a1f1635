"""Renderer-neutral frame layout."""

from .layout import (
    Frame,
    Glyph,
    GlyphMetrics,
    Rect,
    caret_filled,
    compose_frame,
    iter_glyphs,
    layout_glyphs,
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
