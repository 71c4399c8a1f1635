"""Render a ``Frame`` as Rich text for a Textual ``Static``."""

from __future__ import annotations

from rich.style import Style
from rich.text import Text

from caret_engine.render import Frame

CARET_FILLED = Style(reverse=True)
CARET_OUTLINE = Style(underline=True, bold=True)


def render_frame_text(frame: Frame) -> Text:
    """Lay out glyph rows and paint the caret cell.

    The caret covers the character under it; past the end of a line it
    covers a blank cell.
    """

    text = Text(no_wrap=True, overflow="ignore")
    caret_style = CARET_FILLED if frame.caret_filled else CARET_OUTLINE
    for line_index, row in enumerate(frame.iter_lines()):
        if line_index:
            text.append("\n")
        chars = "".join(glyph.char for glyph in row)
        if line_index != frame.caret.line:
            text.append(chars)
            continue
        col = frame.caret.col
        under = chars[col] if 0 <= col < len(chars) else " "
        if col < 0:
            text.append(chars)
            continue
        text.append(chars[:col])
        if col > len(chars):
            text.append(" " * (col - len(chars)))
        text.append(under, style=caret_style)
        text.append(chars[col + 1 :])
    return text


__all__ = ["render_frame_text", "CARET_FILLED", "CARET_OUTLINE"]
