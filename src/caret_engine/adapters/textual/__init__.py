"""Textual host adapter (the app module itself needs ``textual``)."""

from .controller import (
    EditorAlreadyRunningError,
    TextualEditorAdapter,
    TextualUIHooks,
    normalize_textual_key,
)
from .view import render_frame_text

__all__ = [
    "EditorAlreadyRunningError",
    "TextualEditorAdapter",
    "TextualUIHooks",
    "normalize_textual_key",
    "render_frame_text",
]
