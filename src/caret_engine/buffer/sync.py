"""Snapshot types exchanged between the session and its renderer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .cursor import CursorPos


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot of text plus caret state."""

    text: str
    cursor: CursorPos
    offset: int
    current_char: Optional[str]
    line_ending: str
    version: int
    attributes: dict[str, str] = field(default_factory=dict)

