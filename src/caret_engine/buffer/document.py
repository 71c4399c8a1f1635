"""Flat text storage with a derived line-start index."""

from __future__ import annotations

from typing import List, Sequence

from caret_engine.config import DEFAULT_LINE_ENDING


class TextBuffer:
    """Whole-text storage for a single document.

    Every edit replaces the text wholesale and rebuilds ``line_starts``.
    A gap buffer or rope could be slotted in later without changing the
    public API.
    """

    def __init__(self, text: str = "", *, line_ending: str = DEFAULT_LINE_ENDING) -> None:
        if len(line_ending) != 1:
            raise ValueError(
                f"line_ending must be a single character, got {line_ending!r}"
            )
        self.line_ending = line_ending
        self._text = ""
        self._line_starts: List[int] = [0]
        self.version = 0
        self.set_text(text)

    @property
    def line_starts(self) -> Sequence[int]:
        """Offset of the first character of every line; never empty."""

        return tuple(self._line_starts)

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def __len__(self) -> int:
        return len(self._text)

    def get_text(self) -> str:
        return self._text

    def set_text(self, text: str) -> None:
        self._text = text
        self.version += 1
        self.reindex()

    def insert(self, offset: int, char: str) -> None:
        """Insert a single character (or the line ending) before ``offset``."""

        if len(char) != 1:
            raise ValueError(f"insert expects a single character, got {char!r}")
        text = self._text
        self.set_text(text[:offset] + char + text[offset:])

    def remove_before(self, offset: int) -> bool:
        if offset <= 0:
            return False
        text = self._text
        self.set_text(text[: offset - 1] + text[offset:])
        return True

    def remove_after(self, offset: int) -> bool:
        # The final character is out of reach when offset sits right before it;
        # kept for compatibility with the reference editor.
        text = self._text
        if offset + 1 >= len(text):
            return False
        self.set_text(text[:offset] + text[offset + 1 :])
        return True

    def reindex(self) -> None:
        text = self._text
        starts = [0]
        found = text.find(self.line_ending)
        while found != -1:
            starts.append(found + 1)
            found = text.find(self.line_ending, found + 1)
        if text and starts[-1] >= len(text):
            starts.pop()
        self._line_starts = starts

    def line_text(self, index: int) -> str:
        """Return line ``index`` without its terminating line ending."""

        start = self._line_starts[index]
        if index + 1 < len(self._line_starts):
            end = self._line_starts[index + 1] - 1
        else:
            end = len(self._text)
            if self._text.endswith(self.line_ending):
                end -= 1
        return self._text[start:end]
