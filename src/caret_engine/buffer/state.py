"""Result records produced by session operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

DIRECTIONS: Tuple[str, ...] = ("up", "down", "left", "right")


@dataclass(frozen=True, slots=True)
class EditResult:
    """Outcome of a single session operation.

    ``changed`` is ``False`` when the operation hit a document boundary and
    left text and cursor untouched.
    """

    action: str
    changed: bool
    offset: int
    version: int = 0

    @property
    def noop(self) -> bool:
        return not self.changed
