"""Dataclasses describing key strokes, bindings and action metadata."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, Mapping

TEXT_BLOCKING_MODIFIERS = frozenset({"ctrl", "alt", "meta"})


def _normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = tuple(m.strip().lower() for m in modifiers if m.strip())
    return tuple(sorted(dict.fromkeys(values)))


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Single normalized key press.

    ``key`` names the physical key (``"UP"``, ``"BACKSPACE"``, ``"a"``) and
    ``text`` carries the character it would type, if any.
    """

    key: str
    modifiers: tuple[str, ...] = ()
    text: str | None = None

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))

    @property
    def token(self) -> str:
        if self.modifiers:
            modifier = "+".join(self.modifiers)
            return f"{modifier}+{self.key}"
        return self.key

    @property
    def typed_char(self) -> str | None:
        """Character this stroke inserts, or ``None`` for command keys."""

        if self.text is None or len(self.text) != 1 or not self.text.isprintable():
            return None
        if TEXT_BLOCKING_MODIFIERS.intersection(self.modifiers):
            return None
        return self.text

    @classmethod
    def parse(cls, token: str, *, text: str | None = None) -> "KeyStroke":
        """Build a stroke from ``"ctrl+shift+UP"`` style tokens."""

        if not token:
            raise ValueError("token cannot be empty")
        if token == "+" or token.endswith("++"):
            prefix, key = token[:-1].rstrip("+"), "+"
        else:
            prefix, _, key = token.rpartition("+")
        modifiers = tuple(m for m in prefix.split("+") if m)
        return cls(key, modifiers=modifiers, text=text)


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Callable metadata used during binding execution.

    Handlers are invoked as ``handler(session, stroke)``.
    """

    id: str
    handler: Callable[..., object]
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates a key stroke with an action."""

    id: str
    stroke: KeyStroke
    action_id: str
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.action_id:
            raise ValueError("binding action_id cannot be empty")

    @property
    def token(self) -> str:
        return self.stroke.token


__all__ = [
    "KeyStroke",
    "ActionRef",
    "Binding",
]
