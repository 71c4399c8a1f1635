"""Resolve key strokes to registered actions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from caret_engine.runtime.telemetry import span

from .models import ActionRef, Binding, KeyStroke
from .registry import KeymapRegistry

INSERT_TEXT_ACTION = "edit.insert_text"


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    """Resolved action, with the binding that selected it when there is one."""

    action: ActionRef
    binding: Optional[Binding] = None


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """Outcome returned from the resolver."""

    status: Literal["match", "text", "miss"]
    match: Optional[ResolutionMatch] = None
    char: Optional[str] = None


class KeymapResolver:
    """Looks strokes up in a registry, falling back to text insertion.

    Explicit bindings win over typed text, so binding a printable key
    overrides its insertion.
    """

    def __init__(
        self,
        registry: KeymapRegistry,
        *,
        text_action_id: str = INSERT_TEXT_ACTION,
        logger_name: str | None = None,
    ) -> None:
        self._registry = registry
        self._text_action_id = text_action_id
        self._logger_name = logger_name

    @property
    def registry(self) -> KeymapRegistry:
        return self._registry

    def resolve(self, stroke: KeyStroke) -> ResolutionResult:
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"token": stroke.token},
        ) as handle:
            binding = self._registry.lookup(stroke.token)
            if binding is not None:
                handle.add_metadata("status", "match")
                handle.add_metadata("binding_id", binding.id)
                action = self._registry.get_action(binding.action_id)
                return ResolutionResult(
                    status="match",
                    match=ResolutionMatch(action=action, binding=binding),
                )

            char = stroke.typed_char
            if char is not None and self._registry.has_action(self._text_action_id):
                handle.add_metadata("status", "text")
                action = self._registry.get_action(self._text_action_id)
                return ResolutionResult(
                    status="text",
                    match=ResolutionMatch(action=action),
                    char=char,
                )

            handle.add_metadata("status", "miss")
            return ResolutionResult(status="miss")


__all__ = [
    "INSERT_TEXT_ACTION",
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
]
