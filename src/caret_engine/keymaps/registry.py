"""Keymap registry responsible for storing actions and bindings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from caret_engine.runtime.telemetry import span

from .models import ActionRef, Binding


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry state."""

    action_count: int
    binding_count: int
    tokens: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """Raised when a binding targets a key token that is already bound."""

    def __init__(self, binding: Binding, existing: Binding):
        super().__init__(
            f"Binding '{binding.id}' conflicts with '{existing.id}' on '{binding.token}'"
        )
        self.binding = binding
        self.existing = existing


class KeymapRegistry:
    """Owns action references and the token -> binding index."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._by_token: Dict[str, str] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        try:
            return self._actions[action_id]
        except KeyError as exc:
            raise KeyError(f"Action '{action_id}' is not registered") from exc

    def get_binding(self, binding_id: str) -> Binding:
        try:
            return self._bindings[binding_id]
        except KeyError as exc:
            raise KeyError(f"Binding '{binding_id}' is not registered") from exc

    def has_action(self, action_id: str) -> bool:
        return action_id in self._actions

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        with span(
            "keymaps::register_action",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"action_id": action.id},
        ):
            if not replace and action.id in self._actions:
                raise ValueError(f"Action '{action.id}' already registered")
            self._actions[action.id] = action
            return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "token": binding.token},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
                )

            existing = self.lookup(binding.token)
            if existing is not None and existing.id != binding.id and not replace:
                handle.add_metadata("conflict", existing.id)
                raise KeymapConflictError(binding, existing)
            if binding.id in self._bindings and not replace:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            if existing is not None:
                self._drop(existing)
            previous = self._bindings.get(binding.id)
            if previous is not None:
                self._drop(previous)

            self._bindings[binding.id] = binding
            self._by_token[binding.token] = binding.id
            self._touch()
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        with span(
            "keymaps::unregister_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding_id},
        ):
            binding = self._bindings.get(binding_id)
            if binding is None:
                return None
            self._drop(binding)
            self._touch()
            return binding

    def lookup(self, token: str) -> Optional[Binding]:
        binding_id = self._by_token.get(token)
        if binding_id is None:
            return None
        return self._bindings[binding_id]

    def iter_bindings(self) -> Iterator[Binding]:
        yield from self._bindings.values()

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            tokens=tuple(sorted(self._by_token)),
        )

    def _drop(self, binding: Binding) -> None:
        self._bindings.pop(binding.id, None)
        if self._by_token.get(binding.token) == binding.id:
            self._by_token.pop(binding.token, None)

    def _touch(self) -> None:
        self._revision += 1


__all__ = [
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
]
