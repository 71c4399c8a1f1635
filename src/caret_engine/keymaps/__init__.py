"""Key stroke model, action registry and default bindings."""

from .models import ActionRef, Binding, KeyStroke
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .resolver import (
    INSERT_TEXT_ACTION,
    KeymapResolver,
    ResolutionMatch,
    ResolutionResult,
)
from .defaults import load_default_keymaps

__all__ = [
    "ActionRef",
    "Binding",
    "KeyStroke",
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
    "INSERT_TEXT_ACTION",
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
    "load_default_keymaps",
]
