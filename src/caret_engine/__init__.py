"""UI-agnostic single-buffer text editing engine."""

__all__ = [
    "adapters",
    "actions",
    "buffer",
    "config",
    "dispatch",
    "keymaps",
    "render",
    "runtime",
]

__version__ = "0.1.0"
