"""Telemetry services for the editor engine, built on telelog.

The rest of the package only touches four names:

``configure(...)`` -- swap in a preset or an explicit telelog config
``get_logger(name)`` -- fetch (and cache) a configured logger
``record_event(name, ...)`` -- emit a structured event at a chosen level
``span(name, ...)`` -- profile a block and optionally track it as a component

Presets and environment settings are both expressed as ``with_<option>``
calls on a ``telelog.Config``; profiling is always switched on.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "CARET_ENGINE_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "caret_engine")

# The terminal belongs to the editor UI, so the non-development presets log to disk.
_PRESET_SETTINGS: Dict[str, Dict[str, Any]] = {
    "development": {
        "min_level": "DEBUG",
        "console_output": True,
        "colored_output": True,
        "json_format": False,
    },
    "production": {
        "min_level": "INFO",
        "console_output": False,
        "buffering": True,
        "file_output": "caret_engine.log",
    },
    "performance": {
        "min_level": "DEBUG",
        "console_output": False,
        "buffering": True,
        "json_format": True,
        "file_output": "caret_engine-frames.log",
    },
}

PRESETS = tuple(_PRESET_SETTINGS)

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _env(name: str) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}") or None


def _env_flag(name: str) -> bool:
    raw = _env(name)
    return raw is not None and raw.strip().lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _apply_settings(config: Any, settings: Dict[str, Any]) -> Any:
    for option, value in settings.items():
        getattr(config, f"with_{option}")(value)
    config.with_profiling(True)
    return config


def _env_settings() -> Dict[str, Any]:
    console = not _env_flag("DISABLE_CONSOLE")
    settings: Dict[str, Any] = {
        "min_level": (_env("LOG_LEVEL") or "WARNING").upper(),
        "console_output": console,
    }
    if console:
        settings["colored_output"] = not _env_flag("NO_COLOR")
    if _env_flag("LOG_JSON"):
        settings["json_format"] = True
    if _env("LOG_FILE"):
        settings["file_output"] = _env("LOG_FILE")
    if _env_flag("LOG_BUFFERED"):
        settings["buffering"] = True
        settings["buffer_size"] = int(_env("LOG_BUFFER_SIZE") or "2048")
    return settings


def _preset_settings(preset: str) -> Dict[str, Any]:
    try:
        settings = dict(_PRESET_SETTINGS[preset.lower()])
    except KeyError:
        raise ValueError(f"Unknown preset '{preset}', expected one of {PRESETS}.") from None
    if "file_output" in settings and _env("LOG_FILE"):
        settings["file_output"] = _env("LOG_FILE")
    return settings


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Replace the active telelog configuration.

    ``config`` adopts an explicit ``telelog.Config``; ``preset`` names one of
    ``PRESETS``. Passing neither rebuilds the configuration from the
    ``CARET_ENGINE_*`` environment. Cached loggers are dropped so the next
    ``get_logger`` call picks up the change.
    """

    global _ACTIVE_CONFIG
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if preset:
        _ACTIVE_CONFIG = _apply_settings(tl.Config(), _preset_settings(preset))
    elif config is None:
        _ACTIVE_CONFIG = _apply_settings(tl.Config(), _env_settings())
    else:
        _ACTIVE_CONFIG = _apply_settings(config, {})
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger`` for ``name``."""

    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = _apply_settings(tl.Config(), _env_settings())
    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
    return _LOGGER_CACHE[logger_name]


def _emit(logger: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    name = level.lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        structured(message, [(str(key), _stringify(val)) for key, val in payload.items()])
        return
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>`` with ``data`` attached as key/value pairs."""

    payload = {"event": name, **(data or {})}
    _emit(get_logger(logger_name), level, f"event::{name}", payload)


@dataclass
class SpanHandle:
    """Yielded by ``span`` so callers can attach metadata mid-flight."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def note(self, message: str, **extra: Any) -> None:
        self._log("debug", f"span::{message}", extra)

    def fail(self, reason: str) -> None:
        self._log("error", "span::fail", {"reason": reason})

    def _log(self, level: str, message: str, extra: Dict[str, Any]) -> None:
        payload = {"span": self.span_name, **self.metadata, **extra}
        if self.component_name:
            payload["component"] = self.component_name
        _emit(self.logger, level, message, payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a code block and (optionally) track it as a component.

    ``component=True`` reuses ``name`` as the component id, a string names
    the component explicitly. ``metadata`` is pushed as logger context for
    the duration of the block. Exceptions are logged as ``span::fail`` and
    re-raised.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else component or None
    context = {key: _stringify(value) for key, value in (metadata or {}).items()}

    with ExitStack() as stack:
        for key, value in context.items():
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))

        handle = SpanHandle(
            logger=log,
            span_name=name,
            component_name=component_name,
            metadata=dict(context),
        )
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


__all__ = [
    "PRESETS",
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
