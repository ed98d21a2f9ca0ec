"""Logging and profiling for the buffer core, backed by telelog.

The editor draws on the terminal, so nothing goes to the console unless
``MINO_LOG_CONSOLE`` asks for it. ``MINO_LOG_FILE`` sends records to a file
and ``MINO_LOG_LEVEL`` sets the threshold (``INFO`` by default).
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from typing import Any, Dict, Iterator, Mapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

LOGGER_NAME = "mino"

_loggers: Dict[str, Any] = {}
_config: Optional[Any] = None


def _truthy(raw: Optional[str]) -> bool:
    return (raw or "").lower() in {"1", "true", "yes", "on"}


def build_config(environ: Optional[Mapping[str, str]] = None) -> Any:
    """Return a ``telelog.Config`` for mino from ``MINO_LOG_*`` variables."""

    env = os.environ if environ is None else environ
    config = tl.Config()
    config.with_min_level((env.get("MINO_LOG_LEVEL") or "INFO").upper())
    config.with_console_output(_truthy(env.get("MINO_LOG_CONSOLE")))
    log_file = env.get("MINO_LOG_FILE")
    if log_file:
        config.with_file_output(log_file)
    config.with_profiling(True)
    return config


def configure(config: Optional[Any] = None) -> None:
    """Adopt ``config`` (or one built from the environment) for new loggers."""

    global _config
    _config = config if config is not None else build_config()
    _loggers.clear()


def get_logger(name: Optional[str] = None) -> Any:
    if _config is None:
        configure()
    logger_name = name or LOGGER_NAME
    if logger_name not in _loggers:
        _loggers[logger_name] = tl.Logger.with_config(logger_name, _config)
    return _loggers[logger_name]


def _emit(log: Any, level: str, message: str, data: Mapping[str, Any]) -> None:
    structured = getattr(log, f"{level}_with", None)
    if structured is not None:
        structured(message, [(str(k), str(v)) for k, v in data.items()])
        return
    plain = getattr(log, level, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {dict(data)}")


def record_event(
    name: str, *, level: str = "info", data: Optional[Mapping[str, Any]] = None
) -> None:
    """Log ``event::<name>`` with ``data`` as key/value pairs."""

    _emit(get_logger(), level.lower(), f"event::{name}", {"event": name, **(data or {})})


@contextmanager
def span(
    name: str,
    *,
    component: bool = False,
    metadata: Optional[Mapping[str, Any]] = None,
) -> Iterator[None]:
    """Profile a block; ``metadata`` is logger context while it runs.

    An exception escaping the block is logged as ``span::fail`` and re-raised.
    """

    log = get_logger()
    context = {str(k): str(v) for k, v in (metadata or {}).items()}
    for key, value in context.items():
        log.add_context(key, value)
    try:
        with ExitStack() as stack:
            if component:
                stack.enter_context(log.track_component(name))
            stack.enter_context(log.profile(name))
            yield
    except Exception as exc:
        _emit(log, "error", "span::fail", {"span": name, "reason": exc, **context})
        raise
    finally:
        for key in context:
            log.remove_context(key)


__all__ = ["build_config", "configure", "get_logger", "record_event", "span"]
