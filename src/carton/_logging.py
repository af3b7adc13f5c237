"""Structured logging for carton.

Every carton logger lives under the ``carton`` namespace. Records from
carton and from third-party stdlib loggers go through one
ProcessorFormatter, so they share a renderer (JSON or console). Option and
Result values bound to an event are rendered with their short form
(``Some(1)``, ``Err("boom")``) before they reach hooks or the renderer.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from typing import Any

import structlog

from carton.types.option import NothingType, Some
from carton.types.result import Err, Ok

__all__ = [
    'LOGGER_NAMESPACE',
    'LogHook',
    'add_log_hook',
    'clear_log_hooks',
    'configure_logging',
    'get_logger',
    'remove_log_hook',
    'render_containers',
]

LOGGER_NAMESPACE = 'carton'

type LogHook = Callable[[dict[str, Any]], None]

_CONTAINERS = (Some, NothingType, Ok, Err)

_log_hooks: list[LogHook] = []


def render_containers(_logger: Any, _method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Replace Option and Result values with their str() form."""
    for key, value in event_dict.items():
        if isinstance(value, _CONTAINERS):
            event_dict[key] = str(value)
    return event_dict


def _run_hooks(_logger: Any, _method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    for hook in tuple(_log_hooks):
        try:
            hook(event_dict.copy())
        except Exception:  # noqa: BLE001
            pass  # a failing hook never breaks logging
    return event_dict


def _pre_chain() -> list[Any]:
    """Processors shared by carton loggers and foreign stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.stdlib.ExtraAdder(),
        render_containers,
        _run_hooks,
    ]


def configure_logging(level: str = 'INFO', *, json_output: bool = True) -> None:
    """Route structlog and stdlib logging through one stderr handler.

    Args:
        level: Root logging level name. Unknown names fall back to INFO.
        json_output: Emit JSON lines when True, a console rendering otherwise.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_pre_chain(),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if json_output:
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_pre_chain(),
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))


def get_logger(name: str | None = None) -> Any:
    """Get a structlog logger inside the ``carton`` namespace.

    Args:
        name: Child logger name. None returns the ``carton`` logger itself;
            names outside the namespace are nested under it, so ``'db'``
            becomes ``'carton.db'`` and ``'carton.db'`` is kept as is.

    Returns:
        A structlog BoundLogger.
    """
    if name is None or name == LOGGER_NAMESPACE:
        return structlog.get_logger(LOGGER_NAMESPACE)
    if not name.startswith(f'{LOGGER_NAMESPACE}.'):
        name = f'{LOGGER_NAMESPACE}.{name}'
    return structlog.get_logger(name)


def add_log_hook(hook: LogHook) -> None:
    """Register a hook that receives a copy of every log event dict.

    Hooks run after Option and Result values are rendered, for carton
    events and foreign stdlib records alike. An exception raised by a hook
    is dropped and later hooks still run.
    """
    _log_hooks.append(hook)


def remove_log_hook(hook: LogHook) -> None:
    """Remove a previously registered hook; unknown hooks are ignored."""
    if hook in _log_hooks:
        _log_hooks.remove(hook)


def clear_log_hooks() -> None:
    """Remove all registered log hooks."""
    _log_hooks.clear()
