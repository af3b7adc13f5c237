"""Library configuration: CartonConfig and initialization."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from carton._logging import configure_logging

__all__ = [
    'CartonConfig',
    'get_config',
    'init',
    'tracing_enabled',
]

_TRUTHY = frozenset({'1', 'true', 'yes', 'on'})


@dataclass(frozen=True)
class CartonConfig:
    """Configuration for carton.

    Attributes:
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = leave logging alone.
        json_logs: Render logs as JSON (True) or as colored console lines (False).
        trace_settlement: Emit a debug event every time an async chain settles.
    """

    log_level: str | None = None
    json_logs: bool = True
    trace_settlement: bool = False


# Global configuration (set by init())
_config: CartonConfig | None = None


def _detect_log_level() -> str | None:
    """Read CARTON_LOG_LEVEL, returning None when unset or empty."""
    level = os.environ.get('CARTON_LOG_LEVEL', '').strip()
    return level.upper() or None


def _detect_json_logs() -> bool:
    """Read CARTON_LOG_FORMAT ("json" or "console"), defaulting to JSON."""
    fmt = os.environ.get('CARTON_LOG_FORMAT', '').lower()
    if fmt == 'console':
        return False
    if fmt and fmt != 'json':
        logging.warning("Unknown CARTON_LOG_FORMAT value '%s', defaulting to json", fmt)
    return True


def _detect_trace_settlement() -> bool:
    return os.environ.get('CARTON_TRACE_SETTLEMENT', '').lower() in _TRUTHY


def init(
    log_level: str | None = None,
    json_logs: bool | None = None,
    trace_settlement: bool | None = None,
) -> CartonConfig:
    """Initialize carton with the given configuration.

    Arguments left as None are resolved from the environment
    (CARTON_LOG_LEVEL, CARTON_LOG_FORMAT, CARTON_TRACE_SETTLEMENT).

    Args:
        log_level: Logging level ("DEBUG", "INFO", etc.). None = from env, else silent.
        json_logs: JSON (True) or console (False) log rendering.
        trace_settlement: Log each async settlement at debug level.

    Returns:
        The CartonConfig that was set.

    Example:
        ```python
        import carton

        carton.init(log_level='DEBUG', trace_settlement=True)
        ```
    """
    global _config  # noqa: PLW0603

    _config = CartonConfig(
        log_level=log_level if log_level is not None else _detect_log_level(),
        json_logs=json_logs if json_logs is not None else _detect_json_logs(),
        trace_settlement=(trace_settlement if trace_settlement is not None else _detect_trace_settlement()),
    )

    if _config.log_level is not None:
        configure_logging(_config.log_level, json_output=_config.json_logs)

    return _config


def get_config() -> CartonConfig:
    """Get the current configuration.

    Returns:
        The current CartonConfig.

    Raises:
        RuntimeError: If init() has not been called.
    """
    if _config is None:
        msg = 'carton not initialized. Call carton.init() first.'
        raise RuntimeError(msg)
    return _config


def tracing_enabled() -> bool:
    """Return True when settlement tracing was switched on through init()."""
    return _config is not None and _config.trace_settlement
