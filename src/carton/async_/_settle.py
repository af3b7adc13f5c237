"""Settle-once memo shared by AsyncOption and AsyncResult."""

from __future__ import annotations

from collections.abc import Awaitable
from inspect import isawaitable, iscoroutine
from typing import Any

import anyio

from carton._config import tracing_enabled
from carton._logging import get_logger

__all__ = ['Settle', 'discard']

logger = get_logger(__name__)


class Settle[T]:
    """Awaitable cell that drives its source at most once.

    The first awaiter drives the source awaitable to completion and stores
    the outcome. Awaiters arriving while it is still running wait on an
    event instead of awaiting the source a second time. Later awaiters get
    the stored value straight away, or the stored exception re-raised.

    A Settle built from a plain (non-awaitable) value is settled at
    construction.
    """

    __slots__ = ('_done', '_error', '_event', '_source', '_value')

    def __init__(self, source: Awaitable[T] | T) -> None:
        self._event: anyio.Event | None = None
        self._error: Exception | None = None
        if isawaitable(source):
            self._source: Awaitable[T] | None = source
            self._value: T | None = None
            self._done = False
        else:
            self._source = None
            self._value = source
            self._done = True

    @property
    def settled(self) -> bool:
        """True once the source has produced a value or raised."""
        return self._done

    async def get(self) -> T:
        """Return the settled value, driving the source on first use."""
        if not self._done and self._event is None:
            await self._drive()
        elif not self._done:
            await self._event.wait()  # type: ignore[union-attr]
            if not self._done:
                msg = 'settlement was interrupted before the source produced a value'
                raise RuntimeError(msg)
        if self._error is not None:
            raise self._error
        return self._value  # type: ignore[return-value]

    async def _drive(self) -> None:
        self._event = anyio.Event()
        source, self._source = self._source, None
        try:
            self._value = await source  # type: ignore[misc]
        except Exception as exc:
            self._error = exc
            self._done = True
        else:
            self._done = True
            if tracing_enabled():
                logger.debug('async_settled', variant=_variant_name(self._value), outcome=self._value)
        finally:
            self._event.set()

    def __repr__(self) -> str:
        if not self._done:
            return 'Settle(<pending>)'
        if self._error is not None:
            return f'Settle(<raised {self._error!r}>)'
        return f'Settle({self._value!r})'


def _variant_name(value: Any) -> str:
    return type(value).__name__


def discard(value: Any) -> None:
    """Close value when it is a coroutine the chain has decided not to await."""
    if iscoroutine(value):
        value.close()
