"""AsyncOption type for async-aware Option operations.

AsyncOption wraps an Option, or an awaitable producing one, and provides
transformation methods that compose in async contexts. Every method
returns a new AsyncOption immediately; the work runs when the result is
awaited.

Example:
    ```python
    async def find_user(id: int) -> Option[User]:
        ...

    name = await (
        AsyncOption(find_user(1))
        .and_then(load_profile)
        .map(lambda profile: profile.name)
        .unwrap_or('anonymous')
    )
    ```
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Coroutine, Generator
from inspect import isawaitable
from typing import Any

from carton.async_._settle import Settle, discard
from carton.async_.result import AsyncResult
from carton.types.option import NothingType, Option, Some
from carton.types.result import Err, Ok, Result

__all__ = ['AsyncOption', 'OptionLike']

type OptionLike[T] = Option[T] | Awaitable[Option[T]] | AsyncOption[T]
"""Anything a chained step may hand back in place of an Option."""


async def _resolve[T](value: OptionLike[T]) -> Option[T]:
    """Normalize a step's return value to a settled Option.

    AsyncOption is itself awaitable, but it is unwrapped explicitly to its
    settle-once memo so that a wrapper shared between chains is driven
    only once.
    """
    if isinstance(value, AsyncOption):
        return await value._settle.get()
    if isawaitable(value):
        return await value
    return value


class AsyncOption[T]:
    """Async-aware Option wrapper for composing async Option operations.

    AsyncOption owns a settle-once memo over its source. Awaiting the same
    AsyncOption several times yields the same Option and runs the steps
    of the chain only once.

    Example:
        ```python
        async def main():
            option = await Some(5).to_async().map(lambda x: x * 2)
            assert option == Some(10)
        ```
    """

    __slots__ = ('_settle',)

    def __init__(self, source: Option[T] | Awaitable[Option[T]]) -> None:
        """Create an AsyncOption from an Option or an awaitable producing one.

        Args:
            source: A settled Option, or an awaitable that produces one.
        """
        self._settle: Settle[Option[T]] = Settle(source)

    def __await__(self) -> Generator[Any, Any, Option[T]]:
        """Support await syntax to get the settled Option."""
        return self._settle.get().__await__()

    def and_[U](self, other: OptionLike[U]) -> AsyncOption[U]:
        """Adopt other if this settles to Some, else propagate Nothing.

        A coroutine passed as other is closed unawaited when this settles
        to Nothing; pass a factory to and_then to avoid creating it at all.
        """

        async def _and() -> Option[U]:
            option = await self._settle.get()
            if isinstance(option, NothingType):
                discard(other)
                return option
            return await _resolve(other)

        return AsyncOption(_and())

    def and_then[U](self, f: Callable[[T], OptionLike[U]]) -> AsyncOption[U]:
        """Chain with a function returning an Option.

        If Some, calls f(value). f may return an Option, an awaitable of an
        Option, or another AsyncOption; each is normalized before the chain
        continues. If Nothing, f is never called.

        Args:
            f: Function that takes T and returns an Option-like value.

        Returns:
            New AsyncOption with the chained result.
        """

        async def _chained() -> Option[U]:
            option = await self._settle.get()
            if isinstance(option, NothingType):
                return option
            return await _resolve(f(option.value))

        return AsyncOption(_chained())

    def or_[U](self, other: OptionLike[U]) -> AsyncOption[T | U]:
        """Keep a Some, or adopt other when this settles to Nothing.

        A coroutine passed as other is closed unawaited when this settles
        to Some. Use or_else to build the fallback only when it is needed.
        """

        async def _or() -> Option[T | U]:
            option = await self._settle.get()
            if isinstance(option, Some):
                discard(other)
                return option
            return await _resolve(other)

        return AsyncOption(_or())

    def or_else[U](self, f: Callable[[], OptionLike[U]]) -> AsyncOption[T | U]:
        """Recover from Nothing with a function.

        If Nothing, calls f() and normalizes its result like and_then does.
        If Some, the Option passes through unchanged and f is not called.

        Args:
            f: Function returning an Option-like fallback.

        Returns:
            New AsyncOption with the recovery result.
        """

        async def _recovered() -> Option[T | U]:
            option = await self._settle.get()
            if isinstance(option, Some):
                return option
            return await _resolve(f())

        return AsyncOption(_recovered())

    def map[U](self, f: Callable[[T], U | Awaitable[U]]) -> AsyncOption[U]:
        """Apply a sync or async function to the Some value.

        If f returns an awaitable it is awaited before wrapping in Some.

        Example:
            ```python
            async def double(x: int) -> int:
                return x * 2

            async def example():
                assert await Some(5).to_async().map(double) == Some(10)
            ```
        """

        async def _mapped() -> Option[U]:
            option = await self._settle.get()
            if isinstance(option, NothingType):
                return option
            mapped = f(option.value)
            if isawaitable(mapped):
                mapped = await mapped
            return Some(mapped)

        return AsyncOption(_mapped())

    def filter(self, predicate: Callable[[T], bool]) -> AsyncOption[T]:
        """Keep the Some value only when predicate(value) is True."""

        async def _filtered() -> Option[T]:
            option = await self._settle.get()
            return option.filter(predicate)

        return AsyncOption(_filtered())

    def inspect(self, f: Callable[[T], Any]) -> AsyncOption[T]:
        """Call f with the Some value for its side effect once the option settles."""

        async def _inspected() -> Option[T]:
            option = await self._settle.get()
            return option.inspect(f)

        return AsyncOption(_inspected())

    def ok_or[E](self, error: E) -> AsyncResult[T, E]:
        """Convert to an AsyncResult: Some(v) -> Ok(v), Nothing -> Err(error)."""

        async def _converted() -> Result[T, E]:
            option = await self._settle.get()
            if isinstance(option, Some):
                return Ok(option.value)
            return Err(error)

        return AsyncResult(_converted())

    def ok_or_else[E](self, f: Callable[[], E]) -> AsyncResult[T, E]:
        """Convert to an AsyncResult, computing the error only for Nothing."""

        async def _converted() -> Result[T, E]:
            option = await self._settle.get()
            if isinstance(option, Some):
                return Ok(option.value)
            return Err(f())

        return AsyncResult(_converted())

    def unwrap_or(self, default: T) -> Coroutine[Any, Any, T]:
        """Unwrap with a default value.

        Returns:
            Coroutine that produces the Some value or the default.
        """

        async def _unwrap() -> T:
            option = await self._settle.get()
            return option.unwrap_or(default)

        return _unwrap()

    def unwrap_or_else(self, f: Callable[[], T]) -> Coroutine[Any, Any, T]:
        """Unwrap with a function computing the default.

        Returns:
            Coroutine that produces the Some value or f().
        """

        async def _unwrap() -> T:
            option = await self._settle.get()
            return option.unwrap_or_else(f)

        return _unwrap()

    def __repr__(self) -> str:
        return f'AsyncOption({self._settle!r})'

