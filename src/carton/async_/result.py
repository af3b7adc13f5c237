"""AsyncResult type for async-aware Result operations.

AsyncResult wraps a Result, or an awaitable producing one, and provides
async-aware transformation methods that compose cleanly in async contexts.

Example:
    ```python
    async def fetch_user(id: int) -> Result[User, Error]:
        ...

    # Chain async operations
    result = await (
        AsyncResult(fetch_user(1))
        .and_then(validate_user)
        .map(format_response)
    )
    ```
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Coroutine, Generator
from inspect import isawaitable
from typing import TYPE_CHECKING, Any

from carton.async_._settle import Settle, discard
from carton.types.option import Nothing, Option, Some
from carton.types.result import Err, Ok, Result

if TYPE_CHECKING:
    from carton.async_.option import AsyncOption

__all__ = ['AsyncResult', 'ResultLike']

type ResultLike[T, E] = Result[T, E] | Awaitable[Result[T, E]] | AsyncResult[T, E]
"""Anything a chained step may hand back in place of a Result."""


async def _resolve[T, E](value: ResultLike[T, E]) -> Result[T, E]:
    """Normalize a step's return value to a settled Result.

    AsyncResult is itself awaitable, but it is unwrapped explicitly to its
    settle-once memo so that a wrapper shared between chains is driven
    only once.
    """
    if isinstance(value, AsyncResult):
        return await value._settle.get()
    if isawaitable(value):
        return await value
    return value


class AsyncResult[T, E]:
    """Async-aware Result wrapper for composing async Result operations.

    AsyncResult holds a settle-once memo over its source and provides
    methods for transforming and chaining async operations that produce
    Results.

    Unlike regular Result, AsyncResult methods return new AsyncResult
    instances, allowing you to build up a chain of async operations that
    only execute when awaited. Awaiting the same AsyncResult more than once
    is safe: the chain runs once and every await yields the same Result.

    Example:
        ```python
        async def get_data() -> Result[int, str]:
            return Ok(42)

        async def main():
            # Wrap and transform
            result = await AsyncResult(get_data()).map(lambda x: x * 2)
            assert result == Ok(84)

        asyncio.run(main())
        ```
    """

    __slots__ = ('_settle',)

    def __init__(self, source: Result[T, E] | Awaitable[Result[T, E]]) -> None:
        """Create an AsyncResult from a Result or an awaitable producing one.

        Args:
            source: A settled Result, or an awaitable that produces one.
        """
        self._settle: Settle[Result[T, E]] = Settle(source)

    def __await__(self) -> Generator[Any, Any, Result[T, E]]:
        """Support await syntax to get the settled Result.

        Example:
            ```python
            async def example():
                result = await AsyncResult.from_ok(42)
                assert result == Ok(42)
            ```
        """
        return self._settle.get().__await__()

    @classmethod
    def from_ok(cls, value: T) -> AsyncResult[T, E]:
        """Create an AsyncResult already settled to Ok(value)."""
        return cls(Ok(value))

    @classmethod
    def from_err(cls, error: E) -> AsyncResult[T, E]:
        """Create an AsyncResult already settled to Err(error)."""
        return cls(Err(error))

    @classmethod
    def from_result(cls, result: Result[T, E]) -> AsyncResult[T, E]:
        """Create an AsyncResult from a synchronous Result."""
        return cls(result)

    def map[U](self, f: Callable[[T], U | Awaitable[U]]) -> AsyncResult[U, E]:
        """Apply a sync or async function to the Ok value.

        If the underlying Result is Ok, applies f to the value, awaiting the
        outcome when f returns an awaitable. If Err, returns the Err
        unchanged.

        Args:
            f: Function to apply to the Ok value.

        Returns:
            New AsyncResult with the transformed value.

        Example:
            ```python
            async def example():
                result = await AsyncResult.from_ok(5).map(lambda x: x * 2)
                assert result == Ok(10)
            ```
        """

        async def _mapped() -> Result[U, E]:
            result = await self._settle.get()
            if isinstance(result, Err):
                return result
            mapped = f(result.value)
            if isawaitable(mapped):
                mapped = await mapped
            return Ok(mapped)

        return AsyncResult(_mapped())

    def map_err[F](self, f: Callable[[E], F | Awaitable[F]]) -> AsyncResult[T, F]:
        """Apply a sync or async function to the Err value.

        If the underlying Result is Err, applies f to the error.
        If Ok, returns the Ok unchanged.

        Args:
            f: Function to apply to the Err value.

        Returns:
            New AsyncResult with the transformed error.
        """

        async def _mapped() -> Result[T, F]:
            result = await self._settle.get()
            if isinstance(result, Ok):
                return result
            mapped = f(result.error)
            if isawaitable(mapped):
                mapped = await mapped
            return Err(mapped)

        return AsyncResult(_mapped())

    def and_[U](self, other: ResultLike[U, E]) -> AsyncResult[U, E]:
        """Adopt other if this settles to Ok, else propagate the Err.

        A coroutine passed as other is closed unawaited when this settles
        to Err; pass a factory to and_then to avoid creating it at all.
        """

        async def _and() -> Result[U, E]:
            result = await self._settle.get()
            if isinstance(result, Err):
                discard(other)
                return result
            return await _resolve(other)

        return AsyncResult(_and())

    def and_then[U](self, f: Callable[[T], ResultLike[U, E]]) -> AsyncResult[U, E]:
        """Chain with a function that returns a Result.

        If Ok, calls f(value). f may return a Result, an awaitable of a
        Result, or another AsyncResult; each is normalized before the chain
        continues. If Err, returns the Err unchanged without calling f.

        Args:
            f: Function that takes T and returns a Result-like value.

        Returns:
            New AsyncResult with the chained result.

        Example:
            ```python
            def validate(x: int) -> Result[int, str]:
                return Ok(x) if x > 0 else Err("not positive")

            async def example():
                result = await AsyncResult.from_ok(5).and_then(validate)
                assert result == Ok(5)
            ```
        """

        async def _chained() -> Result[U, E]:
            result = await self._settle.get()
            if isinstance(result, Err):
                return result
            return await _resolve(f(result.value))

        return AsyncResult(_chained())

    def or_[F](self, other: ResultLike[T, F]) -> AsyncResult[T, F]:
        """Keep an Ok, or adopt other when this settles to Err.

        A coroutine passed as other is closed unawaited when this settles
        to Ok. Use or_else to build the fallback only when it is needed.
        """

        async def _or() -> Result[T, F]:
            result = await self._settle.get()
            if isinstance(result, Ok):
                discard(other)
                return result
            return await _resolve(other)

        return AsyncResult(_or())

    def or_else[F](self, f: Callable[[E], ResultLike[T, F]]) -> AsyncResult[T, F]:
        """Recover from an Err with a function.

        If Err, calls f(error) and normalizes its result like and_then does.
        If Ok, returns the Ok unchanged.

        Args:
            f: Function that takes E and returns a Result-like value.

        Returns:
            New AsyncResult with the recovery result.
        """

        async def _recovered() -> Result[T, F]:
            result = await self._settle.get()
            if isinstance(result, Ok):
                return result
            return await _resolve(f(result.error))

        return AsyncResult(_recovered())

    def inspect(self, f: Callable[[T], Any]) -> AsyncResult[T, E]:
        """Call f with the Ok value for its side effect once the result settles."""

        async def _inspected() -> Result[T, E]:
            result = await self._settle.get()
            return result.inspect(f)

        return AsyncResult(_inspected())

    def inspect_err(self, f: Callable[[E], Any]) -> AsyncResult[T, E]:
        """Call f with the Err value for its side effect once the result settles."""

        async def _inspected() -> Result[T, E]:
            result = await self._settle.get()
            return result.inspect_err(f)

        return AsyncResult(_inspected())

    def ok(self) -> AsyncOption[T]:
        """Project the success channel: Ok(v) -> Some(v), Err -> Nothing."""
        from carton.async_.option import AsyncOption

        async def _ok() -> Option[T]:
            result = await self._settle.get()
            if isinstance(result, Ok):
                return Some(result.value)
            return Nothing

        return AsyncOption(_ok())

    def err(self) -> AsyncOption[E]:
        """Project the error channel: Err(e) -> Some(e), Ok -> Nothing."""
        from carton.async_.option import AsyncOption

        async def _err() -> Option[E]:
            result = await self._settle.get()
            if isinstance(result, Err):
                return Some(result.error)
            return Nothing

        return AsyncOption(_err())

    def unwrap_or(self, default: T) -> Coroutine[Any, Any, T]:
        """Unwrap with a default value.

        Returns:
            Coroutine that produces the Ok value or the default.
        """

        async def _unwrap() -> T:
            result = await self._settle.get()
            return result.unwrap_or(default)

        return _unwrap()

    def unwrap_or_else(self, f: Callable[[E], T]) -> Coroutine[Any, Any, T]:
        """Unwrap with a function to compute the default from the error.

        Returns:
            Coroutine that produces the Ok value or f(error).
        """

        async def _unwrap() -> T:
            result = await self._settle.get()
            return result.unwrap_or_else(f)

        return _unwrap()

    def __repr__(self) -> str:
        return f'AsyncResult({self._settle!r})'
