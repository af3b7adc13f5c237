"""Result type: Ok[T] | Err[E] for explicit error handling."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any, NoReturn, TypeIs

import msgspec

from carton.errors import UnwrapError
from carton.types._describe import describe

if TYPE_CHECKING:
    from carton.async_.result import AsyncResult
    from carton.types.option import NothingType, Some

__all__ = ['Err', 'Ok', 'Result', 'collect']


class Ok[T](msgspec.Struct, frozen=True, gc=False):
    """Success variant of Result containing a value of type T.

    Ok represents the successful outcome of an operation. It wraps a value
    that can be extracted, transformed, or propagated through a chain of
    Result-returning operations.

    Examples:
        >>> ok = Ok(42)
        >>> ok.unwrap()
        42
        >>> str(ok.map(lambda x: x * 2))
        'Ok(84)'
    """

    value: T

    def is_ok(self) -> TypeIs[Ok[T]]:
        """Return True if the result is Ok.

        This method provides type narrowing - after checking is_ok(),
        the type checker knows the result is Ok[T].
        """
        return True

    def is_err(self) -> TypeIs[Err[Any]]:
        """Return False since this is Ok."""
        return False

    def is_ok_and(self, pred: Callable[[T], bool]) -> bool:
        """Test the contained value against a predicate."""
        return pred(self.value)

    def is_err_and(self, _pred: Callable[[Any], bool]) -> bool:
        """Return False without calling the predicate."""
        return False

    def and_[U, E](self, other: Ok[U] | Err[E]) -> Ok[U] | Err[E]:
        """Return other since self is Ok."""
        return other

    def and_then[U, E](self, f: Callable[[T], Ok[U] | Err[E]]) -> Ok[U] | Err[E]:
        """Chain a computation that may fail.

        Args:
            f: A callable that takes the value and returns a Result.

        Returns:
            The Result returned by f.
        """
        return f(self.value)

    def or_(self, _other: Ok[T] | Err[Any]) -> Ok[T]:
        """Return self unchanged since this is Ok."""
        return self

    def or_else(self, _f: Callable[[Any], Ok[T] | Err[Any]]) -> Ok[T]:
        """Return self unchanged since this is Ok."""
        return self

    def map[U](self, f: Callable[[T], U]) -> Ok[U]:
        """Apply a function to the contained value.

        Args:
            f: Function to apply to the Ok value.

        Returns:
            Ok containing the result of applying f to the value.
        """
        return Ok(f(self.value))

    def map_err(self, _f: Callable[[Any], Any]) -> Ok[T]:
        """Return self unchanged since there's no error to map."""
        return self

    def map_or[U](self, _default: U, f: Callable[[T], U]) -> U:
        """Apply f to the contained value, ignoring the default."""
        return f(self.value)

    def map_or_else[U](self, _default: Callable[[Any], U], f: Callable[[T], U]) -> U:
        """Apply f to the contained value, ignoring the default factory."""
        return f(self.value)

    def expect(self, _msg: str) -> T:
        """Return the contained Ok value, ignoring the message."""
        return self.value

    def expect_err(self, msg: str) -> NoReturn:
        """Raise since an Ok holds no error.

        Raises:
            UnwrapError: Always, with the custom message.
        """
        raise UnwrapError(msg)

    def inspect(self, f: Callable[[T], Any]) -> Ok[T]:
        """Call f with the contained value for its side effect and return self."""
        f(self.value)
        return self

    def inspect_err(self, _f: Callable[[Any], Any]) -> Ok[T]:
        """Return self without calling f."""
        return self

    def unwrap(self) -> T:
        """Return the contained Ok value.

        Since this is Ok, this always succeeds.
        """
        return self.value

    def unwrap_err(self) -> NoReturn:
        """Raise since an Ok holds no error.

        Raises:
            UnwrapError: Always.
        """
        raise UnwrapError('Tried to unwrap Ok')

    def unwrap_or(self, _default: T) -> T:
        """Return the contained Ok value, ignoring the default."""
        return self.value

    def unwrap_or_else(self, _f: Callable[[Any], T]) -> T:
        """Return the contained Ok value, ignoring the fallback function."""
        return self.value

    def ok(self) -> Some[T]:
        """Return the success channel as Some(value)."""
        from carton.types.option import Some

        return Some(self.value)

    def err(self) -> NothingType:
        """Return Nothing since there's no error."""
        from carton.types.option import Nothing

        return Nothing

    def to_async(self) -> AsyncResult[T, Any]:
        """Wrap self in an already-settled AsyncResult."""
        from carton.async_.result import AsyncResult

        return AsyncResult(self)

    def __str__(self) -> str:
        return f'Ok({describe(self.value)})'


class Err[E](msgspec.Struct, frozen=True, gc=False):
    """Error variant of Result containing an error of type E.

    The error is an opaque value of the caller's choosing: an exception,
    a string, a struct. Every operation that does not target the error
    channel hands back this same instance, so the error object is
    preserved by identity through a chain.

    Examples:
        >>> err = Err('boom')
        >>> err.unwrap_or(0)
        0
        >>> err.map(lambda x: x * 2) is err
        True
    """

    error: E

    def is_ok(self) -> TypeIs[Ok[Any]]:
        """Return False since this is Err."""
        return False

    def is_err(self) -> TypeIs[Err[E]]:
        """Return True if the result is Err.

        This method provides type narrowing - after checking is_err(),
        the type checker knows the result is Err[E].
        """
        return True

    def is_ok_and(self, _pred: Callable[[Any], bool]) -> bool:
        """Return False without calling the predicate."""
        return False

    def is_err_and(self, pred: Callable[[E], bool]) -> bool:
        """Test the contained error against a predicate."""
        return pred(self.error)

    def and_(self, _other: Ok[Any] | Err[E]) -> Err[E]:
        """Return self unchanged since this is Err."""
        return self

    def and_then(self, _f: Callable[[Any], Ok[Any] | Err[E]]) -> Err[E]:
        """Return self unchanged without calling f."""
        return self

    def or_[T, F](self, other: Ok[T] | Err[F]) -> Ok[T] | Err[F]:
        """Return other since self is Err."""
        return other

    def or_else[T, F](self, f: Callable[[E], Ok[T] | Err[F]]) -> Ok[T] | Err[F]:
        """Recover from the error.

        Args:
            f: A callable that takes the error and returns a Result.

        Returns:
            The Result returned by f.
        """
        return f(self.error)

    def map(self, _f: Callable[[Any], Any]) -> Err[E]:
        """Return self unchanged since there's no value to map."""
        return self

    def map_err[F](self, f: Callable[[E], F]) -> Err[F]:
        """Apply a function to the contained error.

        Args:
            f: Function to apply to the error.

        Returns:
            Err containing the result of applying f to the error.
        """
        return Err(f(self.error))

    def map_or[U](self, default: U, _f: Callable[[Any], U]) -> U:
        """Return the default since there's no value to map."""
        return default

    def map_or_else[U](self, default: Callable[[E], U], _f: Callable[[Any], U]) -> U:
        """Compute the default from the error."""
        return default(self.error)

    def expect(self, msg: str) -> NoReturn:
        """Raise with a custom message.

        When the contained error is an exception it becomes the cause of
        the raised UnwrapError.

        Raises:
            UnwrapError: Always, with the custom message.
        """
        if isinstance(self.error, BaseException):
            raise UnwrapError(msg) from self.error
        raise UnwrapError(msg)

    def expect_err(self, _msg: str) -> E:
        """Return the contained error, ignoring the message."""
        return self.error

    def inspect(self, _f: Callable[[Any], Any]) -> Err[E]:
        """Return self without calling f."""
        return self

    def inspect_err(self, f: Callable[[E], Any]) -> Err[E]:
        """Call f with the contained error for its side effect and return self."""
        f(self.error)
        return self

    def unwrap(self) -> NoReturn:
        """Raise since an Err holds no value.

        Raises:
            UnwrapError: Always, chained to the error when it is an exception.
        """
        if isinstance(self.error, BaseException):
            raise UnwrapError('Tried to unwrap Err') from self.error
        raise UnwrapError('Tried to unwrap Err')

    def unwrap_err(self) -> E:
        """Return the contained error."""
        return self.error

    def unwrap_or[T](self, default: T) -> T:
        """Return the default since this is Err."""
        return default

    def unwrap_or_else[T](self, f: Callable[[E], T]) -> T:
        """Compute a value from the error."""
        return f(self.error)

    def ok(self) -> NothingType:
        """Return Nothing since there's no value."""
        from carton.types.option import Nothing

        return Nothing

    def err(self) -> Some[E]:
        """Return the error channel as Some(error)."""
        from carton.types.option import Some

        return Some(self.error)

    def to_async(self) -> AsyncResult[Any, E]:
        """Wrap self in an already-settled AsyncResult."""
        from carton.async_.result import AsyncResult

        return AsyncResult(self)

    def __str__(self) -> str:
        return f'Err({describe(self.error)})'


type Result[T, E] = Ok[T] | Err[E]


def collect[T, E](results: Iterable[Result[T, E]]) -> Result[list[T], E]:
    """Collect values from an iterable of Results, short-circuiting on the first Err.

    Args:
        results: An iterable of Result instances.

    Returns:
        Ok with the list of values if all are Ok, otherwise the first Err
        encountered, unchanged.
    """
    out: list[T] = []
    for r in results:
        if isinstance(r, Err):
            return r
        out.append(r.value)
    return Ok(out)
