"""Option type: Some[T] | Nothing for optional values."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, NoReturn, TypeIs

import msgspec

from carton.errors import UnwrapError
from carton.types._describe import describe

if TYPE_CHECKING:
    from carton.async_.option import AsyncOption
    from carton.types.result import Err, Ok

__all__ = ['Nothing', 'NothingType', 'Option', 'Some', 'from_nullable']


class Some[T](msgspec.Struct, frozen=True, gc=False):
    """Some variant of Option containing a value of type T.

    Some represents the presence of a value. The value itself may be
    anything, including ``None``, ``False`` or NaN: presence is decided by
    the variant, never by the payload.

    Examples:
        >>> some = Some(42)
        >>> some.unwrap()
        42
        >>> str(some.map(lambda x: x * 2))
        'Some(84)'
        >>> Some(None).is_some()
        True
    """

    value: T

    def is_some(self) -> TypeIs[Some[T]]:
        """Return True since this is Some.

        This method provides type narrowing - after checking is_some(),
        the type checker knows the option is Some[T].
        """
        return True

    def is_none(self) -> TypeIs[NothingType]:
        """Return False since this is Some."""
        return False

    def is_some_and(self, pred: Callable[[T], bool]) -> bool:
        """Return the predicate's verdict on the contained value."""
        return pred(self.value)

    def is_none_or(self, pred: Callable[[T], bool]) -> bool:
        """Return the predicate's verdict on the contained value."""
        return pred(self.value)

    def and_[U](self, other: Some[U] | NothingType) -> Some[U] | NothingType:
        """Return other if self is Some, else return Nothing.

        Since this is Some, returns other.
        """
        return other

    def and_then[U](self, f: Callable[[T], Some[U] | NothingType]) -> Some[U] | NothingType:
        """Apply a function that returns an Option to the contained value.

        Also known as flatmap or bind.

        Args:
            f: Function that takes T and returns Option[U].

        Returns:
            The Option returned by f.
        """
        return f(self.value)

    def or_(self, _other: Some[T] | NothingType) -> Some[T]:
        """Return self unchanged since this is Some."""
        return self

    def or_else(self, _f: Callable[[], Some[T] | NothingType]) -> Some[T]:
        """Return self unchanged since this is Some."""
        return self

    def map[U](self, f: Callable[[T], U]) -> Some[U]:
        """Apply a function to the contained value.

        Args:
            f: Function to apply to the Some value.

        Returns:
            Some containing the result of applying f to the value.
        """
        return Some(f(self.value))

    def map_or[U](self, _default: U, f: Callable[[T], U]) -> U:
        """Apply f to the contained value, ignoring the default."""
        return f(self.value)

    def map_or_else[U](self, _default: Callable[[], U], f: Callable[[T], U]) -> U:
        """Apply f to the contained value, ignoring the default factory."""
        return f(self.value)

    def expect(self, _msg: str) -> T:
        """Return the contained Some value, ignoring the message."""
        return self.value

    def inspect(self, f: Callable[[T], Any]) -> Some[T]:
        """Call f with the contained value for its side effect and return self."""
        f(self.value)
        return self

    def unwrap(self) -> T:
        """Return the contained Some value.

        Since this is Some, this always succeeds.
        """
        return self.value

    def unwrap_or(self, _default: T) -> T:
        """Return the contained Some value, ignoring the default."""
        return self.value

    def unwrap_or_else(self, _f: Callable[[], T]) -> T:
        """Return the contained Some value, ignoring the fallback function."""
        return self.value

    def filter(self, predicate: Callable[[T], bool]) -> Some[T] | NothingType:
        """Return Some if the predicate is satisfied, else Nothing.

        Args:
            predicate: Function that returns True to keep the value.

        Returns:
            Some(value) if predicate(value) is True, else Nothing.
        """
        if predicate(self.value):
            return self
        return Nothing

    def ok_or[E](self, _err: E) -> Ok[T]:
        """Convert to Result, returning Ok(value).

        Args:
            _err: Ignored error value.

        Returns:
            Ok containing the value.
        """
        from carton.types.result import Ok

        return Ok(self.value)

    def ok_or_else[E](self, _f: Callable[[], E]) -> Ok[T]:
        """Convert to Result, returning Ok(value) without calling the error factory."""
        from carton.types.result import Ok

        return Ok(self.value)

    def zip[U](self, other: Some[U] | NothingType) -> Some[tuple[T, U]] | NothingType:
        """Combine two Some values into a tuple.

        If both are Some, returns Some((self.value, other.value)).
        If either is Nothing, returns Nothing.
        """
        if isinstance(other, Some):
            return Some((self.value, other.value))
        return Nothing

    def flatten[U](self: Some[Some[U] | NothingType]) -> Some[U] | NothingType:
        """Flatten a nested Option.

        Converts Option[Option[T]] into Option[T].
        """
        return self.value

    def to_async(self) -> AsyncOption[T]:
        """Wrap self in an already-settled AsyncOption."""
        from carton.async_.option import AsyncOption

        return AsyncOption(self)

    def __str__(self) -> str:
        return f'Some({describe(self.value)})'


_nothing_built = False


class NothingType(msgspec.Struct, frozen=True, gc=False):
    """Nothing variant of Option representing absence of a value.

    Nothing represents the absence of a value. Operations on Nothing
    return Nothing, the fallback, or the default, and never call the
    function meant for a present value.

    This is a singleton - use the `Nothing` constant. Constructing a
    second instance raises TypeError, and copies or unpickled values
    resolve back to `Nothing`.

    Examples:
        >>> Nothing.is_none()
        True
        >>> Nothing.unwrap_or(0)
        0
    """

    def __post_init__(self) -> None:
        if _nothing_built:
            msg = 'NothingType is a singleton; use Nothing'
            raise TypeError(msg)

    def __reduce__(self) -> str:
        return 'Nothing'

    def __copy__(self) -> NothingType:
        return self

    def __deepcopy__(self, _memo: dict[int, Any]) -> NothingType:
        return self

    def is_some(self) -> TypeIs[Some[object]]:
        """Return False since this is Nothing."""
        return False

    def is_none(self) -> TypeIs[NothingType]:
        """Return True if the option is Nothing.

        This method provides type narrowing - after checking is_none(),
        the type checker knows the option is Nothing.
        """
        return True

    def is_some_and(self, _pred: Callable[[Any], bool]) -> bool:
        """Return False without calling the predicate."""
        return False

    def is_none_or(self, _pred: Callable[[Any], bool]) -> bool:
        """Return True without calling the predicate."""
        return True

    def and_[U](self, _other: Some[U] | NothingType) -> NothingType:
        """Return Nothing since self is Nothing."""
        return self

    def and_then[T, U](self, _f: Callable[[T], Some[U] | NothingType]) -> NothingType:
        """Return Nothing since there's no value to bind."""
        return self

    def or_[T](self, other: Some[T] | NothingType) -> Some[T] | NothingType:
        """Return other since self is Nothing."""
        return other

    def or_else[T](self, f: Callable[[], Some[T] | NothingType]) -> Some[T] | NothingType:
        """Apply a recovery function since this is Nothing.

        Args:
            f: Function that returns a new Option.

        Returns:
            The Option returned by f.
        """
        return f()

    def map[T, U](self, _f: Callable[[T], U]) -> NothingType:
        """Return Nothing since there's no value to map."""
        return self

    def map_or[U](self, default: U, _f: Callable[[Any], U]) -> U:
        """Return the default since there's no value to map."""
        return default

    def map_or_else[U](self, default: Callable[[], U], _f: Callable[[Any], U]) -> U:
        """Compute and return the default since there's no value to map."""
        return default()

    def expect(self, msg: str) -> NoReturn:
        """Raise an exception with a custom message.

        Args:
            msg: Custom error message.

        Raises:
            UnwrapError: Always, with the custom message.
        """
        raise UnwrapError(msg)

    def inspect(self, _f: Callable[[Any], Any]) -> NothingType:
        """Return Nothing without calling f."""
        return self

    def unwrap(self) -> NoReturn:
        """Raise an exception since this is Nothing.

        Raises:
            UnwrapError: Always, since Nothing has no value to unwrap.
        """
        raise UnwrapError('Tried to unwrap None')

    def unwrap_or[T](self, default: T) -> T:
        """Return the default value since this is Nothing."""
        return default

    def unwrap_or_else[T](self, f: Callable[[], T]) -> T:
        """Compute and return a default value since this is Nothing."""
        return f()

    def filter(self, _predicate: Callable[[Any], bool]) -> NothingType:
        """Return Nothing since there's no value to filter."""
        return self

    def ok_or[E](self, err: E) -> Err[E]:
        """Convert to Result, returning Err(err).

        Args:
            err: The error value to wrap.

        Returns:
            Err containing the error.
        """
        from carton.types.result import Err

        return Err(err)

    def ok_or_else[E](self, f: Callable[[], E]) -> Err[E]:
        """Convert to Result, computing the error.

        Args:
            f: Function that produces the error value.

        Returns:
            Err containing the computed error.
        """
        from carton.types.result import Err

        return Err(f())

    def zip(self, _other: Some[Any] | NothingType) -> NothingType:
        """Return Nothing since self is Nothing."""
        return self

    def flatten(self) -> NothingType:
        """Return Nothing since there's nothing to flatten."""
        return self

    def to_async(self) -> AsyncOption[Any]:
        """Wrap Nothing in an already-settled AsyncOption."""
        from carton.async_.option import AsyncOption

        return AsyncOption(self)

    def __repr__(self) -> str:
        return 'Nothing'

    def __str__(self) -> str:
        return 'Nothing'


Nothing: NothingType = NothingType()
"""Singleton instance representing the absence of a value."""
_nothing_built = True


type Option[T] = Some[T] | NothingType


def from_nullable[T](x: T | None) -> Option[T]:
    """Convert a nullable value to Option.

    Args:
        x: The value that may be None.

    Returns:
        Some(x) if x is not None, otherwise Nothing.
    """
    return Some(x) if x is not None else Nothing
