"""Errors raised by the container types."""

from __future__ import annotations

__all__ = ['UnwrapError']


class UnwrapError(RuntimeError):
    """A value was pulled out of the wrong variant.

    Raised only by the unconditional accessors (``unwrap``, ``unwrap_err``,
    ``expect``, ``expect_err``) when they are called on a ``Nothing``,
    ``Err`` or ``Ok`` that cannot satisfy them.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)
