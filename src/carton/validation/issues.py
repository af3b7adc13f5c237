"""Validation issues: the input shared by flatten_error and structure_error.

A validation failure is reduced to an ordered tuple of Issue structs, one per
failing location, in the order the validator reported them. Three sources
are understood:

* anything exposing an ``issues`` sequence whose items carry ``path`` and
  ``message`` (as attributes or mapping keys), a mapping holding such a
  sequence under ``issues``, or the sequence itself;
* ``pydantic.ValidationError`` (``loc`` becomes the path, ``msg`` the message);
* ``msgspec.ValidationError``, which reports a single issue with its location
  as a JSON path suffix (`` - at `$.items[2]` ``).
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

import msgspec
import pydantic

__all__ = ['Issue', 'PathKey', 'ValidationReport', 'issues_from']

type PathKey = str | int


class Issue(msgspec.Struct, frozen=True, gc=False):
    """One failing location: the path into the validated data and its message."""

    path: tuple[PathKey, ...]
    message: str


@runtime_checkable
class ValidationReport(Protocol):
    """Anything that lists its issues in detection order."""

    @property
    def issues(self) -> Sequence[Any]: ...


_MSGSPEC_LOCATION = re.compile(r'^(?P<message>.*) - at `\$(?P<path>[^`]*)`$', re.DOTALL)
_MSGSPEC_SEGMENT = re.compile(r'\.(?P<name>[^.\[]+)|\[(?P<index>\d+)\]|\[(?P<other>[^\]]*)\]')


def _normalize_key(key: Any) -> PathKey:
    if isinstance(key, (str, int)):
        return key
    return str(key)


def _field(item: Any, name: str) -> Any:
    if isinstance(item, Mapping):
        return item[name]
    return getattr(item, name)


def _coerce(item: Any) -> Issue:
    if isinstance(item, Issue):
        return item
    try:
        path = _field(item, 'path')
        message = _field(item, 'message')
    except (KeyError, AttributeError) as exc:
        msg = f'issue must carry a path and a message, got {item!r}'
        raise TypeError(msg) from exc
    return Issue(path=tuple(_normalize_key(key) for key in path), message=str(message))


def _from_pydantic(error: pydantic.ValidationError) -> list[Issue]:
    return [
        Issue(path=tuple(_normalize_key(key) for key in detail['loc']), message=detail['msg'])
        for detail in error.errors()
    ]


def _parse_msgspec_path(path: str) -> tuple[PathKey, ...]:
    keys: list[PathKey] = []
    for match in _MSGSPEC_SEGMENT.finditer(path):
        if match['name'] is not None:
            keys.append(match['name'])
        elif match['index'] is not None:
            keys.append(int(match['index']))
        else:
            keys.append(match['other'])
    return tuple(keys)


def _from_msgspec(error: msgspec.ValidationError) -> list[Issue]:
    text = str(error)
    match = _MSGSPEC_LOCATION.match(text)
    if match is None:
        return [Issue(path=(), message=text)]
    return [Issue(path=_parse_msgspec_path(match['path']), message=match['message'])]


def issues_from(error: Any) -> tuple[Issue, ...]:
    """Read the ordered issue list out of a validation failure.

    Args:
        error: A pydantic or msgspec ValidationError, an object exposing
            ``issues``, a mapping with an ``issues`` key (a serialized
            report), or a sequence of issue-like items.

    Returns:
        The issues in the order the validator reported them.

    Raises:
        TypeError: If the error is not a form this function understands.
        ValueError: If the failure carries no issues.
    """
    if isinstance(error, pydantic.ValidationError):
        issues = _from_pydantic(error)
    elif isinstance(error, msgspec.ValidationError):
        issues = _from_msgspec(error)
    elif isinstance(error, ValidationReport):
        issues = [_coerce(item) for item in error.issues]
    elif isinstance(error, Mapping) and 'issues' in error:
        issues = [_coerce(item) for item in error['issues']]
    elif isinstance(error, Sequence) and not isinstance(error, (str, bytes)):
        issues = [_coerce(item) for item in error]
    else:
        msg = f'cannot read validation issues from {type(error).__name__}'
        raise TypeError(msg)

    if not issues:
        msg = 'validation failure carries no issues'
        raise ValueError(msg)
    return tuple(issues)
