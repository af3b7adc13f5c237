"""Flatten a validation failure into a single-level path -> message mapping."""

from __future__ import annotations

from typing import Any

from carton.validation.issues import PathKey, issues_from

__all__ = ['flatten_error', 'join_path']


def join_path(path: tuple[PathKey, ...]) -> str:
    """Join path keys into a form-field style string.

    The first key is emitted as-is (``name``) or as ``[i]``; every later key
    is appended as ``.name`` or ``[i]``, with no separator before a bracket.

    Examples:
        >>> join_path(('array', 2))
        'array[2]'
        >>> join_path((0, 'name'))
        '[0].name'
        >>> join_path((0, 2))
        '[0][2]'
    """
    parts: list[str] = []
    for key in path:
        if isinstance(key, int):
            parts.append(f'[{key}]')
        elif parts:
            parts.append(f'.{key}')
        else:
            parts.append(key)
    return ''.join(parts)


def flatten_error(error: Any) -> str | dict[str, str]:
    """Reshape a validation failure into ``{joined_path: message}``.

    When the first issue has an empty path the whole value failed and its
    message is returned as a plain string. Otherwise every issue becomes one
    entry keyed by its joined path; a later issue with the same joined path
    replaces an earlier one.

    Args:
        error: Any validation failure accepted by ``issues_from``.

    Returns:
        The whole-value message, or the flat mapping.

    Example:
        ```python
        adapter = pydantic.TypeAdapter(list[str])
        try:
            adapter.validate_python([1, '', True])
        except pydantic.ValidationError as exc:
            flatten_error(exc)
            # {'[0]': 'Input should be a valid string',
            #  '[2]': 'Input should be a valid string'}
        ```
    """
    issues = issues_from(error)
    if not issues[0].path:
        return issues[0].message

    errors: dict[str, str] = {}
    for issue in issues:
        errors[join_path(issue.path)] = issue.message
    return errors
