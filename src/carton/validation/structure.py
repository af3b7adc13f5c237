"""Mirror a validation failure in the shape of the data that failed."""

from __future__ import annotations

from typing import Any, Final

from carton.validation.issues import PathKey, issues_from

__all__ = ['HOLE', 'StructuredError', 'structure_error']

type StructuredError = str | dict[PathKey, Any] | list[Any]

# Widest run of unreached positions a level may have and still become a list.
_MAX_HOLES: Final = 10_000


class _Hole:
    """Marks a list position that no issue reached."""

    __slots__ = ()

    def __repr__(self) -> str:
        return '<hole>'

    def __bool__(self) -> bool:
        return False


HOLE: Final = _Hole()
"""Filler for list positions between reported indices."""


def _as_list(node: dict[PathKey, Any]) -> list[Any] | None:
    """Return node as a HOLE-padded list when every key is a usable index."""
    if not node or not all(type(key) is int and key >= 0 for key in node):
        return None
    size = max(node) + 1  # type: ignore[type-var]
    if size - len(node) > _MAX_HOLES:
        return None
    items: list[Any] = [HOLE] * size
    for index, value in node.items():
        items[index] = value  # type: ignore[index]
    return items


def _finish(node: Any) -> Any:
    if not isinstance(node, dict):
        return node
    finished = {key: _finish(value) for key, value in node.items()}
    items = _as_list(finished)
    return finished if items is None else items


def structure_error(error: Any) -> StructuredError:
    """Reshape a validation failure into a nested dict/list mirror of the data.

    When the first issue has an empty path the whole value failed and its
    message is returned as a plain string; a later issue with an empty path
    is keyed by ``''`` as in ``flatten_error``. Otherwise each issue's path is
    walked key by key and its message lands at the final key; a message or
    container sitting where a deeper issue needs to descend is replaced.

    A level becomes a list when all its keys are non-negative indices,
    with ``HOLE`` in the positions no issue reached. Levels holding string
    keys, negative integers (``dict[int, ...]`` keys) or indices too sparse
    to pad stay dicts.

    Args:
        error: Any validation failure accepted by ``issues_from``.

    Returns:
        The whole-value message, or the nested mirror.

    Example:
        ```python
        class Form(pydantic.BaseModel):
            array: list[str]

        try:
            Form.model_validate({'array': ['', '', 1]})
        except pydantic.ValidationError as exc:
            structure_error(exc)
            # {'array': [HOLE, HOLE, 'Input should be a valid string']}
        ```
    """
    issues = issues_from(error)
    if not issues[0].path:
        return issues[0].message

    root: dict[PathKey, Any] = {}
    for issue in issues:
        *parents, last = issue.path or ('',)
        target = root
        for key in parents:
            child = target.get(key)
            if not isinstance(child, dict):
                child = target[key] = {}
            target = child
        target[last] = issue.message
    return _finish(root)
