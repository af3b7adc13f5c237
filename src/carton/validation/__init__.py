"""Field-level error shapes for validation failures.

    from carton.validation import flatten_error, structure_error

``flatten_error`` gives ``{'items[2].name': message}``; ``structure_error``
gives ``{'items': [HOLE, HOLE, {'name': message}]}``. Both return the bare
message when the whole value failed.
"""

from carton.validation.flatten import flatten_error, join_path
from carton.validation.issues import Issue, PathKey, ValidationReport, issues_from
from carton.validation.structure import HOLE, StructuredError, structure_error

__all__ = [
    'HOLE',
    'Issue',
    'PathKey',
    'StructuredError',
    'ValidationReport',
    'flatten_error',
    'issues_from',
    'join_path',
    'structure_error',
]
