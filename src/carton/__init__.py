"""carton: explicit Option and Result containers for Python 3.13+.

Immutable two-variant containers with sync and async composition, plus
helpers that turn validation failures into field-level error shapes.

Flat imports (preferred):
    from carton import Option, Some, Nothing, Result, Ok, Err
    from carton import AsyncOption, AsyncResult
    from carton import flatten_error, structure_error

Submodule imports (for organization):
    from carton.types import Option, Result
    from carton.async_ import AsyncOption, AsyncResult
    from carton.validation import Issue, HOLE
"""

from carton._config import CartonConfig, get_config, init

# Async
from carton.async_ import AsyncOption, AsyncResult

# Errors
from carton.errors import UnwrapError

# Types
from carton.types import (
    Err,
    Nothing,
    NothingType,
    Ok,
    Option,
    Result,
    Some,
    collect,
    from_nullable,
)

# Validation
from carton.validation import HOLE, Issue, flatten_error, structure_error

__all__ = [
    'HOLE',
    # Async
    'AsyncOption',
    'AsyncResult',
    # Config
    'CartonConfig',
    # Result types
    'Err',
    # Validation
    'Issue',
    # Option types
    'Nothing',
    'NothingType',
    'Ok',
    'Option',
    'Result',
    'Some',
    # Errors
    'UnwrapError',
    'collect',
    'flatten_error',
    'from_nullable',
    'get_config',
    'init',
    'structure_error',
]
