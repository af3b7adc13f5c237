"""Core types: Result, Ok, Err, Option, Some, Nothing."""

from carton.types.option import Nothing, NothingType, Option, Some, from_nullable
from carton.types.result import Err, Ok, Result, collect

__all__ = [
    'Err',
    'Nothing',
    'NothingType',
    'Ok',
    'Option',
    'Result',
    'Some',
    'collect',
    'from_nullable',
]
