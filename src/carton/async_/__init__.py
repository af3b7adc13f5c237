"""Async wrappers: AsyncOption and AsyncResult.

Both wrap a settled container or an awaitable producing one, return new
wrappers from every chaining method, and settle at most once no matter how
many times they are awaited.

Examples:
    >>> from carton import Ok, Some
    >>>
    >>> async def main():
    ...     name = await Some('ada').to_async().map(str.title).unwrap_or('?')
    ...     total = await Ok(2).to_async().and_then(lambda x: Ok(x + 1))
"""

from carton.async_.option import AsyncOption, OptionLike
from carton.async_.result import AsyncResult, ResultLike

__all__ = [
    'AsyncOption',
    'AsyncResult',
    'OptionLike',
    'ResultLike',
]
