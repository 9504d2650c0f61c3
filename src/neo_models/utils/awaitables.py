"""
Helpers for collaborators that may be synchronous or asynchronous.
"""
import asyncio
import inspect
from typing import Any, Awaitable, Iterable, List


async def maybe_await(value: Any) -> Any:
    """
    Await a value when it is awaitable, otherwise return it unchanged.

    Args:
        value: Result of a DAO, connection manager or hook call

    Returns:
        Any: The resolved value
    """
    if inspect.isawaitable(value):
        return await value
    return value


async def gather_all(awaitables: Iterable[Awaitable[Any]]) -> List[Any]:
    """
    Run awaitables concurrently, wait for every one of them and raise the
    first error in submission order.

    Args:
        awaitables: Coroutines to run

    Returns:
        List[Any]: Results in submission order

    Raises:
        BaseException: The first error raised by any awaitable
    """
    tasks = list(awaitables)
    if not tasks:
        return []
    results = await asyncio.gather(*tasks, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return results
