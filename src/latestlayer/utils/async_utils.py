"""
Async helpers for the resolution entry points.
"""

from __future__ import annotations

import asyncio
import functools
import inspect
from typing import Any, Awaitable, Callable, TypeVar

T = TypeVar("T")


def dual(func: Callable[..., Awaitable[T]]) -> Callable[..., T]:
    """
    Run a coroutine function to completion when called outside an event loop.

    Inside a running loop the coroutine is returned unawaited, so
    ``LatestLayerVersionPlugin.run_hook(name)`` blocks in a plain script and
    ``await plugin.run_hook(name)`` works from async code.
    """
    if not inspect.iscoroutinefunction(func):
        raise TypeError("@dual can only be applied to async def functions")

    @functools.wraps(func)
    def sync_or_async_call(*args: Any, **kwargs: Any) -> Any:
        coro = func(*args, **kwargs)
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(coro)
        return coro

    return sync_or_async_call  # type: ignore[return-value]
