"""Internal async helpers shared by async modules."""

from __future__ import annotations

import asyncio
import inspect
from typing import Any, Callable, Optional


async def _maybe_await(value: Any) -> Any:
    """Await awaitables and return non-awaitable values unchanged."""
    if inspect.isawaitable(value):
        return await value
    return value


async def _run_blocking(fn: Callable[..., Any], *args: Any) -> Any:
    """Call `fn` without blocking the event loop.

    Coroutine functions are awaited in place; plain DB-API callables run on a
    worker thread.
    """
    if inspect.iscoroutinefunction(fn):
        return await fn(*args)
    return await _maybe_await(await asyncio.to_thread(fn, *args))


def _raise_if_cancelled(cancellation: Optional[asyncio.Event]) -> None:
    """Raise `asyncio.CancelledError` when the caller signalled cancellation."""
    if cancellation is not None and cancellation.is_set():
        raise asyncio.CancelledError("operation cancelled by caller")
