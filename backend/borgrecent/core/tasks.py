"""Bounded fan-out for borg invocations."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, List, Sequence, TypeVar

T = TypeVar("T")


async def run_bounded(factories: Sequence[Callable[[], Awaitable[T]]], limit: int) -> List[T]:
    """Await every factory's coroutine, at most ``limit`` at a time.

    Results keep the order of ``factories``. With ``limit <= 1`` the calls run
    one after another. The first failure cancels whatever is still pending
    and is re-raised.
    """
    if limit <= 1:
        return [await factory() for factory in factories]

    semaphore = asyncio.Semaphore(limit)

    async def guarded(factory: Callable[[], Awaitable[T]]) -> T:
        async with semaphore:
            return await factory()

    tasks = [asyncio.ensure_future(guarded(factory)) for factory in factories]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
