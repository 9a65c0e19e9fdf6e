"""Bounded asyncio helpers for running many remote calls with a fixed fan-out."""
from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Iterable, List, Optional, Sequence, TypeVar

T = TypeVar("T")
R = TypeVar("R")


async def bounded_map(
    func: Callable[[T], Awaitable[R]],
    items: Iterable[T],
    limit: int,
) -> List[R]:
    """Await ``func`` over ``items`` with at most ``limit`` calls in flight.

    Results come back in input order. After the first failure no further items
    are started, calls already running are awaited, and the first failure is
    raised.
    """

    if limit < 1:
        raise ValueError("limit must be >= 1")

    pending: Sequence[T] = list(items)
    results: List[Optional[R]] = [None] * len(pending)
    cursor = iter(range(len(pending)))
    failures: List[BaseException] = []

    async def worker() -> None:
        for index in cursor:
            if failures:
                return
            try:
                results[index] = await func(pending[index])
            except Exception as exc:
                failures.append(exc)
                return

    workers = [asyncio.ensure_future(worker()) for _ in range(min(limit, len(pending)))]
    if workers:
        await asyncio.gather(*workers)
    if failures:
        raise failures[0]
    return results  # type: ignore[return-value]
