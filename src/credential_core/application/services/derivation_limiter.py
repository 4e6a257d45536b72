"""Bound on concurrent memory-hard derivations."""

from __future__ import annotations

import asyncio
import os
from collections.abc import Callable
from typing import ParamSpec, TypeVar

P = ParamSpec("P")
T = TypeVar("T")


def default_limit() -> int:
    """Return one derivation slot per available CPU."""

    return os.cpu_count() or 1


class DerivationLimiter:
    """Run blocking derivations in worker threads, at most ``limit`` at once.

    Each Argon2id call holds its full memory cost for its duration, so the
    limit caps peak memory at roughly ``limit * memory_cost``.
    """

    def __init__(self, *, limit: int | None = None) -> None:
        resolved = default_limit() if limit is None else limit
        if resolved < 1:
            raise ValueError("derivation limit must be >= 1")
        self._limit = resolved
        self._semaphore = asyncio.Semaphore(resolved)

    @property
    def limit(self) -> int:
        return self._limit

    async def run(self, func: Callable[P, T], /, *args: P.args, **kwargs: P.kwargs) -> T:
        """Wait for a free slot, then run ``func`` in a worker thread."""

        async with self._semaphore:
            return await asyncio.to_thread(func, *args, **kwargs)
