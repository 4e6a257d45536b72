from __future__ import annotations

import asyncio
import threading
import time

import pytest

from credential_core.application.services.derivation_limiter import DerivationLimiter


class ConcurrencyTracker:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.active = 0
        self.peak = 0

    def work(self, value: int, *, delay: float) -> int:
        with self._lock:
            self.active += 1
            self.peak = max(self.peak, self.active)
        time.sleep(delay)
        with self._lock:
            self.active -= 1
        return value * 2


@pytest.mark.asyncio
async def test_limiter_caps_concurrent_calls() -> None:
    limiter = DerivationLimiter(limit=2)
    tracker = ConcurrencyTracker()

    results = await asyncio.gather(
        *(limiter.run(tracker.work, value, delay=0.02) for value in range(8))
    )

    assert results == [value * 2 for value in range(8)]
    assert tracker.peak <= 2


@pytest.mark.asyncio
async def test_limiter_propagates_errors() -> None:
    def _boom() -> None:
        raise RuntimeError("kdf failed")

    with pytest.raises(RuntimeError):
        await DerivationLimiter(limit=1).run(_boom)


def test_limiter_defaults_to_cpu_count(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("os.cpu_count", lambda: 6)

    assert DerivationLimiter().limit == 6


def test_limiter_rejects_non_positive_limit() -> None:
    with pytest.raises(ValueError):
        DerivationLimiter(limit=0)
