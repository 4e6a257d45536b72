"""Port for reading the process-wide pepper."""

from __future__ import annotations

from typing import Protocol


class PepperSourcePort(Protocol):
    """Pepper source contract."""

    def read_pepper(self) -> bytes:
        """Return pepper bytes or raise PepperSourceError."""
