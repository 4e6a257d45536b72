"""Port for per-credential salt generation."""

from __future__ import annotations

from typing import Protocol


class SaltGeneratorPort(Protocol):
    """Salt generation contract."""

    def generate_salt(self) -> bytes:
        """Return fresh random salt bytes or raise EntropySourceError."""
