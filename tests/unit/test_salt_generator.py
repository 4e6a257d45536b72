from __future__ import annotations

import pytest

from credential_core.domain.errors import EntropySourceError
from credential_core.infrastructure.security.salt_generator import SecretsSaltGenerator


def test_generate_salt_returns_16_bytes() -> None:
    salt = SecretsSaltGenerator().generate_salt()

    assert isinstance(salt, bytes)
    assert len(salt) == 16


def test_generate_salt_has_no_collisions_across_many_draws() -> None:
    generator = SecretsSaltGenerator()

    salts = {generator.generate_salt() for _ in range(10_000)}

    assert len(salts) == 10_000


def test_random_source_failure_raises_entropy_source_error() -> None:
    def _failing_source(length: int) -> bytes:
        raise OSError("getrandom unavailable")

    generator = SecretsSaltGenerator(random_source=_failing_source)

    with pytest.raises(EntropySourceError):
        generator.generate_salt()


def test_short_read_raises_entropy_source_error() -> None:
    generator = SecretsSaltGenerator(random_source=lambda length: b"\x00" * (length - 1))

    with pytest.raises(EntropySourceError):
        generator.generate_salt()
