"""Cryptographically secure salt generator adapter."""

from __future__ import annotations

import secrets
from collections.abc import Callable

from credential_core.application.ports.salt_generator_port import SaltGeneratorPort
from credential_core.domain.credentials import SALT_LENGTH
from credential_core.domain.errors import EntropySourceError

RandomSource = Callable[[int], bytes]


class SecretsSaltGenerator(SaltGeneratorPort):
    """Salt generator backed by the operating system CSPRNG via ``secrets``."""

    def __init__(
        self,
        *,
        length: int = SALT_LENGTH,
        random_source: RandomSource = secrets.token_bytes,
    ) -> None:
        self._length = length
        self._random_source = random_source

    def generate_salt(self) -> bytes:
        try:
            salt = self._random_source(self._length)
        except (OSError, NotImplementedError) as exc:
            raise EntropySourceError("secure random source unavailable") from exc

        if len(salt) != self._length:
            raise EntropySourceError(
                f"secure random source returned {len(salt)} of {self._length} bytes"
            )
        return salt
