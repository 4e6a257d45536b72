"""Credential value types and shared normalization helpers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from credential_core.domain.kdf_parameters import (
    DEFAULT_KDF_PARAMETERS,
    DEFAULT_PARAMETERS_VERSION,
    KdfParameters,
)

SALT_LENGTH = 16
DIGEST_LENGTH = 32

Salt = bytes
Digest = bytes


@dataclass(frozen=True)
class CredentialRecord:
    """Persisted credential: one user id bound to its salt and digest.

    Salt and digest are only meaningful together and are always saved and
    loaded as one record. ``parameters`` holds the exact Argon2id cost the
    digest was derived with, so it stays verifiable after the configured
    cost changes; ``parameters_version`` is an operator-facing label.
    """

    user_id: str
    salt: Salt
    digest: Digest
    parameters_version: int = DEFAULT_PARAMETERS_VERSION
    parameters: KdfParameters = DEFAULT_KDF_PARAMETERS
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        if len(self.salt) != SALT_LENGTH:
            raise ValueError(f"salt must be {SALT_LENGTH} bytes")
        if not self.digest:
            raise ValueError("digest cannot be empty")

    def __repr__(self) -> str:
        return (
            f"CredentialRecord(user_id={self.user_id!r}, "
            f"parameters_version={self.parameters_version!r}, "
            f"parameters={self.parameters!r}, "
            f"created_at={self.created_at!r})"
        )


def normalize_user_id(*, user_id: str) -> str:
    """Normalize one user identifier and reject blank values."""

    normalized = user_id.strip()
    if not normalized:
        raise ValueError("user_id cannot be blank")
    return normalized


def encode_password(password: str | bytes) -> bytes:
    """Return password bytes, encoding text as UTF-8."""

    if isinstance(password, bytes):
        return password
    return password.encode("utf-8")
