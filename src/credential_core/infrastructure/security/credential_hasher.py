"""Argon2id credential hasher adapter with a process-wide pepper."""

from __future__ import annotations

import hmac
import logging

from argon2.exceptions import HashingError
from argon2.low_level import Type, hash_secret_raw

from credential_core.application.ports.credential_hasher_port import CredentialHasherPort
from credential_core.domain.credentials import encode_password
from credential_core.domain.errors import KdfParameterError, PepperSourceError
from credential_core.domain.kdf_parameters import (
    DEFAULT_KDF_PARAMETERS,
    DEFAULT_PARAMETERS_VERSION,
    KdfParameters,
)

logger = logging.getLogger(__name__)


def derive_digest(
    password: bytes,
    pepper: bytes,
    salt: bytes,
    parameters: KdfParameters = DEFAULT_KDF_PARAMETERS,
) -> bytes:
    """Derive the Argon2id digest of ``password || pepper`` under ``salt``."""

    try:
        return hash_secret_raw(
            secret=password + pepper,
            salt=salt,
            time_cost=parameters.time_cost,
            memory_cost=parameters.memory_cost,
            parallelism=parameters.parallelism,
            hash_len=parameters.output_len,
            type=Type.ID,
        )
    except HashingError as exc:
        raise KdfParameterError(f"argon2 rejected parameters: {parameters}") from exc


def constant_time_equals(left: bytes, right: bytes) -> bool:
    """Compare two byte strings without early exit on position or length."""

    lengths_match = len(left) == len(right)
    # On a length mismatch compare left against itself so the work stays the same.
    comparand = right if lengths_match else left
    return hmac.compare_digest(left, comparand) & lengths_match


def verify_digest(
    candidate_password: bytes,
    pepper: bytes,
    stored_salt: bytes,
    stored_digest: bytes,
    parameters: KdfParameters = DEFAULT_KDF_PARAMETERS,
) -> bool:
    """Return whether the candidate derives exactly ``stored_digest``."""

    derived = derive_digest(candidate_password, pepper, stored_salt, parameters)
    return constant_time_equals(derived, stored_digest)


class Argon2idCredentialHasher(CredentialHasherPort):
    """Credential hasher using Argon2id over password and an injected pepper.

    New digests use the configured parameters; verification uses whatever
    parameters the stored record carries.
    """

    def __init__(
        self,
        *,
        pepper: bytes,
        parameters: KdfParameters = DEFAULT_KDF_PARAMETERS,
        parameters_version: int = DEFAULT_PARAMETERS_VERSION,
    ) -> None:
        if not pepper:
            raise PepperSourceError("pepper cannot be empty")
        if parameters_version < 1:
            raise KdfParameterError("parameters version must be >= 1")
        parameters.validate()

        self._pepper = bytes(pepper)
        self._parameters = parameters
        self._parameters_version = parameters_version

    def __repr__(self) -> str:
        return (
            f"Argon2idCredentialHasher(pepper=<redacted>, "
            f"parameters={self._parameters!r}, "
            f"parameters_version={self._parameters_version!r})"
        )

    @property
    def current_version(self) -> int:
        return self._parameters_version

    @property
    def current_parameters(self) -> KdfParameters:
        return self._parameters

    def derive(self, password: str | bytes, salt: bytes) -> bytes:
        return derive_digest(encode_password(password), self._pepper, salt, self._parameters)

    def verify(
        self,
        *,
        password: str | bytes,
        salt: bytes,
        digest: bytes,
        parameters: KdfParameters,
    ) -> bool:
        try:
            parameters.validate()
        except KdfParameterError:
            logger.warning("verify_invalid_stored_parameters parameters=%s", parameters)
            return False

        return verify_digest(
            encode_password(password),
            self._pepper,
            salt,
            digest,
            parameters,
        )
