"""Port for peppered credential digest derivation and verification."""

from __future__ import annotations

from typing import Protocol

from credential_core.domain.kdf_parameters import KdfParameters


class CredentialHasherPort(Protocol):
    """Credential hashing/verification contract."""

    @property
    def current_version(self) -> int:
        """Return the version label recorded with new digests."""

    @property
    def current_parameters(self) -> KdfParameters:
        """Return the parameter set used for new digests."""

    def derive(self, password: str | bytes, salt: bytes) -> bytes:
        """Derive digest bytes for storage under the current parameters."""

    def verify(
        self,
        *,
        password: str | bytes,
        salt: bytes,
        digest: bytes,
        parameters: KdfParameters,
    ) -> bool:
        """Verify candidate password against stored salt, digest and parameters."""
