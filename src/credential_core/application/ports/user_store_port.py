"""Port for credential record persistence."""

from __future__ import annotations

from typing import Protocol

from credential_core.domain.credentials import CredentialRecord


class UserStorePort(Protocol):
    """User store contract.

    A ``CredentialRecord`` carries the (Salt, Digest) pair of one user id as a
    single unit, so ``save`` and ``load`` never move one without the other.
    """

    async def save(self, record: CredentialRecord) -> None:
        """Persist a new record or raise DuplicateUserError."""

    async def load(self, *, user_id: str) -> CredentialRecord:
        """Return the record for user_id or raise NotFoundError."""

    async def replace(self, record: CredentialRecord) -> None:
        """Swap salt, digest and parameters of an existing record or raise NotFoundError."""
