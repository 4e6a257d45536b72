"""In-memory user store for tests and local demos."""

from __future__ import annotations

import asyncio
from dataclasses import replace
from datetime import UTC, datetime

from credential_core.application.ports.user_store_port import UserStorePort
from credential_core.domain.credentials import CredentialRecord
from credential_core.domain.errors import DuplicateUserError, NotFoundError


class InMemoryUserStore(UserStorePort):
    """User store holding credential records in a dict keyed by user id."""

    def __init__(self) -> None:
        self._records: dict[str, CredentialRecord] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._records)

    async def save(self, record: CredentialRecord) -> None:
        async with self._lock:
            if record.user_id in self._records:
                raise DuplicateUserError(user_id=record.user_id)
            self._records[record.user_id] = _stamped(record)

    async def load(self, *, user_id: str) -> CredentialRecord:
        try:
            return self._records[user_id]
        except KeyError:
            raise NotFoundError(user_id=user_id) from None

    async def replace(self, record: CredentialRecord) -> None:
        async with self._lock:
            if record.user_id not in self._records:
                raise NotFoundError(user_id=record.user_id)
            self._records[record.user_id] = _stamped(record)


def _stamped(record: CredentialRecord) -> CredentialRecord:
    if record.created_at is not None:
        return record
    return replace(record, created_at=datetime.now(tz=UTC))
