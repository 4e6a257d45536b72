"""SQLAlchemy adapter for credential record persistence."""

from __future__ import annotations

from datetime import datetime
from typing import Any, cast

import sqlalchemy as sa
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from credential_core.application.ports.user_store_port import UserStorePort
from credential_core.domain.credentials import CredentialRecord
from credential_core.domain.errors import DuplicateUserError, NotFoundError
from credential_core.domain.kdf_parameters import KdfParameters
from credential_core.infrastructure.db.metadata import credentials


class SqlAlchemyUserStore(UserStorePort):
    """User store backed by SQLAlchemy async sessions."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def save(self, record: CredentialRecord) -> None:
        """Insert one credential row; salt, digest and parameters land in the same row."""

        statement = sa.insert(credentials).values(
            user_id=record.user_id,
            **_credential_values(record),
        )

        async with self._session_factory() as session:
            try:
                await session.execute(statement)
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()
                raise DuplicateUserError(user_id=record.user_id) from exc

    async def load(self, *, user_id: str) -> CredentialRecord:
        """Return credential row by user id or raise NotFoundError."""

        statement = sa.select(
            credentials.c.user_id,
            credentials.c.salt,
            credentials.c.digest,
            credentials.c.parameters_version,
            credentials.c.time_cost,
            credentials.c.memory_cost,
            credentials.c.parallelism,
            credentials.c.output_len,
            credentials.c.created_at,
        ).where(credentials.c.user_id == user_id).limit(1)

        async with self._session_factory() as session:
            result = await session.execute(statement)

        row = result.mappings().first()
        if row is None:
            raise NotFoundError(user_id=user_id)
        return _to_credential_record(row)

    async def replace(self, record: CredentialRecord) -> None:
        """Overwrite salt, digest and parameters of an existing row in one update."""

        statement = (
            sa.update(credentials)
            .where(credentials.c.user_id == record.user_id)
            .values(
                **_credential_values(record),
                updated_at=sa.func.current_timestamp(),
            )
        )

        async with self._session_factory() as session:
            result = await session.execute(statement)
            if result.rowcount == 0:
                await session.rollback()
                raise NotFoundError(user_id=record.user_id)
            await session.commit()


def _credential_values(record: CredentialRecord) -> dict[str, Any]:
    parameters = record.parameters
    return {
        "salt": record.salt,
        "digest": record.digest,
        "parameters_version": record.parameters_version,
        "time_cost": parameters.time_cost,
        "memory_cost": parameters.memory_cost,
        "parallelism": parameters.parallelism,
        "output_len": parameters.output_len,
    }


def _to_credential_record(row: sa.RowMapping) -> CredentialRecord:
    return CredentialRecord(
        user_id=cast(str, row["user_id"]),
        salt=bytes(row["salt"]),
        digest=bytes(row["digest"]),
        parameters_version=int(row["parameters_version"]),
        parameters=KdfParameters(
            time_cost=int(row["time_cost"]),
            memory_cost=int(row["memory_cost"]),
            parallelism=int(row["parallelism"]),
            output_len=int(row["output_len"]),
        ),
        created_at=cast(datetime, row["created_at"]),
    )
