"""Alembic environment for the credentials schema."""

from __future__ import annotations

import asyncio
from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context
from credential_core.config.settings import Settings
from credential_core.infrastructure.db.metadata import metadata

config = context.config

_INI_DEFAULT_URL = "sqlite:///./credentials.db"

# An explicitly configured URL wins; the ini placeholder defers to DATABASE_URL.
if config.get_main_option("sqlalchemy.url") in (None, _INI_DEFAULT_URL):
    config.set_main_option("sqlalchemy.url", Settings().database_url)

if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)


def do_run_migrations(connection: Connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=metadata,
        render_as_batch=connection.dialect.name == "sqlite",
    )
    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    connectable = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)
    await connectable.dispose()


def run_migrations() -> None:
    """Migrate through a sync engine, or an async one for +aiosqlite/+asyncpg URLs."""

    url = config.get_main_option("sqlalchemy.url") or ""
    if "+aiosqlite" in url or "+asyncpg" in url:
        asyncio.run(run_async_migrations())
        return

    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        do_run_migrations(connection)


if context.is_offline_mode():
    raise RuntimeError("offline migrations are not supported; run against a live database")
run_migrations()
