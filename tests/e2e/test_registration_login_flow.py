from __future__ import annotations

from pathlib import Path

import pytest
from alembic.config import Config

from alembic import command
from apps.credential_demo.main import build_credential_service, run_simulation
from credential_core.config.settings import Settings
from credential_core.domain.credentials import DIGEST_LENGTH, SALT_LENGTH
from credential_core.domain.errors import NotFoundError
from credential_core.infrastructure.db.session import (
    create_session_factory,
    dispose_session_factory,
)
from credential_core.infrastructure.db.user_store import SqlAlchemyUserStore
from credential_core.infrastructure.security.credential_hasher import verify_digest
from credential_core.infrastructure.store.memory_store import InMemoryUserStore

PEPPER = "e2e-pepper"


def _settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    monkeypatch.setenv("CREDENTIAL_PEPPER", PEPPER)
    monkeypatch.delenv("CREDENTIAL_PEPPER_FILE", raising=False)
    monkeypatch.setenv("MAX_CONCURRENT_DERIVATIONS", "2")
    return Settings(_env_file=None)


@pytest.mark.asyncio
async def test_register_verify_and_unknown_user_flow(monkeypatch: pytest.MonkeyPatch) -> None:
    store = InMemoryUserStore()
    service = build_credential_service(_settings(monkeypatch), store=store)

    await service.register(user_id="john_doe", password="my-super-secret-password-123")
    stored = await store.load(user_id="john_doe")

    assert (len(stored.salt), len(stored.digest)) == (SALT_LENGTH, DIGEST_LENGTH)
    assert verify_digest(
        b"my-super-secret-password-123",
        PEPPER.encode("utf-8"),
        stored.salt,
        stored.digest,
    )
    assert await service.authenticate(
        user_id="john_doe",
        password="my-super-secret-password-123",
    )
    assert not await service.authenticate(user_id="john_doe", password="wrong-password")

    with pytest.raises(NotFoundError):
        await store.load(user_id="jane_doe")
    assert not await service.authenticate(user_id="jane_doe", password="some-password")


@pytest.mark.asyncio
async def test_flow_against_migrated_sqlite_store(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    db_path = tmp_path / "e2e.db"
    alembic_config = Config("alembic.ini")
    alembic_config.set_main_option("sqlalchemy.url", f"sqlite+pysqlite:///{db_path}")
    command.upgrade(alembic_config, "head")
    session_factory = create_session_factory(f"sqlite+aiosqlite:///{db_path}")
    service = build_credential_service(
        _settings(monkeypatch),
        store=SqlAlchemyUserStore(session_factory),
    )

    await service.register(user_id="john_doe", password="my-super-secret-password-123")

    assert await service.authenticate(
        user_id="john_doe",
        password="my-super-secret-password-123",
    )
    assert not await service.authenticate(user_id="john_doe", password="wrong-password")
    assert not await service.authenticate(user_id="jane_doe", password="some-password")
    await dispose_session_factory(session_factory)


@pytest.mark.asyncio
async def test_demo_simulation_narrates_each_step(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    service = build_credential_service(_settings(monkeypatch), store=InMemoryUserStore())

    outcomes = await run_simulation(service)

    output = capsys.readouterr().out
    assert outcomes == [True, True, False, False]
    assert "Registration succeeded." in output
    assert output.count("Authentication failed.") == 2
    assert PEPPER not in output
