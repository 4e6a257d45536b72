"""credential-demo entrypoint: narrated registration and login simulation."""

from __future__ import annotations

import asyncio
import logging

from credential_core.application.ports.user_store_port import UserStorePort
from credential_core.application.services.credential_service import CredentialService
from credential_core.application.services.derivation_limiter import DerivationLimiter
from credential_core.config.settings import Settings, load_settings
from credential_core.domain.errors import RegistrationFailedError
from credential_core.infrastructure.db.session import create_session_factory
from credential_core.infrastructure.db.user_store import SqlAlchemyUserStore
from credential_core.infrastructure.logging import configure_logging
from credential_core.infrastructure.security.credential_hasher import Argon2idCredentialHasher
from credential_core.infrastructure.security.pepper_source import resolve_pepper_source
from credential_core.infrastructure.security.salt_generator import SecretsSaltGenerator
from credential_core.infrastructure.store.memory_store import InMemoryUserStore

logger = logging.getLogger(__name__)

DEMO_USER_ID = "john_doe"
DEMO_PASSWORD = "my-super-secret-password-123"
DEMO_WRONG_PASSWORD = "wrong-password"
DEMO_UNKNOWN_USER_ID = "jane_doe"


def build_hasher(settings: Settings) -> Argon2idCredentialHasher:
    """Read the pepper once and bind it to an Argon2id hasher."""

    pepper = resolve_pepper_source(settings).read_pepper()
    return Argon2idCredentialHasher(
        pepper=pepper,
        parameters=settings.kdf_parameters(),
        parameters_version=settings.kdf_parameters_version,
    )


def build_credential_service(
    settings: Settings,
    *,
    store: UserStorePort | None = None,
) -> CredentialService:
    """Build credential service; defaults to the SQLAlchemy-backed store."""

    if store is None:
        store = SqlAlchemyUserStore(create_session_factory(settings.database_url))
    return CredentialService(
        store=store,
        hasher=build_hasher(settings),
        salt_generator=SecretsSaltGenerator(),
        limiter=DerivationLimiter(limit=settings.max_concurrent_derivations),
        salt_generation_attempts=settings.salt_generation_attempts,
    )


async def run_simulation(service: CredentialService) -> list[bool]:
    """Run the four narrated steps and return each step's success flag."""

    outcomes: list[bool] = []

    print("Simulating user registration:")
    try:
        await service.register(user_id=DEMO_USER_ID, password=DEMO_PASSWORD)
    except RegistrationFailedError as exc:
        print(f"\tRegistration failed: {exc}")
        outcomes.append(False)
    else:
        print("\tRegistration succeeded.")
        outcomes.append(True)

    steps = (
        ("\nSimulating successful authentication:", DEMO_USER_ID, DEMO_PASSWORD),
        (
            "\nSimulating failed authentication with wrong password:",
            DEMO_USER_ID,
            DEMO_WRONG_PASSWORD,
        ),
        (
            "\nSimulating authentication for non-existent user:",
            DEMO_UNKNOWN_USER_ID,
            "some-password",
        ),
    )
    for title, user_id, password in steps:
        print(title)
        authenticated = await service.authenticate(user_id=user_id, password=password)
        print("\tAuthentication succeeded." if authenticated else "\tAuthentication failed.")
        outcomes.append(authenticated)

    return outcomes


async def _run() -> None:
    settings = load_settings()
    configure_logging(level=settings.log_level)
    service = build_credential_service(settings, store=InMemoryUserStore())
    logger.info("credential_demo_started")
    await run_simulation(service)


def main() -> None:
    """Entrypoint for ``python -m apps.credential_demo.main``."""

    asyncio.run(_run())


if __name__ == "__main__":
    main()
