"""Application service for registering and authenticating credentials."""

from __future__ import annotations

import logging

from credential_core.application.ports.credential_hasher_port import CredentialHasherPort
from credential_core.application.ports.salt_generator_port import SaltGeneratorPort
from credential_core.application.ports.user_store_port import UserStorePort
from credential_core.application.services.derivation_limiter import DerivationLimiter
from credential_core.domain.credentials import (
    SALT_LENGTH,
    CredentialRecord,
    normalize_user_id,
)
from credential_core.domain.errors import (
    DuplicateUserError,
    EntropySourceError,
    NotFoundError,
    PasswordChangeFailedError,
    RegistrationFailedError,
)

logger = logging.getLogger(__name__)

# Salt for the throwaway derivation on unknown users; never compared against anything.
_DECOY_SALT = bytes(SALT_LENGTH)


class CredentialService:
    """Register, authenticate, and rotate password credentials.

    Authentication returns a plain boolean: an unknown user and a wrong
    password are indistinguishable to the caller, and both spend one
    derivation.
    """

    def __init__(
        self,
        *,
        store: UserStorePort,
        hasher: CredentialHasherPort,
        salt_generator: SaltGeneratorPort,
        limiter: DerivationLimiter | None = None,
        salt_generation_attempts: int = 3,
    ) -> None:
        if salt_generation_attempts < 1:
            raise ValueError("salt_generation_attempts must be >= 1")
        self._store = store
        self._hasher = hasher
        self._salt_generator = salt_generator
        self._limiter = limiter if limiter is not None else DerivationLimiter()
        self._salt_generation_attempts = salt_generation_attempts

    async def register(self, *, user_id: str, password: str | bytes) -> CredentialRecord:
        """Create and persist a new credential record for user_id."""

        normalized_user_id = normalize_user_id(user_id=user_id)
        try:
            record = await self._build_record(user_id=normalized_user_id, password=password)
        except EntropySourceError as exc:
            logger.error(
                "registration_failed user_id=%s reason=entropy_source_unavailable",
                normalized_user_id,
            )
            raise RegistrationFailedError() from exc

        try:
            await self._store.save(record)
        except DuplicateUserError as exc:
            logger.info("registration_failed user_id=%s reason=duplicate_user", normalized_user_id)
            raise RegistrationFailedError() from exc

        logger.info(
            "registration_succeeded user_id=%s parameters_version=%s",
            normalized_user_id,
            record.parameters_version,
        )
        return record

    async def authenticate(self, *, user_id: str, password: str | bytes) -> bool:
        """Return True only when password matches the stored credential."""

        try:
            normalized_user_id = normalize_user_id(user_id=user_id)
            record = await self._store.load(user_id=normalized_user_id)
        except (ValueError, NotFoundError):
            await self._limiter.run(self._hasher.derive, password, _DECOY_SALT)
            logger.info("authentication_failed user_id=%s", user_id.strip())
            return False

        is_valid = await self._limiter.run(
            self._verify,
            record=record,
            password=password,
        )
        if is_valid:
            logger.info("authentication_succeeded user_id=%s", normalized_user_id)
        else:
            logger.info("authentication_failed user_id=%s", normalized_user_id)
        return is_valid

    async def change_password(
        self,
        *,
        user_id: str,
        current_password: str | bytes,
        new_password: str | bytes,
    ) -> bool:
        """Replace salt and digest after verifying the current password.

        Returns False when the current password does not authenticate.
        """

        if not await self.authenticate(user_id=user_id, password=current_password):
            return False

        normalized_user_id = normalize_user_id(user_id=user_id)
        try:
            record = await self._build_record(user_id=normalized_user_id, password=new_password)
        except EntropySourceError as exc:
            logger.error(
                "password_change_failed user_id=%s reason=entropy_source_unavailable",
                normalized_user_id,
            )
            raise PasswordChangeFailedError() from exc

        try:
            await self._store.replace(record)
        except NotFoundError as exc:
            logger.warning(
                "password_change_failed user_id=%s reason=record_removed",
                normalized_user_id,
            )
            raise PasswordChangeFailedError() from exc

        logger.info("password_changed user_id=%s", normalized_user_id)
        return True

    async def _build_record(self, *, user_id: str, password: str | bytes) -> CredentialRecord:
        salt = self._generate_salt()
        digest = await self._limiter.run(self._hasher.derive, password, salt)
        return CredentialRecord(
            user_id=user_id,
            salt=salt,
            digest=digest,
            parameters_version=self._hasher.current_version,
            parameters=self._hasher.current_parameters,
        )

    def _generate_salt(self) -> bytes:
        """Draw a fresh salt, retrying a bounded number of times."""

        attempt = 1
        while True:
            try:
                return self._salt_generator.generate_salt()
            except EntropySourceError:
                if attempt >= self._salt_generation_attempts:
                    raise
                logger.warning(
                    "salt_generation_retry attempt=%s max_attempts=%s",
                    attempt,
                    self._salt_generation_attempts,
                )
                attempt += 1

    def _verify(self, *, record: CredentialRecord, password: str | bytes) -> bool:
        return self._hasher.verify(
            password=password,
            salt=record.salt,
            digest=record.digest,
            parameters=record.parameters,
        )
