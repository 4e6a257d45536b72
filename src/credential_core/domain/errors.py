"""Error taxonomy for credential derivation, verification, and storage."""

from __future__ import annotations


class CredentialError(Exception):
    """Base class for credential core failures."""


class EntropySourceError(CredentialError):
    """Raised when the secure random source cannot supply salt bytes."""


class KdfParameterError(CredentialError, ValueError):
    """Raised when a key-derivation parameter set is invalid or unknown."""


class PepperSourceError(CredentialError):
    """Raised when the process-wide pepper cannot be obtained at startup."""


class NotFoundError(CredentialError, LookupError):
    """Raised by a user store when no credential record exists for a user."""

    def __init__(self, *, user_id: str) -> None:
        super().__init__(f"credential record not found: {user_id}")
        self.user_id = user_id


class DuplicateUserError(CredentialError):
    """Raised by a user store when a credential record already exists for a user."""

    def __init__(self, *, user_id: str) -> None:
        super().__init__(f"credential record already exists: {user_id}")
        self.user_id = user_id


class RegistrationFailedError(CredentialError):
    """Generic registration failure safe to surface to end users."""

    def __init__(self) -> None:
        super().__init__("registration failed")


class PasswordChangeFailedError(CredentialError):
    """Generic password-change failure safe to surface to end users."""

    def __init__(self) -> None:
        super().__init__("password change failed")
