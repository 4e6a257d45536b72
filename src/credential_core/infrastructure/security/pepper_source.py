"""Pepper source adapters read once at process startup."""

from __future__ import annotations

from pathlib import Path

from pydantic import SecretStr

from credential_core.application.ports.pepper_source_port import PepperSourcePort
from credential_core.config.settings import Settings
from credential_core.domain.errors import PepperSourceError


class EnvironmentPepperSource(PepperSourcePort):
    """Pepper taken from the CREDENTIAL_PEPPER setting."""

    def __init__(self, value: SecretStr) -> None:
        self._value = value

    def read_pepper(self) -> bytes:
        pepper = self._value.get_secret_value().encode("utf-8")
        if not pepper:
            raise PepperSourceError("CREDENTIAL_PEPPER cannot be blank")
        return pepper


class FilePepperSource(PepperSourcePort):
    """Pepper read from a secret file such as a mounted container secret."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def read_pepper(self) -> bytes:
        try:
            raw = self._path.read_bytes()
        except OSError as exc:
            raise PepperSourceError("failed to read CREDENTIAL_PEPPER_FILE") from exc

        pepper = raw.rstrip(b"\r\n")
        if not pepper:
            raise PepperSourceError("CREDENTIAL_PEPPER_FILE is empty")
        return pepper


def resolve_pepper_source(settings: Settings) -> PepperSourcePort:
    """Pick the configured pepper source, requiring exactly one to be set."""

    value = settings.credential_pepper
    path = settings.credential_pepper_file
    if value is not None and path is not None:
        raise PepperSourceError(
            "set only one of CREDENTIAL_PEPPER or CREDENTIAL_PEPPER_FILE"
        )
    if path is not None:
        return FilePepperSource(Path(path))
    if value is not None:
        return EnvironmentPepperSource(value)
    raise PepperSourceError("set CREDENTIAL_PEPPER or CREDENTIAL_PEPPER_FILE")
