from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import SecretStr

from credential_core.config.settings import Settings
from credential_core.domain.errors import PepperSourceError
from credential_core.infrastructure.security.pepper_source import (
    EnvironmentPepperSource,
    FilePepperSource,
    resolve_pepper_source,
)


def _settings(monkeypatch: pytest.MonkeyPatch, **env: str) -> Settings:
    monkeypatch.delenv("CREDENTIAL_PEPPER", raising=False)
    monkeypatch.delenv("CREDENTIAL_PEPPER_FILE", raising=False)
    for key, value in env.items():
        monkeypatch.setenv(key, value)
    return Settings(_env_file=None)


def test_environment_source_returns_utf8_bytes() -> None:
    source = EnvironmentPepperSource(SecretStr("sécret"))

    assert source.read_pepper() == "sécret".encode("utf-8")


def test_file_source_strips_trailing_newline(tmp_path: Path) -> None:
    pepper_file = tmp_path / "pepper"
    pepper_file.write_bytes(b"file-pepper\n")

    assert FilePepperSource(pepper_file).read_pepper() == b"file-pepper"


def test_file_source_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(PepperSourceError):
        FilePepperSource(tmp_path / "missing").read_pepper()


def test_file_source_empty_file_raises(tmp_path: Path) -> None:
    pepper_file = tmp_path / "pepper"
    pepper_file.write_bytes(b"\n")

    with pytest.raises(PepperSourceError):
        FilePepperSource(pepper_file).read_pepper()


def test_resolve_prefers_configured_source(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    pepper_file = tmp_path / "pepper"
    pepper_file.write_text("from-file\n", encoding="utf-8")

    env_settings = _settings(monkeypatch, CREDENTIAL_PEPPER="from-env")
    assert resolve_pepper_source(env_settings).read_pepper() == b"from-env"

    file_settings = _settings(monkeypatch, CREDENTIAL_PEPPER_FILE=str(pepper_file))
    assert resolve_pepper_source(file_settings).read_pepper() == b"from-file"


def test_resolve_without_pepper_is_fatal(monkeypatch: pytest.MonkeyPatch) -> None:
    with pytest.raises(PepperSourceError):
        resolve_pepper_source(_settings(monkeypatch))


def test_resolve_with_both_sources_is_fatal(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    settings = _settings(
        monkeypatch,
        CREDENTIAL_PEPPER="from-env",
        CREDENTIAL_PEPPER_FILE=str(tmp_path / "pepper"),
    )

    with pytest.raises(PepperSourceError):
        resolve_pepper_source(settings)
