"""Runtime settings loaded from environment variables."""

from functools import lru_cache
from typing import Annotated

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from credential_core.domain.kdf_parameters import KdfParameters

NonEmptyStr = Annotated[str, Field(min_length=1)]
PositiveInt = Annotated[int, Field(gt=0)]


class Settings(BaseSettings):
    """Environment-driven application settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: NonEmptyStr = Field(
        default="sqlite+aiosqlite:///./credentials.db",
        validation_alias="DATABASE_URL",
    )
    credential_pepper: SecretStr | None = Field(
        default=None,
        validation_alias="CREDENTIAL_PEPPER",
    )
    credential_pepper_file: NonEmptyStr | None = Field(
        default=None,
        validation_alias="CREDENTIAL_PEPPER_FILE",
    )
    kdf_time_cost: PositiveInt = Field(default=1, validation_alias="KDF_TIME_COST")
    kdf_memory_cost_kib: PositiveInt = Field(
        default=64 * 1024,
        validation_alias="KDF_MEMORY_COST_KIB",
    )
    kdf_parallelism: PositiveInt = Field(default=4, validation_alias="KDF_PARALLELISM")
    kdf_output_len: PositiveInt = Field(default=32, validation_alias="KDF_OUTPUT_LEN")
    kdf_parameters_version: PositiveInt = Field(
        default=1,
        validation_alias="KDF_PARAMETERS_VERSION",
    )
    salt_generation_attempts: PositiveInt = Field(
        default=3,
        validation_alias="SALT_GENERATION_ATTEMPTS",
    )
    max_concurrent_derivations: PositiveInt | None = Field(
        default=None,
        validation_alias="MAX_CONCURRENT_DERIVATIONS",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    def kdf_parameters(self) -> KdfParameters:
        """Return the configured Argon2id parameter set, validated."""

        parameters = KdfParameters(
            time_cost=self.kdf_time_cost,
            memory_cost=self.kdf_memory_cost_kib,
            parallelism=self.kdf_parallelism,
            output_len=self.kdf_output_len,
        )
        parameters.validate()
        return parameters


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Load and cache application settings."""

    return Settings()
