from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from pathlib import Path
from typing import Literal
from functools import lru_cache
from ..validators.config_validators import to_uppercase, to_lowercase, non_negative_int

class Settings(BaseSettings):
    """
    Client settings loaded from environment (and an optional .env file).

    Nothing here is required: the error layer and logging work with the defaults.
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path = Path("logs/soap_client")
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5

    # API error reporting
    # Request/response envelopes can hold contact data and tokens, so they stay out of logs
    # unless explicitly enabled.
    API_LOG_PAYLOADS: bool = False
    API_PAYLOAD_MAX_CHARS: int = 2000  # 0 disables truncation

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: str | None) -> str | None:
        """
        Normalize LOG_LEVEL to uppercase before the Literal check.

        The logging module expects level names in uppercase ("DEBUG", "INFO"), while env files
        are often written in lowercase (LOG_LEVEL=debug).
        """
        return to_uppercase(v)

    @field_validator("LOG_FORMAT", mode="before")
    def normalize_log_format(cls, v: str | None) -> str | None:
        return to_lowercase(v)

    @field_validator("API_PAYLOAD_MAX_CHARS", "LOG_MAX_BYTES", "LOG_BACKUP_COUNT")
    def check_non_negative(cls, v: int) -> int:
        return non_negative_int(v)

    model_config = SettingsConfigDict(
        # .env next to the package root (src/soap_client/.env)
        env_file=str(Path(__file__).parent.parent / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

# Settings are read from the environment once per process.
@lru_cache()
def get_settings() -> Settings:
    return Settings()
