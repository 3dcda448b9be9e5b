from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from . import __version__


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TERMINALCOM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    base_url: str = Field(default="https://api.terminal.com", min_length=8)
    api_version: str = Field(default="v0.1", min_length=1)
    user_agent: str = Field(default=f"terminalcom/{__version__}", min_length=1)
    log_level: str = "WARNING"

    # Only the command line reads these; library callers pass tokens explicitly.
    user_token: str | None = None
    access_token: str | None = None

    # Presence alone enables the curl diagnostic, whatever the value.
    dbg: str | None = Field(default=None, validation_alias=AliasChoices("dbg", "TERMINALCOM_DBG", "DBG"))

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        normalized = value.strip().upper()
        if normalized not in allowed:
            raise ValueError(f"log_level must be one of: {sorted(allowed)}")
        return normalized

    @field_validator("base_url")
    @classmethod
    def _strip_base_url(cls, value: str) -> str:
        return value.strip().rstrip("/")

    @field_validator("api_version")
    @classmethod
    def _strip_api_version(cls, value: str) -> str:
        normalized = value.strip().strip("/")
        if not normalized:
            raise ValueError("api_version must not be empty")
        return normalized

    @property
    def curl_debug(self) -> bool:
        return self.dbg is not None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
