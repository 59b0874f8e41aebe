"""Environment-driven configuration for the inventory service.

Every knob the service reads lives on ``Settings``. Values come from the
process environment (or a local ``.env`` file) and fall back to defaults that
let the app boot on a laptop with no setup: port 3000 and an SQLite file next
to the working directory.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Iterable

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Environment-driven application configuration."""

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "Device Inventory"
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # ``DB_PATH`` is the plain SQLite file; ``DATABASE_URL`` overrides it with
    # a full SQLAlchemy URL when set.
    DB_PATH: Path = Path("./inventory.db")
    DB_URL: str | None = Field(default=None, validation_alias=AliasChoices("DATABASE_URL", "DB_URL"))

    SEED_SAMPLE_DATA: bool = True
    LOG_LEVEL: str = "INFO"
    # Comma separated; kept as a plain string so env values are not JSON-decoded.
    ALLOWED_ORIGINS: str = "*"

    TEMPLATES_DIR: Path = PACKAGE_DIR / "templates"
    STATIC_DIR: Path = PACKAGE_DIR / "static"

    @property
    def database_url(self) -> str:
        return self.DB_URL or f"sqlite:///{self.DB_PATH}"

    @property
    def allowed_origins(self) -> list[str]:
        return parse_origins(self.ALLOWED_ORIGINS)

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"


def parse_origins(value: Any) -> list[str]:
    if value in (None, "", []):
        return []
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    if isinstance(value, Iterable):
        return [str(item).strip() for item in value if str(item).strip()]
    raise TypeError("ALLOWED_ORIGINS must be a comma separated string or list")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
