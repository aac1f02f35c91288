from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError

REQUIRED_SETTINGS = (
    "TELEGRAM_BOT_TOKEN",
    "GOOGLE_SHEET_ID",
    "GOOGLE_SERVICE_ACCOUNT_EMAIL",
    "GOOGLE_PRIVATE_KEY",
)


class Settings(BaseSettings):
    """Configuration for the bot and its spreadsheet connection.

    Values are loaded from environment variables and `.env`.

    Notes:
    - GOOGLE_PRIVATE_KEY is usually stored on one line with literal `\\n`
      sequences; they are turned back into newlines on load.
    - The service account must have read access to the spreadsheet.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Telegram
    TELEGRAM_BOT_TOKEN: str | None = Field(default=None)

    # Google Sheets
    GOOGLE_SHEET_ID: str | None = Field(default=None)
    GOOGLE_SERVICE_ACCOUNT_EMAIL: str | None = Field(default=None)
    GOOGLE_PRIVATE_KEY: str | None = Field(default=None)
    SHEET_BOT_WORKSHEET_INDEX: int = Field(default=0, ge=0)

    # Rendering
    SHEET_BOT_KEYBOARD_COLUMNS: int = Field(default=2, ge=1, le=8)
    # Handle updates from different chats in parallel.
    SHEET_BOT_CONCURRENT_UPDATES: bool = Field(default=True)

    # Logging (diagnostic; timed rotation at midnight)
    SHEET_BOT_LOG_DIR: Path = Field(default=Path("_logs"))
    SHEET_BOT_LOG_LEVEL: str = Field(default="INFO")
    SHEET_BOT_LOG_BACKUP_COUNT: int = Field(default=14)
    # httpx logs every Telegram API request at INFO.
    SHEET_BOT_LOG_HTTP: bool = Field(default=False)

    @field_validator("GOOGLE_PRIVATE_KEY")
    @classmethod
    def _unescape_private_key(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.replace("\\n", "\n")

    def missing_required(self) -> list[str]:
        return [name for name in REQUIRED_SETTINGS if not str(getattr(self, name) or "").strip()]


def load_settings() -> Settings:
    s = Settings()
    missing = s.missing_required()
    if missing:
        raise ConfigurationError(
            "missing required environment variable(s): " + ", ".join(missing)
        )
    return s
