from pydantic import Field, AliasChoices
from pydantic_settings import BaseSettings, SettingsConfigDict

REQUIRED_SETTINGS = ("TELEGRAM_BOT_TOKEN", "ALLOWED_CHAT_ID")


class ConfigError(RuntimeError):
    """Raised at startup when required settings are missing."""

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__("Missing required environment variables: " + ", ".join(self.missing))


class Settings(BaseSettings):
    # Read env from the process + optionally from a .env file
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    # App
    APP_NAME: str = Field(default="trip_bot", validation_alias=AliasChoices("APP_NAME", "app_name"))
    LOG_LEVEL: str = Field(default="INFO", validation_alias=AliasChoices("LOG_LEVEL", "log_level"))
    HOST: str = Field(default="0.0.0.0", validation_alias=AliasChoices("HOST", "host"))
    PORT: int = Field(default=8000, validation_alias=AliasChoices("PORT", "port"))
    # IANA zone for the confirmation timestamp; empty means host local time
    TIMEZONE: str = Field(default="", validation_alias=AliasChoices("TIMEZONE", "timezone"))

    # Telegram
    TELEGRAM_BOT_TOKEN: str = Field(default="", validation_alias=AliasChoices("TELEGRAM_BOT_TOKEN", "telegram_bot_token"))
    ALLOWED_CHAT_ID: str = Field(default="", validation_alias=AliasChoices("ALLOWED_CHAT_ID", "allowed_chat_id"))
    TELEGRAM_API_BASE: str = Field(
        default="https://api.telegram.org",
        validation_alias=AliasChoices("TELEGRAM_API_BASE", "telegram_api_base"),
    )
    TELEGRAM_MODE: str = Field(default="polling", validation_alias=AliasChoices("TELEGRAM_MODE", "telegram_mode"))
    TELEGRAM_POLL_TIMEOUT: int = Field(default=30, validation_alias=AliasChoices("TELEGRAM_POLL_TIMEOUT", "telegram_poll_timeout"))
    TELEGRAM_WEBHOOK_URL: str = Field(default="", validation_alias=AliasChoices("TELEGRAM_WEBHOOK_URL", "telegram_webhook_url"))
    TELEGRAM_WEBHOOK_SECRET: str = Field(
        default="",
        validation_alias=AliasChoices("TELEGRAM_WEBHOOK_SECRET", "telegram_webhook_secret"),
    )

    # Spreadsheet web endpoint (optional for local testing)
    SHEET_API_URL: str = Field(default="", validation_alias=AliasChoices("SHEET_API_URL", "sheet_api_url"))
    SHEET_TIMEOUT_SECONDS: float = Field(
        default=30.0,
        validation_alias=AliasChoices("SHEET_TIMEOUT_SECONDS", "sheet_timeout_seconds"),
    )

    # Keep-alive
    KEEPALIVE_URL: str = Field(default="", validation_alias=AliasChoices("KEEPALIVE_URL", "keepalive_url"))
    KEEPALIVE_INTERVAL_SECONDS: int = Field(
        default=5 * 60,
        validation_alias=AliasChoices("KEEPALIVE_INTERVAL_SECONDS", "keepalive_interval_seconds"),
    )
    HEARTBEAT_INTERVAL_SECONDS: int = Field(
        default=60,
        validation_alias=AliasChoices("HEARTBEAT_INTERVAL_SECONDS", "heartbeat_interval_seconds"),
    )

    def missing_required(self) -> list[str]:
        """Names of required settings that are unset or blank."""
        return [name for name in REQUIRED_SETTINGS if not str(getattr(self, name) or "").strip()]

    def require(self) -> None:
        missing = self.missing_required()
        if missing:
            raise ConfigError(missing)

    @property
    def use_webhook(self) -> bool:
        return self.TELEGRAM_MODE.strip().lower() == "webhook"


settings = Settings()
