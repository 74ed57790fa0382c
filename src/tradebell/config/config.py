# -*- coding: utf-8 -*-
"""Configuration loaded from environment, .env and config.json via Pydantic Settings.

Nested env vars use <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, TELEGRAM__CHAT_ID.
Accounts are a JSON list, e.g. ACCOUNTS='[{"name": "Main", "api_key": "..."}]'.
"""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

CONFIG_FILE_ENV = "TRADEBELL_CONFIG"
DEFAULT_CONFIG_FILE = "config.json"


class AppSettings(BaseSettings):
    """General application configuration."""

    model_config = SettingsConfigDict(extra="ignore")

    app_name: str = "tradebell"
    service_name: Optional[str] = None
    service_version: Optional[str] = None
    environment: Literal["development", "test", "production"] = "development"


class LoggingSettings(BaseSettings):
    """Structured logging configuration for structlog/stdlib/Logfire."""

    model_config = SettingsConfigDict(extra="ignore")

    console_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    logfire_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    log_to_console: bool = True
    log_to_file: bool = False
    log_file_path: str = "logs/tradebell.log"
    # TimedRotatingFileHandler: when to rotate (S/M/H/D/W0–W6/midnight), interval, backups to keep
    log_file_when: Literal[
        "S", "M", "H", "D", "W0", "W1", "W2", "W3", "W4", "W5", "W6", "midnight"
    ] = "midnight"
    log_file_interval: int = 1
    log_file_backup_count: int = 30
    log_file_utc: bool = True

    # Main output format: JSONRenderer if True, ConsoleRenderer if False
    json_format: bool = False

    logfire_enabled: bool = False
    logfire_token: Optional[str] = None


class ApiSettings(BaseSettings):
    """Configuration for the Steam Web API (HTTP)."""

    model_config = SettingsConfigDict(extra="ignore")

    steam_api_host: str = Field(
        default="https://api.steampowered.com",
        description="Steam Web API base URL.",
    )
    timeout_seconds: float = Field(
        default=15.0,
        ge=1.0,
        le=120.0,
        description="HTTP request timeout in seconds.",
    )
    history_window_seconds: int = Field(
        default=86400,
        ge=60,
        description="How far back GetTradeOffers looks (time_historical_cutoff).",
    )


class TelegramNotificationSettings(BaseSettings):
    """Telegram notifications (from env TELEGRAM__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    enabled: bool = False
    token: Optional[SecretStr] = Field(default=None, description="Telegram bot token.")
    chat_id: Optional[str] = Field(default=None, description="Telegram chat ID.")
    messages_per_minute: int = Field(default=20, ge=1, le=120)
    max_attempts: int = Field(default=4, ge=1, le=10)
    backoff_base_seconds: float = Field(default=1.0, ge=0.0, le=60.0)
    connect_timeout: float = Field(default=10.0, ge=0.1, le=60.0)
    read_timeout: float = Field(default=20.0, ge=0.1, le=120.0)
    write_timeout: float = Field(default=20.0, ge=0.1, le=120.0)
    pool_timeout: float = Field(default=10.0, ge=0.1, le=60.0)


class ConsoleNotificationSettings(BaseSettings):
    """Console notification settings."""

    model_config = SettingsConfigDict(extra="ignore")

    enabled: bool = False


class TrackingSettings(BaseSettings):
    """Configuration for trade polling and local state files."""

    model_config = SettingsConfigDict(extra="ignore")

    polling_interval_seconds: int = Field(
        default=60,
        gt=0,
        description="Seconds between two poll cycles of the same account.",
    )
    cache_path: str = Field(default="cache.json", description="Item description cache file.")
    state_path: str = Field(default="state.json", description="Seen trade ids file.")
    seen_retention_days: int = Field(
        default=0,
        ge=0,
        description="Drop seen trade ids older than this on load (0 keeps them forever).",
    )


class AccountSettings(BaseModel):
    """One watched Steam account."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    api_key: SecretStr

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("account name must not be blank")
        return value


def _map_legacy_layout(data: dict[str, Any]) -> dict[str, Any]:
    """Map the flat config.json layout onto the nested sections."""
    data = dict(data)
    telegram = dict(data.get("telegram") or {})
    token = data.pop("telegram_token", None)
    chat_id = data.pop("telegram_chat_id", None)
    if token is not None:
        telegram.setdefault("token", token)
        telegram.setdefault("enabled", True)
    if chat_id is not None:
        telegram.setdefault("chat_id", str(chat_id))
    if telegram:
        data["telegram"] = telegram

    interval = data.pop("polling_interval_seconds", None)
    if interval is not None:
        tracking = dict(data.get("tracking") or {})
        tracking.setdefault("polling_interval_seconds", interval)
        data["tracking"] = tracking
    return data


class Settings(BaseSettings):
    """Root application configuration.

    Groups all sub-configurations so the rest of the code does not
    read environment variables or files directly. Nested overrides use
    <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, TRACKING__CACHE_PATH.
    """

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)
    tracking: TrackingSettings = Field(default_factory=TrackingSettings)
    telegram: TelegramNotificationSettings = Field(default_factory=TelegramNotificationSettings)
    console: ConsoleNotificationSettings = Field(default_factory=ConsoleNotificationSettings)
    accounts: list[AccountSettings] = Field(default_factory=list)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        json_file = os.getenv(CONFIG_FILE_ENV, DEFAULT_CONFIG_FILE)
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            JsonConfigSettingsSource(settings_cls, json_file=json_file),
            file_secret_settings,
        )

    @model_validator(mode="before")
    @classmethod
    def _accept_legacy_layout(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return _map_legacy_layout(data)
        return data

    @field_validator("accounts")
    @classmethod
    def _unique_account_names(cls, accounts: list[AccountSettings]) -> list[AccountSettings]:
        seen: set[str] = set()
        for account in accounts:
            if account.name in seen:
                raise ValueError(f"duplicate account name: {account.name}")
            seen.add(account.name)
        return accounts

    @model_validator(mode="after")
    def _retention_exceeds_history_window(self) -> Settings:
        days = self.tracking.seen_retention_days
        if days and days * 86400 <= self.api.history_window_seconds:
            raise ValueError(
                "tracking.seen_retention_days must exceed api.history_window_seconds"
            )
        return self

    @classmethod
    def from_env(cls, **overrides: Any) -> Settings:
        """Build settings from environment, .env and config.json, with optional overrides.

        Nested overrides can be passed as nested dicts, e.g.:
        - from_env(tracking={"polling_interval_seconds": 30})
        - from_env(telegram_token="123:abc", telegram_chat_id="42")

        Returns:
            A new Settings instance.
        """
        return cls(**overrides)


@lru_cache
def get_settings() -> Settings:
    """Return a single cached instance of Settings.

    Typical usage:

        from tradebell.config import get_settings

        settings = get_settings()
        interval = settings.tracking.polling_interval_seconds
    """
    return Settings()
