"""Настройки приложения на основе pydantic-settings."""

from datetime import timedelta
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from barkpaste.core.config import load_environment


load_environment()


class Settings(BaseSettings):
    """Глобальные настройки приложения."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore"
    )

    # База данных
    database_url: str = Field(
        default="sqlite+aiosqlite:///./barkpaste.db",
        description="URL SQLAlchemy (sqlite+aiosqlite или postgresql+asyncpg)",
    )

    # Политика вставок
    paste_ttl_seconds: int = Field(
        default=86_400,
        description="TTL обычной вставки по умолчанию и потолок для анонимов",
    )
    paste_size_limit: int = Field(
        default=1 * 1024 * 1024,
        description="Максимальный размер анонимной обычной вставки (байты)",
    )
    body_limit: int = Field(
        default=200 * 1024 * 1024,
        description="Максимальный размер тела запроса (байты)",
    )
    # FIXME: заменить перед релизом, значение публичное
    default_token: SecretStr = Field(
        default=SecretStr("verycooltokensir"),
        description="Токен, создаваемый при первом запуске с пустым хранилищем",
    )

    # Очистка просроченных вставок
    cleanup_enabled: bool = True
    cleanup_interval_seconds: int = 300

    # Сервер
    host: str = "127.0.0.1"
    port: int = 8888

    # Логирование и окружение
    environment: Literal[
        "development",
        "staging",
        "production",
    ] = "development"
    log_level: str = "INFO"
    sentry_dsn: str | None = None

    @field_validator("paste_size_limit", "body_limit", "cleanup_interval_seconds")
    @classmethod
    def _validate_positive(cls, value: int) -> int:
        """Проверяет, что лимиты и интервалы положительные."""
        if value <= 0:
            raise ValueError("Значение должно быть положительным.")
        return value

    @field_validator("paste_ttl_seconds")
    @classmethod
    def _validate_ttl(cls, value: int) -> int:
        """Запрещает отрицательный TTL (ноль означает значение по умолчанию)."""
        if value < 0:
            raise ValueError("TTL не может быть отрицательным.")
        return value

    @property
    def paste_ttl(self) -> timedelta:
        """TTL обычной вставки в виде timedelta."""
        return timedelta(seconds=self.paste_ttl_seconds)


settings = Settings()
