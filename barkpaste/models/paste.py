"""Доменные модели вставок и токенов."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Срок жизни постоянной вставки без TTL: "практически никогда".
NEVER_EXPIRES = datetime(9999, 12, 31, 23, 59, 59, tzinfo=timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Приводит время к aware UTC (наивное значение считается UTC)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Paste(BaseModel):
    """Сохранённая вставка."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Уникальный идентификатор вставки.")
    content: bytes = Field(..., description="Произвольное содержимое.")
    is_persistent: bool = Field(
        default=False,
        description="Постоянная вставка: имя задаёт владелец токена.",
    )
    expires_at: datetime = Field(..., description="Момент истечения (UTC).")

    @field_validator("expires_at")
    @classmethod
    def _normalize_expires_at(cls, value: datetime) -> datetime:
        return as_utc(value)

    def is_expired(self, now: datetime) -> bool:
        """Истекла ли вставка к моменту `now`."""
        return as_utc(now) > self.expires_at


class Token(BaseModel):
    """Bearer-токен доступа."""

    model_config = ConfigDict(frozen=True)

    token: str = Field(..., description="Непрозрачное значение токена.")
