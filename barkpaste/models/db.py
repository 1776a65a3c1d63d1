"""SQLAlchemy-модели таблиц вставок и токенов."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, LargeBinary, String
from sqlalchemy.ext.asyncio import AsyncAttrs
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(AsyncAttrs, DeclarativeBase):
    """Базовый класс ORM-моделей barkpaste."""

    pass


class PasteRecord(Base):
    """Строка таблицы `pastes`."""

    __tablename__ = "pastes"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    content: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
    is_persistent: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        index=True,
    )
    # Индекс нужен для периодической очистки просроченных вставок.
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )


class TokenRecord(Base):
    """Строка таблицы `tokens`."""

    __tablename__ = "tokens"

    token: Mapped[str] = mapped_column(String(255), primary_key=True)
