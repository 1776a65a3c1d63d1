"""Подключение к базе данных и управление миграциями."""

from __future__ import annotations

import asyncio
from asyncio.subprocess import PIPE
from pathlib import Path
from typing import Any

from loguru import logger
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from barkpaste.core.settings import settings
from barkpaste.models.db import Base


def build_engine(database_url: str, **kwargs: Any) -> AsyncEngine:
    """Создаёт асинхронный движок для SQLite или PostgreSQL."""
    options: dict[str, Any] = {"echo": False, "pool_pre_ping": True}
    if database_url.startswith("sqlite"):
        # aiosqlite работает в отдельном потоке на соединение.
        options["connect_args"] = {"check_same_thread": False}
    options.update(kwargs)
    return create_async_engine(database_url, **options)


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Создаёт фабрику сессий без истечения объектов после commit."""
    return async_sessionmaker(bind, expire_on_commit=False)


engine: AsyncEngine = build_engine(settings.database_url)

session_factory: async_sessionmaker[AsyncSession] = build_session_factory(engine)


async def create_schema(bind: AsyncEngine | None = None) -> None:
    """Создаёт недостающие таблицы по метаданным моделей."""
    async with (bind or engine).begin() as connection:
        await connection.run_sync(Base.metadata.create_all)


async def verify_database(bind: AsyncEngine | None = None) -> None:
    """Проверяет соединение с базой данных."""
    async with (bind or engine).connect() as connection:
        await connection.execute(text("SELECT 1"))


async def close_engine() -> None:
    """Закрывает соединения с базой данных."""
    await engine.dispose()


async def apply_migrations() -> bool:
    """Запускает alembic миграции.

    Returns:
        True, если миграции применены; False, если alembic недоступен.
    """
    try:
        process = await asyncio.create_subprocess_exec(
            "alembic",
            "upgrade",
            "head",
            stdout=PIPE,
            stderr=PIPE,
        )
    except FileNotFoundError:
        logger.warning("Утилита alembic не найдена, миграции пропущены.")
        return False
    stdout, stderr = await process.communicate()
    if process.returncode != 0:
        message = stderr.decode().strip() or stdout.decode().strip()
        logger.error("Ошибка применения миграций: {}", message)
        raise RuntimeError(message)
    logger.info("Миграции применены успешно.")
    return True


async def prepare_schema(alembic_config: str = "alembic.ini") -> None:
    """Готовит схему: alembic при наличии конфигурации, иначе create_all."""
    if Path(alembic_config).exists() and await apply_migrations():
        return
    await create_schema()
    logger.info("Схема базы данных проверена.")
