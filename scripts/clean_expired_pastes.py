#!/usr/bin/env python3
"""
Разовая очистка просроченных вставок (для cron вместо фоновой задачи).

Удаляет обычные вставки с истёкшим сроком. Постоянные вставки не трогает.

Использование:
    python scripts/clean_expired_pastes.py
    # или в Docker:
    docker-compose exec -T app python scripts/clean_expired_pastes.py
"""

from __future__ import annotations

import asyncio
import os
import sys

# Добавляем корневую директорию в path для импорта
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from loguru import logger  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker  # noqa: E402

from barkpaste.core.database import close_engine, session_factory  # noqa: E402
from barkpaste.repositories import SQLPasteRepository  # noqa: E402


async def clean_expired(factory: async_sessionmaker[AsyncSession]) -> int:
    """Удаляет просроченные вставки и возвращает их количество."""
    removed = await SQLPasteRepository(factory).clean_expired()
    logger.info("Удалено просроченных вставок: {}", removed)
    return removed


async def main() -> None:
    """Очищает базу из настроек приложения."""
    try:
        await clean_expired(session_factory)
    finally:
        await close_engine()


if __name__ == "__main__":
    asyncio.run(main())
