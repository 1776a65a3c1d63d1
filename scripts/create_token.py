#!/usr/bin/env python3
"""
Выпуск токена напрямую в базе данных.

Нужен, когда ни одного действующего токена не осталось (например, все
отозваны), и выпустить новый через `POST /token` нельзя.

Использование:
    python scripts/create_token.py
"""

from __future__ import annotations

import asyncio
import os
import sys

# Добавляем корневую директорию в path для импорта
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker  # noqa: E402

from barkpaste.core.database import close_engine, prepare_schema, session_factory  # noqa: E402
from barkpaste.models.paste import Token  # noqa: E402
from barkpaste.repositories import SQLTokenRepository  # noqa: E402
from barkpaste.services.paste import IdentifierGenerator  # noqa: E402


async def issue_token(factory: async_sessionmaker[AsyncSession]) -> str:
    """Создаёт новый случайный токен и возвращает его значение."""
    token = Token(token=IdentifierGenerator().new_long_token())
    await SQLTokenRepository(factory).create(token)
    return token.token


async def main() -> None:
    """Выпускает токен в базе из настроек приложения."""
    try:
        await prepare_schema()
        token = await issue_token(session_factory)
    finally:
        await close_engine()

    print("=" * 70)
    print("НОВЫЙ ТОКЕН BARKPASTE")
    print("=" * 70)
    print(token)
    print("\nИспользование: curl -H 'Authorization: Bearer <токен>' ...")


if __name__ == "__main__":
    asyncio.run(main())
