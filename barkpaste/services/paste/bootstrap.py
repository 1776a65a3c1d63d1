"""Начальная инициализация хранилища токенов."""

from __future__ import annotations

from loguru import logger

from barkpaste.models.paste import Token
from barkpaste.repositories.base import TokenRepository
from barkpaste.repositories.exceptions import DuplicateKeyError


async def ensure_default_token(tokens: TokenRepository, default_token: str) -> bool:
    """Создаёт токен из конфигурации, если хранилище токенов пустое.

    Returns:
        True, если токен был создан.
    """
    if await tokens.count() > 0:
        logger.debug("Хранилище токенов не пустое, токен по умолчанию не нужен.")
        return False

    if not default_token:
        raise ValueError("Токен по умолчанию не задан.")

    try:
        await tokens.create(Token(token=default_token))
    except DuplicateKeyError:
        logger.debug("Токен по умолчанию уже создан другим процессом.")
        return False

    logger.warning("Создан токен по умолчанию из конфигурации, замените его.")
    return True
