"""Абстрактные хранилища вставок и токенов.

Движок политик зависит только от этих классов. Конкретные реализации
обязаны переводить ошибки своего бэкенда в исключения из
:mod:`barkpaste.repositories.exceptions`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from barkpaste.models.paste import Paste, Token


class PasteRepository(ABC):
    """Хранилище вставок, ключ - идентификатор вставки."""

    @abstractmethod
    async def create(self, paste: Paste) -> Paste:
        """Сохраняет новую вставку.

        Raises:
            DuplicateKeyError: Вставка с таким id уже есть.
        """

    @abstractmethod
    async def get_by_id(self, paste_id: str) -> Paste:
        """Возвращает вставку по id.

        Raises:
            RecordNotFoundError: Вставка не найдена.
        """

    @abstractmethod
    async def list(self) -> list[Paste]:
        """Возвращает все вставки."""

    @abstractmethod
    async def update(self, paste: Paste) -> Paste:
        """Заменяет содержимое и срок истечения вставки.

        Флаг `is_persistent` не меняется.

        Raises:
            RecordNotFoundError: Вставка не найдена.
        """

    @abstractmethod
    async def delete(self, paste_id: str) -> Paste:
        """Удаляет вставку и возвращает её состояние перед удалением.

        Raises:
            RecordNotFoundError: Вставка не найдена.
        """

    @abstractmethod
    async def clean_expired(self, now: datetime | None = None) -> int:
        """Удаляет все непостоянные вставки с `expires_at < now`.

        Returns:
            Количество удалённых вставок.
        """


class TokenRepository(ABC):
    """Хранилище bearer-токенов."""

    @abstractmethod
    async def create(self, token: Token) -> Token:
        """Сохраняет токен.

        Raises:
            DuplicateKeyError: Токен уже существует.
        """

    @abstractmethod
    async def list(self) -> list[Token]:
        """Возвращает все токены."""

    @abstractmethod
    async def delete(self, token: str) -> None:
        """Удаляет токен.

        Raises:
            RecordNotFoundError: Токен не найден.
        """

    @abstractmethod
    async def exists(self, token: str) -> bool:
        """Проверяет наличие токена. Для пустой строки всегда False."""

    @abstractmethod
    async def count(self) -> int:
        """Возвращает количество токенов."""
