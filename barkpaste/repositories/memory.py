"""Хранилища в памяти процесса (тесты и временный запуск)."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone

from barkpaste.models.paste import Paste, Token, as_utc
from barkpaste.repositories.base import PasteRepository, TokenRepository
from barkpaste.repositories.exceptions import DuplicateKeyError, RecordNotFoundError


class InMemoryPasteRepository(PasteRepository):
    """Вставки в словаре, операции атомарны под asyncio.Lock."""

    def __init__(self) -> None:
        self._pastes: dict[str, Paste] = {}
        self._lock = asyncio.Lock()

    async def create(self, paste: Paste) -> Paste:
        async with self._lock:
            if paste.id in self._pastes:
                raise DuplicateKeyError(paste.id)
            self._pastes[paste.id] = paste
        return paste

    async def get_by_id(self, paste_id: str) -> Paste:
        try:
            return self._pastes[paste_id]
        except KeyError as exc:
            raise RecordNotFoundError(paste_id) from exc

    async def list(self) -> list[Paste]:
        return [self._pastes[key] for key in sorted(self._pastes)]

    async def update(self, paste: Paste) -> Paste:
        async with self._lock:
            current = self._pastes.get(paste.id)
            if current is None:
                raise RecordNotFoundError(paste.id)
            updated = current.model_copy(
                update={"content": paste.content, "expires_at": paste.expires_at}
            )
            self._pastes[paste.id] = updated
        return updated

    async def delete(self, paste_id: str) -> Paste:
        async with self._lock:
            try:
                return self._pastes.pop(paste_id)
            except KeyError as exc:
                raise RecordNotFoundError(paste_id) from exc

    async def clean_expired(self, now: datetime | None = None) -> int:
        moment = as_utc(now) if now is not None else datetime.now(timezone.utc)
        async with self._lock:
            expired = [
                paste.id
                for paste in self._pastes.values()
                if not paste.is_persistent and paste.expires_at < moment
            ]
            for paste_id in expired:
                del self._pastes[paste_id]
        return len(expired)


class InMemoryTokenRepository(TokenRepository):
    """Токены в множестве."""

    def __init__(self, tokens: list[str] | None = None) -> None:
        self._tokens: set[str] = set(tokens or [])
        self._lock = asyncio.Lock()

    async def create(self, token: Token) -> Token:
        async with self._lock:
            if token.token in self._tokens:
                raise DuplicateKeyError("token")
            self._tokens.add(token.token)
        return token

    async def list(self) -> list[Token]:
        return [Token(token=value) for value in sorted(self._tokens)]

    async def delete(self, token: str) -> None:
        async with self._lock:
            if token not in self._tokens:
                raise RecordNotFoundError("token")
            self._tokens.remove(token)

    async def exists(self, token: str) -> bool:
        if not token:
            return False
        return token in self._tokens

    async def count(self) -> int:
        return len(self._tokens)
