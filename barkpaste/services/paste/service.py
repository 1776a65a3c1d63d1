"""Движок политик вставок: авторизация, квоты и сроки жизни."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from loguru import logger

from barkpaste.models.paste import NEVER_EXPIRES, Paste, Token
from barkpaste.repositories.base import PasteRepository, TokenRepository
from barkpaste.repositories.exceptions import (
    DuplicateKeyError,
    RecordNotFoundError,
    RepositoryError,
)
from barkpaste.services.paste.exceptions import (
    InvalidRequestError,
    PasteExistsError,
    PasteNotFoundError,
    PasteTooBigError,
    UnauthorizedError,
)
from barkpaste.services.paste.identifiers import IdentifierGenerator


DEFAULT_TTL = timedelta(hours=24)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Текущее время в UTC."""
    return datetime.now(timezone.utc)


class PasteService:
    """Правила создания, чтения, изменения и удаления вставок и токенов.

    Сервис не хранит состояния: вставками и токенами владеют хранилища,
    атомарность операций обеспечивают они же. Пустой токен означает
    анонимного клиента.
    """

    def __init__(
        self,
        pastes: PasteRepository,
        tokens: TokenRepository,
        *,
        ttl: timedelta = DEFAULT_TTL,
        limit: int,
        ids: IdentifierGenerator | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self._pastes = pastes
        self._tokens = tokens
        self._ttl = ttl if ttl > timedelta(0) else DEFAULT_TTL
        self._limit = limit
        self._ids = ids or IdentifierGenerator()
        self._clock = clock

    @property
    def ttl(self) -> timedelta:
        """TTL обычной вставки по умолчанию (и потолок для анонимов)."""
        return self._ttl

    @property
    def limit(self) -> int:
        """Лимит размера анонимной обычной вставки в байтах."""
        return self._limit

    def now(self) -> datetime:
        """Текущее время по часам сервиса."""
        return self._clock()

    async def create_regular(
        self,
        token: str,
        content: bytes,
        requested_ttl: timedelta,
    ) -> Paste:
        """Создаёт обычную вставку со случайным идентификатором.

        Размер ограничен только для анонимов, TTL анонима не больше
        TTL по умолчанию. Токен, если передан, обязан существовать.
        """
        authorized = await self._tokens.exists(token)
        if token and not authorized:
            raise UnauthorizedError()

        if not content:
            raise InvalidRequestError("Пустое содержимое вставки.")

        # TODO: лимит размера не применяется к авторизованным клиентам и
        # постоянным вставкам; согласовать единое правило.
        if not authorized and len(content) > self._limit:
            raise PasteTooBigError()

        ttl = requested_ttl if authorized else min(requested_ttl, self._ttl)

        paste = Paste(
            id=self._ids.new_short_id(),
            content=content,
            is_persistent=False,
            expires_at=self._expires_in(ttl),
        )
        return await self._create(paste)

    async def create_persistent(
        self,
        token: str,
        paste_id: str,
        content: bytes,
        requested_ttl: timedelta,
    ) -> Paste:
        """Создаёт постоянную вставку с заданным идентификатором.

        Без положительного TTL вставка не истекает никогда.
        """
        await self._require_token(token)

        if not content:
            raise InvalidRequestError("Пустое содержимое вставки.")

        expires_at = NEVER_EXPIRES
        if requested_ttl > timedelta(0):
            expires_at = self._expires_in(requested_ttl)

        paste = Paste(
            id=paste_id,
            content=content,
            is_persistent=True,
            expires_at=expires_at,
        )
        return await self._create(paste)

    async def get(self, paste_id: str) -> Paste:
        """Возвращает вставку без проверки срока истечения."""
        try:
            return await self._pastes.get_by_id(paste_id)
        except RecordNotFoundError as exc:
            raise PasteNotFoundError() from exc

    async def update(self, token: str, paste: Paste) -> Paste:
        """Сохраняет вставку, уже объединённую с новыми данными."""
        await self._require_token(token)

        if not paste.content:
            raise InvalidRequestError("Пустое содержимое вставки.")

        try:
            updated = await self._pastes.update(paste)
        except RecordNotFoundError as exc:
            raise PasteNotFoundError() from exc

        logger.info("Вставка {} обновлена, истекает {}.", updated.id, updated.expires_at)
        return updated

    async def delete(self, token: str, paste_id: str) -> Paste:
        """Удаляет вставку."""
        await self._require_token(token)

        try:
            deleted = await self._pastes.delete(paste_id)
        except RecordNotFoundError as exc:
            raise PasteNotFoundError() from exc

        logger.info("Вставка {} удалена.", paste_id)
        return deleted

    async def create_token(self, access_token: str) -> str:
        """Выпускает новый токен по действующему токену."""
        await self._require_token(access_token)

        token = Token(token=self._ids.new_long_token())
        try:
            await self._tokens.create(token)
        except DuplicateKeyError as exc:
            raise PasteExistsError("Такой токен уже существует.") from exc

        logger.info("Выпущен новый токен.")
        return token.token

    async def revoke_token(self, access_token: str, target_token: str) -> None:
        """Отзывает токен. Любой действующий токен может отозвать любой."""
        await self._require_token(access_token)

        try:
            await self._tokens.delete(target_token)
        except RecordNotFoundError as exc:
            raise PasteNotFoundError("Токен не найден.") from exc

        logger.info("Токен отозван.")

    async def clean_expired(self) -> int:
        """Удаляет просроченные непостоянные вставки.

        Returns:
            Количество удалённых вставок.
        """
        removed = await self._pastes.clean_expired(self.now())
        if removed:
            logger.info("Удалено просроченных вставок: {}.", removed)
        else:
            logger.debug("Просроченных вставок нет.")
        return removed

    async def authorize(self, token: str) -> None:
        """Проверяет, что токен действителен, иначе UnauthorizedError."""
        await self._require_token(token)

    async def _require_token(self, token: str) -> None:
        """Проверяет токен; ошибка хранилища тоже означает отказ."""
        try:
            exists = await self._tokens.exists(token)
        except RepositoryError as exc:
            logger.warning("Не удалось проверить токен: {}", exc)
            raise UnauthorizedError() from exc
        if not exists:
            raise UnauthorizedError()

    async def _create(self, paste: Paste) -> Paste:
        try:
            created = await self._pastes.create(paste)
        except DuplicateKeyError as exc:
            raise PasteExistsError() from exc

        logger.info(
            "Создана вставка {} (постоянная: {}, истекает {}).",
            created.id,
            created.is_persistent,
            created.expires_at,
        )
        return created

    def _expires_in(self, ttl: timedelta) -> datetime:
        try:
            return self.now() + ttl
        except OverflowError as exc:
            raise InvalidRequestError("Слишком большой TTL.") from exc
