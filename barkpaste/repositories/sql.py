"""Хранилища на SQLAlchemy (SQLite, PostgreSQL)."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from loguru import logger
from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from barkpaste.models.db import PasteRecord, TokenRecord
from barkpaste.models.paste import Paste, Token, as_utc
from barkpaste.repositories.base import PasteRepository, TokenRepository
from barkpaste.repositories.exceptions import (
    DuplicateKeyError,
    RecordNotFoundError,
    RepositoryError,
)


class _SQLRepository:
    """Общая часть SQL-хранилищ: сессии и перевод ошибок драйвера."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        """Открывает сессию и переводит ошибки SQLAlchemy в ошибки хранилища."""
        try:
            async with self._session_factory() as session:
                yield session
        except IntegrityError as exc:
            raise DuplicateKeyError(str(exc.orig)) from exc
        except SQLAlchemyError as exc:
            logger.error("Ошибка базы данных: {}", exc)
            raise RepositoryError(str(exc)) from exc


def _to_paste(record: PasteRecord) -> Paste:
    return Paste(
        id=record.id,
        content=record.content,
        is_persistent=record.is_persistent,
        expires_at=record.expires_at,
    )


class SQLPasteRepository(_SQLRepository, PasteRepository):
    """Хранилище вставок в таблице `pastes`."""

    async def create(self, paste: Paste) -> Paste:
        async with self._session() as session:
            session.add(
                PasteRecord(
                    id=paste.id,
                    content=paste.content,
                    is_persistent=paste.is_persistent,
                    expires_at=paste.expires_at,
                )
            )
            await session.commit()
        return paste

    async def get_by_id(self, paste_id: str) -> Paste:
        async with self._session() as session:
            record = await session.get(PasteRecord, paste_id)
            if record is None:
                raise RecordNotFoundError(paste_id)
            return _to_paste(record)

    async def list(self) -> list[Paste]:
        async with self._session() as session:
            records = await session.scalars(
                select(PasteRecord).order_by(PasteRecord.id)
            )
            return [_to_paste(record) for record in records]

    async def update(self, paste: Paste) -> Paste:
        statement = (
            update(PasteRecord)
            .where(PasteRecord.id == paste.id)
            .values(content=paste.content, expires_at=paste.expires_at)
            .returning(PasteRecord)
            .execution_options(synchronize_session=False)
        )
        async with self._session() as session:
            record = (await session.scalars(statement)).one_or_none()
            if record is None:
                raise RecordNotFoundError(paste.id)
            updated = _to_paste(record)
            await session.commit()
        return updated

    async def delete(self, paste_id: str) -> Paste:
        statement = (
            delete(PasteRecord)
            .where(PasteRecord.id == paste_id)
            .returning(PasteRecord)
            .execution_options(synchronize_session=False)
        )
        async with self._session() as session:
            record = (await session.scalars(statement)).one_or_none()
            if record is None:
                raise RecordNotFoundError(paste_id)
            deleted = _to_paste(record)
            await session.commit()
        return deleted

    async def clean_expired(self, now: datetime | None = None) -> int:
        moment = as_utc(now) if now is not None else datetime.now(timezone.utc)
        statement = (
            delete(PasteRecord)
            .where(
                PasteRecord.is_persistent.is_(False),
                PasteRecord.expires_at < moment,
            )
            .execution_options(synchronize_session=False)
        )
        async with self._session() as session:
            result = await session.execute(statement)
            await session.commit()
        return result.rowcount or 0


class SQLTokenRepository(_SQLRepository, TokenRepository):
    """Хранилище токенов в таблице `tokens`."""

    async def create(self, token: Token) -> Token:
        async with self._session() as session:
            session.add(TokenRecord(token=token.token))
            await session.commit()
        return token

    async def list(self) -> list[Token]:
        async with self._session() as session:
            records = await session.scalars(
                select(TokenRecord).order_by(TokenRecord.token)
            )
            return [Token(token=record.token) for record in records]

    async def delete(self, token: str) -> None:
        async with self._session() as session:
            result = await session.execute(
                delete(TokenRecord).where(TokenRecord.token == token)
            )
            if not result.rowcount:
                raise RecordNotFoundError("token")
            await session.commit()

    async def exists(self, token: str) -> bool:
        if not token:
            return False
        async with self._session() as session:
            found = await session.scalar(
                select(func.count())
                .select_from(TokenRecord)
                .where(TokenRecord.token == token)
            )
        return bool(found)

    async def count(self) -> int:
        async with self._session() as session:
            total = await session.scalar(
                select(func.count()).select_from(TokenRecord)
            )
        return int(total or 0)
