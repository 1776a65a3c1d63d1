"""Pytest configuration."""

import sys
from pathlib import Path

# Добавляем корневую папку в PYTHONPATH
root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir))

# После настройки sys.path импортируем остальные модули
from collections.abc import AsyncIterator, Iterator  # noqa: E402
from datetime import datetime, timedelta, timezone  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from barkpaste.core.database import (  # noqa: E402
    build_engine,
    build_session_factory,
    create_schema,
)
from barkpaste.main import create_application  # noqa: E402
from barkpaste.repositories import (  # noqa: E402
    InMemoryPasteRepository,
    InMemoryTokenRepository,
)
from barkpaste.services.paste import IdentifierGenerator, PasteService  # noqa: E402


TEST_TOKEN = "test-token-0123456789"
SIZE_LIMIT = 16
DEFAULT_TTL = timedelta(hours=24)
START_TIME = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Управляемые часы для проверки сроков жизни."""

    def __init__(self, start: datetime = START_TIME) -> None:
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> None:
        self.current += timedelta(**kwargs)


class FixedIdentifierGenerator(IdentifierGenerator):
    """Генератор, выдающий заранее заданные короткие идентификаторы."""

    def __init__(self, short_ids: list[str]) -> None:
        super().__init__()
        self._short_ids: Iterator[str] = iter(short_ids)

    def new_short_id(self) -> str:
        return next(self._short_ids)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def paste_repository() -> InMemoryPasteRepository:
    return InMemoryPasteRepository()


@pytest.fixture()
def token_repository() -> InMemoryTokenRepository:
    return InMemoryTokenRepository([TEST_TOKEN])


@pytest.fixture()
def paste_service(
    paste_repository: InMemoryPasteRepository,
    token_repository: InMemoryTokenRepository,
    clock: FakeClock,
) -> PasteService:
    """Сервис на хранилищах в памяти с маленьким лимитом размера."""
    return PasteService(
        paste_repository,
        token_repository,
        ttl=DEFAULT_TTL,
        limit=SIZE_LIMIT,
        clock=clock,
    )


@pytest.fixture()
async def sql_session_factory() -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    """Фабрика сессий для SQLite в памяти со свежей схемой."""
    engine = build_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    await create_schema(engine)
    yield build_session_factory(engine)
    await engine.dispose()


@pytest.fixture()
def application(paste_service: PasteService) -> FastAPI:
    """Приложение без lifespan, с подставленным сервисом вставок."""
    app = create_application()
    app.state.paste_service = paste_service
    return app


@pytest.fixture()
async def http_client(application: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    """HTTP-клиент к приложению через ASGI-транспорт."""
    transport = httpx.ASGITransport(app=application)
    async with httpx.AsyncClient(
        transport=transport,
        base_url="http://testserver",
    ) as client:
        yield client


def auth_headers(token: str = TEST_TOKEN) -> dict[str, str]:
    """Заголовок авторизации для запросов."""
    return {"Authorization": f"Bearer {token}"}
