"""Точка входа FastAPI приложения."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from barkpaste import __version__
from barkpaste.api import register_routes
from barkpaste.core.database import (
    close_engine,
    prepare_schema,
    session_factory,
    verify_database,
)
from barkpaste.core.logging import configure_logging
from barkpaste.core.observability import configure_sentry
from barkpaste.core.settings import settings
from barkpaste.repositories import SQLPasteRepository, SQLTokenRepository
from barkpaste.services.paste import (
    ExpiredPasteCleaner,
    PasteService,
    PasteServiceError,
    ensure_default_token,
)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncGenerator[None, None]:
    """Управляет жизненным циклом приложения."""
    configure_logging()
    configure_sentry()
    await bootstrap_runtime(application)
    try:
        yield
    finally:
        await shutdown_runtime(application)


def register_exception_handlers(application: FastAPI) -> None:
    """Настраивает обработчики ошибок FastAPI."""

    @application.exception_handler(PasteServiceError)
    async def paste_service_exception_handler(
        request: Request,
        exc: PasteServiceError,
    ) -> JSONResponse:
        """Переводит ошибки сервиса вставок в HTTP-ответы."""
        logger.debug(
            "{} {}: {} ({})",
            request.method,
            request.url.path,
            exc.status_code,
            type(exc).__name__,
        )
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=headers,
        )

    @application.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Обрабатывает ошибки валидации запросов."""
        logger.warning(
            "Ошибка валидации для пути {}: {}",
            request.url.path,
            exc.errors(),
        )
        return JSONResponse(
            status_code=422,
            content={
                "detail": exc.errors(),
                "message": "Ошибки проверки данных запроса.",
            },
        )

    @application.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Обрабатывает неожиданные исключения."""
        logger.exception(
            "Необработанное исключение для пути {}",
            request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={"detail": "Внутренняя ошибка сервера."},
        )


def create_application() -> FastAPI:
    """Создаёт и настраивает экземпляр FastAPI.

    Сервис вставок появляется в `app.state.paste_service` при старте
    (см. :func:`bootstrap_runtime`).
    """
    application = FastAPI(
        title="barkpaste",
        version=__version__,
        description="Хранилище текстовых и бинарных вставок.",
        lifespan=lifespan,
    )
    application.state.body_limit = settings.body_limit

    register_exception_handlers(application)
    register_routes(application)
    return application


app = create_application()


async def bootstrap_runtime(application: FastAPI) -> None:
    """Готовит базу данных, токены, сервис и фоновую очистку."""
    await prepare_schema()
    await verify_database()

    pastes = SQLPasteRepository(session_factory)
    tokens = SQLTokenRepository(session_factory)
    await ensure_default_token(tokens, settings.default_token.get_secret_value())

    service = PasteService(
        pastes,
        tokens,
        ttl=settings.paste_ttl,
        limit=settings.paste_size_limit,
    )
    cleaner = ExpiredPasteCleaner(service, settings.cleanup_interval_seconds)
    application.state.paste_service = service
    application.state.paste_cleaner = cleaner

    if settings.cleanup_enabled:
        await cleaner.start()
    logger.info("barkpaste {} готов к работе.", __version__)


async def shutdown_runtime(application: FastAPI) -> None:
    """Останавливает фоновые задачи и закрывает соединения."""
    cleaner: ExpiredPasteCleaner | None = getattr(
        application.state, "paste_cleaner", None
    )
    if cleaner is not None:
        await cleaner.stop()
    await close_engine()
    logger.info("barkpaste остановлен.")
