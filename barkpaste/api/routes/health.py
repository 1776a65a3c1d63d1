"""Эндпоинты проверки состояния сервиса."""

from __future__ import annotations

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from loguru import logger

from barkpaste.core.database import verify_database


router = APIRouter(tags=["health"])


@router.get("/health", summary="Быстрая проверка доступности")
async def health() -> dict[str, str]:
    """Возвращает краткий статус приложения."""
    return {"status": "ok"}


@router.get(
    "/ready",
    summary="Проверка готовности базы данных",
    response_class=JSONResponse,
)
async def ready() -> JSONResponse:
    """Проверяет доступность базы данных."""
    try:
        await verify_database()
    except Exception as exc:
        logger.error("База данных недоступна: {}", exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "error",
                "services": {"database": {"status": "error", "detail": str(exc)}},
            },
        )

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={"status": "ok", "services": {"database": {"status": "ok"}}},
    )
