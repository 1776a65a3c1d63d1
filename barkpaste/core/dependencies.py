"""Зависимости FastAPI: токен, тело запроса и сервис вставок."""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import (
    HTTPAuthorizationCredentials,
    HTTPBearer,
)

from barkpaste.core.settings import settings
from barkpaste.services.paste import PasteService


bearer_scheme = HTTPBearer(auto_error=False)


async def get_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """Извлекает токен из `Authorization: Bearer`.

    Отсутствующий или некорректный заголовок означает анонимного клиента.
    """
    if credentials is None:
        return ""
    return credentials.credentials.strip()


def get_paste_service(request: Request) -> PasteService:
    """Возвращает сервис вставок, созданный при старте приложения."""
    service: PasteService | None = getattr(request.app.state, "paste_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Сервис ещё не инициализирован.",
        )
    return service


async def read_body(request: Request) -> bytes:
    """Читает тело запроса, обрывая чтение при превышении лимита."""
    limit: int = getattr(request.app.state, "body_limit", settings.body_limit)

    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > limit:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail="Тело запроса слишком большое.",
        )

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > limit:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail="Тело запроса слишком большое.",
            )
    return bytes(body)
