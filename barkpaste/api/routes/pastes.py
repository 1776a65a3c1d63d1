"""Эндпоинты создания, чтения, изменения и удаления вставок."""

from __future__ import annotations

from datetime import timedelta
from urllib.parse import quote

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from fastapi.responses import PlainTextResponse, Response

from barkpaste.core.dependencies import get_bearer_token, get_paste_service, read_body
from barkpaste.models.paste import Paste
from barkpaste.services.paste import (
    InvalidRequestError,
    PasteNotFoundError,
    PasteService,
)
from barkpaste.utils.expiry_headers import (
    EXPIRES_AT_HEADER,
    ExpiryHeaderError,
    format_expires_at,
    resolve_ttl,
)


router = APIRouter(tags=["pastes"])

# Имена, перекрытые другими маршрутами приложения.
RESERVED_IDS = frozenset({"token", "health", "ready", "docs", "redoc", "openapi.json"})


def _requested_ttl(
    service: PasteService,
    expires_after: str | None,
    expires_at: str | None,
) -> timedelta | None:
    try:
        return resolve_ttl(expires_after, expires_at, service.now())
    except ExpiryHeaderError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Некорректный заголовок срока жизни: {exc}",
        ) from exc


def _expiry_headers(paste: Paste) -> dict[str, str]:
    return {EXPIRES_AT_HEADER: format_expires_at(paste.expires_at)}


def _created_response(request: Request, paste: Paste) -> PlainTextResponse:
    headers = _expiry_headers(paste)
    headers["Content-Location"] = "/" + quote(paste.id, safe="")
    return PlainTextResponse(
        f"{request.base_url}{paste.id}",
        status_code=status.HTTP_201_CREATED,
        headers=headers,
    )


@router.post(
    "/",
    summary="Создать обычную вставку",
    response_class=PlainTextResponse,
)
async def create_regular(
    request: Request,
    content: bytes = Depends(read_body),
    token: str = Depends(get_bearer_token),
    service: PasteService = Depends(get_paste_service),
    expires_after: str | None = Header(default=None, alias="X-Expires-After"),
    expires_at: str | None = Header(default=None, alias="X-Expires-At"),
) -> PlainTextResponse:
    """Сохраняет тело запроса под случайным идентификатором."""
    ttl = _requested_ttl(service, expires_after, expires_at)
    if ttl is None or ttl <= timedelta(0):
        ttl = service.ttl

    paste = await service.create_regular(token, content, ttl)
    return _created_response(request, paste)


@router.post(
    "/{paste_id}",
    summary="Создать постоянную вставку",
    response_class=PlainTextResponse,
)
async def create_persistent(
    paste_id: str,
    request: Request,
    content: bytes = Depends(read_body),
    token: str = Depends(get_bearer_token),
    service: PasteService = Depends(get_paste_service),
    expires_after: str | None = Header(default=None, alias="X-Expires-After"),
    expires_at: str | None = Header(default=None, alias="X-Expires-At"),
) -> PlainTextResponse:
    """Сохраняет тело запроса под заданным идентификатором (нужен токен)."""
    ttl = _requested_ttl(service, expires_after, expires_at) or timedelta(0)
    if paste_id in RESERVED_IDS:
        # Политику имён раскрываем только клиентам с токеном.
        await service.authorize(token)
        raise InvalidRequestError("Идентификатор зарезервирован.")

    paste = await service.create_persistent(token, paste_id, content, ttl)
    return _created_response(request, paste)


@router.get("/{paste_id}", summary="Получить содержимое вставки")
async def get_paste(
    paste_id: str,
    service: PasteService = Depends(get_paste_service),
) -> Response:
    """Возвращает содержимое вставки, если она ещё не истекла."""
    paste = await service.get(paste_id)
    # Очистка могла ещё не удалить просроченную вставку.
    if paste.is_expired(service.now()):
        raise PasteNotFoundError()

    return Response(
        content=paste.content,
        media_type="text/plain",
        headers=_expiry_headers(paste),
    )


@router.patch("/{paste_id}", summary="Изменить вставку")
async def update_paste(
    paste_id: str,
    content: bytes = Depends(read_body),
    token: str = Depends(get_bearer_token),
    service: PasteService = Depends(get_paste_service),
    expires_after: str | None = Header(default=None, alias="X-Expires-After"),
    expires_at: str | None = Header(default=None, alias="X-Expires-At"),
) -> Response:
    """Заменяет содержимое (если тело не пустое) и/или продлевает срок."""
    now = service.now()
    ttl = _requested_ttl(service, expires_after, expires_at)

    paste = await service.get(paste_id)
    if paste.is_expired(now):
        raise PasteNotFoundError()

    changes: dict[str, object] = {}
    if content:
        changes["content"] = content
    if ttl is not None and ttl > timedelta(0):
        try:
            changes["expires_at"] = now + ttl
        except OverflowError as exc:
            raise InvalidRequestError("Слишком большой TTL.") from exc

    updated = await service.update(token, paste.model_copy(update=changes))
    return Response(status_code=status.HTTP_200_OK, headers=_expiry_headers(updated))


@router.delete("/{paste_id}", summary="Удалить вставку")
async def delete_paste(
    paste_id: str,
    token: str = Depends(get_bearer_token),
    service: PasteService = Depends(get_paste_service),
) -> Response:
    """Удаляет вставку (нужен токен)."""
    await service.delete(token, paste_id)
    return Response(status_code=status.HTTP_200_OK)
