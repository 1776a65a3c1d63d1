"""Эндпоинты управления токенами."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse, Response

from barkpaste.core.dependencies import get_bearer_token, get_paste_service
from barkpaste.services.paste import PasteService


router = APIRouter(prefix="/token", tags=["tokens"])


@router.post("", summary="Выпустить новый токен", response_class=PlainTextResponse)
async def create_token(
    access_token: str = Depends(get_bearer_token),
    service: PasteService = Depends(get_paste_service),
) -> PlainTextResponse:
    """Возвращает новый токен в теле ответа."""
    token = await service.create_token(access_token)
    return PlainTextResponse(token)


@router.delete("/{token}", summary="Отозвать токен")
async def revoke_token(
    token: str,
    access_token: str = Depends(get_bearer_token),
    service: PasteService = Depends(get_paste_service),
) -> Response:
    """Удаляет указанный токен."""
    await service.revoke_token(access_token, token)
    return Response(status_code=status.HTTP_200_OK)
