"""Регистрация FastAPI роутеров приложения."""

from __future__ import annotations

from fastapi import FastAPI

from barkpaste.api.routes.health import router as health_router
from barkpaste.api.routes.pastes import router as pastes_router
from barkpaste.api.routes.tokens import router as tokens_router


def register_routes(application: FastAPI) -> None:
    """Подключает все API-модули к FastAPI приложению.

    Роутер вставок подключается последним: его пути `/{paste_id}`
    перекрыли бы остальные.
    """
    application.include_router(health_router)
    application.include_router(tokens_router)
    application.include_router(pastes_router)
