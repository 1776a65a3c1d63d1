"""Инструменты наблюдаемости приложения."""

from __future__ import annotations

from loguru import logger
import sentry_sdk

from barkpaste import __version__
from barkpaste.core.settings import settings


def configure_sentry() -> None:
    """Подключает Sentry при наличии DSN."""
    if not settings.sentry_dsn:
        logger.debug("Sentry не активирован: отсутствует DSN.")
        return

    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.environment,
        release=f"barkpaste@{__version__}",
        traces_sample_rate=0.1,
        # Содержимое вставок и токены не должны попадать в отчёты.
        send_default_pii=False,
        max_request_body_size="never",
    )
    logger.info("Sentry успешно инициализирован.")
