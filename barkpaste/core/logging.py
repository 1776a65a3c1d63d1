"""Настройка структурированного логирования с помощью Loguru."""

from __future__ import annotations

import logging
import sys

from types import FrameType

from loguru import logger

from barkpaste.core.settings import settings


INTERCEPTED_LOGGERS = (
    "uvicorn",
    "uvicorn.error",
    "uvicorn.access",
    "sqlalchemy.engine",
    "alembic",
)


class InterceptHandler(logging.Handler):
    """Перенаправляет стандартные логи в Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        frame: FrameType | None = logging.currentframe()
        depth = 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1
        logger.opt(depth=depth, exception=record.exc_info).log(
            level,
            record.getMessage(),
        )


def configure_logging(level: str | None = None) -> None:
    """Инициализирует логирование приложения.

    В production пишет JSON-строки, в остальных окружениях - читаемый текст.
    """
    logger.remove()
    logger.add(
        sys.stdout,
        level=(level or settings.log_level).upper(),
        serialize=settings.environment == "production",
        backtrace=True,
        diagnose=False,
    )
    reset_standard_handlers()


def reset_standard_handlers() -> None:
    """Перенастраивает стандартный модуль logging."""
    intercept = InterceptHandler()
    logging.basicConfig(handlers=[intercept], level=0, force=True)
    for name in INTERCEPTED_LOGGERS:
        logging_logger = logging.getLogger(name)
        logging_logger.handlers = [intercept]
        logging_logger.propagate = False
