"""Периодическая очистка просроченных вставок."""

from __future__ import annotations

import asyncio
from typing import Any, Optional

from loguru import logger

from barkpaste.repositories.exceptions import RepositoryError
from barkpaste.services.paste.service import PasteService


class ExpiredPasteCleaner:
    """Фоновая задача, вызывающая очистку хранилища по интервалу."""

    def __init__(self, service: PasteService, interval_seconds: int) -> None:
        self.service = service
        self.interval_seconds = interval_seconds
        self.is_running = False
        self.cleanup_task: Optional[asyncio.Task[Any]] = None
        self._lock = asyncio.Lock()

    async def start(self) -> None:
        """Запускает фоновую очистку."""
        async with self._lock:
            if self.is_running:
                logger.warning("Очистка вставок уже запущена.")
                return

            self.is_running = True
            logger.info(
                "Старт очистки просроченных вставок (интервал: {} с).",
                self.interval_seconds,
            )
            self.cleanup_task = asyncio.create_task(
                self._cleanup_loop(),
                name="paste-cleanup",
            )

    async def stop(self) -> None:
        """Останавливает фоновую очистку."""
        async with self._lock:
            if not self.is_running:
                return

            self.is_running = False
            if self.cleanup_task:
                self.cleanup_task.cancel()
                try:
                    await self.cleanup_task
                except asyncio.CancelledError:
                    logger.debug("Задача очистки вставок отменена.")
                finally:
                    self.cleanup_task = None

            logger.info("Очистка вставок остановлена.")

    async def run_once(self) -> int:
        """Выполняет одну очистку.

        Returns:
            Количество удалённых вставок (0 при ошибке хранилища).
        """
        try:
            return await self.service.clean_expired()
        except RepositoryError as exc:
            logger.error("Ошибка очистки просроченных вставок: {}", exc)
            return 0

    async def _cleanup_loop(self) -> None:
        while self.is_running:
            await self.run_once()
            await asyncio.sleep(max(1, self.interval_seconds))
