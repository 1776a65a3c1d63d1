"""Запуск сервера: `python -m barkpaste`."""

from __future__ import annotations

import uvicorn

from barkpaste.core.settings import settings


def main() -> None:
    """Запускает uvicorn с адресом из настроек."""
    uvicorn.run(
        "barkpaste.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
