"""Хранилища вставок и токенов."""

from barkpaste.repositories.base import PasteRepository, TokenRepository
from barkpaste.repositories.exceptions import (
    DuplicateKeyError,
    RecordNotFoundError,
    RepositoryError,
)
from barkpaste.repositories.memory import (
    InMemoryPasteRepository,
    InMemoryTokenRepository,
)
from barkpaste.repositories.sql import SQLPasteRepository, SQLTokenRepository

__all__ = [
    "PasteRepository",
    "TokenRepository",
    "RepositoryError",
    "DuplicateKeyError",
    "RecordNotFoundError",
    "InMemoryPasteRepository",
    "InMemoryTokenRepository",
    "SQLPasteRepository",
    "SQLTokenRepository",
]
