"""Сервис вставок: политики доступа, квоты и сроки жизни."""

from barkpaste.services.paste.bootstrap import ensure_default_token
from barkpaste.services.paste.cleanup import ExpiredPasteCleaner
from barkpaste.services.paste.exceptions import (
    InvalidRequestError,
    PasteExistsError,
    PasteNotFoundError,
    PasteServiceError,
    PasteTooBigError,
    UnauthorizedError,
)
from barkpaste.services.paste.identifiers import IdentifierGenerator
from barkpaste.services.paste.service import PasteService

__all__ = [
    "PasteService",
    "IdentifierGenerator",
    "ExpiredPasteCleaner",
    "ensure_default_token",
    "PasteServiceError",
    "PasteNotFoundError",
    "PasteExistsError",
    "PasteTooBigError",
    "UnauthorizedError",
    "InvalidRequestError",
]
