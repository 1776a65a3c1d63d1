"""Генерация случайных идентификаторов вставок и токенов."""

from __future__ import annotations

import secrets
import string


URL_SAFE_ALPHABET = string.ascii_letters + string.digits + "_-"

SHORT_ID_LENGTH = 8
LONG_TOKEN_LENGTH = 32


class IdentifierGenerator:
    """Источник случайных URL-безопасных строк."""

    def __init__(self, alphabet: str = URL_SAFE_ALPHABET) -> None:
        self.alphabet = alphabet

    def random_string(self, length: int) -> str:
        """Возвращает криптостойкую случайную строку длины `length`."""
        return "".join(secrets.choice(self.alphabet) for _ in range(length))

    def new_short_id(self) -> str:
        """Идентификатор обычной вставки."""
        return self.random_string(SHORT_ID_LENGTH)

    def new_long_token(self) -> str:
        """Новый bearer-токен."""
        return self.random_string(LONG_TOKEN_LENGTH)
