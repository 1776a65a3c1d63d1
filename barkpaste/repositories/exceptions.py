"""Исключения слоя хранения."""

from __future__ import annotations


class RepositoryError(Exception):
    """Базовая ошибка хранилища."""


class DuplicateKeyError(RepositoryError):
    """Запись с таким ключом уже существует."""


class RecordNotFoundError(RepositoryError):
    """Запись не найдена."""
