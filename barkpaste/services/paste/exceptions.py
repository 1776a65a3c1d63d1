"""Исключения сервиса вставок."""

from __future__ import annotations


class PasteServiceError(Exception):
    """Базовое исключение сервиса вставок."""

    status_code: int = 500
    detail: str = "Внутренняя ошибка сервера."

    def __init__(self, detail: str | None = None) -> None:
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class PasteNotFoundError(PasteServiceError):
    """Вставка или токен не найдены."""

    status_code = 404
    detail = "Не найдено."


class PasteExistsError(PasteServiceError):
    """Идентификатор уже занят."""

    status_code = 409
    detail = "Вставка с таким идентификатором уже существует."


class PasteTooBigError(PasteServiceError):
    """Превышен лимит размера вставки."""

    status_code = 413
    detail = "Вставка превышает допустимый размер."


class UnauthorizedError(PasteServiceError):
    """Токен отсутствует или недействителен."""

    status_code = 401
    detail = "Требуется действительный токен."


class InvalidRequestError(PasteServiceError):
    """Некорректный запрос (например, пустое содержимое)."""

    status_code = 400
    detail = "Некорректный запрос."
