"""Разбор и форматирование заголовков срока жизни вставки."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone


EXPIRES_AFTER_HEADER = "X-Expires-After"
EXPIRES_AT_HEADER = "X-Expires-At"

_SECONDS_RE = re.compile(r"[+-]?[0-9]+")


class ExpiryHeaderError(ValueError):
    """Заголовок срока жизни не удалось разобрать."""


def parse_expires_after(value: str) -> timedelta:
    """
    Разбирает `X-Expires-After`: целое число секунд.

    Raises:
        ExpiryHeaderError: Значение не является целым числом из ASCII-цифр.
    """
    raw = value.strip()
    if not _SECONDS_RE.fullmatch(raw):
        raise ExpiryHeaderError(f"{EXPIRES_AFTER_HEADER}: {value!r}")
    try:
        return timedelta(seconds=int(raw))
    except (ValueError, OverflowError) as exc:
        raise ExpiryHeaderError(f"{EXPIRES_AFTER_HEADER}: {value!r}") from exc


def parse_expires_at(value: str, now: datetime) -> timedelta:
    """
    Разбирает `X-Expires-At` (RFC 3339) в длительность от `now`.

    Raises:
        ExpiryHeaderError: Время не в формате RFC 3339 или без смещения.
    """
    raw = value.strip()
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    try:
        moment = datetime.fromisoformat(raw)
    except ValueError as exc:
        raise ExpiryHeaderError(f"{EXPIRES_AT_HEADER}: {value!r}") from exc
    if moment.tzinfo is None:
        raise ExpiryHeaderError(f"{EXPIRES_AT_HEADER}: не указан часовой пояс")
    return moment - now


def resolve_ttl(
    expires_after: str | None,
    expires_at: str | None,
    now: datetime,
) -> timedelta | None:
    """
    Возвращает TTL из заголовков запроса.

    `X-Expires-At` имеет приоритет над `X-Expires-After`.

    Returns:
        Длительность или None, если ни один заголовок не передан.
    """
    ttl: timedelta | None = None
    if expires_after:
        ttl = parse_expires_after(expires_after)
    if expires_at:
        ttl = parse_expires_at(expires_at, now)
    return ttl


def format_expires_at(moment: datetime) -> str:
    """Форматирует момент истечения в RFC 3339 (UTC, без долей секунды)."""
    return (
        moment.astimezone(timezone.utc)
        .replace(microsecond=0)
        .isoformat()
        .replace("+00:00", "Z")
    )
