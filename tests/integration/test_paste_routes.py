"""Сквозные HTTP-тесты вставок и токенов."""

from __future__ import annotations

from datetime import timedelta

import httpx
import pytest
from fastapi import FastAPI

from barkpaste.repositories import InMemoryPasteRepository, InMemoryTokenRepository
from barkpaste.utils.expiry_headers import format_expires_at
from tests.conftest import SIZE_LIMIT, TEST_TOKEN, FakeClock, auth_headers

pytestmark = [pytest.mark.integration]


@pytest.mark.asyncio
async def test_regular_paste_end_to_end(
    http_client: httpx.AsyncClient,
    paste_repository: InMemoryPasteRepository,
    clock: FakeClock,
) -> None:
    """Анонимная вставка читается сразу и пропадает после истечения."""
    response = await http_client.post(
        "/", content=b"hello", headers={"X-Expires-After": "60"}
    )

    assert response.status_code == 201
    paste_id = response.headers["Content-Location"].lstrip("/")
    assert response.text == f"http://testserver/{paste_id}"
    assert response.headers["X-Expires-At"] == format_expires_at(
        clock() + timedelta(seconds=60)
    )
    stored = await paste_repository.get_by_id(paste_id)
    assert stored.is_persistent is False

    fetched = await http_client.get(f"/{paste_id}")
    assert fetched.status_code == 200
    assert fetched.content == b"hello"
    assert fetched.headers["content-type"].startswith("text/plain")

    clock.advance(seconds=61)

    expired = await http_client.get(f"/{paste_id}")
    assert expired.status_code == 404
    # Очистка ещё не запускалась: вставка физически на месте.
    assert await paste_repository.get_by_id(paste_id)


@pytest.mark.asyncio
async def test_regular_paste_default_ttl(
    http_client: httpx.AsyncClient,
    clock: FakeClock,
) -> None:
    """Без заголовков и с неположительным TTL используется TTL по умолчанию."""
    expected = format_expires_at(clock() + timedelta(hours=24))

    plain = await http_client.post("/", content=b"a")
    zero = await http_client.post("/", content=b"b", headers={"X-Expires-After": "0"})

    assert plain.headers["X-Expires-At"] == expected
    assert zero.headers["X-Expires-At"] == expected


@pytest.mark.asyncio
async def test_expires_at_header(
    http_client: httpx.AsyncClient,
    clock: FakeClock,
) -> None:
    """X-Expires-At переводится в TTL и имеет приоритет."""
    target = clock() + timedelta(hours=2)

    response = await http_client.post(
        "/",
        content=b"a",
        headers={
            "X-Expires-After": "60",
            "X-Expires-At": format_expires_at(target),
        },
    )

    assert response.status_code == 201
    assert response.headers["X-Expires-At"] == format_expires_at(target)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "headers",
    [{"X-Expires-After": "soon"}, {"X-Expires-At": "tomorrow"}],
)
async def test_bad_expiry_headers(
    http_client: httpx.AsyncClient,
    headers: dict[str, str],
) -> None:
    response = await http_client.post("/", content=b"a", headers=headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_regular_paste_errors(http_client: httpx.AsyncClient) -> None:
    """Пустое тело, превышение лимита и неизвестный токен."""
    empty = await http_client.post("/", content=b"")
    too_big = await http_client.post("/", content=b"x" * (SIZE_LIMIT + 1))
    bad_token = await http_client.post("/", content=b"x", headers=auth_headers("nope"))
    big_with_token = await http_client.post(
        "/", content=b"x" * (SIZE_LIMIT + 1), headers=auth_headers()
    )

    assert empty.status_code == 400
    assert too_big.status_code == 413
    assert bad_token.status_code == 401
    assert bad_token.headers["WWW-Authenticate"] == "Bearer"
    assert big_with_token.status_code == 201


@pytest.mark.asyncio
async def test_body_limit(
    http_client: httpx.AsyncClient,
    application: FastAPI,
) -> None:
    """Тело больше общего лимита отклоняется до сервиса, даже с токеном."""
    application.state.body_limit = 4

    response = await http_client.post("/", content=b"12345", headers=auth_headers())

    assert response.status_code == 413


@pytest.mark.asyncio
async def test_persistent_paste(
    http_client: httpx.AsyncClient,
    paste_repository: InMemoryPasteRepository,
) -> None:
    """Именованная вставка: нужен токен, повтор имени - 409."""
    unauthorized = await http_client.post("/mydoc", content=b"hello")
    invalid = await http_client.post(
        "/mydoc", content=b"hello", headers=auth_headers("invalid")
    )
    assert unauthorized.status_code == 401
    assert invalid.status_code == 401
    assert await paste_repository.list() == []

    created = await http_client.post("/mydoc", content=b"hello", headers=auth_headers())
    duplicate = await http_client.post("/mydoc", content=b"again", headers=auth_headers())

    assert created.status_code == 201
    assert created.text == "http://testserver/mydoc"
    assert created.headers["X-Expires-At"] == "9999-12-31T23:59:59Z"
    assert duplicate.status_code == 409
    assert (await http_client.get("/mydoc")).content == b"hello"


@pytest.mark.asyncio
async def test_persistent_reserved_id(http_client: httpx.AsyncClient) -> None:
    """Имена, перекрытые другими маршрутами, занять нельзя."""
    for reserved in ("health", "ready", "docs"):
        response = await http_client.post(
            f"/{reserved}", content=b"x", headers=auth_headers()
        )
        assert response.status_code == 400


@pytest.mark.asyncio
async def test_persistent_reserved_id_requires_token(
    http_client: httpx.AsyncClient,
) -> None:
    """Без токена зарезервированное имя отвечает 401, а не 400."""
    anonymous = await http_client.post("/health", content=b"x")
    invalid = await http_client.post(
        "/health", content=b"x", headers=auth_headers("nope")
    )

    assert anonymous.status_code == 401
    assert invalid.status_code == 401


@pytest.mark.asyncio
async def test_update_paste(
    http_client: httpx.AsyncClient,
    clock: FakeClock,
) -> None:
    """PATCH заменяет содержимое и продлевает срок только с токеном."""
    created = await http_client.post("/doc", content=b"v1", headers=auth_headers())
    assert created.status_code == 201

    denied = await http_client.patch("/doc", content=b"v2")
    assert denied.status_code == 401

    updated = await http_client.patch(
        "/doc",
        content=b"v2",
        headers={**auth_headers(), "X-Expires-After": "3600"},
    )
    assert updated.status_code == 200
    assert updated.headers["X-Expires-At"] == format_expires_at(
        clock() + timedelta(hours=1)
    )
    assert (await http_client.get("/doc")).content == b"v2"

    # Пустое тело - меняется только срок.
    extended = await http_client.patch(
        "/doc", headers={**auth_headers(), "X-Expires-After": "7200"}
    )
    assert extended.status_code == 200
    assert (await http_client.get("/doc")).content == b"v2"


@pytest.mark.asyncio
async def test_update_missing_or_expired(
    http_client: httpx.AsyncClient,
    clock: FakeClock,
) -> None:
    missing = await http_client.patch("/nothing", content=b"x", headers=auth_headers())
    assert missing.status_code == 404

    created = await http_client.post(
        "/", content=b"x", headers={"X-Expires-After": "10"}
    )
    paste_id = created.headers["Content-Location"].lstrip("/")
    clock.advance(seconds=11)

    expired = await http_client.patch(f"/{paste_id}", content=b"y", headers=auth_headers())
    assert expired.status_code == 404


@pytest.mark.asyncio
async def test_delete_paste(http_client: httpx.AsyncClient) -> None:
    created = await http_client.post("/", content=b"x")
    paste_id = created.headers["Content-Location"].lstrip("/")

    assert (await http_client.delete(f"/{paste_id}")).status_code == 401
    assert (await http_client.delete(f"/{paste_id}", headers=auth_headers())).status_code == 200
    assert (await http_client.get(f"/{paste_id}")).status_code == 404
    assert (await http_client.delete(f"/{paste_id}", headers=auth_headers())).status_code == 404


@pytest.mark.asyncio
async def test_token_endpoints(
    http_client: httpx.AsyncClient,
    token_repository: InMemoryTokenRepository,
) -> None:
    """Выпуск токена, самоотзыв и потеря прав."""
    assert (await http_client.post("/token")).status_code == 401

    issued = await http_client.post("/token", headers=auth_headers())
    assert issued.status_code == 200
    new_token = issued.text
    assert len(new_token) == 32

    revoked = await http_client.delete(f"/token/{new_token}", headers=auth_headers(new_token))
    assert revoked.status_code == 200
    assert await token_repository.exists(new_token) is False

    reused = await http_client.post("/doc", content=b"x", headers=auth_headers(new_token))
    assert reused.status_code == 401

    missing = await http_client.delete("/token/missing", headers=auth_headers())
    assert missing.status_code == 404
    assert await token_repository.exists(TEST_TOKEN) is True
