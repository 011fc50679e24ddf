# -*- coding: utf-8 -*-
"""Unit tests for AsyncHttpClient."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from evm_copy_trading.clients.http import AsyncHttpClient
from evm_copy_trading.config import Settings
from evm_copy_trading.exceptions import ApiError


async def _quote(request: web.Request) -> web.Response:
    return web.json_response({"echo": dict(request.query), "key": request.headers.get("x-key")})


async def _invalid(request: web.Request) -> web.Response:
    return web.json_response({"name": "INPUT_INVALID"}, status=400)


async def _slow(request: web.Request) -> web.Response:
    await asyncio.sleep(1.0)
    return web.json_response({})


@pytest.fixture
async def server() -> AsyncIterator[TestServer]:
    """Local JSON API with an ok, an invalid-input and a slow endpoint."""
    app = web.Application()
    app.router.add_get("/quote", _quote)
    app.router.add_get("/invalid", _invalid)
    app.router.add_get("/slow", _slow)
    test_server = TestServer(app)
    await test_server.start_server()
    yield test_server
    await test_server.close()


@pytest.fixture
async def http_client(settings: Settings) -> AsyncIterator[AsyncHttpClient]:
    """Client owning its session; closed after the test."""
    client = AsyncHttpClient(settings)
    yield client
    await client.aclose()


async def test_get_returns_decoded_json(server: TestServer, http_client: AsyncHttpClient) -> None:
    body = await http_client.get(
        str(server.make_url("/quote")),
        params={"chainId": 8453},
        headers={"x-key": "k"},
    )

    assert body == {"echo": {"chainId": "8453"}, "key": "k"}


async def test_error_status_carries_status_and_body(
    server: TestServer,
    http_client: AsyncHttpClient,
) -> None:
    url = str(server.make_url("/invalid"))

    with pytest.raises(ApiError) as exc_info:
        await http_client.get(url)

    assert exc_info.value.status_code == 400
    assert exc_info.value.body == {"name": "INPUT_INVALID"}
    assert exc_info.value.url == url


async def test_timeout_becomes_api_error(server: TestServer, http_client: AsyncHttpClient) -> None:
    with pytest.raises(ApiError) as exc_info:
        await http_client.get(str(server.make_url("/slow")), timeout=0.05)

    assert exc_info.value.status_code is None
    assert isinstance(exc_info.value.cause, asyncio.TimeoutError)


async def test_aclose_closes_owned_session(settings: Settings, server: TestServer) -> None:
    client = AsyncHttpClient(settings)
    await client.get(str(server.make_url("/quote")))

    await client.aclose()

    assert client._session is None
