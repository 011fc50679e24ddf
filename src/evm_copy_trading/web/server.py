# -*- coding: utf-8 -*-
"""Inbound webhook HTTP server (aiohttp)."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog
from aiohttp import web

from evm_copy_trading.exceptions import AuthenticationError

if TYPE_CHECKING:
    from evm_copy_trading.config import Settings
    from evm_copy_trading.services.dispatch import EventDispatcher

SIGNATURE_HEADERS = ("x-alchemy-signature", "x-webhook-signature")


def _signature_header(request: web.Request) -> Optional[str]:
    for name in SIGNATURE_HEADERS:
        value = request.headers.get(name)
        if value:
            return value
    return None


def create_app(
    dispatcher: "EventDispatcher",
    settings: "Settings",
    wallet_address: str,
    *,
    get_logger: Callable[[str], Any] = structlog.get_logger,
) -> web.Application:
    """Build the aiohttp application.

    POST on each of settings.server.webhook_paths acknowledges a notification
    right after it is authenticated and decoded; processing continues in the
    background.
    GET /health reports the watched and signing wallets.
    """
    logger = get_logger("WebhookServer")

    async def handle_webhook(request: web.Request) -> web.Response:
        body = await request.read()
        try:
            dispatcher.authenticate(body, _signature_header(request))
        except AuthenticationError:
            return web.json_response({"error": "Invalid signature"}, status=401)
        try:
            payload = json.loads(body)
        except (UnicodeDecodeError, ValueError):
            logger.warning("webhook_invalid_json", body_size=len(body))
            return web.json_response({"error": "Invalid JSON"}, status=400)
        dispatcher.submit(payload)
        return web.json_response({"status": "received"})

    async def handle_health(request: web.Request) -> web.Response:
        return web.json_response(
            {
                "status": "running",
                "target": settings.tracking.target_wallet,
                "wallet": wallet_address,
            }
        )

    app = web.Application()
    for path in settings.server.webhook_paths:
        app.router.add_post(path, handle_webhook)
    app.router.add_get("/health", handle_health)
    return app


class WebhookServer:
    """Runs the webhook application on settings.server.host:port."""

    def __init__(
        self,
        dispatcher: "EventDispatcher",
        settings: "Settings",
        wallet_address: str,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._settings = settings
        self._app = create_app(dispatcher, settings, wallet_address, get_logger=get_logger)
        self._runner: Optional[web.AppRunner] = None
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def app(self) -> web.Application:
        return self._app

    @property
    def is_running(self) -> bool:
        return self._runner is not None

    async def start(self) -> None:
        if self._runner is not None:
            return
        server = self._settings.server
        runner = web.AppRunner(self._app, access_log=None)
        await runner.setup()
        site = web.TCPSite(runner, server.host, server.port)
        await site.start()
        self._runner = runner
        self._logger.info(
            "webhook_server_started",
            host=server.host,
            port=server.port,
            signature_required=bool(server.signing_key),
        )

    async def stop(self) -> None:
        if self._runner is None:
            return
        await self._runner.cleanup()
        self._runner = None
        self._logger.info("webhook_server_stopped")
