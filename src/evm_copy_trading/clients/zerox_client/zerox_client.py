# -*- coding: utf-8 -*-
"""0x Swap API client (allowance-holder quotes)."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, cast

import structlog

from evm_copy_trading.clients.zerox_client.schema import QuoteResponseSchema
from evm_copy_trading.exceptions import ApiError, QuoteError
from evm_copy_trading.utils.validation import mask_address

if TYPE_CHECKING:
    from evm_copy_trading.clients.http import AsyncHttpClient
    from evm_copy_trading.config import Settings

# 0x sentinel for the chain's native asset (ETH on Base).
NATIVE_TOKEN_ADDRESS = "0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE"


class ZeroExClient:
    """Client for the 0x Swap API. Quotes are single-shot: one attempt, short timeout."""

    def __init__(
        self,
        http_client: AsyncHttpClient,
        settings: Settings,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            http_client: Shared HTTP client.
            settings: Configuration (uses settings.aggregator and settings.chain.chain_id).
            get_logger: Logger factory (injected).
            logger_name: Optional logger name (defaults to class name).
        """
        self._http = http_client
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def _quote_url(self) -> str:
        agg = self._settings.aggregator
        return agg.zerox_host.rstrip("/") + "/" + agg.quote_path.lstrip("/")

    def _headers(self) -> dict[str, str]:
        agg = self._settings.aggregator
        headers = {"0x-version": agg.api_version}
        if agg.api_key:
            headers["0x-api-key"] = agg.api_key
        return headers

    async def get_quote(
        self,
        *,
        buy_token: str,
        sell_amount_wei: int,
        taker: str,
        sell_token: str = NATIVE_TOKEN_ADDRESS,
        slippage_bps: int | None = None,
    ) -> QuoteResponseSchema:
        """Request a firm quote to sell sell_amount_wei of sell_token for buy_token.

        Raises:
            QuoteError: On timeout, transport/HTTP error, or a non-object response.
        """
        params: dict[str, Any] = {
            "chainId": self._settings.chain.chain_id,
            "sellToken": sell_token,
            "buyToken": buy_token,
            "sellAmount": str(sell_amount_wei),
            "taker": taker,
            "slippageBps": (
                slippage_bps if slippage_bps is not None else self._settings.trading.slippage_bps
            ),
        }
        try:
            response = await self._http.get(
                self._quote_url(),
                params=params,
                headers=self._headers(),
                timeout=self._settings.aggregator.timeout_seconds,
            )
        except ApiError as e:
            self._logger.warning(
                "zerox_quote_request_failed",
                buy_token=buy_token,
                status_code=e.status_code,
                response_body=e.body,
            )
            raise QuoteError(
                f"0x quote request failed: {e}", token_address=buy_token, cause=e
            ) from e

        if not isinstance(response, dict):
            raise QuoteError(
                f"Unexpected 0x response type: {type(response).__name__}",
                token_address=buy_token,
            )
        quote = cast(QuoteResponseSchema, response)
        self._logger.debug(
            "zerox_quote_received",
            buy_token=buy_token,
            taker_masked=mask_address(taker),
            sell_amount_wei=sell_amount_wei,
            buy_amount=quote.get("buyAmount"),
            liquidity_available=quote.get("liquidityAvailable"),
        )
        return quote
