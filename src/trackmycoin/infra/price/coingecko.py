"""CoinGecko price provider — fetches the current USD price of a coin."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import httpx
from tenacity import AsyncRetrying, RetryCallState, retry_if_exception_type, stop_after_attempt, wait_exponential

from trackmycoin.exceptions import (
    OraclePriceMissingError,
    OracleRateLimitedError,
    OracleStatusError,
    OracleTransportError,
)
from trackmycoin.infra.http.client import HttpClient
from trackmycoin.infra.price.symbols import resolve_coingecko_id

logger = logging.getLogger(__name__)

BASE_URL = "https://api.coingecko.com"

MAX_RETRIES = 3
BACKOFF_BASE_SECONDS = 2  # 2, 4, 8 seconds
PACE_SECONDS = 1.0

Sleep = Callable[[float], Awaitable[Any]]


class _TooManyRequests(Exception):
    pass


class CoinGeckoProvider:
    """Fetch current USD prices from /simple/price with 429 backoff and post-success pacing.

    Only a 429 is retried. Transport failures and any other non-2xx status fail
    on the spot. Every successful lookup sleeps PACE_SECONDS before returning so
    a caller looping over many rows stays under roughly one request per second.
    """

    def __init__(
        self,
        http_client: HttpClient,
        api_key: str = "",
        base_url: str = BASE_URL,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._http = http_client
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._sleep = sleep

    async def get_current_price(self, symbol: str) -> float:
        coingecko_id = resolve_coingecko_id(symbol)

        params: dict[str, str] = {"ids": coingecko_id, "vs_currencies": "usd"}
        if self._api_key:
            params["x_cg_demo_api_key"] = self._api_key

        url = f"{self._base_url}/api/v3/simple/price"

        retrying = AsyncRetrying(
            retry=retry_if_exception_type(_TooManyRequests),
            stop=stop_after_attempt(MAX_RETRIES + 1),
            wait=wait_exponential(multiplier=BACKOFF_BASE_SECONDS),
            sleep=self._sleep,
            before_sleep=lambda state: self._log_backoff(symbol, state),
            reraise=True,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    response = await self._request(url, params)
        except _TooManyRequests:
            raise OracleRateLimitedError(MAX_RETRIES) from None

        price = self._extract_price(response, coingecko_id)
        if price is None:
            raise OraclePriceMissingError(f"price not found for coin: {symbol} (ID: {coingecko_id})")

        await self._sleep(PACE_SECONDS)
        return price

    async def _request(self, url: str, params: dict[str, str]) -> httpx.Response:
        try:
            response = await self._http.get(url, params=params)
        except httpx.HTTPError as e:
            raise OracleTransportError(f"failed to get price from CoinGecko: {e}") from e

        if response.status_code == 429:
            raise _TooManyRequests()
        if not response.is_success:
            raise OracleStatusError(response.status_code)
        return response

    @staticmethod
    def _extract_price(response: httpx.Response, coingecko_id: str) -> float | None:
        try:
            data = response.json()
        except ValueError:
            return None

        entry = data.get(coingecko_id) if isinstance(data, dict) else None
        if not isinstance(entry, dict):
            return None

        price = entry.get("usd")
        if isinstance(price, bool) or not isinstance(price, (int, float)):
            return None
        return float(price)

    @staticmethod
    def _log_backoff(symbol: str, state: RetryCallState) -> None:
        wait = state.next_action.sleep if state.next_action else 0
        logger.info("CoinGecko 429 rate limit for %s, waiting %ds...", symbol, wait)
