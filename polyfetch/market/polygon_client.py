"""Async Polygon.io REST client: one endpoint method per supported lookup."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from ..config import DEFAULT_BASE_URL
from ..errors import RemoteCallError

logger = logging.getLogger(__name__)


def _segment(value: Any) -> str:
    """Percent-encode a single path segment."""
    return quote(str(value), safe="")


def _flag(value: bool) -> str:
    return "true" if value else "false"


class PolygonClient:
    """Endpoint gateway for the Polygon stocks API.

    Every method performs exactly one GET with the httpx default timeout and
    returns the decoded JSON body. Non-2xx responses, transport failures and
    undecodable bodies all raise RemoteCallError.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._transport = transport

    async def fetch_daily_open_close(self, ticker: str, date: str) -> Any:
        endpoint = f"/v1/open-close/{_segment(ticker)}/{_segment(date)}"
        return await self._get(endpoint)

    async def fetch_previous_close(self, ticker: str) -> Any:
        endpoint = f"/v2/aggs/ticker/{_segment(ticker)}/prev"
        return await self._get(endpoint)

    async def fetch_ticker_snapshot(
        self,
        ticker: str,
        include_last_quote: bool = False,
        include_last_trade: bool = False,
        include_prev_day: bool = False,
        include_min: bool = False,
    ) -> Any:
        endpoint = f"/v2/snapshot/locale/us/markets/stocks/tickers/{_segment(ticker)}"
        flags = {
            "includeLastQuote": include_last_quote,
            "includeLastTrade": include_last_trade,
            "includePrevDay": include_prev_day,
            "includeMin": include_min,
        }
        # Polygon only expects the flags that are switched on
        params = {name: "true" for name, enabled in flags.items() if enabled}
        return await self._get(endpoint, params)

    async def fetch_aggregate_bars(
        self,
        ticker: str,
        multiplier: int,
        timespan: str,
        from_: str,
        to: str,
        adjusted: bool = True,
        sort: str = "asc",
        limit: int = 5000,
    ) -> Any:
        endpoint = (
            f"/v2/aggs/ticker/{_segment(ticker)}/range/{_segment(multiplier)}"
            f"/{_segment(timespan)}/{_segment(from_)}/{_segment(to)}"
        )
        params = {"adjusted": _flag(adjusted), "sort": sort, "limit": str(limit)}
        return await self._get(endpoint, params)

    async def _get(self, endpoint: str, params: dict[str, str] | None = None) -> Any:
        query = {"apiKey": self._api_key, **(params or {})}
        url = f"{self._base_url}{endpoint}"

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                resp = await client.get(url, params=query)
        except httpx.HTTPError as exc:
            logger.debug("Polygon request to %s failed: %s", endpoint, exc)
            raise RemoteCallError(str(exc) or type(exc).__name__) from exc

        if not resp.is_success:
            body = resp.text
            logger.debug("Polygon %s returned HTTP %s", endpoint, resp.status_code)
            raise RemoteCallError(
                f"Request failed with status {resp.status_code}: {body}",
                status_code=resp.status_code,
                body=body,
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise RemoteCallError(
                f"Invalid JSON in response from {endpoint}",
                status_code=resp.status_code,
                body=resp.text,
            ) from exc

        logger.debug("Polygon %s returned HTTP %s", endpoint, resp.status_code)
        return data
