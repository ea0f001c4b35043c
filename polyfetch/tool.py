"""Agent-facing tool: describe() + invoke() over the lookup orchestrator."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any

import httpx

from .config import get_settings, load_api_key
from .engine import TOOL_NAME, run
from .market.polygon_client import PolygonClient
from .models import FetchRequest

DESCRIPTION = (
    "Fetch market data for a stock ticker from Polygon.io: the daily open/close for a "
    "date, the previous close, and a live ticker snapshot. Supply multiplier, timespan, "
    "from and to to also fetch historical aggregate bars. Each result that could not be "
    "fetched is returned as {\"error\": message}."
)


class PolygonDataFetcher:
    """Tool wrapper registered with an agent framework.

    Any object exposing ``describe()`` and ``invoke()`` can be registered;
    this one validates input, runs the lookups and returns JSON text.
    """

    name = TOOL_NAME

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str | None = None,
        render_table: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._render_table = render_table
        self._client = PolygonClient(
            load_api_key(api_key),
            base_url=base_url or get_settings().polygon_base_url,
            transport=transport,
        )

    @property
    def client(self) -> PolygonClient:
        return self._client

    def describe(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": DESCRIPTION,
            "inputSchema": FetchRequest.model_json_schema(by_alias=True),
        }

    async def ainvoke(self, tool_input: FetchRequest | Mapping[str, Any]) -> str:
        """Run all applicable lookups and return the serialized response.

        Raises ValidationError for malformed input; lookup failures are
        reported inline instead.
        """
        response = await run(tool_input, self._client, render_table=self._render_table)
        return response.to_json()

    def invoke(self, tool_input: FetchRequest | Mapping[str, Any]) -> str:
        """Synchronous entrypoint. Must not be called from a running event loop."""
        return asyncio.run(self.ainvoke(tool_input))
