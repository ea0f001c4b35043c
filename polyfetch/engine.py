"""Orchestrator: concurrent Polygon lookups into one AggregationResponse."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Awaitable, Mapping
from datetime import date
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from .errors import RemoteCallError, ValidationError
from .market.polygon_client import PolygonClient
from .models import LOOKUP_KEYS, AggregationResponse, FetchRequest, LookupOutcome
from .table import render_aggregates

logger = logging.getLogger(__name__)

TOOL_NAME = "polygon_data_fetcher"


def _today() -> str:
    """Current local date as zero-padded YYYY-MM-DD."""
    return date.today().strftime("%Y-%m-%d")


def validate_request(request: FetchRequest | Mapping[str, Any]) -> FetchRequest:
    """Coerce raw tool input into a FetchRequest or raise ValidationError."""
    if isinstance(request, FetchRequest):
        return request
    if not isinstance(request, Mapping):
        raise ValidationError(
            [{"type": "model_type", "loc": [], "msg": "Input should be an object"}]
        )
    try:
        return FetchRequest.model_validate(dict(request))
    except PydanticValidationError as exc:
        raise ValidationError(json.loads(exc.json(include_url=False))) from exc


def _failure_message(lookup: str, exc: BaseException) -> str:
    message = str(exc) or f"An error occurred using {TOOL_NAME}"
    # Polygon answers NOT_FOUND for weekends and market holidays
    if lookup == "dailyOpenClose" and getattr(exc, "status_code", None) == 404:
        return f"{message} (likely not a trading day)"
    return message


async def run(
    request: FetchRequest | Mapping[str, Any],
    client: PolygonClient,
    *,
    render_table: bool = False,
) -> AggregationResponse:
    """Fetch every applicable lookup for one ticker.

    Raises ValidationError for malformed input before any network call.
    Otherwise never raises: each lookup failure is recorded in its own slot
    and the remaining lookups still complete.
    """
    req = validate_request(request)
    ticker = req.stocks_ticker
    resolved_date = req.date.strftime("%Y-%m-%d") if req.date else _today()

    calls: dict[str, Awaitable[Any]] = {
        "dailyOpenClose": client.fetch_daily_open_close(ticker, resolved_date),
        "previousClose": client.fetch_previous_close(ticker),
        "tickerData": client.fetch_ticker_snapshot(
            ticker,
            req.include_last_quote,
            req.include_last_trade,
            req.include_prev_day,
            req.include_min,
        ),
    }
    if req.wants_aggregates:
        calls["aggregates"] = client.fetch_aggregate_bars(
            ticker,
            req.multiplier,
            req.timespan,
            req.from_,
            req.to,
            adjusted=req.adjusted,
            sort=req.sort,
            limit=req.limit,
        )

    gathered = await asyncio.gather(*calls.values(), return_exceptions=True)
    results = dict(zip(calls, gathered))

    response = AggregationResponse(ticker=ticker, date=resolved_date)
    for lookup in LOOKUP_KEYS:
        if lookup in results:
            response.outcomes[lookup] = _to_outcome(lookup, results[lookup])

    if render_table:
        _render_aggregates(response)

    failed = response.errors
    if failed:
        logger.warning(
            "%s: %d of %d lookups failed (%s)", ticker, len(failed), len(calls), ", ".join(failed)
        )
    return response


def _to_outcome(lookup: str, result: Any) -> LookupOutcome:
    if isinstance(result, BaseException):
        # CancelledError and friends are not lookup failures
        if not isinstance(result, Exception):
            raise result
        if not isinstance(result, RemoteCallError):
            logger.error("Unexpected error in %s lookup", lookup, exc_info=result)
        return LookupOutcome.failure(lookup, _failure_message(lookup, result), cause=result)
    logger.debug("%s lookup succeeded", lookup)
    return LookupOutcome.success(lookup, result)


def _render_aggregates(response: AggregationResponse) -> None:
    outcome = response.outcomes.get("aggregates")
    if outcome is None or not outcome.ok:
        return
    try:
        outcome.table = render_aggregates(outcome.payload)
    except (PydanticValidationError, AttributeError) as exc:
        logger.warning("Could not render aggregates table for %s: %s", response.ticker, exc)
