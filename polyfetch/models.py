"""Request and response models.

A FetchRequest is the validated tool input. Each attempted lookup produces a
LookupOutcome, and the outcomes for one invocation are collected into an
AggregationResponse keyed by lookup name.
"""

from __future__ import annotations

import json
import re
from datetime import date as Date
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

Timespan = Literal["minute", "hour", "day", "week", "month", "quarter", "year"]
SortOrder = Literal["asc", "desc"]

_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")

# Fixed insertion order of lookup keys in every response
LOOKUP_KEYS = ("dailyOpenClose", "previousClose", "tickerData", "aggregates")


class FetchRequest(BaseModel):
    """Validated invocation input. Accepts the camelCase wire names."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    stocks_ticker: str = Field(
        alias="stocksTicker",
        min_length=1,
        description="Specify a case-sensitive stock ticker symbol.",
    )
    date: Date | None = Field(
        default=None,
        description=(
            "Only for specific dates. The date of the requested open/close in the format "
            "YYYY-MM-DD. Defaults to the current date and can be omitted."
        ),
    )
    include_last_quote: bool = Field(default=False, alias="includeLastQuote")
    include_last_trade: bool = Field(default=False, alias="includeLastTrade")
    include_prev_day: bool = Field(default=False, alias="includePrevDay")
    include_min: bool = Field(default=False, alias="includeMin")

    # Aggregate bars range; only used when multiplier/timespan/from/to are all set
    multiplier: int | None = Field(default=None, gt=0)
    timespan: Timespan | None = None
    from_: str | None = Field(default=None, alias="from", min_length=1)
    to: str | None = Field(default=None, min_length=1)
    adjusted: bool = True
    sort: SortOrder = "asc"
    limit: int = Field(default=5000, gt=0, le=50000)

    @field_validator("date", mode="before")
    @classmethod
    def _iso_date(cls, value: Any) -> Any:
        """Only a YYYY-MM-DD string or a plain date; no epoch ints or datetimes."""
        if value is None or (isinstance(value, Date) and not isinstance(value, datetime)):
            return value
        if isinstance(value, str) and _ISO_DATE.fullmatch(value):
            return Date.fromisoformat(value)
        raise ValueError("date must be a YYYY-MM-DD string")

    @property
    def wants_aggregates(self) -> bool:
        return (
            self.multiplier is not None
            and self.timespan is not None
            and self.from_ is not None
            and self.to is not None
        )


class LookupOutcome(BaseModel):
    """Result of one endpoint lookup: a raw payload or a failure message."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    lookup: str
    payload: Any = None
    error: str | None = None
    cause: BaseException | None = Field(default=None, exclude=True)
    table: str | None = None

    @classmethod
    def success(cls, lookup: str, payload: Any) -> LookupOutcome:
        return cls(lookup=lookup, payload=payload)

    @classmethod
    def failure(cls, lookup: str, message: str, cause: BaseException | None = None) -> LookupOutcome:
        return cls(lookup=lookup, error=message or f"An error occurred fetching {lookup}", cause=cause)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_output(self) -> Any:
        """Wire value for this slot: table text, raw payload, or ``{"error": ...}``."""
        if not self.ok:
            return {"error": self.error}
        if self.table is not None:
            return self.table
        return self.payload


class AggregateBarRow(BaseModel):
    """One rendered aggregate bar, columns in display order."""

    volume: float | int | None = None
    vwap: float | None = None
    open: float | None = None
    close: float | None = None
    high: float | None = None
    low: float | None = None
    timestamp: str = ""
    transactions: int | None = None


class AggregationResponse(BaseModel):
    """All attempted lookups for one ticker, in fixed key order."""

    ticker: str
    date: str
    outcomes: dict[str, LookupOutcome] = Field(default_factory=dict)

    @property
    def errors(self) -> dict[str, str]:
        return {k: o.error for k, o in self.outcomes.items() if o.error is not None}

    def to_output(self) -> dict[str, Any]:
        return {key: outcome.to_output() for key, outcome in self.outcomes.items()}

    def to_json(self) -> str:
        return json.dumps(self.to_output())
