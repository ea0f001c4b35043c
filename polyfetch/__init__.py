"""Polyfetch: aggregated Polygon.io market data for a single ticker."""

from .engine import run
from .errors import ConfigurationError, PolyfetchError, RemoteCallError, ValidationError
from .models import AggregateBarRow, AggregationResponse, FetchRequest, LookupOutcome
from .tool import PolygonDataFetcher

__all__ = [
    "run",
    "AggregateBarRow",
    "AggregationResponse",
    "ConfigurationError",
    "FetchRequest",
    "LookupOutcome",
    "PolyfetchError",
    "PolygonDataFetcher",
    "RemoteCallError",
    "ValidationError",
]
