"""Render Polygon aggregate bars as a plain-text table."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from .models import AggregateBarRow

COLUMNS = ("Volume", "VWAP", "Open", "Close", "High", "Low", "Timestamp", "Transactions")

# Polygon bar keys, in column order (timestamp handled separately)
_BAR_KEYS = {
    "volume": "v",
    "vwap": "vw",
    "open": "o",
    "close": "c",
    "high": "h",
    "low": "l",
    "transactions": "n",
}


def format_timestamp(epoch_ms: Any) -> str:
    """Convert epoch milliseconds to a local, locale-formatted date-time string."""
    if epoch_ms is None or isinstance(epoch_ms, bool):
        return ""
    try:
        return datetime.fromtimestamp(float(epoch_ms) / 1000).strftime("%c")
    except (TypeError, ValueError, OverflowError, OSError):
        return str(epoch_ms)


def build_rows(payload: Any) -> list[AggregateBarRow]:
    """One row per bar in ``payload["results"]``, provider order preserved."""
    bars = payload.get("results") if isinstance(payload, dict) else None
    rows: list[AggregateBarRow] = []
    for bar in bars if isinstance(bars, list) else []:
        values = {field: bar.get(key) for field, key in _BAR_KEYS.items()}
        rows.append(AggregateBarRow(**values, timestamp=format_timestamp(bar.get("t"))))
    return rows


def _cell(value: Any) -> str:
    return "" if value is None else str(value)


def render_table(rows: list[AggregateBarRow]) -> str:
    """Pipe table: a header line, a separator line, then one line per row."""
    lines = [
        "| " + " | ".join(COLUMNS) + " |",
        "|" + "|".join("---" for _ in COLUMNS) + "|",
    ]
    for row in rows:
        cells = [
            row.volume,
            row.vwap,
            row.open,
            row.close,
            row.high,
            row.low,
            row.timestamp,
            row.transactions,
        ]
        lines.append("| " + " | ".join(_cell(c) for c in cells) + " |")
    return "\n".join(lines)


def render_aggregates(payload: Any) -> str:
    return render_table(build_rows(payload))
