"""Example: fetch daily, previous-close, snapshot and bar data for one ticker."""

import asyncio

from polyfetch import PolygonDataFetcher, run


async def main():
    tool = PolygonDataFetcher(render_table=True)
    response = await run(
        {
            "stocksTicker": "AAPL",
            "multiplier": 1,
            "timespan": "day",
            "from": "2024-01-01",
            "to": "2024-01-05",
        },
        tool.client,
        render_table=True,
    )

    print(f"{response.ticker} @ {response.date}")
    for name, outcome in response.outcomes.items():
        print(f"\n{'=' * 60}\n{name}\n{'=' * 60}")
        if not outcome.ok:
            print(f"  Error: {outcome.error}")
        elif outcome.table is not None:
            print(outcome.table)
        else:
            print(f"  {outcome.payload}")


if __name__ == "__main__":
    asyncio.run(main())
