"""
Airbnb API - Client for the unofficial Airbnb web API
=====================================================

Supports basic actions on Airbnb hostings:
- search() - Hosting ids matching search filters
- availability() - Availability calendar for a hosting
- income() - Estimated income a hosting generates, by month
- info() - Listing info for a hosting
- info_page() - Title, description and metadata scraped from the listing page
- reviews() - Review texts for a user, as host or guest

Quick Start:
-----------
```python
from airbnb_api import AirbnbClient, ClientConfig

async def main():
    config = ClientConfig.from_file("secrets.json")

    async with AirbnbClient(config) as client:
        outcome = await client.search({"location": "Seattle, WA", "guests": 2})
        hosting_ids = outcome.unwrap().hosting_ids

        income = await client.income(hosting_ids[0], {"count": 6})
        for month in income.unwrap():
            print(f"{month.month}/{month.year}: ${month.est_income:.0f}")

        # Callback style
        await client.reviews(
            "12345",
            {"role": "guest"},
            on_success=lambda reviews: print(len(reviews)),
            on_failure=lambda err, res: print(f"Failed: {err}"),
        )
```
"""

__version__ = "1.0.0"

from .client import (
    AirbnbClient,
    ClientMetrics,
    Outcome,
)

from .config import ClientConfig

from .exceptions import (
    AirbnbAPIError,
    ArgumentError,
    ConfigError,
    HTTPStatusError,
    ParseError,
    TransportError,
)

from .income import (
    CalendarDay,
    CalendarMonth,
    MonthlyIncomeEstimate,
    estimate_income,
)

from .parsing import ListingPageInfo, SearchResult

from .serializer import serialize

__all__ = [
    # Main classes
    "AirbnbClient",
    "ClientConfig",
    "Outcome",
    "ClientMetrics",

    # Data classes
    "SearchResult",
    "ListingPageInfo",
    "CalendarDay",
    "CalendarMonth",
    "MonthlyIncomeEstimate",

    # Errors
    "AirbnbAPIError",
    "ArgumentError",
    "ConfigError",
    "TransportError",
    "HTTPStatusError",
    "ParseError",

    # Utilities
    "serialize",
    "estimate_income",
]
