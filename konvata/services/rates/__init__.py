# konvata/services/rates/__init__.py
"""
Rate provider package.

- Rate payload types and the single rate extraction function (types.py)
- Short-lived response cache (cache.py)
- coinlayer HTTP client (client.py)

Usage:
    from konvata.services.rates import RateProviderClient, RateQuoteSet

    quotes = RateQuoteSet.from_payload(client.live(symbols="BTC"))
    btc_usd = quotes.rate_for("BTC")
"""

from konvata.services.rates.cache import CacheStats, ResponseCache
from konvata.services.rates.client import RateProviderClient
from konvata.services.rates.types import (
    RateEntry,
    RateQuoteSet,
    RateRecord,
    extract_rate,
    parse_rate_entry,
)

__all__ = [
    # Types
    "RateEntry",
    "RateRecord",
    "RateQuoteSet",
    "extract_rate",
    "parse_rate_entry",
    # Cache
    "ResponseCache",
    "CacheStats",
    # Client
    "RateProviderClient",
]
