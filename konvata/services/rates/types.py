# konvata/services/rates/types.py
"""
Data types for provider rate payloads.

The provider returns each rate in one of two shapes depending on the
`expand` flag:

    {"BTC": 50000.0}                                  # bare number
    {"BTC": {"rate": 50000.0, "high": ..., "low": ...}}  # expanded record

Both are modeled as a tagged union, `RateEntry = float | RateRecord`, and
`extract_rate()` is the only place that looks inside an entry. Every caller
that needs a number goes through it, so both shapes always behave the same.

All rates are USD per unit of the asset, whatever target was requested.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Mapping, TypeAlias

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateRecord:
    """
    Expanded rate entry with market metadata.

    Attributes:
        rate: Price of one unit of the asset
        high: 24h high
        low: 24h low
        vol: 24h volume
        cap: Market capitalization
        sup: Circulating supply
        change: 24h absolute change
        change_pct: 24h relative change in percent
    """

    rate: float
    high: float | None = None
    low: float | None = None
    vol: float | None = None
    cap: float | None = None
    sup: float | None = None
    change: float | None = None
    change_pct: float | None = None


RateEntry: TypeAlias = float | RateRecord

_RECORD_FIELDS = ("high", "low", "vol", "cap", "sup", "change", "change_pct")


def _as_number(value: Any) -> float | None:
    """Coerce a JSON number to float; booleans, strings and non-finite values are rejected."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    number = float(value)
    return number if math.isfinite(number) else None


def parse_rate_entry(raw: Any) -> RateEntry | None:
    """
    Build a RateEntry from a raw provider value.

    Returns:
        A float for bare numbers, a RateRecord for objects with a numeric
        `rate` field, or None for anything else.
    """
    number = _as_number(raw)
    if number is not None:
        return number

    if isinstance(raw, Mapping):
        rate = _as_number(raw.get("rate"))
        if rate is None:
            return None
        extras = {name: _as_number(raw.get(name)) for name in _RECORD_FIELDS}
        return RateRecord(rate=rate, **extras)

    return None


def extract_rate(entry: RateEntry | None) -> float | None:
    """
    Return the usable rate of an entry.

    Zero and negative rates are treated as missing: they cannot price an
    asset and would break a cross-rate division.
    """
    if entry is None:
        return None
    rate = entry.rate if isinstance(entry, RateRecord) else entry
    return rate if rate > 0 else None


@dataclass
class RateQuoteSet:
    """
    Rates from a single live or historical provider response.

    Attributes:
        timestamp: Unix time the rates were published
        target: Quote currency reported by the provider
        rates: Parsed entries keyed by uppercase asset code
    """

    timestamp: int | None = None
    target: str | None = None
    rates: dict[str, RateEntry] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "RateQuoteSet":
        """
        Parse a provider envelope.

        Entries that cannot be parsed are dropped (and logged), so a lookup
        for them behaves exactly like a lookup for an unquoted symbol.
        """
        raw_rates = payload.get("rates") or {}
        rates: dict[str, RateEntry] = {}

        if isinstance(raw_rates, Mapping):
            for symbol, raw in raw_rates.items():
                entry = parse_rate_entry(raw)
                if entry is None:
                    logger.debug(f"Ignoring unparsable rate entry for {symbol}: {raw!r}")
                    continue
                rates[str(symbol).upper()] = entry

        timestamp = payload.get("timestamp")
        return cls(
            timestamp=timestamp if isinstance(timestamp, int) and not isinstance(timestamp, bool) else None,
            target=payload.get("target"),
            rates=rates,
        )

    def rate_for(self, symbol: str) -> float | None:
        """Rate for `symbol`, or None when the symbol is absent or unusable."""
        return extract_rate(self.rates.get(symbol.upper()))

    def __contains__(self, symbol: object) -> bool:
        return isinstance(symbol, str) and self.rate_for(symbol) is not None
