# konvata/services/price_history.py
"""
Price history for the chart.

The provider plan behind Konvata does not expose time series, so the chart
is fed a simulated daily series anchored on the current live price: a
bounded random walk whose last point is the real price. When the live price
cannot be fetched the series is anchored on a random base price instead and
flagged with a warning.

This data is illustrative only and must not be used for conversions.
"""

import logging
import random
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Callable

from konvata.schemas.history import PricePoint, PriceHistoryResponse
from konvata.services.constants import (
    DEFAULT_TARGET,
    HISTORY_DAILY_SWING,
    HISTORY_FALLBACK_BASE,
    HISTORY_MAX_DAYS,
    HISTORY_PRICE_DECIMALS,
    HISTORY_PRICE_FLOOR,
    HISTORY_SIMULATED_WARNING,
    HISTORY_START_MIN,
    HISTORY_START_SPREAD,
)
from konvata.services.exceptions import (
    NoLiveRateError,
    ProviderConfigurationError,
    RateProviderError,
    ValidationError,
)
from konvata.services.rates.client import RateProviderClient
from konvata.services.rates.types import RateQuoteSet

logger = logging.getLogger(__name__)


@dataclass
class PriceHistory:
    """
    A generated price series.

    Attributes:
        symbol: Asset code
        target: Quote currency requested
        points: Daily (date, price) pairs, oldest first
        simulated_base: True when no live price anchored the series
    """

    symbol: str
    target: str
    points: list[tuple[date, float]] = field(default_factory=list)
    simulated_base: bool = False

    def to_schema(self) -> PriceHistoryResponse:
        return PriceHistoryResponse(
            data=[PricePoint(date=d, price=p) for d, p in self.points],
            warning=HISTORY_SIMULATED_WARNING if self.simulated_base else None,
        )


class PriceHistoryService:
    """
    Builds chart series from the current live price.

    Args:
        client: Provider client for the live price lookup
        rng: Random source (seed it in tests)
        today: Clock returning the last date of the series
    """

    def __init__(
            self,
            client: RateProviderClient,
            rng: random.Random | None = None,
            today: Callable[[], date] = date.today,
    ) -> None:
        self._client = client
        self._rng = rng or random.Random()
        self._today = today

    def get_history(
            self,
            symbol: str | None,
            target: str | None = DEFAULT_TARGET,
            days: int = HISTORY_MAX_DAYS,
    ) -> PriceHistory:
        """
        Generate `days + 1` daily points ending today.

        Raises:
            ValidationError: symbol missing
            ProviderConfigurationError: no provider credential
        """
        symbol = (symbol or "").strip().upper()
        if not symbol:
            raise ValidationError("Symbol is required", field="symbol")

        target = (target or DEFAULT_TARGET).strip().upper()
        days = max(1, min(HISTORY_MAX_DAYS, days))

        simulated_base = False
        try:
            price = self._current_price(symbol, target)
        except ProviderConfigurationError:
            raise
        except (RateProviderError, NoLiveRateError) as e:
            logger.warning(f"Live price for {symbol}/{target} unavailable, simulating: {e}")
            price = HISTORY_FALLBACK_BASE * (0.5 + self._rng.random())
            simulated_base = True

        return PriceHistory(
            symbol=symbol,
            target=target,
            points=self._random_walk(price, days),
            simulated_base=simulated_base,
        )

    def _current_price(self, symbol: str, target: str) -> float:
        quotes = RateQuoteSet.from_payload(self._client.live(target=target, symbols=symbol))
        price = quotes.rate_for(symbol)
        if price is None:
            raise NoLiveRateError(symbol, to_currency=target)
        return price

    def _random_walk(self, current_price: float, days: int) -> list[tuple[date, float]]:
        """Bounded random walk over `days + 1` dates; the last point is `current_price`."""
        start = self._today() - timedelta(days=days)
        floor = current_price * HISTORY_PRICE_FLOOR
        value = current_price * (HISTORY_START_MIN + self._rng.random() * HISTORY_START_SPREAD)

        points = []
        for offset in range(days + 1):
            change = (self._rng.random() - 0.5) * HISTORY_DAILY_SWING
            value = max(floor, value * (1 + change))
            points.append((start + timedelta(days=offset), round(value, HISTORY_PRICE_DECIMALS)))

        points[-1] = (points[-1][0], current_price)
        return points
