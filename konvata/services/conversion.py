# konvata/services/conversion.py
"""
Conversion resolver.

Resolves `(from, to, amount, date?)` into a conversion result, preferring
the provider's native /convert endpoint and falling back to a computation
from live USD rates when the native call is rejected (most often because
/convert is not part of the free plan).

Flow (one request, no state kept between requests):

    Validate ──► Native ──success──────────────────────────► NATIVE
                   │
                   └─failure─► to == USD ──rate found──────► FALLBACK_USD
                                 │            └─no rate───► NoLiveRateError (400)
                                 └─other ────both rates────► FALLBACK_CROSS
                                              └─missing────► UnsupportedConversionError (402)

Formulas (live rates are USD per unit of the asset):
    FALLBACK_USD:   result = amount * rate(from)
    FALLBACK_CROSS: result = amount * (rate(to) / rate(from))

The fallback runs only after the native call has failed; the two are
never raced.
"""

import logging
import math
from dataclasses import dataclass
from datetime import date as date_type
from enum import Enum
from typing import Any

from konvata.schemas.conversion import ConversionInfo, ConversionQuery, ConversionResult
from konvata.services.constants import (
    NOTE_FALLBACK_CROSS,
    NOTE_FALLBACK_USD,
    UNSUPPORTED_CONVERSION_MESSAGE,
    USD,
)
from konvata.services.exceptions import (
    InvalidAmountError,
    InvalidDateError,
    MissingParamsError,
    NoLiveRateError,
    ProviderConfigurationError,
    RateProviderError,
    UnsupportedConversionError,
)
from konvata.services.rates.client import RateProviderClient
from konvata.services.rates.types import RateQuoteSet

logger = logging.getLogger(__name__)

REQUIRED_PARAMS = ["from", "to", "amount"]


class ConversionPath(str, Enum):
    """How a conversion result was obtained."""
    NATIVE = "native"
    FALLBACK_USD = "fallback_usd"
    FALLBACK_CROSS = "fallback_cross"


@dataclass(frozen=True)
class ConversionRequest:
    """
    A validated conversion request.

    Attributes:
        from_currency: Uppercase source asset code
        to_currency: Uppercase target asset code
        amount: Finite amount greater than zero
        amount_text: The amount as the caller sent it (forwarded to /convert)
        date: Optional YYYY-MM-DD for a historical native conversion
    """

    from_currency: str
    to_currency: str
    amount: float
    amount_text: str
    date: str | None = None


@dataclass(frozen=True)
class ConversionOutcome:
    """
    Final result of a resolution.

    Attributes:
        path: Which branch produced the body
        body: JSON object returned to the caller
    """

    path: ConversionPath
    body: dict[str, Any]


def parse_amount(raw: str) -> float:
    """
    Parse an amount string.

    Raises:
        InvalidAmountError: Not a number, not finite, or not greater than zero
    """
    try:
        amount = float(raw)
    except (TypeError, ValueError):
        raise InvalidAmountError(raw)

    if not math.isfinite(amount) or amount <= 0:
        raise InvalidAmountError(raw)

    return amount


def validate_date(raw: str) -> str:
    """
    Check that `raw` is a YYYY-MM-DD calendar date and return it.

    Raises:
        InvalidDateError: Malformed or impossible date
    """
    try:
        parsed = date_type.fromisoformat(raw)
    except ValueError:
        raise InvalidDateError(raw)

    # fromisoformat also accepts compact and week forms on newer Pythons
    if parsed.isoformat() != raw:
        raise InvalidDateError(raw)

    return raw


class ConversionResolver:
    """
    Resolves conversions through the provider, with a live-rate fallback.

    Args:
        client: Provider client used for both the native and fallback calls
    """

    def __init__(self, client: RateProviderClient) -> None:
        self._client = client

    # =========================================================================
    # VALIDATE
    # =========================================================================

    @staticmethod
    def validate(
            from_currency: str | None,
            to_currency: str | None,
            amount: str | None,
            date: str | None = None,
    ) -> ConversionRequest:
        """
        Normalize and validate raw query parameters.

        Raises:
            MissingParamsError: from, to or amount missing or blank
            InvalidAmountError: amount unparsable, non-finite or <= 0
            InvalidDateError: date present but not YYYY-MM-DD
        """
        values = {
            "from": (from_currency or "").strip(),
            "to": (to_currency or "").strip(),
            "amount": (amount or "").strip(),
        }
        missing = [name for name in REQUIRED_PARAMS if not values[name]]
        if missing:
            raise MissingParamsError(REQUIRED_PARAMS, missing=missing)

        parsed_amount = parse_amount(values["amount"])

        date = (date or "").strip() or None
        if date is not None:
            validate_date(date)

        return ConversionRequest(
            from_currency=values["from"].upper(),
            to_currency=values["to"].upper(),
            amount=parsed_amount,
            amount_text=values["amount"],
            date=date,
        )

    # =========================================================================
    # RESOLVE
    # =========================================================================

    def resolve(
            self,
            from_currency: str | None,
            to_currency: str | None,
            amount: str | None,
            date: str | None = None,
    ) -> ConversionOutcome:
        """
        Convert `amount` of `from_currency` into `to_currency`.

        Returns:
            ConversionOutcome whose body is either the provider's own
            response (verbatim) or a fallback ConversionResult

        Raises:
            ValidationError subclasses: Bad input (no network call made)
            NoLiveRateError: USD fallback found no rate for `from`
            UnsupportedConversionError: Cross fallback found no rate for a side
            RateProviderError: Missing credential, or the fallback lookup failed
        """
        request = self.validate(from_currency, to_currency, amount, date)

        try:
            native = self._client.convert(
                request.from_currency,
                request.to_currency,
                request.amount_text,
                request.date,
            )
        except ProviderConfigurationError:
            raise
        except RateProviderError as e:
            logger.info(
                f"Native conversion {request.from_currency}->{request.to_currency} "
                f"unavailable ({e}); using live-rate fallback"
            )
            return self._fallback(request, e)

        logger.debug(f"Native conversion {request.from_currency}->{request.to_currency} succeeded")
        return ConversionOutcome(path=ConversionPath.NATIVE, body=native)

    def _fallback(self, request: ConversionRequest, native_error: RateProviderError) -> ConversionOutcome:
        if request.to_currency == USD:
            return self._fallback_usd(request)
        return self._fallback_cross(request, native_error)

    def _fallback_usd(self, request: ConversionRequest) -> ConversionOutcome:
        """amount * rate(from), using the live USD rate of `from`."""
        quotes = RateQuoteSet.from_payload(self._client.live(symbols=request.from_currency))
        rate = quotes.rate_for(request.from_currency)

        if rate is None:
            logger.warning(f"No live rate for {request.from_currency}")
            raise NoLiveRateError(request.from_currency, to_currency=request.to_currency)

        return self._build_outcome(
            request,
            path=ConversionPath.FALLBACK_USD,
            rate=rate,
            timestamp=quotes.timestamp,
            note=NOTE_FALLBACK_USD,
        )

    def _fallback_cross(
            self,
            request: ConversionRequest,
            native_error: RateProviderError,
    ) -> ConversionOutcome:
        """amount * (rate(to) / rate(from)), both rates USD-denominated."""
        symbols = f"{request.from_currency},{request.to_currency}"
        quotes = RateQuoteSet.from_payload(self._client.live(symbols=symbols))

        rate_from = quotes.rate_for(request.from_currency)
        rate_to = quotes.rate_for(request.to_currency)

        if rate_from is None or rate_to is None:
            missing = [
                symbol
                for symbol, rate in ((request.from_currency, rate_from), (request.to_currency, rate_to))
                if rate is None
            ]
            logger.warning(
                f"Unsupported conversion {request.from_currency}->{request.to_currency}: "
                f"no live rate for {', '.join(missing)}"
            )
            raise UnsupportedConversionError(
                request.from_currency,
                request.to_currency,
                message=native_error.message or UNSUPPORTED_CONVERSION_MESSAGE,
            )

        return self._build_outcome(
            request,
            path=ConversionPath.FALLBACK_CROSS,
            rate=rate_to / rate_from,
            timestamp=quotes.timestamp,
            note=NOTE_FALLBACK_CROSS,
        )

    @staticmethod
    def _build_outcome(
            request: ConversionRequest,
            path: ConversionPath,
            rate: float,
            timestamp: int | None,
            note: str,
    ) -> ConversionOutcome:
        result = ConversionResult(
            query=ConversionQuery(
                from_currency=request.from_currency,
                to_currency=request.to_currency,
                amount=request.amount,
            ),
            info=ConversionInfo(timestamp=timestamp, rate=rate),
            result=request.amount * rate,
            note=note,
        )
        logger.info(
            f"Fallback conversion {request.from_currency}->{request.to_currency} "
            f"({path.value}): rate={rate}",
            extra={"conversion_path": path.value},
        )
        return ConversionOutcome(path=path, body=result.to_response())
