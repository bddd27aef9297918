# konvata/services/rates/client.py
"""
coinlayer rate provider client.

Single point of contact with the upstream rate API. Every call:
- Fails fast with ProviderConfigurationError when no access key is set
- Drops parameters whose value is None and appends the access key
- Reuses a successful response for a short window (see ResponseCache)
- Interprets the provider's `success`/`error` envelope

A call either returns the full parsed envelope or raises exactly one
RateProviderError. Nothing is retried.

Resources used:
    /live       live rates          (target, symbols, expand)
    /convert    native conversion   (from, to, amount, date)
    /{date}     historical rates    (target, symbols, expand)
    /list       supported symbols

Example:
    client = RateProviderClient(api_key="...")
    live = client.live(symbols="BTC,ETH")
    print(live["rates"]["BTC"])
"""

import logging
from typing import Any, Mapping

import httpx

from konvata.services.exceptions import (
    ProviderApiError,
    ProviderConfigurationError,
    ProviderTransportError,
)
from konvata.services.rates.cache import ResponseCache

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.coinlayer.com/api"
API_KEY_ENV_VAR = "COINLAYER_API_KEY"

ParamValue = str | int | float | bool | None


def _serialize_param(value: str | int | float | bool) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


class RateProviderClient:
    """
    HTTP client for the coinlayer API.

    Configuration is injected at construction (never read from the
    environment per call), so tests can pass a fake key and an
    httpx.MockTransport.

    Args:
        api_key: coinlayer access key; None or empty defers to a
            ProviderConfigurationError on first use
        base_url: API root
        timeout: Request timeout in seconds
        cache: Response cache; None disables caching
        transport: Optional httpx transport (tests)
    """

    PROVIDER_NAME = "coinlayer"

    def __init__(
            self,
            api_key: str | None,
            base_url: str = DEFAULT_BASE_URL,
            timeout: float = 5.0,
            cache: ResponseCache | None = None,
            transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._cache = cache
        self._transport = transport
        logger.info(
            f"RateProviderClient initialized (base_url={self._base_url}, "
            f"timeout={timeout}s, cache={'on' if cache and cache.enabled else 'off'})"
        )

    @property
    def name(self) -> str:
        return self.PROVIDER_NAME

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    @property
    def cache(self) -> ResponseCache | None:
        return self._cache

    # =========================================================================
    # CORE FETCH
    # =========================================================================

    def fetch(self, path: str, params: Mapping[str, ParamValue] | None = None) -> dict[str, Any]:
        """
        GET a provider resource and return its parsed envelope.

        Args:
            path: Resource path, e.g. "/live" or "/2024-01-15"
            params: Query parameters; None values are omitted

        Returns:
            The provider's JSON object

        Raises:
            ProviderConfigurationError: No access key configured
            ProviderTransportError: Network failure, non-2xx status or non-JSON body
            ProviderApiError: Provider reported `success: false`
        """
        if not self._api_key:
            raise ProviderConfigurationError(self.name, API_KEY_ENV_VAR)

        if not path.startswith("/"):
            path = f"/{path}"

        query = {
            key: _serialize_param(value)
            for key, value in (params or {}).items()
            if value is not None
        }

        cache_key = ResponseCache.make_key(path, query)
        if self._cache is not None:
            cached = self._cache.get(cache_key)
            if cached is not None:
                logger.debug(f"Cache hit for {path} {query}")
                return cached

        logger.debug(f"Requesting {self.name} {path} {query}")
        data = self._request(path, {**query, "access_key": self._api_key})

        if self._cache is not None:
            self._cache.set(cache_key, data)

        return data

    def _request(self, path: str, query: dict[str, str]) -> dict[str, Any]:
        """Issue the GET and interpret the envelope. Never logs the access key."""
        try:
            with httpx.Client(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = client.get(path, params=query)
        except httpx.HTTPError as e:
            logger.error(f"{self.name} request to {path} failed: {type(e).__name__}")
            raise ProviderTransportError(self.name, f"Network error calling {self.name}: {type(e).__name__}")

        if not response.is_success:
            logger.error(f"{self.name} {path} returned HTTP {response.status_code}")
            raise ProviderTransportError(
                self.name,
                f"API request failed with status {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError:
            logger.error(f"{self.name} {path} returned a non-JSON body")
            raise ProviderTransportError(
                self.name,
                "API response was not valid JSON",
                status_code=response.status_code,
            )

        if not isinstance(data, dict):
            raise ProviderTransportError(
                self.name,
                "API response was not a JSON object",
                status_code=response.status_code,
            )

        if data.get("success") is False:
            error = data.get("error") if isinstance(data.get("error"), dict) else {}
            info = error.get("info") or "Unknown Coinlayer API error"
            logger.warning(f"{self.name} {path} rejected: {error.get('code')} {error.get('type')}")
            raise ProviderApiError(
                self.name,
                provider_code=error.get("code"),
                info=info,
                error_type=error.get("type"),
            )

        return data

    # =========================================================================
    # RESOURCES
    # =========================================================================

    def live(
            self,
            target: str | None = None,
            symbols: str | None = None,
            expand: ParamValue = None,
    ) -> dict[str, Any]:
        """Live rates, optionally filtered to a comma-separated symbol list."""
        return self.fetch("/live", {"target": target, "symbols": symbols, "expand": expand})

    def convert(
            self,
            from_currency: str,
            to_currency: str,
            amount: str | float,
            date: str | None = None,
    ) -> dict[str, Any]:
        """Native conversion (paid plans only)."""
        return self.fetch(
            "/convert",
            {"from": from_currency, "to": to_currency, "amount": amount, "date": date},
        )

    def historical(
            self,
            date: str,
            target: str | None = None,
            symbols: str | None = None,
            expand: ParamValue = None,
    ) -> dict[str, Any]:
        """Rates for a past calendar date (YYYY-MM-DD)."""
        return self.fetch(f"/{date}", {"target": target, "symbols": symbols, "expand": expand})

    def list_symbols(self) -> dict[str, Any]:
        """Supported crypto and fiat symbols."""
        return self.fetch("/list")
