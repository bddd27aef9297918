# konvata/dependencies.py
"""
Dependency injection for FastAPI routes.

Services are singletons created lazily on first use, so importing the app
has no side effects and the response cache is shared by all requests.

Tests replace them with app.dependency_overrides:

    app.dependency_overrides[get_rate_provider_client] = lambda: fake_client
"""

import logging
from functools import lru_cache

from fastapi import Depends

from konvata.config import settings
from konvata.services.conversion import ConversionResolver
from konvata.services.price_history import PriceHistoryService
from konvata.services.rates.cache import ResponseCache
from konvata.services.rates.client import RateProviderClient

logger = logging.getLogger(__name__)


# Order matters: define dependencies before dependents
# 1. get_response_cache (no deps)
# 2. get_rate_provider_client (cache)
# 3. get_conversion_resolver, get_price_history_service (client)


@lru_cache(maxsize=1)
def get_response_cache() -> ResponseCache:
    """Singleton provider response cache."""
    return ResponseCache(
        ttl_seconds=settings.provider_cache_ttl_seconds,
        max_entries=settings.provider_cache_max_entries,
    )


@lru_cache(maxsize=1)
def get_rate_provider_client() -> RateProviderClient:
    """
    Singleton coinlayer client.

    The access key is read from settings here, once. A missing key does not
    stop startup; every call then fails with a configuration error.
    """
    logger.debug("Initializing singleton RateProviderClient")
    if not settings.is_provider_configured:
        logger.warning("COINLAYER_API_KEY is not set; provider calls will fail")
    return RateProviderClient(
        api_key=settings.coinlayer_api_key,
        base_url=settings.coinlayer_base_url,
        timeout=settings.provider_timeout_seconds,
        cache=get_response_cache(),
    )


def get_conversion_resolver(
        client: RateProviderClient = Depends(get_rate_provider_client),
) -> ConversionResolver:
    """Resolver bound to the shared client (stateless, cheap to build)."""
    return ConversionResolver(client=client)


def get_price_history_service(
        client: RateProviderClient = Depends(get_rate_provider_client),
) -> PriceHistoryService:
    return PriceHistoryService(client=client)
