# tests/conftest.py
"""
Pytest configuration and fixtures.

This module provides shared fixtures for all tests:
- Test environment variables (set before konvata is imported)
- A fake rate provider client with configurable responses
- httpx.MockTransport helpers for testing the real client
- A TestClient wired to the fake provider
- Provider payload factories
"""

import copy
import os
from typing import Any, Callable, Iterator

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("COINLAYER_API_KEY", "test-access-key")
os.environ.setdefault("APP_NAME", "Test App")

import httpx
import pytest
from fastapi.testclient import TestClient

from konvata.services.exceptions import ProviderApiError, ProviderTransportError
from konvata.services.rates.client import RateProviderClient


# =============================================================================
# PAYLOAD FACTORIES
# =============================================================================

TEST_TIMESTAMP = 1_700_000_000


def live_payload(
        rates: dict[str, Any],
        timestamp: int = TEST_TIMESTAMP,
        target: str = "USD",
) -> dict[str, Any]:
    """Successful /live or /{date} envelope."""
    return {
        "success": True,
        "terms": "https://coinlayer.com/terms",
        "privacy": "https://coinlayer.com/privacy",
        "timestamp": timestamp,
        "target": target,
        "rates": rates,
    }


def convert_payload(
        from_currency: str,
        to_currency: str,
        amount: float,
        rate: float,
        timestamp: int = TEST_TIMESTAMP,
) -> dict[str, Any]:
    """Successful native /convert envelope."""
    return {
        "success": True,
        "query": {"from": from_currency, "to": to_currency, "amount": amount},
        "info": {"timestamp": timestamp, "rate": rate},
        "result": amount * rate,
    }


def error_payload(code: int, error_type: str, info: str) -> dict[str, Any]:
    """Provider `success: false` envelope."""
    return {
        "success": False,
        "error": {"code": code, "type": error_type, "info": info},
    }


def plan_restricted_error() -> ProviderApiError:
    """What the provider raises for /convert on the free plan."""
    return ProviderApiError(
        "coinlayer",
        provider_code=105,
        info="Access Restricted - Your current Subscription Plan does not support this API Function.",
        error_type="function_access_restricted",
    )


# =============================================================================
# FAKE RATE PROVIDER CLIENT
# =============================================================================

class FakeRateProviderClient(RateProviderClient):
    """
    Rate provider client that never touches the network.

    Responses and errors are configured per resource path. Unconfigured
    paths fail like an unknown provider resource. Every fetch is recorded
    so tests can assert how many upstream calls were made.
    """

    def __init__(self, api_key: str | None = "test-access-key") -> None:
        super().__init__(api_key=api_key)
        self._responses: dict[str, dict[str, Any]] = {}
        self._errors: dict[str, Exception] = {}
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def add_response(self, path: str, payload: dict[str, Any]) -> None:
        """Configure a successful envelope for a path (e.g. "/live")."""
        self._responses[path] = payload

    def add_error(self, path: str, error: Exception) -> None:
        """Configure an exception for a path."""
        self._errors[path] = error

    @property
    def call_paths(self) -> list[str]:
        return [path for path, _ in self.calls]

    def fetch(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        if not self._api_key:
            # Same guard as the real client
            return super().fetch(path, params)

        self.calls.append((path, {k: v for k, v in (params or {}).items() if v is not None}))

        if path in self._errors:
            raise self._errors[path]
        if path in self._responses:
            return copy.deepcopy(self._responses[path])

        raise ProviderTransportError(self.name, "API request failed with status 404", status_code=404)


@pytest.fixture
def fake_client() -> FakeRateProviderClient:
    """Create a fresh fake provider client for each test."""
    return FakeRateProviderClient()


# =============================================================================
# REAL CLIENT WITH MOCK TRANSPORT
# =============================================================================

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def make_http_client() -> Callable[..., RateProviderClient]:
    """
    Factory for a real RateProviderClient backed by httpx.MockTransport.

    Usage:
        client = make_http_client(lambda request: httpx.Response(200, json={...}))
    """

    def _make(handler: Handler, api_key: str | None = "test-access-key", **kwargs: Any) -> RateProviderClient:
        return RateProviderClient(
            api_key=api_key,
            base_url="https://api.test/api",
            transport=httpx.MockTransport(handler),
            **kwargs,
        )

    return _make


# =============================================================================
# API CLIENT
# =============================================================================

@pytest.fixture
def api_client(fake_client: FakeRateProviderClient) -> Iterator[TestClient]:
    """TestClient with the provider client replaced by the fake."""
    from konvata.dependencies import get_rate_provider_client
    from konvata.main import app

    app.dependency_overrides[get_rate_provider_client] = lambda: fake_client

    with TestClient(app, raise_server_exceptions=False) as c:
        yield c

    app.dependency_overrides.clear()
