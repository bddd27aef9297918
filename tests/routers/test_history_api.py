# tests/routers/test_history_api.py
"""
Integration tests for GET /api/historical (chart series).
"""

from datetime import date

import pytest

from konvata.services.constants import HISTORY_SIMULATED_WARNING
from tests.conftest import live_payload, plan_restricted_error


class TestPriceHistoryApi:
    """Tests for the price history endpoint."""

    def test_series_ends_at_live_price(self, api_client, fake_client):
        fake_client.add_response("/live", live_payload({"BTC": 50000.0}))

        response = api_client.get("/api/historical", params={"symbol": "BTC", "days": 7})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert len(data["data"]) == 8
        assert data["data"][-1] == {"date": date.today().isoformat(), "price": 50000.0}
        assert "_warning" not in data

    def test_default_thirty_days(self, api_client, fake_client):
        fake_client.add_response("/live", live_payload({"BTC": 50000.0}))

        response = api_client.get("/api/historical", params={"symbol": "BTC"})

        assert len(response.json()["data"]) == 31

    def test_days_capped(self, api_client, fake_client):
        fake_client.add_response("/live", live_payload({"BTC": 50000.0}))

        response = api_client.get("/api/historical", params={"symbol": "BTC", "days": 90})

        assert len(response.json()["data"]) == 31

    def test_simulated_warning(self, api_client, fake_client):
        fake_client.add_error("/live", plan_restricted_error())

        response = api_client.get("/api/historical", params={"symbol": "BTC", "days": 3})

        assert response.status_code == 200
        assert response.json()["_warning"] == HISTORY_SIMULATED_WARNING

    def test_symbol_required(self, api_client, fake_client):
        response = api_client.get("/api/historical")

        assert response.status_code == 400
        assert response.json()["error"] == {"message": "Symbol is required", "code": "VALIDATION_ERROR"}

    @pytest.mark.parametrize("days", ["0", "abc"])
    def test_invalid_days(self, api_client, days):
        response = api_client.get("/api/historical", params={"symbol": "BTC", "days": days})

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert "days" in error["message"]
