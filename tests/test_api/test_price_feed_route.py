"""
Tests for the /price-feed endpoint and the health routes.

The app lifespan is not run: the container is injected through
``dependency_overrides`` and ``app.state``.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from conftest import FakeQuoteSource, build_quote
from price_feed.config.state import ConfigState, ConfigurationError
from price_feed.ingestion.adapters.finnhub_plugin import EmptyDataError
from price_feed_api.dependencies import get_container
from price_feed_api.main import create_app

BTC = "BINANCE:BTCUSDT"
ETH = "BINANCE:ETHUSDT"


@pytest.fixture
def container():
    return MagicMock()


@pytest.fixture
def client(container):
    app = create_app()
    app.dependency_overrides[get_container] = lambda: container
    return TestClient(app)


@pytest.fixture
def quote_source():
    return FakeQuoteSource()


@pytest.fixture
def wire(container, build_workflow, quote_source):
    """Point the container at a workflow over the fake quote source."""
    workflow = build_workflow(quote_source)
    container.create_workflow.return_value = workflow
    return workflow


class TestPriceFeedRoute:
    def test_partial_success(self, client, wire, quote_source):
        quote_source.outcomes = {
            BTC: build_quote(c=50000, h=51000, l=49000, dp=2.0),
            ETH: EmptyDataError("no data", symbol=ETH),
        }

        response = client.post("/price-feed", json={"symbols": ["BTCUSD", "ETHUSD"]})

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
        body = response.json()
        assert list(body["ticks"]) == ["BTCUSD"]
        assert body["ticks"]["BTCUSD"]["regime"] == "high_vol"
        assert body["errors"] == {"ETHUSD": "Failed to fetch quote"}
        assert body["source"] == "finnhub"
        assert body["shouldPauseTrading"] is False
        assert body["timestamp"].endswith("Z")

    def test_all_succeed_has_no_errors_key(self, client, wire, quote_source):
        quote_source.outcomes = {BTC: build_quote(), ETH: build_quote(c=3000, h=3010, l=2990)}

        response = client.post("/price-feed", json={"symbols": ["BTCUSD", "ETHUSD"]})

        assert response.status_code == 200
        assert "errors" not in response.json()

    def test_no_data_returns_503(self, client, wire):
        response = client.post("/price-feed", json={"symbols": ["BTCUSD", "ETHUSD"]})

        assert response.status_code == 503
        body = response.json()
        assert body["ticks"] == {}
        assert body["source"] == "NO_DATA"
        assert body["error"] == "Failed to fetch any quotes"
        assert body["errors"] == {
            "BTCUSD": "Failed to fetch quote",
            "ETHUSD": "Failed to fetch quote",
        }
        assert body["shouldPauseTrading"] is True

    @pytest.mark.parametrize(
        "kwargs",
        [
            {},
            {"content": b"not json"},
            {"json": {"symbols": "BTCUSD"}},
            {"json": {}},
        ],
    )
    def test_unusable_body_uses_default_universe(self, client, wire, quote_source, kwargs):
        quote_source.outcomes = {BTC: build_quote(), ETH: build_quote(c=3000, h=3010, l=2990)}

        response = client.post("/price-feed", **kwargs)

        assert response.status_code == 200
        assert list(response.json()["ticks"]) == ["BTCUSD", "ETHUSD"]

    def test_get_runs_default_universe(self, client, wire, quote_source):
        quote_source.outcomes = {BTC: build_quote(), ETH: build_quote(c=3000, h=3010, l=2990)}

        response = client.get("/price-feed")

        assert response.status_code == 200

    def test_missing_api_key(self, client, container):
        container.create_workflow.side_effect = ConfigurationError("API key not configured")

        response = client.post("/price-feed", json={"symbols": ["BTCUSD"]})

        assert response.status_code == 500
        assert response.json() == {
            "error": "API key not configured",
            "shouldPauseTrading": True,
        }

    def test_unexpected_error(self, client, container):
        workflow = MagicMock()
        workflow.run = AsyncMock(side_effect=RuntimeError("boom"))
        container.create_workflow.return_value = workflow

        response = client.post("/price-feed", json={"symbols": ["BTCUSD"]})

        assert response.status_code == 500
        assert response.json() == {
            "error": "Internal server error",
            "shouldPauseTrading": True,
        }

    def test_preflight(self, client, container):
        response = client.options("/price-feed")

        assert response.status_code == 200
        assert response.content == b""
        assert response.headers["access-control-allow-origin"] == "*"
        assert "x-client-info" in response.headers["access-control-allow-headers"]
        container.create_workflow.assert_not_called()

    @pytest.mark.parametrize("requested_headers", ["content-type", "x-custom-header"])
    def test_browser_preflight(self, client, container, requested_headers):
        response = client.options(
            "/price-feed",
            headers={
                "Origin": "https://simulator.example.com",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": requested_headers,
            },
        )

        assert response.status_code == 200
        assert response.content == b""
        assert response.headers["access-control-allow-origin"] == "*"
        assert response.headers["access-control-allow-headers"] == (
            "authorization, x-client-info, apikey, content-type"
        )
        container.create_workflow.assert_not_called()

    def test_cross_origin_post_carries_cors_headers(self, client, wire, quote_source):
        quote_source.outcomes = {BTC: build_quote()}

        response = client.post(
            "/price-feed",
            json={"symbols": ["BTCUSD"]},
            headers={"Origin": "https://simulator.example.com"},
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"

    def test_unmapped_symbol_reported_separately(self, client, wire, quote_source):
        quote_source.outcomes = {BTC: build_quote()}

        response = client.post("/price-feed", json={"symbols": ["BTCUSD", "DOGEUSD"]})

        assert response.status_code == 200
        assert response.json()["errors"] == {"DOGEUSD": "Unknown symbol"}


class TestHealthRoutes:
    def test_ready(self, client):
        assert client.get("/ready").json() == {"status": "ready"}

    def test_root(self, client):
        assert client.get("/").status_code == 200

    def test_health_unhealthy_without_configuration(self, client):
        client.app.state.container = SimpleNamespace(settings=ConfigState())

        response = client.get("/health")

        assert response.status_code == 503
        services = response.json()["detail"]["services"]
        assert services == {"database": False, "finnhub_credentials": False}

    def test_health_healthy(self, client):
        database = MagicMock()
        database.fetch_all = AsyncMock(return_value=[{"ok": 1}])
        settings = ConfigState(
            finnhub={"api_key": "k"},
            database={"url": "postgresql://localhost/feed"},
        )
        client.app.state.container = SimpleNamespace(
            settings=settings, create_database=lambda: database
        )

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
