"""
Integration tests for the HTTP API.

Runs the FastAPI app against a stand-in engine.
"""

from typing import Any

import pytest
from fastapi.testclient import TestClient

from crossarb.api.server import create_app
from crossarb.core.types import ArbitrageOpportunity, TradingPair
from crossarb.exchange.http import HttpClientError
from crossarb.strategy.calculator import ArbitrageCalculator
from crossarb.telemetry.status import PairStatusTracker
from tests.mocks import make_pair


class StubEngine:
    """Engine stand-in serving fixed data."""

    def __init__(self, opportunities: list[ArbitrageOpportunity]) -> None:
        self.status = PairStatusTracker()
        self.status.record("SOL", aggregator_price=100.5, stream_price=100.0)
        self.status.record("BONK", stream_price=0.00002, error="NO_ROUTE")
        self.opportunities = opportunities
        self.prediction: Any = {"symbol": "SOL", "prediction": [101.2, 102.0]}
        self.predicted: list[str] = []

    async def current_pairs(self) -> list[TradingPair]:
        return [make_pair("SOL"), make_pair("BONK")]

    async def find_opportunities(self) -> list[ArbitrageOpportunity]:
        return self.opportunities

    def health(self) -> dict[str, Any]:
        return {"stream_state": "streaming", "pairs": 2, "last_pass": None}

    async def predict(self, symbol: str) -> Any:
        self.predicted.append(symbol)
        if isinstance(self.prediction, Exception):
            raise self.prediction
        return self.prediction


@pytest.fixture
def engine(calculator: ArbitrageCalculator) -> StubEngine:
    return StubEngine(calculator.evaluate("JUP", 99.0, 100.0))


@pytest.fixture
def client(engine: StubEngine) -> TestClient:
    return TestClient(create_app(engine=engine))  # type: ignore[arg-type]


class TestApi:
    """Tests for the API routes."""

    def test_trading_pairs(self, client: TestClient) -> None:
        response = client.get("/api/trading-pairs")

        assert response.status_code == 200
        pairs = response.json()["pairs"]
        assert [p["symbol"] for p in pairs] == ["SOLUSDC", "BONKUSDC"]
        assert pairs[0]["token_mint"] == "sol-mint"

    def test_opportunities(self, client: TestClient) -> None:
        response = client.get("/api/arbitrage-opportunities")

        assert response.status_code == 200
        opportunities = response.json()["opportunities"]
        assert len(opportunities) == 1
        assert opportunities[0]["token"] == "JUP"
        assert opportunities[0]["action"] == "Buy on Jupiter, Sell on Binance"
        assert opportunities[0]["confidence"] == "high"

    def test_pair_status(self, client: TestClient) -> None:
        response = client.get("/api/pair-status")

        assert response.status_code == 200
        status = response.json()["status"]
        assert status["SOL"]["state"] == "checked"
        assert status["BONK"]["state"] == "error"
        assert status["BONK"]["error"] == "NO_ROUTE"

    def test_health(self, client: TestClient) -> None:
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["stream_state"] == "streaming"

    def test_prediction_passthrough(self, client: TestClient, engine: StubEngine) -> None:
        response = client.post("/get-prediction", json={"symbol": "SOL"})

        assert response.status_code == 200
        assert response.json() == {"symbol": "SOL", "prediction": [101.2, 102.0]}
        assert engine.predicted == ["SOL"]

    def test_prediction_failure(self, client: TestClient, engine: StubEngine) -> None:
        engine.prediction = HttpClientError("Network error: connection refused")

        response = client.post("/get-prediction", json={"symbol": "SOL"})

        assert response.status_code == 500
        assert response.json() == {"error": "Network error: connection refused"}

    def test_prediction_requires_symbol(self, client: TestClient) -> None:
        response = client.post("/get-prediction", json={})

        assert response.status_code == 422

    def test_cors(self, client: TestClient) -> None:
        response = client.get("/api/trading-pairs", headers={"Origin": "http://localhost:3000"})

        assert "access-control-allow-origin" in response.headers
