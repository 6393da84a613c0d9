"""
Tests for calculator, scenario, benchmark and export API endpoints.
"""

import pytest

from app.main import app
from app.services.narrative import NarrativeService, get_narrative_service

# Database setup is handled by conftest.py


DEAL_INPUTS = {
    "purchase_price": "$5,000,000",
    "ebitda": "800,000",
    "exit_years": 5,
    "exit_multiple": 7,
    "country": "US",
    "industry": "tech",
}


@pytest.fixture
def unconfigured_narrative():
    """Narrative service with no gateway client."""
    service = NarrativeService(client=None)
    service.client = None
    app.dependency_overrides[get_narrative_service] = lambda: service
    yield service
    app.dependency_overrides.pop(get_narrative_service, None)


class TestHealth:
    """Test health check."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


# ============================================================================
# CALCULATION API TESTS
# ============================================================================

class TestCalculationAPI:
    """Test calculation endpoints."""

    def test_deal_roi(self, client):
        response = client.post("/api/calculate/deal-roi", json=DEAL_INPUTS)
        assert response.status_code == 200
        data = response.json()
        assert data["calculator_type"] == "deal_roi"
        assert data["moic"] == pytest.approx(1.92)
        assert data["decision"]["type"] == "pass"
        assert data["benchmark"]["market_code"] == "US"
        assert data["scenario"] == "base"

    def test_future_value(self, client):
        response = client.post(
            "/api/calculate/future-value",
            json={"current_value": 500000, "growth_rate": 5, "years": 10},
        )
        assert response.status_code == 200
        assert response.json()["future_value"] == pytest.approx(814447.31, abs=0.01)

    def test_breakeven(self, client):
        response = client.post(
            "/api/calculate/breakeven",
            json={"fixed_costs": 100000, "price_per_unit": 50, "cost_per_unit": 20},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["breakeven_units"] == 3334
        assert data["decision"]["label"] == "STRONG"

    def test_valuation(self, client):
        response = client.post(
            "/api/calculate/valuation",
            json={"revenue": "1,000,000", "ebitda": "200,000", "industry": "tech"},
        )
        assert response.status_code == 200
        assert response.json()["valuation_mid"] == pytest.approx(4_000_000)

    def test_payback(self, client):
        response = client.post(
            "/api/calculate/payback",
            json={"investment_cost": 10000, "annual_savings": 4000},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["payback_years"] == pytest.approx(2.5)
        assert data["recommendation"]["status"] == "average"

    def test_invalid_inputs_return_400(self, client):
        response = client.post(
            "/api/calculate/breakeven",
            json={"fixed_costs": 100000, "price_per_unit": 20, "cost_per_unit": 30},
        )
        assert response.status_code == 400
        assert "greater than cost" in response.json()["detail"]

    def test_unparseable_inputs_return_400(self, client):
        response = client.post(
            "/api/calculate/payback",
            json={"investment_cost": "lots", "annual_savings": 4000},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Please enter valid positive values"

    def test_long_payback_serializes(self, client):
        response = client.post(
            "/api/calculate/payback",
            json={"investment_cost": 10000, "annual_savings": 1, "country": "PK"},
        )
        assert response.status_code == 200
        assert response.json()["payback_years"] == pytest.approx(10000)

    def test_overflowing_future_value_returns_400(self, client):
        response = client.post(
            "/api/calculate/future-value",
            json={"current_value": 1000, "growth_rate": 200, "years": 1000},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Projected value is too large to calculate"

    def test_calculate_irr(self, client):
        response = client.post("/api/calculate/irr", json={"cash_flows": [-100, 110]})
        assert response.status_code == 200
        data = response.json()
        assert abs(data["irr"] - 10.0) < 0.05
        assert data["npv_at_10_percent"] == pytest.approx(0.0, abs=1e-9)

    def test_calculate_irr_needs_two_flows(self, client):
        response = client.post("/api/calculate/irr", json={"cash_flows": [-100]})
        assert response.status_code == 400


# ============================================================================
# SCENARIO API TESTS
# ============================================================================

class TestScenarioAPI:
    """Test scenario endpoints."""

    def test_list_scenarios(self, client):
        response = client.get("/api/scenarios/")
        assert response.status_code == 200
        names = {s["name"]: s for s in response.json()}
        assert set(names) == {"base", "bull", "bear"}
        assert names["bull"]["primary"] == 1.3

    def test_bull_deal(self, client):
        response = client.post(
            "/api/scenarios/deal-roi", json={"scenario": "bull", "inputs": DEAL_INPUTS}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["scenario"] == "bull"
        assert data["inputs"]["exit_multiple"] == pytest.approx(9.1)
        assert data["inputs"]["ebitda"] == pytest.approx(920_000)

    def test_repeated_requests_do_not_compound(self, client):
        first = client.post(
            "/api/scenarios/deal_roi", json={"scenario": "bear", "inputs": DEAL_INPUTS}
        ).json()
        second = client.post(
            "/api/scenarios/deal_roi", json={"scenario": "bear", "inputs": DEAL_INPUTS}
        ).json()
        assert first["irr"] == second["irr"]

    def test_unsupported_calculator(self, client):
        response = client.post(
            "/api/scenarios/payback",
            json={"scenario": "bull", "inputs": {"investment_cost": 1000, "annual_savings": 500}},
        )
        assert response.status_code == 400

    def test_unknown_scenario(self, client):
        response = client.post(
            "/api/scenarios/deal-roi", json={"scenario": "sideways", "inputs": DEAL_INPUTS}
        )
        assert response.status_code == 400

    def test_unknown_calculator(self, client):
        response = client.post(
            "/api/scenarios/mortgage", json={"scenario": "bull", "inputs": {}}
        )
        assert response.status_code == 404

    def test_missing_inputs(self, client):
        response = client.post(
            "/api/scenarios/deal-roi", json={"scenario": "bull", "inputs": {"ebitda": 1}}
        )
        assert response.status_code == 422


# ============================================================================
# BENCHMARK API TESTS
# ============================================================================

class TestBenchmarkAPI:
    """Test benchmark endpoints."""

    def test_markets(self, client):
        response = client.get("/api/benchmarks/markets")
        assert response.status_code == 200
        assert {m["code"] for m in response.json()} == {"US", "PK", "UK", "AE"}

    def test_industries(self, client):
        response = client.get("/api/benchmarks/industries")
        assert response.status_code == 200
        assert len(response.json()) == 6

    def test_profile(self, client):
        response = client.get("/api/benchmarks/AE/healthcare")
        assert response.status_code == 200
        data = response.json()
        assert data["market_name"] == "UAE"
        assert data["avg_growth"] == 8.5

    def test_profile_fallback(self, client):
        response = client.get("/api/benchmarks/XX/unknown")
        assert response.status_code == 200
        assert response.json()["market_code"] == "US"


# ============================================================================
# EXPORT API TESTS
# ============================================================================

class TestExportAPI:
    """Test memo export endpoint."""

    def test_export_without_ai(self, client, unconfigured_narrative):
        response = client.post(
            "/api/export/memo",
            json={"calculator": "deal-roi", "inputs": DEAL_INPUTS, "scenario": "bull"},
        )
        assert response.status_code == 200
        record = response.json()
        assert record["type"] == "Deal ROI"
        assert record["scenario"] == "bull"
        assert record["ai_analysis"] is None
        assert record["country"] == "United States"
        assert record["industry"] == "Technology"
        assert "irr" in record["results"]
        assert "generated_at" in record

    def test_export_with_supplied_analysis(self, client, unconfigured_narrative):
        response = client.post(
            "/api/export/memo",
            json={
                "calculator": "payback",
                "inputs": {"investment_cost": 1000, "annual_savings": 500},
                "ai_analysis": "Previously generated",
            },
        )
        assert response.status_code == 200
        assert response.json()["ai_analysis"] == "Previously generated"

    def test_export_ai_not_configured(self, client, unconfigured_narrative):
        response = client.post(
            "/api/export/memo",
            json={
                "calculator": "payback",
                "inputs": {"investment_cost": 1000, "annual_savings": 500},
                "include_ai_analysis": True,
            },
        )
        assert response.status_code == 503
