from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from proforma.api.app import app
from proforma.api.schemas import AssumptionsPayload
from proforma.scenarios import SCENARIOS, get_scenario


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def rental_payload(leveraged_rental) -> dict:
    return AssumptionsPayload.model_validate(leveraged_rental).model_dump(mode="json")


class TestHealth:
    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}


class TestProformaRoutes:
    def test_run(self, client, rental_payload):
        resp = client.post("/api/v1/proforma", json={"assumptions": rental_payload})
        assert resp.status_code == 200
        data = resp.json()
        assert len(data["annual_cashflows"]) == 5
        assert Decimal(data["loan_amount"]) == Decimal("750000")
        assert data["irr"] is not None
        assert data["sensitivity"] is None
        assert Decimal(data["purchase_cap_rate"]) == Decimal("0.0665")

    def test_run_with_sensitivity(self, client, rental_payload):
        resp = client.post(
            "/api/v1/proforma",
            json={"assumptions": rental_payload, "include_sensitivity": True},
        )
        assert resp.status_code == 200
        assert resp.json()["sensitivity"]["exit_cap_minus_50bps"] is not None

    def test_invalid_returns_422_with_errors(self, client, rental_payload):
        rental_payload["purchase_price"] = "0"
        resp = client.post("/api/v1/proforma", json={"assumptions": rental_payload})
        assert resp.status_code == 422
        assert "Purchase price must be greater than 0" in resp.json()["detail"]

    def test_unknown_enum_rejected(self, client, rental_payload):
        rental_payload["financing_type"] = "seller_carry"
        resp = client.post("/api/v1/proforma", json={"assumptions": rental_payload})
        assert resp.status_code == 422

    def test_validate(self, client, rental_payload):
        resp = client.post("/api/v1/proforma/validate", json=rental_payload)
        assert resp.status_code == 200
        data = resp.json()
        assert data["valid"] is True
        assert data["errors"] == []
        assert data["completion"]["overall_progress"] == 100

    def test_validate_empty(self, client):
        data = client.post("/api/v1/proforma/validate", json={}).json()
        assert data["valid"] is False
        assert "Purchase price must be greater than 0" in data["errors"]
        assert data["completion"]["overall_progress"] == 33

    def test_loan_size(self, client, rental_payload):
        rental_payload["purchase_price"] = "2000000"
        data = client.post("/api/v1/loan/size", json=rental_payload).json()
        assert Decimal(data["loan_amount"]) == Decimal("1500000")
        assert Decimal(data["cached_loan_amount"]) == Decimal("750000")
        assert data["needs_update"] is True
        assert Decimal(data["ltv"]) == Decimal("75")

    def test_loan_schedule(self, client, rental_payload):
        data = client.post("/api/v1/loan/schedule", json=rental_payload).json()
        assert len(data["payments"]) == 60
        assert Decimal(data["periodic_payment"]) > 0


class TestScenarioRoutes:
    def test_list(self, client):
        data = client.get("/api/v1/scenarios").json()
        assert [s["id"] for s in data] == [s.id for s in SCENARIOS]

    def test_run_scenario(self, client):
        resp = client.get("/api/v1/scenarios/standard/proforma")
        assert resp.status_code == 200
        data = resp.json()
        assert len(data["annual_cashflows"]) == 7
        assert Decimal(data["loan_amount"]) == Decimal("1300000")

    def test_unknown_scenario(self, client):
        assert client.get("/api/v1/scenarios/nope/proforma").status_code == 404
        assert client.get("/api/v1/scenarios/nope/assumptions").status_code == 404

    def test_randomized_assumptions_reproducible(self, client):
        first = client.get("/api/v1/scenarios/valueadd/assumptions", params={"seed": 3}).json()
        second = client.get("/api/v1/scenarios/valueadd/assumptions", params={"seed": 3}).json()
        assert first == second


class TestPayloadRoundTrip:
    @pytest.mark.parametrize("scenario_id", ["standard", "dscr"])
    def test_json_round_trip(self, scenario_id):
        original = get_scenario(scenario_id).assumptions
        payload = AssumptionsPayload.model_validate(original)
        restored = AssumptionsPayload.model_validate_json(payload.model_dump_json())
        assert restored.to_assumptions() == original
