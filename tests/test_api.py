"""
API Endpoint Tests

Exercises the FastAPI routes through TestClient.
Run with: pytest tests/test_api.py -v
"""

import pytest
from fastapi.testclient import TestClient

from costseg.api import app
from costseg.logic.asset_categories import DEFAULT_ALLOCATIONS


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def study_payload():
    return {
        "property_name": "Main Street Office",
        "total_cost": 1000000,
        "placed_in_service_date": "2024-01-01",
        "property_type": "commercial",
        "allocations": dict(DEFAULT_ALLOCATIONS),
        "depreciation_method": "macrs",
        "use_section_179": False,
        "section_179_amount": 0,
        "use_bonus_depreciation": True,
    }


class TestInfoRoutes:

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "Backend Online"

    def test_categories(self, client):
        categories = client.get("/categories").json()["categories"]
        assert [c["id"] for c in categories] == ["land", "5year", "7year", "15year", "residential", "commercial"]

    def test_categories_for_property_type(self, client):
        categories = client.get("/categories", params={"property_type": "residential"}).json()["categories"]
        assert "commercial" not in [c["id"] for c in categories]

    def test_tax_config(self, client):
        data = client.get("/config/tax").json()
        assert data["bonus_years"][0] == 2022
        assert {"year": 2024, "rate": 0.6} in data["bonus_rates"]

    def test_tax_year(self, client):
        data = client.get("/config/tax/2024").json()
        assert data["bonus_rate"] == 0.6
        assert data["status"] == "official"
        assert data["section_179_limits"]["max_deduction"] == 1220000


class TestScheduleRoute:

    def test_reference_study(self, client, study_payload):
        response = client.post("/schedule", json=study_payload)
        assert response.status_code == 200

        data = response.json()
        assert data["property_name"] == "Main Street Office"
        assert data["total_allocation"] == 100
        assert len(data["schedule"]["years"]) == 40
        assert data["schedule"]["years"][0]["depreciation"]["5year"] == 54400.0
        assert data["schedule"]["years"][0]["cumulative"] == 176424.0
        assert data["summary"]["first_year_total"] == 176424.0
        assert data["summary"]["first_year_pct"] == 17.64
        assert data["warnings"] == []

    def test_category_summary(self, client, study_payload):
        rows = client.post("/schedule", json=study_payload).json()["category_summary"]
        five = next(r for r in rows if r["category_id"] == "5year")
        assert five["bonus"] == 48000.0
        assert five["remaining_basis"] == 32000.0

    def test_section_179(self, client, study_payload):
        study_payload.update(use_section_179=True, section_179_amount=100000)
        categories = client.post("/schedule", json=study_payload).json()["schedule"]["categories"]

        assert categories["5year"]["section_179"] == 80000.0
        assert categories["7year"]["section_179"] == 20000.0
        assert categories["15year"]["section_179"] == 0.0

    def test_warnings_do_not_block(self, client, study_payload):
        study_payload["allocations"] = {"land": 10, "commercial": 80}
        response = client.post("/schedule", json=study_payload)

        assert response.status_code == 200
        assert any("Allocations total 90.0%" in w for w in response.json()["warnings"])

    def test_invalid_method_rejected(self, client, study_payload):
        study_payload["depreciation_method"] = "double-declining"
        assert client.post("/schedule", json=study_payload).status_code == 422

    def test_invalid_date_rejected(self, client, study_payload):
        study_payload["placed_in_service_date"] = "next spring"
        assert client.post("/schedule", json=study_payload).status_code == 422

    def test_non_numeric_cost_computes_zero_schedule(self, client, study_payload):
        study_payload["total_cost"] = "nan"
        response = client.post("/schedule", json=study_payload)

        assert response.status_code == 200
        data = response.json()
        assert data["total_cost"] == 0.0
        assert all(row["total_depreciation"] == 0 for row in data["schedule"]["years"])
        assert any("zero or negative" in w for w in data["warnings"])

    def test_non_numeric_allocation_is_zero(self, client, study_payload):
        study_payload["allocations"]["5year"] = "nan"
        data = client.post("/schedule", json=study_payload).json()

        assert data["total_allocation"] == 92
        assert data["schedule"]["categories"]["5year"]["allocated_basis"] == 0.0

    def test_calculation_failure_uses_error_body(self, client, study_payload, monkeypatch):
        def _fail(inputs):
            raise RuntimeError("table missing")

        monkeypatch.setattr("costseg.api.compute_schedule", _fail)
        response = client.post("/schedule", json=study_payload)

        assert response.status_code == 500
        detail = response.json()["detail"]
        assert detail["error"] == "CALCULATION_FAILED"
        assert "table missing" not in detail["message"]
