"""API tests for the pricing routes."""
import pytest
from decimal import Decimal

from fastapi.testclient import TestClient

from apps.api.deps import get_pricing_service
from apps.api.main import app
from core.settings import settings
from domain.enums import AdjustmentKind, RuleTier
from domain.errors import PricingDataFetchError
from domain.models import HallService
from tests.conftest import HALL_ID


PREFIX = settings.api_v1_prefix


@pytest.fixture
def client(pricing_service):
    """Test client with the in-memory pricing service injected."""
    app.dependency_overrides[get_pricing_service] = lambda: pricing_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.mark.unit
class TestHealth:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


@pytest.mark.unit
class TestPriceEndpoint:
    """Test GET /halls/{hall_id}/price."""

    def test_price(self, client, gateway, make_rule):
        gateway.rules.append(make_rule(tier=RuleTier.DAY_OF_WEEK, value=1200, days_of_week=[4]))

        response = client.get(f"{PREFIX}/halls/{HALL_ID}/price", params={"date": "2025-12-25"})

        assert response.status_code == 200
        body = response.json()
        assert Decimal(body["final_price"]) == Decimal("1200")
        assert Decimal(body["base_price"]) == Decimal("1000")
        assert body["applied_rule"]["id"] == "r1"

    def test_unknown_hall(self, client):
        response = client.get(f"{PREFIX}/halls/missing/price", params={"date": "2025-12-25"})

        assert response.status_code == 404
        assert response.json()["detail"]["code"] == "HALL_NOT_FOUND"

    def test_bad_date(self, client):
        response = client.get(f"{PREFIX}/halls/{HALL_ID}/price", params={"date": "25/12/2025"})

        assert response.status_code == 422

    def test_backend_failure(self, client, gateway, monkeypatch):
        """Test that a data fetch failure is reported as 503."""
        async def failing(hall_id):
            raise PricingDataFetchError("pricing rules")

        monkeypatch.setattr(gateway, "list_pricing_rules", failing)

        response = client.get(f"{PREFIX}/halls/{HALL_ID}/price", params={"date": "2025-12-25"})

        assert response.status_code == 503
        assert response.json()["detail"] == {
            "code": "FETCH_FAILED",
            "message": "Failed to fetch pricing rules",
        }


@pytest.mark.unit
class TestCalendarEndpoint:
    """Test GET /halls/{hall_id}/calendar."""

    def test_calendar(self, client, gateway, christmas):
        gateway.bookings.append((HALL_ID, christmas, "confirmed"))

        response = client.get(
            f"{PREFIX}/halls/{HALL_ID}/calendar",
            params={"start": "2025-12-24", "end": "2025-12-26"},
        )

        assert response.status_code == 200
        body = response.json()
        assert list(body) == ["2025-12-24", "2025-12-25", "2025-12-26"]
        assert body["2025-12-25"]["status"] == "booked"
        assert body["2025-12-25"]["price"] is None
        assert Decimal(body["2025-12-24"]["price"]) == Decimal("1000")
        assert body["2025-12-24"]["is_past"] is False

    def test_inverted_range(self, client):
        response = client.get(
            f"{PREFIX}/halls/{HALL_ID}/calendar",
            params={"start": "2025-12-26", "end": "2025-12-24"},
        )

        assert response.status_code == 422
        assert response.json()["detail"]["code"] == "INVALID_DATE_RANGE"


@pytest.mark.unit
class TestQuoteEndpoint:
    """Test POST /halls/{hall_id}/quote."""

    def test_quote(self, client, gateway):
        gateway.services.append(HallService(id="s1", hall_id=HALL_ID, name="Catering", price=Decimal("750")))

        response = client.post(
            f"{PREFIX}/halls/{HALL_ID}/quote",
            json={"date": "2025-12-25", "service_ids": ["s1"]},
        )

        assert response.status_code == 200
        body = response.json()
        assert [line["label"] for line in body["lines"]] == ["Venue Rental", "Catering"]
        assert Decimal(body["grand_total"]) == Decimal("1750")
        assert body["currency"] == "SAR"

    def test_unknown_service(self, client):
        response = client.post(
            f"{PREFIX}/halls/{HALL_ID}/quote",
            json={"date": "2025-12-25", "service_ids": ["nope"]},
        )

        assert response.status_code == 422
        assert response.json()["detail"]["code"] == "UNKNOWN_SERVICE"


@pytest.mark.unit
class TestValidateEndpoint:
    """Test POST /pricing-rules/validate."""

    def test_valid_rule(self, client):
        response = client.post(f"{PREFIX}/pricing-rules/validate", json={
            "id": "r1",
            "hall_id": HALL_ID,
            "rule_level": 2,
            "start_date": "2025-12-01",
            "end_date": "2025-12-31",
            "adjustment_type": AdjustmentKind.PERCENT.value,
            "adjustment_value": "20",
        })

        assert response.status_code == 200
        assert response.json() == {"is_valid": True, "issues": []}

    def test_inverted_rule(self, client):
        response = client.post(f"{PREFIX}/pricing-rules/validate", json={
            "id": "r1",
            "hall_id": HALL_ID,
            "tier": 3,
            "start_date": "2025-12-31",
            "end_date": "",
            "days_of_week": [9],
            "adjustment_kind": "fixed",
            "adjustment_value": 5000,
        })

        body = response.json()
        assert response.status_code == 200
        assert body["is_valid"] is False
        codes = [issue["code"] for issue in body["issues"]]
        assert codes[0] == "INVALID_WEEKDAY"
        assert "HALF_OPEN_RANGE" in codes
