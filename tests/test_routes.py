import pytest

from dropee.main import create_app
from dropee.providers.pricing_store import InMemoryPricingStore, PricingStore

FEE_URL = "/api/delivery/calculate-fee"


class BrokenStore(PricingStore):
    name = "broken"

    def find_by_service(self, service_id):
        raise TimeoutError("sem resposta")


def _body(**overrides):
    data = {
        "distance_km": 0,
        "weight_kg": 2,
        "is_fragile": False,
        "weather_condition": "clear",
        "urgency": "normal",
    }
    data.update(overrides)
    return data


class TestCalculateFeeRoute:

    def test_default_pricing_response(self, client):
        resp = client.post(FEE_URL, json=_body())

        assert resp.status_code == 200
        assert resp.get_json() == {
            "base_fee": 30.0,
            "distance_fee": 0.0,
            "weight_fee": 0.0,
            "fragile_fee": 0.0,
            "weather_fee": 0.0,
            "urgency_fee": 0.0,
            "total_fee": 30.0,
            "breakdown": [
                {"label": "Base Fee", "amount": 30.0},
                {"label": "Distance (0.0 km)", "amount": 0.0},
            ],
        }

    def test_all_surcharges(self, client):
        resp = client.post(FEE_URL, json=_body(
            distance_km=3, weight_kg=5, is_fragile=True,
            weather_condition="rain", urgency="urgent",
        ))
        data = resp.get_json()

        assert resp.status_code == 200
        assert data["total_fee"] == 30 + 30 + 15 + 15 + 9 + 15
        assert [item["label"] for item in data["breakdown"]] == [
            "Base Fee",
            "Distance (3.0 km)",
            "Weight (5 kg)",
            "Fragile Handling",
            "Weather (rain)",
            "Urgent Delivery",
        ]

    def test_service_pricing(self, client):
        resp = client.post(FEE_URL, json=_body(service_id="svc-express", distance_km=2, weight_kg=3))
        data = resp.get_json()

        assert resp.status_code == 200
        assert data["base_fee"] == 50.0
        assert data["distance_fee"] == 24.0
        assert data["weight_fee"] == 8.0
        assert data["total_fee"] == 82.0

    def test_unknown_service_matches_no_service(self, client):
        body = _body(distance_km=4.2, weight_kg=3.3, weather_condition="heavy_rain")
        without = client.post(FEE_URL, json=body)
        unknown = client.post(FEE_URL, json=dict(body, service_id="svc-nao-existe"))

        assert unknown.status_code == 200
        assert unknown.get_data() == without.get_data()

    def test_store_outage_uses_default(self):
        client = create_app(pricing_store=BrokenStore()).test_client()
        resp = client.post(FEE_URL, json=_body(service_id="svc-express", distance_km=5))

        assert resp.status_code == 200
        assert resp.get_json()["total_fee"] == 80.0

    def test_identical_requests_identical_bytes(self, client):
        body = _body(service_id="svc-express", distance_km=7.77, weight_kg=9.1, is_fragile=True)
        first = client.post(FEE_URL, json=body)
        second = client.post(FEE_URL, json=body)

        assert first.get_data() == second.get_data()

    def test_clamped_to_max(self, client):
        resp = client.post(FEE_URL, json=_body(distance_km=10000))
        assert resp.get_json()["total_fee"] == 500.0

    @pytest.mark.parametrize("body", [
        _body(distance_km=-1),
        {k: v for k, v in _body().items() if k != "distance_km"},
    ])
    def test_invalid_distance_rejected(self, client, body):
        resp = client.post(FEE_URL, json=body)

        assert resp.status_code == 400
        assert resp.get_json() == {"error": "Invalid distance_km"}

    def test_invalid_enum_rejected(self, client):
        resp = client.post(FEE_URL, json=_body(weather_condition="snow"))

        assert resp.status_code == 400
        assert resp.get_json() == {"error": "Invalid weather_condition"}

    def test_huge_distance_returns_max_fee(self, client):
        resp = client.post(FEE_URL, json=_body(distance_km=1e30))

        assert resp.status_code == 200
        assert resp.get_json()["total_fee"] == 500.0

    def test_fee_beyond_float_range_rejected(self, client):
        resp = client.post(FEE_URL, json=_body(distance_km=1e308))

        assert resp.status_code == 400
        assert resp.get_json() == {"error": "Fee out of range"}

    def test_integer_too_big_for_float_rejected(self, client):
        resp = client.post(FEE_URL, data='{"distance_km": 1' + "0" * 400 + ', "weight_kg": 2}',
                           content_type="application/json")

        assert resp.status_code == 400
        assert resp.get_json() == {"error": "Invalid distance_km"}

    def test_malformed_json_rejected(self, client):
        resp = client.post(FEE_URL, data="{not json", content_type="application/json")

        assert resp.status_code == 400
        assert resp.get_json() == {"error": "Invalid request body"}

    def test_malformed_pricing_row_is_generic_500(self, service_row):
        service_row["rain_multiplier"] = None
        client = create_app(pricing_store=InMemoryPricingStore([service_row])).test_client()

        resp = client.post(FEE_URL, json=_body(service_id="svc-express"))

        assert resp.status_code == 500
        assert resp.get_json() == {"error": "Failed to calculate fee"}


class TestPricingRoute:

    def test_default_source(self, client):
        resp = client.get("/api/delivery/pricing")
        data = resp.get_json()

        assert resp.status_code == 200
        assert data["source"] == "default"
        assert data["data"]["base_price"] == 30.0

    def test_service_source(self, client):
        data = client.get("/api/delivery/pricing?service_id=svc-express").get_json()

        assert data["source"] == "service"
        assert data["data"]["service_id"] == "svc-express"
        assert data["data"]["max_fee"] == 800.0


class TestAppBoundary:

    @pytest.mark.parametrize("path", [FEE_URL, "/api/delivery/pricing", "/api/qualquer"])
    def test_preflight(self, client, path):
        resp = client.options(path, headers={
            "Origin": "https://app.example.com",
            "Access-Control-Request-Method": "POST",
        })

        assert resp.status_code == 200
        assert resp.get_data() == b""
        assert resp.headers["Access-Control-Allow-Origin"] == "*"
        assert "apikey" in resp.headers["Access-Control-Allow-Headers"]
        assert "POST" in resp.headers["Access-Control-Allow-Methods"]

    def test_cors_on_regular_response(self, client):
        resp = client.post(FEE_URL, json=_body(), headers={"Origin": "https://app.example.com"})
        assert resp.headers.get("Access-Control-Allow-Origin") in ("*", "https://app.example.com")

    def test_health(self, client):
        assert client.get("/health").get_json()["status"] == "ok"
        assert client.get("/api/health").get_json()["pricing_store"] == "memory"

    def test_not_found_and_method_not_allowed(self, client):
        assert client.get("/api/nada").status_code == 404
        resp = client.get(FEE_URL)
        assert resp.status_code == 405
        assert "error" in resp.get_json()
