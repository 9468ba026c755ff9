import pytest

from dropee.logic.models import DeliveryFeeRequest, PricingConfig
from dropee.logic.pricing_resolver import system_default_pricing
from dropee.main import create_app
from dropee.providers.pricing_store import InMemoryPricingStore

SERVICE_ROW = {
    "id": "row-1",
    "service_id": "svc-express",
    "base_price": 50,
    "price_per_km": 12,
    "price_per_kg": 8,
    "fragile_multiplier": 2,
    "rain_multiplier": 1.5,
    "urgent_multiplier": 2,
    "min_fee": 40,
    "max_fee": 800,
    "created_at": "2024-01-10T09:00:00+00:00",
    "updated_at": "2024-01-10T09:00:00+00:00",
}


@pytest.fixture
def default_pricing():
    return system_default_pricing()


@pytest.fixture
def service_row():
    return dict(SERVICE_ROW)


@pytest.fixture
def service_pricing(service_row):
    return PricingConfig.from_row(service_row)


@pytest.fixture
def make_request():
    def _make(**overrides):
        values = {"distance_km": 0.0, "weight_kg": 2.0}
        values.update(overrides)
        return DeliveryFeeRequest(**values)
    return _make


@pytest.fixture
def pricing_store(service_row):
    return InMemoryPricingStore([service_row])


@pytest.fixture
def app(pricing_store):
    app = create_app(pricing_store=pricing_store)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
