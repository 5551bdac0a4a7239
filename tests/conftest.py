"""Shared fixtures: engine and a pricing service wired to fake providers."""

import pytest

from app.config import PricingConfig
from app.price_engine import PriceEngine
from app.pricing_service import PricingService

from tests.helpers import OFF_PEAK, FakeTrafficClient, FakeWeatherClient


@pytest.fixture
def engine():
    """Create a PriceEngine with the default configuration."""
    return PriceEngine(PricingConfig.default())


@pytest.fixture
def make_service(engine):
    """Factory for a PricingService wired to fake providers and a fixed clock."""
    def _make(traffic=None, weather=None, deadline=1.0, now=OFF_PEAK):
        return PricingService(
            engine=engine,
            traffic_client=traffic or FakeTrafficClient(),
            weather_client=weather or FakeWeatherClient(),
            signal_deadline_seconds=deadline,
            clock=lambda: now,
        )
    return _make
