"""Request builders, fixed timestamps and in-memory signal providers for tests."""

import asyncio
from datetime import datetime
from typing import Optional

from app.price_engine import TripRequest

OFF_PEAK = datetime(2025, 5, 15, 12, 0)      # Thursday noon
MORNING_RUSH = datetime(2025, 5, 15, 8, 0)   # Thursday 8AM


class FakeTrafficClient:
    def __init__(self, multiplier: float = 1.0, delay: float = 0.0):
        self.multiplier = multiplier
        self.delay = delay
        self.calls = []

    async def get_traffic_multiplier(self, origin: str, destination: str) -> float:
        self.calls.append((origin, destination))
        if self.delay:
            await asyncio.sleep(self.delay)
        return self.multiplier


class FakeWeatherClient:
    def __init__(self, condition: Optional[str] = None, delay: float = 0.0):
        self.condition = condition
        self.delay = delay
        self.calls = []

    async def get_condition(self, latitude: float, longitude: float) -> Optional[str]:
        self.calls.append((latitude, longitude))
        if self.delay:
            await asyncio.sleep(self.delay)
        return self.condition


def make_request(**overrides) -> TripRequest:
    fields = dict(
        distance=10,
        duration=15,
        driver_rating=5.0,
        origin="Kenyatta Avenue, Nairobi",
        destination="Westlands, Nairobi",
        trip_time=OFF_PEAK,
        vehicle_category="economy",
    )
    fields.update(overrides)
    return TripRequest(**fields)
