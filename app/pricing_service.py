"""
Pricing Service — host-side orchestration around the PriceEngine.

Fetches the traffic and weather signals concurrently, each under its own
deadline with a safe fallback, then hands already-resolved values to the
engine. The engine never waits on the network.
"""

import asyncio
import logging
from datetime import datetime
from typing import Callable, Optional, Tuple

from app.config import NO_TRAFFIC_MULTIPLIER, PricingConfig
from app.price_engine import MultiCategoryBreakdown, PriceBreakdown, PriceEngine, TripRequest
from app.settings import Settings
from app.traffic_client import TrafficClient
from app.weather import resolve_weather_adjustment
from app.weather_client import WeatherClient

logger = logging.getLogger(__name__)


class PricingService:

    def __init__(
        self,
        engine: PriceEngine,
        traffic_client: TrafficClient,
        weather_client: WeatherClient,
        signal_deadline_seconds: float = 3.0,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.engine = engine
        self.traffic_client = traffic_client
        self.weather_client = weather_client
        self.signal_deadline_seconds = signal_deadline_seconds
        self.clock = clock

    @classmethod
    def from_settings(cls, settings: Settings) -> "PricingService":
        return cls(
            engine=PriceEngine(PricingConfig.from_settings(settings)),
            traffic_client=TrafficClient(
                settings.google_maps_api_key,
                base_url=settings.google_directions_url,
                timeout=settings.provider_timeout_seconds,
            ),
            weather_client=WeatherClient(
                settings.openweather_api_key,
                base_url=settings.openweather_url,
                timeout=settings.provider_timeout_seconds,
            ),
            signal_deadline_seconds=settings.signal_deadline_seconds,
        )

    async def calculate_price(self, request: TripRequest) -> PriceBreakdown:
        """Price the trip for its requested vehicle category."""
        now = self.clock()
        traffic_factor, weather_adjustment = await self._fetch_signals(request)
        return self.engine.calculate(request, traffic_factor, weather_adjustment, now=now)

    async def calculate_prices(self, request: TripRequest) -> MultiCategoryBreakdown:
        """Price the trip for every configured vehicle category."""
        now = self.clock()
        traffic_factor, weather_adjustment = await self._fetch_signals(request)
        return self.engine.calculate_all(request, traffic_factor, weather_adjustment, now=now)

    async def _fetch_signals(self, request: TripRequest) -> Tuple[float, float]:
        traffic_factor, condition = await asyncio.gather(
            self._traffic_factor(request),
            self._weather_condition(request),
        )
        weather_adjustment = resolve_weather_adjustment(
            condition,
            self.engine.config.weather_surcharges,
            override=request.weather_adjustment,
        )
        return traffic_factor, weather_adjustment

    async def _traffic_factor(self, request: TripRequest) -> float:
        try:
            return await asyncio.wait_for(
                self.traffic_client.get_traffic_multiplier(request.origin, request.destination),
                timeout=self.signal_deadline_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Traffic lookup exceeded %.1fs deadline, using %.1f",
                self.signal_deadline_seconds, NO_TRAFFIC_MULTIPLIER,
            )
            return NO_TRAFFIC_MULTIPLIER

    async def _weather_condition(self, request: TripRequest) -> Optional[str]:
        if request.weather_adjustment is not None:
            return None
        if request.latitude is None or request.longitude is None:
            return None
        try:
            return await asyncio.wait_for(
                self.weather_client.get_condition(request.latitude, request.longitude),
                timeout=self.signal_deadline_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Weather lookup exceeded %.1fs deadline, no surcharge applied",
                self.signal_deadline_seconds,
            )
            return None
