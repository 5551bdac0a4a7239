"""
Tests for the Pricing Service: signal fetching, deadlines and fallbacks.
"""

import asyncio

from tests.helpers import MORNING_RUSH, FakeTrafficClient, FakeWeatherClient, make_request


class TestSignals:

    def test_traffic_and_weather_applied(self, make_service):
        service = make_service(
            traffic=FakeTrafficClient(1.2),
            weather=FakeWeatherClient("rain"),
            now=MORNING_RUSH,
        )
        request = make_request(trip_time=None, latitude=-1.28, longitude=36.82)
        result = asyncio.run(service.calculate_price(request))
        assert result.weather_adjustment == 170
        assert result.total == 1119.05  # 949.05 + 170

    def test_origin_destination_forwarded(self, make_service):
        traffic = FakeTrafficClient()
        service = make_service(traffic=traffic)
        asyncio.run(service.calculate_price(make_request()))
        assert traffic.calls == [("Kenyatta Avenue, Nairobi", "Westlands, Nairobi")]

    def test_override_skips_weather_lookup(self, make_service):
        weather = FakeWeatherClient("thunderstorm")
        service = make_service(weather=weather)
        request = make_request(weather_adjustment=50, latitude=-1.28, longitude=36.82)
        result = asyncio.run(service.calculate_price(request))
        assert result.weather_adjustment == 50
        assert weather.calls == []

    def test_no_coordinates_no_surcharge(self, make_service):
        weather = FakeWeatherClient("rain")
        service = make_service(weather=weather)
        result = asyncio.run(service.calculate_price(make_request()))
        assert result.weather_adjustment == 0
        assert weather.calls == []

    def test_unknown_condition_no_surcharge(self, make_service):
        service = make_service(weather=FakeWeatherClient("clouds"))
        request = make_request(latitude=0.0, longitude=0.0)
        result = asyncio.run(service.calculate_price(request))
        assert result.weather_adjustment == 0


class TestDeadlines:

    def test_slow_traffic_falls_back(self, make_service):
        service = make_service(traffic=FakeTrafficClient(1.5, delay=1.0), deadline=0.05)
        result = asyncio.run(service.calculate_price(make_request()))
        assert result.traffic_multiplier == 1.0
        assert result.total == 527.25

    def test_slow_weather_falls_back(self, make_service):
        service = make_service(weather=FakeWeatherClient("rain", delay=1.0), deadline=0.05)
        request = make_request(latitude=0.0, longitude=0.0)
        result = asyncio.run(service.calculate_price(request))
        assert result.weather_adjustment == 0


class TestClock:

    def test_clock_supplies_trip_time(self, make_service):
        service = make_service(now=MORNING_RUSH)
        result = asyncio.run(service.calculate_price(make_request(trip_time=None)))
        assert result.is_rush_hour
        assert result.trip_time == MORNING_RUSH.isoformat()


class TestAllCategories:

    def test_weather_shared_across_categories(self, make_service):
        service = make_service(weather=FakeWeatherClient("drizzle"))
        request = make_request(vehicle_category=None, latitude=0.0, longitude=0.0)
        result = asyncio.run(service.calculate_prices(request))
        assert result.weather_adjustment == 130
        assert len(result.prices) == 5
