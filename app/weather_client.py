"""
Weather signal provider — OpenWeatherMap current conditions.

Returns the lower-cased condition group ("rain", "mist", ...) or None when
the lookup fails, which the resolver prices as no surcharge.
"""

import logging
from typing import Optional

import httpx

from app.logging_setup import describe_http_error
from app.weather import normalize_condition

logger = logging.getLogger(__name__)

OPENWEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"


class WeatherClient:
    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = OPENWEATHER_URL,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport

    async def get_condition(self, latitude: float, longitude: float) -> Optional[str]:
        if not self.api_key:
            logger.warning("No OpenWeather API key configured, weather surcharge disabled")
            return None

        params = {"lat": latitude, "lon": longitude, "appid": self.api_key}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(self.base_url, params=params)
                response.raise_for_status()
                condition = normalize_condition(response.json()["weather"][0]["main"])
        except httpx.HTTPError as e:
            logger.warning("Weather lookup failed: %s", describe_http_error(e))
            return None
        except (KeyError, IndexError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Malformed weather response: {e!r}")
            return None

        logger.debug("Weather at (%s, %s): %s", latitude, longitude, condition)
        return condition
