"""
Traffic signal provider — Google Directions API.

Turns the live traffic delay between origin and destination into a surge
multiplier. Never raises: any failure yields the no-traffic multiplier.
"""

import logging
from typing import List, Optional, Tuple

import httpx

from app.config import NO_TRAFFIC_MULTIPLIER, TRAFFIC_DELAY_TIERS
from app.logging_setup import describe_http_error
from app.surge import delay_to_multiplier

logger = logging.getLogger(__name__)

GOOGLE_DIRECTIONS_URL = "https://maps.googleapis.com/maps/api/directions/json"


def extract_delay_seconds(payload: dict) -> Optional[float]:
    """Delay of the first leg of the first route, or None when absent."""
    routes = payload.get("routes") or []
    if not routes:
        return None
    legs = routes[0].get("legs") or []
    if not legs:
        return None
    leg = legs[0]
    if "duration_in_traffic" not in leg:
        return None
    return leg["duration_in_traffic"]["value"] - leg["duration"]["value"]


class TrafficClient:
    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = GOOGLE_DIRECTIONS_URL,
        timeout: float = 5.0,
        tiers: List[Tuple[int, float]] = TRAFFIC_DELAY_TIERS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self.tiers = tiers
        self._transport = transport

    async def get_traffic_multiplier(self, origin: str, destination: str) -> float:
        """Surge multiplier (>= 1.0) for current traffic on the route."""
        if not self.api_key:
            logger.warning("No Google Maps API key configured, traffic surge disabled")
            return NO_TRAFFIC_MULTIPLIER

        params = {
            "origin": origin,
            "destination": destination,
            "key": self.api_key,
            "departure_time": "now",
            "traffic_model": "best_guess",
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(self.base_url, params=params)
                response.raise_for_status()
                delay = extract_delay_seconds(response.json())
        except httpx.HTTPError as e:
            logger.warning("Traffic lookup failed: %s", describe_http_error(e))
            return NO_TRAFFIC_MULTIPLIER
        except (KeyError, IndexError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Malformed directions response: {e!r}")
            return NO_TRAFFIC_MULTIPLIER

        if delay is None:
            logger.info("No route traffic data for %s → %s", origin, destination)
            return NO_TRAFFIC_MULTIPLIER

        multiplier = delay_to_multiplier(delay, self.tiers)
        logger.debug("Traffic delay %ss → multiplier %.2f", delay, multiplier)
        return multiplier
