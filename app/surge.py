"""
Surge Multiplier Composer.

Combines the time-of-day rush-hour increment with the externally supplied
traffic-delay factor. The traffic factor is never computed here.
"""

from datetime import datetime, tzinfo
from typing import Iterable, List, Optional, Tuple

from app.config import (
    NO_TRAFFIC_MULTIPLIER,
    RUSH_HOUR_SURGE_INCREMENT,
    TRAFFIC_DELAY_TIERS,
    RushHourWindow,
)
from app.rush_hour import is_rush_hour


def compose_surge(
    moment: datetime,
    traffic_factor: float,
    windows: Iterable[RushHourWindow],
    rush_hour_increment: float = RUSH_HOUR_SURGE_INCREMENT,
    tz: Optional[tzinfo] = None,
) -> float:
    """
    Compute the surge multiplier for a trip.

    The rush-hour increment is added once, however many windows match,
    and the result is then scaled by the traffic factor. No upper bound.
    """
    surge = 1.0
    if is_rush_hour(moment, windows, tz):
        surge += rush_hour_increment
    return surge * traffic_factor


def delay_to_multiplier(
    delay_seconds: float,
    tiers: List[Tuple[int, float]] = TRAFFIC_DELAY_TIERS,
) -> float:
    """Map a traffic delay in seconds to a multiplier (first tier exceeded wins)."""
    for threshold, multiplier in tiers:
        if delay_seconds > threshold:
            return multiplier
    return NO_TRAFFIC_MULTIPLIER
