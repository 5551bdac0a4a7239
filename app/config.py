"""
Configuration for the Ride Fare Pricing Engine.

Tunable constants live here as module-level defaults; the engine itself only
ever sees an immutable PricingConfig built from them (or from settings).
"""
from dataclasses import dataclass, field
from datetime import time, tzinfo
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple
from zoneinfo import ZoneInfo

# ──────────────────────────────────────────────
# Base Fare Model (KES)
# ──────────────────────────────────────────────

BASE_FARE = 150.0
COST_PER_KM = 30.0
COST_PER_MINUTE = 7.0

# ──────────────────────────────────────────────
# Driver Rating Adjustment
# rating >= discount threshold → discount
# rating <  penalty threshold  → penalty
# ──────────────────────────────────────────────

DRIVER_RATING_ADJUSTMENT_RATE = 0.05
RATING_DISCOUNT_THRESHOLD = 4.5
RATING_PENALTY_THRESHOLD = 3.0

# ──────────────────────────────────────────────
# Vehicle Categories
# ──────────────────────────────────────────────

class VehicleCategory(str, Enum):
    ECONOMY = "economy"
    ECONOMY_PLUS = "economy_plus"
    MOTORBIKE = "motorbike"
    MOTORBIKE_ELECTRIC = "motorbike_electric"
    XL = "xl"

    @classmethod
    def parse(cls, name: Optional[str]) -> Optional["VehicleCategory"]:
        """
        Resolve a client-supplied category name.

        Case, surrounding whitespace and word separators are ignored, so
        "Economy Plus", "economy-plus" and "ECONOMY_PLUS" all match.
        Returns None for absent or unrecognized names.
        """
        if name is None:
            return None
        key = "".join(name.split()).lower().replace("-", "").replace("_", "")
        for category in cls:
            if category.value.replace("_", "") == key:
                return category
        return None


VEHICLE_MULTIPLIERS: Dict[VehicleCategory, float] = {
    VehicleCategory.ECONOMY: 1.0,
    VehicleCategory.ECONOMY_PLUS: 1.5,
    VehicleCategory.MOTORBIKE: 0.6,
    VehicleCategory.MOTORBIKE_ELECTRIC: 0.4,
    VehicleCategory.XL: 2.0,
}

DEFAULT_VEHICLE_MULTIPLIER = 1.0  # Absent or unrecognized category


@dataclass(frozen=True)
class VehicleInfo:
    """Display metadata for a vehicle category."""
    name: str
    max_passengers: int
    engine_capacity: int  # cc


VEHICLE_INFO: Dict[VehicleCategory, VehicleInfo] = {
    VehicleCategory.ECONOMY: VehicleInfo("Economy", 3, 650),
    VehicleCategory.ECONOMY_PLUS: VehicleInfo("Economy Plus", 4, 1000),
    VehicleCategory.MOTORBIKE: VehicleInfo("Motor Bike", 1, 150),
    VehicleCategory.MOTORBIKE_ELECTRIC: VehicleInfo("Motor Bike Electric", 1, 100),
    VehicleCategory.XL: VehicleInfo("XL", 7, 1500),
}

# ──────────────────────────────────────────────
# Rush Hours (local wall-clock, 24h, same-day windows)
# ──────────────────────────────────────────────

RUSH_HOURS: List[Tuple[str, str, str]] = [
    ("morning", "07:00", "09:00"),
    ("evening", "17:00", "19:00"),
]

RUSH_HOUR_SURGE_INCREMENT = 0.5  # Added once to the surge multiplier

# ──────────────────────────────────────────────
# Traffic Delay Tiers (seconds of delay → multiplier)
# ──────────────────────────────────────────────

TRAFFIC_DELAY_TIERS: List[Tuple[int, float]] = [
    (600, 1.5),  # > 10 min delay → 50% surge
    (300, 1.2),  # > 5 min delay  → 20% surge
]
# Order: largest first (checked top→down, first match wins)

NO_TRAFFIC_MULTIPLIER = 1.0

# ──────────────────────────────────────────────
# Weather Surcharges (flat, KES)
# Keys are OpenWeatherMap "main" condition groups, lower-cased
# ──────────────────────────────────────────────

WEATHER_SURCHARGES: Dict[str, float] = {
    "thunderstorm": 200.0,
    "rain": 170.0,
    "drizzle": 130.0,
    "fog": 90.0,
    "mist": 90.0,
}


def parse_time_of_day(value: str) -> time:
    """Parse an "HH:MM" string into a time of day."""
    try:
        hours, minutes = value.strip().split(":")
        return time(int(hours), int(minutes))
    except (AttributeError, ValueError) as e:
        raise ValueError(
            f"Invalid time of day '{value}'. Expected HH:MM (24-hour)."
        ) from e


@dataclass(frozen=True)
class RushHourWindow:
    """A named daily interval, inclusive of both endpoints."""
    name: str
    start: time
    end: time

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(
                f"Rush hour window '{self.name}' starts after it ends "
                f"({self.start:%H:%M} > {self.end:%H:%M}). "
                f"Windows must not wrap past midnight; split it in two."
            )

    @classmethod
    def from_strings(cls, name: str, start: str, end: str) -> "RushHourWindow":
        return cls(name, parse_time_of_day(start), parse_time_of_day(end))


def _default_windows() -> Tuple[RushHourWindow, ...]:
    return tuple(RushHourWindow.from_strings(*w) for w in RUSH_HOURS)


@dataclass(frozen=True)
class PricingConfig:
    """
    Process-wide pricing parameters, read-only after startup.

    Mapping fields are wrapped in read-only proxies so no request can
    mutate the shared tables.
    """
    base_fare: float = BASE_FARE
    cost_per_km: float = COST_PER_KM
    cost_per_minute: float = COST_PER_MINUTE
    driver_rating_adjustment_rate: float = DRIVER_RATING_ADJUSTMENT_RATE
    rating_discount_threshold: float = RATING_DISCOUNT_THRESHOLD
    rating_penalty_threshold: float = RATING_PENALTY_THRESHOLD
    rush_hour_surge_increment: float = RUSH_HOUR_SURGE_INCREMENT
    default_vehicle_multiplier: float = DEFAULT_VEHICLE_MULTIPLIER
    vehicle_multipliers: Mapping[VehicleCategory, float] = field(
        default_factory=lambda: dict(VEHICLE_MULTIPLIERS)
    )
    rush_hour_windows: Tuple[RushHourWindow, ...] = field(default_factory=_default_windows)
    weather_surcharges: Mapping[str, float] = field(
        default_factory=lambda: dict(WEATHER_SURCHARGES)
    )
    timezone: Optional[tzinfo] = None  # wall clock for rush hours; None → host local zone

    def __post_init__(self):
        if not 0.0 <= self.driver_rating_adjustment_rate < 1.0:
            raise ValueError(
                f"Driver rating adjustment rate must be in [0, 1) "
                f"(got {self.driver_rating_adjustment_rate})."
            )
        if self.rating_penalty_threshold > self.rating_discount_threshold:
            raise ValueError(
                f"Penalty threshold ({self.rating_penalty_threshold}) must not "
                f"exceed discount threshold ({self.rating_discount_threshold})."
            )
        if self.rush_hour_surge_increment < 0:
            raise ValueError(
                f"Rush hour surge increment must be non-negative "
                f"(got {self.rush_hour_surge_increment})."
            )
        # frozen: bypass __setattr__ to install the read-only views
        object.__setattr__(
            self, "vehicle_multipliers", MappingProxyType(dict(self.vehicle_multipliers))
        )
        object.__setattr__(
            self, "weather_surcharges",
            MappingProxyType({k.strip().lower(): v for k, v in self.weather_surcharges.items()}),
        )
        object.__setattr__(self, "rush_hour_windows", tuple(self.rush_hour_windows))

    @classmethod
    def default(cls) -> "PricingConfig":
        return cls()

    @classmethod
    def from_settings(cls, settings) -> "PricingConfig":
        """Build a config with the scalar knobs taken from Settings."""
        return cls(
            base_fare=settings.base_fare,
            cost_per_km=settings.cost_per_km,
            cost_per_minute=settings.cost_per_minute,
            driver_rating_adjustment_rate=settings.driver_rating_adjustment_rate,
            rush_hour_surge_increment=settings.rush_hour_surge_increment,
            timezone=ZoneInfo(settings.timezone) if settings.timezone else None,
        )

    def multiplier_for(self, category: Optional[VehicleCategory]) -> float:
        if category is None:
            return self.default_vehicle_multiplier
        return self.vehicle_multipliers.get(category, self.default_vehicle_multiplier)
