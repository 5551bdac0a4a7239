"""
Price Engine — Computes ride fares.

Base cost from fare + distance + time, scaled by vehicle category and surge,
adjusted for driver rating, plus a flat weather surcharge. Returns a full
breakdown for one category or for every configured category.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Tuple

from app.config import VEHICLE_INFO, PricingConfig, VehicleCategory
from app.rush_hour import matching_window, to_local
from app.surge import compose_surge

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TripRequest:
    """Trip attributes supplied per request."""
    distance: float               # km
    duration: float               # minutes
    driver_rating: float          # conventionally 0-5
    origin: str
    destination: str
    trip_time: Optional[datetime] = None
    vehicle_category: Optional[str] = None
    weather_adjustment: Optional[float] = None  # explicit surcharge override
    latitude: Optional[float] = None
    longitude: Optional[float] = None


@dataclass
class PriceBreakdown:
    """Single-category pricing result with full breakdown."""
    # Final output
    total: float
    raw_total: float

    # Base cost
    base_fare: float
    distance_cost: float
    time_cost: float
    base_cost: float

    # Vehicle
    vehicle_category: Optional[str]
    vehicle_category_multiplier: float

    # Surge
    surge_multiplier: float
    is_rush_hour: bool
    traffic_multiplier: float

    # Adjustments
    driver_rating_adjustment_rate: float
    rating_adjustment: str        # "discount", "penalty" or "none"
    weather_adjustment: float

    trip_time: str
    warnings: List[str] = field(default_factory=list)
    explanation: List[str] = field(default_factory=list)


@dataclass
class CategoryPrice:
    """Price of one vehicle category within a multi-category quote."""
    category: str
    name: str
    max_passengers: int
    engine_capacity: int
    multiplier: float
    price: float
    raw_price: float


@dataclass
class MultiCategoryBreakdown:
    """Shared pricing inputs plus one price per configured category."""
    base_fare: float
    distance_cost: float
    time_cost: float
    base_cost: float
    surge_multiplier: float
    is_rush_hour: bool
    traffic_multiplier: float
    driver_rating_adjustment_rate: float
    rating_adjustment: str
    weather_adjustment: float
    trip_time: str
    prices: List[CategoryPrice]
    explanation: List[str] = field(default_factory=list)


@dataclass
class _SharedTerms:
    distance_cost: float
    time_cost: float
    base_cost: float
    trip_time: datetime
    local_time: datetime
    surge: float
    rush_window: Optional[str]


class PriceEngine:
    """
    Fare calculator for ride-hailing trips.

    Stateless: every result is a pure function of the request, the
    config, the traffic factor, the weather adjustment and `now`.
    """

    def __init__(self, config: Optional[PricingConfig] = None):
        self.config = config or PricingConfig.default()

    def calculate(
        self,
        request: TripRequest,
        traffic_factor: float = 1.0,
        weather_adjustment: float = 0.0,
        now: Optional[datetime] = None,
    ) -> PriceBreakdown:
        """
        Price a trip for its requested vehicle category.

        Args:
            request: Trip attributes
            traffic_factor: Congestion multiplier (>= 1.0) from the traffic provider
            weather_adjustment: Flat surcharge, already resolved
            now: Evaluation time, used when the request has no trip_time

        Returns:
            PriceBreakdown with full breakdown

        Raises:
            ValueError: If neither request.trip_time nor now is given
        """
        warnings = []
        terms = self._shared_terms(request, traffic_factor, now)

        category = VehicleCategory.parse(request.vehicle_category)
        if category is None and request.vehicle_category is not None:
            logger.warning(
                "Unrecognized vehicle category %r, using default multiplier %.2f",
                request.vehicle_category, self.config.default_vehicle_multiplier,
            )
            warnings.append(
                f"Unrecognized vehicle category '{request.vehicle_category}' — "
                f"priced with default multiplier {self.config.default_vehicle_multiplier}×"
            )
        multiplier = self.config.multiplier_for(category)

        final, rating_label = self._price_for_multiplier(
            terms, multiplier, request.driver_rating, weather_adjustment
        )

        explanation = self._build_explanation(
            request, terms, traffic_factor, rating_label, weather_adjustment
        )
        label = category.value if category else (request.vehicle_category or "default")
        explanation.insert(
            1, f"🚗 Vehicle: {label} — multiplier {multiplier:.2f}×"
        )
        explanation.append(f"💰 Total: KES {final:.2f}")

        return PriceBreakdown(
            total=round(final, 2),
            raw_total=final,
            base_fare=self.config.base_fare,
            distance_cost=terms.distance_cost,
            time_cost=terms.time_cost,
            base_cost=terms.base_cost,
            vehicle_category=category.value if category else request.vehicle_category,
            vehicle_category_multiplier=multiplier,
            surge_multiplier=round(terms.surge, 4),
            is_rush_hour=terms.rush_window is not None,
            traffic_multiplier=traffic_factor,
            driver_rating_adjustment_rate=self.config.driver_rating_adjustment_rate,
            rating_adjustment=rating_label,
            weather_adjustment=weather_adjustment,
            trip_time=terms.trip_time.isoformat(),
            warnings=warnings,
            explanation=explanation,
        )

    def calculate_all(
        self,
        request: TripRequest,
        traffic_factor: float = 1.0,
        weather_adjustment: float = 0.0,
        now: Optional[datetime] = None,
    ) -> MultiCategoryBreakdown:
        """
        Price a trip for every configured vehicle category.

        Surge and weather surcharge are computed once and shared; only the
        category multiplier differs between entries. request.vehicle_category
        is ignored.
        """
        terms = self._shared_terms(request, traffic_factor, now)
        rating_label = "none"

        prices = []
        for category, multiplier in self.config.vehicle_multipliers.items():
            final, rating_label = self._price_for_multiplier(
                terms, multiplier, request.driver_rating, weather_adjustment
            )
            info = VEHICLE_INFO[category]
            prices.append(CategoryPrice(
                category=category.value,
                name=info.name,
                max_passengers=info.max_passengers,
                engine_capacity=info.engine_capacity,
                multiplier=multiplier,
                price=round(final, 2),
                raw_price=final,
            ))

        explanation = self._build_explanation(
            request, terms, traffic_factor, rating_label, weather_adjustment
        )
        explanation.append(f"🚗 Priced {len(prices)} vehicle categories")

        return MultiCategoryBreakdown(
            base_fare=self.config.base_fare,
            distance_cost=terms.distance_cost,
            time_cost=terms.time_cost,
            base_cost=terms.base_cost,
            surge_multiplier=round(terms.surge, 4),
            is_rush_hour=terms.rush_window is not None,
            traffic_multiplier=traffic_factor,
            driver_rating_adjustment_rate=self.config.driver_rating_adjustment_rate,
            rating_adjustment=rating_label,
            weather_adjustment=weather_adjustment,
            trip_time=terms.trip_time.isoformat(),
            prices=prices,
            explanation=explanation,
        )

    def _shared_terms(
        self, request: TripRequest, traffic_factor: float, now: Optional[datetime]
    ) -> _SharedTerms:
        trip_time = request.trip_time if request.trip_time is not None else now
        if trip_time is None:
            raise ValueError("now must be supplied when the request has no trip_time")

        # ── Step 1-3: Base cost ──
        distance_cost = request.distance * self.config.cost_per_km
        time_cost = request.duration * self.config.cost_per_minute
        base_cost = self.config.base_fare + distance_cost + time_cost

        # ── Step 5: Surge (once, shared across categories) ──
        windows = self.config.rush_hour_windows
        tz = self.config.timezone
        surge = compose_surge(
            trip_time, traffic_factor, windows, self.config.rush_hour_surge_increment, tz
        )
        window = matching_window(trip_time, windows, tz)

        return _SharedTerms(
            distance_cost=distance_cost,
            time_cost=time_cost,
            base_cost=base_cost,
            trip_time=trip_time,
            local_time=to_local(trip_time, tz),
            surge=surge,
            rush_window=window.name if window else None,
        )

    def _price_for_multiplier(
        self,
        terms: _SharedTerms,
        multiplier: float,
        driver_rating: float,
        weather_adjustment: float,
    ) -> Tuple[float, str]:
        # ── Step 4: Vehicle category ──
        cost = terms.base_cost * multiplier

        # ── Step 6: Surge ──
        cost *= terms.surge

        # ── Step 7: Driver rating ──
        cost, rating_label = self._apply_rating(cost, driver_rating)

        # ── Step 8: Weather surcharge, flat, applied last ──
        return cost + weather_adjustment, rating_label

    def _apply_rating(self, cost: float, driver_rating: float) -> Tuple[float, str]:
        rate = self.config.driver_rating_adjustment_rate
        if driver_rating >= self.config.rating_discount_threshold:
            return cost - cost * rate, "discount"
        elif driver_rating < self.config.rating_penalty_threshold:
            return cost + cost * rate, "penalty"
        return cost, "none"

    def _build_explanation(
        self, request, terms, traffic_factor, rating_label, weather_adjustment
    ) -> List[str]:
        """Build step-by-step human-readable pricing explanation."""
        cfg = self.config
        steps = []

        steps.append(
            f"📏 Base cost: KES {cfg.base_fare:.2f} fare + "
            f"{request.distance} km × {cfg.cost_per_km} + "
            f"{request.duration} min × {cfg.cost_per_minute} = KES {terms.base_cost:.2f}"
        )

        if terms.rush_window:
            steps.append(
                f"🕐 Rush hour ({terms.rush_window}) at {terms.local_time:%H:%M}: "
                f"+{cfg.rush_hour_surge_increment:.2f}"
            )
        else:
            steps.append(f"🕐 Off-peak at {terms.local_time:%H:%M}")

        steps.append(f"🚦 Traffic multiplier: {traffic_factor:.2f}×")
        steps.append(f"📈 Surge multiplier: {terms.surge:.2f}×")

        pct = int(round(cfg.driver_rating_adjustment_rate * 100))
        if rating_label == "discount":
            steps.append(f"⭐ Driver rating {request.driver_rating}: {pct}% off")
        elif rating_label == "penalty":
            steps.append(f"⭐ Driver rating {request.driver_rating}: +{pct}%")
        else:
            steps.append(f"⭐ Driver rating {request.driver_rating}: no adjustment")

        if weather_adjustment:
            steps.append(f"🌧️ Weather surcharge: +KES {weather_adjustment:.2f}")

        return steps
