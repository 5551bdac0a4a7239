"""
FastAPI Server — Ride Fare Pricing Engine.

Exposes single-category and all-category fare quotes. Traffic and weather
signals are fetched per request; failures fall back to no surge / no
surcharge so a well-formed request is always priced.
"""

from dataclasses import asdict
from datetime import datetime
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field

from app.config import VEHICLE_INFO
from app.logging_setup import setup_logging
from app.price_engine import TripRequest
from app.pricing_service import PricingService
from app.settings import get_settings

# ── App setup ──
settings = get_settings()
setup_logging(settings.log_level, settings.log_json)

app = FastAPI(
    title="Ride Fare Pricing Engine",
    description="Distance/time fares with rush-hour, traffic, rating and weather adjustments",
    version="1.0.0",
)

pricing_service = PricingService.from_settings(settings)


def get_pricing_service() -> PricingService:
    return pricing_service


# ── Request/Response models ──

class PricesRequest(BaseModel):
    distance: float = Field(..., ge=0, description="Trip distance in km", examples=[10])
    duration: float = Field(..., ge=0, description="Trip duration in minutes", examples=[15])
    driver_rating: float = Field(..., ge=0, le=5, examples=[4.8])
    origin: str = Field(..., min_length=1, description="Address or lat,lng")
    destination: str = Field(..., min_length=1, description="Address or lat,lng")
    trip_time: Optional[str] = Field(
        None,
        description="Trip start in ISO format (YYYY-MM-DDTHH:MM:SS); defaults to now",
        examples=["2025-10-18T08:15:00"],
    )
    weather_adjustment: Optional[float] = Field(
        None, description="Explicit weather surcharge; skips the weather lookup"
    )
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)


class PriceRequest(PricesRequest):
    vehicle_category: str = Field(..., description="Vehicle category", examples=["economy"])


class VehicleCategoryInfo(BaseModel):
    category: str
    name: str
    multiplier: float
    max_passengers: int
    engine_capacity: int


def _to_trip_request(request: PricesRequest, vehicle_category: Optional[str] = None) -> TripRequest:
    trip_time = None
    if request.trip_time:
        try:
            trip_time = datetime.fromisoformat(request.trip_time)
        except ValueError:
            raise HTTPException(
                status_code=400,
                detail=f"Invalid datetime format: {request.trip_time}. "
                       f"Use ISO format: YYYY-MM-DDTHH:MM:SS"
            )

    return TripRequest(
        distance=request.distance,
        duration=request.duration,
        driver_rating=request.driver_rating,
        origin=request.origin,
        destination=request.destination,
        trip_time=trip_time,
        vehicle_category=vehicle_category,
        weather_adjustment=request.weather_adjustment,
        latitude=request.latitude,
        longitude=request.longitude,
    )


# ── Routes ──

@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/api/vehicles")
async def get_vehicles(service: PricingService = Depends(get_pricing_service)):
    """Return configured vehicle categories and their multipliers."""
    config = service.engine.config
    vehicles = [
        VehicleCategoryInfo(
            category=category.value,
            name=VEHICLE_INFO[category].name,
            multiplier=multiplier,
            max_passengers=VEHICLE_INFO[category].max_passengers,
            engine_capacity=VEHICLE_INFO[category].engine_capacity,
        )
        for category, multiplier in config.vehicle_multipliers.items()
    ]
    return {"vehicles": [v.model_dump() for v in vehicles]}


@app.post("/calculate-price")
async def calculate_price(
    request: PriceRequest,
    service: PricingService = Depends(get_pricing_service),
):
    """
    Calculate the fare for one vehicle category.

    Unrecognized categories are priced with the default multiplier and
    reported in `warnings`.
    """
    trip = _to_trip_request(request, request.vehicle_category)
    result = await service.calculate_price(trip)
    return asdict(result)


@app.post("/calculate-prices")
async def calculate_prices(
    request: PricesRequest,
    service: PricingService = Depends(get_pricing_service),
):
    """Calculate the fare for every configured vehicle category."""
    trip = _to_trip_request(request)
    result = await service.calculate_prices(trip)
    return asdict(result)


# ── Main ──

if __name__ == "__main__":
    import argparse
    import uvicorn

    parser = argparse.ArgumentParser(description="Ride Fare Pricing Engine")
    parser.add_argument("--port", type=int, default=3000, help="Server port")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    args = parser.parse_args()

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=args.port,
        reload=args.reload,
    )
