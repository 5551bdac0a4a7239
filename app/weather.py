"""Weather Surcharge Resolver."""

from typing import Mapping, Optional


def normalize_condition(condition: Optional[str]) -> Optional[str]:
    if condition is None:
        return None
    return condition.strip().lower() or None


def resolve_weather_adjustment(
    condition: Optional[str],
    table: Mapping[str, float],
    override: Optional[float] = None,
) -> float:
    """
    Resolve the flat weather surcharge for a trip.

    An explicit override wins and is returned unchanged. Otherwise the
    normalized condition is looked up; unknown or missing conditions cost 0.
    """
    if override is not None:
        return override
    key = normalize_condition(condition)
    if key is None:
        return 0.0
    return table.get(key, 0.0)
