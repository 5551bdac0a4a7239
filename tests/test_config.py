"""
Tests for the pricing configuration: immutability, validation and
vehicle category parsing.
"""

import dataclasses

import pytest

from app.config import PricingConfig, VehicleCategory
from app.settings import Settings


class TestImmutability:

    def test_fields_frozen(self):
        config = PricingConfig.default()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.base_fare = 0

    def test_tables_read_only(self):
        config = PricingConfig.default()
        with pytest.raises(TypeError):
            config.vehicle_multipliers[VehicleCategory.XL] = 10.0
        with pytest.raises(TypeError):
            config.weather_surcharges["rain"] = 0.0

    def test_source_dict_changes_do_not_leak(self):
        table = {"rain": 170.0}
        config = PricingConfig(weather_surcharges=table)
        table["rain"] = 1.0
        assert config.weather_surcharges["rain"] == 170.0

    def test_weather_keys_normalized(self):
        config = PricingConfig(weather_surcharges={" Snow ": 250.0})
        assert config.weather_surcharges["snow"] == 250.0


class TestValidation:

    def test_inverted_thresholds_rejected(self):
        with pytest.raises(ValueError, match="threshold"):
            PricingConfig(rating_discount_threshold=2.0, rating_penalty_threshold=3.0)

    def test_rate_out_of_range_rejected(self):
        with pytest.raises(ValueError, match="rate"):
            PricingConfig(driver_rating_adjustment_rate=1.5)

    def test_negative_increment_rejected(self):
        with pytest.raises(ValueError, match="increment"):
            PricingConfig(rush_hour_surge_increment=-0.5)


class TestVehicleCategoryParse:

    @pytest.mark.parametrize("name,expected", [
        ("economy", VehicleCategory.ECONOMY),
        ("ECONOMY", VehicleCategory.ECONOMY),
        ("Economy Plus", VehicleCategory.ECONOMY_PLUS),
        ("economy-plus", VehicleCategory.ECONOMY_PLUS),
        ("Motor Bike Electric", VehicleCategory.MOTORBIKE_ELECTRIC),
        (" xl ", VehicleCategory.XL),
    ])
    def test_known_names(self, name, expected):
        assert VehicleCategory.parse(name) is expected

    @pytest.mark.parametrize("name", ["luxury", "ecnomy", "", None])
    def test_unknown_names(self, name):
        assert VehicleCategory.parse(name) is None

    def test_multiplier_fallback(self):
        config = PricingConfig.default()
        assert config.multiplier_for(None) == 1.0
        assert config.multiplier_for(VehicleCategory.MOTORBIKE) == 0.6


class TestFromSettings:

    def test_scalar_overrides(self, monkeypatch):
        monkeypatch.setenv("BASE_FARE", "100")
        monkeypatch.setenv("COST_PER_KM", "20")
        monkeypatch.setenv("RUSH_HOUR_SURGE_INCREMENT", "0.3")
        config = PricingConfig.from_settings(Settings(_env_file=None))
        assert config.base_fare == 100
        assert config.cost_per_km == 20
        assert config.cost_per_minute == 7.0
        assert config.rush_hour_surge_increment == 0.3

    def test_timezone_defaults_to_host_clock(self, monkeypatch):
        monkeypatch.delenv("TIMEZONE", raising=False)
        config = PricingConfig.from_settings(Settings(_env_file=None))
        assert config.timezone is None
