import math

import pytest

from agents.irrigation.evapotranspiration import (
    compute_et, compute_et0, get_crop_coefficient, normalize_crop_type,
)
from agents.irrigation.models import CurrentWeather


def weather(temperature=25.0, humidity=60.0, wind_speed=5.0, solar_radiation=None):
    return CurrentWeather(
        temperature=temperature,
        humidity=humidity,
        wind_speed=wind_speed,
        solar_radiation=solar_radiation,
    )


class TestComputeET:

    def test_factors_multiply_into_et0(self):
        # temp 1.0 * humidity 0.6 * wind 2.0 * radiation 1.0 * 5
        est = compute_et(weather(35, 40, 10), "tomato", "mid")
        assert est.et0 == pytest.approx(6.0)
        assert est.crop_coefficient == 1.15
        assert est.et_crop == pytest.approx(6.9)

    def test_results_are_rounded_to_two_decimals(self):
        est = compute_et(weather(27, 55, 3), "wheat", "development")
        assert est.et0 == round(est.et0, 2)
        assert est.et_crop == round(est.et_crop, 2)

    def test_cold_weather_has_no_demand(self):
        est = compute_et(weather(2, 30, 20), "rice", "mid")
        assert est.et0 == 0
        assert est.et_crop == 0

    def test_humidity_factor_has_a_floor(self):
        assert compute_et0(weather(35, 95, 0)) == pytest.approx(compute_et0(weather(35, 70, 0)))

    def test_wind_factor_is_capped(self):
        assert compute_et0(weather(30, 50, 40)) == pytest.approx(compute_et0(weather(30, 50, 10)))

    def test_out_of_range_inputs_are_clamped(self):
        assert compute_et0(weather(30, -20, 5)) == pytest.approx(compute_et0(weather(30, 0, 5)))
        assert compute_et0(weather(30, 140, 5)) == pytest.approx(compute_et0(weather(30, 100, 5)))
        assert compute_et0(weather(30, 50, -12)) == pytest.approx(compute_et0(weather(30, 50, 0)))

    def test_non_finite_inputs_are_coerced(self):
        # humidity and wind read as 0: every factor is 1
        est = compute_et(weather(35, math.nan, math.inf), "tomato", "mid")
        assert est.et0 == pytest.approx(5.0)
        assert est.et_crop == pytest.approx(5.75)

        est = compute_et(weather(math.nan, 40, 10, solar_radiation=math.inf), "tomato", "mid")
        assert est.et0 == 0
        assert est.et_crop == 0

    def test_radiation_scales_demand(self):
        baseline = compute_et0(weather(30, 50, 5))
        assert compute_et0(weather(30, 50, 5, solar_radiation=25)) == pytest.approx(baseline)
        assert compute_et0(weather(30, 50, 5, solar_radiation=50)) == pytest.approx(2 * baseline)

    def test_monotonic_in_temperature(self):
        values = [compute_et0(weather(t, 45, 8, 20)) for t in range(-10, 51)]
        assert all(b >= a for a, b in zip(values, values[1:]))

    def test_unknown_crop_uses_default_row(self):
        est = compute_et(weather(38, 25, 5), "xyz", "mid")
        assert est.crop_coefficient == 1.0
        assert math.isfinite(est.et0) and math.isfinite(est.et_crop)
        assert est.et_crop == est.et0


class TestCropLookup:

    @pytest.mark.parametrize("raw, expected", [
        ("tomatoes", "tomato"),
        ("Tomato", "tomato"),
        ("maize", "corn"),
        (" Corn ", "corn"),
        ("Potatoes", "potato"),
        ("paddy", "rice"),
        ("Mixed Crops", "default"),
        ("unknown", "default"),
        ("xyz", "default"),
        ("", "default"),
        (None, "default"),
    ])
    def test_normalize_crop_type(self, raw, expected):
        assert normalize_crop_type(raw) == expected

    def test_stage_specific_coefficients(self):
        assert get_crop_coefficient("maize", "initial") == 0.3
        assert get_crop_coefficient("maize", "late") == 0.6
        assert get_crop_coefficient("rice", "development") == 1.10

    def test_unknown_stage_falls_back_to_mid(self):
        assert get_crop_coefficient("wheat", "flowering") == 1.15
        assert get_crop_coefficient("wheat", None) == 1.15
