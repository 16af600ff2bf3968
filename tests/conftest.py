"""
Shared fixtures: weather/soil builders and an in-memory data adapter.
"""
from datetime import date, datetime, timedelta
import threading

import pytest

from agents.irrigation.models import (
    AirQualitySnapshot, CurrentWeather, DailyForecast, MeasuredSoil, WeatherSnapshot,
)
from core.exceptions import SoilDataUnavailable, WeatherDataUnavailable

FIXED_NOW = datetime(2024, 6, 1, 8, 0, 0)


def build_weather(temperature=25.0, humidity=60.0, wind_speed=5.0,
                  solar_radiation=None, rain=(0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0)):
    forecast = [
        DailyForecast(
            date=date(2024, 6, 1) + timedelta(days=i),
            precipitation=mm,
            precipitation_probability=80.0 if mm else 0.0,
            temp_min=temperature - 8,
            temp_max=temperature + 2,
            summary="rain" if mm else "clear",
        )
        for i, mm in enumerate(rain)
    ]
    return WeatherSnapshot(
        current=CurrentWeather(
            temperature=temperature,
            humidity=humidity,
            wind_speed=wind_speed,
            solar_radiation=solar_radiation,
        ),
        forecast=forecast,
        source="test",
    )


class FakeAdapter:
    """Adapter returning canned snapshots, or raising when given none"""

    def __init__(self, weather=None, soil=None, air_quality=None, air_quality_error=None):
        self.weather = weather
        self.soil = soil
        self.air_quality = air_quality
        self.air_quality_error = air_quality_error
        self.calls = []
        self._lock = threading.Lock()

    def _record(self, name):
        with self._lock:
            self.calls.append(name)

    def fetch_weather(self, lat, lon):
        self._record("weather")
        if self.weather is None:
            raise WeatherDataUnavailable("weather provider down")
        return self.weather

    def fetch_soil(self, lat, lon):
        self._record("soil")
        if self.soil is None:
            raise SoilDataUnavailable("soil provider down")
        return self.soil

    def fetch_air_quality(self, lat, lon):
        self._record("air_quality")
        if self.air_quality_error is not None:
            raise self.air_quality_error
        return self.air_quality


@pytest.fixture
def make_weather():
    return build_weather


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def measured_soil():
    def _make(moisture_percentage):
        return MeasuredSoil(moisture_percentage=moisture_percentage, source="test")
    return _make


@pytest.fixture
def air_quality():
    return AirQualitySnapshot(aqi=22, pm10=14.0, pm2_5=6.5, uv_index=5.1)


@pytest.fixture
def fake_adapter():
    return FakeAdapter
