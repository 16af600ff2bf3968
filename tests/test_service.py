from datetime import date

import pytest
import requests

from agents.irrigation import service as service_module
from agents.irrigation.models import MeasuredSoil
from agents.irrigation.service import OpenMeteoService, weather_summary
from core.cache import CacheManager
from core.exceptions import SoilDataUnavailable, WeatherDataUnavailable

FORECAST_PAYLOAD = {
    "current": {
        "temperature_2m": 31.4,
        "relative_humidity_2m": 48,
        "wind_speed_10m": 12.6,
        "weather_code": 1,
    },
    "daily": {
        "time": ["2024-06-01", "2024-06-02", "2024-06-03"],
        "weather_code": [0, 61, 95],
        "temperature_2m_max": [34.0, 30.5, 28.1],
        "temperature_2m_min": [22.0, 21.4, 20.9],
        "precipitation_sum": [0.0, 6.2, None],
        "precipitation_probability_max": [5, 70, None],
    },
}

SOIL_PAYLOAD = {
    "hourly": {
        "soil_moisture_0_to_1cm": [0.2],
        "soil_moisture_3_to_9cm": [0.3],
        "soil_moisture_9_to_27cm": [0.4],
        "soil_temperature_0cm": [29.5],
        "soil_temperature_18cm": [26.1],
    }
}

AIR_QUALITY_PAYLOAD = {
    "current": {"european_aqi": 35, "pm10": 21.0, "pm2_5": 9.4, "uv_index": 6.2},
    "hourly": {"grass_pollen": [3.5], "birch_pollen": [None]},
}


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self._payload


@pytest.fixture
def fake_get(monkeypatch):
    calls = []
    responses = {}

    def _get(url, params=None, headers=None, timeout=None):
        calls.append({"url": url, "params": params, "timeout": timeout})
        outcome = responses[url] if url in responses else responses["*"]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    monkeypatch.setattr(service_module.requests, "get", _get)
    _get.calls = calls
    _get.responses = responses
    return _get


@pytest.fixture
def svc():
    return OpenMeteoService({"request_timeout_s": 3})


@pytest.mark.parametrize("code, label", [
    (0, "clear"), (2, "partly-cloudy"), (45, "cloudy"), (63, "rain"),
    (82, "heavy-rain"), (95, "storm"), (None, "unknown"),
])
def test_weather_summary(code, label):
    assert weather_summary(code) == label


class TestWeather:

    def test_parses_current_and_forecast(self, svc, fake_get):
        fake_get.responses["*"] = FakeResponse(FORECAST_PAYLOAD)
        weather = svc.fetch_weather(18.5, 73.9)

        assert weather.current.temperature == 31.4
        assert weather.current.humidity == 48
        assert weather.current.wind_speed == 12.6
        assert weather.current.solar_radiation == 20
        assert weather.current.summary == "partly-cloudy"
        assert [d.date for d in weather.forecast] == [date(2024, 6, 1), date(2024, 6, 2), date(2024, 6, 3)]
        assert [d.precipitation for d in weather.forecast] == [0.0, 6.2, 0.0]
        assert weather.forecast[2].precipitation_probability == 0.0
        assert weather.forecast[2].summary == "storm"
        assert fake_get.calls[0]["timeout"] == 3
        assert fake_get.calls[0]["params"]["forecast_days"] == 7

    def test_network_failure_raises_typed_error(self, svc, fake_get):
        fake_get.responses["*"] = requests.ConnectionError("unreachable")
        with pytest.raises(WeatherDataUnavailable):
            svc.fetch_weather(18.5, 73.9)

    def test_http_error_raises_typed_error(self, svc, fake_get):
        fake_get.responses["*"] = FakeResponse({}, status_code=502)
        with pytest.raises(WeatherDataUnavailable):
            svc.fetch_weather(18.5, 73.9)

    def test_provider_error_payload(self, svc, fake_get):
        fake_get.responses["*"] = FakeResponse({"error": True, "reason": "Latitude must be in range"})
        with pytest.raises(WeatherDataUnavailable, match="Latitude"):
            svc.fetch_weather(118.5, 73.9)

    def test_missing_current_block(self, svc, fake_get):
        fake_get.responses["*"] = FakeResponse({"daily": FORECAST_PAYLOAD["daily"]})
        with pytest.raises(WeatherDataUnavailable):
            svc.fetch_weather(18.5, 73.9)

    def test_empty_forecast(self, svc, fake_get):
        fake_get.responses["*"] = FakeResponse({"current": FORECAST_PAYLOAD["current"], "daily": {"time": []}})
        with pytest.raises(WeatherDataUnavailable):
            svc.fetch_weather(18.5, 73.9)

    def test_cache_serves_repeat_requests(self, fake_get):
        fake_get.responses["*"] = FakeResponse(FORECAST_PAYLOAD)
        cache = CacheManager(max_size=10, ttl=60)
        cached_svc = OpenMeteoService({}, cache=cache)

        first = cached_svc.fetch_weather(18.5, 73.9)
        second = cached_svc.fetch_weather(18.5, 73.9)
        cached_svc.fetch_weather(19.0, 73.9)

        assert first == second
        assert len(fake_get.calls) == 2
        assert len(cache) == 2


class TestSoil:

    def test_weighted_moisture_mean(self, svc, fake_get):
        fake_get.responses["*"] = FakeResponse(SOIL_PAYLOAD)
        soil = svc.fetch_soil(18.5, 73.9)

        assert isinstance(soil, MeasuredSoil)
        assert soil.provenance == "measured"
        # (0.2 * 1 + 0.3 * 2 + 0.4 * 3) / 6
        assert soil.moisture_percentage == 33
        assert soil.temp_surface == 29.5
        assert soil.temp_root == 26.1
        assert soil.water_holding_capacity == 160

    def test_missing_layers_use_typical_values(self, svc, fake_get):
        fake_get.responses["*"] = FakeResponse({"hourly": {"soil_moisture_0_to_1cm": [0.2]}})
        soil = svc.fetch_soil(18.5, 73.9)
        # (0.2 + 0.25 * 2 + 0.3 * 3) / 6
        assert soil.moisture_percentage == 27
        assert soil.temp_surface is None

    def test_no_hourly_data(self, svc, fake_get):
        fake_get.responses["*"] = FakeResponse({})
        with pytest.raises(SoilDataUnavailable):
            svc.fetch_soil(18.5, 73.9)

    def test_timeout(self, svc, fake_get):
        fake_get.responses["*"] = requests.Timeout("slow")
        with pytest.raises(SoilDataUnavailable):
            svc.fetch_soil(18.5, 73.9)


class TestAirQuality:

    def test_parses_readings(self, svc, fake_get):
        fake_get.responses[svc.air_quality_url] = FakeResponse(AIR_QUALITY_PAYLOAD)
        aq = svc.fetch_air_quality(18.5, 73.9)
        assert aq.aqi == 35
        assert aq.pm2_5 == 9.4
        assert aq.pollen.grass == 3.5
        assert aq.pollen.birch == 0.0
        assert aq.pollen.ragweed == 0.0

    def test_failure_returns_none(self, svc, fake_get):
        fake_get.responses[svc.air_quality_url] = requests.ConnectionError("down")
        assert svc.fetch_air_quality(18.5, 73.9) is None

    def test_empty_payload_returns_none(self, svc, fake_get):
        fake_get.responses[svc.air_quality_url] = FakeResponse({})
        assert svc.fetch_air_quality(18.5, 73.9) is None
