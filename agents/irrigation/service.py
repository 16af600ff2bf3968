# agents/irrigation/service.py
"""
Environmental data adapter - weather, soil and air quality from Open-Meteo
"""
import requests
from typing import Any, Dict, List, Optional, Protocol, Union
from datetime import date as dt_date
from agents.irrigation.models import (
    AirQualitySnapshot, CurrentWeather, DailyForecast, DefaultSoil,
    MeasuredSoil, PollenReading, WeatherSnapshot,
)
from core.cache import CacheManager
from core.exceptions import SoilDataUnavailable, WeatherDataUnavailable
import logging

logger = logging.getLogger(__name__)


class EnvironmentalDataAdapter(Protocol):
    """What the recommendation engine needs from an environmental data source"""

    def fetch_weather(self, lat: float, lon: float) -> WeatherSnapshot: ...

    def fetch_soil(self, lat: float, lon: float) -> Union[MeasuredSoil, DefaultSoil]: ...

    def fetch_air_quality(self, lat: float, lon: float) -> Optional[AirQualitySnapshot]: ...


def weather_summary(code: Optional[int]) -> str:
    """Collapse a WMO weather code into a short label"""
    if code is None:
        return "unknown"
    if code == 0:
        return "clear"
    if code < 3:
        return "partly-cloudy"
    if code < 50:
        return "cloudy"
    if code < 80:
        return "rain"
    if code < 90:
        return "heavy-rain"
    return "storm"


class OpenMeteoService:
    """Open-Meteo backed implementation of the environmental data adapter"""

    SOLAR_RADIATION_PROXY = 20.0
    DEFAULT_FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
    DEFAULT_AIR_QUALITY_URL = "https://air-quality-api.open-meteo.com/v1/air-quality"

    # m3/m3 at 0-1, 3-9 and 9-27 cm, weighted towards the root zone
    SOIL_LAYERS = (
        ("soil_moisture_0_to_1cm", 0.2, 1),
        ("soil_moisture_3_to_9cm", 0.25, 2),
        ("soil_moisture_9_to_27cm", 0.3, 3),
    )

    def __init__(self, config: Dict[str, Any], cache: Optional[CacheManager] = None):
        self.config = config
        self.forecast_url = config.get("forecast_url", self.DEFAULT_FORECAST_URL)
        self.air_quality_url = config.get("air_quality_url", self.DEFAULT_AIR_QUALITY_URL)
        self.timeout = config.get("request_timeout_s", 10)
        self.forecast_days = config.get("forecast_days", 7)
        self.headers = {"User-Agent": config.get("user_agent", "Agrilo/1.0")}
        self.cache = cache

    # ---------- helpers ----------

    def _safe_num(self, v):
        try:
            return float(v)
        except (TypeError, ValueError):
            return None

    def _safe_idx(self, seq, i):
        if not isinstance(seq, list):
            return None
        try:
            return seq[i]
        except (IndexError, TypeError):
            return None

    def _safe_parse_date(self, s):
        try:
            return dt_date.fromisoformat(s)
        except (TypeError, ValueError):
            return None

    def _get_json(self, url: str, params: Dict[str, Any]) -> Dict[str, Any]:
        cache_key = (url, tuple(sorted(params.items())))
        if self.cache is not None:
            cached = self.cache.get(cache_key)
            if cached is not None:
                logger.info(f"Using cached Open-Meteo data for lat={params['latitude']}, lon={params['longitude']}")
                return cached

        resp = requests.get(url, params=params, headers=self.headers, timeout=self.timeout)
        resp.raise_for_status()
        payload = resp.json()
        if payload.get("error"):
            raise ValueError(payload.get("reason", "Open-Meteo error"))

        if self.cache is not None:
            self.cache.set(cache_key, payload)
        return payload

    # ---------- weather ----------

    def fetch_weather(self, lat: float, lon: float) -> WeatherSnapshot:
        """Current conditions plus a daily forecast"""
        params = {
            "latitude": lat,
            "longitude": lon,
            "current": "temperature_2m,relative_humidity_2m,weather_code,wind_speed_10m",
            "daily": ",".join([
                "weather_code",
                "temperature_2m_max",
                "temperature_2m_min",
                "precipitation_sum",
                "precipitation_probability_max",
            ]),
            "timezone": "auto",
            "forecast_days": self.forecast_days,
        }
        try:
            payload = self._get_json(self.forecast_url, params)
            logger.info(f"Weather data fetched successfully for lat={lat}, lon={lon}")
            return self.parse_weather(payload)
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Open-Meteo weather request failed: {e}")
            raise WeatherDataUnavailable(f"Weather data fetch failed: {e}") from e

    def parse_weather(self, payload: Dict[str, Any]) -> WeatherSnapshot:
        current = payload.get("current") or {}
        temperature = self._safe_num(current.get("temperature_2m"))
        humidity = self._safe_num(current.get("relative_humidity_2m"))
        if temperature is None or humidity is None:
            raise ValueError("Open-Meteo response has no current conditions")

        d = payload.get("daily", {}) or {}
        times: List[str] = d.get("time", []) or []
        forecast = []
        for i, t in enumerate(times):
            code = self._safe_num(self._safe_idx(d.get("weather_code"), i))
            forecast.append(DailyForecast(
                date=self._safe_parse_date(t),
                precipitation=self._safe_num(self._safe_idx(d.get("precipitation_sum"), i)) or 0.0,
                precipitation_probability=self._safe_num(self._safe_idx(d.get("precipitation_probability_max"), i)) or 0.0,
                temp_min=self._safe_num(self._safe_idx(d.get("temperature_2m_min"), i)),
                temp_max=self._safe_num(self._safe_idx(d.get("temperature_2m_max"), i)),
                summary=weather_summary(int(code) if code is not None else None),
            ))
        if not forecast:
            raise ValueError("Open-Meteo response has no daily forecast")

        code = self._safe_num(current.get("weather_code"))
        return WeatherSnapshot(
            current=CurrentWeather(
                temperature=temperature,
                humidity=humidity,
                wind_speed=self._safe_num(current.get("wind_speed_10m")) or 0.0,
                solar_radiation=self.SOLAR_RADIATION_PROXY,
                summary=weather_summary(int(code) if code is not None else None),
            ),
            forecast=forecast,
            source="Open-Meteo",
        )

    # ---------- soil ----------

    def fetch_soil(self, lat: float, lon: float) -> MeasuredSoil:
        """Root-zone moisture and temperature for the first forecast hour"""
        params = {
            "latitude": lat,
            "longitude": lon,
            "hourly": ",".join([layer for layer, _, _ in self.SOIL_LAYERS] + [
                "soil_temperature_0cm",
                "soil_temperature_18cm",
            ]),
            "timezone": "auto",
            "forecast_days": 1,
        }
        try:
            payload = self._get_json(self.forecast_url, params)
            logger.info(f"Soil data fetched successfully for lat={lat}, lon={lon}")
            return self.parse_soil(payload)
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Open-Meteo soil request failed: {e}")
            raise SoilDataUnavailable(f"Soil data unavailable: {e}") from e

    def parse_soil(self, payload: Dict[str, Any]) -> MeasuredSoil:
        hourly = payload.get("hourly")
        if not hourly:
            raise ValueError("Open-Meteo response has no hourly soil data")

        weighted, weights = 0.0, 0
        for layer, fallback, weight in self.SOIL_LAYERS:
            value = self._safe_num(self._safe_idx(hourly.get(layer), 0))
            weighted += (fallback if value is None else value) * weight
            weights += weight
        mean_moisture = weighted / weights

        # Open-Meteo has no chemistry; loam defaults stand in
        return MeasuredSoil(
            type="loam",
            moisture_percentage=round(mean_moisture * 100),
            temp_surface=self._safe_num(self._safe_idx(hourly.get("soil_temperature_0cm"), 0)),
            temp_root=self._safe_num(self._safe_idx(hourly.get("soil_temperature_18cm"), 0)),
            ph=6.5,
            organic_matter=3.5,
            drainage="well",
            water_holding_capacity=160,
            source="Open-Meteo",
        )

    # ---------- air quality ----------

    def fetch_air_quality(self, lat: float, lon: float) -> Optional[AirQualitySnapshot]:
        """Best effort; returns None instead of raising"""
        params = {
            "latitude": lat,
            "longitude": lon,
            "current": "european_aqi,pm10,pm2_5,uv_index",
            "hourly": "birch_pollen,grass_pollen,olive_pollen,ragweed_pollen",
            "timezone": "auto",
            "forecast_days": 1,
        }
        try:
            payload = self._get_json(self.air_quality_url, params)
            return self.parse_air_quality(payload)
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"Failed to get air quality data: {e}")
            return None

    def parse_air_quality(self, payload: Dict[str, Any]) -> Optional[AirQualitySnapshot]:
        current = payload.get("current")
        if not current:
            return None
        hourly = payload.get("hourly") or {}
        pollen = {
            kind: self._safe_num(self._safe_idx(hourly.get(f"{kind}_pollen"), 0)) or 0.0
            for kind in ("birch", "grass", "olive", "ragweed")
        }
        return AirQualitySnapshot(
            aqi=self._safe_num(current.get("european_aqi")),
            pm10=self._safe_num(current.get("pm10")),
            pm2_5=self._safe_num(current.get("pm2_5")),
            uv_index=self._safe_num(current.get("uv_index")),
            pollen=PollenReading(**pollen),
            source="Open-Meteo",
        )
