# agents/irrigation/agent.py
"""
Irrigation advisory agent - rule-based irrigation recommendations
"""

import asyncio
from typing import Dict, Any, List, Optional
from datetime import datetime

from agents.base import BaseAgent
from agents.irrigation.constants import (
    CROP_COEFFICIENTS, CROP_SYNONYMS, DEFAULT_CROP, SOIL_DESCRIPTIONS,
    SOIL_WATER_CAPACITY, ROOT_DEPTH_M,
)
from agents.irrigation.models import RecommendationRequest, IrrigationResponse
from agents.irrigation.policy import build_recommendation
from agents.irrigation.service import EnvironmentalDataAdapter, OpenMeteoService
from core.cache import CacheManager
from core.exceptions import AgentConfigError

class IrrigationAgent(BaseAgent[RecommendationRequest, IrrigationResponse]):
    """
    Irrigation advisory agent

    Features:
    - Weather, soil and air quality from Open-Meteo
    - Simplified ET0 proxy with crop coefficients by growth stage
    - Root-zone water balance, measured or estimated
    - Ordered decision rules with cost and environmental advisories
    - Degraded mode when soil data is unavailable
    """

    def __init__(self, adapter: Optional[EnvironmentalDataAdapter] = None):
        super().__init__("irrigation")
        if adapter is None:
            cache = None
            if self.settings.cache_enabled:
                cache = CacheManager(
                    max_size=self.settings.cache_max_size,
                    ttl=self.settings.cache_default_ttl,
                )
            adapter = OpenMeteoService(config=self.config, cache=cache)
        self.adapter = adapter
        self.logger.info("Irrigation agent initialized")

    def _validate_config(self) -> None:
        """Validate irrigation agent configuration"""
        required_config = [
            "forecast_url", "air_quality_url", "request_timeout_s", "forecast_days"
        ]

        missing = [key for key in required_config if key not in self.config]
        if missing:
            self.logger.warning(f"Missing irrigation config (using defaults): {missing}")

        for key in ("request_timeout_s", "forecast_days"):
            value = self.config.get(key)
            if value is not None and value <= 0:
                raise AgentConfigError(f"Invalid irrigation config: {key} must be positive, got {value}")

    async def process_request(self, request: RecommendationRequest) -> IrrigationResponse:
        """Process irrigation recommendation request"""

        self.logger.info(
            f"Processing irrigation request for {request.crop_type} ({request.growth_stage}) "
            f"at ({request.lat}, {request.lon})"
        )

        result = await build_recommendation(request, self.adapter)

        if result.metadata.data_availability.has_real_data:
            message = "Irrigation recommendation calculated successfully"
        else:
            message = "Irrigation recommendation calculated with limited data"

        return IrrigationResponse(
            success=True,
            data=result,
            message=message,
            timestamp=datetime.now().isoformat(),
            metadata={
                "request_params": request.model_dump(mode="json"),
                "status": result.metadata.status,
                "data_reliability": result.metadata.data_reliability,
                "planning_method": "et_proxy_water_balance",
                "location": f"({request.lat:.3f}, {request.lon:.3f})"
            }
        )

    async def get_weather_preview(self, lat: float, lon: float, days: int = 7) -> Dict[str, Any]:
        """Daily forecast annotated for irrigation planning"""
        weather = await asyncio.get_running_loop().run_in_executor(
            None, self.adapter.fetch_weather, lat, lon
        )

        forecast = []
        for day in weather.forecast[:days]:
            precipitation = day.precipitation or 0.0
            temp_max = day.temp_max
            if temp_max is None:
                temp_category = "unknown"
            elif temp_max > 30:
                temp_category = "hot"
            elif temp_max < 15:
                temp_category = "cool"
            else:
                temp_category = "moderate"

            if precipitation > 10:
                rain_category = "heavy"
            elif precipitation > 2:
                rain_category = "light"
            else:
                rain_category = "none"

            forecast.append({
                "date": day.date.isoformat() if day.date else None,
                "temp_min_c": day.temp_min,
                "temp_max_c": temp_max,
                "temperature_category": temp_category,
                "precipitation_mm": precipitation,
                "precipitation_probability": day.precipitation_probability,
                "precipitation_category": rain_category,
                "summary": day.summary
            })

        insights = {
            "total_expected_rainfall_mm": round(sum(d["precipitation_mm"] for d in forecast), 1),
            "hot_days": sum(1 for d in forecast if d["temperature_category"] == "hot"),
            "rainy_days": sum(1 for d in forecast if d["precipitation_mm"] > 2),
            "best_irrigation_days": [
                d["date"] for d in forecast if d["precipitation_mm"] < 2 and d["date"]
            ]
        }

        return {
            "current": weather.current.model_dump(),
            "forecast": forecast,
            "insights": insights,
            "location": {"latitude": lat, "longitude": lon},
            "source": weather.source
        }

    async def get_crop_recommendations(self) -> List[Dict[str, Any]]:
        """Get supported crop types with their coefficients"""
        crops = []
        for name, coefficients in CROP_COEFFICIENTS.items():
            if name == DEFAULT_CROP:
                continue
            crops.append({
                "name": name,
                "aliases": sorted(
                    alias for alias, target in CROP_SYNONYMS.items()
                    if target == name and alias != name
                ),
                "crop_coefficients": dict(coefficients)
            })
        return crops

    async def get_soil_types(self) -> List[Dict[str, Any]]:
        """Get available soil texture types"""
        return [
            {
                "type": texture,
                "description": SOIL_DESCRIPTIONS.get(texture, ""),
                "water_holding_capacity_mm_per_m": capacity,
                "root_zone_capacity_mm": round(capacity * ROOT_DEPTH_M)
            }
            for texture, capacity in SOIL_WATER_CAPACITY.items()
        ]
