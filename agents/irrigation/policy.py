# agents/irrigation/policy.py
"""
Data-availability and degradation policy

Fans out the weather, soil and air-quality fetches, decides whether a
recommendation can be built from what came back, and stamps the result
with a reliability rating. Never retries; retrying is the adapter's job.
"""
import asyncio
import functools
import logging
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Optional, Tuple

from agents.irrigation.constants import DEGRADED_SOIL_MOISTURE_PCT
from agents.irrigation.decision import decide
from agents.irrigation.evapotranspiration import compute_et, normalize_crop_type
from agents.irrigation.models import (
    DataAvailability, DataSource, DefaultSoil, RecommendationMetadata,
    RecommendationRequest, RecommendationResult, SoilUnavailableWarning,
)
from agents.irrigation.service import EnvironmentalDataAdapter
from agents.irrigation.water_balance import (
    compute_balance, normalize_soil_type, water_holding_capacity,
)
from core.exceptions import InsufficientDataError, WeatherUnavailableError

logger = logging.getLogger(__name__)


class AvailabilityState(str, Enum):
    BOTH_AVAILABLE = "both_available"
    WEATHER_ONLY = "weather_only"
    SOIL_ONLY = "soil_only"
    NEITHER = "neither"


def classify_availability(weather_ok: bool, soil_ok: bool) -> AvailabilityState:
    if weather_ok and soil_ok:
        return AvailabilityState.BOTH_AVAILABLE
    if weather_ok:
        return AvailabilityState.WEATHER_ONLY
    if soil_ok:
        return AvailabilityState.SOIL_ONLY
    return AvailabilityState.NEITHER


def default_soil(soil_type: Optional[str]) -> DefaultSoil:
    """Soil stand-in built from the texture table"""
    return DefaultSoil(
        type=normalize_soil_type(soil_type),
        water_holding_capacity=water_holding_capacity(soil_type),
        drainage="moderate",
        assumed_moisture_percentage=DEGRADED_SOIL_MOISTURE_PCT,
    )


async def _attempt(fetch: Callable[..., Any], lat: float, lon: float) -> Any:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, functools.partial(fetch, lat, lon))


def _split(outcome: Any) -> Tuple[Any, Optional[Exception]]:
    if isinstance(outcome, Exception):
        return None, outcome
    if isinstance(outcome, BaseException):
        raise outcome
    return outcome, None


async def build_recommendation(
    request: RecommendationRequest,
    adapter: EnvironmentalDataAdapter,
    now: Optional[datetime] = None,
) -> RecommendationResult:
    """Build a complete recommendation or fail with a single typed error"""
    now = now or datetime.now()
    lat, lon = request.lat, request.lon

    outcomes = await asyncio.gather(
        _attempt(adapter.fetch_weather, lat, lon),
        _attempt(adapter.fetch_soil, lat, lon),
        _attempt(adapter.fetch_air_quality, lat, lon),
        return_exceptions=True,
    )
    weather, weather_error = _split(outcomes[0])
    soil, soil_error = _split(outcomes[1])
    air_quality, air_quality_error = _split(outcomes[2])

    if air_quality_error is not None:
        logger.warning(f"Air quality lookup failed, continuing without it: {air_quality_error}")

    state = classify_availability(weather is not None, soil is not None)
    if state == AvailabilityState.NEITHER:
        logger.error(
            f"No weather or soil data for ({lat:.3f}, {lon:.3f}): "
            f"weather={weather_error}; soil={soil_error}"
        )
        raise InsufficientDataError(
            "Insufficient real data available. Both weather and soil data are "
            "required for irrigation recommendations."
        ) from weather_error
    if state == AvailabilityState.SOIL_ONLY:
        logger.error(f"Weather unavailable for ({lat:.3f}, {lon:.3f}): {weather_error}")
        raise WeatherUnavailableError(
            "Weather data unavailable. Real-time weather data is required for "
            "accurate irrigation calculations."
        ) from weather_error

    warnings = []
    soil_detail = None
    if state == AvailabilityState.WEATHER_ONLY:
        soil_detail = str(soil_error) if soil_error is not None else "No soil data returned"
        logger.warning(f"Soil data unavailable - providing limited recommendations: {soil_detail}")
        soil = default_soil(request.soil_type)
        warnings.append(SoilUnavailableWarning(detail=soil_detail))

    et_estimate = compute_et(weather.current, request.crop_type, request.growth_stage)
    water_balance = compute_balance(
        et_estimate, weather, soil, request.soil_type, request.last_irrigation_date, now
    )
    data_source = DataSource.for_soil(soil)
    recommendation = decide(
        water_balance, weather, et_estimate, request.field_size_hectares, now
    ).model_copy(update={"data_source": data_source})

    has_real_data = data_source.reliability == "high"
    metadata = RecommendationMetadata(
        calculated_at=now,
        location={"latitude": lat, "longitude": lon},
        crop={
            "type": request.crop_type,
            "normalized_type": normalize_crop_type(request.crop_type),
            "growth_stage": request.growth_stage,
        },
        field_size_hectares=request.field_size_hectares,
        data_availability=DataAvailability(
            weather=True,
            soil=state == AvailabilityState.BOTH_AVAILABLE,
            air_quality=air_quality is not None,
            has_real_data=has_real_data,
        ),
        warnings=warnings,
        soil_error=soil_detail,
        status="success" if has_real_data else "partial_success",
        data_reliability=data_source.reliability,
    )

    logger.info(
        f"Irrigation recommendation for ({lat:.3f}, {lon:.3f}): {recommendation.status}, "
        f"{recommendation.amount_liters}L, reliability={data_source.reliability}"
    )
    return RecommendationResult(
        recommendation=recommendation,
        water_balance=water_balance,
        evapotranspiration=et_estimate,
        weather=weather,
        soil=soil,
        air_quality=air_quality,
        metadata=metadata,
    )
