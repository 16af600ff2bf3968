# agents/irrigation/water_balance.py
"""
Soil water-balance tracker

Estimates how much water the root zone holds right now, either from a
provider measurement or by bookkeeping ET losses and rain gains since the
last irrigation.
"""
import math
from datetime import datetime
from typing import Optional, Union

from agents.irrigation.constants import (
    SOIL_WATER_CAPACITY, UNKNOWN_SOIL, ROOT_DEPTH_M, ASSUMED_START_FRACTION,
    DEFAULT_DAYS_SINCE_IRRIGATION, MAX_RAIN_CREDIT_DAYS,
    CRITICAL_FRACTION, OPTIMAL_FRACTION,
)
from agents.irrigation.models import (
    DefaultSoil, ETEstimate, MeasuredSoil, WaterBalance, WeatherSnapshot,
)


def finite_or_zero(v: Optional[float]) -> float:
    return v if v is not None and math.isfinite(v) else 0.0


def normalize_soil_type(soil_type: Optional[str]) -> str:
    if not soil_type:
        return UNKNOWN_SOIL
    key = soil_type.strip().lower().replace("-", "_").replace(" ", "_")
    return key if key in SOIL_WATER_CAPACITY else UNKNOWN_SOIL


def water_holding_capacity(soil_type: Optional[str]) -> float:
    """Plant-available water for a texture, mm per metre"""
    return SOIL_WATER_CAPACITY[normalize_soil_type(soil_type)]


def days_since_irrigation(last_irrigation_date: Optional[datetime], now: Optional[datetime] = None) -> int:
    if last_irrigation_date is None:
        return DEFAULT_DAYS_SINCE_IRRIGATION
    if now is None:
        now = datetime.now(last_irrigation_date.tzinfo)
    if last_irrigation_date.tzinfo is None and now.tzinfo is not None:
        # naive timestamps are read in now's zone
        last_irrigation_date = last_irrigation_date.replace(tzinfo=now.tzinfo)
    elif last_irrigation_date.tzinfo is not None and now.tzinfo is None:
        # naive now is local time
        last_irrigation_date = last_irrigation_date.astimezone().replace(tzinfo=None)
    return max(1, (now - last_irrigation_date).days)


def expected_rain(weather: WeatherSnapshot, days: int) -> float:
    """Precipitation summed over the first ``days`` forecast records"""
    return sum(finite_or_zero(day.precipitation) for day in weather.forecast[:max(0, days)])


def compute_balance(
    et_estimate: ETEstimate,
    weather: WeatherSnapshot,
    soil: Union[MeasuredSoil, DefaultSoil],
    soil_type: Optional[str],
    last_irrigation_date: Optional[datetime],
    now: Optional[datetime] = None,
) -> WaterBalance:
    total_capacity = water_holding_capacity(soil_type) * ROOT_DEPTH_M

    if isinstance(soil, MeasuredSoil):
        pct = soil.moisture_percentage
        pct = min(100.0, max(0.0, 0.0 if math.isnan(pct) else pct))
        current = pct / 100 * total_capacity
    else:
        days = days_since_irrigation(last_irrigation_date, now)
        water_loss = et_estimate.et_crop * days
        water_gain = expected_rain(weather, min(days, MAX_RAIN_CREDIT_DAYS))
        if soil.assumed_moisture_percentage is not None:
            start_fraction = soil.assumed_moisture_percentage / 100
        else:
            start_fraction = ASSUMED_START_FRACTION
        current = total_capacity * start_fraction - water_loss + water_gain

    current = min(max(0.0, finite_or_zero(current)), total_capacity)
    try:
        moisture_percentage = 100 * current / total_capacity
    except ZeroDivisionError:
        moisture_percentage = 0.0

    return WaterBalance(
        current_moisture=round(current),
        total_capacity=round(total_capacity),
        moisture_percentage=round(finite_or_zero(moisture_percentage)),
        is_critical=current < CRITICAL_FRACTION * total_capacity,
        is_optimal=current >= OPTIMAL_FRACTION * total_capacity,
    )
