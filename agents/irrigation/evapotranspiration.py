# agents/irrigation/evapotranspiration.py
"""
Evapotranspiration calculator - simplified ET0 proxy with crop coefficients

This is a lightweight stand-in for Penman-Monteith: each weather driver is
turned into a bounded factor and the factors are multiplied together.
"""
import math
from typing import Optional

from agents.irrigation.constants import (
    CROP_COEFFICIENTS, CROP_SYNONYMS, DEFAULT_CROP, DEFAULT_GROWTH_STAGE,
    ET_BASE_MM_PER_DAY, ET_TEMP_OFFSET_C, ET_TEMP_SPAN_C, ET_MIN_HUMIDITY_FACTOR,
    ET_MAX_WIND_FACTOR, ET_WIND_SCALE_KMH, ET_RADIATION_REFERENCE,
)
from agents.irrigation.models import CurrentWeather, ETEstimate


def _finite(v: Optional[float], default: float = 0.0) -> float:
    try:
        v = float(v)
    except (TypeError, ValueError):
        return default
    return v if math.isfinite(v) else default


def normalize_crop_type(crop_type: Optional[str]) -> str:
    """Fold crop names, synonyms and plurals onto a coefficient table key"""
    if not crop_type:
        return DEFAULT_CROP
    key = crop_type.strip().lower().replace("-", "_").replace(" ", "_")
    return CROP_SYNONYMS.get(key, DEFAULT_CROP)


def get_crop_coefficient(crop_type: Optional[str], growth_stage: Optional[str]) -> float:
    """Kc for a crop and growth stage; unknown stages use mid-season"""
    row = CROP_COEFFICIENTS[normalize_crop_type(crop_type)]
    stage = (growth_stage or "").strip().lower()
    return row.get(stage, row[DEFAULT_GROWTH_STAGE])


def compute_et0(current: CurrentWeather) -> float:
    """Reference evapotranspiration (mm/day), unrounded"""
    temperature = _finite(current.temperature)
    humidity = min(100.0, max(0.0, _finite(current.humidity)))
    wind_speed = max(0.0, _finite(current.wind_speed))

    temp_factor = max(0.0, (temperature - ET_TEMP_OFFSET_C) / ET_TEMP_SPAN_C)
    humidity_factor = max(ET_MIN_HUMIDITY_FACTOR, (100 - humidity) / 100)
    wind_factor = min(ET_MAX_WIND_FACTOR, 1 + wind_speed / ET_WIND_SCALE_KMH)
    if current.solar_radiation is None:
        radiation_factor = 1.0
    else:
        radiation_factor = max(0.0, _finite(current.solar_radiation)) / ET_RADIATION_REFERENCE

    return temp_factor * humidity_factor * wind_factor * radiation_factor * ET_BASE_MM_PER_DAY


def compute_et(current: CurrentWeather, crop_type: Optional[str], growth_stage: Optional[str]) -> ETEstimate:
    """Reference and crop-specific water demand for today's weather"""
    et0 = compute_et0(current)
    kc = get_crop_coefficient(crop_type, growth_stage)
    return ETEstimate(
        et0=round(et0, 2),
        et_crop=round(et0 * kc, 2),
        crop_coefficient=kc,
    )
