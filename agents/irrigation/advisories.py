# agents/irrigation/advisories.py
"""
Advisories derived from a recommendation: timing windows, conservation
tips, reassessment time, cost and environmental footprint.
"""
from datetime import datetime, timedelta
from typing import List, Optional

from agents.irrigation.constants import (
    NEXT_ASSESSMENT_HOURS, DEFAULT_NEXT_ASSESSMENT_HOURS,
    HOT_EVENING_TEMP_C, MORNING_PREFERRED_TEMP_C, WINDY_KMH,
    WATER_COST_PER_LITER, ENERGY_COST_PER_LITER, COST_CURRENCY, CO2_KG_PER_LITER,
)
from agents.irrigation.models import (
    ConservationTip, CostEstimate, CurrentWeather, EnvironmentalImpact,
    IrrigationWindow, OptimalTimes,
)

_SUSTAINABILITY = {
    "optimal": "excellent",
    "skip": "excellent",
    "monitor": "good",
    "needed": "moderate",
}


def optimal_irrigation_times(current: CurrentWeather) -> OptimalTimes:
    early_morning = IrrigationWindow(
        time="05:30 - 07:00",
        reason="Low evaporation, good water absorption",
        efficiency=95,
    )
    evening = IrrigationWindow(
        time="18:30 - 20:00" if current.temperature > HOT_EVENING_TEMP_C else "17:00 - 19:00",
        reason="Cooler temperatures, reduced water loss",
        efficiency=85,
    )
    midday = IrrigationWindow(
        time="10:00 - 16:00",
        reason="High evaporation, water stress on plants",
        efficiency=45,
    )
    return OptimalTimes(
        recommended=[early_morning, evening],
        avoid=[midday],
        best=early_morning if current.temperature > MORNING_PREFERRED_TEMP_C else evening,
    )


def conservation_tips(status: str, current: CurrentWeather) -> List[ConservationTip]:
    tips = [
        ConservationTip(tip="Use drip irrigation for 30-50% water savings", impact="high", savings="30-50%"),
        ConservationTip(tip="Apply mulch around plants to reduce evaporation", impact="medium", savings="15-25%"),
    ]
    if current.wind_speed > WINDY_KMH:
        tips.append(ConservationTip(
            tip="Avoid irrigation during windy conditions to reduce drift", impact="medium", savings="10-20%"
        ))
    if status == "urgent":
        tips.append(ConservationTip(
            tip="Consider split irrigation to improve absorption", impact="high", savings="20-30%"
        ))
    return tips


def next_assessment(status: str, now: Optional[datetime] = None) -> datetime:
    now = now or datetime.now()
    return now + timedelta(hours=NEXT_ASSESSMENT_HOURS.get(status, DEFAULT_NEXT_ASSESSMENT_HOURS))


def irrigation_cost(amount_liters: float) -> CostEstimate:
    water = amount_liters * WATER_COST_PER_LITER
    energy = amount_liters * ENERGY_COST_PER_LITER
    return CostEstimate(
        water=round(water, 2),
        energy=round(energy, 2),
        total=round(water + energy, 2),
        currency=COST_CURRENCY,
    )


def environmental_impact(amount_liters: float, status: str) -> EnvironmentalImpact:
    return EnvironmentalImpact(
        co2_footprint=round(amount_liters * CO2_KG_PER_LITER, 3),
        sustainability=_SUSTAINABILITY.get(status, "concerning"),
        water_efficiency="low" if status == "urgent" else "high",
        recommendation="Consider precision irrigation techniques for better efficiency",
    )
