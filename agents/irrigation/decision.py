# agents/irrigation/decision.py
"""
Rule-based irrigation decision engine

Conditions are evaluated in a fixed order and the first match wins:

1. critical moisture and little rain coming      -> urgent
2. below half capacity and almost no rain coming -> needed
3. significant rain coming                       -> skip
4. moisture at or above the optimal threshold    -> optimal
5. anything else                                 -> monitor
"""
from datetime import datetime
from typing import Optional

from agents.irrigation import advisories
from agents.irrigation.constants import (
    RAIN_LOOKAHEAD_DAYS, URGENT_RAIN_CEILING_MM, NEEDED_RAIN_CEILING_MM,
    SKIP_RAIN_FLOOR_MM, NEEDED_MOISTURE_PCT, URGENT_REFILL_FRACTION,
    NEEDED_REFILL_FRACTION, LITERS_PER_MM_HECTARE_FACTOR,
)
from agents.irrigation.models import (
    ETEstimate, Recommendation, WaterBalance, WeatherSnapshot,
)
from agents.irrigation.water_balance import expected_rain, finite_or_zero


def refill_amount_liters(water_balance: WaterBalance, target_fraction: float, field_size_hectares: float) -> int:
    """Litres needed to bring the root zone up to ``target_fraction`` of capacity"""
    deficit_mm = water_balance.total_capacity * target_fraction - water_balance.current_moisture
    liters = finite_or_zero(deficit_mm * field_size_hectares * LITERS_PER_MM_HECTARE_FACTOR)
    return max(0, round(liters))


def decide(
    water_balance: WaterBalance,
    weather: WeatherSnapshot,
    et_estimate: ETEstimate,
    field_size_hectares: float,
    now: Optional[datetime] = None,
) -> Recommendation:
    upcoming_rain = expected_rain(weather, RAIN_LOOKAHEAD_DAYS)

    if water_balance.is_critical and upcoming_rain < URGENT_RAIN_CEILING_MM:
        status, priority, action, timing = "urgent", "high", "irrigate_now", "within_2_hours"
        amount = refill_amount_liters(water_balance, URGENT_REFILL_FRACTION, field_size_hectares)
        reason = ("Critical soil moisture level detected. "
                  "Immediate irrigation required to prevent crop stress.")
    elif water_balance.moisture_percentage < NEEDED_MOISTURE_PCT and upcoming_rain < NEEDED_RAIN_CEILING_MM:
        status, priority, action, timing = "needed", "medium", "irrigate_soon", "within_24_hours"
        amount = refill_amount_liters(water_balance, NEEDED_REFILL_FRACTION, field_size_hectares)
        reason = ("Soil moisture below optimal level. "
                  "Irrigation recommended before crop stress occurs.")
    elif upcoming_rain >= SKIP_RAIN_FLOOR_MM:
        status, priority, action, timing = "skip", "low", "wait_for_rain", "after_rainfall"
        amount = 0
        reason = (f"Significant rainfall expected ({round(upcoming_rain)}mm). "
                  "Skip irrigation and reassess after rain.")
    elif water_balance.is_optimal:
        status, priority, action, timing = "optimal", "low", "monitor", "next_assessment"
        amount = 0
        reason = ("Soil moisture at optimal level. "
                  "Continue monitoring and reassess in 2-3 days.")
    else:
        status, priority, action, timing = "monitor", "low", "assess_tomorrow", "tomorrow"
        amount = 0
        reason = ("Soil moisture adequate for now. "
                  "Reassess tomorrow based on weather conditions.")

    return Recommendation(
        status=status,
        priority=priority,
        action=action,
        amount_liters=amount,
        timing=timing,
        reason=reason,
        optimal_times=advisories.optimal_irrigation_times(weather.current),
        conservation_tips=advisories.conservation_tips(status, weather.current),
        next_assessment=advisories.next_assessment(status, now),
        cost_estimate=advisories.irrigation_cost(amount),
        environmental_impact=advisories.environmental_impact(amount, status),
    )
