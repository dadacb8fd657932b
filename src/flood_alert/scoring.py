"""Per-day flood probability and confidence scoring.

Both scores are additive point systems clamped to 100 at the end:

    flood probability = base(tier) + rainfall tier + 2 * heavy hours
                        + humidity + cloud + wind + thunder band + low UV
    confidence        = 60 + steady hourly rain + likely rain + thunder band

Low and Medium tiers share the same base of 20 points.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from flood_alert.errors import InvalidInputError
from flood_alert.models import DayForecast, HourlyObservation, RiskTier

MAX_SCORE = 100

HEAVY_HOUR_MM = 5.0
HEAVY_HOUR_POINTS = 2

BASE_HIGH = 50
BASE_DEFAULT = 20

# (threshold_mm, points), checked highest first; exclusive lower bounds
RAINFALL_TIERS: tuple[tuple[float, int], ...] = ((80.0, 30), (50.0, 20), (30.0, 10))

CONFIDENCE_BASE = 60
STEADY_RAIN_VARIATION_MM = 2.0


def is_thunder_band(condition_code: int | None) -> bool:
    """True for provider condition codes in the rain/thunder band [200, 300)."""
    return condition_code is not None and 200 <= condition_code < 300


def count_heavy_hours(hours: Sequence[HourlyObservation]) -> int:
    """Count hours with more than 5mm of precipitation."""
    return sum(1 for h in hours if h.precip_mm > HEAVY_HOUR_MM)


def _check_total_precip(day: DayForecast) -> float:
    rain = day.total_precip_mm
    if math.isnan(rain) or rain < 0:
        raise InvalidInputError(
            f"Total precipitation for {day.date or 'day'} must be non-negative, got {rain}",
            field="totalprecip_mm",
        )
    return rain


def _rainfall_points(rain: float) -> int:
    for threshold, points in RAINFALL_TIERS:
        if rain > threshold:
            return points
    return 0


def score_forecast_day(
    day: DayForecast,
    hours: Sequence[HourlyObservation],
    base_risk: RiskTier,
) -> int:
    """Compute the 0-100 flood probability for one forecast day."""
    rain = _check_total_precip(day)

    score = BASE_HIGH if base_risk == "High" else BASE_DEFAULT
    score += _rainfall_points(rain)
    score += count_heavy_hours(hours) * HEAVY_HOUR_POINTS

    if day.avg_humidity > 80:
        score += 5
    if day.cloud > 70:
        score += 3
    if day.max_wind_kph > 50:
        score += 5
    if is_thunder_band(day.condition_code):
        score += 10
    if day.uv < 2:
        score += 5

    return min(score, MAX_SCORE)


def precip_variation(hours: Sequence[HourlyObservation]) -> float | None:
    """Spread between the wettest and driest hour, or None without hours."""
    if not hours:
        return None
    values = [h.precip_mm for h in hours]
    return max(values) - min(values)


def day_confidence(day: DayForecast, hours: Sequence[HourlyObservation]) -> int:
    """Compute the 0-100 confidence in a day's forecast."""
    conf = CONFIDENCE_BASE

    variation = precip_variation(hours)
    if variation is not None and variation < STEADY_RAIN_VARIATION_MM:
        conf += 10
    if day.daily_chance_of_rain > 80:
        conf += 10
    if is_thunder_band(day.condition_code):
        conf += 5

    return min(conf, MAX_SCORE)
