"""Forecast analysis: provider payload -> scored per-day results."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from flood_alert.errors import ProviderFetchError
from flood_alert.models import DayForecast, DayResult, HourlyObservation, RiskTier
from flood_alert.precipitation import classify
from flood_alert.scoring import count_heavy_hours, day_confidence, score_forecast_day

logger = logging.getLogger(__name__)


def _parse_hours(raw_hours: list[dict[str, Any]]) -> tuple[HourlyObservation, ...]:
    return tuple(
        HourlyObservation(
            precip_mm=float(h.get("precip_mm") or 0.0),
            time=h.get("time", ""),
        )
        for h in raw_hours
    )


def _cloud_cover(day: dict[str, Any], raw_hours: list[dict[str, Any]]) -> float:
    """Daily cloud cover, falling back to the hourly mean when the day omits it."""
    if day.get("cloud") is not None:
        return float(day["cloud"])
    clouds = [h["cloud"] for h in raw_hours if h.get("cloud") is not None]
    if clouds:
        return sum(clouds) / len(clouds)
    return 0.0


def parse_forecast_day(block: dict[str, Any], source: str = "forecast") -> DayForecast:
    """Convert one ``forecast.forecastday[]`` block into a :class:`DayForecast`.

    Raises:
        ProviderFetchError: If the block lacks the date, day summary, or
            total precipitation, or any field has the wrong shape.
    """
    try:
        day = block["day"]
        raw_hours = block.get("hour") or []
        condition = day.get("condition") or {}
        code = condition.get("code")

        return DayForecast(
            date=block["date"],
            total_precip_mm=float(day["totalprecip_mm"]),
            avg_humidity=float(day.get("avghumidity") or 0.0),
            cloud=_cloud_cover(day, raw_hours),
            max_wind_kph=float(day.get("maxwind_kph") or 0.0),
            uv=float(day.get("uv") or 0.0),
            condition_code=int(code) if code is not None else None,
            daily_chance_of_rain=float(day.get("daily_chance_of_rain") or 0.0),
            hours=_parse_hours(raw_hours),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise ProviderFetchError(source, f"malformed forecast day: {exc!r}") from exc


def analyze_forecast_day(
    day: DayForecast,
    hours: Sequence[HourlyObservation],
    base_risk: RiskTier,
) -> DayResult:
    """Score one day and describe its precipitation."""
    return DayResult(
        date=day.date,
        total_precipitation=day.total_precip_mm,
        precipitation_descriptor=classify(day.total_precip_mm),
        heavy_hour_count=count_heavy_hours(hours),
        flood_probability=score_forecast_day(day, hours, base_risk),
        prediction_accuracy=day_confidence(day, hours),
    )


def predict_forecast_days(
    payload: dict[str, Any],
    base_risk: RiskTier,
    source: str = "forecast",
) -> list[DayResult]:
    """Analyze every forecast day in a provider payload, preserving its order."""
    try:
        blocks = payload["forecast"]["forecastday"]
    except (KeyError, TypeError) as exc:
        raise ProviderFetchError(source, f"malformed forecast payload: {exc!r}") from exc
    if not isinstance(blocks, list):
        raise ProviderFetchError(
            source, f"malformed forecast payload: forecastday is {type(blocks).__name__}"
        )

    results: list[DayResult] = []
    for block in blocks:
        day = parse_forecast_day(block, source)
        results.append(analyze_forecast_day(day, day.hours, base_risk))
    logger.debug("Analyzed %d forecast days for %s", len(results), source)
    return results
