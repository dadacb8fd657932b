"""Shared fixtures for flood_alert tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from flood_alert.models import (
    Community,
    CommunityResult,
    DayForecast,
    DayResult,
    GroupedResults,
    HourlyObservation,
)

FIXTURES_DIR = Path(__file__).parent / "fixtures"

ADADAMA_DAY2_HOURLY = [0, 0, 3, 6, 6, 6, 4, 0] + [0] * 16


def _forecast_block(
    date: str,
    totalprecip_mm: float,
    hourly_precip: list[float] | None = None,
    *,
    avghumidity: float = 60,
    cloud: float | None = None,
    hourly_cloud: float = 40,
    maxwind_kph: float = 10,
    uv: float = 5,
    code: int | None = 1000,
    daily_chance_of_rain: float = 20,
) -> dict[str, Any]:
    """Build one WeatherAPI.com ``forecastday`` block."""
    hourly = list(hourly_precip) if hourly_precip is not None else [0.0] * 24
    day: dict[str, Any] = {
        "totalprecip_mm": totalprecip_mm,
        "avghumidity": avghumidity,
        "maxwind_kph": maxwind_kph,
        "uv": uv,
        "daily_chance_of_rain": daily_chance_of_rain,
        "condition": {"text": "Patchy rain", "code": code} if code is not None else {},
    }
    if cloud is not None:
        day["cloud"] = cloud
    return {
        "date": date,
        "day": day,
        "hour": [
            {"time": f"{date} {i:02d}:00", "precip_mm": p, "cloud": hourly_cloud}
            for i, p in enumerate(hourly)
        ],
    }


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def forecast_block() -> Callable[..., dict[str, Any]]:
    """Factory for provider forecast day blocks."""
    return _forecast_block


@pytest.fixture
def adadama() -> Community:
    return Community(name="Adadama", latitude=6.1, longitude=8.1, lga="Abi", risk="High")


@pytest.fixture
def adadama_payload() -> dict[str, Any]:
    """3-day forecast: a dry day, a 25mm day with 3 heavy hours, a 55mm day."""
    return {
        "location": {"name": "Adadama"},
        "forecast": {
            "forecastday": [
                _forecast_block(
                    "2026-10-19",
                    4.2,
                    [0.175] * 24,
                    avghumidity=78,
                    hourly_cloud=50,
                    uv=5,
                    code=1183,
                    daily_chance_of_rain=60,
                ),
                _forecast_block(
                    "2026-10-20",
                    25.0,
                    ADADAMA_DAY2_HOURLY,
                    avghumidity=88,
                    hourly_cloud=85,
                    maxwind_kph=20,
                    uv=1,
                    code=1195,
                    daily_chance_of_rain=89,
                ),
                _forecast_block(
                    "2026-10-21",
                    55.0,
                    [5.0] * 11 + [0.0] * 13,
                    avghumidity=70,
                    hourly_cloud=60,
                    maxwind_kph=55,
                    uv=3,
                    code=1276,
                    daily_chance_of_rain=95,
                ),
            ]
        },
    }


@pytest.fixture
def sample_communities() -> list[Community]:
    """Four communities across two LGAs, in dataset order."""
    return [
        Community(name="Adadama", latitude=6.1, longitude=8.1, lga="Abi", risk="High"),
        Community(name="Ekureku", latitude=6.0, longitude=8.2, lga="Abi", risk="High"),
        Community(name="Ugep", latitude=5.8, longitude=8.08, lga="Yakurr", risk="Low"),
        Community(name="Itigidi", latitude=6.0, longitude=8.0, lga="Abi", risk="High"),
    ]


@pytest.fixture
def sample_dataset(fixtures_dir: Path) -> dict:
    return json.loads((fixtures_dir / "communities.json").read_text())


@pytest.fixture
def sample_day() -> DayForecast:
    """A quiet day: no rain, no bonus conditions."""
    return DayForecast(
        date="2026-10-19",
        total_precip_mm=0.0,
        avg_humidity=50,
        cloud=20,
        max_wind_kph=10,
        uv=6,
        condition_code=1000,
        daily_chance_of_rain=10,
        hours=tuple(HourlyObservation(precip_mm=0.0) for _ in range(24)),
    )


def _day_result(date: str, rain: float, probability: int = 50) -> DayResult:
    return DayResult(
        date=date,
        total_precipitation=rain,
        precipitation_descriptor="",
        heavy_hour_count=0,
        flood_probability=probability,
        prediction_accuracy=70,
    )


@pytest.fixture
def day_result() -> Callable[..., DayResult]:
    """Factory for DayResult with only date/rain/probability set."""
    return _day_result


@pytest.fixture
def sample_grouped() -> GroupedResults:
    """Grouped results with one alerting community per tier and one quiet one."""
    return {
        "Abi": [
            CommunityResult(
                name="Adadama",
                lga="Abi",
                latitude=6.1,
                longitude=8.1,
                risk="High",
                daily_forecast=[
                    _day_result("2026-10-19", 4.2, 50),
                    _day_result("2026-10-20", 25.0, 69),
                    _day_result("2026-10-21", 55.0, 75),
                ],
            ),
            CommunityResult(
                name="Ekureku",
                lga="Abi",
                latitude=6.0,
                longitude=8.2,
                risk="High",
                daily_forecast=[
                    _day_result("2026-10-19", 0.0),
                    _day_result("2026-10-20", 1.0),
                    _day_result("2026-10-21", 2.0),
                ],
            ),
        ],
        "Yakurr": [
            CommunityResult(
                name="Ugep",
                lga="Yakurr",
                latitude=5.8,
                longitude=8.08,
                risk="Low",
                daily_forecast=[
                    _day_result("2026-10-19", 6.0, 20),
                    _day_result("2026-10-20", 5.0, 20),
                    _day_result("2026-10-21", 12.5, 28),
                ],
            ),
        ],
        "Obubra": [
            CommunityResult(
                name="Ofodua",
                lga="Obubra",
                latitude=6.08,
                longitude=8.33,
                risk="Medium",
                daily_forecast=[
                    _day_result("2026-10-19", 30.0, 30),
                    _day_result("2026-10-20", 50.001, 40),
                    _day_result("2026-10-21", 29.999, 30),
                ],
            ),
        ],
    }
