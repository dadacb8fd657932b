"""Data models for the flood alert pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

RiskTier = Literal["Low", "Medium", "High"]
RISK_TIERS: tuple[str, ...] = ("Low", "Medium", "High")


@dataclass(frozen=True)
class Community:
    """A community from the static dataset, pre-labeled with a risk tier."""

    name: str
    latitude: float
    longitude: float
    lga: str
    risk: RiskTier


@dataclass(frozen=True)
class HourlyObservation:
    """One hour of a forecast day. Only precipitation is scored."""

    precip_mm: float
    time: str = ""


@dataclass(frozen=True)
class DayForecast:
    """One calendar day of provider forecast data."""

    date: str
    total_precip_mm: float
    avg_humidity: float
    cloud: float
    max_wind_kph: float
    uv: float
    condition_code: int | None
    daily_chance_of_rain: float
    hours: tuple[HourlyObservation, ...] = ()


@dataclass(frozen=True)
class DayResult:
    """Scored result for a single forecast day."""

    date: str
    total_precipitation: float
    precipitation_descriptor: str
    heavy_hour_count: int
    flood_probability: int
    prediction_accuracy: int


@dataclass
class CommunityResult:
    """A community with its chronological per-day forecast results."""

    name: str
    lga: str
    latitude: float
    longitude: float
    risk: RiskTier
    daily_forecast: list[DayResult] = field(default_factory=list)


# LGA name -> communities, in first-seen order.
GroupedResults = dict[str, list[CommunityResult]]


@dataclass(frozen=True)
class RiskyDate:
    """A forecast day that matched its community's alert rule."""

    date: str
    rain_amount: float


@dataclass
class AlertRecord:
    """A flood alert for one community, carrying every qualifying day."""

    community_name: str
    lga: str
    risk: RiskTier
    latitude: float
    longitude: float
    dates: list[RiskyDate] = field(default_factory=list)
    peak_flood_probability: int = 0
