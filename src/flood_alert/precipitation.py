"""Precipitation severity classification."""

from __future__ import annotations

import math
from dataclasses import dataclass

from flood_alert.errors import InvalidInputError


@dataclass(frozen=True)
class PrecipBucket:
    """A severity bucket, closed on its upper bound (mm)."""

    max_mm: float
    descriptor: str
    impact: str


PRECIP_BUCKETS: tuple[PrecipBucket, ...] = (
    PrecipBucket(2.0, "Very light/drizzle", "Barely even wets the ground"),
    PrecipBucket(5.0, "Light rain", "Noticeable showers, damp roads"),
    PrecipBucket(20.0, "Moderate rain", "Surface run-off begins"),
    PrecipBucket(50.0, "Heavy rain", "Risk of localized flooding"),
    PrecipBucket(math.inf, "Torrential", "High flood risk"),
)


def classify_bucket(mm: float) -> PrecipBucket:
    """Return the first bucket whose upper bound is >= *mm*."""
    if math.isnan(mm) or mm < 0:
        raise InvalidInputError(
            f"Precipitation must be a non-negative number, got {mm}",
            field="precip_mm",
        )
    for bucket in PRECIP_BUCKETS:
        if mm <= bucket.max_mm:
            return bucket
    # unreachable: the last bucket is unbounded
    raise AssertionError(f"No precipitation bucket for {mm}")


def classify(mm: float) -> str:
    """Describe a precipitation amount as ``"<descriptor>, <impact>"``."""
    bucket = classify_bucket(mm)
    return f"{bucket.descriptor}, {bucket.impact}"
