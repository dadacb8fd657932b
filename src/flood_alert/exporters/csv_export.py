"""CSV exporter for grouped flood forecast results."""

from __future__ import annotations

import csv
from pathlib import Path

from flood_alert.models import GroupedResults

FIELDNAMES = [
    "lga",
    "community",
    "risk",
    "latitude",
    "longitude",
    "date",
    "total_precipitation_mm",
    "precipitation_descriptor",
    "heavy_hour_count",
    "flood_probability",
    "prediction_accuracy",
]


def export_csv(
    grouped: GroupedResults,
    output_path: Path,
) -> Path:
    """Export grouped results as a flat CSV with one row per community-day."""
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
        writer.writeheader()

        for lga, communities in grouped.items():
            for community in communities:
                for day in community.daily_forecast:
                    writer.writerow({
                        "lga": lga,
                        "community": community.name,
                        "risk": community.risk,
                        "latitude": community.latitude,
                        "longitude": community.longitude,
                        "date": day.date,
                        "total_precipitation_mm": day.total_precipitation,
                        "precipitation_descriptor": day.precipitation_descriptor,
                        "heavy_hour_count": day.heavy_hour_count,
                        "flood_probability": day.flood_probability,
                        "prediction_accuracy": day.prediction_accuracy,
                    })

    return output_path
