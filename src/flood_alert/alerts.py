"""Threshold-based flood alert evaluation and dispatch."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from flood_alert.errors import FloodAlertError
from flood_alert.models import AlertRecord, GroupedResults, RiskTier, RiskyDate

logger = logging.getLogger(__name__)

DEFAULT_ALERT_EVENT = "flood-alert"

Deliver = Callable[[AlertRecord], None]
Broadcast = Callable[[str, AlertRecord], None]


def qualifies(risk: RiskTier, rain: float) -> bool:
    """Apply the tier's rainfall rule to a day's total precipitation (mm).

    Low fires on anything above 5mm; Medium and High fire inside closed
    ranges (30-50mm and 20-30mm).
    """
    if risk == "Low":
        return rain > 5
    if risk == "Medium":
        return 30 <= rain <= 50
    if risk == "High":
        return 20 <= rain <= 30
    return False


def evaluate_alerts(grouped: GroupedResults) -> list[AlertRecord]:
    """Turn grouped forecast results into one alert per at-risk community."""
    records: dict[tuple[str, str], AlertRecord] = {}

    for lga_name, communities in grouped.items():
        for community in communities:
            risky = [
                day
                for day in community.daily_forecast
                if qualifies(community.risk, day.total_precipitation)
            ]
            if not risky:
                continue

            key = (community.name, lga_name)
            record = records.get(key)
            if record is None:
                record = records[key] = AlertRecord(
                    community_name=community.name,
                    lga=lga_name,
                    risk=community.risk,
                    latitude=community.latitude,
                    longitude=community.longitude,
                )
            record.dates.extend(RiskyDate(d.date, d.total_precipitation) for d in risky)
            record.peak_flood_probability = max(
                record.peak_flood_probability,
                max(d.flood_probability for d in risky),
            )

    return list(records.values())


@dataclass
class DispatchReport:
    """Outcome counts for one alert dispatch pass."""

    delivered: int = 0
    failed: int = 0
    broadcast: int = 0


def dispatch_alerts(
    records: Iterable[AlertRecord],
    deliver: Deliver,
    broadcast: Broadcast,
    event_name: str = DEFAULT_ALERT_EVENT,
) -> DispatchReport:
    """Deliver then broadcast each alert.

    Delivery failures are logged and never retried; the alert is still
    broadcast and the remaining alerts are still processed. A failed
    broadcast is logged and does not count toward ``report.broadcast``.
    """
    report = DispatchReport()
    records = list(records)

    if not records:
        logger.info("No flood risks detected right now")
        return report

    for record in records:
        logger.warning(
            "ALERT for %s (%s) [%s risk]: %s",
            record.community_name,
            record.lga,
            record.risk,
            ", ".join(f"{d.date} -> {d.rain_amount}mm" for d in record.dates),
        )
        try:
            deliver(record)
            report.delivered += 1
        except FloodAlertError as exc:
            report.failed += 1
            logger.error("Delivery failed for %s: %s", record.community_name, exc.message)
        except Exception:
            report.failed += 1
            logger.warning("Delivery failed for %s", record.community_name, exc_info=True)

        try:
            broadcast(event_name, record)
            report.broadcast += 1
        except Exception:
            logger.warning("Broadcast failed for %s", record.community_name, exc_info=True)

    return report
