"""Pipeline orchestrator: fetch -> analyze -> group by LGA."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from requests import RequestException

from flood_alert.analysis import predict_forecast_days
from flood_alert.errors import FloodAlertError
from flood_alert.models import Community, CommunityResult, GroupedResults

logger = logging.getLogger(__name__)

ForecastFetcher = Callable[[Community], dict[str, Any]]

# Failures isolated to a single community
_COMMUNITY_ERRORS = (FloodAlertError, RequestException)


def analyze_community(community: Community, payload: dict[str, Any]) -> CommunityResult:
    """Score a community's raw forecast payload."""
    return CommunityResult(
        name=community.name,
        lga=community.lga,
        latitude=community.latitude,
        longitude=community.longitude,
        risk=community.risk,
        daily_forecast=predict_forecast_days(payload, community.risk, source=community.name),
    )


def _fetch_and_analyze(
    community: Community,
    fetch_forecast: ForecastFetcher,
) -> CommunityResult | None:
    try:
        payload = fetch_forecast(community)
        return analyze_community(community, payload)
    except _COMMUNITY_ERRORS as exc:
        logger.warning(
            "Error for %s (%s): %s", community.name, community.lga, exc, exc_info=True
        )
        return None
    except Exception:
        logger.warning(
            "Unexpected error for %s (%s)", community.name, community.lga, exc_info=True
        )
        return None


def build_grouped(
    communities: Sequence[Community],
    fetch_forecast: ForecastFetcher,
    max_workers: int = 1,
) -> GroupedResults:
    """Fetch and analyze every community, grouped by LGA.

    Communities are grouped in input order whether or not fetches run
    concurrently. A failing community is logged and left out; the rest of
    the build continues.
    """
    if max_workers > 1 and len(communities) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            results = list(
                pool.map(lambda c: _fetch_and_analyze(c, fetch_forecast), communities)
            )
    else:
        results = [_fetch_and_analyze(c, fetch_forecast) for c in communities]

    grouped: GroupedResults = {}
    for result in results:
        if result is None:
            continue
        grouped.setdefault(result.lga, []).append(result)

    skipped = sum(1 for r in results if r is None)
    logger.info(
        "Built forecasts for %d communities across %d LGAs (%d skipped)",
        len(results) - skipped,
        len(grouped),
        skipped,
    )
    return grouped
