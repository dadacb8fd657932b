"""Service facade: cached grouped snapshot plus alert checks."""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import partial

from flood_alert.alerts import (
    DEFAULT_ALERT_EVENT,
    Broadcast,
    Deliver,
    DispatchReport,
    dispatch_alerts,
    evaluate_alerts,
)
from flood_alert.broadcast import EventBus
from flood_alert.cache import SnapshotCache
from flood_alert.config import FloodAlertConfig
from flood_alert.errors import BuildFailure, NotFoundError
from flood_alert.fetchers.communities import load_communities
from flood_alert.fetchers.weatherapi import fetch_forecast
from flood_alert.http import create_session
from flood_alert.models import Community, CommunityResult, GroupedResults
from flood_alert.notifiers.mailer import MailerClient
from flood_alert.pipeline import ForecastFetcher, build_grouped

logger = logging.getLogger(__name__)


class FloodForecastService:
    """Builds the grouped forecast snapshot once and serves reads from it.

    ``get_all`` is a read with a side effect: after returning the snapshot
    it evaluates alerts and dispatches them. The dispatch step is exposed
    separately as ``run_alert_check``.
    """

    def __init__(
        self,
        load: Callable[[], list[Community]],
        fetch: ForecastFetcher,
        deliver: Deliver,
        broadcast: Broadcast,
        *,
        max_workers: int = 1,
        alerts_enabled: bool = True,
        event_name: str = DEFAULT_ALERT_EVENT,
    ) -> None:
        self._load = load
        self._fetch = fetch
        self._deliver = deliver
        self._broadcast = broadcast
        self.max_workers = max_workers
        self.alerts_enabled = alerts_enabled
        self.event_name = event_name
        self.cache: SnapshotCache[GroupedResults] = SnapshotCache(self._build)
        self.bus: EventBus | None = None

    @classmethod
    def from_config(cls, config: FloodAlertConfig) -> FloodForecastService:
        """Wire the service to WeatherAPI.com, the mailer and an in-process bus."""
        session = create_session(pool_size=max(10, config.max_workers))
        mailer = MailerClient(
            url=config.mailer_url, timeout=config.request_timeout, session=session
        )
        bus = EventBus()
        service = cls(
            load=partial(load_communities, config.communities_file),
            fetch=partial(
                fetch_forecast,
                api_key=config.weather_api_key,
                days=config.forecast_days,
                timeout=config.request_timeout,
                base_url=config.weather_api_url,
                session=session,
            ),
            deliver=mailer.deliver_alert,
            broadcast=bus.broadcast,
            max_workers=config.max_workers,
            alerts_enabled=config.alerts_enabled,
            event_name=config.alert_event,
        )
        service.bus = bus
        return service

    def _build(self) -> GroupedResults:
        try:
            communities = self._load()
            return build_grouped(communities, self._fetch, max_workers=self.max_workers)
        except Exception as exc:
            logger.exception("Snapshot build failed")
            raise BuildFailure(f"Failed to build forecast snapshot: {exc}") from exc

    def snapshot(self) -> GroupedResults:
        """Return the grouped results, building them on first call."""
        return self.cache.get()

    def run_alert_check(self, grouped: GroupedResults) -> DispatchReport:
        """Evaluate alerts for *grouped* and deliver/broadcast each one."""
        records = evaluate_alerts(grouped)
        return dispatch_alerts(records, self._deliver, self._broadcast, self.event_name)

    def safe_alert_check(self, grouped: GroupedResults) -> DispatchReport | None:
        """Run the alert check, logging instead of raising on failure."""
        try:
            return self.run_alert_check(grouped)
        except Exception:
            logger.exception("Alert check failed")
            return None

    def get_all(self) -> GroupedResults:
        """Return every LGA's results and trigger the alert check.

        A failing alert check is logged; the read still succeeds.
        """
        grouped = self.snapshot()
        if self.alerts_enabled:
            self.safe_alert_check(grouped)
        return grouped

    def get_by_area(self, lga_name: str) -> list[CommunityResult]:
        """Return one LGA's results.

        Raises:
            NotFoundError: If the LGA is not in the snapshot.
        """
        grouped = self.snapshot()
        if lga_name not in grouped:
            raise NotFoundError("LGA", lga=lga_name)
        return grouped[lga_name]
