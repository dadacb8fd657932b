"""FastAPI wrapper for the flood forecast service."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any

from fastapi import BackgroundTasks, FastAPI, Request
from fastapi.responses import JSONResponse

from flood_alert import __version__
from flood_alert.config import FloodAlertConfig
from flood_alert.errors import BuildFailure, NotFoundError
from flood_alert.models import GroupedResults
from flood_alert.service import FloodForecastService

logger = logging.getLogger(__name__)


def _grouped_to_json(grouped: GroupedResults) -> dict[str, list[dict[str, Any]]]:
    return {lga: [asdict(c) for c in communities] for lga, communities in grouped.items()}


def create_app(service: FloodForecastService | None = None) -> FastAPI:
    """Build the API app. Without *service*, one is wired from the environment."""

    @asynccontextmanager
    async def lifespan(application: FastAPI) -> AsyncGenerator[None, None]:
        application.state.start_time = datetime.now(tz=timezone.utc)
        application.state.service = service or FloodForecastService.from_config(
            FloodAlertConfig()
        )
        yield

    application = FastAPI(
        title="Flood Alert API",
        description="3-day flood risk forecasts and alerts for at-risk communities.",
        version=__version__,
        lifespan=lifespan,
    )

    @application.get("/health")
    def health(request: Request) -> dict[str, Any]:
        """Server health check with uptime, version, and snapshot state."""
        state = request.app.state
        now = datetime.now(tz=timezone.utc)
        return {
            "status": "ok",
            "version": __version__,
            "uptime_seconds": round((now - state.start_time).total_seconds(), 1),
            "snapshot_ready": state.service.cache.is_populated,
        }

    @application.get("/api/all")
    def get_all(request: Request, background_tasks: BackgroundTasks) -> JSONResponse:
        """All LGAs with their communities' daily forecasts.

        The alert check runs after the response is sent.
        """
        service: FloodForecastService = request.app.state.service
        try:
            grouped = service.snapshot()
        except BuildFailure:
            logger.exception("Failed to fetch data")
            return JSONResponse(status_code=500, content={"error": "Failed to fetch data"})
        if service.alerts_enabled:
            background_tasks.add_task(service.safe_alert_check, grouped)
        return JSONResponse(content=_grouped_to_json(grouped), background=background_tasks)

    @application.get("/api/lga/{lga_name}")
    def get_lga(lga_name: str, request: Request) -> JSONResponse:
        """Communities and daily forecasts for one LGA."""
        try:
            communities = request.app.state.service.get_by_area(lga_name)
        except NotFoundError:
            return JSONResponse(status_code=404, content={"error": "LGA not found"})
        except BuildFailure:
            logger.exception("Failed to fetch LGA data")
            return JSONResponse(
                status_code=500, content={"error": "Failed to fetch LGA data"}
            )
        return JSONResponse(content=[asdict(c) for c in communities])

    return application


app = create_app()
