"""Configuration model for the flood alert pipeline."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings

OutputFormat = Literal["json", "csv"]


class FloodAlertConfig(BaseSettings):
    """All configurable parameters for the flood alert pipeline.

    Values can be set via constructor arguments, environment variables
    prefixed with FLOOD_ALERT_, or defaults.
    """

    model_config = {"env_prefix": "FLOOD_ALERT_"}

    communities_file: Path = Field(
        default=Path("data.json"), description="Community/LGA dataset JSON file."
    )
    weather_api_key: str = Field(default="", description="WeatherAPI.com API key.")
    weather_api_url: str = Field(
        default="http://api.weatherapi.com/v1/forecast.json",
        description="Forecast endpoint URL.",
    )
    forecast_days: int = Field(
        default=3, ge=1, le=14, description="Number of forecast days to request."
    )
    request_timeout: int = Field(
        default=10, ge=1, le=120, description="Per-request HTTP timeout in seconds."
    )
    max_workers: int = Field(
        default=1, ge=1, le=32, description="Concurrent forecast fetches."
    )
    mailer_url: str = Field(
        default="https://terra-guard-mailer.vercel.app/api/send-alert",
        description="Alert mailer endpoint.",
    )
    alerts_enabled: bool = Field(
        default=True, description="Deliver and broadcast alerts on snapshot reads."
    )
    alert_event: str = Field(
        default="flood-alert", description="Event name used when broadcasting alerts."
    )
    output_file: Path = Field(
        default=Path("flood_forecast.json"), description="Output file path."
    )
    output_format: OutputFormat = Field(
        default="json", description="Output format: json or csv."
    )
