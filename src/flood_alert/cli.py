"""CLI interface using Typer."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from flood_alert import __version__
from flood_alert.alerts import evaluate_alerts
from flood_alert.config import FloodAlertConfig
from flood_alert.errors import BuildFailure
from flood_alert.exporters import export_csv, export_json
from flood_alert.models import AlertRecord, GroupedResults
from flood_alert.service import FloodForecastService

Exporter = Callable[[GroupedResults, Path], Path]

EXPORTERS: dict[str, Exporter] = {
    "json": export_json,
    "csv": export_csv,
}

CONFIG_OPTIONS: dict[str, str] = {
    "forecast_days": "--days",
    "max_workers": "--workers",
    "communities_file": "--communities",
    "output_file": "--output",
    "output_format": "--format",
}

RISK_STYLES: dict[str, str] = {
    "High": "[red]High[/red]",
    "Medium": "[dark_orange]Medium[/dark_orange]",
    "Low": "[green]Low[/green]",
}

app = typer.Typer(
    name="flood-alert",
    help="3-day flood risk forecasts and alerts for at-risk communities.",
    add_completion=False,
)
console = Console()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"flood-alert {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Flood Alert: forecast-driven flood risk scoring for communities."""


def _print_forecast_table(grouped: GroupedResults) -> None:
    table = Table(title="3-Day Flood Forecast")
    table.add_column("LGA", style="bold")
    table.add_column("Community")
    table.add_column("Risk")
    table.add_column("Date", style="dim")
    table.add_column("Rain (mm)", justify="right")
    table.add_column("Heavy hrs", justify="right")
    table.add_column("Flood %", justify="right", style="red")
    table.add_column("Conf %", justify="right")

    for lga, communities in grouped.items():
        for community in communities:
            for day in community.daily_forecast:
                table.add_row(
                    lga,
                    community.name,
                    RISK_STYLES.get(community.risk, community.risk),
                    day.date,
                    f"{day.total_precipitation:g}",
                    str(day.heavy_hour_count),
                    str(day.flood_probability),
                    str(day.prediction_accuracy),
                )
    console.print(table)


def _print_alerts(records: list[AlertRecord]) -> None:
    if not records:
        console.print("[green]No flood risks detected right now.[/green]")
        return
    for record in records:
        console.print(
            f"[bold red]ALERT[/bold red] {record.community_name} ({record.lga}) "
            f"- {RISK_STYLES.get(record.risk, record.risk)} risk"
        )
        for d in record.dates:
            console.print(f"  - {d.date}: {d.rain_amount:g}mm")


@app.command()
def run(
    communities_file: Annotated[
        Path,
        typer.Option("--communities", "-c", help="Community/LGA dataset JSON file."),
    ] = Path("data.json"),
    api_key: Annotated[
        str,
        typer.Option("--api-key", envvar="FLOOD_ALERT_WEATHER_API_KEY", help="WeatherAPI.com key."),
    ] = "",
    days: Annotated[
        int,
        typer.Option("--days", "-d", help="Number of forecast days."),
    ] = 3,
    workers: Annotated[
        int,
        typer.Option("--workers", "-w", help="Concurrent forecast fetches."),
    ] = 1,
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Output file path."),
    ] = Path("flood_forecast.json"),
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: json or csv."),
    ] = "json",
    notify: Annotated[
        bool,
        typer.Option("--notify", help="Deliver alerts through the mailer."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging."),
    ] = False,
) -> None:
    """Fetch forecasts, score every community, and report flood alerts."""
    if output_format not in EXPORTERS:
        raise typer.BadParameter(
            f"must be one of: {', '.join(EXPORTERS)}", param_hint="--format"
        )

    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[logging.StreamHandler()],
    )

    try:
        config = FloodAlertConfig(
            communities_file=communities_file,
            weather_api_key=api_key,
            forecast_days=days,
            max_workers=workers,
            output_file=output,
            output_format=output_format,
            alerts_enabled=notify,
        )
    except ValidationError as exc:
        errors = exc.errors()
        field = str(errors[0]["loc"][0]) if errors and errors[0]["loc"] else ""
        raise typer.BadParameter(
            "; ".join(e["msg"] for e in errors),
            param_hint=CONFIG_OPTIONS.get(field, field) or None,
        ) from None
    service = FloodForecastService.from_config(config)

    try:
        grouped = service.snapshot()
    except BuildFailure as exc:
        console.print(f"[red]Pipeline failed:[/red] {exc.message}")
        raise typer.Exit(code=1) from None

    if not grouped:
        console.print("[yellow]No community forecasts could be built.[/yellow]")
        raise typer.Exit()

    EXPORTERS[config.output_format](grouped, config.output_file)

    console.print()
    _print_forecast_table(grouped)

    records = evaluate_alerts(grouped)
    _print_alerts(records)

    if notify and records:
        report = service.run_alert_check(grouped)
        console.print(f"Alerts delivered: {report.delivered}, failed: {report.failed}")

    console.print(
        f"\n{config.output_format.upper()} written to [bold]{config.output_file}[/bold]"
    )
    console.print(f"Total LGAs: {len(grouped)}")
    console.print(f"Total communities: {sum(len(c) for c in grouped.values())}")
