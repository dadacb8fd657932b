"""Exporters for flood forecast results."""

from flood_alert.exporters.csv_export import export_csv
from flood_alert.exporters.json_export import export_json

__all__ = ["export_csv", "export_json"]
