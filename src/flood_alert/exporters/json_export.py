"""JSON exporter for grouped flood forecast results."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path

from flood_alert.models import GroupedResults


def export_json(
    grouped: GroupedResults,
    output_path: Path,
    indent: int = 2,
) -> Path:
    """Export grouped results to a JSON object keyed by LGA."""
    data = {lga: [asdict(c) for c in communities] for lga, communities in grouped.items()}
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent, ensure_ascii=False)
    return output_path
