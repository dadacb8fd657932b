"""Community/LGA dataset loader."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from flood_alert.errors import FloodAlertError
from flood_alert.models import RISK_TIERS, Community

logger = logging.getLogger(__name__)

# Group lists read first, in this order; any other list-valued keys follow.
DEFAULT_GROUP_KEYS: tuple[str, ...] = ("low_risk", "high_risk")


def _flatten_group(group: dict[str, Any]) -> list[Community]:
    lga = group["LGA"]
    risk = group["risk"]
    if risk not in RISK_TIERS:
        raise FloodAlertError(f"Unknown risk tier {risk!r} for LGA {lga!r}")
    return [
        Community(
            name=c["name"],
            latitude=float(c["lat"]),
            longitude=float(c["lng"]),
            lga=lga,
            risk=risk,
        )
        for c in group.get("communities", [])
    ]


def parse_communities(data: dict[str, Any]) -> list[Community]:
    """Flatten the dataset's risk groups into communities, preserving file order."""
    keys = [k for k in DEFAULT_GROUP_KEYS if k in data]
    keys += [k for k, v in data.items() if k not in keys and isinstance(v, list)]

    communities: list[Community] = []
    for key in keys:
        for group in data[key]:
            try:
                communities.extend(_flatten_group(group))
            except (KeyError, TypeError, ValueError) as exc:
                raise FloodAlertError(f"Invalid community group in {key!r}: {exc!r}") from exc
    return communities


def load_communities(path: Path) -> list[Community]:
    """Load communities from the dataset JSON file.

    Raises:
        FloodAlertError: If the file is missing, unreadable, or malformed.
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise FloodAlertError(f"Cannot read community dataset {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise FloodAlertError(f"Community dataset {path} must be a JSON object")

    communities = parse_communities(data)
    logger.info("Loaded %d communities from %s", len(communities), path)
    return communities
