"""WeatherAPI.com forecast fetcher."""

from __future__ import annotations

import logging
from typing import Any

from requests import RequestException, Session

from flood_alert.errors import ProviderFetchError
from flood_alert.http import create_session
from flood_alert.models import Community

logger = logging.getLogger(__name__)

WEATHERAPI_FORECAST_URL = "http://api.weatherapi.com/v1/forecast.json"


def fetch_forecast(
    community: Community,
    api_key: str,
    days: int = 3,
    timeout: int = 10,
    base_url: str = WEATHERAPI_FORECAST_URL,
    session: Session | None = None,
) -> dict[str, Any]:
    """Fetch a multi-day forecast for a community's coordinates.

    Network errors, timeouts, non-2xx responses and non-JSON bodies are all
    raised as :class:`ProviderFetchError` so the caller can skip the community.
    """
    if session is None:
        session = create_session()

    params: dict[str, str | int] = {
        "key": api_key,
        "q": f"{community.latitude},{community.longitude}",
        "days": days,
    }
    try:
        resp = session.get(base_url, params=params, timeout=timeout)
        resp.raise_for_status()
        payload = resp.json()
    except RequestException as exc:
        raise ProviderFetchError(community.name, str(exc)) from exc
    except ValueError as exc:
        raise ProviderFetchError(community.name, f"invalid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise ProviderFetchError(community.name, "unexpected payload type")
    return payload
