"""Shared HTTP session for forecast fetches and alert delivery."""

from __future__ import annotations

from requests import Session
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from flood_alert import __version__

USER_AGENT = f"flood-alert/{__version__}"


def create_session(
    retries: int = 0,
    backoff_factor: float = 0.5,
    pool_size: int = 10,
) -> Session:
    """Create a pooled requests Session identified as flood-alert.

    Forecast builds are best-effort and alert delivery is fire-once, so
    ``retries`` defaults to 0. When enabled, only GETs are retried, and only
    on 429/5xx responses. ``pool_size`` should cover the fetch worker count.
    """
    retry = Retry(
        total=retries,
        backoff_factor=backoff_factor,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=["GET"],
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry, pool_connections=pool_size, pool_maxsize=pool_size)
    session = Session()
    session.headers["User-Agent"] = USER_AGENT
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session
