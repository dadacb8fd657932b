"""HTTP mailer client for flood alert delivery."""

from __future__ import annotations

import logging
from typing import Any

from requests import RequestException, Session

from flood_alert.errors import DeliveryError
from flood_alert.http import create_session
from flood_alert.models import AlertRecord

logger = logging.getLogger(__name__)

MAILER_URL = "https://terra-guard-mailer.vercel.app/api/send-alert"


def build_mail_payload(record: AlertRecord) -> dict[str, Any]:
    """Mailer request body: community, first at-risk date, peak flood probability."""
    return {
        "location": record.community_name,
        "date": record.dates[0].date if record.dates else "",
        "percentage": record.peak_flood_probability,
    }


class MailerClient:
    """Posts one alert per call to the mailer service. No retries."""

    def __init__(
        self,
        url: str = MAILER_URL,
        timeout: int = 10,
        session: Session | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self.session = session or create_session()

    def deliver_alert(self, record: AlertRecord) -> None:
        """Send *record* to the mailer.

        Raises:
            DeliveryError: On network failure or a non-2xx response.
        """
        try:
            resp = self.session.post(
                self.url, json=build_mail_payload(record), timeout=self.timeout
            )
            resp.raise_for_status()
        except RequestException as exc:
            raise DeliveryError(record.community_name, str(exc)) from exc
        logger.info("Alert mailed for %s (%s)", record.community_name, record.lga)
