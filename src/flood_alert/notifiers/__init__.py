"""Outbound alert notifiers."""

from flood_alert.notifiers.mailer import MailerClient

__all__ = ["MailerClient"]
