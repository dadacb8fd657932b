"""Flood Alert: forecast-driven flood risk scoring and alerting for communities."""

__version__ = "0.1.0"
