"""Fetchers for forecast and community data."""
