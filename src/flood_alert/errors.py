"""Exception hierarchy for the flood alert pipeline.

Each error carries a machine-readable ``error_code`` and the HTTP status the
API layer maps it to. Only :class:`BuildFailure` is surfaced as a 500;
fetch and delivery errors are isolated by their callers.
"""

from __future__ import annotations

from typing import Any


class FloodAlertError(Exception):
    """Base exception for all flood alert errors."""

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        *,
        status_code: int = 500,
        error_code: str = "INTERNAL_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}


class ProviderFetchError(FloodAlertError):
    """A forecast fetch for one community failed (network, timeout, bad payload)."""

    def __init__(self, community: str, message: str = "", **details: Any) -> None:
        super().__init__(
            message=f"Forecast fetch failed for '{community}': {message}",
            status_code=502,
            error_code="PROVIDER_FETCH_ERROR",
            details={"community": community, **details},
        )
        self.community = community


class InvalidInputError(FloodAlertError, ValueError):
    """A scoring input is outside its valid domain."""

    def __init__(self, message: str, *, field: str | None = None, **details: Any) -> None:
        d = {**details}
        if field:
            d["field"] = field
        super().__init__(
            message=message,
            status_code=422,
            error_code="INVALID_INPUT",
            details=d,
        )


class DeliveryError(FloodAlertError):
    """Outbound alert delivery failed."""

    def __init__(self, community: str, message: str = "") -> None:
        super().__init__(
            message=f"Alert delivery failed for '{community}': {message}",
            status_code=502,
            error_code="DELIVERY_ERROR",
            details={"community": community},
        )
        self.community = community


class NotFoundError(FloodAlertError):
    """Requested resource is absent from the snapshot."""

    def __init__(self, resource: str, **identifiers: Any) -> None:
        super().__init__(
            message=f"{resource} not found",
            status_code=404,
            error_code="NOT_FOUND",
            details={"resource": resource, **identifiers},
        )


class BuildFailure(FloodAlertError):
    """The grouped snapshot could not be built at all."""

    def __init__(self, message: str = "Failed to build forecast snapshot") -> None:
        super().__init__(message=message, status_code=500, error_code="BUILD_FAILURE")
