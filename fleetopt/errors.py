"""Errors raised while building, sending and interpreting optimization requests."""

from __future__ import annotations

FALLBACK_MESSAGE = "An error occurred. Please try again."


class FleetOptError(Exception):
    """Base class for fleetopt errors. ``str(error)`` is safe to show to users."""


class ValidationError(FleetOptError):
    """Workload is incomplete. Raised before anything is sent."""


class TransportError(FleetOptError):
    """The remote call failed: unreachable service, non-2xx status or bad body."""

    def __init__(self, message: str = FALLBACK_MESSAGE, *, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


class MalformedResponseError(TransportError):
    """The response body does not decode as the expected result kind."""


class SubmissionInProgressError(FleetOptError):
    """A submission was attempted while another one is still in flight."""
