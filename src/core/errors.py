"""Error taxonomy for the trip generation pipeline.

Every error carries the HTTP status it maps to and a message that is safe to
show to the end user. The API layer turns them into ``{"error": message}``.
"""
from __future__ import annotations

from typing import Optional


class TripPlannerError(Exception):
    """Base class for failures surfaced to API callers."""

    status_code: int = 500
    default_message: str = "Failed to generate trip plan"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidRequest(TripPlannerError):
    """Trip parameters violate the input contract (e.g. end date before start)."""

    status_code = 400
    default_message = "Invalid trip request"


class ConfigurationError(TripPlannerError):
    """A required setting such as the gateway API key is missing."""

    status_code = 500
    default_message = "Service is not configured"


class UpstreamRateLimited(TripPlannerError):
    status_code = 429
    default_message = "Rate limit exceeded. Please try again in a moment."


class UpstreamQuotaExhausted(TripPlannerError):
    status_code = 402
    default_message = "AI credits exhausted. Please add credits to continue."


class UpstreamError(TripPlannerError):
    """Any other non-success answer (or no answer) from the model gateway."""

    status_code = 500
    default_message = "AI gateway error"

    def __init__(self, message: Optional[str] = None, *, upstream_status: Optional[int] = None) -> None:
        self.upstream_status = upstream_status
        if message is None and upstream_status is not None:
            message = f"AI gateway error: {upstream_status}"
        super().__init__(message)


class GenerationParseError(TripPlannerError):
    """The model answered with something that is not a JSON object."""

    status_code = 500
    default_message = "Failed to parse trip plan"


__all__ = [
    "TripPlannerError",
    "InvalidRequest",
    "ConfigurationError",
    "UpstreamRateLimited",
    "UpstreamQuotaExhausted",
    "UpstreamError",
    "GenerationParseError",
]
