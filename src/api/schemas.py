from typing import Literal
from pydantic import BaseModel, Field
from src.core.schemas import CamelModel, TripPlan, TripRequest


class GenerateTripRequest(TripRequest):
    """Request payload used to generate a new trip plan."""
    pass


class GenerateTripResponse(CamelModel):
    """Successful generation envelope."""

    success: Literal[True] = Field(default=True, description="Always true on success")
    trip_plan: TripPlan = Field(..., description="Normalized trip plan")


class ErrorResponse(BaseModel):
    """Envelope returned for every failure."""

    error: str = Field(..., description="User-facing error message")
