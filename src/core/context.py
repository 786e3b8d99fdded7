"""Explicit holder for the current trip shared between independent readers.

One writer publishes a plan after a successful generation; any number of
readers (hotel list, map, itinerary views) read it until it is cleared.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from pydantic import Field

from src.core.fallbacks import get_transport_options
from src.core.schemas import CamelModel, Hotel, ItineraryDay, Place, TransportOption, TripPlan, TripRequest

logger = logging.getLogger(__name__)


class TripData(CamelModel):
    """Snapshot of the current trip as consumed by the views."""

    places: List[Place] = Field(default_factory=list)
    hotels: List[Hotel] = Field(default_factory=list)
    transport: List[TransportOption] = Field(default_factory=list)
    itinerary: List[ItineraryDay] = Field(default_factory=list)
    destination: str
    origin: str


class TripContext:
    """Current-trip state with a publish / read / clear lifecycle."""

    def __init__(self) -> None:
        self._trip_data: Optional[TripData] = None

    def __repr__(self) -> str:
        if self._trip_data is None:
            return "TripContext(empty)"
        return f"TripContext(destination='{self._trip_data.destination}', places={len(self._trip_data.places)})"

    @property
    def trip_data(self) -> Optional[TripData]:
        return self._trip_data

    @property
    def is_empty(self) -> bool:
        return self._trip_data is None

    def publish(self, plan: TripPlan, request: TripRequest) -> TripData:
        """Replace the current trip with a freshly generated plan."""

        self._trip_data = TripData(
            places=list(plan.places),
            hotels=list(plan.hotels),
            transport=get_transport_options(),
            itinerary=list(plan.itinerary),
            destination=request.destination,
            origin=request.origin,
        )
        logger.info(f"Published trip to {request.destination} ({len(plan.places)} places)")
        return self._trip_data

    def require(self) -> TripData:
        """Return the current trip or fail if nothing has been published."""

        if self._trip_data is None:
            raise LookupError("No trip has been generated yet")
        return self._trip_data

    def clear(self) -> None:
        self._trip_data = None
