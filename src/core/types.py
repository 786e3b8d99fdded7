"""Shared type aliases used across the pipeline modules."""
from __future__ import annotations

from typing import Annotated, Literal

from pydantic import Field

Lat = Annotated[float, Field(ge=-90, le=90)]
Lng = Annotated[float, Field(ge=-180, le=180)]
PositiveInt = Annotated[int, Field(ge=1)]

BudgetTier = Literal["low", "medium", "luxury"]
TravelType = Literal["solo", "family", "friends", "honeymoon", "business"]
PlaceCategory = Literal["historical", "nature", "food", "adventure", "cultural", "shopping"]
HotelCategory = Literal["budget", "mid-range", "luxury"]
BookingPlatform = Literal["Booking.com", "MakeMyTrip", "Agoda", "Airbnb"]
TransportType = Literal["flight", "train", "bus", "cab"]
