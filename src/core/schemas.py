"""Pydantic data models for the trip generation pipeline.

These models describe both ends of the pipeline: the validated ``TripRequest``
that drives prompt construction, and the fully normalized ``TripPlan`` handed
back to API callers. All models serialize with camelCase keys (``bestTime``,
``bookingUrl``, ``localTips``) and accept either camelCase or snake_case input.

Key model categories:
- TripRequest: user-supplied trip parameters
- Place / Hotel: catalog entities referenced by id within one plan
- ItineraryDay / ItineraryStop: the day-by-day schedule
- TripPlan: the complete normalized plan
- TransportOption: static booking links shown next to a plan
"""
from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from src.core.types import (
    BookingPlatform,
    BudgetTier,
    HotelCategory,
    Lat,
    Lng,
    PlaceCategory,
    PositiveInt,
    TransportType,
    TravelType,
)


class CamelModel(BaseModel):
    """Base model emitting camelCase keys on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TripRequest(CamelModel):
    """Validated trip parameters driving generation."""

    origin: str
    destination: str
    start_date: date
    end_date: date
    travelers: PositiveInt = 1
    budget: BudgetTier = "medium"
    travel_type: TravelType = "solo"
    interests: List[str] = Field(default_factory=list)

    @field_validator("interests", mode="before")
    @classmethod
    def _none_interests(cls, value):
        return [] if value is None else value

    @model_validator(mode="after")
    def validate_dates(self) -> "TripRequest":
        if self.end_date < self.start_date:
            raise ValueError("endDate must be on or after startDate")
        return self

    @computed_field(return_type=int)
    @property
    def days_number(self) -> int:
        return (self.end_date - self.start_date).days + 1


class Location(BaseModel):
    """GPS coordinates; ``(0, 0)`` marks an unknown position."""

    lat: Lat = 0.0
    lng: Lng = 0.0

    @property
    def is_unknown(self) -> bool:
        return self.lat == 0 and self.lng == 0


class Place(CamelModel):
    """Point of interest suggested by the model."""

    id: str
    name: Optional[str] = None
    category: PlaceCategory = "cultural"
    description: Optional[str] = None
    rating: Optional[float] = None
    visit_duration: Optional[str] = None
    best_time: Optional[str] = None
    image: str
    location: Location = Field(default_factory=Location)


class Hotel(CamelModel):
    """Accommodation option with a booking link on a known platform."""

    id: str
    name: Optional[str] = None
    category: HotelCategory = "mid-range"
    rating: Optional[float] = None
    price_range: Optional[str] = None
    amenities: List[str] = Field(default_factory=list)
    image: str
    platform: BookingPlatform = "Booking.com"
    booking_url: str


class ItineraryStop(CamelModel):
    """A resolved place visit inside one itinerary day."""

    place: Place
    time: str
    travel_time: Optional[str] = None


class ItineraryDay(CamelModel):
    day: PositiveInt
    date: str
    places: List[ItineraryStop] = Field(default_factory=list)


class TripPlan(CamelModel):
    """Fully normalized output of the generation pipeline."""

    places: List[Place] = Field(default_factory=list)
    hotels: List[Hotel] = Field(default_factory=list)
    itinerary: List[ItineraryDay] = Field(default_factory=list)
    local_tips: List[str] = Field(default_factory=list)
    summary: str = ""


class TransportOption(CamelModel):
    """Booking link for getting between origin and destination."""

    id: str
    type: TransportType
    provider: str
    logo: str
    booking_url: str
    estimated_price: Optional[str] = None


__all__ = [
    "CamelModel",
    "TripRequest",
    "Location",
    "Place",
    "Hotel",
    "ItineraryStop",
    "ItineraryDay",
    "TripPlan",
    "TransportOption",
]
