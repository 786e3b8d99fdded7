"""Render the system and user instructions sent to the model gateway."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Union, get_args

from src.core.errors import InvalidRequest
from src.core.prompts import trip_plan_system_prompt, trip_plan_user_prompt
from src.core.schemas import TripRequest
from src.core.types import BookingPlatform, HotelCategory

logger = logging.getLogger(__name__)

MAX_PLACES = 12
PLACES_PER_DAY = 3
TARGET_HOTEL_COUNT = 4

# Categories advertised to the model; "shopping" is accepted on input but never requested.
PROMPT_PLACE_CATEGORIES = ("historical", "nature", "food", "adventure", "cultural")

DateLike = Union[date, datetime]


@dataclass(frozen=True, slots=True)
class TripPrompts:
    """The two instruction blocks plus the volumes they request."""

    system: str
    user: str
    days_number: int
    place_count: int
    hotel_count: int = TARGET_HOTEL_COUNT


def count_days(start: DateLike, end: DateLike) -> int:
    """Inclusive day span between two dates, never less than 1."""
    if end < start:
        raise InvalidRequest("endDate must be on or after startDate")
    delta = end - start
    return max(1, math.ceil(delta.total_seconds() / 86400) + 1)


def target_place_count(days_number: int) -> int:
    return min(days_number * PLACES_PER_DAY, MAX_PLACES)


def build_prompts(request: TripRequest) -> TripPrompts:
    """Build the generation instructions for a validated trip request."""

    days_number = count_days(request.start_date, request.end_date)
    place_count = target_place_count(days_number)

    system = trip_plan_system_prompt.format(
        place_count=place_count,
        hotel_count=TARGET_HOTEL_COUNT,
        days_number=days_number,
        place_categories=", ".join(PROMPT_PLACE_CATEGORIES),
        hotel_categories=", ".join(reversed(get_args(HotelCategory))),
        platforms=", ".join(get_args(BookingPlatform)),
    )
    user = trip_plan_user_prompt.format(
        days_number=days_number,
        destination=request.destination,
        origin=request.origin,
        start_date=request.start_date.isoformat(),
        end_date=request.end_date.isoformat(),
        travelers=request.travelers,
        budget=request.budget,
        travel_type=request.travel_type,
        interests=", ".join(request.interests) or "General sightseeing",
    )
    logger.debug(
        "Built prompts for %s: %s days, %s places, %s hotels",
        request.destination, days_number, place_count, TARGET_HOTEL_COUNT,
    )
    return TripPrompts(system=system, user=user, days_number=days_number, place_count=place_count)
