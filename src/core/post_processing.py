"""Turn raw model output into a fully populated ``TripPlan``.

The model's JSON follows the schema it was asked for only by convention, so
every field is treated as optional on the way in. Parsing is the only step
that can fail; everything after it repairs or defaults what is missing:

1. ``parse_trip_payload`` - strict JSON parse (a single Markdown fence is unwrapped).
2. ``normalize_places`` - ids, category images, coordinates.
3. ``normalize_hotels`` - ids, category images, platform booking URLs.
4. ``normalize_itinerary`` - recomputed dates and place references resolved
   against the normalized places.
5. ``normalize_trip_plan`` - assembles the ``TripPlan``.
"""
from __future__ import annotations

import json
import logging
import math
import re
from datetime import date, timedelta
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Set, Tuple, get_args

from src.core.errors import GenerationParseError
from src.core.fallbacks import (
    BOOKING_URLS,
    DEFAULT_HOTEL_CATEGORY,
    DEFAULT_PLACE_CATEGORY,
    DEFAULT_PLATFORM,
    get_booking_url,
    get_hotel_image,
    get_place_image,
)
from src.core.schemas import (
    Hotel,
    ItineraryDay,
    ItineraryStop,
    Location,
    Place,
    TripPlan,
    TripRequest,
)
from src.core.types import HotelCategory, PlaceCategory

logger = logging.getLogger(__name__)

_CODE_BLOCK_PATTERN = re.compile(r"^\s*```(?:json)?\s*(.*?)\s*```\s*$", re.DOTALL)

PLACE_CATEGORIES = frozenset(get_args(PlaceCategory))
HOTEL_CATEGORIES = frozenset(get_args(HotelCategory))
_PLATFORMS_BY_KEY = {name.lower(): name for name in BOOKING_URLS}

UNKNOWN_PLACE_NAME = "Unknown Place"
UNKNOWN_PLACE_RATING = 4.0
FIRST_STOP_HOUR = 9
HOURS_BETWEEN_STOPS = 2

PlaceLookup = Dict[str, Place]


# ---------------------------------------------------------------------------
# Coercion helpers
# ---------------------------------------------------------------------------


def _as_text(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if not isinstance(value, (int, float, str)):
        return None
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def _as_positive_int(value: Any) -> Optional[int]:
    number = _as_float(value)
    if number is None or number < 1 or not number.is_integer():
        return None
    return int(number)


def _as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _as_collection(value: Any) -> Sequence[Any]:
    """Coerce a field that should be an array; a lone object becomes a one-item list."""
    if isinstance(value, (list, tuple)):
        return value
    if value is None:
        return []
    return [value]


def _first_present(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def _assign_ids(entries: Sequence[Any], prefix: str) -> List[str]:
    """Ids for a collection: the model's own when present and unique, else ``<prefix><index + 1>``.

    Generated ids skip any number already used or claimed by a later explicit id.
    """
    explicit = [_as_text(_as_mapping(entry).get("id")) or None for entry in entries]
    reserved = {value for value in explicit if value}
    used: Set[str] = set()
    assigned: List[str] = []

    for index, value in enumerate(explicit):
        if value and value not in used:
            candidate = value
        else:
            if value:
                logger.warning("Duplicate id %r in model output; assigning a new one", value)
            number = index + 1
            candidate = f"{prefix}{number}"
            while candidate in used or candidate in reserved:
                number += 1
                candidate = f"{prefix}{number}"
        used.add(candidate)
        assigned.append(candidate)

    return assigned


# ---------------------------------------------------------------------------
# Step 1: parse
# ---------------------------------------------------------------------------


def _json_candidates(raw: str) -> Iterator[str]:
    yield raw
    match = _CODE_BLOCK_PATTERN.match(raw)
    if match:
        yield match.group(1)


def parse_trip_payload(raw: Optional[str]) -> Dict[str, Any]:
    """Parse the model's answer into a JSON object or raise ``GenerationParseError``.

    The raw text is logged for diagnosis but never put into the error message.
    """
    if not isinstance(raw, str) or not raw.strip():
        logger.error("Failed to parse AI response: empty content")
        raise GenerationParseError()

    last_error: Optional[json.JSONDecodeError] = None
    for candidate in _json_candidates(raw):
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError as exc:
            last_error = exc
            continue
        break
    else:
        logger.error("Failed to parse AI response (%s): %s", last_error, raw)
        raise GenerationParseError() from last_error

    if not isinstance(data, dict):
        logger.error("AI response is %s, expected a JSON object: %s", type(data).__name__, raw)
        raise GenerationParseError()
    return data


# ---------------------------------------------------------------------------
# Step 2: places
# ---------------------------------------------------------------------------


def _normalize_location(value: Any) -> Location:
    if isinstance(value, (list, tuple)) and len(value) == 2:
        lat, lng = _as_float(value[0]), _as_float(value[1])
    elif isinstance(value, Mapping):
        lat = _as_float(_first_present(value, "lat", "latitude"))
        lng = _as_float(_first_present(value, "lng", "lon", "longitude"))
    else:
        return Location()

    if lat is None or lng is None or not (-90 <= lat <= 90) or not (-180 <= lng <= 180):
        logger.warning("Discarding unusable coordinates %r", value)
        return Location()
    return Location(lat=lat, lng=lng)


def _place_category(value: Any) -> str:
    category = value.strip().lower() if isinstance(value, str) else None
    return category if category in PLACE_CATEGORIES else DEFAULT_PLACE_CATEGORY


def normalize_places(raw_places: Any) -> Tuple[List[Place], PlaceLookup]:
    """Normalize the ``places`` array and index the result by id, in input order."""
    places: List[Place] = []
    lookup: PlaceLookup = {}

    entries = _as_collection(raw_places)

    for entry, place_id in zip(entries, _assign_ids(entries, "p")):
        item = _as_mapping(entry)
        category = _place_category(item.get("category"))
        place = Place(
            id=place_id,
            name=_as_text(item.get("name")),
            category=category,
            description=_as_text(item.get("description")),
            rating=_as_float(item.get("rating")),
            visit_duration=_as_text(item.get("visitDuration")),
            best_time=_as_text(item.get("bestTime")),
            image=get_place_image(category),
            location=_normalize_location(item.get("location")),
        )
        places.append(place)
        lookup[place.id] = place

    return places, lookup


# ---------------------------------------------------------------------------
# Step 3: hotels
# ---------------------------------------------------------------------------


def _hotel_category(value: Any) -> str:
    if not isinstance(value, str):
        return DEFAULT_HOTEL_CATEGORY
    category = value.strip().lower().replace(" ", "-")
    return category if category in HOTEL_CATEGORIES else DEFAULT_HOTEL_CATEGORY


def _platform(value: Any) -> str:
    if isinstance(value, str):
        return _PLATFORMS_BY_KEY.get(value.strip().lower(), DEFAULT_PLATFORM)
    return DEFAULT_PLATFORM


def _amenities(value: Any) -> List[str]:
    return [text for text in (_as_text(item) for item in _as_collection(value)) if text]


def normalize_hotels(raw_hotels: Any) -> List[Hotel]:
    """Normalize the ``hotels`` array; booking URLs always come from the platform table."""
    hotels: List[Hotel] = []
    entries = _as_collection(raw_hotels)

    for entry, hotel_id in zip(entries, _assign_ids(entries, "h")):
        item = _as_mapping(entry)
        category = _hotel_category(item.get("category"))
        platform = _platform(item.get("platform"))
        hotels.append(
            Hotel(
                id=hotel_id,
                name=_as_text(item.get("name")),
                category=category,
                rating=_as_float(item.get("rating")),
                price_range=_as_text(item.get("priceRange")),
                amenities=_amenities(item.get("amenities")),
                image=get_hotel_image(category),
                platform=platform,
                booking_url=get_booking_url(platform),
            )
        )

    return hotels


# ---------------------------------------------------------------------------
# Step 4: itinerary
# ---------------------------------------------------------------------------


def format_itinerary_date(start_date: date, day: int) -> str:
    """Long-form date of the given 1-based trip day, e.g. ``Saturday, Dec 28``."""
    current = start_date + timedelta(days=day - 1)
    return f"{current:%A}, {current:%b} {current.day}"


def default_stop_time(index: int) -> str:
    """Stops are spaced two hours apart from 9:00 AM."""
    hour = (FIRST_STOP_HOUR + HOURS_BETWEEN_STOPS * index) % 24
    suffix = "AM" if hour < 12 else "PM"
    return f"{hour % 12 or 12}:00 {suffix}"


def make_placeholder_place(place_id: str) -> Place:
    return Place(
        id=place_id,
        name=UNKNOWN_PLACE_NAME,
        category=DEFAULT_PLACE_CATEGORY,
        description="",
        rating=UNKNOWN_PLACE_RATING,
        visit_duration="1-2 hours",
        best_time="Morning",
        image=get_place_image(DEFAULT_PLACE_CATEGORY),
        location=Location(),
    )


def resolve_stop_place(
    place_id: Optional[str],
    index: int,
    places: Sequence[Place],
    lookup: PlaceLookup,
) -> Place:
    """Find the place a stop refers to.

    Order: by id, then the place at the stop's position in ``places``, then
    an ``Unknown Place`` placeholder.
    """
    if place_id and place_id in lookup:
        return lookup[place_id]
    if index < len(places):
        return places[index]
    fallback_id = place_id or f"p{index + 1}"
    logger.warning("Unresolvable place reference %r; using placeholder", fallback_id)
    return make_placeholder_place(fallback_id)


def _normalize_stop(entry: Any, index: int, places: Sequence[Place], lookup: PlaceLookup) -> ItineraryStop:
    if isinstance(entry, str):
        entry = {"placeId": entry}
    item = _as_mapping(entry)
    place_id = _as_text(item.get("placeId")) or _as_text(_as_mapping(item.get("place")).get("id"))
    return ItineraryStop(
        place=resolve_stop_place(place_id, index, places, lookup),
        time=_as_text(item.get("time")) or default_stop_time(index),
        travel_time=_as_text(item.get("travelTime")),
    )


def normalize_itinerary(
    raw_days: Any,
    start_date: date,
    places: Sequence[Place],
    lookup: PlaceLookup,
) -> List[ItineraryDay]:
    """Normalize itinerary days; model-supplied dates are always replaced."""
    days: List[ItineraryDay] = []

    for position, entry in enumerate(_as_collection(raw_days)):
        item = _as_mapping(entry)
        day_number = _as_positive_int(item.get("day")) or position + 1
        try:
            day_date = format_itinerary_date(start_date, day_number)
        except OverflowError:
            logger.warning("Day number %s is out of range; using position %s", day_number, position + 1)
            day_number = position + 1
            day_date = format_itinerary_date(start_date, day_number)

        stops = [
            _normalize_stop(stop, index, places, lookup)
            for index, stop in enumerate(_as_collection(item.get("places")))
        ]
        days.append(ItineraryDay(day=day_number, date=day_date, places=stops))

    return days


# ---------------------------------------------------------------------------
# Step 5: assembly
# ---------------------------------------------------------------------------


def _local_tips(value: Any) -> List[str]:
    return [text for text in (_as_text(item) for item in _as_collection(value)) if text]


def build_trip_plan(data: Mapping[str, Any], request: TripRequest) -> TripPlan:
    """Repair an already parsed payload into a ``TripPlan``."""
    places, lookup = normalize_places(data.get("places"))
    hotels = normalize_hotels(data.get("hotels"))
    itinerary = normalize_itinerary(data.get("itinerary"), request.start_date, places, lookup)

    if len(itinerary) != request.days_number:
        logger.warning(
            "Model returned %s itinerary days for a %s-day trip to %s",
            len(itinerary), request.days_number, request.destination,
        )

    summary = _as_text(data.get("summary")) or f"A fantastic journey to {request.destination} awaits!"
    return TripPlan(
        places=places,
        hotels=hotels,
        itinerary=itinerary,
        local_tips=_local_tips(data.get("localTips")),
        summary=summary,
    )


def normalize_trip_plan(raw: Optional[str], request: TripRequest) -> TripPlan:
    """Parse and normalize raw model output for the given request."""
    return build_trip_plan(parse_trip_payload(raw), request)


__all__ = [
    "parse_trip_payload",
    "normalize_places",
    "normalize_hotels",
    "normalize_itinerary",
    "resolve_stop_place",
    "make_placeholder_place",
    "format_itinerary_date",
    "default_stop_time",
    "build_trip_plan",
    "normalize_trip_plan",
]
