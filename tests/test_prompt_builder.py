"""Tests for day counting and prompt rendering."""
from __future__ import annotations

from datetime import date

import pytest

from src.core.errors import InvalidRequest
from src.core.prompt_builder import (
    TARGET_HOTEL_COUNT,
    build_prompts,
    count_days,
    target_place_count,
)
from src.core.schemas import TripRequest


def _make_request(**overrides) -> TripRequest:
    payload = {
        "origin": "Delhi",
        "destination": "Mumbai",
        "startDate": "2024-12-26",
        "endDate": "2024-12-27",
        "travelers": 2,
        "budget": "medium",
        "travelType": "friends",
        "interests": ["food", "history"],
    }
    payload.update(overrides)
    return TripRequest.model_validate(payload)


@pytest.mark.parametrize(
    "start, end, expected",
    [
        (date(2024, 12, 26), date(2024, 12, 26), 1),
        (date(2024, 12, 26), date(2024, 12, 27), 2),
        (date(2024, 12, 30), date(2025, 1, 2), 4),
        (date(2024, 2, 28), date(2024, 3, 1), 3),
    ],
)
def test_count_days_is_inclusive(start, end, expected):
    assert count_days(start, end) == expected


def test_count_days_rejects_reversed_range():
    with pytest.raises(InvalidRequest):
        count_days(date(2024, 12, 27), date(2024, 12, 26))


@pytest.mark.parametrize("days, expected", [(1, 3), (2, 6), (4, 12), (5, 12), (10, 12)])
def test_target_place_count_is_capped(days, expected):
    assert target_place_count(days) == expected


def test_build_prompts_for_two_day_trip():
    prompts = build_prompts(_make_request())

    assert prompts.days_number == 2
    assert prompts.place_count == 6
    assert prompts.hotel_count == TARGET_HOTEL_COUNT == 4
    assert "Array of 6 real tourist attractions" in prompts.system
    assert "Array of 4 real hotels" in prompts.system
    assert "Array of 2 day objects" in prompts.system


def test_system_prompt_lists_schema_and_coordinates():
    system = build_prompts(_make_request()).system

    for field_name in ("visitDuration", "bestTime", "priceRange", "amenities", "placeId", "travelTime"):
        assert field_name in system
    assert "historical, nature, food, adventure, cultural" in system
    assert "luxury, mid-range, budget" in system
    assert "Booking.com, MakeMyTrip, Agoda, Airbnb" in system
    assert '"lat": number, "lng": number' in system
    assert "GPS coordinates" in system


def test_user_prompt_restates_trip_parameters():
    user = build_prompts(_make_request()).user

    assert user.startswith("Plan a 2-day trip to Mumbai from Delhi.")
    assert "Travel Dates: 2024-12-26 to 2024-12-27" in user
    assert "Number of Travelers: 2" in user
    assert "Budget: medium" in user
    assert "Travel Type: friends" in user
    assert "Interests: food, history" in user
    assert "GPS coordinates" in user


def test_user_prompt_defaults_interests():
    user = build_prompts(_make_request(interests=[])).user
    assert "Interests: General sightseeing" in user


def test_build_prompts_is_deterministic():
    request = _make_request()
    assert build_prompts(request) == build_prompts(request)
