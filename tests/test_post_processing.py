import json
import logging
from datetime import date

import pytest

from src.core.errors import GenerationParseError
from src.core.fallbacks import BOOKING_URLS, HOTEL_IMAGES, PLACE_IMAGES
from src.core.post_processing import (
    default_stop_time,
    format_itinerary_date,
    normalize_hotels,
    normalize_itinerary,
    normalize_places,
    normalize_trip_plan,
    parse_trip_payload,
    resolve_stop_place,
)
from src.core.schemas import TripPlan, TripRequest


@pytest.fixture
def request_two_days() -> TripRequest:
    return TripRequest(
        origin="Delhi",
        destination="Mumbai",
        start_date=date(2024, 12, 26),
        end_date=date(2024, 12, 27),
        travelers=2,
        budget="medium",
        travel_type="friends",
        interests=["food", "history"],
    )


def _place(name: str, category: str = "historical", **extra):
    return {
        "name": name,
        "category": category,
        "description": f"{name} description",
        "rating": 4.5,
        "visitDuration": "1-2 hours",
        "bestTime": "Morning",
        "location": {"lat": 18.92, "lng": 72.83},
        **extra,
    }


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("raw", ["not json", "", "   ", None, "{'places': []}", '{"places": ['])
def test_parse_rejects_non_json(raw):
    with pytest.raises(GenerationParseError) as excinfo:
        parse_trip_payload(raw)
    assert excinfo.value.message == "Failed to parse trip plan"
    assert excinfo.value.status_code == 500


@pytest.mark.parametrize("raw", ["[1, 2]", '"text"', "42", "null"])
def test_parse_rejects_non_object_json(raw):
    with pytest.raises(GenerationParseError):
        parse_trip_payload(raw)


def test_parse_accepts_fenced_json():
    assert parse_trip_payload('```json\n{"summary": "ok"}\n```') == {"summary": "ok"}


def test_parse_failure_logs_raw_text_but_hides_it_from_message(caplog):
    raw = "Sorry, I cannot help with that"
    with caplog.at_level(logging.ERROR, logger="src.core.post_processing"):
        with pytest.raises(GenerationParseError) as excinfo:
            parse_trip_payload(raw)

    assert raw in caplog.text
    assert raw not in str(excinfo.value)


def test_normalize_trip_plan_fails_fast_on_garbage(request_two_days):
    with pytest.raises(GenerationParseError):
        normalize_trip_plan("<html>502 Bad Gateway</html>", request_two_days)


# ---------------------------------------------------------------------------
# Places
# ---------------------------------------------------------------------------


def test_places_get_sequential_ids_when_missing():
    places, lookup = normalize_places([_place("A"), _place("B"), _place("C")])

    assert [place.id for place in places] == ["p1", "p2", "p3"]
    assert list(lookup) == ["p1", "p2", "p3"]
    assert lookup["p2"] is places[1]


def test_explicit_place_ids_are_kept():
    places, _ = normalize_places([_place("A", id="gate"), _place("B", id="drive")])
    assert [place.id for place in places] == ["gate", "drive"]


def test_generated_ids_never_collide_with_explicit_ones():
    places, lookup = normalize_places([_place("A"), _place("B", id="p1")])

    assert [place.id for place in places] == ["p2", "p1"]
    assert len(lookup) == 2


def test_duplicate_explicit_ids_are_reassigned():
    places, _ = normalize_places([_place("A", id="p1"), _place("B", id="p1")])
    assert [place.id for place in places] == ["p1", "p2"]


def test_place_image_is_always_taken_from_category_table():
    places, _ = normalize_places(
        [
            _place("Fort", "historical", image="https://example.com/model.jpg"),
            _place("Beach", "nature"),
            _place("Mall", "shopping"),
            _place("Mystery", "spooky"),
        ]
    )

    assert places[0].image == PLACE_IMAGES["historical"]
    assert places[1].image == PLACE_IMAGES["nature"]
    assert places[2].image == PLACE_IMAGES["cultural"]
    assert places[2].category == "shopping"
    assert places[3].image == PLACE_IMAGES["cultural"]
    assert places[3].category == "cultural"


def test_place_category_is_case_insensitive():
    places, _ = normalize_places([_place("Street Food", "Food")])
    assert places[0].category == "food"
    assert places[0].image == PLACE_IMAGES["food"]


def test_missing_location_defaults_to_unknown_sentinel():
    raw = _place("Somewhere")
    del raw["location"]
    places, _ = normalize_places([raw])

    assert places[0].location.lat == 0
    assert places[0].location.lng == 0
    assert places[0].location.is_unknown


@pytest.mark.parametrize(
    "location, expected",
    [
        ({"lat": "18.5", "lng": "73.8"}, (18.5, 73.8)),
        ({"latitude": 10, "longitude": 20}, (10.0, 20.0)),
        ({"lat": 1, "lon": 2}, (1.0, 2.0)),
        ([12.0, 77.5], (12.0, 77.5)),
        ({"lat": 120, "lng": 10}, (0.0, 0.0)),
        ({"lat": "north", "lng": 10}, (0.0, 0.0)),
        ({"lat": 10}, (0.0, 0.0)),
        ("somewhere", (0.0, 0.0)),
    ],
)
def test_location_repair(location, expected):
    places, _ = normalize_places([_place("X", location=location)])
    assert (places[0].location.lat, places[0].location.lng) == expected


def test_place_passthrough_fields_are_lenient():
    places, _ = normalize_places([{"category": "food", "rating": "not a number"}])

    place = places[0]
    assert place.id == "p1"
    assert place.name is None
    assert place.rating is None
    assert place.image == PLACE_IMAGES["food"]


def test_place_rating_range_is_not_enforced():
    places, _ = normalize_places([_place("Odd", rating=7.5)])
    assert places[0].rating == 7.5


@pytest.mark.parametrize("raw", [None, []])
def test_absent_places_yield_empty_list(raw):
    places, lookup = normalize_places(raw)
    assert places == []
    assert lookup == {}


# ---------------------------------------------------------------------------
# Hotels
# ---------------------------------------------------------------------------


def test_hotels_get_ids_images_and_booking_urls():
    hotels = normalize_hotels(
        [
            {"name": "Taj", "category": "luxury", "platform": "MakeMyTrip"},
            {"name": "Ibis", "category": "mid-range", "platform": "Agoda"},
            {"name": "Zostel", "category": "budget", "platform": "Airbnb"},
            {"name": "Unknown", "category": "boutique", "platform": "Expedia"},
        ]
    )

    assert [hotel.id for hotel in hotels] == ["h1", "h2", "h3", "h4"]
    assert hotels[0].image == HOTEL_IMAGES["luxury"]
    assert hotels[0].booking_url == "https://www.makemytrip.com"
    assert hotels[1].booking_url == "https://www.agoda.com"
    assert hotels[2].booking_url == "https://www.airbnb.com"
    assert hotels[3].category == "mid-range"
    assert hotels[3].image == HOTEL_IMAGES["mid-range"]
    assert hotels[3].booking_url == BOOKING_URLS["Booking.com"]
    assert hotels[3].platform == "Booking.com"


def test_model_supplied_booking_url_is_discarded():
    hotels = normalize_hotels(
        [{"name": "Ibis", "platform": "Agoda", "bookingUrl": "https://evil.example.com/phish"}]
    )
    assert hotels[0].booking_url == "https://www.agoda.com"


@pytest.mark.parametrize("platform", ["Booking.com", "MakeMyTrip", "Agoda", "Airbnb"])
def test_every_known_platform_maps_to_its_url(platform):
    hotels = normalize_hotels([{"platform": platform, "bookingUrl": "https://other.example"}])
    assert hotels[0].booking_url == BOOKING_URLS[platform]


def test_missing_platform_defaults_to_booking_com():
    hotels = normalize_hotels([{"name": "No platform"}])
    assert hotels[0].booking_url == "https://www.booking.com"


def test_hotel_explicit_ids_and_amenities():
    hotels = normalize_hotels(
        [{"id": "taj", "amenities": ["WiFi", "Pool", None, 24]}, {"amenities": "Breakfast"}]
    )

    assert hotels[0].id == "taj"
    assert hotels[0].amenities == ["WiFi", "Pool", "24"]
    assert hotels[1].id == "h2"
    assert hotels[1].amenities == ["Breakfast"]


# ---------------------------------------------------------------------------
# Itinerary
# ---------------------------------------------------------------------------


def test_format_itinerary_date():
    assert format_itinerary_date(date(2024, 12, 26), 1) == "Thursday, Dec 26"
    assert format_itinerary_date(date(2024, 12, 26), 3) == "Saturday, Dec 28"
    assert format_itinerary_date(date(2024, 12, 31), 2) == "Wednesday, Jan 1"


@pytest.mark.parametrize(
    "index, expected",
    [(0, "9:00 AM"), (1, "11:00 AM"), (2, "1:00 PM"), (3, "3:00 PM"), (7, "11:00 PM")],
)
def test_default_stop_time(index, expected):
    assert default_stop_time(index) == expected


def test_itinerary_dates_are_recomputed():
    days = normalize_itinerary(
        [{"day": 3, "date": "January 1, 1999", "places": []}],
        date(2024, 12, 26),
        [],
        {},
    )

    assert days[0].day == 3
    assert days[0].date == "Saturday, Dec 28"


def test_missing_day_number_uses_position():
    days = normalize_itinerary([{"places": []}, {"day": "two"}], date(2024, 12, 26), [], {})
    assert [day.day for day in days] == [1, 2]
    assert days[1].date == "Friday, Dec 27"


def test_absurd_day_number_falls_back_to_position():
    days = normalize_itinerary([{"day": 10**9}], date(2024, 12, 26), [], {})
    assert days[0].day == 1


def test_stops_resolve_by_place_id():
    places, lookup = normalize_places([_place("A", id="a"), _place("B", id="b")])
    days = normalize_itinerary(
        [{"day": 1, "places": [{"placeId": "b", "time": "10:00 AM", "travelTime": "15 min"}]}],
        date(2024, 12, 26),
        places,
        lookup,
    )

    stop = days[0].places[0]
    assert stop.place is lookup["b"]
    assert stop.time == "10:00 AM"
    assert stop.travel_time == "15 min"


def test_stops_resolve_nested_place_and_bare_string_references():
    places, lookup = normalize_places([_place("A", id="a"), _place("B", id="b")])
    days = normalize_itinerary(
        [{"day": 1, "places": [{"place": {"id": "b"}}, "a"]}],
        date(2024, 12, 26),
        places,
        lookup,
    )

    assert [stop.place.id for stop in days[0].places] == ["b", "a"]


def test_unresolvable_stop_falls_back_to_ordinal_place():
    places, lookup = normalize_places([_place("A"), _place("B")])

    resolved = resolve_stop_place("missing", 1, places, lookup)

    assert resolved is places[1]


def test_unresolvable_stop_without_ordinal_uses_placeholder():
    places, lookup = normalize_places([_place("A")])

    resolved = resolve_stop_place("zzz", 3, places, lookup)

    assert resolved.name == "Unknown Place"
    assert resolved.rating == 4.0
    assert resolved.category == "cultural"
    assert resolved.image == PLACE_IMAGES["cultural"]
    assert resolved.location.is_unknown
    assert resolved.id == "zzz"


def test_placeholder_is_not_added_to_places():
    places, lookup = normalize_places([])
    days = normalize_itinerary(
        [{"day": 1, "places": [{}, {"time": "Noon"}]}], date(2024, 12, 26), places, lookup
    )

    stops = days[0].places
    assert [stop.place.id for stop in stops] == ["p1", "p2"]
    assert [stop.time for stop in stops] == ["9:00 AM", "Noon"]
    assert all(stop.travel_time is None for stop in stops)
    assert places == []


def test_itinerary_is_not_padded_or_truncated(request_two_days, caplog):
    raw = json.dumps({"places": [], "itinerary": [{"day": 1, "places": []}]})

    with caplog.at_level(logging.WARNING, logger="src.core.post_processing"):
        plan = normalize_trip_plan(raw, request_two_days)

    assert len(plan.itinerary) == 1
    assert "1 itinerary days for a 2-day trip" in caplog.text


# ---------------------------------------------------------------------------
# Assembly
# ---------------------------------------------------------------------------


def test_empty_object_yields_valid_empty_plan(request_two_days):
    plan = normalize_trip_plan("{}", request_two_days)

    assert isinstance(plan, TripPlan)
    assert plan.places == []
    assert plan.hotels == []
    assert plan.itinerary == []
    assert plan.local_tips == []
    assert plan.summary == "A fantastic journey to Mumbai awaits!"


def test_local_tips_accepts_single_string(request_two_days):
    plan = normalize_trip_plan(json.dumps({"localTips": "Try vada pav"}), request_two_days)
    assert plan.local_tips == ["Try vada pav"]


def test_end_to_end_delhi_to_mumbai(request_two_days):
    raw = json.dumps(
        {
            "places": [
                _place("Gateway of India", "historical"),
                _place("Marine Drive", "nature"),
                _place("Elephanta Caves", "historical"),
                _place("Mohammed Ali Road", "food"),
                _place("Sanjay Gandhi National Park", "adventure"),
                _place("Chhatrapati Shivaji Terminus", "cultural"),
            ],
            "hotels": [
                {"name": "Taj Mahal Palace", "category": "luxury", "platform": "Booking.com"},
                {"name": "Trident", "category": "luxury", "platform": "MakeMyTrip"},
                {"name": "Ibis Mumbai", "category": "mid-range", "platform": "Agoda",
                 "bookingUrl": "https://agoda.example/ibis"},
                {"name": "Zostel", "category": "budget", "platform": "Airbnb"},
            ],
            "itinerary": [
                {"day": 1, "date": "Dec 26", "places": [{"time": "9:00 AM"}, {}, {}]},
                {"day": 2, "date": "whenever", "places": [{}, {}, {}]},
            ],
            "localTips": ["Try vada pav", "Use the local trains off-peak"],
            "summary": "Two days of Mumbai food and history.",
        }
    )

    plan = normalize_trip_plan(raw, request_two_days)

    assert [place.id for place in plan.places] == ["p1", "p2", "p3", "p4", "p5", "p6"]
    assert [hotel.id for hotel in plan.hotels] == ["h1", "h2", "h3", "h4"]
    agoda = next(hotel for hotel in plan.hotels if hotel.platform == "Agoda")
    assert agoda.booking_url == "https://www.agoda.com"
    assert len(plan.itinerary) == 2
    assert plan.itinerary[0].date == "Thursday, Dec 26"
    assert plan.itinerary[1].date == "Friday, Dec 27"
    assert [stop.place.id for stop in plan.itinerary[1].places] == ["p1", "p2", "p3"]
    assert [stop.time for stop in plan.itinerary[1].places] == ["9:00 AM", "11:00 AM", "1:00 PM"]
    place_ids = {place.id for place in plan.places}
    assert all(stop.place.id in place_ids for day in plan.itinerary for stop in day.places)
    assert plan.summary == "Two days of Mumbai food and history."

    dumped = plan.model_dump(by_alias=True)
    assert set(dumped) == {"places", "hotels", "itinerary", "localTips", "summary"}
    assert dumped["hotels"][2]["bookingUrl"] == "https://www.agoda.com"
    assert dumped["places"][0]["visitDuration"] == "1-2 hours"
