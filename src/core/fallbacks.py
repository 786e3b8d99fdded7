"""Fixed lookup tables used to fill fields the model never supplies."""
from __future__ import annotations

from typing import Dict, List

from src.core.schemas import TransportOption

DEFAULT_PLACE_CATEGORY = "cultural"
DEFAULT_HOTEL_CATEGORY = "mid-range"
DEFAULT_PLATFORM = "Booking.com"

PLACE_IMAGES: Dict[str, str] = {
    "historical": "https://images.unsplash.com/photo-1552832230-c0197dd311b5?w=400&h=300&fit=crop",
    "nature": "https://images.unsplash.com/photo-1506905925346-21bda4d32df4?w=400&h=300&fit=crop",
    "food": "https://images.unsplash.com/photo-1504674900247-0877df9cc836?w=400&h=300&fit=crop",
    "adventure": "https://images.unsplash.com/photo-1533130061792-64b345e4a833?w=400&h=300&fit=crop",
    "cultural": "https://images.unsplash.com/photo-1493976040374-85c8e12f0c0e?w=400&h=300&fit=crop",
}

HOTEL_IMAGES: Dict[str, str] = {
    "luxury": "https://images.unsplash.com/photo-1566073771259-6a8506099945?w=400&h=300&fit=crop",
    "mid-range": "https://images.unsplash.com/photo-1520250497591-112f2f40a3f4?w=400&h=300&fit=crop",
    "budget": "https://images.unsplash.com/photo-1551882547-ff40c63fe5fa?w=400&h=300&fit=crop",
}

BOOKING_URLS: Dict[str, str] = {
    "Booking.com": "https://www.booking.com",
    "MakeMyTrip": "https://www.makemytrip.com",
    "Agoda": "https://www.agoda.com",
    "Airbnb": "https://www.airbnb.com",
}

TRANSPORT_OPTIONS: List[TransportOption] = [
    TransportOption(id="t1", type="flight", provider="Google Flights", logo="✈️",
                    booking_url="https://www.google.com/flights", estimated_price="₹5,000 - ₹8,000"),
    TransportOption(id="t2", type="flight", provider="Skyscanner", logo="🛫",
                    booking_url="https://www.skyscanner.com", estimated_price="₹4,500 - ₹7,500"),
    TransportOption(id="t3", type="train", provider="IRCTC", logo="🚂",
                    booking_url="https://www.irctc.co.in", estimated_price="₹800 - ₹2,500"),
    TransportOption(id="t4", type="bus", provider="RedBus", logo="🚌",
                    booking_url="https://www.redbus.in", estimated_price="₹600 - ₹1,500"),
    TransportOption(id="t5", type="cab", provider="Uber", logo="🚗",
                    booking_url="https://www.uber.com", estimated_price="₹2,000 - ₹4,000"),
    TransportOption(id="t6", type="cab", provider="Ola", logo="🚕",
                    booking_url="https://www.olacabs.com", estimated_price="₹1,800 - ₹3,500"),
]


def get_place_image(category: object) -> str:
    """Representative image for a place category; unknown -> cultural."""
    if isinstance(category, str) and category in PLACE_IMAGES:
        return PLACE_IMAGES[category]
    return PLACE_IMAGES[DEFAULT_PLACE_CATEGORY]


def get_hotel_image(category: object) -> str:
    if isinstance(category, str) and category in HOTEL_IMAGES:
        return HOTEL_IMAGES[category]
    return HOTEL_IMAGES[DEFAULT_HOTEL_CATEGORY]


def get_booking_url(platform: object) -> str:
    """Booking site for a platform name; anything unrecognized goes to Booking.com."""
    if isinstance(platform, str) and platform in BOOKING_URLS:
        return BOOKING_URLS[platform]
    return BOOKING_URLS[DEFAULT_PLATFORM]


def get_transport_options() -> List[TransportOption]:
    return [option.model_copy() for option in TRANSPORT_OPTIONS]
