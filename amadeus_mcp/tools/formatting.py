"""
Turn orchestration results into MCP content.

Searches render as short prose summaries, one entry per result. Pricing, seat
maps, hotel details and analytics stay machine-readable JSON. Mock results are
always JSON so callers can see the echoed arguments.
"""

import json
from typing import Any, Callable, Dict, List

from ..mcp.protocol import CallToolResult, text_content
from .base import OrchestrationResult

Renderer = Callable[[OrchestrationResult], str]


def render_json(result: OrchestrationResult) -> str:
    return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)


# =============================================================================
# SEARCH SUMMARIES
# =============================================================================

def _summary(result: OrchestrationResult, entries: List[str], separator: str = "\n\n") -> str:
    header = result.message or f"Found {len(entries)} results"
    if not entries:
        return f"{header}."
    return f"{header}:\n\n" + separator.join(entries)


def _flight_entry(offer: Dict[str, Any]) -> str:
    itinerary = (offer.get("itineraries") or [{}])[0]
    segments = itinerary.get("segments") or [{}]
    first, last = segments[0], segments[-1]
    departure = (first.get("departure") or {}).get("iataCode", "?")
    arrival = (last.get("arrival") or {}).get("iataCode", "?")
    price = offer.get("price") or {}
    return (
        f"✈️ {first.get('carrierCode', '')}{first.get('number', '')} - {departure} → {arrival}\n"
        f"   💰 {price.get('total', 'N/A')} {price.get('currency', '')} | "
        f"⏱️ {itinerary.get('duration', 'N/A')} | 🛑 {len(segments) - 1} stops"
    )


def render_flights(result: OrchestrationResult) -> str:
    return _summary(result, [_flight_entry(offer) for offer in result.data])


def _destination_entry(destination: Dict[str, Any]) -> str:
    entry = f"🌍 {destination.get('destination', '?')} | 📅 {destination.get('departureDate', 'N/A')}"
    if destination.get("returnDate"):
        entry += f" - {destination['returnDate']}"
    price = destination.get("price") or {}
    if price.get("total"):
        entry += f" | 💰 {price['total']} {price.get('currency', '')}".rstrip()
    return entry


def render_destinations(result: OrchestrationResult) -> str:
    return _summary(result, [_destination_entry(item) for item in result.data], separator="\n")


def _hotel_entry(record: Dict[str, Any]) -> str:
    # Offer records nest the hotel, list/keyword records are the hotel
    hotel = record.get("hotel") or record
    address = hotel.get("address") or {}
    city = address.get("cityName") or hotel.get("cityCode") or "Unknown City"
    country = address.get("countryCode") or "N/A"
    return (
        f"🏨 {hotel.get('name', 'Unknown Hotel')} ({hotel.get('rating') or 'N/A'}⭐)\n"
        f"   📍 {city}, {country}"
    )


def render_hotels(result: OrchestrationResult) -> str:
    return _summary(result, [_hotel_entry(record) for record in result.data])


def _location_entry(location: Dict[str, Any]) -> str:
    address = location.get("address") or {}
    country = address.get("countryName") or address.get("countryCode")
    if str(location.get("subType", "")).upper() == "CITY":
        icon, place = "🏙️", [country, address.get("regionCode") or address.get("stateCode")]
    else:
        icon, place = "✈️", [address.get("cityName"), country]
    where = ", ".join(part for part in place if part) or "N/A"
    return f"{icon} {location.get('iataCode') or 'N/A'} - {location.get('name', 'Unknown')}\n   📍 {where}"


def render_locations(result: OrchestrationResult) -> str:
    return _summary(result, [_location_entry(location) for location in result.data])


def _poi_entry(poi: Dict[str, Any]) -> str:
    entry = f"🎯 {poi.get('name', 'Unknown place')} ({poi.get('category', 'N/A')})"
    address = poi.get("address") or {}
    street = " ".join(part for part in (address.get("streetNumber"), address.get("streetName")) if part)
    place = ", ".join(part for part in (street, address.get("cityName")) if part)
    if place:
        entry += f"\n   📍 {place}"
    if poi.get("distance") is not None:
        entry += f"\n   📏 {poi['distance']}km away"
    return entry


def render_pois(result: OrchestrationResult) -> str:
    return _summary(result, [_poi_entry(poi) for poi in result.data])


def _car_entry(car: Dict[str, Any]) -> str:
    price = f"{car['price']} {car.get('currency') or ''}".rstrip() if car.get("price") else "Price not available"
    return f"🚗 {car['company']} - {car['model']} ({car['type']})\n   💰 {price}"


def render_cars(result: OrchestrationResult) -> str:
    return _summary(result, [_car_entry(car) for car in result.data])


def _flight_line(index: int, offer: Dict[str, Any]) -> str:
    try:
        segment = offer["itineraries"][0]["segments"][0]
        flight = f"{segment.get('carrierCode', '')}{segment.get('number', '')}"
    except (KeyError, IndexError, TypeError):
        flight = offer.get("id", "Flight")
    price = offer.get("price") or {}
    return f"{index}. {flight} - {price.get('total', 'N/A')} {price.get('currency', '')}".rstrip()


def _hotel_line(index: int, offer: Dict[str, Any]) -> str:
    hotel = offer.get("hotel") or offer
    return f"{index}. {hotel.get('name', 'Unknown hotel')}"


def _activity_line(index: int, poi: Dict[str, Any]) -> str:
    name = poi.get("name", "Unknown place")
    category = poi.get("category")
    return f"{index}. {name} ({category})" if category else f"{index}. {name}"


def _numbered(items: List[Dict[str, Any]], line: Callable[[int, Dict[str, Any]], str], limit: int) -> List[str]:
    return [line(index, item) for index, item in enumerate(items[:limit], start=1)]


def render_trip_plan(result: OrchestrationResult) -> str:
    plan = result.data
    lines = [
        f"🗺️ **Trip Plan: {plan['origin']} → {plan['destination']}**",
        "",
        f"📅 **Dates:** {plan['departureDate']} to {plan['returnDate']}",
        f"👥 **Travelers:** {plan['adults']} adults",
    ]
    if plan.get("budget"):
        lines.append(f"💰 **Budget:** {plan['budget']}")
    if plan.get("interests"):
        lines.append(f"🎯 **Interests:** {', '.join(plan['interests'])}")

    if plan.get("flights"):
        lines += ["", "✈️ **Flight Options:**"] + _numbered(plan["flights"], _flight_line, 3)
    if plan.get("hotels"):
        lines += ["", "🏨 **Hotel Options:**"] + _numbered(plan["hotels"], _hotel_line, 3)
    if plan.get("activities"):
        lines += ["", "🎯 **Recommended Activities:**"] + _numbered(plan["activities"], _activity_line, 5)

    unavailable = (result.meta or {}).get("unavailable")
    if unavailable:
        lines += ["", f"⚠️ Not available right now: {', '.join(unavailable)}"]
    return "\n".join(lines) + "\n"


def render_recommendations(result: OrchestrationResult) -> str:
    guide = result.data
    parts = [f"Travel recommendations for {guide['destination']}:"]
    if guide.get("interests"):
        parts.append(f"Based on your interests: {', '.join(guide['interests'])}")
    if guide.get("budget"):
        parts.append(f"Budget level: {guide['budget']}")
    if guide.get("duration"):
        parts.append(f"Trip duration: {guide['duration']}")

    activities = "\n".join(f"   • {activity}" for activity in guide["activities"])
    tips = "\n".join(f"   • {tip}" for tip in guide["tips"])
    parts.append(f"🎯 Suggested Activities:\n{activities}")
    parts.append(f"💡 Travel Tips:\n{tips}")
    return "\n\n".join(parts)


def format_result(result: OrchestrationResult, renderer: Renderer = render_json) -> CallToolResult:
    if result.is_mock:
        renderer = render_json
    return CallToolResult(content=[text_content(renderer(result))])
