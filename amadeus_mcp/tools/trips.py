"""
Composite tools: trip planning and travel recommendations.

A trip plan fans out to flights, hotels and points of interest at the same
time. A section that fails or comes back empty is left out of the plan and
named in ``meta["unavailable"]``; the rest of the plan is still returned.
"""

import asyncio
import logging
from typing import Any, Dict, List

import httpx

from ..errors import AmadeusMCPError
from .base import OrchestrationResult, provider_operation, records
from .flights import FlightTools
from .hotels import HotelTools
from .locations import LocationTools
from .schemas import TravelRecommendationArgs, TripPlanArgs

logger = logging.getLogger(__name__)

PLAN_FLIGHTS = "3"
PLAN_HOTELS = 3
PLAN_ACTIVITIES = "5"
PLAN_RADIUS = "5"

# =============================================================================
# CURATED DESTINATIONS
# =============================================================================

DESTINATION_GUIDES: Dict[str, Dict[str, List[str]]] = {
    "Paris": {
        "activities": [
            "Visit the Eiffel Tower and enjoy the city views",
            "Explore the Louvre Museum and see the Mona Lisa",
            "Walk along the Champs-Élysées and shop",
            "Take a Seine River cruise to see the city from water",
            "Visit Notre-Dame Cathedral and the Latin Quarter",
            "Explore Montmartre and see the Sacré-Cœur",
        ],
        "tips": [
            "Book museum tickets online to avoid long queues",
            "Use the Paris Metro for efficient transportation",
            "Try authentic French cuisine at local bistros",
            "Visit popular attractions early morning or late evening",
            "Learn basic French phrases for better interactions",
        ],
    },
    "New York": {
        "activities": [
            "Visit Times Square and Broadway",
            "Explore Central Park and its attractions",
            "See the Statue of Liberty and Ellis Island",
            "Visit the Metropolitan Museum of Art",
            "Walk across the Brooklyn Bridge",
            "Explore the High Line and Chelsea Market",
        ],
        "tips": [
            "Get a MetroCard for subway and bus transportation",
            "Book Broadway show tickets in advance",
            "Visit museums on free admission days",
            "Use the Staten Island Ferry for free Statue of Liberty views",
            "Explore different neighborhoods for authentic experiences",
        ],
    },
    "London": {
        "activities": [
            "Visit the Tower of London and see the Crown Jewels",
            "Explore the British Museum",
            "See Big Ben and the Houses of Parliament",
            "Visit Buckingham Palace and watch the Changing of the Guard",
            "Take a ride on the London Eye",
            "Explore the West End and see a show",
        ],
        "tips": [
            "Get an Oyster card for public transportation",
            "Book attractions online for better prices",
            "Visit museums (many are free)",
            "Use the London Underground efficiently",
            "Check the weather and bring appropriate clothing",
        ],
    },
    "Tokyo": {
        "activities": [
            "Visit Senso-ji Temple in Asakusa",
            "Explore the bustling Shibuya crossing",
            "See the cherry blossoms in Ueno Park",
            "Visit the Tokyo Skytree for city views",
            "Explore the historic Meiji Shrine",
            "Experience the famous Tsukiji Fish Market",
        ],
        "tips": [
            "Get a Japan Rail Pass for long-distance travel",
            "Use the efficient Tokyo Metro system",
            "Try authentic sushi and ramen",
            "Visit temples early to avoid crowds",
            "Learn basic Japanese phrases",
        ],
    },
}

GENERIC_GUIDE: Dict[str, List[str]] = {
    "activities": [
        "Visit local museums and cultural sites",
        "Try authentic local cuisine",
        "Explore historical landmarks",
        "Take a guided city tour",
        "Visit local markets and shops",
        "Experience local festivals and events",
    ],
    "tips": [
        "Book attractions in advance to avoid queues",
        "Use public transportation for cost savings",
        "Check local weather forecasts",
        "Learn basic local phrases",
        "Keep emergency contact numbers handy",
        "Research local customs and etiquette",
    ],
}

_GUIDES_BY_KEY = {name.lower(): guide for name, guide in DESTINATION_GUIDES.items()}


def destination_guide(destination: str):
    """(guide, curated) for a destination name; unknown names get the generic guide."""
    guide = _GUIDES_BY_KEY.get(destination.strip().lower())
    if guide is None:
        return GENERIC_GUIDE, False
    return guide, True


class TripTools(FlightTools, HotelTools, LocationTools):

    async def _plan_hotels(self, token, args: TripPlanArgs) -> List[Dict[str, Any]]:
        payload = await self._hotel_offers_by_city(
            token, args.destination, args.departureDate, args.returnDate, args.adults, limit=PLAN_HOTELS
        )
        return records(payload)

    @provider_operation("Trip planning failed")
    async def create_trip_plan(self, args: TripPlanArgs) -> OrchestrationResult:
        logger.info(f"Creating trip plan: {args.origin} -> {args.destination}")
        token = await self.client.get_access_token()
        flight_params = {
            "originLocationCode": args.origin,
            "destinationLocationCode": args.destination,
            "departureDate": args.departureDate,
            "returnDate": args.returnDate,
            "adults": args.adults,
            "max": PLAN_FLIGHTS,
        }

        sections = ("flights", "hotels", "activities")
        results = await asyncio.gather(
            self._flight_offers(token, flight_params),
            self._plan_hotels(token, args),
            self._points_of_interest(token, args.destination, radius=PLAN_RADIUS, limit=PLAN_ACTIVITIES),
            return_exceptions=True,
        )

        plan: Dict[str, Any] = {
            "origin": args.origin,
            "destination": args.destination,
            "departureDate": args.departureDate,
            "returnDate": args.returnDate,
            "adults": args.adults,
            "interests": list(args.interests),
        }
        if args.budget:
            plan["budget"] = args.budget

        unavailable: List[str] = []
        errors: Dict[str, str] = {}
        for section, result in zip(sections, results):
            if isinstance(result, (AmadeusMCPError, httpx.HTTPError)):
                logger.warning(f"Trip plan {section} unavailable: {result}", extra={"tool": "create_trip_plan"})
                unavailable.append(section)
                errors[section] = str(result)
                plan[section] = []
            elif isinstance(result, BaseException):
                raise result
            else:
                if not result:
                    logger.warning(f"Trip plan {section} returned no results", extra={"tool": "create_trip_plan"})
                    unavailable.append(section)
                plan[section] = result

        meta: Dict[str, Any] = {}
        if unavailable:
            meta["unavailable"] = unavailable
        if errors:
            meta["errors"] = errors
        return OrchestrationResult(
            data=plan,
            meta=meta or None,
            message=f"Trip plan: {args.origin} -> {args.destination}",
        )

    async def get_travel_recommendations(self, args: TravelRecommendationArgs) -> OrchestrationResult:
        """Curated tips for a destination. Local only, works without credentials."""
        guide, curated = destination_guide(args.destination)
        recommendations: Dict[str, Any] = {
            "destination": args.destination,
            "curated": curated,
            "activities": list(guide["activities"]),
            "tips": list(guide["tips"]),
            "interests": list(args.interests),
        }
        if args.budget:
            recommendations["budget"] = args.budget
        if args.duration:
            recommendations["duration"] = args.duration
        return OrchestrationResult(
            data=recommendations,
            message=f"Travel recommendations for {args.destination}",
        )
