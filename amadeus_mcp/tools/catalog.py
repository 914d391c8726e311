"""The tool catalog: names, descriptions, argument models and renderers, in listing order."""

from dataclasses import dataclass
from typing import List, Type

from pydantic import BaseModel

from ..mcp.mcp_server import MCPServer
from . import schemas
from .formatting import (
    Renderer,
    render_cars,
    render_destinations,
    render_flights,
    render_hotels,
    render_json,
    render_locations,
    render_pois,
    render_recommendations,
    render_trip_plan,
)


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    args_model: Type[BaseModel]
    renderer: Renderer = render_json


TOOL_CATALOG: List[ToolSpec] = [
    # Flights
    ToolSpec(
        "search_flights",
        "Search for flights between airports using Amadeus API",
        schemas.FlightSearchArgs,
        render_flights,
    ),
    ToolSpec(
        "search_flight_destinations",
        "Find the cheapest destinations reachable from an origin airport",
        schemas.FlightDestinationsArgs,
        render_destinations,
    ),
    ToolSpec(
        "get_flight_offers_pricing",
        "Confirm the current price and availability of flight offers",
        schemas.FlightOffersArgs,
    ),
    ToolSpec(
        "get_flight_seatmaps",
        "Get seat maps for flight offers",
        schemas.FlightOffersArgs,
    ),
    # Hotels
    ToolSpec(
        "search_hotels",
        "Search for hotels in a city using Amadeus API",
        schemas.HotelSearchArgs,
        render_hotels,
    ),
    ToolSpec(
        "search_hotels_by_geolocation",
        "Search for hotels near specific coordinates",
        schemas.HotelGeoSearchArgs,
        render_hotels,
    ),
    ToolSpec(
        "get_hotel_details",
        "Get detailed information about a specific hotel",
        schemas.HotelDetailsArgs,
    ),
    # Locations
    ToolSpec(
        "search_airports",
        "Search for airports by city name, airport code, or keyword",
        schemas.AirportSearchArgs,
        render_locations,
    ),
    ToolSpec(
        "search_cities",
        "Search for cities by name or keyword",
        schemas.CitySearchArgs,
        render_locations,
    ),
    ToolSpec(
        "search_points_of_interest",
        "Find points of interest, attractions, and activities in a city",
        schemas.PointsOfInterestArgs,
        render_pois,
    ),
    # Cars
    ToolSpec(
        "search_car_rentals",
        "Search for car rental options in a city",
        schemas.CarRentalArgs,
        render_cars,
    ),
    # Analytics
    ToolSpec(
        "get_travel_predictions",
        "Get historical price metrics to judge whether a fare is a good deal",
        schemas.TravelPredictionArgs,
    ),
    ToolSpec(
        "get_destination_insights",
        "Get the busiest travel periods for a destination",
        schemas.DestinationInsightsArgs,
    ),
    # Trips
    ToolSpec(
        "create_trip_plan",
        "Create a comprehensive trip plan with flights, hotels, and activities",
        schemas.TripPlanArgs,
        render_trip_plan,
    ),
    ToolSpec(
        "get_travel_recommendations",
        "Get travel recommendations and tips for destinations",
        schemas.TravelRecommendationArgs,
        render_recommendations,
    ),
]


def build_server(service):
    """An MCPServer with every catalog tool bound to the matching ``service`` method."""
    server = MCPServer()
    for spec in TOOL_CATALOG:
        server.register_tool(
            spec.name,
            spec.description,
            spec.args_model,
            getattr(service, spec.name),
            spec.renderer,
        )
    return server
