"""
Argument models for every tool.

Each model is the "recognized options" table of its tool: field defaults are
applied before the handler runs and the JSON schema advertised by tools/list is
derived from the same fields. Page sizes and passenger counts are strings
because they are passed through to Amadeus untouched; numbers sent by clients
are coerced.
"""

from typing import Any, ClassVar, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .base import normalize_date


class ToolArgs(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True, frozen=True)

    # Subclasses list the fields that hold dates
    date_fields: ClassVar[Tuple[str, ...]] = ()

    @field_validator("*", mode="after")
    @classmethod
    def _strip_time_of_day(cls, value, info):
        if info.field_name in cls.date_fields and isinstance(value, str):
            return normalize_date(value)
        return value


# =============================================================================
# FLIGHTS
# =============================================================================

class FlightSearchArgs(ToolArgs):
    date_fields = ("departureDate", "returnDate")

    origin: str = Field(..., description='Origin airport code (e.g., "NYC", "LAX", "LHR")')
    destination: str = Field(..., description='Destination airport code (e.g., "LAX", "NYC", "CDG")')
    departureDate: str = Field(..., description="Departure date in YYYY-MM-DD format")
    returnDate: Optional[str] = Field(None, description="Return date in YYYY-MM-DD format (optional for one-way flights)")
    adults: str = Field("1", description='Number of adult passengers (default: "1")')
    max: str = Field("10", description='Maximum number of results to return (default: "10")')
    currencyCode: str = Field("USD", description='Currency code for pricing (default: "USD")')


class FlightDestinationsArgs(ToolArgs):
    date_fields = ("departureDate",)

    origin: str = Field(..., description='Origin airport code (e.g., "NYC", "LAX")')
    departureDate: Optional[str] = Field(None, description="Departure date in YYYY-MM-DD format")
    oneWay: bool = Field(True, description="Whether the flight is one-way (default: true)")
    max: str = Field("50", description='Maximum number of results to return (default: "50")')


class FlightOffersArgs(ToolArgs):
    flightOffers: List[Dict[str, Any]] = Field(
        ..., min_length=1, description="Array of flight offers as returned by search_flights"
    )


# =============================================================================
# HOTELS
# =============================================================================

class HotelSearchArgs(ToolArgs):
    date_fields = ("checkInDate", "checkOutDate")

    cityCode: str = Field(..., description='City code (e.g., "PAR", "NYC", "LON", "TYO")')
    checkInDate: str = Field(..., description="Check-in date in YYYY-MM-DD format")
    checkOutDate: str = Field(..., description="Check-out date in YYYY-MM-DD format")
    adults: str = Field("2", description='Number of adult guests (default: "2")')
    max: str = Field("10", description='Maximum number of results to return (default: "10")')
    radius: str = Field("5", description='Search radius around the city centre (default: "5")')
    radiusUnit: str = Field("KM", description='Radius unit, KM or MILE (default: "KM")')


class HotelGeoSearchArgs(ToolArgs):
    date_fields = ("checkInDate", "checkOutDate")

    latitude: str = Field(..., description="Latitude coordinate")
    longitude: str = Field(..., description="Longitude coordinate")
    checkInDate: str = Field(..., description="Check-in date in YYYY-MM-DD format")
    checkOutDate: str = Field(..., description="Check-out date in YYYY-MM-DD format")
    radius: str = Field("5", description='Search radius in kilometers (default: "5")')
    adults: str = Field("2", description='Number of adult guests (default: "2")')


class HotelDetailsArgs(ToolArgs):
    hotelId: str = Field(..., description="Hotel ID from search results")


# =============================================================================
# LOCATIONS
# =============================================================================

class AirportSearchArgs(ToolArgs):
    keyword: str = Field(..., description="Search keyword (city name, airport code, etc.)")
    countryCode: Optional[str] = Field(None, description="Country code to limit search (optional)")
    max: str = Field("10", description='Maximum number of results to return (default: "10")')


class CitySearchArgs(ToolArgs):
    keyword: str = Field(..., description="City name or keyword to search for")
    countryCode: Optional[str] = Field(None, description="Country code to limit search (optional)")
    max: str = Field("10", description='Maximum number of results to return (default: "10")')


class PointsOfInterestArgs(ToolArgs):
    cityCode: str = Field(..., description="City code to search in")
    categories: Optional[List[str]] = Field(
        None, description='Categories to search for (e.g., ["SIGHTS", "RESTAURANT"])'
    )
    radius: str = Field("5", description='Search radius in kilometers (default: "5")')
    max: str = Field("10", description='Maximum number of results to return (default: "10")')


# =============================================================================
# CARS / TRANSFERS
# =============================================================================

class CarRentalArgs(ToolArgs):
    date_fields = ("pickUpDate", "dropOffDate")

    cityCode: str = Field(..., description="City or airport code for the pick-up")
    pickUpDate: str = Field(..., description="Pick-up date in YYYY-MM-DD format")
    dropOffDate: str = Field(..., description="Drop-off date in YYYY-MM-DD format")
    pickUpTime: str = Field("10:00", description='Pick-up time in HH:MM format (default: "10:00")')
    dropOffTime: str = Field("10:00", description='Drop-off time in HH:MM format (default: "10:00")')


# =============================================================================
# ANALYTICS
# =============================================================================

class TravelPredictionArgs(ToolArgs):
    date_fields = ("departureDate",)

    origin: str = Field(..., description="Origin airport code")
    destination: str = Field(..., description="Destination airport code")
    departureDate: str = Field(..., description="Departure date in YYYY-MM-DD format")
    currencyCode: str = Field("USD", description='Currency code for pricing (default: "USD")')


class DestinationInsightsArgs(ToolArgs):
    destination: str = Field(..., description="Destination city code (e.g., PAR)")
    period: Optional[str] = Field(None, description="Year to analyse, YYYY (default: last year)")


# =============================================================================
# TRIPS
# =============================================================================

class TripPlanArgs(ToolArgs):
    date_fields = ("departureDate", "returnDate")

    origin: str = Field(..., description="Origin city/airport code")
    destination: str = Field(..., description="Destination city/airport code")
    departureDate: str = Field(..., description="Departure date in YYYY-MM-DD format")
    returnDate: str = Field(..., description="Return date in YYYY-MM-DD format")
    adults: str = Field("2", description='Number of adult travelers (default: "2")')
    interests: List[str] = Field(default_factory=list, description="List of interests for activities")
    budget: Optional[str] = Field(None, description="Budget level for the trip")


class TravelRecommendationArgs(ToolArgs):
    destination: str = Field(..., description="Destination city or country")
    interests: List[str] = Field(
        default_factory=list, description='List of interests (e.g., ["culture", "food", "adventure"])'
    )
    budget: Optional[str] = Field(None, description='Budget level (e.g., "budget", "mid-range", "luxury")')
    duration: Optional[str] = Field(None, description='Trip duration (e.g., "3 days", "1 week")')
