"""Reference data tools: airports, cities and points of interest."""

import logging
from typing import Any, Dict, List, Optional

from ..errors import EmptyResultError
from ..provider.client import AccessToken
from .base import OrchestrationResult, ProviderTools, provider_meta, provider_operation, records
from .resilience import retry_on_rate_limit
from .schemas import AirportSearchArgs, CitySearchArgs, PointsOfInterestArgs

logger = logging.getLogger(__name__)

LOCATIONS = "/v1/reference-data/locations"
CITIES = "/v1/reference-data/locations/cities"
POINTS_OF_INTEREST = "/v1/reference-data/locations/pois"


class LocationTools(ProviderTools):

    async def _city_geocode(self, token: AccessToken, city_code: str) -> Dict[str, Any]:
        payload = await self.client.get(LOCATIONS, token, params={"keyword": city_code, "subType": "CITY"})
        for location in records(payload):
            geo = location.get("geoCode") or {}
            if "latitude" in geo and "longitude" in geo:
                return geo
        raise EmptyResultError(f"No coordinates found for city {city_code}")

    async def _points_of_interest(
        self,
        token: AccessToken,
        city_code: str,
        radius: str = "5",
        limit: str = "10",
        categories: Optional[List[str]] = None,
    ) -> List[Dict[str, Any]]:
        geo = await self._city_geocode(token, city_code)
        params = {
            "latitude": geo["latitude"],
            "longitude": geo["longitude"],
            "radius": radius,
            "page[limit]": limit,
        }
        if categories:
            params["categories"] = list(categories)
        payload = await self.client.get(POINTS_OF_INTEREST, token, params=params)
        return records(payload)

    @provider_operation("Failed to search airports")
    async def search_airports(self, args: AirportSearchArgs) -> OrchestrationResult:
        logger.info(f"Searching airports for: {args.keyword}")
        token = await self.client.get_access_token()
        search_params = {"keyword": args.keyword, "subType": "AIRPORT", "page[limit]": args.max}
        if args.countryCode:
            search_params["countryCode"] = args.countryCode

        payload = await self.client.get(LOCATIONS, token, params=search_params)
        airports = records(payload)
        return OrchestrationResult(
            data=airports,
            count=len(airports),
            meta=provider_meta(payload),
            message=f'Found {len(airports)} airports for "{args.keyword}"',
            search_params=search_params,
        )

    @provider_operation("Failed to search cities")
    async def search_cities(self, args: CitySearchArgs) -> OrchestrationResult:
        """City search is the endpoint most prone to HTTP 429, so it retries."""
        logger.info(f"Searching cities for: {args.keyword}")
        token = await self.client.get_access_token()
        search_params = {"keyword": args.keyword, "max": args.max}
        if args.countryCode:
            search_params["countryCode"] = args.countryCode

        payload = await retry_on_rate_limit(
            lambda: self.client.get(CITIES, token, params=search_params),
            attempts=self.rate_limit_attempts,
            delay=self.rate_limit_delay,
            description="city search",
        )
        cities = records(payload)
        return OrchestrationResult(
            data=cities,
            count=len(cities),
            meta=provider_meta(payload),
            message=f'Found {len(cities)} cities for "{args.keyword}"',
            search_params=search_params,
        )

    @provider_operation("Points of interest search failed")
    async def search_points_of_interest(self, args: PointsOfInterestArgs) -> OrchestrationResult:
        logger.info(f"Searching points of interest in {args.cityCode}")
        token = await self.client.get_access_token()
        search_params = {"cityCode": args.cityCode, "radius": args.radius, "max": args.max}
        if args.categories:
            search_params["categories"] = list(args.categories)

        pois = await self._points_of_interest(
            token, args.cityCode, radius=args.radius, limit=args.max, categories=args.categories
        )
        return OrchestrationResult(
            data=pois,
            count=len(pois),
            message=f"Found {len(pois)} points of interest in {args.cityCode}",
            search_params=search_params,
        )
