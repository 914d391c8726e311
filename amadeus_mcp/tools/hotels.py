"""
Hotel tools.

Hotel search walks a fallback chain, strictly in this order:

1. hotel list by city -> first 5 hotel IDs -> offers for those IDs (v3)
2. direct city + dates offer query (v2)
3. location keyword search on the city code

The first step that yields data wins. When all of them fail the last error is
raised; the chain never answers with an empty success.
"""

import logging
from typing import Any, Dict, List

from ..errors import EmptyResultError
from ..provider.client import AccessToken
from .base import OrchestrationResult, ProviderTools, provider_meta, provider_operation, records
from .resilience import FallbackChain, FallbackStep
from .schemas import HotelDetailsArgs, HotelGeoSearchArgs, HotelSearchArgs

logger = logging.getLogger(__name__)

HOTELS_BY_CITY = "/v1/reference-data/locations/hotels/by-city"
HOTELS_BY_GEOCODE = "/v1/reference-data/locations/hotels/by-geocode"
HOTELS_BY_IDS = "/v1/reference-data/locations/hotels/by-hotels"
HOTEL_LOCATIONS = "/v1/reference-data/locations/hotel"
HOTEL_OFFERS = "/v3/shopping/hotel-offers"
CITY_HOTEL_OFFERS = "/v2/shopping/hotel-offers"

MAX_HOTEL_IDS = 5


def hotel_ids(listing: Dict[str, Any], limit: int = MAX_HOTEL_IDS) -> List[str]:
    ids = [hotel.get("hotelId") for hotel in records(listing)]
    return [hotel_id for hotel_id in ids if hotel_id][:limit]


class HotelTools(ProviderTools):

    async def _offers_for_listing(
        self,
        token: AccessToken,
        listing: Dict[str, Any],
        check_in: str,
        check_out: str,
        adults: str,
        limit: int = MAX_HOTEL_IDS,
    ) -> Dict[str, Any]:
        ids = hotel_ids(listing, limit)
        if not ids:
            raise EmptyResultError("No hotels found for this location")
        return await self.client.get(
            HOTEL_OFFERS,
            token,
            params={
                "hotelIds": ",".join(ids),
                "checkInDate": check_in,
                "checkOutDate": check_out,
                "adults": adults,
            },
        )

    async def _hotel_offers_by_city(
        self,
        token: AccessToken,
        city_code: str,
        check_in: str,
        check_out: str,
        adults: str,
        limit: int = MAX_HOTEL_IDS,
        radius: str = "5",
        radius_unit: str = "KM",
    ) -> Dict[str, Any]:
        listing = await self.client.get(
            HOTELS_BY_CITY,
            token,
            params={"cityCode": city_code, "radius": radius, "radiusUnit": radius_unit, "hotelSource": "ALL"},
        )
        return await self._offers_for_listing(token, listing, check_in, check_out, adults, limit)

    def hotel_search_chain(self, token: AccessToken, args: HotelSearchArgs) -> FallbackChain:
        async def by_hotel_list():
            return await self._hotel_offers_by_city(
                token,
                args.cityCode,
                args.checkInDate,
                args.checkOutDate,
                args.adults,
                radius=args.radius,
                radius_unit=args.radiusUnit,
            )

        async def by_city_and_dates():
            return await self.client.get(
                CITY_HOTEL_OFFERS,
                token,
                params={
                    "cityCode": args.cityCode,
                    "checkInDate": args.checkInDate,
                    "checkOutDate": args.checkOutDate,
                    "adults": args.adults,
                    "max": args.max,
                },
            )

        async def by_location_keyword():
            return await self.client.get(
                HOTEL_LOCATIONS,
                token,
                params={"keyword": args.cityCode, "subType": "HOTEL_LEISURE", "max": args.max},
            )

        return FallbackChain(
            "hotel search",
            [
                FallbackStep("hotel-list-offers", by_hotel_list),
                FallbackStep("city-offers", by_city_and_dates),
                FallbackStep("location-search", by_location_keyword),
            ],
        )

    @provider_operation("Hotel search failed")
    async def search_hotels(self, args: HotelSearchArgs) -> OrchestrationResult:
        """Search hotels in a city, falling back across three provider queries."""
        logger.info(f"Searching hotels in {args.cityCode} from {args.checkInDate} to {args.checkOutDate}")
        token = await self.client.get_access_token()
        search_params = {
            "cityCode": args.cityCode,
            "checkInDate": args.checkInDate,
            "checkOutDate": args.checkOutDate,
            "adults": args.adults,
            "max": args.max,
        }

        outcome = await self.hotel_search_chain(token, args).run()
        hotels = records(outcome.payload)
        meta = {"source": outcome.step}
        if outcome.skipped:
            meta["fallbacks"] = outcome.skipped
        meta.update(provider_meta(outcome.payload) or {})
        return OrchestrationResult(
            data=hotels,
            count=len(hotels),
            meta=meta,
            message=f"Found {len(hotels)} hotels in {args.cityCode}",
            search_params=search_params,
        )

    @provider_operation("Hotel geolocation search failed")
    async def search_hotels_by_geolocation(self, args: HotelGeoSearchArgs) -> OrchestrationResult:
        token = await self.client.get_access_token()
        search_params = {
            "latitude": args.latitude,
            "longitude": args.longitude,
            "radius": args.radius,
            "radiusUnit": "KM",
            "checkInDate": args.checkInDate,
            "checkOutDate": args.checkOutDate,
            "adults": args.adults,
        }
        listing = await self.client.get(
            HOTELS_BY_GEOCODE,
            token,
            params={
                "latitude": args.latitude,
                "longitude": args.longitude,
                "radius": args.radius,
                "radiusUnit": "KM",
            },
        )
        payload = await self._offers_for_listing(
            token, listing, args.checkInDate, args.checkOutDate, args.adults
        )
        hotels = records(payload)
        return OrchestrationResult(
            data=hotels,
            count=len(hotels),
            meta=provider_meta(payload),
            message=f"Found {len(hotels)} hotels near {args.latitude},{args.longitude}",
            search_params=search_params,
        )

    @provider_operation("Failed to get hotel details")
    async def get_hotel_details(self, args: HotelDetailsArgs) -> OrchestrationResult:
        token = await self.client.get_access_token()
        payload = await self.client.get(HOTELS_BY_IDS, token, params={"hotelIds": args.hotelId})
        hotels = records(payload)
        if not hotels:
            raise EmptyResultError(f"Hotel {args.hotelId} not found")
        return OrchestrationResult(data=hotels[0], count=1, meta=provider_meta(payload))
