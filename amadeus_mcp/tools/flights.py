"""Flight tools: offer search, destination inspiration, pricing and seat maps."""

import logging
from typing import Any, Dict, List

from ..provider.client import AccessToken
from .base import OrchestrationResult, ProviderTools, provider_meta, provider_operation, records
from .schemas import FlightDestinationsArgs, FlightOffersArgs, FlightSearchArgs

logger = logging.getLogger(__name__)

FLIGHT_OFFERS = "/v2/shopping/flight-offers"
FLIGHT_DESTINATIONS = "/v1/shopping/flight-destinations"
FLIGHT_PRICING = "/v1/shopping/flight-offers/pricing"
SEATMAPS = "/v1/shopping/seatmaps"


def flight_search_params(args: FlightSearchArgs) -> Dict[str, Any]:
    params = {
        "originLocationCode": args.origin,
        "destinationLocationCode": args.destination,
        "departureDate": args.departureDate,
        "adults": args.adults,
        "max": args.max,
        "currencyCode": args.currencyCode,
    }
    if args.returnDate:
        params["returnDate"] = args.returnDate
    return params


class FlightTools(ProviderTools):

    async def _flight_offers(self, token: AccessToken, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        payload = await self.client.get(FLIGHT_OFFERS, token, params=params)
        return records(payload)

    @provider_operation("Failed to search flights")
    async def search_flights(self, args: FlightSearchArgs) -> OrchestrationResult:
        """Search for available flights between two airports."""
        logger.info(f"Searching flights: {args.origin} -> {args.destination} on {args.departureDate}")
        token = await self.client.get_access_token()
        search_params = flight_search_params(args)

        payload = await self.client.get(FLIGHT_OFFERS, token, params=search_params)
        offers = records(payload)
        return OrchestrationResult(
            data=offers,
            count=len(offers),
            meta=provider_meta(payload),
            message=f"Found {len(offers)} flights from {args.origin} to {args.destination}",
            search_params=search_params,
        )

    @provider_operation("Failed to search flight destinations")
    async def search_flight_destinations(self, args: FlightDestinationsArgs) -> OrchestrationResult:
        """Cheapest destinations reachable from an origin."""
        token = await self.client.get_access_token()
        search_params = {"origin": args.origin, "oneWay": args.oneWay, "max": args.max}
        if args.departureDate:
            search_params["departureDate"] = args.departureDate

        payload = await self.client.get(FLIGHT_DESTINATIONS, token, params=search_params)
        destinations = records(payload)
        return OrchestrationResult(
            data=destinations,
            count=len(destinations),
            meta=provider_meta(payload),
            message=f"Found {len(destinations)} destinations from {args.origin}",
            search_params=search_params,
        )

    @provider_operation("Failed to get flight pricing")
    async def get_flight_offers_pricing(self, args: FlightOffersArgs) -> OrchestrationResult:
        """Confirm the current price of offers returned by search_flights."""
        token = await self.client.get_access_token()
        body = {"data": {"type": "flight-offers-pricing", "flightOffers": list(args.flightOffers)}}

        payload = await self.client.post(FLIGHT_PRICING, token, json=body)
        priced = payload.get("data") or {}
        priced_offers = priced.get("flightOffers", []) if isinstance(priced, dict) else priced
        return OrchestrationResult(
            data=priced,
            count=len(priced_offers),
            meta=provider_meta(payload),
            message=f"Priced {len(priced_offers)} flight offers",
        )

    @provider_operation("Failed to get flight seat maps")
    async def get_flight_seatmaps(self, args: FlightOffersArgs) -> OrchestrationResult:
        token = await self.client.get_access_token()
        payload = await self.client.post(SEATMAPS, token, json={"data": list(args.flightOffers)})
        seatmaps = records(payload)
        return OrchestrationResult(
            data=seatmaps,
            count=len(seatmaps),
            meta=provider_meta(payload),
        )
