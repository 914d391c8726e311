"""Market analytics: historical price metrics and busiest travel periods."""

import logging
from datetime import date
from typing import Optional

from .base import OrchestrationResult, ProviderTools, provider_meta, provider_operation, records
from .schemas import DestinationInsightsArgs, TravelPredictionArgs

logger = logging.getLogger(__name__)

PRICE_METRICS = "/v1/analytics/itinerary-price-metrics"
BUSIEST_PERIOD = "/v1/travel/analytics/air-traffic/busiest-period"


def default_period(today: Optional[date] = None) -> str:
    # Traffic statistics are only published for complete years
    today = today or date.today()
    return str(today.year - 1)


class AnalyticsTools(ProviderTools):

    @provider_operation("Failed to get travel predictions")
    async def get_travel_predictions(self, args: TravelPredictionArgs) -> OrchestrationResult:
        """Historical fare quartiles for a route, to judge whether a price is good."""
        token = await self.client.get_access_token()
        search_params = {
            "originIataCode": args.origin,
            "destinationIataCode": args.destination,
            "departureDate": args.departureDate,
            "currencyCode": args.currencyCode,
            "oneWay": True,
        }

        payload = await self.client.get(PRICE_METRICS, token, params=search_params)
        metrics = records(payload)
        return OrchestrationResult(
            data=metrics,
            count=len(metrics),
            meta=provider_meta(payload),
            search_params=search_params,
        )

    @provider_operation("Failed to get destination insights")
    async def get_destination_insights(self, args: DestinationInsightsArgs) -> OrchestrationResult:
        token = await self.client.get_access_token()
        search_params = {
            "cityCode": args.destination,
            "period": args.period or default_period(),
            "direction": "ARRIVING",
        }

        payload = await self.client.get(BUSIEST_PERIOD, token, params=search_params)
        periods = records(payload)
        return OrchestrationResult(
            data=periods,
            count=len(periods),
            meta=provider_meta(payload),
            message=f"Busiest travel periods for {args.destination}",
            search_params=search_params,
        )
