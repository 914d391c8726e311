"""
Car rentals.

Amadeus Self-Service has no car rental search, so a rental is priced as an
hourly transfer (chauffeured car kept for the whole period) starting at the
pick-up location. Offers are normalized to company / model / type / price.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..errors import InvalidArgumentsError
from .base import OrchestrationResult, ProviderTools, provider_meta, provider_operation, records
from .schemas import CarRentalArgs

logger = logging.getLogger(__name__)

TRANSFER_OFFERS = "/v1/shopping/transfer-offers"


def _parse_moment(day: str, time_of_day: str, field: str) -> datetime:
    try:
        return datetime.strptime(f"{day} {time_of_day}", "%Y-%m-%d %H:%M")
    except ValueError:
        raise InvalidArgumentsError(
            "search_car_rentals",
            [{"loc": (field,), "msg": f"expected YYYY-MM-DD and HH:MM, got '{day} {time_of_day}'"}],
        )


def rental_window(args: CarRentalArgs):
    """(pick-up, drop-off) datetimes; drop-off must come after pick-up."""
    pick_up = _parse_moment(args.pickUpDate, args.pickUpTime, "pickUpDate")
    drop_off = _parse_moment(args.dropOffDate, args.dropOffTime, "dropOffDate")
    if drop_off <= pick_up:
        raise InvalidArgumentsError(
            "search_car_rentals",
            [{"loc": ("dropOffDate",), "msg": "drop-off must be after pick-up"}],
        )
    return pick_up, drop_off


def iso_duration(pick_up: datetime, drop_off: datetime) -> str:
    """ISO 8601 duration, hours and minutes only: 'PT48H' or 'PT2H30M'."""
    minutes = int((drop_off - pick_up).total_seconds() // 60)
    hours, minutes = divmod(minutes, 60)
    return f"PT{hours}H{minutes}M" if minutes else f"PT{hours}H"


def normalize_offer(offer: Dict[str, Any]) -> Dict[str, Any]:
    vehicle = offer.get("vehicle") or {}
    provider = offer.get("serviceProvider") or {}
    quotation = offer.get("quotation") or {}
    return {
        "id": offer.get("id"),
        "company": provider.get("name") or "Unknown Company",
        "model": vehicle.get("description") or "Unknown Model",
        "type": vehicle.get("category") or vehicle.get("code") or "Unknown Type",
        "price": quotation.get("monetaryAmount"),
        "currency": quotation.get("currencyCode"),
    }


class TransferTools(ProviderTools):

    @provider_operation("Car rental search failed")
    async def search_car_rentals(self, args: CarRentalArgs) -> OrchestrationResult:
        pick_up, drop_off = rental_window(args)
        logger.info(f"Searching car rentals in {args.cityCode}")
        token = await self.client.get_access_token()
        body = {
            "startLocationCode": args.cityCode,
            "startDateTime": pick_up.strftime("%Y-%m-%dT%H:%M:%S"),
            "transferType": "HOURLY",
            "duration": iso_duration(pick_up, drop_off),
            "passengers": 1,
        }

        payload = await self.client.post(TRANSFER_OFFERS, token, json=body)
        cars: List[Dict[str, Any]] = [normalize_offer(offer) for offer in records(payload)]
        meta: Optional[Dict[str, Any]] = provider_meta(payload)
        return OrchestrationResult(
            data=cars,
            count=len(cars),
            meta=meta,
            message=f"Found {len(cars)} car rental options in {args.cityCode}",
            search_params={
                "cityCode": args.cityCode,
                "pickUpDate": args.pickUpDate,
                "dropOffDate": args.dropOffDate,
                "pickUpTime": args.pickUpTime,
                "dropOffTime": args.dropOffTime,
            },
        )
