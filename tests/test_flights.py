import unittest

import httpx

from amadeus_mcp.errors import UpstreamError
from amadeus_mcp.tools.schemas import FlightDestinationsArgs, FlightOffersArgs, FlightSearchArgs

from amadeus_stub import AmadeusStub, flight_offer, upstream_error


class TestFlightTools(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.stub = AmadeusStub()
        self.service = self.stub.service()

    async def test_search_flights_nyc_to_lax(self):
        self.stub.on(
            "GET",
            "/v2/shopping/flight-offers",
            (200, {"data": [flight_offer("1"), flight_offer("2")], "dictionaries": {"carriers": {"AA": "AMERICAN"}}}),
        )
        args = FlightSearchArgs(origin="NYC", destination="LAX", departureDate="2025-12-15T10:00:00")

        result = await self.service.search_flights(args)

        self.assertEqual(len(result.data), 2)
        self.assertEqual(result.count, 2)
        self.assertEqual(result.search_params["departureDate"], "2025-12-15")
        self.assertEqual(result.to_dict()["searchParams"]["adults"], "1")
        self.assertEqual(result.meta["dictionaries"]["carriers"]["AA"], "AMERICAN")

        params = self.stub.last("/v2/shopping/flight-offers").url.params
        self.assertEqual(params["originLocationCode"], "NYC")
        self.assertEqual(params["departureDate"], "2025-12-15")
        self.assertEqual(params["max"], "10")
        self.assertEqual(params["currencyCode"], "USD")
        self.assertNotIn("returnDate", params)

    async def test_search_flights_empty(self):
        self.stub.on("GET", "/v2/shopping/flight-offers", (200, {"meta": {"count": 0}}))
        args = FlightSearchArgs(origin="NYC", destination="LAX", departureDate="2025-12-15")
        result = await self.service.search_flights(args)
        self.assertEqual(result.data, [])
        self.assertEqual(result.count, 0)

    async def test_search_flights_error_is_prefixed(self):
        self.stub.on("GET", "/v2/shopping/flight-offers", upstream_error(500))
        args = FlightSearchArgs(origin="NYC", destination="LAX", departureDate="2025-12-15")
        with self.assertRaises(UpstreamError) as ctx:
            await self.service.search_flights(args)
        self.assertTrue(str(ctx.exception).startswith("Failed to search flights: 500"))
        self.assertEqual(ctx.exception.status, 500)

    async def test_transport_error_becomes_upstream_error(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        self.stub.handler = refuse
        self.service = self.stub.service()
        args = FlightSearchArgs(origin="NYC", destination="LAX", departureDate="2025-12-15")
        with self.assertRaises(UpstreamError) as ctx:
            await self.service.search_flights(args)
        self.assertIn("Failed to search flights", str(ctx.exception))

    async def test_flight_destinations(self):
        self.stub.on("GET", "/v1/shopping/flight-destinations", (200, {"data": [{"destination": "MAD"}]}))
        result = await self.service.search_flight_destinations(FlightDestinationsArgs(origin="PAR"))
        self.assertEqual(result.data[0]["destination"], "MAD")
        params = self.stub.last("/v1/shopping/flight-destinations").url.params
        self.assertEqual(params["oneWay"], "true")
        self.assertEqual(params["max"], "50")

    async def test_pricing_posts_offers(self):
        priced = {"type": "flight-offers-pricing", "flightOffers": [flight_offer("1", total="210.00")]}
        self.stub.on("POST", "/v1/shopping/flight-offers/pricing", (200, {"data": priced}))

        result = await self.service.get_flight_offers_pricing(FlightOffersArgs(flightOffers=[flight_offer("1")]))

        self.assertEqual(result.count, 1)
        self.assertEqual(result.data["flightOffers"][0]["price"]["total"], "210.00")
        body = self.stub.body("/v1/shopping/flight-offers/pricing")
        self.assertEqual(body["data"]["type"], "flight-offers-pricing")
        self.assertEqual(body["data"]["flightOffers"][0]["id"], "1")

    async def test_seatmaps(self):
        self.stub.on("POST", "/v1/shopping/seatmaps", (200, {"data": [{"flightOfferId": "1"}, {"flightOfferId": "1"}]}))
        result = await self.service.get_flight_seatmaps(FlightOffersArgs(flightOffers=[flight_offer("1")]))
        self.assertEqual(result.count, 2)
        self.assertEqual(self.stub.body("/v1/shopping/seatmaps"), {"data": [flight_offer("1")]})


if __name__ == "__main__":
    unittest.main()
