import unittest
from datetime import date

from amadeus_mcp.errors import InvalidArgumentsError
from amadeus_mcp.tools.analytics import default_period
from amadeus_mcp.tools.formatting import render_recommendations, render_trip_plan
from amadeus_mcp.tools.schemas import (
    CarRentalArgs,
    DestinationInsightsArgs,
    TravelPredictionArgs,
    TravelRecommendationArgs,
    TripPlanArgs,
)
from amadeus_mcp.tools.transfers import iso_duration, rental_window

from amadeus_stub import AmadeusStub, flight_offer, upstream_error

PARIS = {"data": [{"subType": "CITY", "geoCode": {"latitude": 48.85, "longitude": 2.35}}]}


class TestTripPlan(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.stub = AmadeusStub()
        self.service = self.stub.service()
        self.args = TripPlanArgs(
            origin="NYC",
            destination="PAR",
            departureDate="2025-12-15",
            returnDate="2025-12-22",
            interests=["art", "food"],
            budget="mid-range",
        )

    async def test_partial_plan_when_hotels_fail(self):
        self.stub.on("GET", "/v2/shopping/flight-offers", (200, {"data": [flight_offer("1", carrier="AF", number="7")]}))
        self.stub.on("GET", "/v1/reference-data/locations/hotels/by-city", upstream_error(500))
        self.stub.on("GET", "/v1/reference-data/locations", (200, PARIS))
        self.stub.on("GET", "/v1/reference-data/locations/pois", (200, {"data": [{"name": "Louvre", "category": "SIGHTS"}]}))

        result = await self.service.create_trip_plan(self.args)

        self.assertTrue(result.success)
        self.assertEqual(result.meta["unavailable"], ["hotels"])
        self.assertIn("hotels", result.meta["errors"])
        self.assertEqual(result.data["hotels"], [])
        self.assertEqual(len(result.data["flights"]), 1)

        flight_params = self.stub.last("/v2/shopping/flight-offers").url.params
        self.assertEqual(flight_params["max"], "3")
        self.assertEqual(flight_params["adults"], "2")
        self.assertEqual(self.stub.last("/v1/reference-data/locations/pois").url.params["page[limit]"], "5")

        text = render_trip_plan(result)
        self.assertIn("Trip Plan: NYC → PAR", text)
        self.assertIn("1. AF7 - 199.00 USD", text)
        self.assertIn("1. Louvre (SIGHTS)", text)
        self.assertIn("Budget:** mid-range", text)
        self.assertNotIn("Hotel Options", text)
        self.assertIn("Not available right now: hotels", text)

    async def test_full_plan_uses_three_hotel_ids(self):
        self.stub.on("GET", "/v2/shopping/flight-offers", (200, {"data": [flight_offer("1")]}))
        self.stub.on(
            "GET",
            "/v1/reference-data/locations/hotels/by-city",
            (200, {"data": [{"hotelId": f"H{i}"} for i in range(6)]}),
        )
        self.stub.on("GET", "/v3/shopping/hotel-offers", (200, {"data": [{"hotel": {"name": "Le Grand"}}]}))
        self.stub.on("GET", "/v1/reference-data/locations", (200, PARIS))
        self.stub.on("GET", "/v1/reference-data/locations/pois", (200, {"data": [{"name": "Louvre"}]}))

        result = await self.service.create_trip_plan(self.args)

        self.assertIsNone(result.meta)
        self.assertEqual(self.stub.last("/v3/shopping/hotel-offers").url.params["hotelIds"], "H0,H1,H2")
        self.assertIn("1. Le Grand", render_trip_plan(result))

    async def test_empty_sections_are_reported(self):
        self.stub.on("GET", "/v2/shopping/flight-offers", (200, {"data": []}))
        self.stub.on("GET", "/v1/reference-data/locations/hotels/by-city", (200, {"data": []}))
        self.stub.on("GET", "/v1/reference-data/locations", (200, PARIS))
        self.stub.on("GET", "/v1/reference-data/locations/pois", (200, {"data": []}))

        result = await self.service.create_trip_plan(self.args)

        self.assertEqual(result.meta["unavailable"], ["flights", "hotels", "activities"])


class TestRecommendations(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.service = AmadeusStub().service()

    async def test_curated_destination_is_case_insensitive(self):
        result = await self.service.get_travel_recommendations(TravelRecommendationArgs(destination="  tokyo "))
        self.assertTrue(result.data["curated"])
        self.assertIn("Visit Senso-ji Temple in Asakusa", result.data["activities"])

    async def test_unknown_destination_gets_generic_guide(self):
        args = TravelRecommendationArgs(destination="Atlantis", interests=["culture"], duration="1 week")
        result = await self.service.get_travel_recommendations(args)

        self.assertFalse(result.data["curated"])
        self.assertIn("Try authentic local cuisine", result.data["activities"])
        text = render_recommendations(result)
        self.assertTrue(text.startswith("Travel recommendations for Atlantis:"))
        self.assertIn("Based on your interests: culture", text)
        self.assertIn("Trip duration: 1 week", text)
        self.assertIn("   • Keep emergency contact numbers handy", text)


class TestCarRentals(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.stub = AmadeusStub()
        self.service = self.stub.service()

    async def test_hourly_transfer_offers_are_normalized(self):
        offer = {
            "id": "1",
            "transferType": "HOURLY",
            "vehicle": {"code": "CAR", "category": "BU", "description": "Mercedes E-Class"},
            "serviceProvider": {"name": "Blacklane"},
            "quotation": {"monetaryAmount": "850.00", "currencyCode": "EUR"},
        }
        self.stub.on("POST", "/v1/shopping/transfer-offers", (200, {"data": [offer, {"id": "2"}]}))
        args = CarRentalArgs(cityCode="CDG", pickUpDate="2025-12-15", dropOffDate="2025-12-17", dropOffTime="12:30")

        result = await self.service.search_car_rentals(args)

        self.assertEqual(result.data[0], {
            "id": "1", "company": "Blacklane", "model": "Mercedes E-Class",
            "type": "BU", "price": "850.00", "currency": "EUR",
        })
        self.assertEqual(result.data[1]["company"], "Unknown Company")
        body = self.stub.body("/v1/shopping/transfer-offers")
        self.assertEqual(body["transferType"], "HOURLY")
        self.assertEqual(body["startDateTime"], "2025-12-15T10:00:00")
        self.assertEqual(body["duration"], "PT50H30M")

    async def test_drop_off_before_pick_up(self):
        args = CarRentalArgs(cityCode="CDG", pickUpDate="2025-12-17", dropOffDate="2025-12-15")
        with self.assertRaises(InvalidArgumentsError):
            await self.service.search_car_rentals(args)
        self.assertEqual(self.stub.requests, [])

    def test_rental_window_rejects_bad_time(self):
        with self.assertRaises(InvalidArgumentsError):
            rental_window(CarRentalArgs(cityCode="CDG", pickUpDate="2025-12-15", dropOffDate="2025-12-16", pickUpTime="25:99"))

    def test_iso_duration(self):
        pick_up, drop_off = rental_window(CarRentalArgs(cityCode="CDG", pickUpDate="2025-12-15", dropOffDate="2025-12-16"))
        self.assertEqual(iso_duration(pick_up, drop_off), "PT24H")


class TestAnalytics(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.stub = AmadeusStub()
        self.service = self.stub.service()

    async def test_travel_predictions(self):
        self.stub.on("GET", "/v1/analytics/itinerary-price-metrics", (200, {"data": [{"priceMetrics": []}]}))
        args = TravelPredictionArgs(origin="MAD", destination="CDG", departureDate="2025-12-15")

        result = await self.service.get_travel_predictions(args)

        self.assertEqual(result.count, 1)
        params = self.stub.last("/v1/analytics/itinerary-price-metrics").url.params
        self.assertEqual(params["originIataCode"], "MAD")
        self.assertEqual(params["currencyCode"], "USD")

    async def test_destination_insights(self):
        self.stub.on("GET", "/v1/travel/analytics/air-traffic/busiest-period", (200, {"data": [{"period": "2024-07"}]}))

        result = await self.service.get_destination_insights(DestinationInsightsArgs(destination="PAR", period=2024))

        self.assertEqual(result.data[0]["period"], "2024-07")
        params = self.stub.last("/v1/travel/analytics/air-traffic/busiest-period").url.params
        self.assertEqual(params["period"], "2024")
        self.assertEqual(params["direction"], "ARRIVING")

    def test_default_period_is_last_year(self):
        self.assertEqual(default_period(date(2026, 3, 1)), "2025")


if __name__ == "__main__":
    unittest.main()
