import json
import unittest

from amadeus_mcp.tools.base import OrchestrationResult
from amadeus_mcp.tools.formatting import (
    format_result,
    render_cars,
    render_destinations,
    render_flights,
    render_hotels,
    render_locations,
    render_pois,
)

NONSTOP = {
    "id": "1",
    "itineraries": [{
        "duration": "PT5H",
        "segments": [{"carrierCode": "AA", "number": "100",
                      "departure": {"iataCode": "JFK"}, "arrival": {"iataCode": "LAX"}}],
    }],
    "price": {"total": "199", "currency": "USD"},
}

ONE_STOP = {
    "id": "2",
    "itineraries": [{
        "duration": "PT8H10M",
        "segments": [
            {"carrierCode": "UA", "number": "20", "departure": {"iataCode": "JFK"}, "arrival": {"iataCode": "ORD"}},
            {"carrierCode": "UA", "number": "21", "departure": {"iataCode": "ORD"}, "arrival": {"iataCode": "LAX"}},
        ],
    }],
    "price": {"total": "150.50", "currency": "USD"},
}


class TestSearchSummaries(unittest.TestCase):
    def test_flights(self):
        result = OrchestrationResult(data=[NONSTOP, ONE_STOP], message="Found 2 flights from NYC to LAX")
        self.assertEqual(
            render_flights(result),
            "Found 2 flights from NYC to LAX:\n\n"
            "✈️ AA100 - JFK → LAX\n   💰 199 USD | ⏱️ PT5H | 🛑 0 stops\n\n"
            "✈️ UA20 - JFK → LAX\n   💰 150.50 USD | ⏱️ PT8H10M | 🛑 1 stops",
        )

    def test_no_results(self):
        result = OrchestrationResult(data=[], message="Found 0 flights from NYC to LAX")
        self.assertEqual(render_flights(result), "Found 0 flights from NYC to LAX.")

    def test_destinations(self):
        result = OrchestrationResult(
            data=[
                {"destination": "MAD", "departureDate": "2025-12-15", "returnDate": "2025-12-20",
                 "price": {"total": "89.00", "currency": "EUR"}},
                {"destination": "LIS", "departureDate": "2025-12-16"},
            ],
            message="Found 2 destinations from PAR",
        )
        self.assertEqual(
            render_destinations(result),
            "Found 2 destinations from PAR:\n\n"
            "🌍 MAD | 📅 2025-12-15 - 2025-12-20 | 💰 89.00 EUR\n"
            "🌍 LIS | 📅 2025-12-16",
        )

    def test_hotels_from_offers_and_listings(self):
        result = OrchestrationResult(
            data=[
                {"hotel": {"name": "Le Grand", "rating": "5", "address": {"cityName": "PARIS", "countryCode": "FR"}}},
                {"name": "PARIS HOTEL", "iataCode": "PAR"},
            ],
            message="Found 2 hotels in PAR",
        )
        text = render_hotels(result)
        self.assertIn("🏨 Le Grand (5⭐)\n   📍 PARIS, FR", text)
        self.assertIn("🏨 PARIS HOTEL (N/A⭐)\n   📍 Unknown City, N/A", text)

    def test_airports_and_cities(self):
        airports = OrchestrationResult(
            data=[{"subType": "AIRPORT", "iataCode": "CDG", "name": "CHARLES DE GAULLE",
                   "address": {"cityName": "PARIS", "countryName": "FRANCE"}}],
            message='Found 1 airports for "Paris"',
        )
        self.assertEqual(
            render_locations(airports),
            'Found 1 airports for "Paris":\n\n✈️ CDG - CHARLES DE GAULLE\n   📍 PARIS, FRANCE',
        )

        cities = OrchestrationResult(
            data=[{"subType": "city", "iataCode": "PAR", "name": "Paris",
                   "address": {"countryCode": "FR", "stateCode": "FR-75"}}],
            message='Found 1 cities for "Paris"',
        )
        self.assertIn("🏙️ PAR - Paris\n   📍 FR, FR-75", render_locations(cities))

    def test_points_of_interest(self):
        result = OrchestrationResult(
            data=[
                {"name": "Louvre", "category": "SIGHTS",
                 "address": {"streetNumber": "99", "streetName": "Rue de Rivoli", "cityName": "Paris"},
                 "distance": 1.2},
                {"name": "Le Bistro", "category": "RESTAURANT"},
            ],
            message="Found 2 points of interest in PAR",
        )
        text = render_pois(result)
        self.assertIn("🎯 Louvre (SIGHTS)\n   📍 99 Rue de Rivoli, Paris\n   📏 1.2km away", text)
        self.assertTrue(text.endswith("🎯 Le Bistro (RESTAURANT)"))

    def test_cars(self):
        result = OrchestrationResult(
            data=[
                {"company": "Blacklane", "model": "Mercedes E-Class", "type": "BU", "price": "850.00", "currency": "EUR"},
                {"company": "Unknown Company", "model": "Unknown Model", "type": "Unknown Type",
                 "price": None, "currency": None},
            ],
            message="Found 2 car rental options in CDG",
        )
        self.assertEqual(
            render_cars(result),
            "Found 2 car rental options in CDG:\n\n"
            "🚗 Blacklane - Mercedes E-Class (BU)\n   💰 850.00 EUR\n\n"
            "🚗 Unknown Company - Unknown Model (Unknown Type)\n   💰 Price not available",
        )

    def test_mock_results_stay_json(self):
        result = OrchestrationResult(data=[{"method": "search_flights", "message": "Mock data"}], count=1,
                                     meta={"mock": True})
        content = format_result(result, render_flights).content[0]["text"]
        self.assertEqual(json.loads(content)["data"][0]["method"], "search_flights")


if __name__ == "__main__":
    unittest.main()
