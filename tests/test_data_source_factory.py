import unittest

from app.config import Settings
from app.data_sources import (
    GoogleGeocodingClient,
    GooglePlacesClient,
    OpenMeteoClient,
    OpenWeatherClient,
    build_clients,
)
from app.gemini_client import GeminiClient


class TestDataSourceFactory(unittest.TestCase):
    def test_build_clients_wires_every_provider(self):
        settings = Settings(google_maps_api_key="m", gemini_api_key="g", forecast_timezone="UTC")
        clients = build_clients(settings)

        self.assertIsInstance(clients.forecast, OpenMeteoClient)
        self.assertIsInstance(clients.geocoding, GoogleGeocodingClient)
        self.assertIsInstance(clients.places, GooglePlacesClient)
        self.assertIsInstance(clients.city_weather, OpenWeatherClient)
        self.assertIsInstance(clients.translation, GeminiClient)
        self.assertEqual(clients.forecast.build_params(1, 2)["timezone"], "UTC")
        self.assertEqual(clients.geocoding.api_key, "m")
        self.assertEqual(clients.translation.api_key, "g")

    def test_missing_credentials_do_not_block_construction(self):
        clients = build_clients(
            Settings(
                google_maps_api_key=None,
                google_places_api_key=None,
                gemini_api_key=None,
                openweather_api_key=None,
            )
        )
        self.assertIsNone(clients.places.api_key)
        self.assertIsNone(clients.city_weather.api_key)


if __name__ == "__main__":
    unittest.main()
