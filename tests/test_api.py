import unittest

from fastapi.testclient import TestClient

from app.config import Settings
from app.data_sources import UpstreamClients
from app.errors import UpstreamError
from app.handlers import ProxyHandlers
from app.main import app as fastapi_app


class _Forecast:
    def __init__(self):
        self.exc = None
        self.temperatures = [8.0, 4.0]

    def fetch_forecast(self, latitude, longitude):
        if self.exc:
            raise self.exc
        return {
            "current_weather": {"temperature": 9.5, "weathercode": 71},
            "hourly": {
                "time": ["2025-01-20T10:00", "2025-01-20T19:00"],
                "temperature_2m": list(self.temperatures),
                "relativehumidity_2m": [65, 80],
                "windspeed_10m": [11.0, 7.0],
                "weathercode": [71, 73],
            },
            "daily": {"temperature_2m_max": [10.0], "temperature_2m_min": [2.0]},
        }


class _Geocoding:
    def locality_name(self, latitude, longitude):
        return "Sapporo"


class _Places:
    def text_search(self, query, latitude=None, longitude=None):
        return {"results": [{"name": query.title(), "geometry": {"location": {"lat": 1.0, "lng": 2.0}}}]}


class _CityWeather:
    def current_by_city(self, city):
        return {"weather": [{"description": "neve", "icon": "13d"}], "main": {"temp": -1.5, "humidity": 90}}


class _Translation:
    def generate(self, prompt):
        return "Grazie"


class TestApi(unittest.TestCase):
    def setUp(self):
        import app.api as api_mod

        self.api_mod = api_mod
        self._orig_handlers = api_mod.HANDLERS
        self.forecast = _Forecast()
        settings = Settings(
            google_maps_api_key="browser-key",
            google_places_api_key="places-key",
            gemini_api_key="gemini-key",
            openweather_api_key="owm-key",
        )
        api_mod.HANDLERS = ProxyHandlers(
            settings,
            clients=UpstreamClients(
                forecast=self.forecast,
                geocoding=_Geocoding(),
                places=_Places(),
                city_weather=_CityWeather(),
                translation=_Translation(),
            ),
        )
        self.client = TestClient(fastapi_app)

    def tearDown(self):
        self.api_mod.HANDLERS = self._orig_handlers

    def test_maps_key_accepts_get(self):
        resp = self.client.get("/v1/maps-key")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"apiKey": "browser-key"})

    def test_weather(self):
        resp = self.client.post("/v1/weather", json={"latitude": 43.06, "longitude": 141.35})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["description"], "Slight snowfall")
        self.assertTrue(resp.headers["content-type"].startswith("application/json"))

    def test_weather_get_is_405_json(self):
        resp = self.client.get("/v1/weather")
        self.assertEqual(resp.status_code, 405)
        self.assertEqual(resp.json(), {"message": "Method Not Allowed. Use POST."})

    def test_weather_empty_body_is_400(self):
        resp = self.client.post("/v1/weather", content=b"")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"message": 'Missing "latitude" and "longitude" in request body.'})

    def test_extended_weather(self):
        resp = self.client.post("/v1/weather/extended", json={"latitude": 43.06, "longitude": 141.35})
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["locationName"], "Sapporo")
        self.assertEqual(data["morning"]["weathercode"], 71)
        self.assertEqual(data["evening"]["temperature"], 4.0)
        self.assertIsNone(data["afternoon"]["description"])

    def test_extended_weather_nan_mean_is_json_null(self):
        self.forecast.temperatures = [float("nan"), 4.0]
        resp = self.client.post("/v1/weather/extended", json={"latitude": 43.06, "longitude": 141.35})
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.headers["content-type"].startswith("application/json"))
        data = resp.json()
        self.assertIsNone(data["morning"]["temperature"])
        self.assertEqual(data["morning"]["weathercode"], 71)
        self.assertEqual(data["evening"]["temperature"], 4.0)

    def test_upstream_status_is_forwarded(self):
        self.forecast.exc = UpstreamError("Error from Open-Meteo API: down", status_code=502, details="down")
        resp = self.client.post("/v1/weather", json={"latitude": 1, "longitude": 2})
        self.assertEqual(resp.status_code, 502)
        self.assertEqual(resp.json()["message"], "Error from Open-Meteo API: down")

    def test_city_weather(self):
        resp = self.client.post("/v1/weather/city", json={"city": "Sapporo"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["icon"], "13d")

    def test_places_search(self):
        resp = self.client.post("/v1/places/search", json={"query": "ramen alley"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["results"][0]["name"], "Ramen Alley")

    def test_translate(self):
        resp = self.client.post("/v1/translate", json={"prompt": "Thank you"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"translation": "Grazie"})


if __name__ == "__main__":
    unittest.main()
