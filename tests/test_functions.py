import base64
import json
import unittest

from app import functions
from app.config import Settings
from app.data_sources import UpstreamClients
from app.handlers import ProxyHandlers


class _Translation:
    def __init__(self):
        self.prompts = []

    def generate(self, prompt):
        self.prompts.append(prompt)
        return "Arigatou"


class _NanForecast:
    def fetch_forecast(self, latitude, longitude):
        return {
            "current_weather": {"temperature": 14.0, "weathercode": 1},
            "hourly": {
                "time": ["2025-04-02T07:00", "2025-04-02T08:00"],
                "temperature_2m": [12.0, float("nan")],
                "weathercode": [1, 2],
            },
            "daily": {"temperature_2m_max": [18.0], "temperature_2m_min": [9.0]},
        }


class _Geocoding:
    def locality_name(self, latitude, longitude):
        return "Tokyo"


class TestEventToRequest(unittest.TestCase):
    def test_v1_event(self):
        req = functions.event_to_request({"httpMethod": "POST", "body": '{"prompt": "x"}'})
        self.assertEqual(req.method, "POST")
        self.assertEqual(req.body, '{"prompt": "x"}')

    def test_v2_event(self):
        req = functions.event_to_request({"requestContext": {"http": {"method": "PUT"}}, "body": None})
        self.assertEqual(req.method, "PUT")
        self.assertIsNone(req.body)

    def test_base64_body(self):
        encoded = base64.b64encode(b'{"city": "Kobe"}').decode()
        req = functions.event_to_request({"httpMethod": "POST", "body": encoded, "isBase64Encoded": True})
        self.assertEqual(req.body, '{"city": "Kobe"}')

    def test_missing_event_defaults_to_get(self):
        req = functions.event_to_request(None)
        self.assertEqual(req.method, "GET")
        self.assertIsNone(req.body)


class TestServerlessFunctions(unittest.TestCase):
    def setUp(self):
        self._orig_handlers = functions._handlers
        self.translation = _Translation()
        settings = Settings(gemini_api_key="gemini-key", google_maps_api_key="maps-key")
        functions._handlers = ProxyHandlers(
            settings,
            clients=UpstreamClients(
                forecast=None,
                geocoding=None,
                places=None,
                city_weather=None,
                translation=self.translation,
            ),
        )

    def tearDown(self):
        functions._handlers = self._orig_handlers

    def test_translate_event_roundtrip(self):
        out = functions.translate({"httpMethod": "POST", "body": '{"prompt": "Thank you in Japanese"}'}, None)
        self.assertEqual(out["statusCode"], 200)
        self.assertEqual(out["headers"]["Content-Type"], "application/json")
        self.assertEqual(json.loads(out["body"]), {"translation": "Arigatou"})
        self.assertEqual(self.translation.prompts, ["Thank you in Japanese"])

    def test_get_on_post_function_is_405(self):
        out = functions.translate({"httpMethod": "GET"}, None)
        self.assertEqual(out["statusCode"], 405)
        self.assertEqual(json.loads(out["body"]), {"message": "Method Not Allowed. Use POST."})

    def test_maps_key_function(self):
        out = functions.get_google_maps_api_key({"httpMethod": "GET"}, None)
        self.assertEqual(out["statusCode"], 200)
        self.assertEqual(json.loads(out["body"]), {"apiKey": "maps-key"})

    def test_weather_validation_error_is_serialized(self):
        out = functions.get_weather({"httpMethod": "POST", "body": "{}"}, None)
        self.assertEqual(out["statusCode"], 400)
        self.assertEqual(json.loads(out["body"])["message"], 'Missing "latitude" and "longitude" in request body.')

    def test_extended_weather_body_is_strict_json_with_nan_mean(self):
        def _reject_constant(name):
            raise ValueError(f"non-standard JSON constant {name}")

        functions._handlers = ProxyHandlers(
            Settings(),
            clients=UpstreamClients(
                forecast=_NanForecast(),
                geocoding=_Geocoding(),
                places=None,
                city_weather=None,
                translation=self.translation,
            ),
        )
        out = functions.get_extended_weather(
            {"httpMethod": "POST", "body": '{"latitude": 35.68, "longitude": 139.76}'}, None
        )
        self.assertEqual(out["statusCode"], 200)
        body = json.loads(out["body"], parse_constant=_reject_constant)
        self.assertEqual(body["locationName"], "Tokyo")
        self.assertIsNone(body["morning"]["temperature"])
        self.assertEqual(body["morning"]["weathercode"], 1)

    def test_get_handlers_builds_once(self):
        functions._handlers = None
        first = functions.get_handlers()
        self.assertIs(first, functions.get_handlers())


if __name__ == "__main__":
    unittest.main()
