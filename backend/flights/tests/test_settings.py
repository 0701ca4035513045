import importlib
import os
from unittest.mock import patch

from django.test import SimpleTestCase

from flyby import settings as flyby_settings

BLANK_ENV = {
    "AMADEUS_BASE_URL": "",
    "SERPAPI_GL": "",
    "SERPAPI_HL": "",
    "DEFAULT_CURRENCY": "",
    "LOG_LEVEL": "",
    "PORT": "",
    "FLYBY_PROVIDER": "",
}


class EnvironmentDefaultsTests(SimpleTestCase):
    def setUp(self):
        self.addCleanup(importlib.reload, flyby_settings)

    def test_blank_variables_use_defaults(self):
        with patch.dict(os.environ, BLANK_ENV):
            module = importlib.reload(flyby_settings)

        self.assertEqual(module.AMADEUS_BASE_URL, "https://api.amadeus.com")
        self.assertEqual(module.SERPAPI_GL, "us")
        self.assertEqual(module.SERPAPI_HL, "en")
        self.assertEqual(module.DEFAULT_CURRENCY, "USD")
        self.assertEqual(module.LOG_LEVEL, "INFO")
        self.assertEqual(module.PORT, "3000")
        self.assertEqual(module.FLYBY_PROVIDER, "serpapi")

    def test_values_are_normalized(self):
        with patch.dict(os.environ, {"DEFAULT_CURRENCY": " eur ", "LOG_LEVEL": "debug", "FLYBY_PROVIDER": " Amadeus "}):
            module = importlib.reload(flyby_settings)

        self.assertEqual(module.DEFAULT_CURRENCY, "EUR")
        self.assertEqual(module.LOG_LEVEL, "DEBUG")
        self.assertEqual(module.FLYBY_PROVIDER, "amadeus")
