import logging

import requests
from django.conf import settings

from flights.providers.base import ConfigurationError, FlightProvider, SearchQuery, UpstreamError
from flights.services.normalize import normalize_serpapi_results

logger = logging.getLogger(__name__)

# SerpApi: Google Flights engine
SERPAPI_SEARCH_URL = "https://serpapi.com/search.json"

TRIP_TYPE_ROUND_TRIP = "1"
TRIP_TYPE_ONE_WAY = "2"


def _response_text(response) -> str:
    try:
        return response.text
    except (requests.RequestException, ValueError):
        return ""


class SerpApiProvider(FlightProvider):
    def __init__(self):
        self.api_key = getattr(settings, "SERPAPI_KEY", None)
        self.gl = getattr(settings, "SERPAPI_GL", None) or "us"
        self.hl = getattr(settings, "SERPAPI_HL", None) or "en"
        self.timeout = getattr(settings, "UPSTREAM_TIMEOUT_SECONDS", None)

    def _build_params(self, query: SearchQuery) -> dict:
        params = {
            "engine": "google_flights",
            "api_key": self.api_key,
            "departure_id": query.origin,
            "arrival_id": query.destination,
            "outbound_date": query.date,
            "adults": 1,
            "currency": query.currency,
            "gl": self.gl,
            "hl": self.hl,
        }
        if query.return_date:
            params["type"] = TRIP_TYPE_ROUND_TRIP
            params["return_date"] = query.return_date
        else:
            params["type"] = TRIP_TYPE_ONE_WAY
        return params

    def search_flights(self, query: SearchQuery) -> dict:
        if not self.api_key:
            raise ConfigurationError(
                "SerpApi key missing",
                details="Set SERPAPI_KEY environment variable or change FLYBY_PROVIDER",
            )

        response = requests.get(SERPAPI_SEARCH_URL, params=self._build_params(query), timeout=self.timeout)
        if not response.ok:
            detail = _response_text(response)
            logger.warning(
                "SerpApi error response",
                extra={"status_code": response.status_code, "details": detail},
            )
            raise UpstreamError(
                "SerpApi returned an error",
                status_code=response.status_code,
                details=detail,
            )
        return response.json()

    def normalize(self, raw: dict, query: SearchQuery) -> list[dict]:
        return normalize_serpapi_results(
            raw,
            query.currency,
            max_results=query.max_results,
            include_airlines=query.include_airlines,
        )
