import logging
import time

import requests
from django.conf import settings

from flights.providers.base import (
    AuthenticationError,
    ConfigurationError,
    FlightProvider,
    SearchQuery,
    UpstreamError,
)
from flights.services.normalize import normalize_amadeus_offers

logger = logging.getLogger(__name__)

TOKEN_PATH = "/v1/security/oauth2/token"
FLIGHT_OFFERS_PATH = "/v2/shopping/flight-offers"

# Tokens are refreshed this many seconds before they expire.
TOKEN_EXPIRY_MARGIN = 30


class AmadeusTokenCache:
    """Holds one client-credentials bearer token and its expiry instant.

    Concurrent callers may both refresh an expired token; the last write
    wins and both tokens stay valid.
    """

    def __init__(self, base_url, client_id, client_secret, timeout=None, clock=time.time):
        self.token_url = f"{base_url.rstrip('/')}{TOKEN_PATH}"
        self.client_id = client_id
        self.client_secret = client_secret
        self.timeout = timeout
        self._clock = clock
        self.token: str | None = None
        self.expires_at: float = 0.0

    def is_valid(self) -> bool:
        return bool(self.token) and self._clock() < self.expires_at - TOKEN_EXPIRY_MARGIN

    def get_token(self) -> str:
        if self.is_valid():
            return self.token

        response = requests.post(
            self.token_url,
            data={
                "grant_type": "client_credentials",
                "client_id": self.client_id,
                "client_secret": self.client_secret,
            },
            headers={"Content-Type": "application/x-www-form-urlencoded"},
            timeout=self.timeout,
        )
        if not response.ok:
            logger.warning("Amadeus token request rejected", extra={"status_code": response.status_code})
            raise AuthenticationError(
                "Amadeus authentication failed",
                details=f"Amadeus auth failed {response.status_code}",
            )

        payload = response.json()
        self.token = payload["access_token"]
        self.expires_at = self._clock() + float(payload.get("expires_in") or 0)
        logger.info("Amadeus token refreshed")
        return self.token


class AmadeusProvider(FlightProvider):
    def __init__(self):
        self.base_url = (getattr(settings, "AMADEUS_BASE_URL", None) or "https://api.amadeus.com").rstrip("/")
        self.client_id = getattr(settings, "AMADEUS_CLIENT_ID", None)
        self.client_secret = getattr(settings, "AMADEUS_CLIENT_SECRET", None)
        self.timeout = getattr(settings, "UPSTREAM_TIMEOUT_SECONDS", None)
        self.token_cache = AmadeusTokenCache(
            self.base_url,
            self.client_id,
            self.client_secret,
            timeout=self.timeout,
        )

    def _build_params(self, query: SearchQuery) -> dict:
        params = {
            "originLocationCode": query.origin,
            "destinationLocationCode": query.destination,
            "departureDate": query.date,
            "adults": 1,
            "max": query.max_results,
            "currencyCode": query.currency,
        }
        if query.include_airlines:
            params["includedAirlineCodes"] = ",".join(query.include_airlines)
        return params

    def search_flights(self, query: SearchQuery) -> dict:
        if not self.client_id or not self.client_secret:
            raise ConfigurationError(
                "Amadeus credentials missing",
                details="Set AMADEUS_CLIENT_ID and AMADEUS_CLIENT_SECRET or change FLYBY_PROVIDER",
            )

        if query.return_date:
            # One-way only: flight-offers round trips are not requested here.
            logger.warning(
                "Amadeus search ignores returnDate",
                extra={"returnDate": query.return_date},
            )

        token = self.token_cache.get_token()
        response = requests.get(
            f"{self.base_url}{FLIGHT_OFFERS_PATH}",
            params=self._build_params(query),
            headers={"Authorization": f"Bearer {token}"},
            timeout=self.timeout,
        )
        if not response.ok:
            logger.warning(
                "Amadeus error response",
                extra={"status_code": response.status_code, "details": response.text},
            )
            raise UpstreamError(
                "Amadeus returned an error",
                status_code=response.status_code,
                details=response.text,
            )
        return response.json()

    def normalize(self, raw: dict, query: SearchQuery) -> list[dict]:
        return normalize_amadeus_offers(
            raw,
            query.currency,
            max_results=query.max_results,
            include_airlines=query.include_airlines,
        )
