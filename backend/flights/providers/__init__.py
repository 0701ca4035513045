from functools import lru_cache

from django.conf import settings

from flights.providers.amadeus import AmadeusProvider
from flights.providers.base import ConfigurationError
from flights.providers.serpapi import SerpApiProvider

PROVIDERS = {
    "amadeus": AmadeusProvider,
    "serpapi": SerpApiProvider,
}

ALIASES = {
    "serp-api": "serpapi",
    "google-flights": "serpapi",
    "google_flights": "serpapi",
}


def resolve_provider_name() -> str:
    raw_name = getattr(settings, "FLYBY_PROVIDER", None) or "serpapi"
    provider_name = str(raw_name).strip().lower()
    return ALIASES.get(provider_name, provider_name)


@lru_cache(maxsize=1)
def get_flight_provider():
    """Return the configured flight provider instance.

    Built once per process so the Amadeus token cache is shared across
    requests. Call ``get_flight_provider.cache_clear()`` after changing
    settings.
    """

    provider_name = resolve_provider_name()
    provider_cls = PROVIDERS.get(provider_name)
    if provider_cls is None:
        raise ConfigurationError(
            f"Unknown provider '{provider_name}'",
            details=f"Set FLYBY_PROVIDER to one of: {', '.join(sorted(PROVIDERS))}",
        )
    return provider_cls()
