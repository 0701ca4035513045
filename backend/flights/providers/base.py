from dataclasses import dataclass, field


class ProviderError(Exception):
    def __init__(self, message, status_code=502, details=None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details if details is not None else ""

    def as_payload(self):
        return {"error": str(self), "detail": self.details}


class ConfigurationError(ProviderError):
    def __init__(self, message, details=None):
        super().__init__(message, status_code=500, details=details)


class AuthenticationError(ProviderError):
    def __init__(self, message, details=None):
        super().__init__(message, status_code=500, details=details)


class UpstreamError(ProviderError):
    """Non-success response from a provider; mirrors its status code."""


@dataclass(frozen=True)
class SearchQuery:
    origin: str
    destination: str
    date: str
    return_date: str | None = None
    currency: str = "USD"
    max_results: int = 20
    include_airlines: tuple[str, ...] = field(default_factory=tuple)


class FlightProvider:
    def search_flights(self, query: SearchQuery) -> dict:
        """
        Returns the raw provider document.
        """
        raise NotImplementedError

    def normalize(self, raw: dict, query: SearchQuery) -> list[dict]:
        """
        Returns flat flight records for a raw provider document.
        """
        raise NotImplementedError
