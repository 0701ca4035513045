import logging

from django.conf import settings
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from flights.providers import get_flight_provider, resolve_provider_name
from flights.providers.base import ProviderError
from flights.serializers import FlightSearchSerializer

logger = logging.getLogger(__name__)

SEARCH_ENDPOINT = "/amadeus/flights"


class HealthView(APIView):
    def get(self, request):
        return Response(
            {
                "ok": True,
                "provider": resolve_provider_name(),
                "endpoint": SEARCH_ENDPOINT,
                "env": {
                    "AMADEUS_CLIENT_ID_present": bool(getattr(settings, "AMADEUS_CLIENT_ID", None)),
                    "AMADEUS_CLIENT_SECRET_present": bool(getattr(settings, "AMADEUS_CLIENT_SECRET", None)),
                    "SERPAPI_KEY_present": bool(getattr(settings, "SERPAPI_KEY", None)),
                },
            }
        )


class FlightSearchView(APIView):
    def get(self, request):
        serializer = FlightSearchSerializer(data=request.query_params)
        if not serializer.is_valid():
            codes = {error.code for errors in serializer.errors.values() for error in errors}
            if codes <= {"required", "blank", "null"}:
                payload = {"error": "Missing origin, destination, or date"}
            else:
                payload = {"error": "Invalid origin, destination, or date", "detail": serializer.errors}
            return Response(payload, status=status.HTTP_400_BAD_REQUEST)

        query = serializer.to_query()

        try:
            provider = get_flight_provider()
            raw = provider.search_flights(query)
            flights = provider.normalize(raw, query)
        except ProviderError as exc:
            logger.warning(
                "Flight search failed: %s",
                exc,
                extra={"status_code": exc.status_code},
            )
            return Response(exc.as_payload(), status=exc.status_code or status.HTTP_502_BAD_GATEWAY)
        except Exception as exc:
            logger.exception("Flight search failed unexpectedly.")
            return Response(
                {"error": "Server error", "detail": str(exc)},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response({"count": len(flights), "flights": flights})
