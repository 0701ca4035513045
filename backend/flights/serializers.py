from django.conf import settings
from rest_framework import serializers
from rest_framework.fields import SkipField, empty

from flights.providers.base import SearchQuery

DEFAULT_MAX_RESULTS = 20
MAX_RESULTS_CEILING = 50


class OptionalQueryField(serializers.CharField):
    """Query parameter that is dropped, not rejected, when malformed."""

    def __init__(self, **kwargs):
        kwargs.setdefault("required", False)
        kwargs.setdefault("allow_blank", True)
        kwargs.setdefault("allow_null", True)
        super().__init__(**kwargs)

    def run_validation(self, data=empty):
        try:
            return super().run_validation(data)
        except serializers.ValidationError:
            raise SkipField()


class FlightSearchSerializer(serializers.Serializer):
    origin = serializers.CharField()
    destination = serializers.CharField()
    date = serializers.CharField()

    # Invalid values fall back to defaults.
    returnDate = OptionalQueryField()
    currency = OptionalQueryField()
    max = OptionalQueryField()
    include = OptionalQueryField()

    def validate_max(self, value):
        try:
            max_results = int(value) if value not in (None, "") else DEFAULT_MAX_RESULTS
        except (TypeError, ValueError):
            max_results = DEFAULT_MAX_RESULTS
        if max_results < 1:
            max_results = DEFAULT_MAX_RESULTS
        return min(max_results, MAX_RESULTS_CEILING)

    def validate_include(self, value):
        # Accept "DL,UA" or " dl , ua ,"; keep first-seen order.
        codes = []
        for part in (value or "").split(","):
            code = part.strip().upper()
            if code and code not in codes:
                codes.append(code)
        return tuple(codes)

    def validate(self, attrs):
        attrs["origin"] = attrs["origin"].strip().upper()
        attrs["destination"] = attrs["destination"].strip().upper()
        attrs["date"] = attrs["date"].strip()

        currency = (attrs.get("currency") or "").strip().upper()
        attrs["currency"] = currency or (getattr(settings, "DEFAULT_CURRENCY", None) or "USD").upper()

        attrs["returnDate"] = (attrs.get("returnDate") or "").strip() or None
        attrs.setdefault("max", DEFAULT_MAX_RESULTS)
        attrs.setdefault("include", ())
        return attrs

    def to_query(self) -> SearchQuery:
        data = self.validated_data
        return SearchQuery(
            origin=data["origin"],
            destination=data["destination"],
            date=data["date"],
            return_date=data["returnDate"],
            currency=data["currency"],
            max_results=data["max"],
            include_airlines=data["include"],
        )
