from django.urls import path

from flights.views import FlightSearchView, HealthView

urlpatterns = [
    path("", HealthView.as_view(), name="health"),
    path("amadeus/flights", FlightSearchView.as_view(), name="flight-search"),
]
