"""Flatten raw provider documents into the shared flight record shape.

Both mappings emit dicts with the same keys::

    id, airline, airlineName, flightNumber, departureIATA, arrivalIATA,
    departureTime, arrivalTime, price

Missing upstream fields degrade to "" or None; nothing here raises on a
malformed document.
"""

# Display names used when the provider has no carrier dictionary entry.
AIRLINE_NAMES = {
    "NK": "Spirit Airlines",
    "F9": "Frontier Airlines",
    "DL": "Delta Air Lines",
    "AA": "American Airlines",
    "UA": "United Airlines",
    "WN": "Southwest Airlines",
    "AS": "Alaska Airlines",
    "B6": "JetBlue",
    "SY": "Sun Country Airlines",
}


def _as_dict(value) -> dict:
    return value if isinstance(value, dict) else {}


def _as_list(value) -> list:
    return value if isinstance(value, list) else []


def _as_str(value) -> str:
    if value is None:
        return ""
    return str(value)


def _format_price(currency: str, amount) -> str | None:
    if not amount:
        return None
    if isinstance(amount, float) and amount.is_integer():
        amount = int(amount)
    return f"{currency} {amount}"


def _flight_number(carrier: str, number: str) -> str:
    if carrier and number:
        return f"{carrier}{number}"
    return number or ""


def _synthetic_id(carrier, number, dep_code, arr_code, idx) -> str:
    return f"{carrier}_{number}_{dep_code}_{arr_code}_{idx}"


def apply_filters(records, max_results=None, include_airlines=None):
    """Drop records outside the airline allow-list, then cap the count."""
    allowed = {code.strip().upper() for code in (include_airlines or ()) if code and code.strip()}
    if allowed:
        records = [r for r in records if (r.get("airline") or "").upper() in allowed]
    else:
        records = list(records)

    if isinstance(max_results, int) and max_results > 0:
        records = records[:max_results]
    return records


def _map_amadeus_offer(offer: dict, idx: int, carriers: dict, currency: str) -> dict:
    itineraries = _as_list(offer.get("itineraries"))
    # Only the first itinerary is represented; return legs are dropped.
    segments = _as_list(_as_dict(itineraries[0] if itineraries else None).get("segments"))
    first = _as_dict(segments[0] if segments else None)
    last = _as_dict(segments[-1] if segments else None)
    dep = _as_dict(first.get("departure"))
    arr = _as_dict(last.get("arrival"))

    validating = _as_list(offer.get("validatingAirlineCodes"))
    carrier = _as_str(first.get("carrierCode") or (validating[0] if validating else "")).upper()
    number = _as_str(first.get("number"))
    airline_name = carriers.get(carrier) or AIRLINE_NAMES.get(carrier) or carrier

    dep_code = _as_str(dep.get("iataCode"))
    arr_code = _as_str(arr.get("iataCode"))

    return {
        "id": _as_str(offer.get("id")) or _synthetic_id(carrier, number, dep_code, arr_code, idx),
        "airline": carrier,
        "airlineName": airline_name,
        "flightNumber": _flight_number(carrier, number),
        "departureIATA": dep_code,
        "arrivalIATA": arr_code,
        "departureTime": dep.get("at") or None,
        "arrivalTime": arr.get("at") or None,
        "price": _format_price(currency, _as_dict(offer.get("price")).get("total")),
    }


def normalize_amadeus_offers(raw, currency, max_results=None, include_airlines=None):
    root = _as_dict(raw)
    carriers = _as_dict(_as_dict(root.get("dictionaries")).get("carriers"))
    currency = (currency or "").upper()

    records = [
        _map_amadeus_offer(offer, idx, carriers, currency)
        for idx, offer in enumerate(o for o in _as_list(root.get("data")) if isinstance(o, dict))
    ]
    return apply_filters(records, max_results, include_airlines)


def _map_serpapi_result(result: dict, idx: int, currency: str) -> dict:
    segments = _as_list(result.get("flights"))
    first = _as_dict(segments[0] if segments else None)
    last = _as_dict(segments[-1] if segments else None) or first
    dep_airport = _as_dict(first.get("departure_airport"))
    arr_airport = _as_dict(last.get("arrival_airport"))

    carrier = _as_str(first.get("airline")).upper()
    number = _as_str(first.get("flight_number"))
    dep_code = _as_str(dep_airport.get("id"))
    arr_code = _as_str(arr_airport.get("id"))

    return {
        "id": _as_str(result.get("booking_token")) or _synthetic_id(carrier, number, dep_code, arr_code, idx),
        "airline": carrier,
        "airlineName": AIRLINE_NAMES.get(carrier) or carrier,
        "flightNumber": _flight_number(carrier, number),
        "departureIATA": dep_code,
        "arrivalIATA": arr_code,
        "departureTime": dep_airport.get("time") or None,
        "arrivalTime": arr_airport.get("time") or None,
        "price": _format_price(currency, result.get("price")),
    }


def normalize_serpapi_results(raw, currency, max_results=None, include_airlines=None):
    root = _as_dict(raw)
    # best_flights always precede other_flights.
    candidates = [
        r
        for r in _as_list(root.get("best_flights")) + _as_list(root.get("other_flights"))
        if isinstance(r, dict)
    ]
    currency = (currency or "").upper()

    records = [_map_serpapi_result(result, idx, currency) for idx, result in enumerate(candidates)]
    return apply_filters(records, max_results, include_airlines)
