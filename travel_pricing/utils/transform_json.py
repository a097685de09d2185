"""Single-record transform: price one travel booking and reshape it.

The host hands over the raw bytes of one JSON document and gets back either
the enriched document with ``Outcome.SUCCESS`` or the untouched bytes with
``Outcome.FAILURE``.
"""
import json
import logging
from enum import Enum
from math import isfinite

from travel_pricing.utils.compose_cost import compute_cost
from travel_pricing.utils.errors import (
    RecordError,
    ParseError,
    MissingFieldError,
    FieldTypeError,
)

logger = logging.getLogger(__name__)

CONTENT_TYPE = "application/json"

_MISSING = object()


class Outcome(Enum):
    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"


def _reject_constant(name):
    raise ValueError(f"non-standard JSON constant {name}")


def parse(payload: bytes):
    try:
        return json.loads(bytes(payload).decode("utf-8"), parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        raise ParseError("payload is not valid JSON", e) from e


def first_entry(document) -> dict:
    data = document.get("data", _MISSING) if isinstance(document, dict) else _MISSING
    if data is _MISSING:
        raise MissingFieldError("'data' is absent")
    if not isinstance(data, list) or not data:
        raise MissingFieldError("'data' must be a non-empty array")

    entry = data[0]
    if not isinstance(entry, dict):
        raise FieldTypeError(f"'data[0]' must be an object, got {type(entry).__name__}")
    return entry


def get_number(obj: dict, key: str, path: str) -> float:
    value = obj.get(key, _MISSING)
    if value is _MISSING:
        raise MissingFieldError(f"'{path}' is absent")
    # bool is an int subclass, but true/false is not a price
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise FieldTypeError(f"'{path}' must be a number, got {value!r}")
    try:
        number = float(value)
    except OverflowError as e:
        raise FieldTypeError(f"'{path}' does not fit in a double", e) from e
    # literals like 1e400 parse to inf without going through parse_constant
    if not isfinite(number):
        raise FieldTypeError(f"'{path}' must be finite, got {value!r}")
    return number


def get_object(obj: dict, key: str) -> dict:
    value = obj.get(key, _MISSING)
    if value is _MISSING:
        raise MissingFieldError(f"'{key}' is absent")
    if not isinstance(value, dict):
        raise FieldTypeError(f"'{key}' must be an object, got {value!r}")
    return value


def get_confort(entry: dict) -> str:
    confort = entry.get("confort", "")
    if not isinstance(confort, str):
        raise FieldTypeError(f"'confort' must be a string, got {confort!r}")
    return confort


def transform_record(payload: bytes) -> bytes:
    """Price one record or raise a RecordError.

    Unknown fields of the entry and of both property objects are carried over
    unchanged. ``distance`` is in meters and ``prix_travel`` is
    ``distance * prix_base_per_km``, unrounded.
    """
    entry = first_entry(parse(payload))

    prix_base_per_km = get_number(entry, "prix_base_per_km", "prix_base_per_km")
    client = get_object(entry, "properties-client")
    driver = get_object(entry, "properties-driver")
    client_lat = get_number(client, "latitude", "properties-client.latitude")
    client_lon = get_number(client, "longitude", "properties-client.longitude")
    driver_lat = get_number(driver, "latitude", "properties-driver.latitude")
    driver_lon = get_number(driver, "longitude", "properties-driver.longitude")
    confort = get_confort(entry)

    distance, prix_travel = compute_cost(
        client_lat, client_lon, driver_lat, driver_lon, prix_base_per_km
    )

    output = {
        "properties-client": client,
        "distance": distance,
        "properties-driver": driver,
        "prix_base_per_km": prix_base_per_km,
        "confort": confort,
        "prix_travel": prix_travel,
    }
    for key, value in entry.items():
        output.setdefault(key, value)

    return json.dumps({"data": [output]}).encode("utf-8")


def transform(payload: bytes):
    """Return ``(output, Outcome)``; on failure ``output`` is ``payload`` itself."""
    try:
        result = transform_record(payload)
    except RecordError as e:
        logger.warning(f"❌ Record routed to FAILURE: {e}")
        return payload, Outcome.FAILURE

    logger.debug(f"✅ Record priced: {result!r}")
    return result, Outcome.SUCCESS
