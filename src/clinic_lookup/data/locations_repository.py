"""Loading of the clinic list and assignment of stable ids."""

from __future__ import annotations

import logging
from typing import Any, Sequence

import httpx

from ..config import settings
from ..models.domain import Location

logger = logging.getLogger(__name__)


def assign_ids(records: Sequence[dict[str, Any]], address_field: str | None = None) -> tuple[Location, ...]:
    """Number clinic records by their position in the source list."""

    field_name = address_field or settings.clinic_address_field
    locations: list[Location] = []
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            raise ValueError(f"Clinic record {index} is not a JSON object.")
        address = record.get(field_name)
        if not isinstance(address, str) or not address.strip():
            raise ValueError(f"Clinic record {index} is missing the '{field_name}' field.")
        locations.append(Location(id=index, address=address, raw=dict(record)))
    return tuple(locations)


def fetch_clinic_records(url: str | None = None, client: httpx.Client | None = None) -> list[dict[str, Any]]:
    """Download the clinic JSON document."""

    source_url = url or settings.clinics_url
    owns_client = client is None
    http = client or httpx.Client(timeout=httpx.Timeout(settings.request_timeout_seconds, connect=10.0))
    try:
        response = http.get(source_url)
        response.raise_for_status()
        data = response.json()
    finally:
        if owns_client:
            http.close()

    if not isinstance(data, list):
        raise ValueError(f"Clinic source at {source_url} did not return a JSON array.")
    logger.info(f"Fetched {len(data)} clinics from {source_url}")
    return data


def load_locations(
    url: str | None = None,
    address_field: str | None = None,
    client: httpx.Client | None = None,
) -> tuple[Location, ...]:
    return assign_ids(fetch_clinic_records(url, client=client), address_field)
