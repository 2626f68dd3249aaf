"""Utilities to serialize lookup results into JSON documents."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import Location
from ..lookup.models import DistanceRecord, LookupResult


def locations_to_json(locations: Sequence[Location]) -> list[dict]:
    return [location.to_record() for location in locations]


def region_lookup_to_json(records: Sequence[DistanceRecord]) -> list[dict]:
    return [{"id": record.location_id, "distance": record.distance_text} for record in records]


def combined_lookup_to_json(result: LookupResult) -> dict[str, list[dict]]:
    return {code: region_lookup_to_json(records) for code, records in result.lookup.items()}


def address_audit_to_json(records: Sequence[DistanceRecord]) -> list[dict]:
    return [
        {
            "id": record.location_id,
            "inputAddress": record.input_address,
            "parsedAddress": record.resolved_address,
        }
        for record in records
    ]
