"""Per-batch distance fetching with failure isolation."""

from __future__ import annotations

import logging
from typing import Any, Protocol, Sequence

from ...models.domain import Location
from .models import BatchFailure, BatchResult, BatchSuccess, DistanceRecord

NO_ROUTE_STATUSES = frozenset({"ZERO_RESULTS"})

logger = logging.getLogger(__name__)


class MatrixProvider(Protocol):
    def matrix(self, origin: str, destinations: Sequence[str]) -> dict: ...


class MalformedElementError(ValueError):
    """A single destination element lacks the fields a record needs."""


def _origin_label(payload: dict, origin: str) -> str:
    addresses = payload.get("origin_addresses")
    if isinstance(addresses, list) and addresses and addresses[0]:
        return str(addresses[0])
    return origin


def _elements(payload: dict) -> list[Any]:
    rows = payload.get("rows")
    if not isinstance(rows, list) or not rows:
        return []
    elements = rows[0].get("elements") if isinstance(rows[0], dict) else None
    return elements if isinstance(elements, list) else []


def parse_element(location: Location, element: Any, resolved_address: Any) -> DistanceRecord:
    """Build a record from one matrix element, raising ``MalformedElementError`` on bad shapes."""

    try:
        distance = element["distance"]
        duration = element["duration"]
        distance_text = distance["text"]
        distance_value = distance["value"]
        duration_text = duration["text"]
    except (KeyError, TypeError) as exc:
        raise MalformedElementError(f"missing field {exc}") from exc

    if isinstance(distance_value, bool) or not isinstance(distance_value, (int, float)):
        raise MalformedElementError(f"distance value {distance_value!r} is not numeric")
    if not isinstance(distance_text, str) or not isinstance(duration_text, str):
        raise MalformedElementError("distance or duration text is not a string")
    if not isinstance(resolved_address, str):
        raise MalformedElementError("destination address is missing")

    return DistanceRecord(
        location_id=location.id,
        distance_text=distance_text,
        distance_value=distance_value,
        duration_text=duration_text,
        input_address=location.address,
        resolved_address=resolved_address,
    )


def records_from_matrix(payload: dict, origin: str, batch: Sequence[Location]) -> BatchResult:
    """Turn a successful matrix payload into records, dropping unusable destinations."""

    elements = _elements(payload)
    if not elements:
        logger.info(f"zero results from origin {_origin_label(payload, origin)}")
        return BatchSuccess(records=[], skipped=len(batch))
    if len(elements) != len(batch):
        # Elements can no longer be matched to clinics by position.
        reason = f"expected {len(batch)} matrix elements, got {len(elements)}"
        logger.warning(f"Discarding batch for origin {origin}: {reason}")
        return BatchFailure(reason=reason)

    destination_addresses = payload.get("destination_addresses")
    if not isinstance(destination_addresses, list):
        destination_addresses = []

    records: list[DistanceRecord] = []
    skipped = 0
    for index, location in enumerate(batch):
        element = elements[index]
        status = element.get("status") if isinstance(element, dict) else None
        if status in NO_ROUTE_STATUSES:
            logger.info(
                f"zero results from origin {_origin_label(payload, origin)} to clinic {location.id}"
            )
            skipped += 1
            continue
        if status != "OK":
            logger.warning(f"Skipping clinic {location.id}: element status {status!r}")
            skipped += 1
            continue

        resolved = destination_addresses[index] if index < len(destination_addresses) else None
        try:
            records.append(parse_element(location, element, resolved))
        except MalformedElementError as exc:
            logger.warning(f"Error reading matrix data for clinic {location.id}: {exc}")
            skipped += 1
    return BatchSuccess(records=records, skipped=skipped)


def fetch_batch(provider: MatrixProvider, origin: str, batch: Sequence[Location]) -> BatchResult:
    """Send one request for ``batch``; any request-level failure yields ``BatchFailure``.

    Transport errors, HTTP status errors, undecodable bodies and provider
    ``DistanceMatrixError`` statuses all end here so that a failed batch never
    aborts the region loop.
    """

    destinations = [location.address for location in batch]
    try:
        payload = provider.matrix(origin, destinations)
    except Exception as exc:
        logger.warning(f"Error loading matrix for origin {origin}: {type(exc).__name__}: {exc}")
        return BatchFailure(reason=str(exc))
    return records_from_matrix(payload, origin, batch)
