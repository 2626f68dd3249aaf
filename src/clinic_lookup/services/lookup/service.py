"""Lookup orchestration service.

Zip codes are processed one at a time and each batch request is completed
before the next one is sent, which keeps the run under the provider's
request-rate ceiling.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping, Sequence

from ...models.domain import Location, Region
from ...persistence.filesystem import FileStorage
from ..outputs.formatter import (
    address_audit_to_json,
    combined_lookup_to_json,
    locations_to_json,
    region_lookup_to_json,
)
from .batching import make_batches
from .fetcher import MatrixProvider, fetch_batch
from .models import BatchFailure, BatchResult, BatchSuccess, DistanceRecord, LookupResult
from .origin import resolve_origin
from .ranking import build_address_audit, rank_region

logger = logging.getLogger(__name__)


def select_regions(regions: Sequence[Region], offset: int = 0, limit: int | None = None) -> list[Region]:
    """Restrict the run to ``regions[offset:limit]`` for partial or resumed runs."""

    start = min(offset, len(regions))
    end = len(regions) if limit is None else min(limit, len(regions))
    return list(regions[start:end])


def distances_for_region(
    region: Region,
    batches: Sequence[Sequence[Location]],
    overrides: Mapping[str, str],
    provider: MatrixProvider,
) -> list[BatchResult]:
    origin = resolve_origin(region, overrides)
    results: list[BatchResult] = []
    for number, batch in enumerate(batches, start=1):
        logger.info(f"...sending batch {number}/{len(batches)} for ({region.code})")
        results.append(fetch_batch(provider, origin, batch))
    return results


def build_lookup(
    regions: Sequence[Region],
    locations: Sequence[Location],
    overrides: Mapping[str, str],
    provider: MatrixProvider,
    *,
    batch_size: int,
) -> LookupResult:
    """Rank every clinic by driving distance for each zip code in ``regions``."""

    batches = make_batches(locations, batch_size)
    result = LookupResult()
    for region in regions:
        logger.info(f"starting {region.code}")
        batch_results = distances_for_region(region, batches, overrides, provider)

        result.batches_sent += len(batch_results)
        for batch_result in batch_results:
            if isinstance(batch_result, BatchFailure):
                result.batches_failed += 1
            elif isinstance(batch_result, BatchSuccess):
                result.destinations_skipped += batch_result.skipped

        ranked: list[DistanceRecord] = rank_region(batch_results)
        result.lookup[region.code] = ranked
        if not result.address_audit and ranked:
            result.address_audit = build_address_audit(ranked)

    logger.info(
        f"Built lookup for {result.regions_processed} zip codes: "
        f"{result.batches_sent} batches sent, {result.batches_failed} failed, "
        f"{result.destinations_skipped} destinations skipped"
    )
    return result


def persist_outputs(storage: FileStorage, locations: Sequence[Location], result: LookupResult) -> list[Path]:
    """Write all output documents. The first failed write propagates and stops the rest."""

    written: list[Path] = []

    storage.write_json(storage.locations_path, locations_to_json(locations))
    written.append(storage.locations_path)

    for code, records in result.lookup.items():
        path = storage.region_lookup_path(code)
        storage.write_json(path, region_lookup_to_json(records))
        written.append(path)

    storage.write_json(storage.address_check_path, address_audit_to_json(result.address_audit))
    written.append(storage.address_check_path)

    storage.write_json(storage.combined_lookup_path, combined_lookup_to_json(result))
    written.append(storage.combined_lookup_path)

    logger.info(f"Wrote {len(written)} files to {storage.root}")
    return written
