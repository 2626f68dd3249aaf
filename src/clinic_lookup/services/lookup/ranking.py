"""Combining and ranking of per-batch distance records."""

from __future__ import annotations

from typing import Iterable, Sequence

from .models import BatchResult, BatchSuccess, DistanceRecord


def combine_batches(results: Iterable[BatchResult]) -> list[DistanceRecord]:
    """Concatenate records from successful batches in batch order."""

    combined: list[DistanceRecord] = []
    for result in results:
        if isinstance(result, BatchSuccess):
            combined.extend(result.records)
    return combined


def rank_by_distance(records: Iterable[DistanceRecord]) -> list[DistanceRecord]:
    # sorted() is stable, equal distances keep batch order
    return sorted(records, key=lambda record: record.distance_value)


def rank_region(results: Sequence[BatchResult]) -> list[DistanceRecord]:
    return rank_by_distance(combine_batches(results))


def build_address_audit(records: Iterable[DistanceRecord]) -> list[DistanceRecord]:
    """Order records by clinic id for comparing input and resolved addresses."""

    return sorted(records, key=lambda record: record.location_id)
