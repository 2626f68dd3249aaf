"""Lookup domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Union


@dataclass(frozen=True, slots=True)
class DistanceRecord:
    location_id: int
    distance_text: str
    distance_value: float
    duration_text: str
    input_address: str
    resolved_address: str


@dataclass(slots=True)
class BatchSuccess:
    records: List[DistanceRecord]
    skipped: int = 0


@dataclass(slots=True)
class BatchFailure:
    reason: str


BatchResult = Union[BatchSuccess, BatchFailure]


@dataclass(slots=True)
class LookupResult:
    """Everything a single run produces, keyed by zip code in processing order."""

    lookup: dict[str, List[DistanceRecord]] = field(default_factory=dict)
    address_audit: List[DistanceRecord] = field(default_factory=list)
    batches_sent: int = 0
    batches_failed: int = 0
    destinations_skipped: int = 0

    @property
    def regions_processed(self) -> int:
        return len(self.lookup)
