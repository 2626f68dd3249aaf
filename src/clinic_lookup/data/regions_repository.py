"""Zip code boundary loader.

The boundary file is the Census Bureau ZCTA5 dataset converted to GeoJSON.
Each feature carries the Bureau's internal point for the area, which is used
as the centroid of the zip code.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable

from ..config import settings
from ..models.domain import Region

CODE_PROPERTY = "ZCTA5CE10"
LATITUDE_PROPERTY = "INTPTLAT10"
LONGITUDE_PROPERTY = "INTPTLON10"

logger = logging.getLogger(__name__)


def regions_from_features(features: Iterable[dict[str, Any]], prefix: str | None = None) -> tuple[Region, ...]:
    """Extract zip code and internal point, keeping codes that start with ``prefix``."""

    code_prefix = settings.region_code_prefix if prefix is None else prefix
    regions: list[Region] = []
    for index, feature in enumerate(features):
        properties = feature.get("properties") or {}
        code = properties.get(CODE_PROPERTY)
        lat = properties.get(LATITUDE_PROPERTY)
        lon = properties.get(LONGITUDE_PROPERTY)
        if code is None or lat is None or lon is None or not str(lat).strip() or not str(lon).strip():
            logger.warning(f"Skipping boundary feature {index}: missing zip code or internal point")
            continue
        code = str(code)
        if not code.startswith(code_prefix):
            continue
        regions.append(Region(code=code, latitude=str(lat).strip(), longitude=str(lon).strip()))
    return tuple(regions)


def load_regions(source: Path | None = None, prefix: str | None = None) -> tuple[Region, ...]:
    """Load zip codes from the configured boundary GeoJSON file."""

    path = source or settings.zip_boundaries_file
    if not path.exists():
        raise FileNotFoundError(f"Zip code boundary file not found: {path}")

    with path.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)

    features = payload.get("features") if isinstance(payload, dict) else None
    if not isinstance(features, list):
        raise ValueError(f"Boundary file '{path}' is not a GeoJSON FeatureCollection.")

    regions = regions_from_features(features, prefix)
    logger.info(f"Loaded {len(regions)} zip codes from {path}")
    return regions
