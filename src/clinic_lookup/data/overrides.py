"""Alternate origins for zip codes whose internal point the maps API cannot resolve."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from ..config import settings

logger = logging.getLogger(__name__)

ALTERNATE_ORIGINS: dict[str, str] = {
    "59020": "Cooke City, MT 59020",
    "59028": "1049 Nye Rd, Fishtail, MT 59028",
    "59039": "403 1st Ave, Ingomar, MT 59039",
    "59061": "1982 Nye Rd, Nye, MT 59061",
    "59068": "6380 US-212, Red Lodge, MT 59068",
    "59311": "13681 US-212, Alzada, MT 59311",
    "59631": "Boulder River Rd, Basin, MT 59631",
    "59639": "4388 Snow Drift Ln, Lincoln, MT 59639",
    "59711": "50 Theater Ln, Anaconda, MT 59711",
    "59716": "47995 Gallatin Road Suite 101 Gallatin Gateway, Big Sky, MT 59716",
    "59762": "Wise River, MT 59762",
}


def load_origin_overrides(source: Path | None = None) -> dict[str, str]:
    """Return the built-in overrides, updated with entries from an optional JSON file."""

    overrides = dict(ALTERNATE_ORIGINS)
    path = source or settings.origin_overrides_file
    if path is None:
        return overrides
    if not path.exists():
        raise FileNotFoundError(f"Origin override file not found: {path}")

    with path.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"Origin override file '{path}' must contain a JSON object.")

    for code, address in payload.items():
        if not isinstance(address, str) or not address.strip():
            raise ValueError(f"Origin override for zip code '{code}' must be a non-empty string.")
        overrides[str(code)] = address
    logger.info(f"Loaded {len(payload)} origin overrides from {path}")
    return overrides
