"""Batch entry point: build the clinic zip code lookup and write it to disk."""

from __future__ import annotations

import logging
import sys

from .config import ConfigurationError, Settings, settings
from .data.locations_repository import load_locations
from .data.overrides import load_origin_overrides
from .data.regions_repository import load_regions
from .persistence.filesystem import FileStorage
from .services.lookup.distance_matrix_client import DistanceMatrixClient
from .services.lookup.service import build_lookup, persist_outputs, select_regions

logger = logging.getLogger(__name__)


def run(config: Settings | None = None) -> int:
    """Load inputs once, build the lookup sequentially and persist every output file."""

    cfg = config or settings
    provider = DistanceMatrixClient(
        api_key=cfg.require_api_key(),
        base_url=cfg.distance_matrix_url,
        units=cfg.units,
        mode=cfg.travel_mode,
        timeout=cfg.request_timeout_seconds,
    )

    locations = load_locations(cfg.clinics_url, cfg.clinic_address_field)
    regions = load_regions(cfg.zip_boundaries_file, cfg.region_code_prefix)
    overrides = load_origin_overrides(cfg.origin_overrides_file)
    selected = select_regions(regions, cfg.region_offset, cfg.region_limit)
    logger.info(
        f"Building lookup for {len(selected)} of {len(regions)} zip codes "
        f"and {len(locations)} clinics (batch size {cfg.batch_size})"
    )

    result = build_lookup(selected, locations, overrides, provider, batch_size=cfg.batch_size)
    persist_outputs(FileStorage(root=cfg.output_root), locations, result)
    return result.regions_processed


def main() -> int:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        run()
    except ConfigurationError as exc:
        logger.error(str(exc))
        return 1
    except Exception:
        logger.exception("Lookup build failed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
