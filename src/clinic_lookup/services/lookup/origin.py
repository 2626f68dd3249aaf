"""Origin resolution for distance matrix requests."""

from __future__ import annotations

from typing import Mapping

from ...models.domain import Region


def resolve_origin(region: Region, overrides: Mapping[str, str]) -> str:
    """Return the override address for the zip code, or its internal point as ``"lat,lon"``.

    The Census internal point latitude carries a leading ``+`` which is removed.
    Longitude is passed through unchanged; Montana longitudes are negative.
    """

    override = overrides.get(region.code)
    if override:
        return override
    latitude = region.latitude[1:] if region.latitude.startswith("+") else region.latitude
    return f"{latitude},{region.longitude}"
