"""Coarse maritime region lookup."""
from __future__ import annotations

from typing import Optional, Sequence

from itinerary_map.geo.reference import OTHER_REGION, REGIONS, Region


def classify_region(lat: float, lon: float, regions: Optional[Sequence[Region]] = None) -> str:
    """Name of the first region whose box contains (lat, lon), else ``"other"``."""
    for region in REGIONS if regions is None else regions:
        if region.contains(lat, lon):
            return region.name
    return OTHER_REGION
