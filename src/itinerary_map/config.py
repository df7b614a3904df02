"""Centralized settings for the itinerary-map service and CLI."""
from __future__ import annotations

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings

from itinerary_map.geo.reference import (
    MIN_POINTS_PER_LEG,
    PATH_SPACING_KM,
    ROUND_TRIP_TOLERANCE_DEG,
)


class Settings(BaseSettings):
    model_config = {"env_prefix": "ITINERARY_MAP_"}

    # Route rendering
    path_spacing_km: float = Field(PATH_SPACING_KM, gt=0)
    min_points_per_leg: int = Field(MIN_POINTS_PER_LEG, ge=2)
    round_trip_tolerance_deg: float = Field(ROUND_TRIP_TOLERANCE_DEG, gt=0)  # ~1 km

    # HTTP
    cors_origins: List[str] = ["*"]

    log_level: str = "INFO"


settings = Settings()
