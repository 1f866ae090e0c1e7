"""
Base utilities for the tornado track pipeline.

This module provides shared functionality:
- constants.py: Source URLs, unit factors, projection, wind speed model
- energy.py: Energy dissipation estimate
- geo_utils.py: Shapefile loading, reconciliation, projection, buffering
- parquet_utils.py: Standardized parquet saving, events schema
"""

from .constants import (
    PATHS_URL,
    POINTS_URL,
    STATES_URL,
    LCC_CRS,
    MILES_TO_METERS,
    YARDS_TO_METERS,
    WIND_SPEED_PROBABILITIES,
    WIND_SPEED_THRESHOLDS,
)

from .energy import (
    midpoint_speeds,
    expected_cubed_speed,
    energy_dissipation,
)

from .geo_utils import (
    load_track_shapefile,
    check_alignment,
    reconcile_geometries,
    project_events,
    buffer_footprints,
)

from .parquet_utils import (
    save_parquet,
    save_events,
    events_schema,
)

__all__ = [
    # Constants
    'PATHS_URL',
    'POINTS_URL',
    'STATES_URL',
    'LCC_CRS',
    'MILES_TO_METERS',
    'YARDS_TO_METERS',
    'WIND_SPEED_PROBABILITIES',
    'WIND_SPEED_THRESHOLDS',

    # Energy
    'midpoint_speeds',
    'expected_cubed_speed',
    'energy_dissipation',

    # Geo utilities
    'load_track_shapefile',
    'check_alignment',
    'reconcile_geometries',
    'project_events',
    'buffer_footprints',

    # Parquet utilities
    'save_parquet',
    'save_events',
    'events_schema',
]
