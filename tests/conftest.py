"""Canonical test fixtures used across the pipeline tests.

Fixture record: six tornadoes shaped like SPC shapefile rows.
- Xenia, OH 1974 F5 (the case study)
- OH 1974 unrated, exactly 5 miles long, zero width
- KS 1999 F3
- TX 2005 unrated, 5.0001 miles, no path geometry
- OH 1990 F1 with zero length
- AL 2011 EF4
"""

from datetime import date
from pathlib import Path

import geopandas as gpd
import pytest
from shapely.geometry import LineString, Point, box

from tornado_tracks.base.geo_utils import reconcile_geometries
from tornado_tracks.settings import RunContext


RAW_RECORDS = [
    # om, yr, mo, dy, date, time, st, mag, inj, fat, len, wid
    (118, 1974, 4, 3, "1974-04-03", "16:30:00", "OH", 5, 1150, 32, 31.7, 533),
    (119, 1974, 4, 3, "1974-04-03", "17:05:00", "OH", -9, 0, 0, 5.0, 0),
    (201, 1999, 5, 3, "1999-05-03", "18:23:00", "KS", 3, 5, 0, 10.0, 800),
    (302, 2005, 6, 9, "2005-06-09", "09:15:00", "TX", -9, 0, 0, 5.0001, 100),
    (44, 1990, 6, 2, "1990-06-02", "14:00:00", "OH", 1, 2, 0, 0.0, 50),
    (510, 2011, 4, 27, "2011-04-27", "17:10:00", "AL", 4, 100, 10, 20.0, 1000),
]

COLUMNS = ["om", "yr", "mo", "dy", "date", "time", "st", "mag", "inj", "fat", "len", "wid"]

PATHS = [
    LineString([(-83.97, 39.63), (-83.80, 39.72)]),
    LineString([(-84.20, 39.90), (-84.15, 39.93)]),
    LineString([(-97.60, 37.60), (-97.40, 37.70)]),
    None,
    LineString([(-82.90, 40.00), (-82.90, 40.00001)]),
    LineString([(-87.60, 33.10), (-87.20, 33.30)]),
]

POINTS = [
    Point(-83.97, 39.63),
    Point(-84.20, 39.90),
    Point(-97.60, 37.60),
    Point(-101.80, 35.20),
    Point(-82.90, 40.00),
    Point(-87.60, 33.10),
]


def _frame(geometries):
    rows = [dict(zip(COLUMNS, rec)) for rec in RAW_RECORDS]
    return gpd.GeoDataFrame(rows, geometry=geometries, crs="EPSG:4326")


@pytest.fixture
def raw_paths() -> gpd.GeoDataFrame:
    """Path shapefile rows; the TX tornado has no track."""
    return _frame(PATHS)


@pytest.fixture
def raw_points() -> gpd.GeoDataFrame:
    """Touchdown point rows in the same order as raw_paths."""
    return _frame(POINTS)


@pytest.fixture
def reconciled(raw_paths, raw_points) -> gpd.GeoDataFrame:
    return reconcile_geometries(raw_paths, raw_points)


@pytest.fixture
def states_gdf() -> gpd.GeoDataFrame:
    """Rough state boxes, enough to draw a boundary."""
    return gpd.GeoDataFrame(
        {"STUSPS": ["OH", "KS"], "NAME": ["Ohio", "Kansas"]},
        geometry=[box(-84.82, 38.40, -80.52, 41.98), box(-102.05, 36.99, -94.59, 40.00)],
        crs="EPSG:4326",
    )


@pytest.fixture
def run_context(tmp_path: Path) -> RunContext:
    return RunContext(
        output_dir=tmp_path / "output",
        case_state="OH",
        case_magnitude=5,
        case_date=date(1974, 4, 3),
        case_label="Xenia",
    )
