"""
Shared geospatial utilities for the tornado track pipeline.

Includes:
- Shapefile loading
- Path/point geometry reconciliation
- Projection to Lambert conformal conic
- Width buffering into path footprints
"""
import geopandas as gpd
import pandas as pd

from .constants import ALIGNMENT_COLUMNS, GEOGRAPHIC_CRS, LCC_CRS, SOURCE_COLUMNS
from ..errors import ComputationError, DataIntegrityError
from ..logging_config import logger


# =============================================================================
# Loading
# =============================================================================

def load_track_shapefile(shp_path, columns=SOURCE_COLUMNS):
    """Load an SPC tornado shapefile, keeping the analysis columns.

    Args:
        shp_path: Path to .shp file
        columns: Columns to keep (missing ones are ignored)

    Returns:
        GeoDataFrame in geographic coordinates
    """
    logger.info(f"Loading {shp_path}...")

    gdf = gpd.read_file(shp_path)
    keep = [c for c in columns if c in gdf.columns]
    gdf = gdf[keep].copy()

    if gdf.crs is None:
        gdf = gdf.set_crs(GEOGRAPHIC_CRS)

    logger.info(f"  Loaded {len(gdf):,} records")
    return gdf


# =============================================================================
# Geometry Reconciliation
# =============================================================================

def _is_missing(geoms):
    return geoms.isna() | geoms.is_empty


def check_alignment(paths_gdf, points_gdf, key_columns=ALIGNMENT_COLUMNS):
    """Verify the path and point frames describe the same events in order.

    Raises:
        DataIntegrityError: lengths differ, or a shared key column disagrees
    """
    if len(paths_gdf) != len(points_gdf):
        raise DataIntegrityError(
            f"Path and point datasets differ in length: "
            f"{len(paths_gdf):,} vs {len(points_gdf):,}"
        )

    for col in key_columns:
        if col not in paths_gdf.columns or col not in points_gdf.columns:
            continue
        left = paths_gdf[col].to_numpy()
        right = points_gdf[col].to_numpy()
        mismatched = (left != right).nonzero()[0]
        if len(mismatched) > 0:
            first = mismatched[0]
            raise DataIntegrityError(
                f"Path and point datasets out of order: column '{col}' differs "
                f"at {len(mismatched):,} rows (first at position {first}: "
                f"{left[first]!r} vs {right[first]!r})"
            )


def reconcile_geometries(paths_gdf, points_gdf):
    """Use each event's path geometry, falling back to its touchdown point.

    Rows correspond by position; see check_alignment.

    Returns:
        Copy of paths_gdf with missing or empty geometries filled
    """
    check_alignment(paths_gdf, points_gdf)

    result = paths_gdf.reset_index(drop=True).copy()
    points = points_gdf.geometry.reset_index(drop=True)
    if points_gdf.crs is not None and result.crs is not None and points_gdf.crs != result.crs:
        points = points.to_crs(result.crs)

    missing = _is_missing(result.geometry)
    filled = int(missing.sum())
    if filled:
        result.loc[missing, 'geometry'] = points[missing].values

    still_missing = int(_is_missing(result.geometry).sum())
    if still_missing:
        raise DataIntegrityError(
            f"{still_missing:,} events have neither a path nor a point geometry"
        )

    logger.info(f"  Filled {filled:,} missing paths with touchdown points")
    return result


# =============================================================================
# Projection & Buffering
# =============================================================================

def project_events(gdf, crs=LCC_CRS):
    """Reproject events into the planar analysis projection (metres)."""
    if gdf.crs is None:
        gdf = gdf.set_crs(GEOGRAPHIC_CRS)
    return gdf.to_crs(crs)


def buffer_footprints(gdf, width_col='Width'):
    """Buffer each track by half its width into a polygon footprint.

    Args:
        gdf: Projected GeoDataFrame with a width column in metres
        width_col: Name of the width column

    Returns:
        GeoSeries of footprint polygons, index aligned with gdf

    Raises:
        ComputationError: gdf is not in a projected CRS
    """
    if gdf.crs is None or gdf.crs.is_geographic:
        raise ComputationError(
            "Footprints must be buffered in a projected CRS; call project_events first"
        )

    radius = pd.to_numeric(gdf[width_col]) / 2
    return gdf.geometry.buffer(radius.to_numpy(), cap_style='round')
