"""
Tornado energy dissipation analysis - pipeline entry point.

fetch -> reconcile -> derive -> project/buffer -> case study -> plots

Configuration comes from settings.json and TORNADO_TRACKS_* environment
variables (see settings.py).

Usage:
    python -m tornado_tracks
"""
import sys

from .analysis.case_study import compare_case_study
from .base.constants import UNRATED
from .base.geo_utils import (
    buffer_footprints,
    load_track_shapefile,
    project_events,
    reconcile_geometries,
)
from .base.parquet_utils import save_events
from .converters.convert_spc_tornadoes import enrich_events, summarize_events
from .downloaders.download_spc_tornadoes import (
    acquire_states_shapefile,
    acquire_track_shapefiles,
)
from .errors import ConfigurationError, TornadoTracksError
from .logging_config import configure_logging, logger
from .plots import plot_casualty_map, plot_energy_vs_casualties
from .settings import build_run_context


def load_events(ctx):
    """Acquire both SPC datasets and reconcile them into one frame."""
    with acquire_track_shapefiles(ctx) as (paths_shp, points_shp):
        paths = load_track_shapefile(paths_shp)
        points = load_track_shapefile(points_shp)

    logger.info("Reconciling path and point geometries...")
    return reconcile_geometries(paths, points)


def build_events(ctx):
    """Load, enrich and project the tornado record; add path footprints."""
    events = load_events(ctx)
    imputed = int((events['mag'] == UNRATED).sum())

    events = enrich_events(events)

    logger.info("Projecting and buffering tracks...")
    events = project_events(events)
    events['footprint'] = buffer_footprints(events)

    summarize_events(events, imputed_count=imputed)
    return events


def run(ctx):
    """Run the full analysis for one RunContext; returns the comparison."""
    events = build_events(ctx)
    comparison = compare_case_study(events, ctx)

    save_events(events, ctx.events_parquet)

    logger.info("Drawing figures...")
    plot_energy_vs_casualties(events, comparison, ctx.case_state, ctx.scatter_png)
    with acquire_states_shapefile(ctx) as states_shp:
        states = load_track_shapefile(states_shp, columns=['STUSPS', 'NAME', 'geometry'])
    plot_casualty_map(events, comparison, states, ctx.case_state, ctx.map_png)

    return comparison


def main():
    configure_logging()
    try:
        ctx = build_run_context()
    except ConfigurationError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1
    configure_logging(ctx.log_dir)

    logger.info("=" * 60)
    logger.info("Tornado Energy Dissipation Analysis")
    logger.info("=" * 60)
    logger.info(f"Output: {ctx.output_dir}")

    try:
        run(ctx)
    except TornadoTracksError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1

    logger.info("=" * 60)
    logger.info("COMPLETE!")
    logger.info("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
