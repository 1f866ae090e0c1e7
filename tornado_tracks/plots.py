"""
Figures for the case-study comparison.

- Log-log scatter of energy dissipation against casualties for one state
- Bubble map of casualties inside the state boundary
"""
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
from matplotlib import pyplot as plt

from .base.geo_utils import project_events
from .logging_config import logger


def state_casualty_events(gdf, state):
    """Events in state with at least one casualty."""
    return gdf[(gdf['st'] == state) & (gdf['cas'] > 0)]


def plot_energy_vs_casualties(gdf, comparison, state, out_path):
    """Scatter energy dissipation against casualties on log-log axes."""
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    events = state_casualty_events(gdf, state)
    event = comparison.event

    fig, ax = plt.subplots(figsize=(8, 6))
    ax.scatter(events['ED'], events['cas'], s=12, alpha=0.5, color="gray")
    ax.scatter([event['ED']], [event['cas']], s=40, color="red")
    ax.annotate(
        comparison.label,
        xy=(event['ED'], event['cas']),
        xytext=(-10, 8),
        textcoords="offset points",
        ha="right",
    )
    ax.set_xscale("log")
    ax.set_yscale("log")
    ax.set_xlabel("Energy dissipation")
    ax.set_ylabel("Casualties (injuries + fatalities)")
    ax.set_title(f"{state} tornadoes with casualties")

    fig.tight_layout()
    fig.savefig(out_path, dpi=150)
    plt.close(fig)

    logger.info(f"  Saved: {out_path}")
    return out_path


def plot_casualty_map(gdf, comparison, states_gdf, state, out_path, state_col='STUSPS'):
    """Bubble map of casualty-producing tornadoes inside one state.

    Args:
        gdf: Enriched events, any CRS
        comparison: CaseStudyComparison for the labelled marker
        states_gdf: State boundary polygons
        state: Two-letter state code
        out_path: PNG output path
        state_col: Column in states_gdf holding the state code
    """
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    boundary = project_events(states_gdf[states_gdf[state_col] == state])
    events = project_events(state_casualty_events(gdf, state))
    # Bubble at the centre of each track (touchdown point for point-only events)
    centers = events.geometry.centroid
    case_center = centers[centers.index == comparison.event.name]

    fig, ax = plt.subplots(figsize=(8, 8))
    boundary.plot(ax=ax, facecolor="none", edgecolor="black")
    ax.scatter(
        centers.x, centers.y,
        s=events['cas'].to_numpy(dtype=float) / 2 + 4,
        alpha=0.4, color="steelblue", edgecolor="none",
    )
    if not case_center.empty:
        x, y = case_center.x.iloc[0], case_center.y.iloc[0]
        ax.scatter([x], [y], s=60, marker="*", color="red")
        ax.annotate(comparison.label, xy=(x, y), xytext=(6, 6), textcoords="offset points")

    ax.set_title(f"{state} tornado casualties")
    ax.set_axis_off()

    fig.tight_layout()
    fig.savefig(out_path, dpi=150)
    plt.close(fig)

    logger.info(f"  Saved: {out_path}")
    return out_path
