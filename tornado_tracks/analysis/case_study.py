"""
Isolate one historical tornado and rank it against the full record.
"""
from dataclasses import dataclass
from datetime import date

import pandas as pd

from ..errors import DataIntegrityError
from ..logging_config import logger


@dataclass(frozen=True)
class CaseStudyComparison:
    label: str
    event: pd.Series
    energy_upper_tail_pct: float
    casualty_upper_tail_pct: float
    total_events: int

    @property
    def energy_dissipation(self) -> float:
        return float(self.event['ED'])

    @property
    def casualties(self) -> int:
        return int(self.event['cas'])

    @property
    def energy_percentile(self) -> float:
        """Share of the record below the event's ED, in percent."""
        return 100.0 - self.energy_upper_tail_pct

    @property
    def casualty_percentile(self) -> float:
        return 100.0 - self.casualty_upper_tail_pct


def upper_tail_percentage(values, threshold) -> float:
    """Percentage of values at or above threshold."""
    values = pd.Series(values)
    if values.empty:
        raise DataIntegrityError("Cannot rank against an empty record")
    return float((values >= threshold).sum() / len(values) * 100)


def event_dates(gdf) -> pd.Series:
    """Calendar date of each event, from its timestamp when present."""
    if 'timestamp' in gdf.columns:
        return gdf['timestamp'].dt.date
    return pd.to_datetime(gdf['date']).dt.date


def select_event(gdf, state: str, magnitude: int, event_date: date) -> pd.Series:
    """Return the single event matching state, rating and date.

    Raises:
        DataIntegrityError: zero or several events match
    """
    mask = (
        (gdf['st'] == state)
        & (gdf['mag'] == magnitude)
        & (event_dates(gdf) == event_date)
    )
    matches = gdf[mask]

    if len(matches) != 1:
        raise DataIntegrityError(
            f"Expected exactly one {state} rating-{magnitude} tornado on "
            f"{event_date.isoformat()}, found {len(matches)}"
        )
    return matches.iloc[0]


def compare_case_study(gdf, ctx) -> CaseStudyComparison:
    """Select the run's case-study event and rank it on ED and casualties."""
    event = select_event(gdf, ctx.case_state, ctx.case_magnitude, ctx.case_date)

    comparison = CaseStudyComparison(
        label=ctx.case_label,
        event=event,
        energy_upper_tail_pct=upper_tail_percentage(gdf['ED'], event['ED']),
        casualty_upper_tail_pct=upper_tail_percentage(gdf['cas'], event['cas']),
        total_events=len(gdf),
    )

    logger.info(f"Case study: {comparison.label} ({ctx.case_state}, {ctx.case_date.isoformat()})")
    logger.info(f"  Energy dissipation: {comparison.energy_dissipation:.3e}")
    logger.info(
        f"  {comparison.energy_upper_tail_pct:.2f}% of {comparison.total_events:,} "
        f"tornadoes dissipated at least as much energy ({comparison.energy_percentile:.2f}th percentile)"
    )
    logger.info(f"  Casualties: {comparison.casualties:,}")
    logger.info(
        f"  {comparison.casualty_upper_tail_pct:.2f}% of tornadoes caused at least as many casualties"
    )
    return comparison
