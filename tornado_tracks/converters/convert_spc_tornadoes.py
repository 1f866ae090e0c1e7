"""
Clean and enrich SPC tornado records.

Steps, in order:
1. Impute unrated magnitudes from path length
2. Convert length (miles) and width (yards) to metres
3. Replace zero length/width with the dataset-wide minimum positive value
4. Scale widths from 1995 on by pi/4 (mean width -> max width reporting)
5. Path area, casualties, local timestamp
6. Energy dissipation
"""
import numpy as np
import pandas as pd

from ..base.constants import (
    MILES_TO_METERS,
    UNRATED,
    UNRATED_LENGTH_THRESHOLD_MI,
    WIDTH_ERA_FACTOR,
    WIDTH_ERA_YEAR,
    YARDS_TO_METERS,
)
from ..base.energy import energy_dissipation, validate_ratings
from ..errors import ComputationError, DataIntegrityError
from ..logging_config import logger


def require_values(df, columns):
    """Raise DataIntegrityError if any of columns holds a null value."""
    missing = {col: int(df[col].isna().sum()) for col in columns}
    missing = {col: count for col, count in missing.items() if count}
    if missing:
        detail = ", ".join(f"{col}={count:,}" for col, count in missing.items())
        raise DataIntegrityError(f"Null values in required columns: {detail}")


def impute_magnitude(df, threshold_mi=UNRATED_LENGTH_THRESHOLD_MI):
    """Assign unrated (-9) tornadoes rating 0 or 1 by path length.

    Length at or below threshold_mi (original miles) gets 0, longer gets 1.
    Only length is consulted.
    """
    require_values(df, ['mag', 'len'])
    df = df.copy()
    unrated = df['mag'] == UNRATED
    df.loc[unrated, 'mag'] = np.where(df.loc[unrated, 'len'] <= threshold_mi, 0, 1)
    df['mag'] = df['mag'].astype(int)

    validate_ratings(df['mag'])
    logger.info(f"  Imputed rating for {int(unrated.sum()):,} unrated tornadoes")
    return df


def convert_units(df):
    """Add Length and Width columns in metres."""
    df = df.copy()
    df['Length'] = df['len'].astype(float) * MILES_TO_METERS
    df['Width'] = df['wid'].astype(float) * YARDS_TO_METERS
    return df


def replace_zeros_with_min_positive(values, name):
    """Replace non-positive values with the smallest positive value in the series.

    The minimum is taken over the whole series before any replacement.

    Raises:
        ComputationError: no positive value exists
    """
    positive = values[values > 0]
    if positive.empty:
        raise ComputationError(f"No positive {name} values; cannot impute zero {name}")

    min_positive = positive.min()
    zeros = values <= 0
    logger.info(f"  Replaced {int(zeros.sum()):,} zero {name} values with {min_positive:.4f}")
    return values.where(~zeros, min_positive)


def adjust_width_era(df, era_year=WIDTH_ERA_YEAR, factor=WIDTH_ERA_FACTOR):
    """Scale widths of tornadoes from era_year on by factor."""
    df = df.copy()
    later = df['yr'] >= era_year
    df.loc[later, 'Width'] = df.loc[later, 'Width'] * factor
    return df


def build_timestamps(df):
    """Combine year, month, day (from the date field) and time of day.

    The result is naive local time as recorded; no timezone is applied.
    """
    day = df['date'].astype(str).str.slice(8, 10).str.zfill(2)
    text = (
        df['yr'].astype(int).astype(str) + '-'
        + df['mo'].astype(int).astype(str).str.zfill(2) + '-'
        + day + ' '
        + df['time'].astype(str)
    )
    return pd.to_datetime(text, format='%Y-%m-%d %H:%M:%S')


def derive_fields(df):
    """Convert units, impute zeros, adjust width era and add derived columns.

    Expects magnitudes to be imputed already. Null length, width or
    casualty counts are rejected.
    """
    require_values(df, ['len', 'wid', 'inj', 'fat'])
    df = convert_units(df)
    df['Length'] = replace_zeros_with_min_positive(df['Length'], 'length')
    df['Width'] = replace_zeros_with_min_positive(df['Width'], 'width')
    df = adjust_width_era(df)

    df['AreaPath'] = df['Length'] * df['Width']
    df['cas'] = df['inj'].astype(int) + df['fat'].astype(int)
    df['timestamp'] = build_timestamps(df)
    df['ED'] = energy_dissipation(df['mag'], df['AreaPath'])
    return df


def enrich_events(gdf):
    """Run the full cleaning and derivation sequence on reconciled events."""
    logger.info("Deriving tornado metrics...")
    gdf = impute_magnitude(gdf)
    gdf = derive_fields(gdf)
    logger.info(f"  Enriched {len(gdf):,} tornadoes")
    return gdf


def summarize_events(gdf, imputed_count=None):
    """Log summary statistics for the enriched record."""
    logger.info("=" * 60)
    logger.info("DATA SUMMARY")
    logger.info("=" * 60)
    logger.info(f"Total tornadoes: {len(gdf):,}")
    logger.info(f"Year range: {gdf['yr'].min()}-{gdf['yr'].max()}")
    if imputed_count is not None:
        logger.info(f"Imputed ratings: {imputed_count:,}")

    for rating, count in gdf['mag'].value_counts().sort_index().items():
        pct = count / len(gdf) * 100
        logger.info(f"  Rating {rating}: {count:,} ({pct:.1f}%)")

    logger.info(f"Total fatalities: {int(gdf['fat'].sum()):,}")
    logger.info(f"Total injuries: {int(gdf['inj'].sum()):,}")
    logger.info(f"Total energy dissipation: {gdf['ED'].sum():.3e}")
