"""
Energy dissipation from rating and path area.

Each rating maps to a probability distribution over six wind speed bins.
The expected cubed wind speed for a rating, times the path area, gives the
energy dissipation estimate. The 0.5 * air density factor is not applied.
"""
import numpy as np
import pandas as pd

from .constants import (
    RATINGS,
    TOP_BIN_HALF_WIDTH,
    WIND_SPEED_PROBABILITIES,
    WIND_SPEED_THRESHOLDS,
)
from ..errors import DataIntegrityError


def midpoint_speeds(thresholds=WIND_SPEED_THRESHOLDS, top_half_width=TOP_BIN_HALF_WIDTH):
    """Midpoint wind speed of each bin; the open top bin uses a fixed offset."""
    thresholds = np.asarray(thresholds, dtype=float)
    interior = thresholds[:-1] + np.diff(thresholds) / 2
    return np.append(interior, thresholds[-1] + top_half_width)


def expected_cubed_speed(probabilities=WIND_SPEED_PROBABILITIES, thresholds=WIND_SPEED_THRESHOLDS):
    """EW3 per rating: probability-weighted sum of cubed midpoint speeds."""
    return np.asarray(probabilities, dtype=float) @ midpoint_speeds(thresholds) ** 3


def validate_ratings(mag):
    """Raise DataIntegrityError if any rating is outside 0..5."""
    mag = pd.Series(mag)
    bad = ~mag.isin(RATINGS)
    if bad.any():
        values = sorted(mag[bad].unique().tolist())
        raise DataIntegrityError(
            f"{int(bad.sum()):,} events have ratings outside 0-5: {values}"
        )


def energy_dissipation(mag, area):
    """Estimate energy dissipation per event.

    Args:
        mag: Ratings, already imputed (0-5)
        area: Path areas in square metres

    Returns:
        numpy array of energy dissipation values
    """
    validate_ratings(mag)
    ew3 = expected_cubed_speed()
    ratings = np.asarray(mag, dtype=int)
    return ew3[ratings] * np.asarray(area, dtype=float)
