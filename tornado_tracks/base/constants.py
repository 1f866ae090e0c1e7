"""
Shared constants for the tornado track analysis.

Includes:
- Source archive URLs
- Unit conversion factors
- Projection definition
- Wind speed distribution model for energy dissipation
- Case-study defaults
"""
import math
from datetime import date

import numpy as np


# =============================================================================
# Source Archives
# =============================================================================

SPC_BASE_URL = "https://www.spc.noaa.gov/gis/svrgis/zipped/"
PATHS_ARCHIVE = "1950-2017-torn-aspath.zip"
POINTS_ARCHIVE = "1950-2017-torn-initpoint.zip"

PATHS_URL = SPC_BASE_URL + PATHS_ARCHIVE
POINTS_URL = SPC_BASE_URL + POINTS_ARCHIVE

# Census cartographic boundaries, used only for the bubble map
STATES_URL = "https://www2.census.gov/geo/tiger/GENZ2018/shp/cb_2018_us_state_20m.zip"

TIMEOUT = 300  # seconds


# =============================================================================
# Source Schema
# =============================================================================

# Columns kept from the SPC shapefiles
SOURCE_COLUMNS = [
    'om', 'yr', 'mo', 'dy', 'date', 'time', 'st',
    'mag', 'inj', 'fat', 'len', 'wid', 'geometry',
]

# Columns that must agree row by row between the path and point files
ALIGNMENT_COLUMNS = ['om', 'yr', 'mo', 'st']

UNRATED = -9
RATINGS = (0, 1, 2, 3, 4, 5)


# =============================================================================
# Unit Conversions
# =============================================================================

MILES_TO_METERS = 1609.34
YARDS_TO_METERS = 0.9144

# Unrated tornadoes at or below this length (miles) become rating 0
UNRATED_LENGTH_THRESHOLD_MI = 5

# Width was reported as mean width before 1995 and max width from 1995 on
WIDTH_ERA_YEAR = 1995
WIDTH_ERA_FACTOR = math.pi / 4


# =============================================================================
# Projection
# =============================================================================

GEOGRAPHIC_CRS = "EPSG:4326"

# Lambert conformal conic over the contiguous USA, metres
LCC_CRS = (
    "+proj=lcc +lat_1=33 +lat_2=45 +lat_0=39 +lon_0=-96 "
    "+x_0=0 +y_0=0 +datum=NAD83 +units=m +no_defs"
)


# =============================================================================
# Energy Dissipation Model
# =============================================================================

# Probability of each wind speed bin (columns) given a rating (rows 0-5)
WIND_SPEED_PROBABILITIES = np.array([
    [1.000, 0.000, 0.000, 0.000, 0.000, 0.000],
    [0.772, 0.228, 0.000, 0.000, 0.000, 0.000],
    [0.034, 0.487, 0.479, 0.000, 0.000, 0.000],
    [0.002, 0.064, 0.565, 0.369, 0.000, 0.000],
    [0.000, 0.002, 0.064, 0.539, 0.395, 0.000],
    [0.000, 0.000, 0.002, 0.065, 0.452, 0.481],
])

# Lower bound of each wind speed bin (m/s)
WIND_SPEED_THRESHOLDS = np.array([29.06, 38.45, 49.62, 60.8, 74.21, 89.41])

# Added to the last threshold to get a midpoint for the open top bin
TOP_BIN_HALF_WIDTH = 7.5


# =============================================================================
# Case Study
# =============================================================================

CASE_STUDY_STATE = "OH"
CASE_STUDY_MAGNITUDE = 5
CASE_STUDY_DATE = date(1974, 4, 3)
CASE_STUDY_LABEL = "Xenia"
