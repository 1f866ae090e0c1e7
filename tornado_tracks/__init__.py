"""
tornado_tracks - energy dissipation analysis of the SPC tornado track record.

This package provides:
- Archive download and extraction (downloaders/)
- Record cleaning and metric derivation (converters/)
- Shared constants, geometry and parquet helpers (base/)
- Case-study selection and ranking (analysis/)
- Figures (plots.py)
- Run configuration (settings.py) and logging (logging_config.py)
"""

from .errors import (
    TornadoTracksError,
    AcquisitionError,
    DataIntegrityError,
    ComputationError,
    ConfigurationError,
)

from .settings import RunContext, build_run_context

__version__ = "0.1.0"
