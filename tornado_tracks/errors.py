"""
Exceptions raised by the tornado track pipeline.

Every failure is fatal for the run; the entry point reports it and exits 1.
"""


class TornadoTracksError(Exception):
    """Base class for pipeline failures."""


class AcquisitionError(TornadoTracksError):
    """Download or archive extraction failed."""


class DataIntegrityError(TornadoTracksError):
    """Source records violate an expected shape or value range."""


class ComputationError(TornadoTracksError):
    """A derived field cannot be computed from the data at hand."""


class ConfigurationError(TornadoTracksError):
    """A setting from settings.json or the environment cannot be parsed."""
