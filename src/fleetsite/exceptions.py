"""
Exception hierarchy for fleetsite.

Input problems surface as ``DataError``, engine problems as ``SolverError``.
Infeasibility is a solve status, not an exception.
"""


class FleetsiteError(Exception):
    """Base class for fleetsite errors."""


class DataError(FleetsiteError):
    """Problem instance is unreadable or malformed."""


class SolverError(FleetsiteError):
    """The LP engine failed or the adapter was used out of order."""


class ConfigError(FleetsiteError, ValueError):
    """Invalid configuration parameters."""
