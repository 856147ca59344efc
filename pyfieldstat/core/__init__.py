"""
Core infrastructure for PyFieldStat.

This module provides shared abstractions and numerical primitives used by
the domain submodules.

Key components:
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Special functions, timing, tolerance tiers
"""

from pyfieldstat.core.result import Result
from pyfieldstat.core.exceptions import (
    PyFieldStatError,
    ValidationError,
    DimensionError,
)

__all__ = [
    # Result
    "Result",
    # Exceptions
    "PyFieldStatError",
    "ValidationError",
    "DimensionError",
]
