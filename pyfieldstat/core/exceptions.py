"""
Exception hierarchy for PyFieldStat.

All exceptions inherit from PyFieldStatError to allow catching any
library-specific error. Domain-specific exceptions should inherit from
the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Degenerate statistics are NOT errors: they are reported through
      Result.warnings and clamped to 0 / p = 1 by the solvers
"""


class PyFieldStatError(Exception):
    """Base exception for all PyFieldStat errors."""
    pass


class ValidationError(PyFieldStatError):
    """
    Input validation failed.

    Raised when the observation matrix or the requested design fail
    validation checks (too few treatments, unequal replication, a
    non-square Latin square, non-numeric tokens, ...).
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when an observation matrix is not two-dimensional, or when a
    matrix passed to a follow-up step does not match the shape recorded
    in an earlier result.

    Attributes:
        actual_shape: Shape that was received, if known
        expected_shape: Shape that was required, if known
    """

    def __init__(
        self,
        message: str,
        actual_shape: tuple[int, ...] | None = None,
        expected_shape: tuple[int, ...] | None = None,
    ):
        super().__init__(message)
        self.actual_shape = actual_shape
        self.expected_shape = expected_shape

