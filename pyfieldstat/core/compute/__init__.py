"""
Shared compute infrastructure for PyFieldStat.

Submodules:
    special: Log-gamma, beta, incomplete beta, F and t tail probabilities
    timing: Execution timing utilities
    tolerances: Tolerance tiers for numerical validation
"""

from pyfieldstat.core.compute.special import (
    log_gamma,
    beta,
    continued_fraction,
    incomplete_beta,
    f_pvalue,
    student_t_cdf,
)
from pyfieldstat.core.compute.timing import Timer, timed

__all__ = [
    # Special functions
    "log_gamma",
    "beta",
    "continued_fraction",
    "incomplete_beta",
    "f_pvalue",
    "student_t_cdf",
    # Timing
    "Timer",
    "timed",
]
