"""
PyFieldStat: analysis of variance for designed field experiments.

Sums-of-squares ANOVA for completely randomized, randomized block and
Latin square designs, with Tukey HSD post-hoc comparisons.

Submodules:
    anova: analyze() and posthoc() for CRD / RBD / LSD experiments
    core: Result envelope, exceptions, validators, special functions
"""

__version__ = "0.1.0"

from pyfieldstat import anova
from pyfieldstat.anova import analyze, posthoc
from pyfieldstat.core.exceptions import ValidationError

__all__ = [
    "__version__",
    "anova",
    "analyze",
    "posthoc",
    "ValidationError",
]
