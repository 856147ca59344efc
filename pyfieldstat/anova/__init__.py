"""
Analysis of Variance for designed experiments.

Public API:
    analyze(matrix, design, ...) -> AnovaSolution     # CRD / RBD / LSD
    posthoc(matrix, result, ...) -> PostHocSolution   # Tukey HSD
"""

from pyfieldstat.anova.solvers import (
    analyze,
    posthoc,
)
from pyfieldstat.anova.solution import (
    AnovaSolution,
    PostHocSolution,
    significance_stars,
)
from pyfieldstat.anova.design import AnovaDesign, parse_matrix, validate_shape
from pyfieldstat.anova._common import (
    AnovaParams,
    AnovaTableRow,
    PairwiseComparison,
    PostHocParams,
    TreatmentSummary,
    VALID_DESIGNS,
)

__all__ = [
    "analyze",
    "posthoc",
    "AnovaSolution",
    "PostHocSolution",
    "AnovaDesign",
    "AnovaParams",
    "AnovaTableRow",
    "PairwiseComparison",
    "PostHocParams",
    "TreatmentSummary",
    "VALID_DESIGNS",
    "parse_matrix",
    "validate_shape",
    "significance_stars",
]
