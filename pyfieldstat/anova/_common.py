"""
Common data types for ANOVA.

Contains the frozen parameter payloads that go inside Result[P] envelopes,
plus the constants that define the supported designs. Each payload is a
pure data container: no methods, no computation.
"""

from dataclasses import dataclass
from typing import Literal

DesignKind = Literal['CRD', 'RBD', 'LSD']

# Single source of truth for design names
VALID_DESIGNS: tuple[str, ...] = ('CRD', 'RBD', 'LSD')

DESIGN_NAMES = {
    'CRD': 'Completely Randomized Design',
    'RBD': 'Randomized Block Design',
    'LSD': 'Latin Square Design',
}

# Label of the blocking term in the ANOVA table (CRD has none)
BLOCK_TERMS = {
    'RBD': 'Replication',
    'LSD': 'Row+Column',
}

# Post-hoc comparisons are only produced below this treatment p-value
SIGNIFICANCE_LEVEL = 0.05


@dataclass(frozen=True)
class AnovaTableRow:
    """One row of an ANOVA table (a source of variation, Error, or Total)."""
    term: str
    df: int
    sum_sq: float
    mean_sq: float | None    # None for Total row
    f_value: float | None    # None for Error and Total rows
    p_value: float | None    # None for Error and Total rows


@dataclass(frozen=True)
class TreatmentSummary:
    """Descriptive statistics for one treatment row (sd uses N - 1)."""
    label: str
    mean: float
    sd: float
    min: float
    max: float
    range: float


@dataclass(frozen=True)
class AnovaParams:
    """
    Parameter payload for a designed-experiment ANOVA.

    For LSD, ss_replication is the combined row + column sum of squares
    and ss_rows / ss_columns hold its two parts. For CRD and RBD,
    ss_rows == ss_replication and ss_columns == 0.
    """
    design: str
    n_treatments: int
    n_replications: int
    n_obs: int
    grand_total: float
    grand_mean: float
    correction_factor: float
    treatment_totals: tuple[float, ...]
    treatment_means: tuple[float, ...]
    replication_totals: tuple[float, ...]
    replication_means: tuple[float, ...]
    column_totals: tuple[float, ...] | None   # LSD only
    ss_total: float
    ss_treatment: float
    ss_replication: float
    ss_rows: float
    ss_columns: float
    ss_error: float
    df_treatment: int
    df_replication: int
    df_error: int
    df_total: int
    ms_treatment: float
    ms_replication: float
    ms_error: float
    f_treatment: float
    f_replication: float
    p_treatment: float
    p_replication: float
    cv: float
    table: tuple[AnovaTableRow, ...]
    treatment_stats: tuple[TreatmentSummary, ...]


@dataclass(frozen=True)
class PairwiseComparison:
    """
    One Tukey HSD comparison between treatments group1 < group2.

    group1 / group2 are 0-based row indices; label is 1-based ("T1 vs T3").
    diff is mean(group1) - mean(group2).
    """
    label: str
    group1: int
    group2: int
    diff: float
    se: float
    q_value: float
    p_value: float
    significant: bool


@dataclass(frozen=True)
class PostHocParams:
    """Parameter payload for Tukey HSD post-hoc comparisons."""
    method: str                                 # 'tukey'
    comparisons: tuple[PairwiseComparison, ...]
    alpha: float
    q_critical: float
    hsd: float
    se: float
    mse: float
    df_error: float          # int from an ANOVA; math.inf for the asymptotic case
    n_treatments: int
    n_replications: int
