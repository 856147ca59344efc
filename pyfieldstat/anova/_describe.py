"""Per-treatment descriptive statistics for the ANOVA report."""

import numpy as np
from numpy.typing import NDArray

from pyfieldstat.anova._common import TreatmentSummary


def treatment_label(index: int) -> str:
    """1-based treatment label used throughout the reports."""
    return f"T{index + 1}"


def describe_treatments(y: NDArray) -> tuple[TreatmentSummary, ...]:
    """
    Mean, sample SD (N - 1), min, max and range of each treatment row.

    A single replication has no spread; its SD is reported as 0.0.
    """
    summaries = []
    for i, row in enumerate(y):
        sd = float(np.std(row, ddof=1)) if row.size > 1 else 0.0
        lo, hi = float(np.min(row)), float(np.max(row))
        summaries.append(TreatmentSummary(
            label=treatment_label(i),
            mean=float(np.mean(row)),
            sd=sd,
            min=lo,
            max=hi,
            range=hi - lo,
        ))
    return tuple(summaries)
