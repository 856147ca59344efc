"""
Tukey HSD post-hoc pairwise comparisons for equally replicated designs.

Critical values:
    Studentized range q(alpha; k, inf) from the standard table for
    k = 2..10, and the approximation 3.24 + 0.23 ln(k) beyond the table.

p-values:
    1 - tukey_cdf(q, k, df), where tukey_cdf is an approximation to the
    studentized range distribution built on the Student-t CDF (finite df)
    or on erfc (infinite df).
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import ArrayLike
from scipy.special import erfc

from pyfieldstat.core.compute.special import student_t_cdf
from pyfieldstat.core.exceptions import ValidationError
from pyfieldstat.anova._common import PairwiseComparison, PostHocParams
from pyfieldstat.anova._describe import treatment_label

# q(alpha; k, df = inf), keyed by (k, alpha)
TUKEY_Q_TABLE: dict[tuple[int, float], float] = {
    (2, 0.05): 2.77, (2, 0.01): 3.64, (2, 0.001): 4.90,
    (3, 0.05): 3.31, (3, 0.01): 4.12, (3, 0.001): 5.30,
    (4, 0.05): 3.63, (4, 0.01): 4.40, (4, 0.001): 5.60,
    (5, 0.05): 3.86, (5, 0.01): 4.60, (5, 0.001): 5.80,
    (6, 0.05): 4.03, (6, 0.01): 4.76, (6, 0.001): 5.99,
    (7, 0.05): 4.17, (7, 0.01): 4.88, (7, 0.001): 6.10,
    (8, 0.05): 4.29, (8, 0.01): 5.00, (8, 0.001): 6.30,
    (9, 0.05): 4.39, (9, 0.01): 5.10, (9, 0.001): 6.40,
    (10, 0.05): 4.47, (10, 0.01): 5.18, (10, 0.001): 6.50,
}

TABLE_ALPHAS = (0.05, 0.01, 0.001)
TABLE_MAX_K = 10


def q_critical(k: int, df: float, alpha: float = 0.05) -> float:
    """
    Critical value of the studentized range for k means.

    Only the asymptotic (df = inf) row of the table is stored, so df is
    accepted for the signature but every df reads that row. For k > 10 the
    approximation 3.24 + 0.23 ln(k) is used for every alpha.

    Raises:
        ValidationError: If k < 2 or alpha is not a tabulated level
    """
    if k < 2:
        raise ValidationError(f"k: at least 2 groups required, got {k}")
    if alpha not in TABLE_ALPHAS:
        raise ValidationError(
            f"alpha must be one of {TABLE_ALPHAS}, got {alpha!r}"
        )
    if k > TABLE_MAX_K:
        return 3.24 + 0.23 * math.log(k)
    return TUKEY_Q_TABLE[(k, alpha)]


def tukey_cdf(q: float, k: int, df: float) -> float:
    """
    Approximate CDF of the studentized range, P(Q <= q).

    df = inf uses a normal (erfc) approximation; finite df uses
    1 - (1 - F_t(q; df))^k. The result is clipped to [0, 1].
    """
    if math.isinf(df):
        tail = float(erfc(q / math.sqrt(2.0)))
        cdf = (1.0 - tail + (k - 1) * tail ** (k - 1)) ** k
    else:
        cdf = 1.0 - (1.0 - student_t_cdf(q, df)) ** k
    return min(max(cdf, 0.0), 1.0)


def tukey_hsd(
    means: ArrayLike,
    mse: float,
    n_replications: int,
    df_error: float,
    *,
    alpha: float = 0.05,
) -> PostHocParams:
    """
    Tukey's Honestly Significant Difference test.

    Args:
        means: Treatment means, in treatment order
        mse: Error mean square from the ANOVA
        n_replications: Replications per treatment
        df_error: Error degrees of freedom from the ANOVA
        alpha: Table level for the critical value (0.05, 0.01 or 0.001)

    Returns:
        PostHocParams with all k(k-1)/2 comparisons, largest |diff| first.
        A pair is significant when |diff| > HSD = q_critical * SE.
    """
    means_arr = np.asarray(means, dtype=np.float64)
    k = len(means_arr)

    se = math.sqrt(mse / n_replications) if mse > 0 and n_replications > 0 else 0.0
    q_crit = q_critical(k, df_error, alpha)
    hsd = q_crit * se

    comparisons: list[PairwiseComparison] = []
    for i in range(k - 1):
        for j in range(i + 1, k):
            diff = float(means_arr[i] - means_arr[j])

            if se > 0:
                q_val = abs(diff) / se
                p_val = 1.0 - tukey_cdf(q_val, k, df_error)
            else:
                # No error variance to scale by: nothing can be declared different
                q_val, p_val = 0.0, 1.0

            comparisons.append(PairwiseComparison(
                label=f"{treatment_label(i)} vs {treatment_label(j)}",
                group1=i,
                group2=j,
                diff=diff,
                se=se,
                q_value=q_val,
                p_value=min(max(p_val, 0.0), 1.0),
                significant=se > 0 and abs(diff) > hsd,
            ))

    comparisons.sort(key=lambda c: abs(c.diff), reverse=True)

    return PostHocParams(
        method='tukey',
        comparisons=tuple(comparisons),
        alpha=alpha,
        q_critical=q_crit,
        hsd=hsd,
        se=se,
        mse=mse,
        df_error=df_error,
        n_treatments=k,
        n_replications=n_replications,
    )
