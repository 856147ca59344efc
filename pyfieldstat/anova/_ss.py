"""
Sums of squares decomposition for designed experiments.

All designs share the correction-factor decomposition of a treatments x
replications matrix with grand total G and N observations:

    CF  = G^2 / N
    SST = sum(x^2) - CF
    SSG = sum(T_i^2) / r - CF          treatments (matrix rows)
    SSR = sum(R_j^2) / t - CF          replications (matrix columns)

CRD:
    SSE = SST - SSG                    df_error = N - t
RBD:
    SSE = SST - SSG - SSR              df_error = (t - 1)(r - 1)
LSD (n x n, replications are field rows):
    SSC = sum(C_k^2) / n - CF          field columns from the design layout
    SSE = SST - SSG - (SSR + SSC)      df_error = (n - 1)(n - 2)

Inestimable effects are reported, not raised: every MS, F and CV goes
through safe_divide(), and a p-value is 1 whenever either of its degrees
of freedom is not positive.
"""

import math

import numpy as np
from numpy.typing import NDArray

from pyfieldstat.core.compute.special import f_pvalue
from pyfieldstat.anova._common import AnovaParams, AnovaTableRow, BLOCK_TERMS
from pyfieldstat.anova._describe import describe_treatments
from pyfieldstat.anova.design import AnovaDesign

# Residual SS within this fraction of sum(x^2) is cancellation noise
ROUNDOFF_RTOL = 1e-12


def safe_divide(numerator: float, denominator: float) -> float:
    """numerator / denominator, or 0.0 when the denominator is not positive."""
    if denominator <= 0:
        return 0.0
    return numerator / denominator


def _axis_ss(totals: NDArray, count: int, cf: float) -> float:
    """Sum of squares of a set of marginal totals, each over `count` cells."""
    return float(np.sum(totals ** 2) / count - cf)


def _column_totals(y: NDArray, columns: NDArray) -> NDArray:
    """Totals of the LSD field columns given each cell's column index."""
    n = y.shape[0]
    return np.bincount(columns.ravel(), weights=y.ravel(), minlength=n)


def decompose(design: AnovaDesign) -> tuple[AnovaParams, tuple[str, ...]]:
    """
    Partition the total sum of squares for one design.

    Args:
        design: Validated AnovaDesign

    Returns:
        (AnovaParams, warnings) where warnings lists degenerate conditions
        that were clamped (non-positive error df, zero error mean square,
        non-positive grand mean).
    """
    y = design.y
    kind = design.design
    t = design.n_treatments
    r = design.n_replications
    n_obs = design.n

    grand_total = float(np.sum(y))
    grand_mean = grand_total / n_obs
    cf = grand_total ** 2 / n_obs

    sum_sq_raw = float(np.sum(y ** 2))
    ss_total = sum_sq_raw - cf

    treatment_totals = np.sum(y, axis=1)
    ss_treatment = _axis_ss(treatment_totals, r, cf)

    replication_totals = np.sum(y, axis=0)
    ss_rows = _axis_ss(replication_totals, t, cf)

    column_totals = None
    ss_columns = 0.0
    df_treatment = t - 1

    if kind == 'CRD':
        ss_replication = ss_rows
        ss_error = ss_total - ss_treatment
        df_replication = 0
        df_error = n_obs - t
    elif kind == 'RBD':
        ss_replication = ss_rows
        ss_error = ss_total - ss_treatment - ss_rows
        df_replication = r - 1
        df_error = (t - 1) * (r - 1)
    else:
        n = t
        column_totals = _column_totals(y, design.columns)
        ss_columns = _axis_ss(column_totals, n, cf)
        ss_replication = ss_rows + ss_columns
        ss_error = ss_total - ss_treatment - ss_replication
        df_replication = 2 * (n - 1)
        df_error = (n - 1) * (n - 2)

    if abs(ss_error) <= ROUNDOFF_RTOL * sum_sq_raw:
        ss_error = 0.0

    df_total = n_obs - 1

    ms_treatment = safe_divide(ss_treatment, df_treatment)
    ms_replication = 0.0 if kind == 'CRD' else safe_divide(ss_replication, df_replication)
    ms_error = safe_divide(ss_error, df_error)

    f_treatment = safe_divide(ms_treatment, ms_error) if df_treatment > 0 else 0.0
    f_replication = (
        safe_divide(ms_replication, ms_error)
        if kind != 'CRD' and df_replication > 0 else 0.0
    )

    p_treatment = (
        f_pvalue(f_treatment, df_treatment, df_error)
        if df_treatment > 0 and df_error > 0 else 1.0
    )
    p_replication = (
        f_pvalue(f_replication, df_replication, df_error)
        if kind != 'CRD' and df_replication > 0 and df_error > 0 else 1.0
    )

    cv = safe_divide(100.0 * math.sqrt(max(ms_error, 0.0)), grand_mean)

    warnings: list[str] = []
    if df_error <= 0:
        warnings.append(
            f"error df is {df_error}; F tests are not estimable (F = 0, p = 1)"
        )
    elif ms_error <= 0:
        warnings.append(
            "error mean square is 0; F tests are not estimable (F = 0, p = 1)"
        )
    if grand_mean <= 0:
        warnings.append(
            f"grand mean is {grand_mean:g}; coefficient of variation is not "
            f"meaningful and is reported as 0"
        )

    table = _build_table(
        kind,
        df_treatment, ss_treatment, ms_treatment, f_treatment, p_treatment,
        df_replication, ss_replication, ms_replication, f_replication, p_replication,
        df_error, ss_error, ms_error,
        df_total, ss_total,
    )

    params = AnovaParams(
        design=kind,
        n_treatments=t,
        n_replications=r,
        n_obs=n_obs,
        grand_total=grand_total,
        grand_mean=grand_mean,
        correction_factor=cf,
        treatment_totals=tuple(float(v) for v in treatment_totals),
        treatment_means=tuple(float(v) / r for v in treatment_totals),
        replication_totals=tuple(float(v) for v in replication_totals),
        replication_means=tuple(float(v) / t for v in replication_totals),
        column_totals=(
            tuple(float(v) for v in column_totals)
            if column_totals is not None else None
        ),
        ss_total=ss_total,
        ss_treatment=ss_treatment,
        ss_replication=ss_replication,
        ss_rows=ss_rows,
        ss_columns=ss_columns,
        ss_error=ss_error,
        df_treatment=df_treatment,
        df_replication=df_replication,
        df_error=df_error,
        df_total=df_total,
        ms_treatment=ms_treatment,
        ms_replication=ms_replication,
        ms_error=ms_error,
        f_treatment=f_treatment,
        f_replication=f_replication,
        p_treatment=p_treatment,
        p_replication=p_replication,
        cv=cv,
        table=table,
        treatment_stats=describe_treatments(y),
    )
    return params, tuple(warnings)


def _build_table(
    kind: str,
    df_treatment: int, ss_treatment: float, ms_treatment: float,
    f_treatment: float, p_treatment: float,
    df_replication: int, ss_replication: float, ms_replication: float,
    f_replication: float, p_replication: float,
    df_error: int, ss_error: float, ms_error: float,
    df_total: int, ss_total: float,
) -> tuple[AnovaTableRow, ...]:
    """Assemble the ANOVA table rows in display order."""
    rows = [
        AnovaTableRow(
            term='Genotype',
            df=df_treatment,
            sum_sq=ss_treatment,
            mean_sq=ms_treatment,
            f_value=f_treatment,
            p_value=p_treatment,
        ),
    ]
    if kind in BLOCK_TERMS:
        rows.append(AnovaTableRow(
            term=BLOCK_TERMS[kind],
            df=df_replication,
            sum_sq=ss_replication,
            mean_sq=ms_replication,
            f_value=f_replication,
            p_value=p_replication,
        ))
    rows.append(AnovaTableRow(
        term='Error',
        df=df_error,
        sum_sq=ss_error,
        mean_sq=ms_error,
        f_value=None,
        p_value=None,
    ))
    rows.append(AnovaTableRow(
        term='Total',
        df=df_total,
        sum_sq=ss_total,
        mean_sq=None,
        f_value=None,
        p_value=None,
    ))
    return tuple(rows)
