"""
ANOVA solver dispatch.

Public API:
    analyze(matrix, design, ...) -> AnovaSolution
    posthoc(matrix, result, ...) -> PostHocSolution
"""

import dataclasses
from typing import Any

import numpy as np

from pyfieldstat.core.compute.timing import Timer
from pyfieldstat.core.exceptions import DimensionError, ValidationError
from pyfieldstat.core.result import Result
from pyfieldstat.anova._common import SIGNIFICANCE_LEVEL
from pyfieldstat.anova._posthoc import tukey_hsd
from pyfieldstat.anova._ss import decompose
from pyfieldstat.anova.design import AnovaDesign
from pyfieldstat.anova.solution import AnovaSolution, PostHocSolution


def analyze(
    matrix: Any,
    design: str = 'CRD',
    *,
    columns: Any = None,
) -> AnovaSolution:
    """
    Analysis of variance for a designed experiment.

    Args:
        matrix: Observations, rows = treatments (genotypes), columns =
            replications. A rectangular array-like, or plain text with one
            treatment per line (values separated by spaces, commas or tabs).
        design: 'CRD' (completely randomized), 'RBD' (randomized block)
            or 'LSD' (Latin square). Default 'CRD'.
        columns: LSD only, field column of each observation. Default is
            the cyclic Latin square.

    Returns:
        AnovaSolution with sums of squares, df, mean squares, F, p-values,
        CV, treatment means and the formatted ANOVA table

    Raises:
        ValidationError: For malformed input (see AnovaDesign.for_matrix)

    Examples:
        >>> result = analyze([[12.5, 13.2, 14.1], [11.8, 12.4, 13.0]], 'RBD')
        >>> result.p_treatment
        >>> print(result.summary())
    """
    timer = Timer()
    timer.start()

    with timer.section('validate'):
        if isinstance(matrix, str):
            anova_design = AnovaDesign.from_text(matrix, design, columns=columns)
        else:
            anova_design = AnovaDesign.for_matrix(matrix, design, columns=columns)

    with timer.section('decompose'):
        params, warnings = decompose(anova_design)

    timer.stop()

    result = Result(
        params=params,
        info={
            'design': anova_design.design,
            'shape': (anova_design.n_treatments, anova_design.n_replications),
        },
        timing=timer.result(),
        backend_name='cpu',
        warnings=warnings,
    )

    return AnovaSolution(_result=result)


def posthoc(
    matrix: Any,
    result: AnovaSolution,
    *,
    alpha: float = 0.05,
) -> PostHocSolution:
    """
    Tukey HSD pairwise comparisons following analyze().

    Comparisons are only produced when the treatment effect is significant
    (p < 0.05); otherwise the solution holds no comparisons and a warning.

    Args:
        matrix: The observations that were passed to analyze()
        result: AnovaSolution from analyze()
        alpha: Level of the studentized range critical value
            (0.05, 0.01 or 0.001). Default 0.05.

    Returns:
        PostHocSolution with comparisons sorted by descending |difference|

    Raises:
        ValidationError: If matrix is malformed, holds different data from
            the analysed one, or alpha is not tabulated
        DimensionError: If matrix does not have the shape analysed in result

    Examples:
        >>> anova_result = analyze(matrix, design='RBD')
        >>> tukey = posthoc(matrix, anova_result)
        >>> print(tukey.summary())
    """
    if not isinstance(result, AnovaSolution):
        raise ValidationError(
            f"result: expected AnovaSolution from analyze(), got {type(result).__name__}"
        )

    timer = Timer()
    timer.start()

    params = result.params

    with timer.section('validate'):
        if isinstance(matrix, str):
            anova_design = AnovaDesign.from_text(matrix, params.design)
        else:
            anova_design = AnovaDesign.for_matrix(matrix, params.design)

        expected = (params.n_treatments, params.n_replications)
        actual = (anova_design.n_treatments, anova_design.n_replications)
        if actual != expected:
            raise DimensionError(
                f"matrix: shape {actual} does not match the analysed shape {expected}",
                actual_shape=actual,
                expected_shape=expected,
            )

        means = np.mean(anova_design.y, axis=1)
        analysed_means = np.asarray(params.treatment_means)
        if not np.allclose(means, analysed_means, rtol=1e-9, atol=1e-12):
            raise ValidationError(
                "matrix: treatment means do not match the analysed result; "
                "pass the matrix that was given to analyze()"
            )

    warnings: list[str] = []
    with timer.section('posthoc'):
        posthoc_params = tukey_hsd(
            analysed_means,
            params.ms_error,
            params.n_replications,
            params.df_error,
            alpha=alpha,
        )

        if params.p_treatment >= SIGNIFICANCE_LEVEL:
            posthoc_params = dataclasses.replace(posthoc_params, comparisons=())
            warnings.append(
                f"treatment effect not significant (p = {params.p_treatment:.4g} "
                f">= {SIGNIFICANCE_LEVEL}); no pairwise comparisons produced"
            )

    timer.stop()

    ph_result = Result(
        params=posthoc_params,
        info={'method': 'tukey', 'design': params.design, 'alpha': alpha},
        timing=timer.result(),
        backend_name='cpu',
        warnings=tuple(warnings),
    )

    return PostHocSolution(_result=ph_result)
