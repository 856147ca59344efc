"""
User-facing ANOVA solution types.

Each solution wraps a Result[Params] and provides convenient accessors,
formatted summary output, and the ANOVA table.
"""

import math
from dataclasses import dataclass
from typing import Any

from pyfieldstat.core.result import Result
from pyfieldstat.anova._common import (
    AnovaParams,
    AnovaTableRow,
    DESIGN_NAMES,
    PairwiseComparison,
    PostHocParams,
    TreatmentSummary,
)


# =====================================================================
# AnovaSolution
# =====================================================================


@dataclass
class AnovaSolution:
    """
    User-facing result for a CRD / RBD / LSD analysis.

    Produced by analyze().
    """
    _result: Result[AnovaParams]

    @property
    def params(self) -> AnovaParams:
        return self._result.params

    @property
    def design(self) -> str:
        return self._result.params.design

    @property
    def table(self) -> tuple[AnovaTableRow, ...]:
        """ANOVA table (rows: term, df, SS, MS, F, p)."""
        return self._result.params.table

    @property
    def n_treatments(self) -> int:
        return self._result.params.n_treatments

    @property
    def n_replications(self) -> int:
        return self._result.params.n_replications

    @property
    def n_obs(self) -> int:
        return self._result.params.n_obs

    @property
    def grand_mean(self) -> float:
        return self._result.params.grand_mean

    @property
    def treatment_means(self) -> tuple[float, ...]:
        return self._result.params.treatment_means

    @property
    def treatment_totals(self) -> tuple[float, ...]:
        return self._result.params.treatment_totals

    @property
    def replication_totals(self) -> tuple[float, ...]:
        return self._result.params.replication_totals

    @property
    def treatment_stats(self) -> tuple[TreatmentSummary, ...]:
        return self._result.params.treatment_stats

    @property
    def ss_total(self) -> float:
        return self._result.params.ss_total

    @property
    def ss_treatment(self) -> float:
        return self._result.params.ss_treatment

    @property
    def ss_replication(self) -> float:
        return self._result.params.ss_replication

    @property
    def ss_error(self) -> float:
        return self._result.params.ss_error

    @property
    def df_treatment(self) -> int:
        return self._result.params.df_treatment

    @property
    def df_replication(self) -> int:
        return self._result.params.df_replication

    @property
    def df_error(self) -> int:
        return self._result.params.df_error

    @property
    def df_total(self) -> int:
        return self._result.params.df_total

    @property
    def ms_error(self) -> float:
        return self._result.params.ms_error

    @property
    def f_treatment(self) -> float:
        return self._result.params.f_treatment

    @property
    def p_treatment(self) -> float:
        return self._result.params.p_treatment

    @property
    def p_replication(self) -> float:
        return self._result.params.p_replication

    @property
    def cv(self) -> float:
        """Coefficient of variation, percent."""
        return self._result.params.cv

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Generate the ANOVA report: design, table, CV and treatment stats."""
        p = self._result.params
        lines = [
            f"Analysis of Variance: {DESIGN_NAMES[p.design]} ({p.design})",
            "=" * 78,
            f"Treatments: {p.n_treatments}   Replications: {p.n_replications}   "
            f"Observations: {p.n_obs}",
            "",
            f"{'Source':<14} {'Df':>6} {'Sum Sq':>14} {'Mean Sq':>14} "
            f"{'F value':>10} {'Pr(>F)':>12}",
            "-" * 78,
        ]

        for row in self.table:
            if row.f_value is not None:
                lines.append(
                    f"{row.term:<14} {row.df:>6} {row.sum_sq:>14.4f} "
                    f"{row.mean_sq:>14.4f} {row.f_value:>10.4f} "
                    f"{format_p_value(row.p_value):>12} "
                    f"{significance_stars(row.p_value)}"
                )
            elif row.mean_sq is not None:
                lines.append(
                    f"{row.term:<14} {row.df:>6} {row.sum_sq:>14.4f} "
                    f"{row.mean_sq:>14.4f}"
                )
            else:
                lines.append(f"{row.term:<14} {row.df:>6} {row.sum_sq:>14.4f}")

        lines.append("-" * 78)
        lines.append("Signif. codes:  0 '***' 0.001 '**' 0.01 '*' 0.05 'ns' 1")
        lines.append(f"Coefficient of Variation (CV): {p.cv:.2f}%")

        lines.append("")
        lines.append(
            f"{'Treatment':<12} {'Mean':>12} {'Std Dev':>12} {'Min':>10} "
            f"{'Max':>10} {'Range':>10}"
        )
        for s in p.treatment_stats:
            lines.append(
                f"{s.label:<12} {s.mean:>12.4f} {s.sd:>12.4f} {s.min:>10.2f} "
                f"{s.max:>10.2f} {s.range:>10.2f}"
            )
        lines.append(f"{'Grand Mean':<12} {p.grand_mean:>12.4f}")

        if self.warnings:
            lines.append("")
            lines.append("Warnings:")
            for w in self.warnings:
                lines.append(f"  {w}")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"AnovaSolution(design={self.design!r}, "
            f"treatments={self.n_treatments}, "
            f"replications={self.n_replications}, "
            f"p_treatment={self.p_treatment:.4g})"
        )


# =====================================================================
# PostHocSolution
# =====================================================================


@dataclass
class PostHocSolution:
    """
    User-facing result for Tukey HSD comparisons.

    Produced by posthoc(). comparisons is empty when the treatment effect
    was not significant.
    """
    _result: Result[PostHocParams]

    @property
    def method(self) -> str:
        return self._result.params.method

    @property
    def comparisons(self) -> tuple[PairwiseComparison, ...]:
        return self._result.params.comparisons

    @property
    def alpha(self) -> float:
        return self._result.params.alpha

    @property
    def q_critical(self) -> float:
        return self._result.params.q_critical

    @property
    def hsd(self) -> float:
        """Honestly significant difference, q_critical * SE."""
        return self._result.params.hsd

    @property
    def se(self) -> float:
        return self._result.params.se

    @property
    def significant(self) -> tuple[PairwiseComparison, ...]:
        """Comparisons whose |diff| exceeds the HSD."""
        return tuple(c for c in self.comparisons if c.significant)

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Generate the Tukey HSD comparison table."""
        lines = [
            "Tukey HSD",
            "=" * 78,
            f"alpha = {self.alpha:g}   q critical = {self.q_critical:.4f}   "
            f"SE = {self.se:.4f}   HSD = {self.hsd:.4f}",
            "",
            f"{'Comparison':<16} {'diff':>10} {'SE':>10} {'q':>10} "
            f"{'p adj':>12} {'':>4} {'HSD sig':>8}",
            "-" * 78,
        ]

        for c in self.comparisons:
            lines.append(
                f"{c.label:<16} {c.diff:>10.4f} {c.se:>10.4f} "
                f"{c.q_value:>10.4f} {format_p_value(c.p_value):>12} "
                f"{significance_stars(c.p_value):>4} "
                f"{'yes' if c.significant else 'no':>8}"
            )

        if not self.comparisons:
            lines.append("No comparisons: treatment effect not significant.")

        lines.append("-" * 78)
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"PostHocSolution(method={self.method!r}, "
            f"n_comparisons={len(self.comparisons)}, "
            f"n_significant={len(self.significant)})"
        )


# =====================================================================
# Helpers
# =====================================================================


def significance_stars(p: float | None) -> str:
    """Return significance code for a p-value ('ns' above 0.05)."""
    if p is None or math.isnan(p):
        return ""
    if p < 0.001:
        return "***"
    if p < 0.01:
        return "**"
    if p < 0.05:
        return "*"
    return "ns"


def format_p_value(p: float | None) -> str:
    """Format a p-value for tables; very small values print as '<0.0001'."""
    if p is None:
        return ""
    if p < 0.0001:
        return "<0.0001"
    return f"{p:.6f}"
