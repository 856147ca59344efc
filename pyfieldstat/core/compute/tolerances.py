"""
Tolerance tiers for numerical validation.

Defines precision expectations for the two kinds of computation in the
package:
- Sums of squares: exact arithmetic up to float64 rounding
- Special functions: series / continued-fraction approximations

Used by the test suite to compare against reference implementations.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Sums-of-squares identities (SST = SSG + SSR + SSE, df accounting)
SS_FP64 = ToleranceTier(
    rtol=1e-9,
    atol=1e-9,
    name='ss_fp64',
    description='Sum-of-squares partitions, float64 rounding only',
)

# Incomplete beta, F and t tail probabilities vs scipy
SPECIAL_FUNCTION = ToleranceTier(
    rtol=1e-6,
    atol=1e-10,
    name='special_function',
    description='Continued-fraction / Lanczos approximations vs scipy.special',
)

# Lanczos log-gamma on its own is close to machine precision
LOG_GAMMA = ToleranceTier(
    rtol=1e-12,
    atol=1e-12,
    name='log_gamma',
    description='Lanczos (g=7, n=9) log-gamma vs math.lgamma',
)


def select_tolerance(kind: str) -> ToleranceTier:
    """Select the tolerance tier for a kind of computation."""
    tiers = {
        'ss': SS_FP64,
        'special': SPECIAL_FUNCTION,
        'log_gamma': LOG_GAMMA,
    }
    if kind not in tiers:
        raise ValueError(
            f"Unknown tolerance kind {kind!r}. Use one of {sorted(tiers)}."
        )
    return tiers[kind]
