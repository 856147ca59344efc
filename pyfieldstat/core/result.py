"""
Generic result container for all PyFieldStat computations.

The Result class provides a standardized envelope that all domain-specific
results use. Timing, warnings and metadata travel next to the parameter
payload so that solution wrappers can expose them uniformly.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (design, alpha, ...)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) for reproducibility
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for statistical computations.

    Type Parameters:
        P: The domain-specific parameter payload type

    Attributes:
        params: Domain-specific parameters (sums of squares, comparisons, ...)
        info: Structured metadata (design kind, alpha, ...)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the code path that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=AnovaParams(...),
        ...     info={'design': 'RBD'},
        ...     timing={'total_seconds': 0.001},
        ...     backend_name='cpu',
        ...     warnings=('error df is 0; F tests are not estimable',),
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
