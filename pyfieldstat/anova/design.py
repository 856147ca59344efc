"""
ANOVA design object.

Wraps a validated observation matrix (treatments x replications) and the
design kind. Factory methods handle array-like and plain-text input.
"""

import re
from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pyfieldstat.core.validation import (
    check_array,
    check_finite,
    check_2d,
    check_choice,
    check_equal_replication,
    check_min_rows,
    check_min_columns,
    check_square,
)
from pyfieldstat.core.exceptions import ValidationError, DimensionError
from pyfieldstat.anova._common import VALID_DESIGNS

_TOKEN_SEPARATORS = re.compile(r"[\s,]+")


@dataclass(frozen=True)
class AnovaDesign:
    """
    Validated data container for a designed-experiment ANOVA.

    Created via factory methods, not directly.
    """
    y: NDArray[np.floating[Any]]    # shape (n_treatments, n_replications)
    design: str                     # 'CRD', 'RBD' or 'LSD'
    n_treatments: int
    n_replications: int
    n: int
    columns: NDArray[np.integer[Any]] | None = None   # LSD field column of each cell

    @staticmethod
    def for_matrix(
        matrix: Any,
        design: str = 'CRD',
        *,
        columns: Any = None,
    ) -> 'AnovaDesign':
        """
        Create design from an observation matrix.

        Args:
            matrix: Rows are treatments (genotypes), columns are
                replications. Any rectangular nested sequence or 2D array.
            design: 'CRD', 'RBD' or 'LSD' (case-insensitive)
            columns: LSD only. n x n integer array giving the field column
                (0..n-1) of each observation; replications are the field
                rows. Default is the standard cyclic square, where
                treatment i in replication j sits in column (i + j) % n.

        Returns:
            AnovaDesign

        Raises:
            ValidationError: If the design is unknown, the rows have unequal
                replication, fewer than 2 treatments are given, the data
                are not finite numbers, an LSD matrix is not square, or
                the column layout is not a Latin square
        """
        design = normalize_design(design)

        check_equal_replication(matrix, "matrix")
        y_arr = check_array(matrix, "matrix")
        check_2d(y_arr, "matrix")
        check_finite(y_arr, "matrix")
        check_min_rows(y_arr, 2, "matrix")
        check_min_columns(y_arr, 1, "matrix")

        layout = None
        if design == 'LSD':
            check_square(y_arr, "matrix")
            layout = _latin_columns(columns, y_arr.shape[0])
        elif columns is not None:
            raise ValidationError(
                f"columns: only used by the LSD design, got design={design!r}"
            )

        # Callers own their input; keep an independent read-only copy
        y_arr = np.array(y_arr, dtype=np.float64, copy=True)
        y_arr.setflags(write=False)

        n_treatments, n_replications = y_arr.shape
        return AnovaDesign(
            y=y_arr,
            design=design,
            n_treatments=n_treatments,
            n_replications=n_replications,
            n=n_treatments * n_replications,
            columns=layout,
        )

    @staticmethod
    def from_text(
        text: str,
        design: str = 'CRD',
        *,
        columns: Any = None,
    ) -> 'AnovaDesign':
        """
        Create design from whitespace/comma/tab separated text.

        One treatment per non-blank line. See parse_matrix().

        Examples:
            >>> AnovaDesign.from_text("12.5 13.2\\n11.8 12.4", design='RBD')
        """
        return AnovaDesign.for_matrix(parse_matrix(text), design, columns=columns)


def _latin_columns(columns: Any, n: int) -> NDArray[np.integer[Any]]:
    """Validate (or build the cyclic default of) an LSD column layout."""
    if columns is None:
        idx = np.arange(n)
        layout = (idx[:, None] + idx[None, :]) % n
    else:
        arr = np.asarray(columns)
        if arr.shape != (n, n):
            raise DimensionError(
                f"columns: expected shape {(n, n)}, got {arr.shape}",
                actual_shape=arr.shape,
                expected_shape=(n, n),
            )
        if not np.issubdtype(arr.dtype, np.integer):
            raise ValidationError(
                f"columns: expected integer column indices, got dtype {arr.dtype}"
            )
        layout = arr.astype(np.intp)

    expected = np.arange(n)
    for i in range(n):
        if not np.array_equal(np.sort(layout[i, :]), expected):
            raise ValidationError(
                f"columns: treatment T{i + 1} must occupy each of the {n} "
                f"columns exactly once, got {layout[i, :].tolist()}"
            )
    for j in range(n):
        if not np.array_equal(np.sort(layout[:, j]), expected):
            raise ValidationError(
                f"columns: replication {j + 1} must use each of the {n} "
                f"columns exactly once, got {layout[:, j].tolist()}"
            )

    layout.setflags(write=False)
    return layout


def normalize_design(design: str) -> str:
    """Upper-case a design name and check it is supported."""
    if not isinstance(design, str):
        raise ValidationError(
            f"design must be one of {VALID_DESIGNS}, got {design!r}"
        )
    design = design.strip().upper()
    check_choice(design, VALID_DESIGNS, "design")
    return design


def parse_matrix(text: str) -> list[list[float]]:
    """
    Parse plain-text observations into a list of rows.

    Lines are split on runs of whitespace, commas or tabs. Blank lines are
    ignored.

    Args:
        text: Observation data, one treatment per line

    Returns:
        List of rows of floats (not validated for shape)

    Raises:
        ValidationError: If no data is given, or a token is not a number
    """
    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        raise ValidationError("matrix: no data entered")

    rows: list[list[float]] = []
    for lineno, line in enumerate(lines, start=1):
        tokens = [tok for tok in _TOKEN_SEPARATORS.split(line.strip()) if tok]
        if not tokens:
            raise ValidationError(f"matrix: empty row detected at line {lineno}")
        row: list[float] = []
        for tok in tokens:
            try:
                row.append(float(tok))
            except ValueError:
                raise ValidationError(
                    f"matrix: invalid number {tok!r} at line {lineno}"
                ) from None
        rows.append(row)

    return rows


def validate_shape(
    matrix: Any,
    design: str = 'CRD',
    *,
    columns: Any = None,
) -> tuple[int, int]:
    """
    Validate a matrix for a design and return (n_treatments, n_replications).

    Pure guard: raises ValidationError on failure, has no side effects.
    """
    d = AnovaDesign.for_matrix(matrix, design, columns=columns)
    return d.n_treatments, d.n_replications
