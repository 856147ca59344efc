"""
Input validation for observation matrices.

Every check raises ValidationError (or DimensionError) with the parameter
name and the offending value in the message; none of them repairs its
input. The ANOVA design factories call them in a fixed order so that a
malformed matrix always reports the most specific problem first:
ragged rows, then non-numeric data, then shape, then values.
"""

from collections.abc import Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pyfieldstat.core.exceptions import ValidationError, DimensionError


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Convert an array-like of observations to a float64 ndarray.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        float64 numpy.ndarray (the input itself when it already is one)

    Raises:
        ValidationError: If the input is empty, not convertible, or holds
            anything but real numbers
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    # Strings, booleans and complex numbers are not observations
    if not np.issubdtype(result.dtype, np.number) or np.issubdtype(result.dtype, np.complexfloating):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if result.size == 0:
        raise ValidationError(f"{name}: empty input, expected numeric data")

    if result.dtype != np.float64:
        result = result.astype(np.float64)

    return result


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """Reject NaN and +/-Inf, reporting how many of each were found."""
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Require exactly `ndim` dimensions.

    Raises:
        DimensionError: With actual_shape set to the received shape
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}",
            actual_shape=array.shape,
        )


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Require a treatments x replications matrix."""
    check_ndim(array, 2, name)


def check_equal_replication(rows: Any, name: str) -> None:
    """
    Verify every row of a nested sequence has the same length.

    Runs on the raw input, before array conversion, so that a ragged
    matrix is reported as unequal replication rather than as a failed
    conversion. numpy arrays are rectangular by construction and pass.

    Args:
        rows: Nested sequence (one inner sequence per treatment)
        name: Parameter name for error messages

    Raises:
        ValidationError: If the rows have different lengths
    """
    if isinstance(rows, np.ndarray) or not isinstance(rows, Sequence):
        return
    if isinstance(rows, (str, bytes)):
        return

    lengths = []
    for row in rows:
        if isinstance(row, (str, bytes)) or not hasattr(row, '__len__'):
            return
        lengths.append(len(row))

    if len(set(lengths)) > 1:
        raise ValidationError(
            f"{name}: each group must have equal replication, got row lengths {lengths}"
        )


def check_min_rows(array: NDArray[np.floating[Any]], min_rows: int, name: str) -> None:
    """
    Verify a matrix has at least the minimum number of rows (treatments).

    Args:
        array: 2D array to check
        min_rows: Minimum required rows
        name: Parameter name for error messages

    Raises:
        ValidationError: If array has fewer than min_rows rows
    """
    n = array.shape[0]
    if n < min_rows:
        raise ValidationError(
            f"{name}: at least {min_rows} groups required, got {n}"
        )


def check_min_columns(array: NDArray[np.floating[Any]], min_columns: int, name: str) -> None:
    """
    Verify a matrix has at least the minimum number of columns (replications).

    Args:
        array: 2D array to check
        min_columns: Minimum required columns
        name: Parameter name for error messages

    Raises:
        ValidationError: If array has fewer than min_columns columns
    """
    n = array.shape[1]
    if n < min_columns:
        raise ValidationError(
            f"{name}: at least {min_columns} replication required, got {n}"
        )


def check_square(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify a 2D array is square.

    Args:
        array: 2D array to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If rows != columns
    """
    n_rows, n_cols = array.shape
    if n_rows != n_cols:
        raise ValidationError(
            f"{name}: Latin square design requires a square matrix "
            f"(treatments == replications), got {n_rows}x{n_cols}"
        )


def check_choice(value: str, choices: tuple[str, ...], name: str) -> None:
    """
    Verify a string option is one of the allowed values.

    Args:
        value: Option to check
        choices: Allowed values
        name: Parameter name for error messages

    Raises:
        ValidationError: If value is not in choices
    """
    if value not in choices:
        raise ValidationError(
            f"{name} must be one of {choices}, got {value!r}"
        )
