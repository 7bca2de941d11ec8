"""Validation utilities."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import pandas as pd

from distmat.exceptions import InvalidDimensionError, InvalidPointSetError, NonFiniteInputError


def _is_real_dtype(dtype: np.dtype) -> bool:
    return (
        np.issubdtype(dtype, np.integer) or np.issubdtype(dtype, np.floating) or dtype == np.bool_
    )


def as_point_array(
    points: pd.DataFrame | np.ndarray | Sequence,
    *,
    check_finite: bool = False,
) -> np.ndarray:
    """
    Coerce a point set to a 2D numeric array without copying when possible.

    Parameters
    ----------
    points : pd.DataFrame, np.ndarray or nested sequence
        Point set with one point per row. For DataFrames only numeric and
        boolean columns are used, read as float with missing values as NaN.
        A 1D input is read as points with a single coordinate.
    check_finite : bool, default=False
        Whether to reject NaN/Inf values.

    Returns
    -------
    np.ndarray
        Array of shape (n, d). May share memory with ``points``; callers must
        not write to it.

    Raises
    ------
    InvalidDimensionError
        If the rows are ragged, the input has more than two dimensions, or
        a non-empty point set has no coordinates.
    InvalidPointSetError
        If the values are not real numbers.
    NonFiniteInputError
        If ``check_finite`` is set and a value is NaN or Inf.
    """
    if isinstance(points, pd.DataFrame):
        numeric = points.select_dtypes(include=[np.number, "bool", "boolean"])
        if numeric.shape[1] == 0 and points.shape[1] > 0:
            raise InvalidPointSetError("Input DataFrame has no numeric columns")
        # Nullable extension columns (Int64, Float64) hold pd.NA; read it as NaN.
        wide = any(
            isinstance(dtype, np.dtype) and dtype.kind == "f" and dtype.itemsize > 8
            for dtype in numeric.dtypes
        )
        X = numeric.to_numpy(dtype=np.longdouble if wide else np.float64, na_value=np.nan)
    else:
        try:
            X = np.asarray(points)
        except ValueError as exc:
            raise InvalidDimensionError(f"Points must form a rectangular matrix: {exc}") from exc

    if X.ndim == 1:
        X = X.reshape(-1, 1)
    if X.ndim != 2:
        raise InvalidDimensionError(f"Points must be a 1D or 2D array, got {X.ndim}D")

    n, d = X.shape
    if n > 0 and d == 0:
        raise InvalidDimensionError(
            f"Points must have at least one coordinate, got shape {X.shape}"
        )
    if not _is_real_dtype(X.dtype):
        raise InvalidPointSetError(f"Points must be real-valued numbers, got dtype {X.dtype}")
    if check_finite and not np.isfinite(X).all():
        raise NonFiniteInputError("Points contain NaN or Inf values")

    return X


def check_distance_matrix(
    distance_matrix: np.ndarray,
    *,
    rtol: float = 1e-05,
    atol: float = 1e-08,
) -> None:
    """
    Validate a distance matrix.

    Parameters
    ----------
    distance_matrix : np.ndarray
        Distance matrix to validate.
    rtol, atol : float
        Tolerances for the symmetry and zero-diagonal checks.

    Raises
    ------
    ValueError
        If the matrix is not valid.
    """
    if distance_matrix.ndim != 2:
        raise ValueError("Distance matrix must be 2-dimensional")

    n, m = distance_matrix.shape
    if n != m:
        raise ValueError(f"Distance matrix must be square, got shape {distance_matrix.shape}")

    if not np.isfinite(distance_matrix).all():
        raise ValueError("Distance matrix must contain only finite values")

    if np.any(distance_matrix < 0):
        raise ValueError("Distance matrix must have non-negative entries")

    if not np.allclose(distance_matrix, distance_matrix.T, rtol=rtol, atol=atol):
        raise ValueError("Distance matrix must be symmetric")

    if not np.allclose(np.diag(distance_matrix), 0, rtol=rtol, atol=atol):
        raise ValueError("Distance matrix must have zero diagonal")
