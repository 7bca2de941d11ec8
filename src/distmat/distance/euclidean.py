"""Pairwise Euclidean distance matrix kernels."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Literal

import numpy as np
from scipy.spatial.distance import pdist

from distmat.distance._numba_kernels import get_fill_kernel, is_numba_available
from distmat.exceptions import AllocationFailureError

logger = logging.getLogger(__name__)

BackendType = Literal["auto", "numpy", "numba", "scipy"]

SUPPORTED_BACKENDS: list[BackendType] = ["auto", "numpy", "numba", "scipy"]


def _numpy_fill_upper(X: np.ndarray, out: np.ndarray) -> None:
    """Reference loop: one outer row at a time, inner ``j > i`` slice vectorised."""
    n = X.shape[0]
    for i in range(n - 1):
        diff = X[i + 1 :] - X[i]
        dist = np.sqrt(np.einsum("ij,ij->i", diff, diff))
        out[i, i + 1 :] = dist
        out[i + 1 :, i] = dist


def _scipy_fill_upper(X: np.ndarray, out: np.ndarray) -> None:
    """Expand scipy's condensed upper triangle into both halves of ``out``."""
    n = X.shape[0]
    try:
        condensed = pdist(X, metric="euclidean")
    except MemoryError as exc:
        raise AllocationFailureError(n, np.dtype(np.float64).itemsize) from exc
    start = 0
    for i in range(n - 1):
        stop = start + n - 1 - i
        out[i, i + 1 :] = condensed[start:stop]
        out[i + 1 :, i] = condensed[start:stop]
        start = stop


def _get_fill(backend: str) -> Callable[[np.ndarray, np.ndarray], None]:
    if backend == "numba":
        return get_fill_kernel()
    if backend == "scipy":
        return _scipy_fill_upper
    return _numpy_fill_upper


def resolve_backend(backend: BackendType, dtype: np.dtype = np.dtype(np.float64)) -> str:
    """
    Resolve a backend name to the concrete backend that will run.

    Parameters
    ----------
    backend : BackendType
        Requested backend. ``"auto"`` picks numba when it is installed and
        ``dtype`` is float64, numpy otherwise.
    dtype : np.dtype
        Working dtype of the point array.

    Returns
    -------
    str
        One of ``"numpy"``, ``"numba"``, ``"scipy"``.

    Raises
    ------
    ValueError
        If the backend is unknown, or numba is requested but not installed.
    """
    if backend not in SUPPORTED_BACKENDS:
        raise ValueError(f"Unsupported backend: {backend}. Supported: {SUPPORTED_BACKENDS}")
    if backend == "auto":
        if is_numba_available() and np.dtype(dtype) == np.float64:
            return "numba"
        return "numpy"
    if backend == "numba" and not is_numba_available():
        raise ValueError("backend='numba' requested but numba is not installed")
    return backend


def allocate_distance_matrix(n: int, dtype: np.dtype = np.dtype(np.float64)) -> np.ndarray:
    """
    Allocate a zero-initialised ``(n, n)`` matrix.

    Raises
    ------
    AllocationFailureError
        If numpy cannot allocate the matrix.
    """
    try:
        return np.zeros((n, n), dtype=dtype)
    except (MemoryError, ValueError) as exc:
        raise AllocationFailureError(n, np.dtype(dtype).itemsize) from exc


def compute_distance_matrix(X: np.ndarray, backend: BackendType = "auto") -> np.ndarray:
    """
    Compute the pairwise Euclidean distance matrix.

    Only the strict upper triangle ``i < j`` is computed; each distance is
    written to both ``(i, j)`` and ``(j, i)``. The diagonal stays at the
    allocated zero.

    Parameters
    ----------
    X : np.ndarray
        Float data matrix of shape (n, d). Not modified.
    backend : BackendType, default="auto"
        Kernel to run. The numba and scipy kernels work in float64; the numpy
        kernel keeps wider float dtypes such as ``np.longdouble``.

    Returns
    -------
    np.ndarray
        Distance matrix of shape (n, n).
    """
    dtype = np.promote_types(X.dtype, np.float64)
    resolved = resolve_backend(backend, dtype)
    if resolved != "numpy":
        dtype = np.dtype(np.float64)
    X = np.ascontiguousarray(X, dtype=dtype)

    n = X.shape[0]
    out = allocate_distance_matrix(n, X.dtype)
    if n < 2:
        return out

    logger.debug("Filling %dx%d distance matrix (d=%d) with %s backend", n, n, X.shape[1], resolved)
    _get_fill(resolved)(X, out)
    return out
