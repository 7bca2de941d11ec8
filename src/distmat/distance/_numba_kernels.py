"""Numba JIT-compiled distance matrix kernel."""

from __future__ import annotations

from collections.abc import Callable

import numpy as np

# Flag to track if Numba is available
_NUMBA_AVAILABLE = False

try:
    from numba import jit, prange

    _NUMBA_AVAILABLE = True
except ImportError:
    pass


def is_numba_available() -> bool:
    """Check if Numba is available."""
    return _NUMBA_AVAILABLE


if _NUMBA_AVAILABLE:

    # fastmath stays off: it assumes no NaN/Inf, and those must propagate.
    @jit(nopython=True, parallel=True, cache=True)
    def _euclidean_fill_upper(X: np.ndarray, out: np.ndarray) -> None:
        """Fill ``out`` with Euclidean distances, one outer row per thread."""
        n, d = X.shape

        for i in prange(n):
            for j in range(i + 1, n):
                dist_sq = 0.0
                for k in range(d):
                    diff = X[i, k] - X[j, k]
                    dist_sq += diff * diff
                dist = np.sqrt(dist_sq)
                out[i, j] = dist
                out[j, i] = dist


def get_fill_kernel() -> Callable[[np.ndarray, np.ndarray], None]:
    """
    Get the compiled fill kernel.

    Returns
    -------
    Callable
        Function ``(X, out)`` writing pairwise distances of ``X`` into the
        zero-initialised square matrix ``out``.

    Raises
    ------
    ImportError
        If Numba is not installed.
    """
    if not _NUMBA_AVAILABLE:
        raise ImportError("numba is not installed; install distmat[fast]")
    return _euclidean_fill_upper
