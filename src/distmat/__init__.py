"""distmat: pairwise Euclidean distance matrices for dense point sets."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

import numpy as np

from distmat._version import __version__
from distmat.computer import DistanceMatrixComputer
from distmat.distance.euclidean import BackendType
from distmat.exceptions import (
    AllocationFailureError,
    DistanceMatrixError,
    InvalidDimensionError,
    InvalidPointSetError,
    NonFiniteInputError,
)

if TYPE_CHECKING:
    import pandas as pd

__all__ = [
    "__version__",
    "AllocationFailureError",
    "DistanceMatrixComputer",
    "DistanceMatrixError",
    "InvalidDimensionError",
    "InvalidPointSetError",
    "NonFiniteInputError",
    "distance_matrix",
]


def distance_matrix(
    points: pd.DataFrame | np.ndarray | Sequence,
    *,
    backend: BackendType = "auto",
    check_finite: bool = False,
    n_jobs: int = -1,
) -> np.ndarray:
    """
    One-liner convenience function for the pairwise distance matrix.

    Parameters
    ----------
    points : pd.DataFrame, np.ndarray or nested sequence
        Point set of shape (n, d).
    backend : BackendType, default="auto"
        Kernel. One of "auto", "numpy", "numba", "scipy".
    check_finite : bool, default=False
        Reject NaN/Inf coordinates instead of propagating NaN distances.
    n_jobs : int, default=-1
        Max threads for the numba kernel and BLAS/OpenMP pools.

    Returns
    -------
    np.ndarray
        Symmetric, zero-diagonal distance matrix of shape (n, n).

    Examples
    --------
    >>> from distmat import distance_matrix
    >>> distance_matrix([[0, 0], [3, 4]])
    array([[0., 5.],
           [5., 0.]])
    """
    return DistanceMatrixComputer(
        backend=backend,
        check_finite=check_finite,
        n_jobs=n_jobs,
    ).compute(points)
