"""Distance matrix computer."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager

import numpy as np
import pandas as pd
from threadpoolctl import threadpool_limits

from distmat.distance.euclidean import (
    BackendType,
    compute_distance_matrix,
    resolve_backend,
)
from distmat.utils.validation import as_point_array

logger = logging.getLogger(__name__)

DEFAULT_BACKEND: BackendType = "auto"


@contextmanager
def _numba_thread_limit(n_jobs: int) -> Iterator[None]:
    try:
        import numba  # type: ignore[import-not-found]
    except ImportError:
        yield
        return
    prev_threads = numba.get_num_threads()
    numba.set_num_threads(min(n_jobs, numba.config.NUMBA_NUM_THREADS))
    try:
        yield
    finally:
        numba.set_num_threads(prev_threads)


class DistanceMatrixComputer:
    """
    Computes the pairwise Euclidean distance matrix of a point set.

    The result for N points is a fresh N×N array, symmetric with a zero
    diagonal. Only pairs ``i < j`` are evaluated and each distance is written
    to both ``(i, j)`` and ``(j, i)``.

    Parameters
    ----------
    backend : {"auto", "numpy", "numba", "scipy"}, default="auto"
        Kernel used to fill the matrix. "auto" uses numba when it is installed
        and the points are float64-compatible, numpy otherwise.
    check_finite : bool, default=False
        Reject NaN/Inf coordinates with ``NonFiniteInputError``. When False,
        they propagate into NaN distances.
    n_jobs : int, default=-1
        Max threads for the numba kernel and BLAS/OpenMP pools. -1 leaves the
        thread pools untouched.

    Examples
    --------
    >>> from distmat import DistanceMatrixComputer
    >>> DistanceMatrixComputer().compute([[0, 0], [3, 4]])
    array([[0., 5.],
           [5., 0.]])
    """

    def __init__(
        self,
        backend: BackendType = DEFAULT_BACKEND,
        check_finite: bool = False,
        n_jobs: int = -1,
    ) -> None:
        if (
            isinstance(n_jobs, bool)
            or not isinstance(n_jobs, (int, np.integer))
            or n_jobs == 0
            or n_jobs < -1
        ):
            raise ValueError("n_jobs must be -1 or a positive integer")

        # Unknown or uninstalled backends raise here, not on compute().
        resolve_backend(backend)

        self.backend = backend
        self.check_finite = check_finite
        self.n_jobs = int(n_jobs)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(backend={self.backend!r}, "
            f"check_finite={self.check_finite}, n_jobs={self.n_jobs})"
        )

    def _run_with_thread_limits(self, func: Callable[[], np.ndarray]) -> np.ndarray:
        if self.n_jobs == -1:
            return func()
        with threadpool_limits(limits=self.n_jobs), _numba_thread_limit(self.n_jobs):
            return func()

    def compute(self, points: pd.DataFrame | np.ndarray | Sequence) -> np.ndarray:
        """
        Compute the distance matrix of ``points``.

        Parameters
        ----------
        points : pd.DataFrame, np.ndarray or nested sequence
            Point set of shape (n, d). Never modified.

        Returns
        -------
        np.ndarray
            Distance matrix of shape (n, n), owned by the caller.

        Raises
        ------
        InvalidDimensionError
            If ``points`` is not a rectangular 1D/2D matrix.
        InvalidPointSetError
            If ``points`` is not real-valued.
        NonFiniteInputError
            If ``check_finite`` is set and a coordinate is NaN or Inf.
        AllocationFailureError
            If the result matrix cannot be allocated.
        """
        X = as_point_array(points, check_finite=self.check_finite)
        logger.debug(
            "Computing distance matrix for %d points in %d dimensions", X.shape[0], X.shape[1]
        )
        return self._run_with_thread_limits(
            lambda: compute_distance_matrix(X, backend=self.backend)
        )
