"""Distance computation utilities."""

from distmat.distance._numba_kernels import is_numba_available
from distmat.distance.euclidean import (
    SUPPORTED_BACKENDS,
    BackendType,
    allocate_distance_matrix,
    compute_distance_matrix,
    resolve_backend,
)

__all__ = [
    "SUPPORTED_BACKENDS",
    "BackendType",
    "allocate_distance_matrix",
    "compute_distance_matrix",
    "is_numba_available",
    "resolve_backend",
]
