"""Exceptions raised while computing distance matrices."""

from __future__ import annotations


class DistanceMatrixError(Exception):
    """Base class for all distmat errors."""


class InvalidPointSetError(DistanceMatrixError, ValueError):
    """The point set is not a numeric matrix."""


class InvalidDimensionError(InvalidPointSetError):
    """The point set is not a well-formed N×D rectangular matrix."""


class NonFiniteInputError(InvalidPointSetError):
    """A coordinate is NaN or infinite and finiteness checking is enabled."""


class AllocationFailureError(DistanceMatrixError, MemoryError):
    """The N×N result matrix could not be allocated."""

    def __init__(self, n_points: int, itemsize: int) -> None:
        self.n_points = n_points
        self.nbytes = n_points * n_points * itemsize
        super().__init__(
            f"Cannot allocate a {n_points}x{n_points} distance matrix "
            f"({self.nbytes / 2**30:.1f} GiB)"
        )
