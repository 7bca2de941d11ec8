"""Tests for the public DistanceMatrixComputer API."""

import logging

import numpy as np
import pandas as pd
import pytest
from scipy.spatial.distance import cdist

import distmat
from distmat import (
    AllocationFailureError,
    DistanceMatrixComputer,
    InvalidDimensionError,
    NonFiniteInputError,
    distance_matrix,
)
from distmat.distance import euclidean, is_numba_available
from distmat.utils.validation import check_distance_matrix


class TestDistanceMatrixComputer:
    """Tests for DistanceMatrixComputer."""

    def test_basic_usage(self, random_points, backend):
        """Should produce a valid distance matrix."""
        D = DistanceMatrixComputer(backend=backend).compute(random_points)
        assert D.shape == (40, 40)
        check_distance_matrix(D)

    def test_nested_list_input(self):
        """Plain Python lists are accepted."""
        D = DistanceMatrixComputer(backend="numpy").compute([[0, 0], [3, 4]])
        np.testing.assert_array_equal(D, [[0.0, 5.0], [5.0, 0.0]])

    def test_dataframe_input(self, points_df, random_points):
        """DataFrames use their numeric columns."""
        D = DistanceMatrixComputer(backend="numpy").compute(points_df)
        np.testing.assert_allclose(D, cdist(random_points, random_points), rtol=1e-12)

    def test_one_dimensional_input(self):
        """1D input is a set of scalar points."""
        D = DistanceMatrixComputer(backend="numpy").compute([1.0, 4.0, -1.0])
        np.testing.assert_array_equal(D, [[0, 3, 2], [3, 0, 5], [2, 5, 0]])

    def test_empty_and_single(self, backend):
        """N == 0 and N == 1 edge cases."""
        computer = DistanceMatrixComputer(backend=backend)
        assert computer.compute([]).shape == (0, 0)
        np.testing.assert_array_equal(computer.compute([[1.0, 2.0]]), [[0.0]])

    def test_result_is_fresh(self, random_points):
        """Each call returns a new array the caller may modify."""
        computer = DistanceMatrixComputer(backend="numpy")
        first = computer.compute(random_points)
        first[0, 1] = -1.0
        second = computer.compute(random_points)
        assert second[0, 1] > 0

    def test_ragged_rows_fail_fast(self):
        """Ragged input raises before any computation."""
        with pytest.raises(InvalidDimensionError):
            DistanceMatrixComputer().compute([[0.0, 1.0], [2.0]])

    def test_nan_propagates_by_default(self):
        """NaN coordinates produce NaN distances."""
        D = DistanceMatrixComputer(backend="numpy").compute([[0.0], [np.nan]])
        assert np.isnan(D[0, 1])

    def test_check_finite(self):
        """NaN coordinates are rejected with check_finite."""
        with pytest.raises(NonFiniteInputError):
            DistanceMatrixComputer(check_finite=True).compute([[0.0], [np.inf]])

    def test_allocation_failure_propagates(self, monkeypatch):
        """Allocation errors reach the caller without a partial result."""
        original = euclidean.allocate_distance_matrix
        monkeypatch.setattr(
            euclidean, "allocate_distance_matrix", lambda n, dtype: original(2**40, dtype)
        )
        with pytest.raises(AllocationFailureError):
            DistanceMatrixComputer(backend="numpy").compute([[0.0], [1.0]])

    def test_nullable_dataframe_input(self):
        """Nullable integer DataFrames give the expected distances."""
        df = pd.DataFrame(
            {"x": pd.array([0, 3], dtype="Int64"), "y": pd.array([0, 4], dtype="Int64")}
        )
        D = DistanceMatrixComputer(backend="numpy").compute(df)
        assert D[0, 1] == 5.0

    def test_numpy_integer_n_jobs(self):
        """numpy integers are accepted for n_jobs."""
        assert DistanceMatrixComputer(n_jobs=np.int64(2)).n_jobs == 2

    def test_thread_limit(self, random_points, backend):
        """A capped thread budget gives the same result."""
        limited = DistanceMatrixComputer(backend=backend, n_jobs=1).compute(random_points)
        unlimited = DistanceMatrixComputer(backend=backend).compute(random_points)
        np.testing.assert_allclose(limited, unlimited, rtol=1e-12)

    @pytest.mark.skipif(not is_numba_available(), reason="numba not installed")
    def test_thread_limit_restores_numba_threads(self, random_points):
        """Numba's thread count is restored after the call."""
        import numba

        before = numba.get_num_threads()
        DistanceMatrixComputer(backend="numba", n_jobs=1).compute(random_points)
        assert numba.get_num_threads() == before

    def test_debug_logging(self, random_points, caplog):
        """Backend choice and sizes are logged at DEBUG."""
        with caplog.at_level(logging.DEBUG, logger="distmat"):
            DistanceMatrixComputer(backend="numpy").compute(random_points)
        messages = " ".join(record.getMessage() for record in caplog.records)
        assert "40 points" in messages
        assert "numpy backend" in messages

    def test_repr(self):
        """repr shows the configuration."""
        assert "backend='scipy'" in repr(DistanceMatrixComputer(backend="scipy"))


class TestParameterValidation:
    """Constructor argument checks."""

    def test_invalid_backend(self):
        """Unknown backends should raise."""
        with pytest.raises(ValueError, match="Unsupported backend"):
            DistanceMatrixComputer(backend="gpu")

    @pytest.mark.parametrize("n_jobs", [0, -2, 1.5, None, True, "2"])
    def test_invalid_n_jobs(self, n_jobs):
        """n_jobs must be -1 or a positive integer."""
        with pytest.raises(ValueError, match="n_jobs"):
            DistanceMatrixComputer(n_jobs=n_jobs)

    @pytest.mark.skipif(is_numba_available(), reason="numba is installed")
    def test_numba_unavailable(self):
        """Requesting numba without it installed fails at construction."""
        with pytest.raises(ValueError, match="numba"):
            DistanceMatrixComputer(backend="numba")


class TestConvenienceFunction:
    """Tests for distance_matrix()."""

    def test_scenario(self):
        """Unit right triangle."""
        D = distance_matrix([[0, 0], [1, 0], [0, 1]])
        np.testing.assert_allclose(D, [[0, 1, 1], [1, 0, np.sqrt(2)], [1, np.sqrt(2), 0]])

    def test_forwards_options(self):
        """Keyword options reach the computer."""
        with pytest.raises(NonFiniteInputError):
            distance_matrix([[np.nan]], check_finite=True)

    def test_version(self):
        """Package exposes a version string."""
        assert isinstance(distmat.__version__, str)
