"""Test fixtures."""

import numpy as np
import pandas as pd
import pytest

from distmat.distance import is_numba_available

AVAILABLE_BACKENDS = ["numpy", "scipy"] + (["numba"] if is_numba_available() else [])


@pytest.fixture(params=AVAILABLE_BACKENDS)
def backend(request):
    """Every backend that can run in this environment."""
    return request.param


@pytest.fixture
def random_points():
    """Random 3D point cloud."""
    rng = np.random.default_rng(42)
    return rng.normal(size=(40, 3))


@pytest.fixture
def points_df(random_points):
    """Point cloud as a DataFrame with a non-numeric label column."""
    df = pd.DataFrame(random_points, columns=["x", "y", "z"])
    df["label"] = "p"
    return df


@pytest.fixture
def collinear_points():
    """1D collinear points."""
    return np.array([[i] for i in range(10)], dtype=float)
