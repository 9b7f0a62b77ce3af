"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def spd_matrix(rng):
    """Well-conditioned 5x5 symmetric positive-definite matrix."""
    n = 5
    B = rng.standard_normal((n, n))
    return B @ B.T + n * np.eye(n)


@pytest.fixture
def covariance_data(rng):
    """Sample covariance of correlated data, with the data it came from."""
    n, p = 200, 4
    mixing = np.array([
        [1.0, 0.0, 0.0, 0.0],
        [0.8, 0.6, 0.0, 0.0],
        [0.2, -0.3, 0.9, 0.0],
        [0.0, 0.5, 0.5, 0.7],
    ])
    X = rng.standard_normal((n, p)) @ mixing.T
    return np.cov(X, rowvar=False), X


@pytest.fixture
def rank_deficient_matrix():
    """3x3 PSD matrix with a zero eigenvalue in the trailing position."""
    return np.diag([1.0, 1.0, 0.0])
