"""
Shared pytest fixtures and utilities for testing sini matrices.

This module provides:
- Fixtures for building random matrices of a given class
- Helpers for comparing matrices with and without tolerance
- A switch for running with bounds checking disabled
"""

import numpy as np
import pytest
from typing import Any

from sini.core.config import settings
from sini.math.matrix import Matrix


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded random generator so failures reproduce."""
    return np.random.default_rng(1234)


@pytest.fixture
def random_matrix(rng):
    """Factory for matrices filled with small random values."""
    def _factory(matrix_class: type[Matrix], low: int = -5, high: int = 6) -> Matrix:
        """
        Create a matrix of ``matrix_class`` with integer-valued entries.

        Integer-valued entries keep float products exact, so tests can use
        exact equality where the math allows it.
        """
        size = matrix_class.nrows * matrix_class.ncols
        values = rng.integers(low, high, size=size)
        return matrix_class(values.astype(matrix_class.dtype))
    return _factory


@pytest.fixture
def assert_matrix_close():
    """Helper to assert two matrices match within floating tolerance."""
    def _assert_close(actual: Matrix, expected: Any, rtol: float = 1e-9, atol: float = 1e-9) -> None:
        """
        Assert that ``actual`` equals ``expected`` element-wise within tolerance.

        Args:
            actual: Matrix under test
            expected: Matrix or nested list with the expected values
            rtol: Relative tolerance
            atol: Absolute tolerance
        """
        expected_array = expected.to_numpy() if isinstance(expected, Matrix) else np.asarray(expected)
        assert actual.shape == expected_array.shape, f"{actual.shape} != {expected_array.shape}"
        np.testing.assert_allclose(actual.to_numpy(), expected_array, rtol=rtol, atol=atol)

    return _assert_close


@pytest.fixture
def no_bounds_check(monkeypatch):
    """Run a test with checked access turned into raw access."""
    monkeypatch.setattr(settings, "BOUNDS_CHECK", False)


pytestmark = [
    pytest.mark.filterwarnings("ignore::DeprecationWarning"),
]
