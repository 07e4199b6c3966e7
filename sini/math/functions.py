"""
Free functions over matrices.

Element-wise products, transpose, power, dimension query and the explicit
bridge between column vectors (1-D numpy arrays) and 1 x N row-vector
matrices. Functions prefixed ``eq_`` update their first argument in place
and return it.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from sini.compat import dual_target
from sini.core.errors import DimensionError

from .matrix import Matrix
from .value import divide


@dual_target
def to_row_vector(vector: Any) -> Matrix:
    """
    Turn an N-component vector into a 1 x N matrix.

    This is the only way to multiply a vector from the left:
    ``to_row_vector(v) * m``.

    Raises:
        DimensionError: If ``vector`` is not one-dimensional
    """
    array = np.asarray(vector)
    if array.ndim != 1:
        raise DimensionError(
            f"Expected a one-dimensional vector, got shape {array.shape}",
            shape=array.shape,
        )
    return Matrix[array.dtype, 1, array.shape[0]]._wrap(array.copy())


@dual_target
def to_column_vector(mat: Matrix) -> np.ndarray:
    """
    Turn a 1 x N matrix back into an N-component vector.

    Raises:
        DimensionError: If the matrix has more than one row
    """
    if mat.nrows != 1:
        raise DimensionError(
            f"Only 1xN matrices convert to vectors, got {mat.nrows}x{mat.ncols}",
            shape=mat.shape,
            expected=(1, mat.ncols),
        )
    return mat.data.copy()


@dual_target
def elem_mult(left: Matrix, right: Matrix) -> Matrix:
    """Position-wise product (not the matrix product)."""
    return type(left)._wrap(left.data * left._operand(right, "multiply"))


@dual_target
def eq_elem_mult(left: Matrix, right: Matrix) -> Matrix:
    """In-place position-wise product; returns ``left``."""
    np.multiply(left.data, left._operand(right, "multiply"), out=left.data)
    return left


@dual_target
def elem_div(left: Matrix, right: Matrix) -> Matrix:
    """
    Position-wise quotient.

    Division by zero follows the element type: inf/nan for floats,
    an unspecified value for integers. Nothing is raised.
    """
    return type(left)._wrap(divide(left.data, left._operand(right, "divide"), left.dtype))


@dual_target
def eq_elem_div(left: Matrix, right: Matrix) -> Matrix:
    """In-place position-wise quotient; returns ``left``."""
    left.data[:] = divide(left.data, left._operand(right, "divide"), left.dtype)
    return left


@dual_target
def transpose(mat: Matrix) -> Matrix:
    """N x M transpose of an M x N matrix."""
    return mat.transpose()


@dual_target
def eq_pow(mat: Matrix, exponent: int) -> Matrix:
    """
    Raise a square matrix to a non-negative integer power in place.

    ``pow(mat, exponent)`` / ``mat ** exponent`` is the non-mutating form.
    """
    mat **= exponent
    return mat


@dual_target
def dimensions(mat: Matrix) -> np.ndarray:
    """(M, N) as an unsigned 2-vector."""
    return np.array(mat.shape, dtype=np.uint32)
