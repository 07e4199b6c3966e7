"""
sini.math - fixed-size matrices for transform math

- Matrix[dtype, M, N]: generic row-major matrix
- Mat2, Mat3, Mat4: square forms with named fields and closed-form
  determinant/adjugate/inverse
- free functions for element-wise products, transpose, power, dimensions
  and row/column vector conversion

Vectors are 1-D numpy arrays.
"""

from .matrix import Matrix, specialize
from .square import (
    Mat2,
    Mat3,
    Mat4,
    mat2,
    mat2d,
    mat2i,
    mat3,
    mat3d,
    mat3i,
    mat4,
    mat4d,
    mat4i,
)
from .functions import (
    dimensions,
    elem_div,
    elem_mult,
    eq_elem_div,
    eq_elem_mult,
    eq_pow,
    to_column_vector,
    to_row_vector,
    transpose,
)
from .linalg import adj, det, inverse, minor

__all__ = [
    "Matrix",
    "specialize",
    "Mat2",
    "Mat3",
    "Mat4",
    "mat2",
    "mat2d",
    "mat2i",
    "mat3",
    "mat3d",
    "mat3i",
    "mat4",
    "mat4d",
    "mat4i",
    "to_row_vector",
    "to_column_vector",
    "elem_mult",
    "eq_elem_mult",
    "elem_div",
    "eq_elem_div",
    "transpose",
    "eq_pow",
    "dimensions",
    "det",
    "minor",
    "adj",
    "inverse",
]
