"""
Determinant, minor, adjugate and inverse of small matrices.

Standalone functions delegating to the closed-form implementations on
Mat2, Mat3 and Mat4. Other sizes have no implementation here and raise
TypeError rather than fall back to a general algorithm.
"""

from __future__ import annotations

from typing import Any

from sini.compat import dual_target

from .matrix import Matrix
from .square import Mat2, Mat3, Mat4


def _describe(obj: Any) -> str:
    if isinstance(obj, Matrix):
        return f"{obj.nrows}x{obj.ncols} matrix"
    return type(obj).__name__


@dual_target
def det(mat: Matrix) -> Any:
    """
    Determinant of a 2x2, 3x3 or 4x4 matrix.

    Examples:
        >>> float(det(Mat2([[1, 2], [3, 4]])))
        -2.0
    """
    if isinstance(mat, (Mat2, Mat3, Mat4)):
        return mat.determinant()
    raise TypeError(f"det() requires a 2x2, 3x3 or 4x4 matrix, got {_describe(mat)}")


@dual_target
def minor(mat: Matrix, i: int, j: int) -> Any:
    """Determinant of ``mat.submatrix(i, j)`` for 3x3 and 4x4 matrices."""
    if isinstance(mat, (Mat3, Mat4)):
        return mat.minor(i, j)
    raise TypeError(f"minor() requires a 3x3 or 4x4 matrix, got {_describe(mat)}")


@dual_target
def adj(mat: Matrix) -> Matrix:
    """Adjugate (transposed cofactor matrix); ``mat * adj(mat) == det(mat) * I``."""
    if isinstance(mat, (Mat2, Mat3, Mat4)):
        return mat.adjugate()
    raise TypeError(f"adj() requires a 2x2, 3x3 or 4x4 matrix, got {_describe(mat)}")


@dual_target
def inverse(mat: Matrix) -> Matrix:
    """
    Inverse of a 2x2 or 3x3 matrix as ``adj(mat) / det(mat)``.

    The determinant is not checked. Check ``det(mat) != 0`` first; integer
    matrices only invert meaningfully when the determinant is +-1.
    """
    if isinstance(mat, (Mat2, Mat3)):
        return mat.inverse()
    raise TypeError(f"inverse() requires a 2x2 or 3x3 matrix, got {_describe(mat)}")
