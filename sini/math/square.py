"""
Square 2x2, 3x3 and 4x4 matrices.

Same contract as the generic Matrix, plus three views of one buffer:
row vectors (``m[i]``), alphabetic fields (``m.a``, ``m.b``, ... in row-major
order) and positional fields (``m.e00``, ``m.e01``, ...). Every field is a
property over ``data``, so a write through any view shows up in the others.

Each size carries its own closed-form determinant and adjugate; 2x2 and 3x3
also have an inverse. There is no generic fallback.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from sini.compat import dual_target
from sini.core.config import settings
from sini.core.logging import get_context_logger

from .matrix import Matrix, specialize
from .value import divide


def _element(index: int) -> property:
    """Read/write property aliasing ``data[index]``."""

    def fget(self: Matrix) -> Any:
        return self.data[index]

    def fset(self: Matrix, value: Any) -> None:
        self.data[index] = value

    return property(fget, fset, doc=f"Element {index} of the row-major buffer.")


def _adjugate(mat: Mat3 | Mat4) -> Matrix:
    """Transposed cofactor matrix: entry (i, j) is (-1)^(i+j) * minor(j, i)."""
    size = mat.nrows
    cofactors = [
        (-1) ** (i + j) * mat.minor(j, i)
        for i in range(size)
        for j in range(size)
    ]
    return type(mat)._wrap(np.array(cofactors, dtype=mat.dtype))


def _inverse(mat: Mat2 | Mat3) -> Matrix:
    determinant = mat.determinant()
    if determinant == 0:
        get_context_logger(__name__, matrix=type(mat).__name__).debug(
            "Inverting singular matrix; result is not finite",
            extra_data={"determinant": determinant.item()},
        )
    return type(mat)._wrap(divide(mat.adjugate().data, determinant, mat.dtype))


class Mat2(Matrix):
    """
    2x2 matrix.

    Fields::

        a b     e00 e01
        c d     e10 e11
    """

    nrows = 2
    ncols = 2
    dtype = np.dtype(settings.DEFAULT_DTYPE)

    a = e00 = _element(0)
    b = e01 = _element(1)
    c = e10 = _element(2)
    d = e11 = _element(3)

    def __class_getitem__(cls, dtype: Any) -> type[Matrix]:
        return specialize(dtype, 2, 2)

    @dual_target
    def determinant(self) -> Any:
        """a*d - b*c"""
        return self.a * self.d - self.b * self.c

    @dual_target
    def adjugate(self) -> Mat2:
        """[[d, -b], [-c, a]]"""
        return type(self)._wrap(
            np.array([self.d, -self.b, -self.c, self.a], dtype=self.dtype)
        )

    @dual_target
    def inverse(self) -> Mat2:
        """
        adjugate / determinant.

        A zero determinant is not checked: float matrices come back with
        inf/nan entries, integer matrices with unspecified values.
        """
        return _inverse(self)


class Mat3(Matrix):
    """
    3x3 matrix.

    Fields::

        a b c     e00 e01 e02
        d e f     e10 e11 e12
        g h i     e20 e21 e22
    """

    nrows = 3
    ncols = 3
    dtype = np.dtype(settings.DEFAULT_DTYPE)

    a = e00 = _element(0)
    b = e01 = _element(1)
    c = e02 = _element(2)
    d = e10 = _element(3)
    e = e11 = _element(4)
    f = e12 = _element(5)
    g = e20 = _element(6)
    h = e21 = _element(7)
    i = e22 = _element(8)

    def __class_getitem__(cls, dtype: Any) -> type[Matrix]:
        return specialize(dtype, 3, 3)

    @dual_target
    def determinant(self) -> Any:
        """Cofactor expansion along the first row."""
        return (
            self.a * (self.e * self.i - self.f * self.h)
            - self.b * (self.d * self.i - self.f * self.g)
            + self.c * (self.d * self.h - self.e * self.g)
        )

    @dual_target
    def minor(self, i: int, j: int) -> Any:
        """Determinant of the 2x2 submatrix without row i and column j."""
        return self.submatrix(i, j).determinant()

    @dual_target
    def adjugate(self) -> Mat3:
        return _adjugate(self)

    @dual_target
    def inverse(self) -> Mat3:
        """adjugate / determinant; a zero determinant is not checked."""
        return _inverse(self)


class Mat4(Matrix):
    """
    4x4 matrix.

    Fields::

        a b c d     e00 e01 e02 e03
        e f g h     e10 e11 e12 e13
        i j k l     e20 e21 e22 e23
        m n o p     e30 e31 e32 e33
    """

    nrows = 4
    ncols = 4
    dtype = np.dtype(settings.DEFAULT_DTYPE)

    a = e00 = _element(0)
    b = e01 = _element(1)
    c = e02 = _element(2)
    d = e03 = _element(3)
    e = e10 = _element(4)
    f = e11 = _element(5)
    g = e12 = _element(6)
    h = e13 = _element(7)
    i = e20 = _element(8)
    j = e21 = _element(9)
    k = e22 = _element(10)
    l = e23 = _element(11)  # noqa: E741
    m = e30 = _element(12)
    n = e31 = _element(13)
    o = e32 = _element(14)
    p = e33 = _element(15)

    def __class_getitem__(cls, dtype: Any) -> type[Matrix]:
        return specialize(dtype, 4, 4)

    @dual_target
    def determinant(self) -> Any:
        """Cofactor expansion along the first row, using the 3x3 minors."""
        return (
            self.e00 * self.minor(0, 0)
            - self.e01 * self.minor(0, 1)
            + self.e02 * self.minor(0, 2)
            - self.e03 * self.minor(0, 3)
        )

    @dual_target
    def minor(self, i: int, j: int) -> Any:
        """Determinant of the 3x3 submatrix without row i and column j."""
        return self.submatrix(i, j).determinant()

    @dual_target
    def adjugate(self) -> Mat4:
        return _adjugate(self)


_SQUARE_BASES: dict[int, type[Matrix]] = {2: Mat2, 3: Mat3, 4: Mat4}


def square_base(nrows: int, ncols: int) -> type[Matrix] | None:
    """Specialized base class for a shape, or None for the generic path."""
    if nrows != ncols:
        return None
    return _SQUARE_BASES.get(nrows)


# Predefined element types
mat2 = Matrix[np.float32, 2, 2]
mat2d = Matrix[np.float64, 2, 2]
mat2i = Matrix[np.int32, 2, 2]

mat3 = Matrix[np.float32, 3, 3]
mat3d = Matrix[np.float64, 3, 3]
mat3i = Matrix[np.int32, 3, 3]

mat4 = Matrix[np.float32, 4, 4]
mat4d = Matrix[np.float64, 4, 4]
mat4i = Matrix[np.int32, 4, 4]
