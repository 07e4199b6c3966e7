"""Tests for the 2x2, 3x3 and 4x4 square matrices."""

import numpy as np
import pytest

from sini.core.errors import BoundsError
from sini.math.matrix import Matrix
from sini.math.square import (
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


SQUARE_CLASSES = [Mat2, Mat3, Mat4]
LETTERS = "abcdefghijklmnop"


def positional_name(i, j):
    return f"e{i}{j}"


class TestSquareViews:
    """Test that every view reads and writes the same storage."""

    @pytest.mark.parametrize("matrix_class", SQUARE_CLASSES)
    def test_set_is_visible_through_all_views(self, matrix_class):
        """Test set(i, j, v) shows up in rows, letters and positional names."""
        size = matrix_class.nrows
        matrix = matrix_class()
        for i in range(size):
            for j in range(size):
                value = 10 * i + j + 1
                matrix.set(i, j, value)
                assert matrix[i][j] == value
                assert matrix.row(i)[j] == value
                assert getattr(matrix, LETTERS[i * size + j]) == value
                assert getattr(matrix, positional_name(i, j)) == value

    @pytest.mark.parametrize("matrix_class", SQUARE_CLASSES)
    def test_named_field_write_is_visible_through_at(self, matrix_class):
        """Test assigning a named field updates the element."""
        size = matrix_class.nrows
        matrix = matrix_class()
        setattr(matrix, positional_name(size - 1, 0), 7.0)
        assert matrix.at(size - 1, 0) == 7.0
        assert getattr(matrix, LETTERS[(size - 1) * size]) == 7.0

    def test_row_write_is_visible_through_fields(self):
        """Test writing a row updates the letter fields."""
        matrix = Mat2()
        matrix[0] = [3, 4]
        assert (matrix.a, matrix.b) == (3.0, 4.0)
        assert (matrix.c, matrix.d) == (0.0, 0.0)

    def test_letter_and_positional_fields_match(self):
        """Test Mat3 letters map onto e00..e22 row-major."""
        matrix = Mat3(np.arange(1, 10))
        assert (matrix.a, matrix.e, matrix.i) == (matrix.e00, matrix.e11, matrix.e22)
        assert matrix.f == matrix.e12 == 6.0
        assert matrix.g == matrix.e20 == 7.0

    def test_mat4_last_row_fields(self):
        """Test the Mat4 letters reach the last element."""
        matrix = Mat4(np.arange(16))
        assert (matrix.m, matrix.n, matrix.o, matrix.p) == (12.0, 13.0, 14.0, 15.0)
        assert matrix.l == matrix.e23 == 11.0

    def test_row_views_share_storage(self):
        """Test row views point into the flat buffer."""
        matrix = Mat4()
        assert np.shares_memory(matrix.row(3), matrix.data)

    def test_square_bounds_check(self):
        """Test square matrices keep the bounds check."""
        with pytest.raises(BoundsError):
            Mat3().at(0, 3)


class TestSquareConstruction:
    """Test square constructors and predefined element types."""

    @pytest.mark.parametrize("matrix_class", SQUARE_CLASSES)
    def test_identity(self, matrix_class):
        """Test identity() is the eye of the right size."""
        size = matrix_class.nrows
        assert np.array_equal(matrix_class.identity().to_numpy(), np.eye(size))

    def test_row_vector_constructor(self):
        """Test Mat3 takes three row vectors."""
        matrix = Mat3([1, 2, 3], [4, 5, 6], [7, 8, 9])
        assert matrix.to_list() == [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0], [7.0, 8.0, 9.0]]

    def test_row_vector_constructor_arity(self):
        """Test a missing row vector is a TypeError."""
        with pytest.raises(TypeError):
            Mat3([1, 2, 3], [4, 5, 6])

    def test_scalar_constructor(self):
        """Test Mat4(s) fills all sixteen elements."""
        assert Mat4(2).data.tolist() == [2.0] * 16

    def test_predefined_element_types(self):
        """Test the float/double/int aliases."""
        for alias, size in ((mat2, 2), (mat3, 3), (mat4, 4)):
            assert alias.dtype == np.dtype(np.float32)
            assert (alias.nrows, alias.ncols) == (size, size)
        assert mat2d.dtype == mat3d.dtype == mat4d.dtype == np.dtype(np.float64)
        assert mat2i.dtype == mat3i.dtype == mat4i.dtype == np.dtype(np.int32)

    def test_predefined_types_are_specializations(self):
        """Test aliases subclass the square base of their size."""
        assert issubclass(mat2i, Mat2)
        assert issubclass(mat3, Mat3)
        assert issubclass(mat4i, Mat4)

    def test_square_class_getitem(self):
        """Test Mat2[dtype] and Matrix[dtype, 2, 2] are the same class."""
        assert Mat2[np.float32] is mat2
        assert Mat3["int32"] is Matrix[np.int32, 3, 3]

    def test_integer_specialization_keeps_views(self):
        """Test named fields work on non-default element types."""
        matrix = mat2i([1, 2, 3, 4])
        matrix.d = 9
        assert matrix.at(1, 1) == 9
        assert matrix.data.dtype == np.dtype(np.int32)

    def test_convert_between_aliases(self):
        """Test convert() moves a matrix between predefined types."""
        converted = mat3i.convert(mat3d([1.9, 2, 3, 4, 5, 6, 7, 8, -9.9]))
        assert converted.to_list() == [[1, 2, 3], [4, 5, 6], [7, 8, -9]]


class TestSquareStructure:
    """Test submatrix and transpose on square sizes."""

    def test_identity_4_submatrix_is_identity_3(self):
        """Test deleting row 0 and column 0 of I4 gives I3."""
        sub = Mat4.identity().submatrix(0, 0)
        assert isinstance(sub, Mat3)
        assert sub == Mat3.identity()

    def test_mat3_submatrix_is_mat2(self):
        """Test 3x3 submatrices are 2x2 matrices with named fields."""
        sub = Mat3(np.arange(1, 10)).submatrix(1, 1)
        assert isinstance(sub, Mat2)
        assert (sub.a, sub.b, sub.c, sub.d) == (1.0, 3.0, 7.0, 9.0)

    def test_mat2_submatrix_is_single_element(self):
        """Test a 2x2 submatrix is a generic 1x1 matrix."""
        sub = Mat2([1, 2, 3, 4]).submatrix(0, 1)
        assert sub.shape == (1, 1)
        assert sub.at(0, 0) == 3.0

    def test_submatrix_keeps_element_type(self):
        """Test the submatrix has the same dtype."""
        assert mat4i.identity().submatrix(2, 2).dtype == np.dtype(np.int32)

    def test_transpose_keeps_square_class(self):
        """Test transposing a Mat3 returns a Mat3."""
        matrix = Mat3(np.arange(9))
        transposed = matrix.transpose()
        assert type(transposed) is Mat3
        assert transposed.b == matrix.d
