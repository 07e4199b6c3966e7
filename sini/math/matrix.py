"""
Generic fixed-size matrix type.

``Matrix[dtype, M, N]`` builds (once, then caches) a concrete matrix class
with M rows, N columns and numpy element type ``dtype``. Shape and element
type belong to the class and never change after construction.

Elements live in one flat row-major buffer, ``data``; element (i, j) is
``data[i * N + j]``. Row vectors are numpy views into that buffer, so writes
through any view are visible everywhere.

Square 2x2, 3x3 and 4x4 shapes resolve to the specializations in
``sini.math.square``, which add named element fields and the
determinant/adjugate/inverse formulas.
"""

from __future__ import annotations

import threading
from typing import Any, ClassVar, Iterator

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator

from sini.compat import dual_target
from sini.core.config import settings
from sini.core.errors import BoundsError, DimensionError
from sini.core.logging import get_logger

from .value import coerce_scalar, coerce_vector, is_scalar, resolve_dtype

logger = get_logger(__name__)

# (dtype, rows, cols) -> concrete class
_SPECIALIZATIONS: dict[tuple[np.dtype, int, int], type["Matrix"]] = {}
_SPECIALIZATIONS_LOCK = threading.RLock()


def specialize(dtype: Any, nrows: int, ncols: int) -> type[Matrix]:
    """
    Return the concrete matrix class for ``dtype`` elements and ``nrows x ncols``.

    Classes are created on first request and cached, so
    ``specialize(np.float32, 3, 3) is specialize("float32", 3, 3)``.

    Raises:
        DimensionError: If either dimension is smaller than 1
        TypeError: If ``dtype`` is not numeric
    """
    dtype = resolve_dtype(dtype)
    nrows, ncols = int(nrows), int(ncols)
    if nrows < 1 or ncols < 1:
        raise DimensionError(
            f"No matrix type has shape {nrows}x{ncols}",
            shape=(nrows, ncols),
        )

    key = (dtype, nrows, ncols)
    cached = _SPECIALIZATIONS.get(key)
    if cached is not None:
        return cached

    # Import here to avoid circular imports
    from .square import square_base

    with _SPECIALIZATIONS_LOCK:
        cached = _SPECIALIZATIONS.get(key)
        if cached is not None:
            return cached

        base = square_base(nrows, ncols) or Matrix
        if base is not Matrix and base.dtype == dtype:
            cls = base
        else:
            if base is Matrix:
                name = f"Matrix[{dtype.name}, {nrows}, {ncols}]"
            else:
                name = f"{base.__name__}[{dtype.name}]"
            # Build through the pydantic metaclass so the subclass is a full model
            cls = type(base)(
                name,
                (base,),
                {
                    "__module__": base.__module__,
                    "__doc__": f"{nrows}x{ncols} matrix of {dtype.name}.",
                    "nrows": nrows,
                    "ncols": ncols,
                    "dtype": dtype,
                },
            )
            logger.debug("Specialized %s", name)
        _SPECIALIZATIONS[key] = cls
        return cls


class Matrix(BaseModel):
    """
    M x N matrix of numeric elements, stored row-major in one flat buffer.

    Use ``Matrix[dtype, M, N]`` to get a concrete class, then construct:

        >>> Mat23 = Matrix[np.float32, 2, 3]
        >>> Mat23()                         # zeros
        >>> Mat23(1.5)                      # every element 1.5
        >>> Mat23([1, 2, 3, 4, 5, 6])       # flat row-major
        >>> Mat23([1, 2, 3], [4, 5, 6])     # one vector per row
        >>> Mat23.convert(other)            # element-type conversion

    Multiplication follows the usual row-by-column rule for ``matrix * matrix``
    and ``matrix * vector``. ``vector * matrix`` is deliberately unsupported:
    convert the vector with ``to_row_vector`` first.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    nrows: ClassVar[int] = 0
    ncols: ClassVar[int] = 0
    dtype: ClassVar[np.dtype] = np.dtype(np.float64)

    # Makes numpy hand `vector * matrix` back to __rmul__ instead of broadcasting
    __array_ufunc__: ClassVar[None] = None

    data: np.ndarray = Field(description="Flat row-major element buffer")

    def __class_getitem__(cls, params: Any) -> type[Matrix]:
        if not isinstance(params, tuple) or len(params) != 3:
            raise TypeError("Matrix[...] expects (dtype, rows, cols)")
        dtype, nrows, ncols = params
        return specialize(dtype, nrows, ncols)

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        """Initialize from nothing, a scalar, a flat buffer, row vectors, or a matrix."""
        if "data" in kwargs and not args:
            super().__init__(**kwargs)
            return
        super().__init__(data=self._coerce_args(args), **kwargs)

    @classmethod
    def _coerce_args(cls, args: tuple[Any, ...]) -> np.ndarray:
        """Turn constructor arguments into a fresh flat buffer."""
        size = cls.nrows * cls.ncols
        if size == 0:
            raise TypeError(
                f"{cls.__name__} has no shape; use Matrix[dtype, rows, cols] to get a concrete class"
            )

        if len(args) == 0:
            return np.zeros(size, dtype=cls.dtype)

        if len(args) == 1:
            value = args[0]
            if isinstance(value, Matrix):
                if value.shape != (cls.nrows, cls.ncols):
                    raise DimensionError(
                        f"Cannot copy a {value.nrows}x{value.ncols} matrix into {cls.__name__}",
                        shape=value.shape,
                        expected=(cls.nrows, cls.ncols),
                    )
                if value.dtype != cls.dtype:
                    raise TypeError(
                        f"Element types differ ({value.dtype} -> {cls.dtype}); use {cls.__name__}.convert()"
                    )
                return value.data.copy()

            if is_scalar(value):
                return np.full(size, coerce_scalar(value, cls.dtype), dtype=cls.dtype)

            # Flat buffer (or nested rows); only the first M*N elements are used
            flat = np.asarray(value, dtype=cls.dtype).reshape(-1)
            if flat.size < size:
                raise DimensionError(
                    f"{cls.__name__} needs {size} elements, got {flat.size}",
                    shape=(flat.size,),
                    expected=(size,),
                )
            return flat[:size].copy()

        if len(args) != cls.nrows:
            raise TypeError(f"{cls.__name__} takes {cls.nrows} row vectors, got {len(args)}")
        return np.concatenate([coerce_vector(row, cls.ncols, cls.dtype) for row in args])

    @field_validator("data", mode="after")
    @classmethod
    def _validate_data(cls, value: np.ndarray) -> np.ndarray:
        size = cls.nrows * cls.ncols
        if value.shape != (size,):
            raise ValueError(f"{cls.__name__} buffer must have shape ({size},), got {value.shape}")
        return value.astype(cls.dtype, copy=False)

    @classmethod
    def _wrap(cls, flat: np.ndarray) -> Matrix:
        """Adopt an already-correct flat buffer without validation."""
        return cls.model_construct(data=flat)

    @classmethod
    @dual_target
    def identity(cls) -> Matrix:
        """
        Identity matrix: ones on the diagonal, zeros elsewhere.

        Only meaningful for square shapes; a rectangular class gets the
        rectangular eye.
        """
        return cls._wrap(np.eye(cls.nrows, cls.ncols, dtype=cls.dtype).reshape(-1))

    @classmethod
    @dual_target
    def convert(cls, other: Matrix) -> Matrix:
        """
        Build a matrix of this class from ``other``, casting every element.

        This is the only way to change element type; narrowing casts
        (float -> int) truncate exactly like numpy ``astype``.

        Raises:
            DimensionError: If the shapes differ
        """
        if other.shape != (cls.nrows, cls.ncols):
            raise DimensionError(
                f"Cannot convert a {other.nrows}x{other.ncols} matrix to {cls.__name__}",
                shape=other.shape,
                expected=(cls.nrows, cls.ncols),
            )
        with np.errstate(invalid="ignore", over="ignore"):
            return cls._wrap(other.data.astype(cls.dtype))

    @dual_target
    def astype(self, dtype: Any) -> Matrix:
        """Copy of this matrix with elements cast to ``dtype``."""
        return Matrix[dtype, self.nrows, self.ncols].convert(self)

    @dual_target
    def copy(self) -> Matrix:
        """Independent copy with its own buffer."""
        return type(self)._wrap(self.data.copy())

    def __copy__(self) -> Matrix:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any] | None = None) -> Matrix:
        return self.copy()

    # Views and conversions

    @property
    def shape(self) -> tuple[int, int]:
        """Matrix dimensions (rows, cols)."""
        return (self.nrows, self.ncols)

    @property
    def row_vectors(self) -> np.ndarray:
        """(M, N) view of the buffer; each row is a view, not a copy."""
        return self.data.reshape(self.nrows, self.ncols)

    def to_numpy(self) -> np.ndarray:
        """Convert to a new (M, N) NumPy array."""
        return self.row_vectors.copy()

    def to_list(self) -> list[list[Any]]:
        """Convert to a nested Python list."""
        return self.row_vectors.tolist()

    def to_string(self) -> str:
        """Convert to string."""
        rows_str = ", ".join(
            "[" + ", ".join(str(el) for el in row) + "]" for row in self.to_list()
        )
        return f"[{rows_str}]"

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.to_string()})"

    def __len__(self) -> int:
        """Number of rows."""
        return self.nrows

    def __iter__(self) -> Iterator[np.ndarray]:  # type: ignore[override]
        """Iterate over row views."""
        return iter(self.row_vectors)

    # Element access

    def _check_bounds(self, i: int, j: int) -> None:
        if settings.BOUNDS_CHECK and not (0 <= i < self.nrows and 0 <= j < self.ncols):
            raise BoundsError((i, j), self.shape)

    @dual_target
    def at(self, i: int, j: int) -> np.number:
        """
        Element (i, j) with bounds checking.

        Raises:
            BoundsError: If i >= M or j >= N (unless settings.BOUNDS_CHECK is off)
        """
        self._check_bounds(i, j)
        return self.data[i * self.ncols + j]

    @dual_target
    def set(self, i: int, j: int, value: Any) -> None:
        """Write element (i, j) with bounds checking."""
        self._check_bounds(i, j)
        self.data[i * self.ncols + j] = value

    @dual_target
    def row(self, i: int) -> np.ndarray:
        """Row ``i`` as a writable view into the buffer."""
        self._check_bounds(i, 0)
        return self.row_vectors[i]

    @dual_target
    def column(self, j: int) -> np.ndarray:
        """Column ``j`` as a fresh vector of M elements."""
        self._check_bounds(0, j)
        return self.row_vectors[:, j].copy()

    @dual_target
    def set_column(self, j: int, vector: Any) -> None:
        """
        Overwrite column ``j`` with an M-component vector.

        Raises:
            BoundsError: If j >= N
            DimensionError: If the vector length isn't M
        """
        self._check_bounds(0, j)
        self.row_vectors[:, j] = coerce_vector(vector, self.nrows, self.dtype)

    @dual_target
    def __getitem__(self, index: tuple[int, int] | int) -> Any:
        """Unchecked access: ``m[i, j]`` is an element, ``m[i]`` a row view."""
        if isinstance(index, tuple):
            i, j = index
            return self.data[i * self.ncols + j]
        return self.row_vectors[index]

    @dual_target
    def __setitem__(self, index: tuple[int, int] | int, value: Any) -> None:
        """Unchecked write of an element or a whole row."""
        if isinstance(index, tuple):
            i, j = index
            self.data[i * self.ncols + j] = value
        else:
            self.row_vectors[index] = value

    # Structural operations

    @dual_target
    def submatrix(self, i: int, j: int) -> Matrix:
        """
        The (M-1) x (N-1) matrix left after deleting row ``i`` and column ``j``.

        Raises:
            DimensionError: If the matrix has a single row or column
        """
        if self.nrows < 2 or self.ncols < 2:
            raise DimensionError(
                f"A {self.nrows}x{self.ncols} matrix has no submatrix",
                shape=self.shape,
            )
        grid = np.delete(np.delete(self.row_vectors, i, axis=0), j, axis=1)
        return Matrix[self.dtype, self.nrows - 1, self.ncols - 1]._wrap(grid.reshape(-1))

    @dual_target
    def transpose(self) -> Matrix:
        """N x M matrix with result[j][i] == self[i][j]."""
        return Matrix[self.dtype, self.ncols, self.nrows]._wrap(self.row_vectors.T.flatten())

    # Comparison and hashing

    @dual_target
    def __eq__(self, other: Any) -> bool:
        """Exact element-wise equality; matrices of different shapes are unequal."""
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self.data, other.data))

    @dual_target
    def __ne__(self, other: Any) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    @dual_target
    def __hash__(self) -> int:
        """Order-sensitive combination of the shape and every element."""
        return hash((self.nrows, self.ncols, tuple(self.data.tolist())))

    # Arithmetic operators

    def _operand(self, other: Matrix, op: str) -> np.ndarray:
        """Buffer of a same-shape, same-dtype operand."""
        if other.shape != self.shape:
            raise DimensionError(
                f"Cannot {op} {self.nrows}x{self.ncols} and {other.nrows}x{other.ncols} matrices",
                shape=other.shape,
                expected=self.shape,
            )
        if other.dtype != self.dtype:
            raise TypeError(
                f"Cannot {op} {self.dtype} and {other.dtype} matrices; convert one first"
            )
        return other.data

    def _product(self, other: Matrix) -> Matrix:
        if self.ncols != other.nrows:
            raise DimensionError(
                f"Cannot multiply {self.shape} by {other.shape} matrices",
                shape=other.shape,
                expected=(self.ncols, other.ncols),
            )
        if other.dtype != self.dtype:
            raise TypeError(
                f"Cannot multiply {self.dtype} and {other.dtype} matrices; convert one first"
            )
        product = self.row_vectors @ other.row_vectors
        return Matrix[self.dtype, self.nrows, other.ncols]._wrap(product.reshape(-1))

    def _apply(self, vector: Any) -> np.ndarray:
        """
        Matrix * column vector -> M-component vector.

        Raises:
            TypeError: If the vector's element type would narrow into the matrix's
        """
        array = np.asarray(vector)
        if not np.can_cast(array.dtype, self.dtype, casting="same_kind"):
            raise TypeError(
                f"Cannot multiply a {self.dtype} matrix by a {array.dtype} vector; convert one first"
            )
        return self.row_vectors @ coerce_vector(array, self.ncols, self.dtype)

    @dual_target
    def __add__(self, other: Any) -> Matrix:
        """Element-wise addition."""
        if isinstance(other, Matrix):
            return type(self)._wrap(self.data + self._operand(other, "add"))
        return NotImplemented

    @dual_target
    def __iadd__(self, other: Any) -> Matrix:
        """In-place element-wise addition."""
        if isinstance(other, Matrix):
            np.add(self.data, self._operand(other, "add"), out=self.data)
            return self
        return NotImplemented

    @dual_target
    def __sub__(self, other: Any) -> Matrix:
        """Element-wise subtraction."""
        if isinstance(other, Matrix):
            return type(self)._wrap(self.data - self._operand(other, "subtract"))
        return NotImplemented

    @dual_target
    def __isub__(self, other: Any) -> Matrix:
        """In-place element-wise subtraction."""
        if isinstance(other, Matrix):
            np.subtract(self.data, self._operand(other, "subtract"), out=self.data)
            return self
        return NotImplemented

    @dual_target
    def __mul__(self, other: Any) -> Any:
        """Matrix product, matrix * vector, or scalar multiplication."""
        if isinstance(other, Matrix):
            return self._product(other)
        if is_scalar(other):
            return type(self)._wrap(self.data * coerce_scalar(other, self.dtype))
        if isinstance(other, (np.ndarray, list, tuple)):
            return self._apply(other)
        return NotImplemented

    @dual_target
    def __rmul__(self, other: Any) -> Matrix:
        """Scalar * matrix. Vector * matrix is rejected."""
        if is_scalar(other):
            return type(self)._wrap(coerce_scalar(other, self.dtype) * self.data)
        if isinstance(other, (np.ndarray, list, tuple)):
            raise TypeError(
                "vector * matrix is not supported; use to_row_vector(v) * m "
                "and to_column_vector() on the result"
            )
        return NotImplemented

    @dual_target
    def __imul__(self, other: Any) -> Matrix:
        """In-place scalar multiplication, or square matrix product."""
        if isinstance(other, Matrix):
            if self.nrows != self.ncols or other.shape != self.shape:
                raise DimensionError(
                    "In-place matrix multiplication needs two square matrices of the same size",
                    shape=other.shape,
                    expected=self.shape,
                )
            self.data[:] = self._product(other).data
            return self
        if is_scalar(other):
            np.multiply(self.data, coerce_scalar(other, self.dtype), out=self.data)
            return self
        if isinstance(other, (np.ndarray, list, tuple)):
            raise TypeError("Cannot multiply a matrix by a vector in place")
        return NotImplemented

    @dual_target
    def __matmul__(self, other: Any) -> Any:
        """Matrix product or matrix * vector (no scalars)."""
        if isinstance(other, Matrix):
            return self._product(other)
        if isinstance(other, (np.ndarray, list, tuple)):
            return self._apply(other)
        return NotImplemented

    @dual_target
    def __rmatmul__(self, other: Any) -> Any:
        """Vector @ matrix is rejected."""
        if isinstance(other, (np.ndarray, list, tuple)):
            raise TypeError(
                "vector @ matrix is not supported; use to_row_vector(v) @ m"
            )
        return NotImplemented

    @dual_target
    def __imatmul__(self, other: Any) -> Matrix:
        """In-place square matrix product."""
        if isinstance(other, Matrix):
            return self.__imul__(other)
        return NotImplemented

    def _power(self, exponent: Any) -> Matrix:
        if self.nrows != self.ncols:
            raise DimensionError(
                "Matrix power only defined for square matrices",
                shape=self.shape,
            )
        if exponent < 0:
            raise ValueError(f"Matrix power exponent must be non-negative, got {exponent}")

        result = type(self).identity()
        for _ in range(int(exponent)):
            result.data[:] = (result.row_vectors @ self.row_vectors).reshape(-1)
        return result

    @dual_target
    def __pow__(self, exponent: Any) -> Matrix:
        """Integer power: ``m ** 0`` is the identity, ``m ** e`` multiplies e times."""
        if isinstance(exponent, (int, np.integer)) and not isinstance(exponent, bool):
            return self._power(exponent)
        return NotImplemented

    @dual_target
    def __ipow__(self, exponent: Any) -> Matrix:
        """In-place integer power."""
        if isinstance(exponent, (int, np.integer)) and not isinstance(exponent, bool):
            self.data[:] = self._power(exponent).data
            return self
        return NotImplemented
