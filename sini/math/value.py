"""
Element values for sini matrices.

Matrices hold numpy scalars of one fixed dtype. This module resolves dtypes,
recognizes scalars, and coerces scalars and vectors (1-D numpy arrays, the
column-vector collaborator) into a matrix's element type.
"""

from __future__ import annotations

import numbers
from typing import Any

import numpy as np

from sini.core.errors import DimensionError


def resolve_dtype(dtype: Any) -> np.dtype:
    """
    Normalize a dtype-like (np.float32, "int32", float, ...) to np.dtype.

    Raises:
        TypeError: If the dtype is not numeric
    """
    resolved = np.dtype(dtype)
    if not np.issubdtype(resolved, np.number):
        raise TypeError(f"Matrix elements must be numeric, got dtype {resolved}")
    return resolved


def is_scalar(value: Any) -> bool:
    """True for Python and numpy numbers and 0-d arrays (booleans excluded)."""
    if isinstance(value, np.ndarray):
        return value.ndim == 0 and np.issubdtype(value.dtype, np.number)
    if isinstance(value, (bool, np.bool_)):
        return False
    return isinstance(value, (numbers.Number, np.number))


def coerce_scalar(value: Any, dtype: np.dtype) -> np.number:
    """Cast a scalar to ``dtype``, the way C assignment would."""
    if isinstance(value, np.ndarray):
        value = value.item()
    return dtype.type(value)


def coerce_vector(vector: Any, length: int, dtype: np.dtype) -> np.ndarray:
    """
    Convert a vector-like to a 1-D array of ``length`` elements of ``dtype``.

    Raises:
        DimensionError: If the vector doesn't have exactly ``length`` components
    """
    array = np.asarray(vector, dtype=dtype)
    if array.shape != (length,):
        raise DimensionError(
            f"Expected a vector with {length} components, got shape {array.shape}",
            shape=array.shape,
            expected=(length,),
        )
    return array


def divide(numerator: Any, denominator: Any, dtype: np.dtype) -> np.ndarray:
    """
    Element-wise division in ``dtype``.

    Floating types follow IEEE rules (x/0 gives inf or nan). Integer types
    truncate toward zero; integer division by zero gives an unspecified value.
    Neither case warns or raises.
    """
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        quotient = np.true_divide(numerator, denominator)
        if np.issubdtype(dtype, np.integer):
            quotient = np.trunc(quotient)
        return np.asarray(quotient).astype(dtype)
