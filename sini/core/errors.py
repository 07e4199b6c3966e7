"""
Library exceptions.

Only two things can go wrong loudly: an index outside the matrix, or operand
shapes for which no result type exists. Everything else (singular inverse,
integer overflow, division by zero) is left to the element type.
"""

from typing import Any, Dict, Optional


class SiniError(Exception):
    """Base exception for sini errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class BoundsError(SiniError, IndexError):
    """Raised when a checked element access falls outside the matrix"""

    def __init__(self, index: tuple[int, ...], shape: tuple[int, int]):
        super().__init__(
            message=f"Index {index} out of range for {shape[0]}x{shape[1]} matrix",
            details={"index": index, "shape": shape},
        )


class DimensionError(SiniError, ValueError):
    """Raised when operand shapes don't fit together"""

    def __init__(self, message: str, shape: Optional[tuple[int, ...]] = None,
                 expected: Optional[tuple[int, ...]] = None):
        details: Dict[str, Any] = {}
        if shape is not None:
            details["shape"] = shape
        if expected is not None:
            details["expected"] = expected
        super().__init__(message=message, details=details)
