"""sini - fixed-size matrix arithmetic for graphics and transform math.

Subpackages:
- sini.math: Matrix type, square specializations and matrix functions
- sini.core: settings, logging and error types
- sini.compat: dual host/device target marker
"""

__version__ = "0.1.0"

from sini.math import *  # noqa: F401,F403
from sini.math import __all__ as _math_all
from sini.core.errors import SiniError, BoundsError, DimensionError

__all__ = [*_math_all, "SiniError", "BoundsError", "DimensionError"]
