"""Tests for the dual-target marker."""

import inspect

import pytest

from sini.compat import DUAL_TARGET_REGISTRY, dual_target, is_dual_target
from sini.core.config import settings
from sini.math import functions, linalg
from sini.math.matrix import Matrix
from sini.math.square import Mat2, Mat3, Mat4


class TestDualTarget:
    """Test dual_target and is_dual_target."""

    def test_decorator_returns_same_function(self):
        """Test the marker doesn't wrap the function."""
        def scale(x):
            return 2 * x

        marked = dual_target(scale)
        assert marked is scale
        assert marked(3) == 6
        assert is_dual_target(marked)

    def test_registry_records_qualified_name(self):
        """Test marked functions are listed by module and qualname."""
        assert "sini.math.linalg.det" in DUAL_TARGET_REGISTRY
        assert "sini.math.matrix.Matrix.at" in DUAL_TARGET_REGISTRY

    def test_single_target_is_not_dual(self, monkeypatch):
        """Test a host-only configuration doesn't count as dual."""
        monkeypatch.setattr(settings, "TARGETS", ["host"])

        @dual_target
        def host_only():
            return None

        assert not is_dual_target(host_only)

    def test_unmarked_function(self):
        """Test plain functions carry no marker."""
        assert not is_dual_target(len)

    @pytest.mark.parametrize(
        "member",
        [
            Matrix.__dict__["identity"],
            Matrix.__dict__["convert"],
            Matrix.at,
            Matrix.submatrix,
            Matrix.__mul__,
            Matrix.__pow__,
            Mat2.determinant,
            Mat3.inverse,
            Mat4.minor,
        ],
    )
    def test_matrix_operations_are_marked(self, member):
        """Test methods, classmethods and operators carry the marker."""
        assert is_dual_target(member)

    @pytest.mark.parametrize("module", [functions, linalg])
    def test_public_functions_are_marked(self, module):
        """Test every free function defined in the module carries the marker."""
        members = [
            member
            for name, member in inspect.getmembers(module, inspect.isfunction)
            if member.__module__ == module.__name__ and not name.startswith("_")
        ]
        assert members
        for member in members:
            assert is_dual_target(member), member.__name__
