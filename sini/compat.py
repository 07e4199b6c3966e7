"""
Dual-target marker.

Every public operation in sini is tagged as callable from both a host and an
accelerator execution context. The tag is a plain attribute: decorated
functions are returned unchanged, so the marker costs nothing at call time.
The set of targets comes from settings.TARGETS.
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from sini.core.config import settings

HOST = "host"
DEVICE = "device"

F = TypeVar("F", bound=Callable[..., Any])

# qualname -> targets
DUAL_TARGET_REGISTRY: dict[str, frozenset[str]] = {}


def dual_target(func: F) -> F:
    """Mark ``func`` as compiled for every configured execution target."""
    targets = frozenset(settings.TARGETS)
    func.__sini_targets__ = targets  # type: ignore[attr-defined]
    DUAL_TARGET_REGISTRY[f"{func.__module__}.{func.__qualname__}"] = targets
    return func


def is_dual_target(obj: Any) -> bool:
    """True if ``obj`` (function, method, property or classmethod) carries the marker."""
    if isinstance(obj, property):
        obj = obj.fget
    obj = getattr(obj, "__func__", obj)
    targets = getattr(obj, "__sini_targets__", frozenset())
    return HOST in targets and DEVICE in targets
