"""Hypothesis strategies for integrator testing."""

from ._arities import arities
from ._doubles import doubles
from ._real_buffers import real_buffers
from ._singular_point_lists import singular_point_lists

__all__ = [
    "arities",
    "doubles",
    "real_buffers",
    "singular_point_lists",
]
