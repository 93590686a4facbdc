"""Testing helpers for integrators.

Hypothesis strategies for integrand arities, flat buffers and singular-point
lists live in :mod:`torchintegrators.testing.strategies`.
"""

from .strategies import (
    arities,
    doubles,
    real_buffers,
    singular_point_lists,
)

__all__ = [
    "arities",
    "doubles",
    "real_buffers",
    "singular_point_lists",
]
