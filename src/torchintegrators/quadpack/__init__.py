"""
Deterministic one-dimensional integration with QUADPACK.

The routines are SciPy's compiled QUADPACK, driven through a landing pad so
that integrand exceptions are re-raised once the routine has returned.

Finite ranges:
    QAGS, QAGP

Infinite ranges:
    QAGI, QAGIU, QAGIL

Cauchy principal values:
    QAWC

Workspace:
    QuadratureWorkspace

Status:
    QuadpackStatus, QuadpackError, check_quadpack_status

Utilities:
    verify_singular_points
"""

from torchintegrators.quadpack._base import QuadpackIntegrator
from torchintegrators.quadpack._qagi import QAGI, QAGIL, QAGIU
from torchintegrators.quadpack._qagp import QAGP, verify_singular_points
from torchintegrators.quadpack._qags import QAGS
from torchintegrators.quadpack._qawc import QAWC
from torchintegrators.quadpack._status import (
    QuadpackError,
    QuadpackStatus,
    check_quadpack_status,
)
from torchintegrators.quadpack._workspace import QuadratureWorkspace

__all__ = [
    # Base class
    "QuadpackIntegrator",
    # Integrators
    "QAGI",
    "QAGIL",
    "QAGIU",
    "QAGP",
    "QAGS",
    "QAWC",
    # Workspace
    "QuadratureWorkspace",
    # Status
    "QuadpackError",
    "QuadpackStatus",
    "check_quadpack_status",
    # Utilities
    "verify_singular_points",
]
