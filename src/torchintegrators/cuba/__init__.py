"""
Multi-dimensional integration over the unit hypercube with Cuba.

Requires the Cuba shared library (http://www.feynarts.de/cuba/), located via
``$TORCHINTEGRATORS_CUBA_LIBRARY`` or the system library search path.

Deterministic:
    Cuhre

Monte Carlo:
    Vegas, Suave

Utilities:
    IntegrationRange, RandomNumberSource

Library:
    is_available, CubaUnavailableError

Status:
    check_cuba_status
"""

from torchintegrators.cuba._base import CubaIntegrator
from torchintegrators.cuba._bindings import (
    LIBRARY_ENV,
    CubaUnavailableError,
    is_available,
)
from torchintegrators.cuba._cuhre import CUHRE_KEYS, Cuhre, default_key
from torchintegrators.cuba._random import RandomNumberSource
from torchintegrators.cuba._range import IntegrationRange
from torchintegrators.cuba._status import check_cuba_status
from torchintegrators.cuba._suave import Suave
from torchintegrators.cuba._vegas import Vegas

__all__ = [
    # Base class
    "CubaIntegrator",
    # Integrators
    "CUHRE_KEYS",
    "Cuhre",
    "Suave",
    "Vegas",
    "default_key",
    # Utilities
    "IntegrationRange",
    "RandomNumberSource",
    # Library
    "LIBRARY_ENV",
    "CubaUnavailableError",
    "is_available",
    # Status
    "check_cuba_status",
]
