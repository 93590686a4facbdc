"""
Safe calls from foreign integration routines into Python integrands.

LandingPad
    Catches integrand exceptions during a foreign call and re-raises them
    once the foreign routine has returned.

Entry points:
    quadpack_integrand, cuba_integrand

User data:
    UserData, pad_from_user_data
"""

from torchintegrators.ffi._callbacks import (
    CUBA_ABORT,
    CUBA_INTEGRAND,
    QUADPACK_ABORT,
    QUADPACK_INTEGRAND,
    UserData,
    cuba_integrand,
    pad_from_user_data,
    quadpack_integrand,
)
from torchintegrators.ffi._landing_pad import LandingPad

__all__ = [
    "LandingPad",
    # Entry points
    "CUBA_ABORT",
    "CUBA_INTEGRAND",
    "QUADPACK_ABORT",
    "QUADPACK_INTEGRAND",
    "cuba_integrand",
    "quadpack_integrand",
    # User data
    "UserData",
    "pad_from_user_data",
]
