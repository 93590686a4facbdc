"""C-callable entry points that forward foreign calls to a landing pad.

Each entry point is a module-level ``ctypes`` function pointer, so it stays
valid for the lifetime of the process. The landing pad is passed through the
routine's opaque ``void *`` user-data argument.
"""

import ctypes
import math

import numpy as np

from torchintegrators.ffi._landing_pad import LandingPad

# double f(double x, void *user_data)
QUADPACK_INTEGRAND = ctypes.CFUNCTYPE(
    ctypes.c_double, ctypes.c_double, ctypes.c_void_p
)

# int f(const int *ndim, const double x[], const int *ncomp, double f[],
#       void *user_data)
CUBA_INTEGRAND = ctypes.CFUNCTYPE(
    ctypes.c_int,
    ctypes.POINTER(ctypes.c_int),
    ctypes.POINTER(ctypes.c_double),
    ctypes.POINTER(ctypes.c_int),
    ctypes.POINTER(ctypes.c_double),
    ctypes.c_void_p,
)

# Return value that makes Cuba abort the integration.
CUBA_ABORT = -999

# QUADPACK has no abort channel; NaN poisons the remaining estimates.
QUADPACK_ABORT = math.nan


class UserData:
    """
    Opaque ``void *`` handle to a landing pad.

    The pointer is only valid while this object is alive, so keep a
    reference to it for the whole duration of the foreign call.

    Attributes
    ----------
    pointer : ctypes.c_void_p
        Value to pass as the routine's user-data argument.
    """

    def __init__(self, pad: LandingPad):
        self._ref = ctypes.py_object(pad)
        self.pointer = ctypes.cast(ctypes.pointer(self._ref), ctypes.c_void_p)


def pad_from_user_data(user_data: int) -> LandingPad:
    """Recover the landing pad behind a user-data pointer."""
    return ctypes.cast(user_data, ctypes.POINTER(ctypes.py_object)).contents.value


def _quadpack_integrand(x: float, user_data: int) -> float:
    pad = pad_from_user_data(user_data)
    output = np.zeros(1)
    if pad.try_invoke((x,), output) is not None:
        return QUADPACK_ABORT
    return float(output[0])


def _cuba_integrand(ndim, x, ncomp, f, user_data) -> int:
    pad = pad_from_user_data(user_data)
    args = np.ctypeslib.as_array(x, shape=(ndim[0],))
    output = np.ctypeslib.as_array(f, shape=(ncomp[0],))
    if pad.try_invoke(args, output) is not None:
        return CUBA_ABORT
    return 0


quadpack_integrand = QUADPACK_INTEGRAND(_quadpack_integrand)
cuba_integrand = CUBA_INTEGRAND(_cuba_integrand)
