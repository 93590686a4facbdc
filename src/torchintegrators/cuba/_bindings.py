"""ctypes declarations for the Cuba library.

Cuba is not distributed with this package. The shared library is looked up
in ``$TORCHINTEGRATORS_CUBA_LIBRARY`` first and then with
:func:`ctypes.util.find_library`.
"""

import ctypes
import ctypes.util
import os
import threading
from typing import Optional

from torchintegrators._exceptions import IntegrationError
from torchintegrators.ffi import CUBA_INTEGRAND

LIBRARY_ENV = "TORCHINTEGRATORS_CUBA_LIBRARY"

_c_int_p = ctypes.POINTER(ctypes.c_int)
_c_longlong_p = ctypes.POINTER(ctypes.c_longlong)
_c_double_p = ctypes.POINTER(ctypes.c_double)

_LIB_LOCK = threading.Lock()
_LIB: Optional[ctypes.CDLL] = None


class CubaUnavailableError(IntegrationError):
    """Raised when the Cuba shared library cannot be loaded."""

    pass


# Arguments shared by the head of every ll* entry point:
# ndim, ncomp, integrand, userdata, nvec, epsrel, epsabs, flags
_HEAD = [
    ctypes.c_int,
    ctypes.c_int,
    CUBA_INTEGRAND,
    ctypes.c_void_p,
    ctypes.c_longlong,
    ctypes.c_double,
    ctypes.c_double,
    ctypes.c_int,
]

# fail, integral, error, prob
_TAIL = [_c_int_p, _c_double_p, _c_double_p, _c_double_p]


def _declare(lib: ctypes.CDLL) -> None:
    lib.cubacores.argtypes = [_c_int_p, _c_int_p]
    lib.cubacores.restype = None

    # mineval, maxeval, key, statefile, spin, nregions, neval
    lib.llCuhre.argtypes = (
        _HEAD
        + [
            ctypes.c_longlong,
            ctypes.c_longlong,
            ctypes.c_int,
            ctypes.c_char_p,
            ctypes.c_void_p,
            _c_int_p,
            _c_longlong_p,
        ]
        + _TAIL
    )
    lib.llCuhre.restype = None

    # seed, mineval, maxeval, nstart, nincrease, nbatch, gridno, statefile,
    # spin, neval
    lib.llVegas.argtypes = (
        _HEAD
        + [
            ctypes.c_int,
            ctypes.c_longlong,
            ctypes.c_longlong,
            ctypes.c_longlong,
            ctypes.c_longlong,
            ctypes.c_longlong,
            ctypes.c_int,
            ctypes.c_char_p,
            ctypes.c_void_p,
            _c_longlong_p,
        ]
        + _TAIL
    )
    lib.llVegas.restype = None

    # seed, mineval, maxeval, nnew, nmin, flatness, statefile, spin,
    # nregions, neval
    lib.llSuave.argtypes = (
        _HEAD
        + [
            ctypes.c_int,
            ctypes.c_longlong,
            ctypes.c_longlong,
            ctypes.c_longlong,
            ctypes.c_longlong,
            ctypes.c_double,
            ctypes.c_char_p,
            ctypes.c_void_p,
            _c_int_p,
            _c_longlong_p,
        ]
        + _TAIL
    )
    lib.llSuave.restype = None


def library_path() -> Optional[str]:
    """Location of the Cuba shared library, or ``None`` if unknown."""
    return os.environ.get(LIBRARY_ENV) or ctypes.util.find_library("cuba")


def load_library() -> ctypes.CDLL:
    """
    Load and declare the Cuba shared library.

    Raises
    ------
    CubaUnavailableError
        If the library cannot be found or loaded.
    """
    global _LIB
    with _LIB_LOCK:
        if _LIB is not None:
            return _LIB
        path = library_path()
        if path is None:
            raise CubaUnavailableError(
                f"Cuba library not found; install it as a shared library or "
                f"set {LIBRARY_ENV} to its path"
            )
        try:
            lib = ctypes.CDLL(path)
            _declare(lib)
        except (OSError, AttributeError) as exc:
            raise CubaUnavailableError(
                f"could not load Cuba from {path!r}: {exc}"
            ) from exc
        _LIB = lib
        return _LIB


def is_available() -> bool:
    """Whether the Cuba library can be loaded."""
    try:
        load_library()
    except CubaUnavailableError:
        return False
    return True


def disable_forking(lib: ctypes.CDLL) -> None:
    """Turn off Cuba's fork-based parallel evaluation."""
    n, p = ctypes.c_int(0), ctypes.c_int(0)
    lib.cubacores(ctypes.byref(n), ctypes.byref(p))
