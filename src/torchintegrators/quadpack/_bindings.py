"""Calls into SciPy's compiled QUADPACK routines.

Every routine is called with ``full_output=1`` and returns
``(value, abserr, infodict, ier)``, where ``ier`` is the raw QUADPACK status.
"""

from typing import Any, Dict, Sequence, Tuple

import numpy as np
from scipy import LowLevelCallable
from scipy.integrate import _quadpack

from torchintegrators.ffi import UserData, quadpack_integrand

QuadpackOutput = Tuple[float, float, Dict[str, Any], int]

# Sentinels for the `inf` argument of qagie.
UPPER_INFINITE = 1
LOWER_INFINITE = -1
BOTH_INFINITE = 2


def make_function(user_data: UserData) -> LowLevelCallable:
    """Bind the QUADPACK entry point to a landing pad."""
    return LowLevelCallable(quadpack_integrand, user_data.pointer)


def qagse(
    function: LowLevelCallable,
    a: float,
    b: float,
    epsabs: float,
    epsrel: float,
    limit: int,
) -> QuadpackOutput:
    return _quadpack._qagse(function, a, b, (), 1, epsabs, epsrel, limit)


def qagie(
    function: LowLevelCallable,
    bound: float,
    inf: int,
    epsabs: float,
    epsrel: float,
    limit: int,
) -> QuadpackOutput:
    return _quadpack._qagie(function, bound, inf, (), 1, epsabs, epsrel, limit)


def qagpe(
    function: LowLevelCallable,
    a: float,
    b: float,
    breakpoints: Sequence[float],
    epsabs: float,
    epsrel: float,
    limit: int,
) -> QuadpackOutput:
    # QUADPACK needs room for two extra points after the interior ones.
    points = np.concatenate(
        (np.asarray(breakpoints, dtype=np.float64), (0.0, 0.0))
    )
    return _quadpack._qagpe(
        function, a, b, points, (), 1, epsabs, epsrel, limit
    )


def qawce(
    function: LowLevelCallable,
    a: float,
    b: float,
    c: float,
    epsabs: float,
    epsrel: float,
    limit: int,
) -> QuadpackOutput:
    return _quadpack._qawce(function, a, b, c, (), 1, epsabs, epsrel, limit)
