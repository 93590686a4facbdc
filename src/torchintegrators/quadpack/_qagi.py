import math

from scipy import LowLevelCallable

from torchintegrators._exceptions import InvalidConfigurationError
from torchintegrators.quadpack._base import QuadpackIntegrator
from torchintegrators.quadpack._bindings import (
    BOTH_INFINITE,
    LOWER_INFINITE,
    UPPER_INFINITE,
    QuadpackOutput,
    qagie,
)


def _finite_bound(bound: float, algorithm: str) -> float:
    if not math.isfinite(bound):
        raise InvalidConfigurationError(
            f"{algorithm} needs a finite bound, got {bound}"
        )
    return float(bound)


class QAGI(QuadpackIntegrator):
    """
    Adaptive integration over ``(-inf, inf)``.

    The range is mapped onto ``(0, 1]`` with ``x = (1 - t) / t`` and
    integrated with a 15-point Gauss-Kronrod rule and extrapolation.

    Parameters
    ----------
    nintervals : int
        Maximum number of subintervals.

    Examples
    --------
    >>> result = QAGI().integrate(lambda x: math.exp(-x * x))
    >>> abs(result.value - math.sqrt(math.pi)) < 1e-8
    True
    """

    algorithm = "qagi"

    def __init__(self, nintervals: int = 1000):
        super().__init__(nintervals)

    def _probe_point(self) -> float:
        return 0.0

    def _call(
        self,
        function: LowLevelCallable,
        epsrel: float,
        epsabs: float,
        limit: int,
    ) -> QuadpackOutput:
        return qagie(function, 0.0, BOTH_INFINITE, epsabs, epsrel, limit)


class QAGIU(QuadpackIntegrator):
    """
    Adaptive integration over ``[a, inf)``.

    Parameters
    ----------
    lower_bound : float
        Finite lower bound ``a``.
    nintervals : int
        Maximum number of subintervals.
    """

    algorithm = "qagiu"

    def __init__(self, lower_bound: float = 0.0, nintervals: int = 1000):
        self.lower_bound = _finite_bound(lower_bound, self.algorithm)
        super().__init__(nintervals)

    def with_lower_bound(self, lower_bound: float) -> "QAGIU":
        self.lower_bound = _finite_bound(lower_bound, self.algorithm)
        return self

    def _probe_point(self) -> float:
        return self.lower_bound + 0.5

    def _call(
        self,
        function: LowLevelCallable,
        epsrel: float,
        epsabs: float,
        limit: int,
    ) -> QuadpackOutput:
        return qagie(
            function, self.lower_bound, UPPER_INFINITE, epsabs, epsrel, limit
        )

    def __repr__(self) -> str:
        return (
            f"QAGIU(lower_bound={self.lower_bound}, "
            f"nintervals={self.nintervals})"
        )


class QAGIL(QuadpackIntegrator):
    """
    Adaptive integration over ``(-inf, b]``.

    Parameters
    ----------
    upper_bound : float
        Finite upper bound ``b``.
    nintervals : int
        Maximum number of subintervals.
    """

    algorithm = "qagil"

    def __init__(self, upper_bound: float = 0.0, nintervals: int = 1000):
        self.upper_bound = _finite_bound(upper_bound, self.algorithm)
        super().__init__(nintervals)

    def with_upper_bound(self, upper_bound: float) -> "QAGIL":
        self.upper_bound = _finite_bound(upper_bound, self.algorithm)
        return self

    def _probe_point(self) -> float:
        return self.upper_bound - 0.5

    def _call(
        self,
        function: LowLevelCallable,
        epsrel: float,
        epsabs: float,
        limit: int,
    ) -> QuadpackOutput:
        return qagie(
            function, self.upper_bound, LOWER_INFINITE, epsabs, epsrel, limit
        )

    def __repr__(self) -> str:
        return (
            f"QAGIL(upper_bound={self.upper_bound}, "
            f"nintervals={self.nintervals})"
        )
