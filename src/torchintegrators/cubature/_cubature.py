from typing import Any, Callable, Optional, Sequence, Tuple

import numpy as np
from scipy import integrate

from torchintegrators._exceptions import (
    DidNotConvergeError,
    InvalidConfigurationError,
    InvalidInputArityError,
    InvalidOutputArityError,
    UnrecognizedStatusError,
)
from torchintegrators._integrator import Integrator, check_tolerances
from torchintegrators._result import CubatureResults, zip_results
from torchintegrators.cubature._batch import BatchIntegrand, probe_point
from torchintegrators.ffi import LandingPad
from torchintegrators.marshaling import input_shape_for, output_shape_for

BACKEND = "SciPy"

CUBATURE_RULES = ("genz-malik", "gk21", "gk15")


def check_box(
    low: Sequence[float], high: Sequence[float]
) -> Tuple[Tuple[float, ...], Tuple[float, ...]]:
    low = tuple(float(a) for a in low)
    high = tuple(float(b) for b in high)
    if len(low) != len(high):
        raise InvalidConfigurationError(
            f"low and high must have the same length, got {len(low)} and "
            f"{len(high)}"
        )
    if not low:
        raise InvalidConfigurationError("the integration box is empty")
    if any(np.isnan(low)) or any(np.isnan(high)):
        raise InvalidConfigurationError("integration limits must not be NaN")
    return low, high


class Cubature(Integrator):
    """
    Adaptive multi-dimensional cubature with :func:`scipy.integrate.cubature`.

    Regions with the largest error estimate are bisected until the combined
    error is below ``epsabs + epsrel * |value|`` for every output component.
    Infinite limits are supported.

    Parameters
    ----------
    low, high : sequence of float
        Lower and upper limits, one per dimension.
    rule : str
        Cubature rule: ``"genz-malik"`` (at least 2 dimensions), ``"gk21"``
        or ``"gk15"``.
    max_subdivisions : int
        Maximum number of subdivisions.

    Examples
    --------
    >>> cubature = Cubature([0.0, 0.0], [1.0, 2.0])
    >>> results = cubature.integrate(lambda p: p[0] * p[1], input_type=Real2)
    >>> round(float(results.value[0]), 8)
    1.0
    """

    algorithm = "cubature"

    def __init__(
        self,
        low: Sequence[float],
        high: Sequence[float],
        rule: str = "genz-malik",
        max_subdivisions: int = 10000,
    ):
        self.with_range(low, high)
        self.with_rule(rule)
        self.with_max_subdivisions(max_subdivisions)

    @property
    def ndim(self) -> int:
        return len(self.low)

    def with_range(self, low: Sequence[float], high: Sequence[float]) -> "Cubature":
        self.low, self.high = check_box(low, high)
        return self

    def with_rule(self, rule: str) -> "Cubature":
        if rule not in CUBATURE_RULES:
            raise InvalidConfigurationError(
                f"rule must be one of {CUBATURE_RULES}, got {rule!r}"
            )
        self.rule = rule
        return self

    def with_max_subdivisions(self, max_subdivisions: int) -> "Cubature":
        if max_subdivisions < 1:
            raise InvalidConfigurationError(
                f"max_subdivisions must be positive, got {max_subdivisions}"
            )
        self.max_subdivisions = max_subdivisions
        return self

    def integrate(
        self,
        fun: Callable[[Any], Any],
        epsrel: float = 1.49e-8,
        epsabs: float = 1.49e-8,
        *,
        input_type: Optional[Any] = None,
    ) -> CubatureResults:
        check_tolerances(epsrel, epsabs)
        input_shape = input_shape_for(fun, input_type)
        ndim = input_shape.input_arity()
        if ndim != self.ndim:
            raise InvalidInputArityError(ndim, self.algorithm)
        if self.rule == "genz-malik" and ndim < 2:
            raise InvalidInputArityError(ndim, self.rule)

        pad = LandingPad(fun, input_shape)
        value = pad.raw_invoke(probe_point(self.low, self.high))
        ncomp = output_shape_for(value).output_arity(value)
        if ncomp < 1:
            raise InvalidOutputArityError(ncomp, self.algorithm)

        res = integrate.cubature(
            BatchIntegrand(pad, ncomp),
            self.low,
            self.high,
            rule=self.rule,
            rtol=epsrel,
            atol=epsabs,
            max_subdivisions=self.max_subdivisions,
            workers=1,
        )
        pad.resume_if_failed()

        results = CubatureResults(
            zip_results(
                np.reshape(res.estimate, -1), np.reshape(res.error, -1)
            ),
            neval=pad.calls,
            nregions=len(res.regions),
        )
        if res.status == "converged":
            return results
        if res.status == "not_converged":
            raise DidNotConvergeError(results)
        raise UnrecognizedStatusError(res.status, BACKEND)

    def __repr__(self) -> str:
        return (
            f"Cubature(low={list(self.low)}, high={list(self.high)}, "
            f"rule={self.rule!r}, max_subdivisions={self.max_subdivisions})"
        )
