import math
from typing import Any, Callable, Optional, Sequence

import numpy as np
from scipy import integrate
from scipy.stats import qmc

from torchintegrators._exceptions import (
    DidNotConvergeError,
    InvalidConfigurationError,
    InvalidInputArityError,
    InvalidOutputArityError,
)
from torchintegrators._integrator import Integrator, check_tolerances
from torchintegrators._result import CubatureResult, CubatureResults
from torchintegrators.cubature._batch import BatchIntegrand
from torchintegrators.cubature._cubature import check_box
from torchintegrators.ffi import LandingPad
from torchintegrators.marshaling import input_shape_for, output_shape_for

QMC_ENGINES = {
    "sobol": qmc.Sobol,
    "halton": qmc.Halton,
}


class QMCQuad(Integrator):
    """
    Randomized quasi Monte Carlo integration with
    :func:`scipy.integrate.qmc_quad`.

    ``n_estimates`` independent estimates are computed from scrambled
    low-discrepancy sequences of ``n_points`` points each. The result is
    their mean and the error is the standard error of the mean. Only
    scalar integrands over finite boxes are supported.

    Before sampling, SciPy evaluates the integrand at the centre of the box
    and at the corners ``low`` and ``high``.

    Parameters
    ----------
    low, high : sequence of float
        Finite lower and upper limits, one per dimension.
    engine : {"sobol", "halton"}
        Low-discrepancy sequence.
    seed : int, optional
        Seed of the scrambling. Non-deterministic when omitted.
    n_estimates : int
        Number of independent estimates.
    n_points : int
        Points per estimate. Must be a power of two for ``"sobol"``.
    """

    algorithm = "qmc_quad"

    def __init__(
        self,
        low: Sequence[float],
        high: Sequence[float],
        engine: str = "sobol",
        seed: Optional[int] = None,
        n_estimates: int = 8,
        n_points: int = 1024,
    ):
        self.with_range(low, high)
        self.seed = seed
        if n_estimates < 2:
            raise InvalidConfigurationError(
                f"n_estimates must be at least 2, got {n_estimates}"
            )
        self.n_estimates = n_estimates
        self._set_sampling(engine, n_points)

    @property
    def ndim(self) -> int:
        return len(self.low)

    def _set_sampling(self, engine: str, n_points: int) -> None:
        if engine not in QMC_ENGINES:
            raise InvalidConfigurationError(
                f"engine must be one of {tuple(QMC_ENGINES)}, got {engine!r}"
            )
        if n_points < 1:
            raise InvalidConfigurationError(
                f"n_points must be positive, got {n_points}"
            )
        if engine == "sobol" and n_points & (n_points - 1):
            raise InvalidConfigurationError(
                f"the sobol engine needs a power of two n_points, got {n_points}"
            )
        self.engine = engine
        self.n_points = n_points

    def with_range(self, low: Sequence[float], high: Sequence[float]) -> "QMCQuad":
        low, high = check_box(low, high)
        if not all(math.isfinite(v) for v in low + high):
            raise InvalidConfigurationError("QMCQuad needs finite limits")
        self.low, self.high = low, high
        return self

    def with_engine(self, engine: str) -> "QMCQuad":
        self._set_sampling(engine, self.n_points)
        return self

    def with_n_points(self, n_points: int) -> "QMCQuad":
        self._set_sampling(self.engine, n_points)
        return self

    def with_seed(self, seed: Optional[int]) -> "QMCQuad":
        self.seed = seed
        return self

    def _make_engine(self) -> qmc.QMCEngine:
        rng = np.random.default_rng(self.seed)
        return QMC_ENGINES[self.engine](self.ndim, scramble=True, rng=rng)

    def integrate(
        self,
        fun: Callable[[Any], Any],
        epsrel: float = 1e-4,
        epsabs: float = 1e-8,
        *,
        input_type: Optional[Any] = None,
    ) -> CubatureResults:
        check_tolerances(epsrel, epsabs)
        input_shape = input_shape_for(fun, input_type)
        ndim = input_shape.input_arity()
        if ndim != self.ndim:
            raise InvalidInputArityError(ndim, self.algorithm)

        pad = LandingPad(fun, input_shape)
        center = 0.5 * (np.asarray(self.low) + np.asarray(self.high))
        value = pad.raw_invoke(center)
        ncomp = output_shape_for(value).output_arity(value)
        if ncomp != 1:
            raise InvalidOutputArityError(ncomp, self.algorithm)

        res = integrate.qmc_quad(
            BatchIntegrand(pad, 1, points_last=True),
            np.asarray(self.low),
            np.asarray(self.high),
            n_estimates=self.n_estimates,
            n_points=self.n_points,
            qrng=self._make_engine(),
        )
        pad.resume_if_failed()

        estimate = float(res.integral)
        error = float(res.standard_error)
        results = CubatureResults(
            (CubatureResult(estimate, error),), neval=pad.calls
        )
        if not error <= max(epsabs, epsrel * abs(estimate)):
            raise DidNotConvergeError(results)
        return results

    def __repr__(self) -> str:
        return (
            f"QMCQuad(low={list(self.low)}, high={list(self.high)}, "
            f"engine={self.engine!r}, seed={self.seed}, "
            f"n_estimates={self.n_estimates}, n_points={self.n_points})"
        )
