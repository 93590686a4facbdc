"""Common machinery for the adaptive QUADPACK integrators."""

import math
from abc import abstractmethod
from typing import Any, Callable, Optional, Tuple

from scipy import LowLevelCallable

from torchintegrators._exceptions import (
    InvalidConfigurationError,
    InvalidInputArityError,
    InvalidOutputArityError,
)
from torchintegrators._integrator import Integrator, check_tolerances
from torchintegrators._result import IntegrationResult
from torchintegrators.ffi import LandingPad, UserData
from torchintegrators.marshaling import input_shape_for, output_shape_for
from torchintegrators.quadpack._bindings import QuadpackOutput, make_function
from torchintegrators.quadpack._status import check_quadpack_status
from torchintegrators.quadpack._workspace import QuadratureWorkspace


def make_quadpack_pad(
    fun: Callable[[Any], Any],
    input_type: Optional[Any],
    probe: float,
    algorithm: str,
) -> LandingPad:
    """
    Build a landing pad for a scalar integrand, checking its shape first.

    The integrand is called once at ``probe`` outside any foreign call to
    learn its output arity.

    Raises
    ------
    InvalidInputArityError
        If the integrand does not take exactly one double.
    InvalidOutputArityError
        If the integrand does not return exactly one double.
    """
    input_shape = input_shape_for(fun, input_type)
    arity = input_shape.input_arity()
    if arity != 1:
        raise InvalidInputArityError(arity, algorithm)

    pad = LandingPad(fun, input_shape)
    value = pad.raw_invoke((probe,))
    arity = output_shape_for(value).output_arity(value)
    if arity != 1:
        raise InvalidOutputArityError(arity, algorithm)
    return pad


class QuadpackIntegrator(Integrator):
    """
    Base class for integrators backed by an adaptive QUADPACK routine.

    Each integrator owns a :class:`QuadratureWorkspace`. Release it with
    :meth:`close` or by using the integrator as a context manager.

    Parameters
    ----------
    nintervals : int
        Maximum number of subintervals.
    """

    algorithm = "quadpack"

    def __init__(self, nintervals: int):
        self._workspace = QuadratureWorkspace(nintervals)

    @property
    def workspace(self) -> QuadratureWorkspace:
        """Workspace holding the partition of the last integration."""
        return self._workspace

    @property
    def nintervals(self) -> int:
        return self._workspace.nintervals

    def with_nintervals(self, nintervals: int):
        """Replace the workspace with one sized for ``nintervals``."""
        self._workspace.resize(nintervals)
        return self

    def close(self) -> None:
        self._workspace.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @abstractmethod
    def _probe_point(self) -> float:
        """A point of the integration range at which the integrand is finite."""
        ...

    @abstractmethod
    def _call(
        self,
        function: LowLevelCallable,
        epsrel: float,
        epsabs: float,
        limit: int,
    ) -> QuadpackOutput: ...

    def integrate(
        self,
        fun: Callable[[Any], Any],
        epsrel: float = 1.49e-8,
        epsabs: float = 1.49e-8,
        *,
        input_type: Optional[Any] = None,
    ) -> IntegrationResult:
        check_tolerances(epsrel, epsabs)
        pad = make_quadpack_pad(
            fun, input_type, self._probe_point(), self.algorithm
        )
        user_data = UserData(pad)

        with self._workspace.acquire() as workspace:
            workspace.clear()
            value, error, infodict, ier = self._call(
                make_function(user_data), epsrel, epsabs, workspace.nintervals
            )
            pad.resume_if_failed()
            workspace.record(infodict)

        return check_quadpack_status(ier, value, error)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(nintervals={self.nintervals})"


def finite_range(low: float, high: float, name: str) -> Tuple[float, float]:
    if not (math.isfinite(low) and math.isfinite(high)):
        raise InvalidConfigurationError(
            f"{name} needs a finite range, got ({low}, {high}); use QAGI, "
            f"QAGIU or QAGIL for infinite ranges"
        )
    return float(low), float(high)
