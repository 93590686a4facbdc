"""Common interface implemented by every integrator."""

import math
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from torchintegrators._exceptions import InvalidConfigurationError


def check_tolerances(epsrel: float, epsabs: float) -> None:
    """Validate a tolerance pair before any backend sees it.

    Raises
    ------
    InvalidConfigurationError
        If either tolerance is negative or not finite.
    """
    for name, value in (("epsrel", epsrel), ("epsabs", epsabs)):
        if not math.isfinite(value) or value < 0:
            raise InvalidConfigurationError(
                f"{name} must be a finite non-negative number, got {value}"
            )


class Integrator(ABC):
    """
    An integration algorithm that can be applied to a Python integrand.

    Implementations wrap one backend routine together with its configuration
    and any resources it needs. The integrand is handed to the backend
    through a :class:`~torchintegrators.ffi.LandingPad`, so an exception
    raised by the integrand aborts the backend cleanly and is re-raised
    unchanged from :meth:`integrate`.
    """

    @abstractmethod
    def integrate(
        self,
        fun: Callable[[Any], Any],
        epsrel: float = 1.49e-8,
        epsabs: float = 1.49e-8,
        *,
        input_type: Optional[Any] = None,
    ) -> Any:
        """
        Integrate ``fun`` to the requested tolerance.

        Parameters
        ----------
        fun : callable
            Integrand. Receives a value of the input shape and returns a
            float, a tuple of floats, a vector, a tensor or a TensorDict.
        epsrel : float
            Relative error tolerance.
        epsabs : float
            Absolute error tolerance.
        input_type : type or InputShape, optional
            Input shape of ``fun``. Inferred from the annotation of the first
            parameter of ``fun`` when omitted, defaulting to ``float``.

        Returns
        -------
        IntegrationResult or CubatureResults

        Raises
        ------
        InvalidInputArityError, InvalidOutputArityError
            If the integrand's shape is not supported by the algorithm.
        DidNotConvergeError
            If the tolerance was not reached. Carries the partial results.
        BackendError
            If the backend reports any other failure.
        """
        ...

