"""Translation of QUADPACK status codes."""

import enum
import math

from torchintegrators._exceptions import (
    BackendError,
    DidNotConvergeError,
    UnrecognizedStatusError,
)
from torchintegrators._result import IntegrationResult

BACKEND = "QUADPACK"


class QuadpackStatus(enum.IntEnum):
    """Status codes (``ier``) returned by QUADPACK routines."""

    SUCCESS = 0
    MAX_ITERATIONS = 1
    ROUND_OFF = 2
    SINGULARITY = 3
    NON_CONVERGENCE = 4
    DIVERGENCE = 5
    DOMAIN = 6

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @property
    def is_convergence_failure(self) -> bool:
        """Whether the status leaves a usable partial result."""
        return QuadpackStatus.MAX_ITERATIONS <= self <= QuadpackStatus.DIVERGENCE


_DESCRIPTIONS = {
    QuadpackStatus.SUCCESS: "success",
    QuadpackStatus.MAX_ITERATIONS: (
        "maximum number of subdivisions reached"
    ),
    QuadpackStatus.ROUND_OFF: (
        "round-off error prevents the requested tolerance from being reached"
    ),
    QuadpackStatus.SINGULARITY: (
        "non-integrable singularity or other bad integrand behavior detected"
    ),
    QuadpackStatus.NON_CONVERGENCE: (
        "the algorithm does not converge, round-off error detected in the "
        "extrapolation table"
    ),
    QuadpackStatus.DIVERGENCE: (
        "the integral is divergent, or too slowly convergent"
    ),
    QuadpackStatus.DOMAIN: "invalid input arguments",
}


class QuadpackError(BackendError):
    """Failure reported by a QUADPACK routine.

    Attributes
    ----------
    status : QuadpackStatus
        Decoded status code.
    """

    def __init__(self, status: QuadpackStatus):
        self.status = status
        super().__init__(int(status), status.description, backend=BACKEND)


def check_quadpack_status(
    ier: int, value: float, error: float
) -> IntegrationResult:
    """
    Turn the raw output of a QUADPACK routine into a result or an exception.

    Parameters
    ----------
    ier : int
        Status returned by the routine.
    value, error : float
        Integral and error estimates returned by the routine.

    Returns
    -------
    IntegrationResult
        If ``ier`` is :attr:`QuadpackStatus.SUCCESS`.

    Raises
    ------
    DidNotConvergeError
        For statuses 1 to 5. ``results`` holds the partial estimate and
        ``reason`` the :class:`QuadpackError`. A successful status with an
        infinite or NaN estimate is reported as
        :attr:`QuadpackStatus.SINGULARITY`.
    QuadpackError
        For :attr:`QuadpackStatus.DOMAIN`.
    UnrecognizedStatusError
        For any status outside the documented range.
    """
    try:
        status = QuadpackStatus(ier)
    except ValueError:
        raise UnrecognizedStatusError(ier, BACKEND) from None

    result = IntegrationResult(float(value), float(error))
    if status is QuadpackStatus.SUCCESS:
        if math.isfinite(result.value) and math.isfinite(result.error):
            return result
        # QUADPACK can accept a divergent integrand without flagging it.
        status = QuadpackStatus.SINGULARITY

    failure = QuadpackError(status)
    if status.is_convergence_failure:
        raise DidNotConvergeError(result, reason=failure) from failure
    raise failure
