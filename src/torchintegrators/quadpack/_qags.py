from scipy import LowLevelCallable

from torchintegrators.quadpack._base import QuadpackIntegrator, finite_range
from torchintegrators.quadpack._bindings import QuadpackOutput, qagse


class QAGS(QuadpackIntegrator):
    """
    Adaptive Gauss-Kronrod integration with extrapolation over a finite range.

    The 21-point Gauss-Kronrod rule is applied on adaptively bisected
    subintervals and the sequence of estimates is accelerated with the
    epsilon algorithm, which handles integrable endpoint singularities well.

    Parameters
    ----------
    nintervals : int
        Maximum number of subintervals.
    low, high : float
        Integration range. Defaults to ``[0, 1]``.

    Examples
    --------
    >>> with QAGS(1000) as qags:
    ...     result = qags.with_range(0.0, 1.0).integrate(lambda x: x * x)
    >>> round(result.value, 12)
    0.333333333333
    """

    algorithm = "qags"

    def __init__(self, nintervals: int = 1000, low: float = 0.0, high: float = 1.0):
        self.low, self.high = finite_range(low, high, self.algorithm)
        super().__init__(nintervals)

    def with_range(self, low: float, high: float) -> "QAGS":
        self.low, self.high = finite_range(low, high, self.algorithm)
        return self

    def _probe_point(self) -> float:
        return 0.5 * (self.low + self.high)

    def _call(
        self,
        function: LowLevelCallable,
        epsrel: float,
        epsabs: float,
        limit: int,
    ) -> QuadpackOutput:
        return qagse(function, self.low, self.high, epsabs, epsrel, limit)

    def __repr__(self) -> str:
        return (
            f"QAGS(nintervals={self.nintervals}, low={self.low}, "
            f"high={self.high})"
        )
