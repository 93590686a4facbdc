import math

from scipy import LowLevelCallable

from torchintegrators._exceptions import InvalidConfigurationError
from torchintegrators.quadpack._base import QuadpackIntegrator, finite_range
from torchintegrators.quadpack._bindings import QuadpackOutput, qawce


class QAWC(QuadpackIntegrator):
    """
    Cauchy principal value of ``f(x) / (x - c)`` over a finite range.

    The integrand passed to :meth:`integrate` is ``f``; the weight
    ``1 / (x - c)`` is applied by the backend. The singularity ``c`` must lie
    strictly inside the range, otherwise the backend reports
    :attr:`~torchintegrators.quadpack.QuadpackStatus.DOMAIN`.

    Parameters
    ----------
    nintervals : int
        Maximum number of subintervals.
    low, high : float
        Integration range. Defaults to ``[0, 1]``.
    c : float
        Location of the singularity. Defaults to ``0.5``.

    Examples
    --------
    >>> qawc = QAWC().with_range(-1.0, 1.0).with_singularity(0.0)
    >>> result = qawc.integrate(lambda x: x)
    >>> abs(result.value - 2.0) <= result.error
    True
    """

    algorithm = "qawc"

    def __init__(
        self,
        nintervals: int = 1000,
        low: float = 0.0,
        high: float = 1.0,
        c: float = 0.5,
    ):
        self.low, self.high = finite_range(low, high, self.algorithm)
        self.with_singularity(c)
        super().__init__(nintervals)

    def with_range(self, low: float, high: float) -> "QAWC":
        self.low, self.high = finite_range(low, high, self.algorithm)
        return self

    def with_singularity(self, c: float) -> "QAWC":
        if not math.isfinite(c):
            raise InvalidConfigurationError(f"singularity must be finite, got {c}")
        self.c = float(c)
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
        return qawce(
            function, self.low, self.high, self.c, epsabs, epsrel, limit
        )

    def __repr__(self) -> str:
        return (
            f"QAWC(nintervals={self.nintervals}, low={self.low}, "
            f"high={self.high}, c={self.c})"
        )
