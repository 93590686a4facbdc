import math
from typing import Iterable, Tuple

from scipy import LowLevelCallable

from torchintegrators._exceptions import InvalidConfigurationError
from torchintegrators.quadpack._base import QuadpackIntegrator
from torchintegrators.quadpack._bindings import QuadpackOutput, qagpe


def verify_singular_points(points: Iterable[float]) -> Tuple[float, ...]:
    """
    Validate a list of integration bounds and interior singular points.

    Parameters
    ----------
    points : iterable of float
        ``[a, x_1, ..., x_k, b]``: the lower bound, interior points where the
        integrand is singular, and the upper bound.

    Returns
    -------
    tuple of float

    Raises
    ------
    InvalidConfigurationError
        If fewer than two points are given, a point is not finite, or the
        points are not strictly increasing.
    """
    points = tuple(float(p) for p in points)
    if len(points) < 2:
        raise InvalidConfigurationError(
            f"need at least the two integration bounds, got {len(points)} "
            f"point(s)"
        )
    for p in points:
        if not math.isfinite(p):
            raise InvalidConfigurationError(f"singular points must be finite, got {p}")
    for previous, current in zip(points, points[1:]):
        if not previous < current:
            raise InvalidConfigurationError(
                f"singular points must be strictly increasing, got {previous} "
                f"before {current}"
            )
    return points


class QAGP(QuadpackIntegrator):
    """
    Adaptive integration with known singular points.

    Like :class:`QAGS`, but the range is first split at user-supplied points
    where the integrand is singular or discontinuous. The integrand is never
    evaluated at these points.

    Parameters
    ----------
    points : iterable of float
        ``[a, x_1, ..., x_k, b]``, strictly increasing. The first and last
        entries are the integration bounds.
    nintervals : int
        Maximum number of subintervals. Must exceed the number of interior
        points.

    Examples
    --------
    >>> qagp = QAGP([0.0, 0.5, 1.0])
    >>> result = qagp.integrate(lambda x: abs(x - 0.5) ** -0.5)
    >>> round(result.value, 8)
    2.82842712
    """

    algorithm = "qagp"

    def __init__(self, points: Iterable[float], nintervals: int = 1000):
        self._points = verify_singular_points(points)
        super().__init__(nintervals)

    @property
    def singularities(self) -> Tuple[float, ...]:
        """Interior singular points."""
        return self._points[1:-1]

    @property
    def points(self) -> Tuple[float, ...]:
        return self._points

    def with_points(self, points: Iterable[float]) -> "QAGP":
        self._points = verify_singular_points(points)
        return self

    def _probe_point(self) -> float:
        # Stay away from the singular points.
        return 0.5 * (self._points[0] + self._points[1])

    def _call(
        self,
        function: LowLevelCallable,
        epsrel: float,
        epsabs: float,
        limit: int,
    ) -> QuadpackOutput:
        return qagpe(
            function,
            self._points[0],
            self._points[-1],
            self.singularities,
            epsabs,
            epsrel,
            limit,
        )

    def __repr__(self) -> str:
        return f"QAGP(points={list(self._points)}, nintervals={self.nintervals})"
