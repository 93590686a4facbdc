from dataclasses import dataclass
from typing import Any

import numpy as np
from torch import Tensor


@dataclass(frozen=True)
class IntegrationRange:
    """
    Maps one coordinate of Cuba's unit hypercube onto ``[start, end]``.

    Cuba only integrates over ``[0, 1]^n``. Integrands over other ranges
    transform each coordinate and multiply by the :meth:`jacobian` of every
    transformed coordinate.

    Parameters
    ----------
    start : float
        Image of 0.
    end : float
        Image of 1.

    Examples
    --------
    >>> r = IntegrationRange(0.0, math.pi)
    >>> r.transform(0.5)
    1.5707963267948966
    >>> r.jacobian()
    3.141592653589793
    """

    start: float
    end: float

    @property
    def length(self) -> float:
        return self.end - self.start

    def transform(self, x: Any) -> Any:
        """
        Map ``x`` from ``[0, 1]`` onto ``[start, end]``.

        ``x`` may be a float, a numpy array or a tensor.

        Raises
        ------
        ValueError
            If any entry of ``x`` is outside ``[0, 1]``.
        """
        inside = (x >= 0) & (x <= 1)
        if isinstance(inside, Tensor):
            inside = bool(inside.all())
        else:
            inside = bool(np.all(inside))
        if not inside:
            raise ValueError(f"x must lie in [0, 1], got {x}")
        return self.start + x * self.length

    def jacobian(self) -> float:
        """Scale factor of :meth:`transform`."""
        return self.length
