"""Vectorized adapter between SciPy's batch integrand calls and a landing pad."""

import math
from typing import Sequence

import numpy as np

from torchintegrators.ffi import LandingPad


def probe_point(low: Sequence[float], high: Sequence[float]) -> np.ndarray:
    """
    A representative point of a possibly unbounded box.

    The midpoint of each finite range, ``a + 0.5`` or ``b - 0.5`` for
    half-infinite ranges and ``0`` for the whole real line.
    """
    point = []
    for a, b in zip(low, high):
        if math.isfinite(a) and math.isfinite(b):
            point.append(0.5 * (a + b))
        elif math.isfinite(a):
            point.append(a + 0.5)
        elif math.isfinite(b):
            point.append(b - 0.5)
        else:
            point.append(0.0)
    return np.asarray(point, dtype=np.float64)


class BatchIntegrand:
    """
    Evaluates a batch of points one at a time through a landing pad.

    SciPy's Python-level integrators have no abort channel. Once the
    integrand has failed, every batch (including the rest of the current
    one) is filled with NaN, which makes the driver stop at its next
    convergence check.

    Parameters
    ----------
    pad : LandingPad
        Landing pad wrapping the integrand.
    ncomp : int
        Number of output components per point.
    points_last : bool
        If ``True``, batches have shape ``(ndim, npoints)`` and a 1-D batch is
        a single point (``scipy.integrate.qmc_quad``). Otherwise batches have
        shape ``(npoints, ndim)`` (``scipy.integrate.cubature``).
    """

    def __init__(self, pad: LandingPad, ncomp: int, points_last: bool = False):
        self._pad = pad
        self._ncomp = ncomp
        self._points_last = points_last

    def _evaluate(self, points: np.ndarray) -> np.ndarray:
        output = np.empty((points.shape[0], self._ncomp))
        for point, row in zip(points, output):
            if self._pad.try_invoke(point, row) is not None:
                output.fill(np.nan)
                break
        return output

    def __call__(self, x: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=np.float64)
        if not self._points_last:
            return self._evaluate(x)
        if x.ndim == 1:
            return self._evaluate(x[np.newaxis, :])[0, 0]
        return self._evaluate(x.T)[:, 0]
