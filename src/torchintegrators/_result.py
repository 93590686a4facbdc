from typing import Iterator, NamedTuple, Optional, Tuple

import torch
from torch import Tensor


class IntegrationResult(NamedTuple):
    """Result of a one-dimensional integration.

    Parameters
    ----------
    value : float
        Integral estimate.
    error : float
        Estimated absolute error of ``value``.
    """

    value: float
    error: float

    def results(self) -> Iterator["IntegrationResult"]:
        yield self


class CubatureResult(NamedTuple):
    """Result for one output component of a cubature.

    Parameters
    ----------
    value : float
        Integral estimate.
    error : float
        Estimated absolute error of ``value``.
    prob : float, optional
        Backend trust metric for ``error``. For Cuba this is the chi-square
        probability that the error is *not* a reliable estimate, so values
        near 0 are good and values near 1 are bad. ``None`` when the backend
        does not compute one.
    """

    value: float
    error: float
    prob: Optional[float] = None


class CubatureResults(NamedTuple):
    """Results of a multi-dimensional integration.

    Parameters
    ----------
    components : tuple of CubatureResult
        One entry per output component of the integrand.
    neval : int
        Number of integrand evaluations.
    nregions : int, optional
        Number of subregions used. ``None`` for backends that do not
        subdivide (Vegas, quasi Monte Carlo).
    """

    components: Tuple[CubatureResult, ...]
    neval: int
    nregions: Optional[int] = None

    @property
    def value(self) -> Tensor:
        """Integral estimates, shape ``(ncomp,)``."""
        return torch.tensor(
            [r.value for r in self.components], dtype=torch.float64
        )

    @property
    def error(self) -> Tensor:
        """Error estimates, shape ``(ncomp,)``."""
        return torch.tensor(
            [r.error for r in self.components], dtype=torch.float64
        )

    def results(self) -> Iterator[IntegrationResult]:
        for r in self.components:
            yield IntegrationResult(r.value, r.error)


def zip_results(values, errors, probs=None) -> Tuple[CubatureResult, ...]:
    """Zip per-component output buffers into result records."""
    if probs is None:
        return tuple(
            CubatureResult(float(v), float(e)) for v, e in zip(values, errors)
        )
    return tuple(
        CubatureResult(float(v), float(e), float(p))
        for v, e, p in zip(values, errors, probs)
    )
