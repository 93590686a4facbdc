import ctypes
from typing import Optional

from torchintegrators._exceptions import InvalidConfigurationError
from torchintegrators.cuba._base import (
    CubaIntegrator,
    CubaOutputs,
    check_evaluations,
)
from torchintegrators.ffi import cuba_integrand

CUHRE_KEYS = (7, 9, 11, 13)


def default_key(ndim: int) -> int:
    """Degree of the cubature rule Cuhre uses for ``ndim`` dimensions."""
    if ndim <= 2:
        return 13
    if ndim == 3:
        return 11
    return 9


class Cuhre(CubaIntegrator):
    """
    Deterministic adaptive cubature with Cuba's Cuhre algorithm.

    Cuhre subdivides the unit hypercube and applies a fully symmetric
    cubature rule of degree ``key`` on each region. It needs at least two
    dimensions.

    Parameters
    ----------
    maxeval : int
        Maximum number of integrand evaluations.
    mineval : int
        Minimum number of integrand evaluations.
    key : int, optional
        Degree of the cubature rule, one of 7, 9, 11 or 13. Chosen from the
        number of dimensions when omitted.
    flags : int
        Cuba flags.

    Examples
    --------
    >>> cuhre = Cuhre(1_000_000)
    >>> results = cuhre.integrate(lambda p: p[0] * p[1], input_type=Real2)
    >>> round(float(results.value[0]), 6)
    0.25
    """

    algorithm = "cuhre"

    def __init__(
        self,
        maxeval: int,
        mineval: int = 1,
        key: Optional[int] = None,
        flags: int = 0,
    ):
        check_evaluations(mineval, maxeval)
        self.mineval = mineval
        self.maxeval = maxeval
        self.with_key(key)
        super().__init__(flags)

    def with_mineval(self, mineval: int) -> "Cuhre":
        check_evaluations(mineval, self.maxeval)
        self.mineval = mineval
        return self

    def with_maxeval(self, maxeval: int) -> "Cuhre":
        check_evaluations(self.mineval, maxeval)
        self.maxeval = maxeval
        return self

    def with_key(self, key: Optional[int]) -> "Cuhre":
        if key is not None and key not in CUHRE_KEYS:
            raise InvalidConfigurationError(
                f"Cuhre key must be one of {CUHRE_KEYS} or None, got {key}"
            )
        self.key = key
        return self

    def _call(
        self,
        ndim: int,
        ncomp: int,
        user_data: ctypes.c_void_p,
        epsrel: float,
        epsabs: float,
        outputs: CubaOutputs,
    ) -> None:
        key = self.key if self.key is not None else default_key(ndim)
        self._lib.llCuhre(
            ndim,
            ncomp,
            cuba_integrand,
            user_data,
            1,
            epsrel,
            epsabs,
            self.flags,
            self.mineval,
            self.maxeval,
            key,
            None,
            None,
            ctypes.byref(outputs.nregions),
            ctypes.byref(outputs.neval),
            ctypes.byref(outputs.fail),
            *outputs.arrays(),
        )

    def __repr__(self) -> str:
        return (
            f"Cuhre(maxeval={self.maxeval}, mineval={self.mineval}, "
            f"key={self.key}, flags={self.flags})"
        )
