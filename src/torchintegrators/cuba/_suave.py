import ctypes

from torchintegrators.cuba._base import (
    MAX_EVALUATIONS,
    CubaIntegrator,
    CubaOutputs,
    check_evaluations,
)
from torchintegrators.cuba._random import RandomNumberSource
from torchintegrators.ffi import cuba_integrand


class Suave(CubaIntegrator):
    """
    Monte Carlo integration with subregion adaptivity (Cuba's Suave).

    Suave combines Vegas-style importance sampling with recursive
    subdivision of the hypercube.

    Parameters
    ----------
    mineval, maxeval : int
        Bounds on the number of integrand evaluations.
    seed : int
        Seed of the random number generator; see :attr:`random_source`.
    nnew : int
        Number of new integrand evaluations in each subdivision.
    nmin : int
        Minimum number of samples a former pass must contribute to a
        subregion to be considered in that region's compound estimate.
    flatness : float
        Type of norm used to compute the fluctuation of a sample. Larger
        values weigh the peaks of the sample more heavily.
    flags : int
        Cuba flags.
    """

    algorithm = "suave"

    def __init__(
        self,
        mineval: int = 1,
        maxeval: int = MAX_EVALUATIONS,
        seed: int = 0,
        nnew: int = 1000,
        nmin: int = 5,
        flatness: float = 25.0,
        flags: int = 0,
    ):
        check_evaluations(mineval, maxeval)
        self.mineval = mineval
        self.maxeval = maxeval
        self.seed = seed
        self.nnew = nnew
        self.nmin = nmin
        self.flatness = flatness
        super().__init__(flags)

    @property
    def random_source(self) -> RandomNumberSource:
        return RandomNumberSource.from_settings(self.seed, self.flags)

    def with_mineval(self, mineval: int) -> "Suave":
        check_evaluations(mineval, self.maxeval)
        self.mineval = mineval
        return self

    def with_maxeval(self, maxeval: int) -> "Suave":
        check_evaluations(self.mineval, maxeval)
        self.maxeval = maxeval
        return self

    def with_seed(self, seed: int) -> "Suave":
        self.seed = seed
        return self

    def with_nnew(self, nnew: int) -> "Suave":
        self.nnew = nnew
        return self

    def with_nmin(self, nmin: int) -> "Suave":
        self.nmin = nmin
        return self

    def with_flatness(self, flatness: float) -> "Suave":
        self.flatness = flatness
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
        self._lib.llSuave(
            ndim,
            ncomp,
            cuba_integrand,
            user_data,
            1,
            epsrel,
            epsabs,
            self.flags,
            self.seed,
            self.mineval,
            self.maxeval,
            self.nnew,
            self.nmin,
            self.flatness,
            None,
            None,
            ctypes.byref(outputs.nregions),
            ctypes.byref(outputs.neval),
            ctypes.byref(outputs.fail),
            *outputs.arrays(),
        )

    def __repr__(self) -> str:
        return (
            f"Suave(mineval={self.mineval}, maxeval={self.maxeval}, "
            f"seed={self.seed}, nnew={self.nnew}, nmin={self.nmin}, "
            f"flatness={self.flatness}, flags={self.flags})"
        )
