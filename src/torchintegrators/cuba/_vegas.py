import ctypes

from torchintegrators._exceptions import InvalidConfigurationError
from torchintegrators.cuba._base import (
    MAX_EVALUATIONS,
    CubaIntegrator,
    CubaOutputs,
    check_evaluations,
)
from torchintegrators.cuba._random import RandomNumberSource
from torchintegrators.ffi import cuba_integrand

# Number of grid slots Cuba keeps for Vegas.
MAX_GRIDS = 10


class Vegas(CubaIntegrator):
    """
    Monte Carlo integration with importance sampling (Cuba's Vegas).

    Vegas reports no region count, so ``nregions`` of its results is
    ``None``.

    Parameters
    ----------
    mineval, maxeval : int
        Bounds on the number of integrand evaluations.
    seed : int
        Seed of the random number generator; see :attr:`random_source`.
    nstart : int
        Number of evaluations per iteration to start with.
    nincrease : int
        Increase in the number of evaluations per iteration.
    nbatch : int
        Number of points sampled in one batch.
    gridno : int
        Slot for storing and reusing the importance grid, in
        ``[-10, 10]``. 0 disables grid storage.
    flags : int
        Cuba flags.
    """

    algorithm = "vegas"
    reports_nregions = False

    def __init__(
        self,
        mineval: int = 1,
        maxeval: int = MAX_EVALUATIONS,
        seed: int = 0,
        nstart: int = 1000,
        nincrease: int = 500,
        nbatch: int = 1000,
        gridno: int = 0,
        flags: int = 0,
    ):
        check_evaluations(mineval, maxeval)
        self.mineval = mineval
        self.maxeval = maxeval
        self.seed = seed
        self.nstart = nstart
        self.nincrease = nincrease
        self.nbatch = nbatch
        self.with_gridno(gridno)
        super().__init__(flags)

    @property
    def random_source(self) -> RandomNumberSource:
        return RandomNumberSource.from_settings(self.seed, self.flags)

    def with_mineval(self, mineval: int) -> "Vegas":
        check_evaluations(mineval, self.maxeval)
        self.mineval = mineval
        return self

    def with_maxeval(self, maxeval: int) -> "Vegas":
        check_evaluations(self.mineval, maxeval)
        self.maxeval = maxeval
        return self

    def with_seed(self, seed: int) -> "Vegas":
        self.seed = seed
        return self

    def with_nstart(self, nstart: int) -> "Vegas":
        self.nstart = nstart
        return self

    def with_nincrease(self, nincrease: int) -> "Vegas":
        self.nincrease = nincrease
        return self

    def with_nbatch(self, nbatch: int) -> "Vegas":
        self.nbatch = nbatch
        return self

    def with_gridno(self, gridno: int) -> "Vegas":
        if abs(gridno) > MAX_GRIDS:
            raise InvalidConfigurationError(
                f"gridno must be in [-{MAX_GRIDS}, {MAX_GRIDS}], got {gridno}"
            )
        self.gridno = gridno
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
        self._lib.llVegas(
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
            self.nstart,
            self.nincrease,
            self.nbatch,
            self.gridno,
            None,
            None,
            ctypes.byref(outputs.neval),
            ctypes.byref(outputs.fail),
            *outputs.arrays(),
        )

    def __repr__(self) -> str:
        return (
            f"Vegas(mineval={self.mineval}, maxeval={self.maxeval}, "
            f"seed={self.seed}, nstart={self.nstart}, "
            f"nincrease={self.nincrease}, nbatch={self.nbatch}, "
            f"gridno={self.gridno}, flags={self.flags})"
        )
