"""Common machinery for the Cuba integrators."""

import ctypes
from abc import abstractmethod
from typing import Any, Callable, Optional

import numpy as np

from torchintegrators._exceptions import InvalidConfigurationError
from torchintegrators._integrator import Integrator, check_tolerances
from torchintegrators._result import CubatureResults, zip_results
from torchintegrators.cuba._bindings import disable_forking, load_library
from torchintegrators.cuba._status import check_cuba_status
from torchintegrators.ffi import LandingPad, UserData
from torchintegrators.marshaling import input_shape_for, output_shape_for

# Upper bound of Cuba's `long long` evaluation counters.
MAX_EVALUATIONS = 2**63 - 1

_c_double_p = ctypes.POINTER(ctypes.c_double)


def check_evaluations(mineval: int, maxeval: int) -> None:
    if mineval < 0:
        raise InvalidConfigurationError(f"mineval must be non-negative, got {mineval}")
    if maxeval < 1 or maxeval > MAX_EVALUATIONS:
        raise InvalidConfigurationError(
            f"maxeval must be in [1, {MAX_EVALUATIONS}], got {maxeval}"
        )
    if mineval > maxeval:
        raise InvalidConfigurationError(
            f"mineval ({mineval}) must not exceed maxeval ({maxeval})"
        )


class CubaOutputs:
    """Output arguments of one Cuba call."""

    def __init__(self, ncomp: int):
        self.nregions = ctypes.c_int(0)
        self.neval = ctypes.c_longlong(0)
        self.fail = ctypes.c_int(0)
        self.integral = np.zeros(ncomp)
        self.error = np.zeros(ncomp)
        self.prob = np.zeros(ncomp)

    def arrays(self):
        """``integral, error, prob`` as ``double *`` arguments."""
        return tuple(
            a.ctypes.data_as(_c_double_p)
            for a in (self.integral, self.error, self.prob)
        )

    def results(self, nregions: bool) -> CubatureResults:
        return CubatureResults(
            zip_results(self.integral, self.error, self.prob),
            neval=int(self.neval.value),
            nregions=int(self.nregions.value) if nregions else None,
        )


class CubaIntegrator(Integrator):
    """
    Base class for integrators backed by the Cuba library.

    Cuba integrates over the unit hypercube ``[0, 1]^ndim``; see
    :class:`IntegrationRange` for other ranges. Constructing an integrator
    loads the library and disables Cuba's fork-based parallelism.

    Raises
    ------
    CubaUnavailableError
        If the Cuba library cannot be loaded.
    """

    algorithm = "cuba"
    reports_nregions = True

    def __init__(self, flags: int = 0):
        self._lib = load_library()
        disable_forking(self._lib)
        self.flags = flags

    def with_flags(self, flags: int):
        self.flags = flags
        return self

    @abstractmethod
    def _call(
        self,
        ndim: int,
        ncomp: int,
        user_data: ctypes.c_void_p,
        epsrel: float,
        epsabs: float,
        outputs: CubaOutputs,
    ) -> None: ...

    def integrate(
        self,
        fun: Callable[[Any], Any],
        epsrel: float = 1e-4,
        epsabs: float = 1e-12,
        *,
        input_type: Optional[Any] = None,
    ) -> CubatureResults:
        check_tolerances(epsrel, epsabs)
        input_shape = input_shape_for(fun, input_type)
        ndim = input_shape.input_arity()

        pad = LandingPad(fun, input_shape)
        value = pad.raw_invoke(np.full(ndim, 0.5))
        ncomp = output_shape_for(value).output_arity(value)

        outputs = CubaOutputs(ncomp)
        user_data = UserData(pad)
        self._call(ndim, ncomp, user_data.pointer, epsrel, epsabs, outputs)
        pad.resume_if_failed()

        return check_cuba_status(
            outputs.fail.value,
            self.algorithm,
            ndim,
            ncomp,
            outputs.results(self.reports_nregions),
        )

