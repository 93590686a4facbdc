import ctypes
import itertools
from typing import Tuple

import pytest

import torchintegrators.cuba._base
from torchintegrators import (
    CubatureResults,
    DidNotConvergeError,
    InvalidInputArityError,
    InvalidOutputArityError,
    UnrecognizedStatusError,
)
from torchintegrators.cuba import Cuhre, Suave, Vegas
from torchintegrators.ffi import CUBA_ABORT
from torchintegrators.marshaling import Real2


class IntegrandFailure(Exception):
    pass


class FakeCuba:
    """
    In-process stand-in for the Cuba shared library.

    Integrates with the midpoint rule on a grid of ``npoints`` points per
    axis, calling the integrand through the C entry point it is handed, the
    way Cuba does. An integrand that returns the abort sentinel ends the
    integration with ``fail = -99``, as in Cuba.
    """

    def __init__(self, fail: int = 0, npoints: int = 4):
        self.fail = fail
        self.npoints = npoints
        self.cores = []
        self.calls = []

    def cubacores(self, n, p):
        self.cores.append((n._obj.value, p._obj.value))

    def _integrate(self, args, nregions=None):
        ndim, ncomp, integrand, userdata = args[:4]
        neval, fail, integral, error, prob = args[-5:]

        total = [0.0] * ncomp
        volume = self.npoints**-ndim
        midpoints = [(k + 0.5) / self.npoints for k in range(self.npoints)]
        count = 0
        status = self.fail
        for point in itertools.product(midpoints, repeat=ndim):
            x = (ctypes.c_double * ndim)(*point)
            f = (ctypes.c_double * ncomp)()
            count += 1
            returned = integrand(
                ctypes.pointer(ctypes.c_int(ndim)),
                x,
                ctypes.pointer(ctypes.c_int(ncomp)),
                f,
                userdata,
            )
            if returned == CUBA_ABORT:
                status = -99
                break
            for i in range(ncomp):
                total[i] += f[i] * volume

        for i in range(ncomp):
            integral[i] = total[i]
            error[i] = 1e-3
            prob[i] = 0.25
        neval._obj.value = count
        fail._obj.value = status
        if nregions is not None:
            nregions._obj.value = 1

    def llCuhre(self, *args):
        self.calls.append("llCuhre")
        self._integrate(args, nregions=args[-6])

    def llVegas(self, *args):
        self.calls.append("llVegas")
        self._integrate(args)

    def llSuave(self, *args):
        self.calls.append("llSuave")
        self._integrate(args, nregions=args[-6])


@pytest.fixture
def fake_cuba(monkeypatch):
    library = FakeCuba()
    monkeypatch.setattr(
        torchintegrators.cuba._base, "load_library", lambda: library
    )
    return library


def product(p: Tuple[float, float]) -> float:
    return p[0] * p[1]


class TestCubaIntegrator:
    def test_forking_is_disabled_on_construction(self, fake_cuba):
        Cuhre(1000)
        Vegas()

        assert fake_cuba.cores == [(0, 0), (0, 0)]

    def test_cuhre_results(self, fake_cuba):
        results = Cuhre(1000).integrate(product)

        assert fake_cuba.calls == ["llCuhre"]
        assert isinstance(results, CubatureResults)
        assert results.components[0].value == pytest.approx(0.25)
        assert results.components[0].error == pytest.approx(1e-3)
        assert results.components[0].prob == pytest.approx(0.25)
        assert results.neval == 16
        assert results.nregions == 1

    def test_vegas_reports_no_regions(self, fake_cuba):
        results = Vegas().integrate(product)

        assert fake_cuba.calls == ["llVegas"]
        assert results.nregions is None
        assert results.neval == 16

    def test_suave_reports_regions(self, fake_cuba):
        results = Suave().integrate(product)

        assert fake_cuba.calls == ["llSuave"]
        assert results.nregions == 1

    def test_multiple_components(self, fake_cuba):
        results = Cuhre(1000).integrate(
            lambda p: (p[0], p[1], 1.0), input_type=Real2
        )

        assert results.value.tolist() == pytest.approx([0.5, 0.5, 1.0])

    def test_integrand_is_first_called_at_the_centre(self, fake_cuba):
        points = []

        def f(p: Tuple[float, float]) -> float:
            points.append(p)
            return 1.0

        Cuhre(1000).integrate(f)

        assert points[0] == (0.5, 0.5)
        assert len(points) == 1 + 16

    def test_integrand_failure_is_reraised(self, fake_cuba):
        """The integrand's exception wins over Cuba's abort status"""
        error = IntegrandFailure("fourth call")
        calls = []

        def f(p: Tuple[float, float]) -> float:
            calls.append(p)
            if len(calls) == 4:
                raise error
            return 1.0

        with pytest.raises(IntegrandFailure) as exc_info:
            Cuhre(1000).integrate(f)

        assert exc_info.value is error
        assert len(calls) == 4

    def test_unhandled_abort_status_is_unrecognized(self, fake_cuba):
        fake_cuba.fail = -99

        with pytest.raises(UnrecognizedStatusError) as exc_info:
            Cuhre(1000).integrate(product)

        assert exc_info.value.code == -99
        assert exc_info.value.backend == "Cuba"

    def test_did_not_converge_keeps_partial_results(self, fake_cuba):
        fake_cuba.fail = 1

        with pytest.raises(DidNotConvergeError) as exc_info:
            Vegas().integrate(product)

        results = exc_info.value.results
        assert isinstance(results, CubatureResults)
        assert results.components[0].value == pytest.approx(0.25)
        assert results.neval == 16

    def test_bad_dimension(self, fake_cuba):
        fake_cuba.fail = -1

        with pytest.raises(InvalidInputArityError) as exc_info:
            Cuhre(1000).integrate(product)

        assert exc_info.value.arity == 2
        assert exc_info.value.algorithm == "cuhre"

    def test_bad_components(self, fake_cuba):
        fake_cuba.fail = -2

        with pytest.raises(InvalidOutputArityError) as exc_info:
            Suave().integrate(lambda p: (p[0], p[1]), input_type=Real2)

        assert exc_info.value.arity == 2
