import ctypes
import math

import numpy as np
import pytest

from torchintegrators.ffi import (
    CUBA_ABORT,
    LandingPad,
    UserData,
    cuba_integrand,
    pad_from_user_data,
    quadpack_integrand,
)
from torchintegrators.marshaling import Real, Real2

_c_double_p = ctypes.POINTER(ctypes.c_double)


class IntegrandFailure(Exception):
    pass


def _call_cuba(user_data, x, ncomp):
    x = np.asarray(x, dtype=np.float64)
    f = np.zeros(ncomp)
    status = cuba_integrand(
        ctypes.byref(ctypes.c_int(len(x))),
        x.ctypes.data_as(_c_double_p),
        ctypes.byref(ctypes.c_int(ncomp)),
        f.ctypes.data_as(_c_double_p),
        user_data.pointer,
    )
    return status, f


class TestUserData:
    def test_round_trip(self):
        pad = LandingPad(lambda x: x, Real)
        user_data = UserData(pad)

        assert pad_from_user_data(user_data.pointer.value) is pad
        pad.finish()


class TestQuadpackIntegrand:
    def test_forwards_value(self):
        pad = LandingPad(lambda x: 2.0 * x, Real)
        user_data = UserData(pad)

        assert quadpack_integrand(1.5, user_data.pointer) == 3.0
        pad.resume_if_failed()

    def test_failure_returns_nan(self):
        def f(x):
            raise IntegrandFailure("inside quadpack")

        pad = LandingPad(f, Real)
        user_data = UserData(pad)

        assert math.isnan(quadpack_integrand(0.5, user_data.pointer))
        assert math.isnan(quadpack_integrand(0.7, user_data.pointer))
        assert pad.calls == 1
        with pytest.raises(IntegrandFailure, match="inside quadpack"):
            pad.resume_if_failed()


class TestCubaIntegrand:
    def test_writes_output(self):
        pad = LandingPad(lambda p: (p[0] + p[1], p[0] * p[1]), Real2)
        user_data = UserData(pad)

        status, f = _call_cuba(user_data, [0.25, 0.5], 2)

        assert status == 0
        np.testing.assert_allclose(f, [0.75, 0.125])
        pad.resume_if_failed()

    def test_failure_aborts(self):
        def f(p):
            raise IntegrandFailure("inside cuba")

        pad = LandingPad(f, Real2)
        user_data = UserData(pad)

        status, _ = _call_cuba(user_data, [0.25, 0.5], 1)
        assert status == CUBA_ABORT

        status, _ = _call_cuba(user_data, [0.5, 0.5], 1)
        assert status == CUBA_ABORT
        assert pad.calls == 1
        with pytest.raises(IntegrandFailure, match="inside cuba"):
            pad.resume_if_failed()

    def test_wrong_output_length_aborts(self):
        pad = LandingPad(lambda p: (1.0, 2.0), Real2)
        user_data = UserData(pad)

        status, _ = _call_cuba(user_data, [0.5, 0.5], 3)

        assert status == CUBA_ABORT
        pad.finish()
