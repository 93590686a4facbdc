import gc
import warnings

import numpy as np
import pytest

from torchintegrators import ArityMismatchError, CapturedFailureWarning
from torchintegrators.ffi import LandingPad
from torchintegrators.marshaling import Real, Real2, RealVector


class IntegrandFailure(Exception):
    pass


class TestLandingPad:
    def test_successful_call(self):
        pad = LandingPad(lambda x: x * x, Real)
        output = np.zeros(1)

        assert pad.try_invoke(np.array([3.0]), output) is None
        assert output[0] == 9.0
        assert pad.calls == 1
        pad.resume_if_failed()

    def test_failure_is_captured(self):
        def f(x):
            raise IntegrandFailure("boom")

        pad = LandingPad(f, Real)
        failure = pad.try_invoke([0.5], np.zeros(1))

        assert isinstance(failure, IntegrandFailure)
        assert pad.failure is failure
        pad.finish()

    def test_fail_once(self):
        """After a failure on call k, the integrand is never invoked again"""
        calls = []

        def f(x):
            calls.append(x)
            if len(calls) == 3:
                raise IntegrandFailure("third call")
            return x

        pad = LandingPad(f, Real)
        output = np.zeros(1)
        for i in range(10):
            pad.try_invoke([float(i)], output)

        assert len(calls) == 3
        assert pad.calls == 3
        with pytest.raises(IntegrandFailure, match="third call"):
            pad.resume_if_failed()

    def test_resume_raises_same_object(self):
        error = IntegrandFailure("payload")

        def f(x):
            raise error

        pad = LandingPad(f, Real)
        pad.try_invoke([0.0], np.zeros(1))

        with pytest.raises(IntegrandFailure) as exc_info:
            pad.resume_if_failed()

        assert exc_info.value is error

    def test_base_exceptions_are_captured(self):
        def f(x):
            raise KeyboardInterrupt

        pad = LandingPad(f, Real)

        assert isinstance(pad.try_invoke([0.0], np.zeros(1)), KeyboardInterrupt)
        pad.finish()

    def test_input_arity_mismatch_is_captured(self):
        pad = LandingPad(lambda p: p[0] + p[1], Real2)
        failure = pad.try_invoke([1.0, 2.0, 3.0], np.zeros(1))

        assert isinstance(failure, ArityMismatchError)
        assert failure.expected == 2
        assert failure.actual == 3
        assert pad.calls == 0
        pad.finish()

    def test_output_arity_mismatch_is_captured(self):
        pad = LandingPad(lambda x: [x, x], RealVector(1))
        failure = pad.try_invoke([1.0], np.zeros(1))

        assert isinstance(failure, ArityMismatchError)
        pad.finish()

    def test_finish_returns_failure_without_raising(self):
        def f(x):
            raise IntegrandFailure

        pad = LandingPad(f, Real)
        pad.try_invoke([0.0], np.zeros(1))

        assert isinstance(pad.finish(), IntegrandFailure)

    def test_use_after_finish(self):
        pad = LandingPad(lambda x: x, Real)
        pad.finish()

        with pytest.raises(RuntimeError, match="already been finished"):
            pad.try_invoke([0.0], np.zeros(1))
        with pytest.raises(RuntimeError, match="already been finished"):
            pad.resume_if_failed()

    def test_raw_invoke_propagates(self):
        def f(x):
            raise IntegrandFailure("raw")

        pad = LandingPad(f, Real)

        with pytest.raises(IntegrandFailure, match="raw"):
            pad.raw_invoke([0.0])
        assert pad.failure is None

    def test_unconsumed_failure_warns(self):
        def f(x):
            raise IntegrandFailure

        pad = LandingPad(f, Real)
        pad.try_invoke([0.0], np.zeros(1))

        with pytest.warns(CapturedFailureWarning):
            del pad
            gc.collect()

    def test_consumed_pad_does_not_warn(self):
        pad = LandingPad(lambda x: x, Real)
        pad.try_invoke([0.0], np.zeros(1))
        pad.resume_if_failed()

        with warnings.catch_warnings():
            warnings.simplefilter("error", CapturedFailureWarning)
            del pad
            gc.collect()
