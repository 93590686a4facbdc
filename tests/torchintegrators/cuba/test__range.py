import math

import numpy as np
import pytest
import torch

from torchintegrators.cuba import IntegrationRange, RandomNumberSource


class TestIntegrationRange:
    def test_transform(self):
        r = IntegrationRange(1.0, 3.0)

        assert r.transform(0.0) == 1.0
        assert r.transform(0.5) == 2.0
        assert r.transform(1.0) == 3.0

    def test_jacobian(self):
        assert IntegrationRange(0.0, math.pi).jacobian() == math.pi
        assert IntegrationRange(2.0, -1.0).jacobian() == -3.0

    @pytest.mark.parametrize("x", [-0.1, 1.1, math.nan])
    def test_outside_unit_interval(self, x):
        with pytest.raises(ValueError, match=r"\[0, 1\]"):
            IntegrationRange(0.0, 1.0).transform(x)

    def test_array_and_tensor(self):
        r = IntegrationRange(0.0, 2.0)

        np.testing.assert_array_equal(
            r.transform(np.array([0.0, 0.25])), [0.0, 0.5]
        )
        assert torch.equal(
            r.transform(torch.tensor([0.5, 1.0])), torch.tensor([1.0, 2.0])
        )
        with pytest.raises(ValueError):
            r.transform(torch.tensor([0.5, 2.0]))


class TestRandomNumberSource:
    def test_sobol_for_zero_seed(self):
        assert RandomNumberSource.from_settings(0, 0) is RandomNumberSource.SOBOL

    def test_mersenne_twister(self):
        assert (
            RandomNumberSource.from_settings(42, 0)
            is RandomNumberSource.MERSENNE_TWISTER
        )

    def test_ranlux_level(self):
        assert (
            RandomNumberSource.from_settings(42, 3 << 8)
            is RandomNumberSource.RANLUX
        )
