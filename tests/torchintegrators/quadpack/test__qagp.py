import math

import hypothesis
import pytest
import scipy.integrate

from torchintegrators import InvalidConfigurationError
from torchintegrators.quadpack import QAGP, verify_singular_points
from torchintegrators.testing.strategies import singular_point_lists


class TestVerifySingularPoints:
    @hypothesis.given(points=singular_point_lists())
    def test_increasing_points_are_accepted(self, points):
        assert verify_singular_points(points) == tuple(points)

    @hypothesis.given(points=singular_point_lists(min_size=2))
    def test_decreasing_points_are_rejected(self, points):
        with pytest.raises(InvalidConfigurationError, match="increasing"):
            verify_singular_points(reversed(points))

    def test_repeated_point(self):
        with pytest.raises(InvalidConfigurationError, match="increasing"):
            verify_singular_points([0.0, 0.5, 0.5, 1.0])

    @pytest.mark.parametrize("points", [[], [1.0]])
    def test_too_few_points(self, points):
        with pytest.raises(InvalidConfigurationError, match="bounds"):
            verify_singular_points(points)

    def test_non_finite_point(self):
        with pytest.raises(InvalidConfigurationError, match="finite"):
            verify_singular_points([0.0, math.inf])


class TestQAGP:
    def test_singularities(self):
        with QAGP([0.0, 0.25, 0.5, 1.0]) as qagp:
            assert qagp.singularities == (0.25, 0.5)
            assert qagp.points == (0.0, 0.25, 0.5, 1.0)

    def test_interior_singularity(self):
        """1/sqrt|x - 0.5| over [0, 1] is 2 sqrt(2)"""
        with QAGP([0.0, 0.5, 1.0]) as qagp:
            result = qagp.integrate(
                lambda x: 1.0 / math.sqrt(abs(x - 0.5)), 1e-6, 1e-10
            )

        assert abs(result.value - 2.0 * math.sqrt(2.0)) <= result.error

    def test_with_points(self):
        with QAGP([0.0, 0.5, 1.0]) as qagp:
            result = qagp.with_points([0.0, 1.0]).integrate(
                lambda x: 1.0 / math.sqrt(1.0 - x), 1e-6, 1e-10
            )

        assert abs(result.value - 2.0) <= result.error

    def test_matches_scipy(self):
        """Compare with scipy.integrate.quad with break points"""

        def f(x):
            return math.log(abs(x - 1.0 / 3.0))

        with QAGP([0.0, 1.0 / 3.0, 1.0]) as qagp:
            result = qagp.integrate(f)

        expected, _ = scipy.integrate.quad(f, 0.0, 1.0, points=[1.0 / 3.0])
        assert result.value == pytest.approx(expected, rel=1e-10)

    def test_invalid_points_rejected_at_construction(self):
        with pytest.raises(InvalidConfigurationError):
            QAGP([1.0, 0.0])
