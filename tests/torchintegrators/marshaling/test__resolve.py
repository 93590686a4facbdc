from typing import Tuple

import numpy as np
import pytest
import torch
from tensordict import TensorDict

from torchintegrators.marshaling import (
    Real,
    Real3,
    RealTuple,
    RealVector,
    TensorDictOutput,
    TensorVector,
    input_shape_for,
    output_shape_for,
)


class TestInputShapeFor:
    def test_unannotated_is_real(self):
        assert input_shape_for(lambda x: x) is Real

    def test_float_annotation(self):
        def f(x: float) -> float:
            return x

        assert input_shape_for(f) is Real

    def test_tuple_annotation(self):
        def f(p: Tuple[float, float, float]) -> float:
            return sum(p)

        assert input_shape_for(f) == Real3

    def test_explicit_type_wins(self):
        def f(x: float) -> float:
            return x

        assert input_shape_for(f, RealVector(4)) == RealVector(4)
        assert input_shape_for(f, Tuple[float, float]) == RealTuple(2)

    def test_builtin_without_signature(self):
        import math

        assert input_shape_for(math.sin) is Real

    def test_tuple_too_long(self):
        def f(p: Tuple[float, float, float, float, float, float, float, float, float]):
            return 0.0

        with pytest.raises(TypeError, match="tuple"):
            input_shape_for(f)

    @pytest.mark.parametrize("annotation", [np.ndarray, torch.Tensor, list])
    def test_unsized_annotation(self, annotation):
        def f(x):
            return 0.0

        f.__annotations__ = {"x": annotation}

        with pytest.raises(TypeError, match="RealVector"):
            input_shape_for(f)

    def test_unsupported_annotation(self):
        def f(x: str) -> float:
            return 0.0

        with pytest.raises(TypeError, match="unsupported"):
            input_shape_for(f)


class TestOutputShapeFor:
    def test_float(self):
        assert output_shape_for(1.0) is Real
        assert output_shape_for(np.float64(1.0)) is Real

    def test_tuple(self):
        assert output_shape_for((1.0, 2.0)) == RealTuple(2)

    def test_long_tuple_is_vector(self):
        assert output_shape_for(tuple(range(9))) == RealVector()

    def test_list_and_array(self):
        assert output_shape_for([1.0]) == RealVector()
        assert output_shape_for(np.zeros(3)) == RealVector()

    def test_tensor(self):
        assert output_shape_for(torch.zeros(3)) == TensorVector()

    def test_tensordict(self):
        value = TensorDict({"a": torch.zeros(2)}, batch_size=[])

        assert isinstance(output_shape_for(value), TensorDictOutput)

    def test_unsupported(self):
        with pytest.raises(TypeError, match="str"):
            output_shape_for("1.0")
