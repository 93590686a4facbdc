"""
Conversion between integrand values and flat buffers of doubles.

Foreign integration routines only exchange flat ``double`` buffers. Every
supported integrand value has one canonical, arity-checked mapping to such a
buffer.

Input shapes:
    Real, RealTuple (Real2 ... Real8), RealVector, TensorVector

Output shapes:
    Real, RealTuple, RealVector, TensorVector, TensorDictOutput

Shape selection:
    input_shape_for, output_shape_for

Utilities:
    unflatten_values
"""

from torchintegrators.marshaling._real import (
    MAX_TUPLE_ARITY,
    Real,
    Real2,
    Real3,
    Real4,
    Real5,
    Real6,
    Real7,
    Real8,
    RealScalar,
    RealTuple,
)
from torchintegrators.marshaling._resolve import (
    input_shape_for,
    output_shape_for,
)
from torchintegrators.marshaling._shape import InputShape, OutputShape
from torchintegrators.marshaling._tensordict import (
    TensorDictOutput,
    unflatten_values,
)
from torchintegrators.marshaling._vector import RealVector, TensorVector

__all__ = [
    # Base classes
    "InputShape",
    "OutputShape",
    # Shapes
    "MAX_TUPLE_ARITY",
    "Real",
    "Real2",
    "Real3",
    "Real4",
    "Real5",
    "Real6",
    "Real7",
    "Real8",
    "RealScalar",
    "RealTuple",
    "RealVector",
    "TensorVector",
    "TensorDictOutput",
    # Selection
    "input_shape_for",
    "output_shape_for",
    # Utilities
    "unflatten_values",
]
