"""Shapes for real scalars and fixed-size tuples of reals."""

import numbers
from dataclasses import dataclass
from typing import Any, Sequence, Tuple

from torchintegrators._exceptions import ArityMismatchError
from torchintegrators.marshaling._shape import InputShape, OutputShape

MAX_TUPLE_ARITY = 8


class RealScalar(InputShape, OutputShape):
    """A single real number, of arity 1."""

    def input_arity(self) -> int:
        return 1

    def _convert(self, buffer: Sequence[float]) -> float:
        return float(buffer[0])

    def output_arity(self, value: Any) -> int:
        return 1

    def _write(self, value: Any, buffer: Any) -> None:
        if not isinstance(value, numbers.Real):
            raise TypeError(
                f"expected a real number, got {type(value).__name__}"
            )
        buffer[0] = float(value)

    def __repr__(self) -> str:
        return "Real"


@dataclass(frozen=True)
class RealTuple(InputShape, OutputShape):
    """
    A tuple of ``n`` real numbers.

    Parameters
    ----------
    n : int
        Tuple arity, between 1 and 8.
    """

    n: int

    def __post_init__(self):
        if not 1 <= self.n <= MAX_TUPLE_ARITY:
            raise ValueError(
                f"tuple arity must be between 1 and {MAX_TUPLE_ARITY}, got {self.n}"
            )

    def input_arity(self) -> int:
        return self.n

    def _convert(self, buffer: Sequence[float]) -> Tuple[float, ...]:
        return tuple(float(x) for x in buffer)

    def output_arity(self, value: Any) -> int:
        return self.n

    def _write(self, value: Any, buffer: Any) -> None:
        if len(value) != self.n:
            raise ArityMismatchError(self.n, len(value))
        for i, x in enumerate(value):
            buffer[i] = float(x)


Real = RealScalar()
Real2 = RealTuple(2)
Real3 = RealTuple(3)
Real4 = RealTuple(4)
Real5 = RealTuple(5)
Real6 = RealTuple(6)
Real7 = RealTuple(7)
Real8 = RealTuple(8)
