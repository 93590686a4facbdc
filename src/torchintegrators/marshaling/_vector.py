"""Shapes for variable-length vectors (numpy arrays and torch tensors)."""

from dataclasses import dataclass
from typing import Any, Optional, Sequence

import numpy as np
import torch
from torch import Tensor

from torchintegrators.marshaling._shape import InputShape, OutputShape


def _require_dimension(n: Optional[int], name: str) -> int:
    if n is None:
        raise TypeError(
            f"{name} used as an input shape needs an explicit dimension, "
            f"e.g. {name}(3)"
        )
    return n


@dataclass(frozen=True)
class RealVector(InputShape, OutputShape):
    """
    A ``float64`` numpy vector.

    As an input shape the dimension ``n`` is required; as an output shape it
    is ignored and the arity is the length of each returned value.

    Parameters
    ----------
    n : int, optional
        Input dimension.
    """

    n: Optional[int] = None

    def __post_init__(self):
        if self.n is not None and self.n < 1:
            raise ValueError(f"dimension must be positive, got {self.n}")

    def input_arity(self) -> int:
        return _require_dimension(self.n, "RealVector")

    def _convert(self, buffer: Sequence[float]) -> np.ndarray:
        return np.array(buffer, dtype=np.float64)

    def output_arity(self, value: Any) -> int:
        return int(np.size(value))

    def _write(self, value: Any, buffer: Any) -> None:
        buffer[:] = np.asarray(value, dtype=np.float64).reshape(-1)


@dataclass(frozen=True)
class TensorVector(InputShape, OutputShape):
    """
    A one-dimensional ``torch.float64`` tensor.

    Tensors returned by the integrand are flattened, so a 0-d tensor has
    arity 1. Gradients are not tracked through the backend.

    Parameters
    ----------
    n : int, optional
        Input dimension, required when used as an input shape.
    """

    n: Optional[int] = None

    def __post_init__(self):
        if self.n is not None and self.n < 1:
            raise ValueError(f"dimension must be positive, got {self.n}")

    def input_arity(self) -> int:
        return _require_dimension(self.n, "TensorVector")

    def _convert(self, buffer: Sequence[float]) -> Tensor:
        return torch.tensor(np.asarray(buffer), dtype=torch.float64)

    def output_arity(self, value: Tensor) -> int:
        return value.numel()

    def _write(self, value: Tensor, buffer: Any) -> None:
        flat = value.detach().to(device="cpu", dtype=torch.float64).reshape(-1)
        buffer[:] = flat.numpy()
