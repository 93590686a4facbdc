"""Flattening of TensorDict integrand outputs.

Uses TensorDict's built-in flatten_keys() for nested structures. Leaves are
laid out in sorted flat-key order, each leaf flattened in row-major order.
"""

from typing import Any, List, Sequence, Tuple, Union

import torch
from tensordict import TensorDict
from torch import Tensor

from torchintegrators._exceptions import ArityMismatchError
from torchintegrators.marshaling._shape import OutputShape


def _leaves(value: TensorDict) -> List[Tuple[str, Tensor]]:
    flat = value.flatten_keys(separator=".")
    return [(key, flat[key]) for key in sorted(flat.keys())]


class TensorDictOutput(OutputShape):
    """A TensorDict of tensors, flattened leaf by leaf."""

    def output_arity(self, value: TensorDict) -> int:
        return sum(leaf.numel() for _, leaf in _leaves(value))

    def _write(self, value: TensorDict, buffer: Any) -> None:
        parts = [
            leaf.detach().to(device="cpu", dtype=torch.float64).reshape(-1)
            for _, leaf in _leaves(value)
        ]
        buffer[:] = torch.cat(parts).numpy()

    def __repr__(self) -> str:
        return "TensorDictOutput()"


def unflatten_values(
    values: Union[Tensor, Sequence[float]],
    template: TensorDict,
) -> TensorDict:
    """
    Restore the structure of a TensorDict integrand output.

    Parameters
    ----------
    values : Tensor or sequence of float
        One value per output component, e.g. ``CubatureResults.value``.
    template : TensorDict
        A value returned by the integrand, providing keys and leaf shapes.

    Returns
    -------
    TensorDict
        ``values`` arranged like ``template``.

    Raises
    ------
    ArityMismatchError
        If ``values`` does not have one entry per element of ``template``.
    """
    flat_values = torch.as_tensor(values, dtype=torch.float64).reshape(-1)

    shapes = [(key, tuple(leaf.shape)) for key, leaf in _leaves(template)]
    expected = sum(
        int(torch.Size(shape).numel()) for _, shape in shapes
    )
    if flat_values.numel() != expected:
        raise ArityMismatchError(expected, flat_values.numel())

    flat_td = TensorDict({}, batch_size=[])
    offset = 0
    for key, shape in shapes:
        numel = int(torch.Size(shape).numel())
        flat_td[key] = flat_values[offset : offset + numel].reshape(shape)
        offset += numel

    return flat_td.unflatten_keys(separator=".")
