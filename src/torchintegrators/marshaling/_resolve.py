"""Selection of input and output shapes for an integrand."""

import inspect
import numbers
import typing
from typing import Any, Callable, Optional

import numpy as np
import torch
from tensordict import TensorDict

from torchintegrators.marshaling._real import (
    MAX_TUPLE_ARITY,
    Real,
    RealTuple,
)
from torchintegrators.marshaling._shape import InputShape, OutputShape
from torchintegrators.marshaling._tensordict import TensorDictOutput
from torchintegrators.marshaling._vector import RealVector, TensorVector

_REAL_TYPES = (float, int, np.float64, np.float32, "float")

_VECTOR_OUTPUT = RealVector()
_TENSOR_OUTPUT = TensorVector()
_TENSORDICT_OUTPUT = TensorDictOutput()


def _first_parameter_annotation(fun: Callable) -> Any:
    try:
        signature = inspect.signature(fun)
    except (TypeError, ValueError):
        # Builtins such as math.sin carry no signature.
        return None

    positional = [
        p
        for p in signature.parameters.values()
        if p.kind
        in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        )
    ]
    if not positional:
        return None
    parameter = positional[0]

    try:
        hints = typing.get_type_hints(fun)
    except (NameError, TypeError):
        hints = {}
    if parameter.name in hints:
        return hints[parameter.name]
    if parameter.annotation is inspect.Parameter.empty:
        return None
    return parameter.annotation


def _as_input_shape(input_type: Any) -> InputShape:
    if isinstance(input_type, InputShape):
        return input_type
    if input_type is None or input_type in _REAL_TYPES:
        return Real

    if input_type is tuple or typing.get_origin(input_type) is tuple:
        args = typing.get_args(input_type)
        if (
            args
            and Ellipsis not in args
            and all(a in _REAL_TYPES for a in args)
            and len(args) <= MAX_TUPLE_ARITY
        ):
            return RealTuple(len(args))
        raise TypeError(
            f"unsupported tuple input type {input_type!r}: expected a tuple "
            f"of 1 to {MAX_TUPLE_ARITY} floats"
        )

    if input_type in (np.ndarray, list, torch.Tensor):
        raise TypeError(
            f"input type {input_type!r} has no static dimension; pass "
            f"input_type=RealVector(n) or input_type=TensorVector(n)"
        )

    raise TypeError(f"unsupported integrand input type {input_type!r}")


def input_shape_for(
    fun: Callable, input_type: Optional[Any] = None
) -> InputShape:
    """
    Select the input shape of an integrand without calling it.

    Parameters
    ----------
    fun : callable
        The integrand.
    input_type : type or InputShape, optional
        Explicit input shape or type. When omitted, the annotation of the
        first positional parameter of ``fun`` is used; unannotated integrands
        take a single float.

    Returns
    -------
    InputShape

    Raises
    ------
    TypeError
        If the input type is not supported.

    Examples
    --------
    >>> def f(p: Tuple[float, float]) -> float:
    ...     return p[0] * p[1]
    >>> input_shape_for(f).input_arity()
    2
    """
    if input_type is None:
        input_type = _first_parameter_annotation(fun)
    return _as_input_shape(input_type)


def output_shape_for(value: Any) -> OutputShape:
    """
    Select the output shape matching a value returned by an integrand.

    Floats map to :data:`Real`, tuples of up to 8 entries to
    :class:`RealTuple`, tensors to :class:`TensorVector`, TensorDicts to
    :class:`TensorDictOutput` and any other sequence or array to
    :class:`RealVector`.

    Raises
    ------
    TypeError
        If ``value`` is not numeric.
    """
    if isinstance(value, TensorDict):
        return _TENSORDICT_OUTPUT
    if isinstance(value, torch.Tensor):
        return _TENSOR_OUTPUT
    if isinstance(value, numbers.Real):
        return Real
    if isinstance(value, tuple) and 1 <= len(value) <= MAX_TUPLE_ARITY:
        return RealTuple(len(value))
    if isinstance(value, (tuple, list, np.ndarray)):
        return _VECTOR_OUTPUT
    raise TypeError(
        f"integrand returned unsupported type {type(value).__name__}"
    )
