"""Exception barrier between foreign integration routines and integrands."""

import warnings
from typing import Any, Callable, Optional, Sequence

from torchintegrators._exceptions import CapturedFailureWarning
from torchintegrators.marshaling import InputShape, output_shape_for


class LandingPad:
    """
    Wraps an integrand so that it can be called from foreign code.

    An exception must never propagate out of a callback into the native
    frames of a foreign routine. The landing pad catches any exception raised
    while evaluating the integrand (including arity errors while marshaling),
    stores it, and lets the caller abort the foreign routine through its own
    status channel. Once the foreign routine has returned, the stored
    exception is re-raised with :meth:`resume_if_failed`.

    The integrand is allowed to fail only once: after the first failure,
    :meth:`try_invoke` returns the stored exception without calling the
    integrand again.

    Parameters
    ----------
    fun : callable
        The integrand.
    input_shape : InputShape
        Converts input buffers into arguments of ``fun``.

    Attributes
    ----------
    calls : int
        Number of times the integrand was invoked through :meth:`try_invoke`.

    Examples
    --------
    >>> pad = LandingPad(lambda x: x * x, Real)
    >>> output = np.zeros(1)
    >>> pad.try_invoke(np.array([3.0]), output) is None
    True
    >>> output
    array([9.])
    >>> pad.resume_if_failed()
    """

    def __init__(self, fun: Callable[[Any], Any], input_shape: InputShape):
        self._fun = fun
        self._input_shape = input_shape
        self._failure: Optional[BaseException] = None
        self._consumed = False
        self.calls = 0

    @property
    def input_shape(self) -> InputShape:
        return self._input_shape

    @property
    def failure(self) -> Optional[BaseException]:
        """The captured exception, if any."""
        return self._failure

    def _check_not_consumed(self) -> None:
        if self._consumed:
            raise RuntimeError("landing pad has already been finished")

    def try_invoke(
        self, args: Sequence[float], output: Any
    ) -> Optional[BaseException]:
        """
        Evaluate the integrand on ``args`` and write the result to ``output``.

        Parameters
        ----------
        args : sequence of float
            Input buffer. Not referenced after this call returns.
        output : array-like
            Output buffer, written in place.

        Returns
        -------
        BaseException or None
            ``None`` on success, otherwise the captured exception. If an
            exception was captured by an earlier call, it is returned again
            and the integrand is not called.
        """
        self._check_not_consumed()
        if self._failure is not None:
            return self._failure
        try:
            arg = self._input_shape.from_buffer(args)
            self.calls += 1
            value = self._fun(arg)
            output_shape_for(value).into_buffer(value, output)
        except BaseException as exc:
            # Nothing may unwind into the foreign caller's frames.
            self._failure = exc
        return self._failure

    def raw_invoke(self, args: Sequence[float]) -> Any:
        """
        Evaluate the integrand without catching exceptions.

        Only for use outside any foreign call, e.g. to probe the output
        arity before the backend is started.
        """
        self._check_not_consumed()
        return self._fun(self._input_shape.from_buffer(args))

    def finish(self) -> Optional[BaseException]:
        """
        Consume the landing pad and return the captured exception, if any.

        The exception is not raised.
        """
        self._check_not_consumed()
        self._consumed = True
        return self._failure

    def resume_if_failed(self) -> None:
        """
        Consume the landing pad, re-raising the captured exception, if any.

        The exception object is the one raised by the integrand, with its
        original traceback.
        """
        failure = self.finish()
        if failure is not None:
            raise failure

    def __del__(self):
        if not getattr(self, "_consumed", True) and self._failure is not None:
            warnings.warn(
                f"integrand failure was captured but never resumed or "
                f"inspected: {self._failure!r}",
                CapturedFailureWarning,
            )
