"""Base classes for converting integrand values to and from flat buffers."""

from abc import ABC, abstractmethod
from typing import Any, Sequence

from torchintegrators._exceptions import ArityMismatchError


class InputShape(ABC):
    """Converts a flat buffer of doubles into an integrand argument."""

    @abstractmethod
    def input_arity(self) -> int:
        """Number of doubles consumed by :meth:`from_buffer`."""
        ...

    @abstractmethod
    def _convert(self, buffer: Sequence[float]) -> Any: ...

    def from_buffer(self, buffer: Sequence[float]) -> Any:
        """
        Build an integrand argument from ``buffer``.

        The returned value never aliases ``buffer``.

        Raises
        ------
        ArityMismatchError
            If ``len(buffer) != self.input_arity()``.
        """
        expected = self.input_arity()
        if len(buffer) != expected:
            raise ArityMismatchError(expected, len(buffer))
        return self._convert(buffer)


class OutputShape(ABC):
    """Writes integrand return values into a flat buffer of doubles."""

    @abstractmethod
    def output_arity(self, value: Any) -> int:
        """Number of doubles ``value`` occupies."""
        ...

    @abstractmethod
    def _write(self, value: Any, buffer: Any) -> None: ...

    def into_buffer(self, value: Any, buffer: Any) -> None:
        """
        Write ``value`` into ``buffer``.

        The arity is checked on every call, since variable-length outputs can
        change length between calls.

        Raises
        ------
        ArityMismatchError
            If ``len(buffer) != self.output_arity(value)``.
        """
        actual = self.output_arity(value)
        if len(buffer) != actual:
            raise ArityMismatchError(
                len(buffer),
                actual,
                "Integrand returned a value of the wrong length.",
            )
        self._write(value, buffer)
