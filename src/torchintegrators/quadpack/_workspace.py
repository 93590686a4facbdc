"""Subinterval table shared by the adaptive QUADPACK integrators."""

import contextlib
import threading
import warnings
from typing import Any, Dict, Iterator

import numpy as np

from torchintegrators._exceptions import InvalidConfigurationError


class QuadratureWorkspace:
    """
    Storage for the subintervals of an adaptive quadrature.

    A workspace is sized for at most ``nintervals`` subintervals, which is
    also the subdivision limit passed to QUADPACK. It is owned by exactly one
    integrator and cannot be used by two integrations at the same time.
    After each integration it holds the final partition of the range.

    Call :meth:`close` (or use the workspace as a context manager) to release
    it. Closing twice is harmless.

    Parameters
    ----------
    nintervals : int
        Maximum number of subintervals.

    Examples
    --------
    >>> with QuadratureWorkspace(100) as workspace:
    ...     workspace.resize(500)
    ...     workspace.nintervals
    500
    """

    def __init__(self, nintervals: int):
        self._lock = threading.Lock()
        self._closed = True
        self._allocate(nintervals)

    def _allocate(self, nintervals: int) -> None:
        if nintervals < 1:
            raise InvalidConfigurationError(
                f"nintervals must be at least 1, got {nintervals}"
            )
        self._nintervals = int(nintervals)
        self._alist = np.zeros(nintervals)
        self._blist = np.zeros(nintervals)
        self._rlist = np.zeros(nintervals)
        self._elist = np.zeros(nintervals)
        self._last = 0
        self._neval = 0
        self._closed = False

    def _release(self) -> None:
        self._alist = self._blist = self._rlist = self._elist = None
        self._last = 0
        self._closed = True

    @property
    def nintervals(self) -> int:
        return self._nintervals

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def nintervals_used(self) -> int:
        """Number of subintervals produced by the last integration."""
        return self._last

    @property
    def neval(self) -> int:
        """Number of integrand evaluations in the last integration."""
        return self._neval

    def resize(self, nintervals: int) -> None:
        """Release the current storage and allocate room for ``nintervals``."""
        if not self._lock.acquire(blocking=False):
            raise RuntimeError("cannot resize a workspace that is in use")
        try:
            self._release()
            self._allocate(nintervals)
        finally:
            self._lock.release()

    def close(self) -> None:
        """Release the storage. Later integrations will fail."""
        if not self._lock.acquire(blocking=False):
            raise RuntimeError("cannot close a workspace that is in use")
        try:
            if not self._closed:
                self._release()
        finally:
            self._lock.release()

    @contextlib.contextmanager
    def acquire(self) -> Iterator["QuadratureWorkspace"]:
        """Reserve the workspace for one integration."""
        if not self._lock.acquire(blocking=False):
            raise RuntimeError("workspace is already in use")
        try:
            if self._closed:
                raise RuntimeError("workspace is closed")
            yield self
        finally:
            self._lock.release()

    def clear(self) -> None:
        """Forget the partition of the previous integration."""
        for target in (self._alist, self._blist, self._rlist, self._elist):
            target.fill(0.0)
        self._last = 0
        self._neval = 0

    def record(self, infodict: Dict[str, Any]) -> None:
        """Store the partition reported by a QUADPACK routine."""
        last = min(int(infodict.get("last", 0)), self._nintervals)
        for name, target in (
            ("alist", self._alist),
            ("blist", self._blist),
            ("rlist", self._rlist),
            ("elist", self._elist),
        ):
            source = infodict.get(name)
            target.fill(0.0)
            if source is not None:
                target[:last] = np.asarray(source)[:last]
        self._last = last
        self._neval = int(infodict.get("neval", 0))

    def subintervals(self) -> np.ndarray:
        """
        Final partition of the last integration.

        Returns
        -------
        np.ndarray
            Shape ``(nintervals_used, 4)``, columns ``(a, b, value, error)``,
            sorted by left endpoint. For infinite ranges the endpoints refer
            to the transformed range ``(0, 1]``.
        """
        if self._closed:
            raise RuntimeError("workspace is closed")
        last = self._last
        table = np.stack(
            (
                self._alist[:last],
                self._blist[:last],
                self._rlist[:last],
                self._elist[:last],
            ),
            axis=-1,
        )
        return table[np.argsort(table[:, 0], kind="stable")]

    def __enter__(self) -> "QuadratureWorkspace":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self._closed else f"nintervals={self._nintervals}"
        return f"QuadratureWorkspace({state})"

    def __del__(self):
        if not getattr(self, "_closed", True):
            warnings.warn(
                f"unclosed {self!r}", ResourceWarning, stacklevel=2
            )
            self._release()
