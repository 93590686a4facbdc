"""Exceptions and warnings raised by integrators."""

from typing import Any, Optional


class IntegrationError(Exception):
    """Base exception for integration errors."""

    pass


class ArityMismatchError(IntegrationError):
    """Raised when a numeric buffer and a value disagree on arity."""

    def __init__(self, expected: int, actual: int, message: str = ""):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Arity mismatch: expected {expected}, got {actual}. {message}".rstrip()
        )


class InvalidConfigurationError(IntegrationError, ValueError):
    """Raised when an integrator is configured with invalid parameters.

    Always raised before any foreign routine is called.
    """

    pass


class InvalidInputArityError(IntegrationError):
    """Raised when an algorithm does not support the integrand's input arity."""

    def __init__(self, arity: int, algorithm: str):
        self.arity = arity
        self.algorithm = algorithm
        super().__init__(
            f"invalid number of dimensions for algorithm {algorithm}: {arity}"
        )


class InvalidOutputArityError(IntegrationError):
    """Raised when an algorithm does not support the integrand's output arity."""

    def __init__(self, arity: int, algorithm: str):
        self.arity = arity
        self.algorithm = algorithm
        super().__init__(
            f"invalid number of outputs for algorithm {algorithm}: {arity}"
        )


class BackendError(IntegrationError):
    """Raised when a numerical backend reports a failure status.

    Attributes
    ----------
    code : int
        Raw status code returned by the backend.
    description : str, optional
        Human-readable description of ``code``, if the backend has one.
    backend : str
        Name of the backend that reported the failure.
    """

    def __init__(
        self, code: int, description: Optional[str] = None, backend: str = ""
    ):
        self.code = code
        self.description = description
        self.backend = backend
        message = f"({backend}) error code {code}" if backend else f"error code {code}"
        if description:
            message = f"{message}, description: {description}"
        super().__init__(message)


class DidNotConvergeError(IntegrationError):
    """Raised when the requested tolerance was not reached.

    The best-effort estimate is kept in ``results``; callers may decide
    whether it is close enough.

    Attributes
    ----------
    results : IntegrationResult or CubatureResults
        Partial results computed by the backend.
    reason : BackendError, optional
        Backend failure that stopped the computation, if any.
    """

    def __init__(
        self,
        results: Any,
        reason: Optional[BackendError] = None,
        message: str = "integral did not converge",
    ):
        self.results = results
        self.reason = reason
        if reason is not None:
            message = f"{message}: {reason}"
        super().__init__(message)


class UnrecognizedStatusError(RuntimeError):
    """Raised when a backend returns a status outside its documented range.

    This signals a broken contract between an integrator and its backend and
    is deliberately not an :class:`IntegrationError`.
    """

    def __init__(self, code: Any, backend: str):
        self.code = code
        self.backend = backend
        super().__init__(f"({backend}) unrecognized backend status: {code!r}")


class CapturedFailureWarning(RuntimeWarning):
    """Warning for a captured integrand failure that was never inspected."""

    pass
