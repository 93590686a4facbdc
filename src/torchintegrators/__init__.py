"""torchintegrators: numerical integration of Python integrands with QUADPACK, Cuba and SciPy."""

from . import (
    cuba,
    cubature,
    ffi,
    marshaling,
    quadpack,
)
from ._exceptions import (
    ArityMismatchError,
    BackendError,
    CapturedFailureWarning,
    DidNotConvergeError,
    IntegrationError,
    InvalidConfigurationError,
    InvalidInputArityError,
    InvalidOutputArityError,
    UnrecognizedStatusError,
)
from ._integrator import Integrator, check_tolerances
from ._result import CubatureResult, CubatureResults, IntegrationResult

__all__ = [
    # Subpackages
    "cuba",
    "cubature",
    "ffi",
    "marshaling",
    "quadpack",
    # Interface
    "Integrator",
    "check_tolerances",
    # Results
    "CubatureResult",
    "CubatureResults",
    "IntegrationResult",
    # Exceptions
    "ArityMismatchError",
    "BackendError",
    "CapturedFailureWarning",
    "DidNotConvergeError",
    "IntegrationError",
    "InvalidConfigurationError",
    "InvalidInputArityError",
    "InvalidOutputArityError",
    "UnrecognizedStatusError",
]

__version__ = "0.1.0"
