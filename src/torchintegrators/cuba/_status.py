from torchintegrators._exceptions import (
    DidNotConvergeError,
    InvalidInputArityError,
    InvalidOutputArityError,
    UnrecognizedStatusError,
)
from torchintegrators._result import CubatureResults

BACKEND = "Cuba"

SUCCESS = 0
DID_NOT_CONVERGE = 1
BAD_DIMENSION = -1
BAD_COMPONENTS = -2


def check_cuba_status(
    fail: int,
    algorithm: str,
    ndim: int,
    ncomp: int,
    results: CubatureResults,
) -> CubatureResults:
    """
    Turn the ``fail`` output of a Cuba routine into a result or an exception.

    Raises
    ------
    InvalidInputArityError
        If Cuba rejected the number of dimensions.
    InvalidOutputArityError
        If Cuba rejected the number of components.
    DidNotConvergeError
        If the accuracy goal was not met within ``maxeval``. ``results``
        holds the partial estimates.
    UnrecognizedStatusError
        For any other status.
    """
    if fail == SUCCESS:
        return results
    if fail == BAD_DIMENSION:
        raise InvalidInputArityError(ndim, algorithm)
    if fail == BAD_COMPONENTS:
        raise InvalidOutputArityError(ncomp, algorithm)
    if fail == DID_NOT_CONVERGE:
        raise DidNotConvergeError(results)
    raise UnrecognizedStatusError(fail, BACKEND)
