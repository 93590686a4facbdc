import warnings

import pytest

from torchintegrators import (
    ArityMismatchError,
    BackendError,
    CapturedFailureWarning,
    DidNotConvergeError,
    IntegrationError,
    IntegrationResult,
    InvalidConfigurationError,
    InvalidInputArityError,
    InvalidOutputArityError,
    UnrecognizedStatusError,
)


class TestExceptions:
    def test_hierarchy(self):
        for cls in (
            ArityMismatchError,
            BackendError,
            DidNotConvergeError,
            InvalidConfigurationError,
            InvalidInputArityError,
            InvalidOutputArityError,
        ):
            assert issubclass(cls, IntegrationError)

    def test_invalid_configuration_is_value_error(self):
        assert issubclass(InvalidConfigurationError, ValueError)

    def test_unrecognized_status_is_not_an_integration_error(self):
        assert issubclass(UnrecognizedStatusError, RuntimeError)
        assert not issubclass(UnrecognizedStatusError, IntegrationError)

    def test_captured_failure_warning_is_runtime_warning(self):
        assert issubclass(CapturedFailureWarning, RuntimeWarning)

    def test_arity_mismatch_message(self):
        error = ArityMismatchError(2, 3)

        assert str(error) == "Arity mismatch: expected 2, got 3."
        assert error.expected == 2
        assert error.actual == 3

    def test_backend_error_message(self):
        error = BackendError(14, "failed to reach the specified tolerance", "GSL")

        assert str(error) == (
            "(GSL) error code 14, description: failed to reach the specified "
            "tolerance"
        )

    def test_backend_error_without_description(self):
        assert str(BackendError(3)) == "error code 3"

    def test_did_not_converge_carries_results(self):
        partial = IntegrationResult(1.0, 0.5)
        error = DidNotConvergeError(partial)

        assert error.results is partial
        assert error.reason is None
        assert str(error) == "integral did not converge"

    def test_did_not_converge_with_reason(self):
        reason = BackendError(1, "too many subdivisions", "QUADPACK")
        error = DidNotConvergeError(IntegrationResult(0.0, 1.0), reason=reason)

        assert str(error).startswith("integral did not converge: (QUADPACK)")

    def test_input_arity_message(self):
        error = InvalidInputArityError(1, "cuhre")

        assert str(error) == "invalid number of dimensions for algorithm cuhre: 1"

    def test_warning_can_be_raised(self):
        with pytest.warns(CapturedFailureWarning, match="test"):
            warnings.warn("test", CapturedFailureWarning)
