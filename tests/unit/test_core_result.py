"""Unit tests for Result types (railway-oriented programming)."""

from dataclasses import FrozenInstanceError

import pytest

from src.core.enums import ErrorCode
from src.core.errors import ValidationError
from src.core.result import Failure, Success


@pytest.mark.unit
class TestResult:
    """Test Success and Failure."""

    def test_success_holds_value(self):
        result = Success(value=42)

        assert result.value == 42

    def test_failure_holds_error(self):
        error = ValidationError(code=ErrorCode.VALIDATION_FAILED, message="bad")

        result = Failure(error=error)

        assert result.error is error

    def test_results_are_immutable(self):
        result = Success(value=1)

        with pytest.raises(FrozenInstanceError):
            result.value = 2  # type: ignore[misc]

    def test_results_match_by_pattern(self):
        """Test callers can branch with structural pattern matching."""
        error = ValidationError(code=ErrorCode.VALIDATION_FAILED, message="bad")

        match Failure(error=error):
            case Success(value=_):
                matched = "success"
            case Failure(error=ValidationError(code=code)):
                matched = code.value

        assert matched == "invalid_input"
