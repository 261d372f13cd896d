"""Tests for the Result envelope."""

import pytest
from pydantic import ValidationError

from catalog.schemas import Result


class TestResult:
    """Tests for Result construction rules."""

    def test_success(self) -> None:
        result = Result.success([1, 2])
        assert result.is_success is True
        assert result.data == [1, 2]
        assert result.error_message is None
        assert result.errors == []

    def test_failure_with_message(self) -> None:
        result = Result.failure("Product with ID 1 not found.")
        assert result.is_success is False
        assert result.data is None
        assert result.is_not_found is True

    def test_failure_with_errors(self) -> None:
        result = Result.failure("Validation failed", ["Title is required."])
        assert result.errors == ["Title is required."]
        assert result.is_not_found is False

    def test_success_with_empty_collection(self) -> None:
        """An empty collection is a valid success, not a failure."""
        result = Result.success([])
        assert result.is_success is True
        assert result.data == []

    def test_failure_needs_an_error(self) -> None:
        with pytest.raises(ValidationError):
            Result.failure()

    def test_success_cannot_carry_errors(self) -> None:
        with pytest.raises(ValidationError):
            Result(is_success=True, data=1, error_message="oops")

    def test_failure_cannot_carry_data(self) -> None:
        with pytest.raises(ValidationError):
            Result(is_success=False, data=1, error_message="oops")

    def test_camel_case_serialization(self) -> None:
        dumped = Result.failure("boom").model_dump(by_alias=True)
        assert dumped == {"isSuccess": False, "data": None, "errorMessage": "boom", "errors": []}

    def test_frozen(self) -> None:
        result = Result.success(1)
        with pytest.raises(ValidationError):
            result.data = 2  # type: ignore[misc]
