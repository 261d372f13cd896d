"""Validation primitives shared by the request validators."""

from dataclasses import dataclass, field
from typing import Protocol
from uuid import UUID

NIL_UUID = UUID(int=0)


@dataclass(frozen=True, slots=True)
class ValidationFailure:
    field: str
    message: str


@dataclass(slots=True)
class ValidationResult:
    errors: list[ValidationFailure] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def messages(self) -> list[str]:
        return [e.message for e in self.errors]

    def add(self, field_name: str, message: str) -> None:
        self.errors.append(ValidationFailure(field_name, message))

    def check(self, condition: bool, field_name: str, message: str) -> None:
        """Record ``message`` against ``field_name`` unless ``condition`` holds."""
        if not condition:
            self.add(field_name, message)


class Validator[R](Protocol):
    def validate(self, request: R) -> ValidationResult: ...


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def is_empty_id(value: UUID | None) -> bool:
    return value is None or value == NIL_UUID
