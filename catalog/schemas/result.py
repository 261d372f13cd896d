"""Result envelope returned by every handler."""

from typing import Any, Generic, Self, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class Result(BaseModel, Generic[T]):
    """
    Success-or-failure outcome of a use case.

    A success carries ``data`` and no error text; a failure carries an error
    message and/or a list of error strings and no data. Serialized with
    camelCase keys (``isSuccess``, ``errorMessage``).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    is_success: bool
    data: T | None = None
    error_message: str | None = None
    errors: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_state(self) -> Self:
        if self.is_success and (self.error_message is not None or self.errors):
            mssg = "A successful result cannot carry errors"
            raise ValueError(mssg)
        if not self.is_success:
            if self.data is not None:
                mssg = "A failed result cannot carry data"
                raise ValueError(mssg)
            if self.error_message is None and not self.errors:
                mssg = "A failed result needs an error message or errors"
                raise ValueError(mssg)
        return self

    @classmethod
    def success(cls, data: Any) -> Self:
        return cls(is_success=True, data=data)

    @classmethod
    def failure(cls, message: str | None = None, errors: list[str] | None = None) -> Self:
        return cls(is_success=False, error_message=message, errors=list(errors or ()))

    @property
    def is_not_found(self) -> bool:
        return not self.is_success and "not found" in (self.error_message or "")
