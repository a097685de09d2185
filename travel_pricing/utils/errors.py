from dataclasses import dataclass, field
from typing import Optional


@dataclass(eq=False)
class RecordError(Exception):
    """Base error for a travel record that cannot be priced."""

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __post_init__(self):
        super().__init__(self.message)

    def __str__(self):
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message


class ParseError(RecordError):
    """Payload is not well-formed UTF-8 JSON."""


class MissingFieldError(RecordError):
    """A required field or array element is absent."""


class FieldTypeError(RecordError, TypeError):
    """A required field is present with the wrong type."""


class ComputationError(RecordError, ArithmeticError):
    """Distance or price came out non-finite."""
