"""Standardized errors for context dispatch and sequencing.

Provides error codes and structured error records for every failure the
library surfaces. Uses Pydantic for validation and serialization of the
error record; the exceptions themselves only carry it.

Short-circuit values (``Nothing()``, ``Left(...)``, ``[]``) are ordinary
data and never appear here.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Any, Self

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


class ErrorCode(StrEnum):
    """Error codes for failures raised by the library.

    Used for programmatic handling; every exception carries exactly one.
    """
    UNBOUND_CONTEXT = "UNBOUND_CONTEXT"
    UNSUPPORTED_OPERATION = "UNSUPPORTED_OPERATION"
    MALFORMED_BINDINGS = "MALFORMED_BINDINGS"
    EMPTY_SEQUENCE = "EMPTY_SEQUENCE"


# Raised while compiling, before any step is evaluated
_STATIC_CODES: frozenset[ErrorCode] = frozenset({ErrorCode.MALFORMED_BINDINGS})


def describe(value: Any) -> str:
    """Name used for a value or context in diagnostics.

    Contexts report their own name, everything else its type name.
    """
    from categorica.protocols import Context
    return value.name if isinstance(value, Context) else type(value).__name__


class CategoryError(BaseModel):
    """Structured record of a library failure.

    Attributes:
        code: Machine-readable error classification
        message: Human-readable error message
        capability: Capability that was missing or required (if any)
        context: Context or value type involved (if any)
        details: Optional extra information (e.g. binding position)
    """

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        validate_default=True,
        json_schema_extra={
            "title": "Category Error",
            "description": "Structured error from context dispatch or sequencing",
            "examples": [{
                "code": "UNSUPPORTED_OPERATION",
                "message": "Monad is not implemented for str",
                "capability": "Monad",
                "context": "str",
            }],
        },
    )

    code: ErrorCode
    message: Annotated[str, Field(
        min_length=1,
        description="Human-readable error message",
    )]
    capability: str | None = Field(default=None, description="Capability involved")
    context: str | None = Field(default=None, description="Context or value type involved")
    details: str | None = Field(default=None, description="Optional detailed error info")

    @field_validator("message", mode="before")
    @classmethod
    def _ensure_message(cls, v: str | Exception) -> str:
        """Accept Exception objects and extract message."""
        return str(v) if isinstance(v, Exception) else v

    @computed_field
    @property
    def is_static(self) -> bool:
        """Whether the error is detected before any computation runs."""
        return self.code in _STATIC_CODES

    def render(self) -> str:
        """Single-line diagnostic form."""
        parts = [f"[{self.code}] {self.message}"]
        if self.details:
            parts.append(f" ({self.details})")
        return "".join(parts)

    __str__ = render


class CategoryException(Exception):
    """Exception wrapping a CategoryError for raising."""

    def __init__(self, error: CategoryError) -> None:
        self.error = error
        super().__init__(error.render())

    @property
    def code(self) -> ErrorCode:
        return self.error.code


class UnboundContextError(CategoryException, LookupError):
    """Ambient context read while no context is in effect."""

    @classmethod
    def create(cls, operation: str) -> Self:
        return cls(CategoryError(
            code=ErrorCode.UNBOUND_CONTEXT,
            message=f"No context is bound for {operation}(); pass ctx= or call inside with_context()",
        ))


class UnsupportedOperationError(CategoryException, TypeError):
    """Capability invoked on a context that does not implement it."""

    @classmethod
    def missing(cls, capability: str, subject: Any) -> Self:
        """Create from the missing capability and the offending context or value."""
        name = describe(subject)
        return cls(CategoryError(
            code=ErrorCode.UNSUPPORTED_OPERATION,
            message=f"{capability} is not implemented for {name}",
            capability=capability,
            context=name,
        ))


class MalformedBindingsError(CategoryException, ValueError):
    """Binding list handed to mlet cannot be compiled."""

    @classmethod
    def create(cls, message: str, *, position: int | None = None) -> Self:
        return cls(CategoryError(
            code=ErrorCode.MALFORMED_BINDINGS,
            message=message,
            details=f"binding index {position}" if position is not None else None,
        ))


class EmptySequenceError(CategoryException, ValueError):
    """sequence_m called on an empty input."""

    @classmethod
    def create(cls, operation: str = "sequence_m") -> Self:
        return cls(CategoryError(
            code=ErrorCode.EMPTY_SEQUENCE,
            message=f"{operation}() requires a non-empty sequence of context values",
        ))
