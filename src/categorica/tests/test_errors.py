"""Tests for the structured error model."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from categorica.errors import (
    CategoryError,
    CategoryException,
    EmptySequenceError,
    ErrorCode,
    MalformedBindingsError,
    UnboundContextError,
    UnsupportedOperationError,
    describe,
)
from categorica.monads.maybe import maybe_context


def test_render_includes_code_and_details() -> None:
    error = CategoryError(code=ErrorCode.MALFORMED_BINDINGS, message="odd", details="binding index 3")
    assert error.render() == "[MALFORMED_BINDINGS] odd (binding index 3)"
    assert str(error) == error.render()


def test_message_must_not_be_empty() -> None:
    with pytest.raises(ValidationError):
        CategoryError(code=ErrorCode.UNBOUND_CONTEXT, message="   ")


def test_message_accepts_exceptions() -> None:
    error = CategoryError(code=ErrorCode.UNBOUND_CONTEXT, message=RuntimeError("no scope"))
    assert error.message == "no scope"


def test_error_record_is_frozen() -> None:
    error = CategoryError(code=ErrorCode.EMPTY_SEQUENCE, message="empty")
    with pytest.raises(ValidationError):
        error.message = "changed"  # type: ignore[misc]


def test_only_binding_errors_are_static() -> None:
    assert MalformedBindingsError.create("bad").error.is_static
    assert not EmptySequenceError.create().error.is_static
    assert not UnboundContextError.create("pure").error.is_static


def test_serializes_with_computed_fields() -> None:
    error = UnsupportedOperationError.missing("Monad", maybe_context).error
    dumped = error.model_dump()
    assert dumped["code"] == "UNSUPPORTED_OPERATION"
    assert dumped["capability"] == "Monad"
    assert dumped["context"] == "maybe"
    assert dumped["is_static"] is False


@pytest.mark.parametrize(("exc", "builtin"), [
    (UnboundContextError.create("pure"), LookupError),
    (UnsupportedOperationError.missing("Functor", 1), TypeError),
    (MalformedBindingsError.create("odd"), ValueError),
    (EmptySequenceError.create(), ValueError),
])
def test_exceptions_extend_builtin_hierarchy(exc: CategoryException, builtin: type[Exception]) -> None:
    assert isinstance(exc, CategoryException)
    assert isinstance(exc, builtin)
    assert str(exc) == exc.error.render()


def test_unbound_context_names_operation() -> None:
    exc = UnboundContextError.create("guard")
    assert exc.code == ErrorCode.UNBOUND_CONTEXT
    assert "guard()" in str(exc)


def test_describe() -> None:
    assert describe(maybe_context) == "maybe"
    assert describe(3) == "int"
    assert describe([]) == "list"
