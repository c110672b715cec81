"""Error handling for categorica.

- ErrorCode: Classification of every failure the library raises
- CategoryError: Structured, serializable error record
- CategoryException and subclasses: the exceptions actually raised
"""

from .errors import (
    CategoryError,
    CategoryException,
    EmptySequenceError,
    ErrorCode,
    MalformedBindingsError,
    UnboundContextError,
    UnsupportedOperationError,
    describe,
)

__all__ = [
    "ErrorCode", "CategoryError", "CategoryException", "describe",
    "UnboundContextError", "UnsupportedOperationError",
    "MalformedBindingsError", "EmptySequenceError",
]
