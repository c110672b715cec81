"""Context resolution: type registry and ambient (dynamically scoped) context.

An operation finds the context it should dispatch to in one of three ways,
in priority order:

1. an explicit ``ctx=`` argument;
2. the context of an operand, either reported by the value itself
   (``Contextual``) or looked up in the registry by the operand's type;
3. the ambient context established by ``with_context()``.

The ambient context lives in a ``ContextVar``, so it is local to the
current thread and asyncio task. Scopes nest strictly and are restored on
every exit path.

Example:
    >>> from categorica import Just, pure, with_context
    >>> from categorica.monads.maybe import maybe_context
    >>> with with_context(maybe_context):
    ...     pure(1)
    Just(1)
"""

from __future__ import annotations

from contextvars import ContextVar, Token
from typing import TYPE_CHECKING, Any, Final

from categorica.errors import UnboundContextError, UnsupportedOperationError
from categorica.observability import get_logger
from categorica.protocols import Context, Contextual

if TYPE_CHECKING:
    from collections.abc import Iterator
    from types import TracebackType

log = get_logger("categorica.context")


class _Missing:
    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Final = _Missing()


# ─────────────────────────────────────────────────────────────────────────────
# Registry
# ─────────────────────────────────────────────────────────────────────────────


class ContextRegistry:
    """Maps Python types to the context that handles their values.

    Only values that cannot report their own context (builtins, third-party
    types) need an entry. Lookup walks the type's MRO, so subclasses of a
    registered type share its context.

    Example:
        >>> registry = ContextRegistry()
        >>> registry.register(list, list_context)
        >>> registry.lookup(list) is list_context
        True
    """

    __slots__ = ("_contexts",)

    def __init__(self) -> None:
        self._contexts: dict[type, Context] = {}

    def register(self, type_: type, ctx: Context) -> None:
        """Register the context for a type.

        Raises:
            TypeError: If ctx is not a Context
            ValueError: If the type already has a context and re-registration is disabled
        """
        if not isinstance(ctx, Context):
            raise TypeError(f"Expected a Context, got {type(ctx).__name__}")
        if type_ in self._contexts:
            from categorica.config import get_settings
            if not get_settings().dispatch.allow_reregister:
                raise ValueError(f"Type '{type_.__name__}' already registered to {self._contexts[type_]!r}")
            log.warning("context replaced", type=type_.__name__, previous=self._contexts[type_].name)
        self._contexts[type_] = ctx
        log.debug("context registered", type=type_.__name__, context=ctx.name)

    def unregister(self, type_: type) -> bool:
        """Remove a type's entry. Returns True if found."""
        return self._contexts.pop(type_, None) is not None

    def lookup(self, type_: type) -> Context | None:
        """Context for a type or its nearest registered base."""
        for klass in type_.__mro__:
            if (ctx := self._contexts.get(klass)) is not None:
                return ctx
        return None

    def clear(self) -> None:
        self._contexts.clear()

    def __contains__(self, type_: object) -> bool:
        return type_ in self._contexts

    def __iter__(self) -> Iterator[type]:
        return iter(self._contexts)

    def __len__(self) -> int:
        return len(self._contexts)


_registry: ContextRegistry | None = None


def get_registry() -> ContextRegistry:
    """Get the process registry, creating it with the builtin adapters on first use."""
    global _registry
    if _registry is None:
        from categorica.builtin import register_builtins
        registry = ContextRegistry()
        register_builtins(registry)
        _registry = registry
    return _registry


def set_registry(registry: ContextRegistry) -> None:
    """Replace the process registry."""
    global _registry
    _registry = registry


def reset_registry() -> None:
    """Reset the process registry (useful for testing)."""
    global _registry
    _registry = None


def register_context(type_: type, ctx: Context) -> None:
    """Register a context for a type in the process registry."""
    get_registry().register(type_, ctx)


def context_of(value: Any) -> Context:
    """Resolve the context a value belongs to.

    Raises:
        UnsupportedOperationError: If the value has no context
    """
    if isinstance(value, Contextual):
        return value.get_context()
    if (ctx := get_registry().lookup(type(value))) is not None:
        return ctx
    raise UnsupportedOperationError.missing("Contextual", value)


# ─────────────────────────────────────────────────────────────────────────────
# Ambient Context
# ─────────────────────────────────────────────────────────────────────────────


_ambient: ContextVar[Context | None] = ContextVar("categorica_ambient_context", default=None)


class ContextScope:
    """Context manager making a context ambient for the enclosed block."""

    __slots__ = ("_ctx", "_token")

    def __init__(self, ctx: Context) -> None:
        if not isinstance(ctx, Context):
            raise TypeError(f"Expected a Context, got {type(ctx).__name__}")
        self._ctx = ctx
        self._token: Token[Context | None] | None = None

    def __enter__(self) -> Context:
        self._token = _ambient.set(self._ctx)
        return self._ctx

    def __exit__(self, exc_type: type[BaseException] | None, exc_val: BaseException | None,
                 exc_tb: TracebackType | None) -> None:
        if self._token is not None:
            _ambient.reset(self._token)
            self._token = None


def with_context(ctx: Context) -> ContextScope:
    """Scope the ambient context to ctx.

    Example:
        >>> with with_context(list_context):
        ...     mzero()
        []
    """
    return ContextScope(ctx)


def current_context(operation: str = "current_context") -> Context:
    """The ambient context.

    Raises:
        UnboundContextError: If no scope is active
    """
    if (ctx := _ambient.get()) is None:
        raise UnboundContextError.create(operation)
    return ctx


def ambient_context() -> Context | None:
    """The ambient context, or None outside any scope."""
    return _ambient.get()


def resolve(ctx: Context | None = None, value: Any = MISSING, *, operation: str = "resolve") -> Context:
    """Explicit context, else the value's context, else the ambient one."""
    if ctx is not None:
        return ctx
    if value is not MISSING:
        return context_of(value)
    return current_context(operation)
