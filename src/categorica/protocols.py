"""Capability protocols implemented by context types.

A context type is a ``Context`` instance whose methods implement some
subset of the capabilities declared here. Capabilities are structural
(``typing.Protocol``), so a context "implements Monad" exactly when
``isinstance(ctx, Monad)`` holds; nothing has to be registered or
inherited explicitly, and new context types join by defining the methods.

Method signatures take the function first, mirroring the public
combinators in ``categorica.core``:

    Functor      fmap(f, fv)
    Applicative  pure(v), fapply(af, av)
    Monad        mbind(mv, f)
    MonadZero    mzero()
    MonadPlus    mplus(mv, mv2)
    Semigroup    mappend(sv, sv2)
    Monoid       mempty()
    Foldable     foldl(f, z, fv), foldr(f, z, fv)
    Traversable  traverse(f, tv)

Values that know their own context implement ``Contextual``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")
U = TypeVar("U")


class Context:
    """Base class of every context type.

    Instances are created once, at import time, and never mutated; they are
    compared by identity.
    """

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def capabilities(self) -> tuple[str, ...]:
        """Names of the capabilities this context implements."""
        return tuple(cap.__name__ for cap in CAPABILITIES if isinstance(self, cap))

    def __repr__(self) -> str:
        return f"<{self.name} context>"


@runtime_checkable
class Contextual(Protocol):
    """A value that reports the context it belongs to."""

    def get_context(self) -> Context: ...


@runtime_checkable
class Functor(Protocol):
    def fmap(self, f: Callable[[Any], Any], fv: Any) -> Any: ...


@runtime_checkable
class Applicative(Functor, Protocol):
    def pure(self, value: Any) -> Any: ...
    def fapply(self, af: Any, av: Any) -> Any: ...


@runtime_checkable
class Monad(Applicative, Protocol):
    def mbind(self, mv: Any, f: Callable[[Any], Any]) -> Any: ...


@runtime_checkable
class MonadZero(Monad, Protocol):
    def mzero(self) -> Any: ...


@runtime_checkable
class MonadPlus(MonadZero, Protocol):
    def mplus(self, mv: Any, mv2: Any) -> Any: ...


@runtime_checkable
class Semigroup(Protocol):
    def mappend(self, sv: Any, sv2: Any) -> Any: ...


@runtime_checkable
class Monoid(Semigroup, Protocol):
    def mempty(self) -> Any: ...


@runtime_checkable
class Foldable(Protocol):
    def foldl(self, f: Callable[[Any, Any], Any], z: Any, fv: Any) -> Any: ...
    def foldr(self, f: Callable[[Any, Any], Any], z: Any, fv: Any) -> Any: ...


@runtime_checkable
class Traversable(Protocol):
    def traverse(self, f: Callable[[Any], Any], tv: Any) -> Any: ...


CAPABILITIES: tuple[type, ...] = (
    Functor, Applicative, Monad, MonadZero, MonadPlus,
    Semigroup, Monoid, Foldable, Traversable,
)


class MonadContext(Context, ABC):
    """Context whose Applicative operations are derived from ``mbind``.

    Subclasses supply ``pure`` and ``mbind``; ``fmap`` and ``fapply`` follow.
    """

    __slots__ = ()

    @abstractmethod
    def pure(self, value: Any) -> Any: ...

    @abstractmethod
    def mbind(self, mv: Any, f: Callable[[Any], Any]) -> Any: ...

    def fmap(self, f: Callable[[Any], Any], fv: Any) -> Any:
        return self.mbind(fv, lambda v: self.pure(f(v)))

    def fapply(self, af: Any, av: Any) -> Any:
        return self.mbind(af, lambda f: self.fmap(f, av))
