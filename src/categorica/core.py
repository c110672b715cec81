"""Generic combinators dispatching on capability protocols.

Nothing here knows about concrete context types: each combinator resolves
a context (explicit ``ctx=``, operand, or ambient), checks that it
implements the capability the operation needs, and delegates.

    Haskell / cats    categorica
    --------------    ----------
    return, pure      pure, mreturn
    <$>               fmap
    <*>               fapply
    >>=               bind, chain
    mzero, mplus      mzero, mplus
    mempty, <>        mempty, mappend, mconcat

Example:
    >>> from categorica import Just, Nothing, bind, fmap, pure
    >>> bind(Just(1), lambda x: pure(x + 1))
    Just(2)
    >>> fmap(lambda x: x * 2, Nothing())
    Nothing
"""

from __future__ import annotations

from functools import partial, reduce
from typing import Any, Callable, TypeVar

from categorica.config import get_settings
from categorica.context import MISSING, context_of, resolve, with_context
from categorica.errors import UnsupportedOperationError
from categorica.observability import get_logger
from categorica.protocols import (
    Applicative,
    Context,
    Foldable,
    Functor,
    Monad,
    MonadPlus,
    MonadZero,
    Monoid,
    Semigroup,
    Traversable,
)

T = TypeVar("T")
U = TypeVar("U")

log = get_logger("categorica.dispatch")


def require(ctx: Context, capability: type[T], operation: str) -> T:
    """Return ctx typed as capability, or raise naming what is missing.

    Raises:
        UnsupportedOperationError: If ctx does not implement capability
    """
    if not isinstance(ctx, capability):
        raise UnsupportedOperationError.missing(capability.__name__, ctx)
    if get_settings().dispatch.trace:
        log.debug("dispatch", op=operation, capability=capability.__name__, context=ctx.name)
    return ctx


# ─────────────────────────────────────────────────────────────────────────────
# Applicative & Functor
# ─────────────────────────────────────────────────────────────────────────────


def pure(value: Any, ctx: Context | None = None) -> Any:
    """Lift a value into a context.

    Without ctx the ambient context is used, which is what makes
    ``bind(mv, lambda x: pure(x))`` work without naming mv's context.

    Raises:
        UnboundContextError: If ctx is omitted outside any context scope
    """
    return require(resolve(ctx, operation="pure"), Applicative, "pure").pure(value)


def mreturn(value: Any, ctx: Context | None = None) -> Any:
    """Monadic return; pure restricted to contexts that are monads."""
    return require(resolve(ctx, operation="mreturn"), Monad, "mreturn").pure(value)


def fmap(f: Callable[[T], U], fv: Any = MISSING) -> Any:
    """Apply f to the payload of fv, preserving its shape.

    Called with f only, returns a reusable mapper:

        >>> inc_all = fmap(lambda x: x + 1)
        >>> inc_all([1, 2]), inc_all(Just(1))
        ([2, 3], Just(2))
    """
    if fv is MISSING:
        return partial(fmap, f)
    return require(context_of(fv), Functor, "fmap").fmap(f, fv)


def fapply(af: Any, *avs: Any) -> Any:
    """Apply a wrapped function to wrapped arguments, left to right.

    ``fapply(af, a, b)`` is ``fapply(fapply(af, a), b)``; af must therefore
    hold a curried function when more than one argument is given.
    """
    ctx = require(context_of(af), Applicative, "fapply")
    return reduce(ctx.fapply, avs, af)


# ─────────────────────────────────────────────────────────────────────────────
# Monad
# ─────────────────────────────────────────────────────────────────────────────


def bind(mv: Any, f: Callable[[Any], Any]) -> Any:
    """Sequence f after mv.

    The ambient context is scoped to mv's context while the context runs
    its bind, so ``pure``/``mzero``/``guard`` inside f need no ctx=.
    Absent or failed payloads short-circuit without calling f.
    """
    ctx = require(context_of(mv), Monad, "bind")
    with with_context(ctx):
        return ctx.mbind(mv, f)


def chain(mv: Any, *fs: Callable[[Any], Any]) -> Any:
    """Left-associative bind over several functions (``>>=``)."""
    return reduce(bind, fs, mv)


def mzero(ctx: Context | None = None) -> Any:
    """The absorbing element of a context (e.g. Nothing, [])."""
    return require(resolve(ctx, operation="mzero"), MonadZero, "mzero").mzero()


def mplus(mv: Any, *mvs: Any) -> Any:
    """Associative choice/combination with mzero as identity."""
    ctx = require(context_of(mv), MonadPlus, "mplus")
    return reduce(ctx.mplus, mvs, mv)


def guard(condition: Any, ctx: Context | None = None) -> Any:
    """``pure(None)`` when condition holds, ``mzero()`` otherwise."""
    ctx = require(resolve(ctx, operation="guard"), MonadZero, "guard")
    return ctx.pure(None) if condition else ctx.mzero()


# ─────────────────────────────────────────────────────────────────────────────
# Monoid
# ─────────────────────────────────────────────────────────────────────────────


def mempty(ctx: Context | None = None) -> Any:
    """Identity element of a monoid."""
    return require(resolve(ctx, operation="mempty"), Monoid, "mempty").mempty()


def mappend(sv: Any, *svs: Any, ctx: Context | None = None) -> Any:
    """Combine values associatively, left to right.

    The context comes from the first value unless ctx is given; values
    without a context of their own (numbers, booleans) need one of the
    explicit monoids from ``categorica.builtin``.
    """
    ctx = require(resolve(ctx, sv, operation="mappend"), Semigroup, "mappend")
    return reduce(ctx.mappend, svs, sv)


def mconcat(svs: Any, ctx: Context | None = None) -> Any:
    """Fold values with mappend, seeded with mempty.

    With no ctx the context of the first value is used, falling back to the
    ambient one for an empty input.
    """
    items = list(svs)
    if ctx is None:
        ctx = context_of(items[0]) if items else resolve(operation="mconcat")
    monoid = require(ctx, Monoid, "mconcat")
    return reduce(monoid.mappend, items, monoid.mempty())


# ─────────────────────────────────────────────────────────────────────────────
# Foldable & Traversable
# ─────────────────────────────────────────────────────────────────────────────


def foldl(f: Callable[[U, T], U], z: U, fv: Any) -> U:
    """Left fold: ``f(f(f(z, x1), x2), x3)``."""
    return require(context_of(fv), Foldable, "foldl").foldl(f, z, fv)


def foldr(f: Callable[[T, U], U], z: U, fv: Any) -> U:
    """Right fold: ``f(x1, f(x2, f(x3, z)))``."""
    return require(context_of(fv), Foldable, "foldr").foldr(f, z, fv)


def traverse(f: Callable[[Any], Any], tv: Any, ctx: Context | None = None) -> Any:
    """Map an effectful f over tv and collect the results in f's context.

    ctx names the applicative f produces; it is only needed when tv is empty
    (or absent) and no context scope is active.
    """
    traversable = require(context_of(tv), Traversable, "traverse")
    if ctx is None:
        return traversable.traverse(f, tv)
    with with_context(ctx):
        return traversable.traverse(f, tv)
