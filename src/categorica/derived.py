"""Combinators derived from bind, pure and mlet.

None of these touch a capability protocol directly, so every context that
implements Monad (and MonadZero for filter_m) gets them for free.

Type signatures (Haskell notation):
    join        m (m a) -> m a
    rbind       (a -> m b) -> m a -> m b                  (=<<)
    kleisli     (a -> m b) -> (b -> m c) -> a -> m c      (>=>)
    sequence_m  [m a] -> m [a]
    map_m       (a -> m b) -> [a] -> m [b]
    lift_m      (a -> b -> ... -> r) -> m a -> m b -> ... -> m r
"""

from __future__ import annotations

from functools import reduce
from typing import TYPE_CHECKING, Any, Callable, TypeVar

from categorica.context import MISSING, context_of, resolve, with_context
from categorica.core import bind, fapply, fmap, pure
from categorica.errors import EmptySequenceError
from categorica.mlet import WHEN, mlet

if TYPE_CHECKING:
    from collections.abc import Iterable

    from categorica.protocols import Context

T = TypeVar("T")


def _identity(x: T) -> T:
    return x


def join(mv: Any) -> Any:
    """Remove one level of nesting: ``join(Just(Just(1))) == Just(1)``."""
    return bind(mv, _identity)


def rbind(f: Callable[[Any], Any], mv: Any) -> Any:
    """Flipped bind (``=<<``)."""
    return bind(mv, f)


def kleisli(mf: Callable[[Any], Any], mg: Callable[[Any], Any], x: Any = MISSING) -> Any:
    """Left-to-right Kleisli composition (``>=>``): mg after mf.

    Without x, returns the composed function.
    """
    if x is MISSING:
        return lambda value: kleisli(mf, mg, value)
    return bind(mf(x), lambda a: bind(mg(a), pure))


def kleisli_left(mg: Callable[[Any], Any], mf: Callable[[Any], Any], x: Any = MISSING) -> Any:
    """Right-to-left Kleisli composition (``<=<``): kleisli with the functions swapped."""
    return kleisli(mf, mg, x)


# ─────────────────────────────────────────────────────────────────────────────
# Sequencing
# ─────────────────────────────────────────────────────────────────────────────


def sequence_m(mvs: Iterable[Any]) -> Any:
    """Turn a sequence of context values into one context value of a list.

    Evaluates left to right and short-circuits on the first absorbing
    element:

        >>> sequence_m([Just(2), Just(3)])
        Just([2, 3])
        >>> sequence_m([Nothing(), Just(3)])
        Nothing

    Eager contexts sequence at constant stack depth. Lazy ones (State,
    Continuation) build one nested closure per element that unwinds when
    the result is run, so a few hundred elements is the practical limit
    under the default recursion limit.

    Raises:
        EmptySequenceError: If mvs is empty; there is no context to wrap [] in
    """
    items = list(mvs)
    if not items:
        raise EmptySequenceError.create("sequence_m")

    def step(acc: Any, mv: Any) -> Any:
        return bind(acc, lambda xs: bind(mv, lambda x: pure([*xs, x])))

    with with_context(context_of(items[0])):
        seed = pure([])
    return reduce(step, items, seed)


def map_m(f: Callable[[Any], Any], coll: Iterable[Any]) -> Any:
    """``sequence_m(map(f, coll))``."""
    return sequence_m(map(f, coll))


def for_m(coll: Iterable[Any], f: Callable[[Any], Any]) -> Any:
    """map_m with the arguments flipped."""
    return map_m(f, coll)


def foldm(f: Callable[[Any, Any], Any], z: Any, xs: Iterable[Any], ctx: Context | None = None) -> Any:
    """Monadic left fold: ``f(z, x1) >>= (lambda z1: f(z1, x2)) >>= ...``.

    An empty xs yields ``pure(z)`` in ctx or the ambient context. Eager
    contexts (Maybe, Either, lists) fold at constant stack depth.
    """
    items = list(xs)
    if not items:
        return pure(z, resolve(ctx, operation="foldm"))

    def step(acc: Any, x: Any) -> Any:
        return bind(acc, lambda a: f(a, x))

    return reduce(step, items[1:], f(z, items[0]))


# ─────────────────────────────────────────────────────────────────────────────
# Lifting
# ─────────────────────────────────────────────────────────────────────────────


def lift_m(f: Callable[..., Any]) -> Callable[..., Any]:
    """Lift an n-ary function to work on context values.

        >>> lift_m(operator.add)(Just(1), Just(2))
        Just(3)
        >>> lift_m(operator.add)(Just(1), Nothing())
        Nothing
    """
    def lifted(*mvs: Any) -> Any:
        return bind(sequence_m(mvs), lambda xs: pure(f(*xs)))

    return lifted


def _curry(f: Callable[..., Any], arity: int) -> Callable[..., Any]:
    def curried(*args: Any) -> Any:
        if len(args) >= arity:
            return f(*args)
        return lambda x: curried(*args, x)

    return curried


def lift_a(f: Callable[..., Any]) -> Callable[..., Any]:
    """Lift an n-ary function using only Functor/Applicative operations.

    Unlike lift_m the arguments are combined with fapply, so contexts that
    are Applicative but not Monad can be lifted too.
    """
    def lifted(av: Any, *avs: Any) -> Any:
        return fapply(fmap(_curry(f, len(avs) + 1), av), *avs)

    return lifted


# ─────────────────────────────────────────────────────────────────────────────
# Conditionals
# ─────────────────────────────────────────────────────────────────────────────


def filter_m(p: Callable[[Any], bool], mv: Any) -> Any:
    """Keep mv's payload if p holds, else the context's absorbing element."""
    return mlet(["v", lambda _: mv,
                 WHEN, lambda s: p(s.v)],
                lambda s: pure(s.v))


def when_m(condition: Any, mv: Any) -> Any:
    """mv if condition holds, else ``pure(None)`` in mv's context."""
    return mv if condition else pure(None, context_of(mv))


def unless_m(condition: Any, mv: Any) -> Any:
    """mv unless condition holds, else ``pure(None)`` in mv's context."""
    return when_m(not condition, mv)
