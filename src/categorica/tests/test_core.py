"""Tests for the generic combinators.

Validates:
- Functor laws
- Monad laws
- Short-circuiting of absorbing elements
- Monoid, Foldable and Traversable dispatch
"""

from __future__ import annotations

from typing import Any, Callable

import pytest

from categorica import (
    Just,
    Left,
    Nothing,
    Pair,
    Right,
    UnboundContextError,
    UnsupportedOperationError,
    bind,
    chain,
    fapply,
    fmap,
    foldl,
    foldr,
    guard,
    mappend,
    mconcat,
    mempty,
    mplus,
    mreturn,
    mzero,
    pure,
    sum_monoid,
    product_monoid,
    any_monoid,
    all_monoid,
    traverse,
    with_context,
)
from categorica.builtin import list_context
from categorica.monads.either import either_context
from categorica.monads.maybe import maybe_context
from categorica.monads.state import state_context

SAMPLES: list[Any] = [Just(5), Nothing(), Right(5), Left("boom"), [1, 2, 3], [], (4, 5)]
MONADS: list[Any] = [Just(5), Nothing(), Right(5), Left("boom"), [1, 2, 3], []]


def _half(x: int) -> Any:
    return pure(x // 2)


# ═════════════════════════════════════════════════════════════════════════════
# Property Tests - Functor Laws
# ═════════════════════════════════════════════════════════════════════════════


@pytest.mark.parametrize("fv", SAMPLES)
def test_functor_identity(fv: Any) -> None:
    """Functor law: fmap id = id"""
    assert fmap(lambda x: x, fv) == fv


@pytest.mark.parametrize("fv", SAMPLES)
def test_functor_composition(fv: Any) -> None:
    """Functor law: fmap (g . f) = fmap g . fmap f"""
    f: Callable[[int], int] = lambda x: x + 1
    g: Callable[[int], int] = lambda x: x * 2
    assert fmap(g, fmap(f, fv)) == fmap(lambda x: g(f(x)), fv)


def test_fmap_curried_form() -> None:
    """fmap(f) returns a reusable mapper."""
    inc = fmap(lambda x: x + 1)
    assert inc(Just(1)) == Just(2)
    assert inc([1, 2]) == [2, 3]
    assert inc(Nothing()) == Nothing()


def test_fmap_preserves_absence() -> None:
    """Mapping over an absent payload never calls f."""
    def boom(_: int) -> int:
        raise AssertionError("f must not be called")

    assert fmap(boom, Nothing()) == Nothing()
    assert fmap(boom, Left("e")) == Left("e")


# ═════════════════════════════════════════════════════════════════════════════
# Property Tests - Monad Laws
# ═════════════════════════════════════════════════════════════════════════════


@pytest.mark.parametrize("ctx", [maybe_context, either_context, list_context])
def test_monad_left_identity(ctx: Any) -> None:
    """Monad law: return a >>= f = f a"""
    f = lambda x: pure(x + 1, ctx)
    assert bind(pure(3, ctx), f) == f(3)


@pytest.mark.parametrize("mv", MONADS)
def test_monad_right_identity(mv: Any) -> None:
    """Monad law: m >>= return = m (pure resolves from the ambient context)"""
    assert bind(mv, pure) == mv


@pytest.mark.parametrize("mv", MONADS)
def test_monad_associativity(mv: Any) -> None:
    """Monad law: (m >>= f) >>= g = m >>= (λx -> f x >>= g)"""
    f = lambda x: pure(x + 1)
    g = lambda x: pure(x * 10)
    assert bind(bind(mv, f), g) == bind(mv, lambda x: bind(f(x), g))


@pytest.mark.parametrize("ctx", [maybe_context, either_context, list_context])
def test_bind_on_mzero_short_circuits(ctx: Any) -> None:
    """bind(mzero, f) == mzero and f is never invoked."""
    calls: list[Any] = []
    result = bind(mzero(ctx), lambda x: calls.append(x) or pure(x))
    assert result == mzero(ctx)
    assert calls == []


def test_bind_scopes_ambient_context() -> None:
    """pure() inside the bound function resolves to the bound value's context."""
    assert bind(Just(8), _half) == Just(4)
    assert bind(Right(8), _half) == Right(4)
    assert bind([8, 6], _half) == [4, 3]


def test_bind_restores_ambient_context_after_error() -> None:
    """The ambient scope is popped even when f raises."""
    def fail(_: int) -> Any:
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        bind(Just(1), fail)
    with pytest.raises(UnboundContextError):
        pure(1)


def test_chain_is_left_associative_bind() -> None:
    """chain(mv, f, g) == bind(bind(mv, f), g)"""
    f = lambda x: Just(x + 1)
    g = lambda x: Just(x * 2)
    assert chain(Just(1), f, g) == bind(bind(Just(1), f), g) == Just(4)
    assert chain(Just(1), lambda _: Nothing(), g) == Nothing()


def test_mreturn_requires_monad() -> None:
    """mreturn is pure restricted to monads."""
    assert mreturn(1, maybe_context) == Just(1)
    with pytest.raises(UnsupportedOperationError):
        mreturn(1, sum_monoid)


# ═════════════════════════════════════════════════════════════════════════════
# Applicative
# ═════════════════════════════════════════════════════════════════════════════


def test_fapply_maybe() -> None:
    """Both operands must be present."""
    assert fapply(Just(lambda x: x + 1), Just(1)) == Just(2)
    assert fapply(Nothing(), Just(1)) == Nothing()
    assert fapply(Just(lambda x: x + 1), Nothing()) == Nothing()


def test_fapply_either_left_operand_first() -> None:
    """Errors propagate from the left operand first."""
    assert fapply(Left("first"), Left("second")) == Left("first")
    assert fapply(Right(lambda x: x), Left("second")) == Left("second")


def test_fapply_variadic_with_curried_function() -> None:
    """fapply(af, a, b) applies a curried function left to right."""
    add = Just(lambda a: lambda b: a + b)
    assert fapply(add, Just(1), Just(2)) == Just(3)
    assert fapply([lambda a: lambda b: (a, b)], [1, 2], ["x"]) == [(1, "x"), (2, "x")]


def test_pure_needs_a_context() -> None:
    """pure without ctx outside any scope fails with an unbound-context error."""
    with pytest.raises(UnboundContextError):
        pure(1)
    assert pure(1, maybe_context) == Just(1)
    with with_context(list_context):
        assert pure(1) == [1]


# ═════════════════════════════════════════════════════════════════════════════
# MonadZero / MonadPlus / guard
# ═════════════════════════════════════════════════════════════════════════════


def test_mzero_and_mplus() -> None:
    """First success wins for Maybe, concatenation for lists."""
    assert mzero(maybe_context) == Nothing()
    assert mplus(Nothing(), Just(1), Just(2)) == Just(1)
    assert mplus(Nothing(), Nothing()) == Nothing()
    assert mplus([1], [], [2, 3]) == [1, 2, 3]


def test_mzero_is_identity_for_mplus() -> None:
    assert mplus(mzero(maybe_context), Just(1)) == Just(1)
    assert mplus(Just(1), mzero(maybe_context)) == Just(1)


def test_mzero_unsupported_for_state() -> None:
    """State has no absorbing element."""
    with pytest.raises(UnsupportedOperationError) as exc_info:
        mzero(state_context)
    assert exc_info.value.error.capability == "MonadZero"
    assert exc_info.value.error.context == "state"


def test_either_mzero_and_mplus() -> None:
    """Left(None) is the absorbing element, the first Right wins."""
    assert mzero(either_context) == Left(None)
    assert mplus(Left("a"), Right(1), Right(2)) == Right(1)
    assert mplus(Left("a"), Left("b")) == Left("b")
    assert mplus(mzero(either_context), Right(1)) == Right(1)
    assert mplus(Right(1), mzero(either_context)) == Right(1)
    assert guard(False, either_context) == Left(None)
    assert guard(True, either_context) == Right(None)


def test_guard() -> None:
    """guard(True) is pure(None), guard(False) is mzero()."""
    assert guard(True, maybe_context) == Just(None)
    assert guard(False, maybe_context) == Nothing()
    with with_context(list_context):
        assert guard(True) == [None]
        assert guard(False) == []


# ═════════════════════════════════════════════════════════════════════════════
# Monoid
# ═════════════════════════════════════════════════════════════════════════════


def test_mappend_dispatches_on_first_value() -> None:
    assert mappend([1], [2], [3]) == [1, 2, 3]
    assert mappend("ab", "cd") == "abcd"
    assert mappend({"a": 1}, {"a": 2, "b": 3}) == {"a": 2, "b": 3}
    assert mappend(Just([1]), Nothing(), Just([2])) == Just([1, 2])


def test_mappend_explicit_monoids() -> None:
    """Numbers and booleans need an explicit monoid."""
    assert mappend(1, 2, 3, ctx=sum_monoid) == 6
    assert mappend(2, 3, 4, ctx=product_monoid) == 24
    assert mappend(False, True, ctx=any_monoid) is True
    assert mappend(True, False, ctx=all_monoid) is False
    with pytest.raises(UnsupportedOperationError):
        mappend(1, 2)


def test_mempty_and_mconcat() -> None:
    assert mempty(list_context) == []
    assert mempty(maybe_context) == Nothing()
    assert mempty(sum_monoid) == 0
    assert mconcat([[1], [2, 3]]) == [1, 2, 3]
    assert mconcat([], ctx=sum_monoid) == 0
    assert mconcat([Just("a"), Nothing(), Just("b")]) == Just("ab")


def test_mempty_unsupported_for_pair() -> None:
    """Pair is a semigroup but has no identity."""
    assert mappend(Pair([1], "a"), Pair([2], "b")) == Pair([1, 2], "ab")
    with pytest.raises(UnsupportedOperationError, match="Monoid"):
        mconcat([Pair([1], "a")])


# ═════════════════════════════════════════════════════════════════════════════
# Foldable & Traversable
# ═════════════════════════════════════════════════════════════════════════════


def test_foldl_and_foldr_order() -> None:
    assert foldl(lambda acc, x: acc - x, 10, [1, 2, 3]) == 4
    assert foldr(lambda x, acc: x - acc, 0, [1, 2, 3]) == 2
    assert foldl(lambda acc, x: acc + x, 1, Just(2)) == 3
    assert foldl(lambda acc, x: acc + x, 1, Nothing()) == 1
    assert foldr(lambda c, acc: acc + c, "", "abc") == "cba"


def test_traverse_list_into_maybe() -> None:
    """traverse collects results, short-circuiting on absence."""
    def positive(x: int) -> Any:
        return Just(x) if x > 0 else Nothing()

    assert traverse(positive, [1, 2, 3]) == Just([1, 2, 3])
    assert traverse(positive, [1, -2, 3]) == Nothing()
    assert traverse(positive, (1, 2)) == Just((1, 2))


def test_traverse_empty_uses_explicit_context() -> None:
    assert traverse(Just, [], ctx=maybe_context) == Just([])
    with pytest.raises(UnboundContextError):
        traverse(Just, [])


def test_traverse_maybe_and_pair() -> None:
    assert traverse(lambda x: [x, x + 1], Just(1)) == [Just(1), Just(2)]
    assert traverse(lambda x: [x], Nothing(), ctx=list_context) == [Nothing()]
    assert traverse(lambda x: Right(x * 2), Pair("k", 2)) == Right(Pair("k", 4))


def test_unsupported_value_has_no_context() -> None:
    """Values without a context fail naming the Contextual capability."""
    with pytest.raises(UnsupportedOperationError) as exc_info:
        fmap(lambda x: x, 42)
    assert exc_info.value.error.capability == "Contextual"
    assert exc_info.value.error.context == "int"
