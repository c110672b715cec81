"""Continuation monad and call-with-current-continuation.

A Continuation wraps a CPS function ``(A -> R) -> R``: it receives "the
rest of the computation" as a callback and produces the final result.
Escapes are ordinary closures, no stack manipulation is involved.

Example:
    >>> def safe_div(x, y):
    ...     return call_cc(lambda exit: bind(
    ...         exit("div by zero") if y == 0 else pure(None),
    ...         lambda _: pure(x / y)))
    >>> run_cont(safe_div(1, 0))
    'div by zero'
"""

from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

from categorica.context import with_context
from categorica.protocols import Context, MonadContext

A = TypeVar("A")
R = TypeVar("R")


class Continuation(Generic[A, R]):
    """A suspended computation; call it with the final continuation to run it."""

    __slots__ = ("_cps",)

    def __init__(self, cps: Callable[[Callable[[A], R]], R]) -> None:
        self._cps = cps

    def __call__(self, k: Callable[[A], R]) -> R:
        return self._cps(k)

    def get_context(self) -> Context:
        return continuation_context

    def __repr__(self) -> str:
        return f"Continuation({getattr(self._cps, '__name__', 'fn')})"


def cont(cps: Callable[[Callable[[A], R]], R]) -> Continuation[A, R]:
    """Build a Continuation from a CPS function."""
    return Continuation(cps)


class ContinuationContext(MonadContext):
    """Monad instance for continuation-passing computations."""

    __slots__ = ()

    def __init__(self) -> None:
        super().__init__("continuation")

    def pure(self, value: Any) -> Continuation[Any, Any]:
        return Continuation(lambda k: k(value))

    def fmap(self, f: Callable[[Any], Any], fv: Continuation[Any, Any]) -> Continuation[Any, Any]:
        return Continuation(lambda k: fv(lambda a: k(f(a))))

    def mbind(self, mv: Continuation[Any, Any], f: Callable[[Any], Continuation[Any, Any]]) -> Continuation[Any, Any]:
        return Continuation(lambda k: mv(lambda a: f(a)(k)))


continuation_context = ContinuationContext()


def run_cont(computation: Continuation[A, R]) -> A | R:
    """Run computation with the identity function as final continuation."""
    with with_context(continuation_context):
        return computation(lambda a: a)


def call_cc(f: Callable[[Callable[[Any], Continuation[Any, R]]], Continuation[A, R]]) -> Continuation[A, R]:
    """Call f with an escape function capturing the current continuation.

    ``k(a)`` abandons whatever remains inside f and resumes after the
    call_cc with value a. k may be called any number of times, including
    never.
    """
    def run(cc: Callable[[A], R]) -> R:
        def k(a: Any) -> Continuation[Any, R]:
            return Continuation(lambda _: cc(a))

        return f(k)(cc)

    return Continuation(run)
