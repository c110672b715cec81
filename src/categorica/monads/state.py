"""State monad: computations threading a state value.

A State computation wraps a function ``s -> Pair(result, new_state)``.
Nothing is mutated; binding two computations feeds the state produced by
the first into the second:

    bind(m, f) == state(lambda s: (a, s1) = m(s); f(a)(s1))

Example:
    >>> counter = mlet(["n", lambda _: get_state(),
    ...                 "_", lambda s: put_state(s.n + 1)],
    ...                lambda s: pure(s.n * 10))
    >>> run_state(counter, 4)
    Pair(first=40, second=5)
"""

from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

from categorica.context import with_context
from categorica.pair import Pair
from categorica.protocols import Context, MonadContext

S = TypeVar("S")
A = TypeVar("A")


class State(Generic[S, A]):
    """A stateful computation; call it with a state to run one step."""

    __slots__ = ("_run",)

    def __init__(self, run: Callable[[S], Pair[A, S]]) -> None:
        self._run = run

    def __call__(self, s: S) -> Pair[A, S]:
        return self._run(s)

    def get_context(self) -> Context:
        return state_context

    def __repr__(self) -> str:
        return f"State({getattr(self._run, '__name__', 'fn')})"


def state(fn: Callable[[S], Pair[A, S] | tuple[A, S]]) -> State[S, A]:
    """Build a State computation from a transition function.

    Plain 2-tuples returned by fn are converted to Pair.
    """
    def run(s: S) -> Pair[A, S]:
        result = fn(s)
        return result if isinstance(result, Pair) else Pair(*result)

    return State(run)


class StateContext(MonadContext):
    """Monad instance threading state through composed computations."""

    __slots__ = ()

    def __init__(self) -> None:
        super().__init__("state")

    def pure(self, value: Any) -> State[Any, Any]:
        return State(lambda s: Pair(value, s))

    def fmap(self, f: Callable[[Any], Any], fv: State[Any, Any]) -> State[Any, Any]:
        def run(s: Any) -> Pair[Any, Any]:
            a, s1 = fv(s)
            return Pair(f(a), s1)

        return State(run)

    def mbind(self, mv: State[Any, Any], f: Callable[[Any], State[Any, Any]]) -> State[Any, Any]:
        def run(s: Any) -> Pair[Any, Any]:
            a, s1 = mv(s)
            return f(a)(s1)

        return State(run)


state_context = StateContext()


# ═════════════════════════════════════════════════════════════════════════════
# Primitive Computations
# ═════════════════════════════════════════════════════════════════════════════


def get_state() -> State[S, S]:
    """Read the current state as the result; the state is unchanged."""
    return State(lambda s: Pair(s, s))


def put_state(new_state: S) -> State[S, S]:
    """Replace the state. The result is the *old* state."""
    return State(lambda s: Pair(s, new_state))


def swap_state(f: Callable[[S], S]) -> State[S, S]:
    """Replace the state with f(old state). The result is the old state."""
    return State(lambda s: Pair(s, f(s)))


# ═════════════════════════════════════════════════════════════════════════════
# Runners
# ═════════════════════════════════════════════════════════════════════════════


def run_state(computation: State[S, A], seed: S) -> Pair[A, S]:
    """Run computation from seed, returning Pair(result, final_state).

    The ambient context is State for the whole run, so functions bound
    inside the computation can call pure() without naming a context.

    Each bind in computation is a nested closure call while running, so
    chains of more than a few hundred binds (e.g. ``sequence_m`` over a
    long list) exceed the default recursion limit.
    """
    with with_context(state_context):
        return computation(seed)


def eval_state(computation: State[S, A], seed: S) -> A:
    """Result of run_state, state discarded."""
    return run_state(computation, seed).first


def exec_state(computation: State[S, A], seed: S) -> S:
    """Final state of run_state, result discarded."""
    return run_state(computation, seed).second
