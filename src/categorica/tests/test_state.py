"""Tests for the State monad."""

from __future__ import annotations

from typing import Any

import pytest

from categorica import (
    LET,
    WHEN,
    Pair,
    State,
    UnsupportedOperationError,
    bind,
    chain,
    eval_state,
    exec_state,
    fmap,
    get_state,
    guard,
    map_m,
    mlet,
    pure,
    put_state,
    run_state,
    sequence_m,
    state,
    swap_state,
)
from categorica.monads.state import state_context


def test_get_then_swap_returns_old_state() -> None:
    """Result is the old state from the update, the new state is 2."""
    computation = bind(get_state(), lambda _: swap_state(lambda x: x + 1))
    assert run_state(computation, 1) == Pair(1, 2)


def test_put_state_replaces_state() -> None:
    assert run_state(put_state("new"), "old") == Pair("old", "new")


def test_pure_leaves_state_untouched() -> None:
    assert run_state(pure(5, state_context), "s") == Pair(5, "s")


def test_eval_and_exec() -> None:
    computation = chain(get_state(), lambda n: put_state(n * 2), lambda _: get_state())
    assert eval_state(computation, 3) == 6
    assert exec_state(computation, 3) == 6


def test_state_from_tuple_function() -> None:
    pop = state(lambda stack: (stack[0], stack[1:]))
    assert run_state(pop, [1, 2, 3]) == Pair(1, [2, 3])


def test_pair_unpacks_like_a_tuple() -> None:
    result, final = run_state(get_state(), 7)
    assert (result, final) == (7, 7)


def test_fmap_maps_result_only() -> None:
    assert run_state(fmap(str, get_state()), 9) == Pair("9", 9)


def test_mlet_threads_state() -> None:
    counter = mlet(["n", lambda _: get_state(),
                    "_", lambda s: put_state(s.n + 1),
                    LET, ["doubled", lambda s: s.n * 2],
                    "m", lambda _: get_state()],
                   lambda s: pure((s.doubled, s.m)))
    assert run_state(counter, 4) == Pair((8, 5), 5)


def test_computations_are_reusable() -> None:
    tick = bind(get_state(), lambda n: put_state(n + 1))
    assert exec_state(tick, 0) == 1
    assert exec_state(tick, 10) == 11


def test_sequence_m_runs_in_order() -> None:
    def push(x: Any) -> State[list[Any], None]:
        return state(lambda stack: (None, [*stack, x]))

    assert exec_state(sequence_m([push(1), push(2), push(3)]), []) == [1, 2, 3]
    labels = map_m(lambda tag: bind(get_state(), lambda n: bind(put_state(n + 1), lambda _: pure(f"{tag}{n}"))),
                   ["a", "b"])
    assert run_state(labels, 0) == Pair(["a0", "b1"], 2)


def test_state_has_no_absorbing_element() -> None:
    program = mlet(["n", lambda _: get_state(), WHEN, lambda s: s.n > 0], lambda s: pure(s.n))
    with pytest.raises(UnsupportedOperationError, match="MonadZero"):
        run_state(program, 1)
    with pytest.raises(UnsupportedOperationError):
        guard(True, state_context)


@pytest.mark.parametrize("seed", [0, 3])
def test_monad_laws(seed: int) -> None:
    """Left identity, right identity and associativity, compared by running."""
    f = lambda x: bind(put_state(x * 2), lambda _: pure(x + 1))
    g = lambda x: bind(get_state(), lambda s: pure(x + s))
    m = bind(get_state(), lambda s: put_state(s + 1))
    assert run_state(bind(pure(seed, state_context), f), seed) == run_state(f(seed), seed)
    assert run_state(bind(m, pure), seed) == run_state(m, seed)
    assert run_state(bind(bind(m, f), g), seed) == run_state(bind(m, lambda x: bind(f(x), g)), seed)


def test_moderate_chains_run() -> None:
    """A chain of a hundred-odd binds stays inside the default recursion limit."""
    tick = state(lambda s: (None, s + 1))
    assert exec_state(sequence_m([tick] * 150), 0) == 150
