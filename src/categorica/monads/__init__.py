"""Concrete monadic contexts: Maybe, Either, State and Continuation."""

from .continuation import Continuation, call_cc, cont, continuation_context, run_cont
from .either import Either, Left, Right, branch, either_context, lefts, rights
from .maybe import Just, Maybe, Nothing, cat_maybes, from_maybe, maybe_context
from .state import (
    State,
    eval_state,
    exec_state,
    get_state,
    put_state,
    run_state,
    state,
    state_context,
    swap_state,
)

__all__ = [
    # Maybe
    "Maybe", "Just", "Nothing", "from_maybe", "cat_maybes", "maybe_context",
    # Either
    "Either", "Left", "Right", "branch", "lefts", "rights", "either_context",
    # State
    "State", "state", "get_state", "put_state", "swap_state",
    "run_state", "eval_state", "exec_state", "state_context",
    # Continuation
    "Continuation", "cont", "call_cc", "run_cont", "continuation_context",
]
