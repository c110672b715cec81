"""categorica - category-theory abstractions for context-polymorphic Python.

Write ``bind``, ``fmap`` or ``sequence_m`` once and run it over optional
values, errors, lists, stateful computations or continuations:

    >>> from categorica import Just, Nothing, Right, Left, bind, pure, sequence_m
    >>>
    >>> def half(x: int):
    ...     return pure(x // 2) if x % 2 == 0 else Nothing()
    >>>
    >>> bind(Just(8), half)
    Just(4)
    >>> sequence_m([Right(1), Left("bad"), Right(3)])
    Left('bad')

Sequencing without nested lambdas:

    >>> from categorica import LET, WHEN, mlet
    >>> mlet(["x", lambda s: [1, 2, 3],
    ...       "y", lambda s: [10, 20],
    ...       WHEN, lambda s: s.x != 2],
    ...      lambda s: pure(s.x + s.y))
    [11, 21, 13, 23]

Stateful computations and continuations:

    >>> from categorica import get_state, put_state, run_state, call_cc, run_cont
    >>> run_state(bind(get_state(), lambda n: put_state(n + 1)), 1)
    Pair(first=1, second=2)
    >>> run_cont(call_cc(lambda k: bind(k(42), lambda _: pure(0))))
    42
"""

from .builtin import (
    all_monoid,
    any_monoid,
    dict_context,
    frozenset_context,
    list_context,
    product_monoid,
    set_context,
    str_context,
    sum_monoid,
    tuple_context,
)
from .context import (
    ContextRegistry,
    ambient_context,
    context_of,
    current_context,
    get_registry,
    register_context,
    reset_registry,
    set_registry,
    with_context,
)
from .core import (
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
    traverse,
)
from .derived import (
    filter_m,
    foldm,
    for_m,
    join,
    kleisli,
    kleisli_left,
    lift_a,
    lift_m,
    map_m,
    rbind,
    sequence_m,
    unless_m,
    when_m,
)
from .errors import (
    CategoryError,
    CategoryException,
    EmptySequenceError,
    ErrorCode,
    MalformedBindingsError,
    UnboundContextError,
    UnsupportedOperationError,
)
from .mlet import LET, WHEN, MLet, Scope, do, mlet
from .monads import (
    Continuation,
    Either,
    Just,
    Left,
    Maybe,
    Nothing,
    Right,
    State,
    call_cc,
    cont,
    eval_state,
    exec_state,
    get_state,
    put_state,
    run_cont,
    run_state,
    state,
    swap_state,
)
from .pair import Pair
from .protocols import (
    Applicative,
    Context,
    Contextual,
    Foldable,
    Functor,
    Monad,
    MonadPlus,
    MonadZero,
    Monoid,
    Semigroup,
    Traversable,
)

__version__ = "0.1.0"

__all__ = [
    # Protocols
    "Context", "Contextual", "Functor", "Applicative", "Monad", "MonadZero", "MonadPlus",
    "Semigroup", "Monoid", "Foldable", "Traversable",
    # Context resolution
    "ContextRegistry", "get_registry", "set_registry", "reset_registry", "register_context",
    "context_of", "with_context", "current_context", "ambient_context",
    # Generic combinators
    "pure", "mreturn", "fmap", "fapply", "bind", "chain", "mzero", "mplus", "guard",
    "mempty", "mappend", "mconcat", "foldl", "foldr", "traverse",
    # Sequencing
    "mlet", "MLet", "do", "Scope", "LET", "WHEN",
    # Derived combinators
    "join", "rbind", "kleisli", "kleisli_left", "sequence_m", "map_m", "for_m", "foldm",
    "lift_m", "lift_a", "filter_m", "when_m", "unless_m",
    # Contexts
    "Maybe", "Just", "Nothing", "Either", "Left", "Right", "Pair",
    "State", "state", "get_state", "put_state", "swap_state", "run_state", "eval_state", "exec_state",
    "Continuation", "cont", "call_cc", "run_cont",
    "list_context", "tuple_context", "set_context", "frozenset_context", "str_context", "dict_context",
    "sum_monoid", "product_monoid", "any_monoid", "all_monoid",
    # Errors
    "ErrorCode", "CategoryError", "CategoryException", "UnboundContextError",
    "UnsupportedOperationError", "MalformedBindingsError", "EmptySequenceError",
]
