"""Monadic let: sequential "extract, bind a name, continue" without nesting lambdas.

A binding list is plain data, compiled once into nested ``bind`` calls and
evaluated on demand. Steps run strictly left to right; each expression sees
the names bound by earlier steps through a ``Scope`` and is evaluated only
after every earlier step produced a value, so a short-circuit anywhere
skips all later steps and the body.

Binding list (flat, pattern/expression pairs):

    pattern, expr        bind: expr(scope) is a context value, its payload
                         is bound to pattern
    LET, [pattern, expr, ...]
                         plain local bindings, no bind involved
    WHEN, predicate      guard: continue only if predicate(scope) is truthy

Patterns are identifiers, ``"_"`` (discard), or tuples/lists of patterns
(destructuring).

Example:
    >>> mlet(["x", lambda s: Just(1),
    ...       "y", lambda s: Just(s.x + 1),
    ...       LET, ["z", lambda s: s.x + s.y],
    ...       WHEN, lambda s: s.z > 2],
    ...      lambda s: pure(s.z))
    Just(3)

The same program with the builder:

    >>> prog = (do().bind("x", lambda s: Just(1))
    ...             .bind("y", lambda s: Just(s.x + 1))
    ...             .let("z", lambda s: s.x + s.y)
    ...             .when(lambda s: s.z > 2)
    ...             .returning(lambda s: pure(s.z)))
    >>> prog()
    Just(3)
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any, Callable, Final, Union

from categorica.context import with_context
from categorica.core import bind, guard
from categorica.errors import MalformedBindingsError
from categorica.observability import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterator

    from categorica.protocols import Context

log = get_logger("categorica.mlet")

Pattern = Union[str, tuple["Pattern", ...]]
Expr = Callable[["Scope"], Any]
Program = Callable[["Scope"], Any]

IGNORE: Final = "_"


class StepKind(StrEnum):
    BIND = "bind"
    LET = "let"
    WHEN = "when"


class _Marker:
    __slots__ = ("kind",)

    def __init__(self, kind: StepKind) -> None:
        self.kind = kind

    def __repr__(self) -> str:
        return f":{self.kind}"


LET: Final = _Marker(StepKind.LET)
WHEN: Final = _Marker(StepKind.WHEN)


@dataclass(frozen=True, slots=True)
class Step:
    """One compiled binding step. pattern is None for WHEN steps."""

    kind: StepKind
    pattern: Pattern | None
    expr: Expr


# ─────────────────────────────────────────────────────────────────────────────
# Scope
# ─────────────────────────────────────────────────────────────────────────────


class Scope(Mapping[str, Any]):
    """Immutable namespace of bound names, readable as attributes or keys.

    Example:
        >>> s = Scope(x=1).extend("y", 2)
        >>> s.x + s["y"]
        3
    """

    __slots__ = ("_names",)

    def __init__(self, names: Mapping[str, Any] | None = None, /, **kw: Any) -> None:
        object.__setattr__(self, "_names", {**(names or {}), **kw})

    def extend(self, pattern: Pattern, value: Any) -> Scope:
        """New scope with value destructured into pattern."""
        names = dict(self._names)
        _assign(names, pattern, value)
        return Scope(names)

    def __getattr__(self, name: str) -> Any:
        if name == "_names":
            raise AttributeError(name)
        try:
            return self._names[name]
        except KeyError:
            raise AttributeError(f"Name {name!r} is not bound in this scope") from None

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Scope is immutable")

    def __getitem__(self, name: str) -> Any:
        return self._names[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"Scope({', '.join(f'{k}={v!r}' for k, v in self._names.items())})"


def _assign(names: dict[str, Any], pattern: Pattern, value: Any) -> None:
    if isinstance(pattern, str):
        if pattern != IGNORE:
            names[pattern] = value
        return
    values = tuple(value)
    if len(values) != len(pattern):
        raise ValueError(f"Cannot destructure {len(values)} values into pattern {pattern!r}")
    for sub, item in zip(pattern, values):
        _assign(names, sub, item)


# ─────────────────────────────────────────────────────────────────────────────
# Compilation
# ─────────────────────────────────────────────────────────────────────────────


def _check_pattern(pattern: Any, position: int) -> Pattern:
    if isinstance(pattern, str):
        if pattern != IGNORE and not pattern.isidentifier():
            raise MalformedBindingsError.create(f"Invalid binding name {pattern!r}", position=position)
        return pattern
    if isinstance(pattern, (tuple, list)) and pattern:
        return tuple(_check_pattern(p, position) for p in pattern)
    raise MalformedBindingsError.create(
        f"Binding pattern must be a name or a non-empty tuple of patterns, got {pattern!r}",
        position=position,
    )


def _check_expr(expr: Any, position: int) -> Expr:
    if not callable(expr):
        raise MalformedBindingsError.create(
            f"Binding expression must be a callable taking the scope, got {type(expr).__name__}",
            position=position,
        )
    return expr


def _pairs(bindings: Sequence[Any], offset: int = 0) -> Iterator[tuple[int, Any, Any]]:
    if isinstance(bindings, (str, bytes)) or not isinstance(bindings, Sequence):
        raise MalformedBindingsError.create(
            f"Bindings must be a sequence of pattern/expression pairs, got {type(bindings).__name__}",
            position=offset or None,
        )
    if len(bindings) % 2:
        raise MalformedBindingsError.create(
            f"Bindings need an even number of forms, got {len(bindings)}",
            position=offset or None,
        )
    for i in range(0, len(bindings), 2):
        yield offset + i, bindings[i], bindings[i + 1]


def parse_bindings(bindings: Sequence[Any]) -> tuple[Step, ...]:
    """Validate a flat binding list and turn it into steps.

    Raises:
        MalformedBindingsError: On odd length, invalid patterns, non-callable
            expressions or a malformed LET block
    """
    steps: list[Step] = []
    for position, pattern, expr in _pairs(bindings):
        if pattern is LET:
            for inner, name, value in _pairs(expr, position + 1):
                steps.append(Step(StepKind.LET, _check_pattern(name, inner), _check_expr(value, inner)))
        elif pattern is WHEN:
            steps.append(Step(StepKind.WHEN, None, _check_expr(expr, position + 1)))
        else:
            steps.append(Step(StepKind.BIND, _check_pattern(pattern, position), _check_expr(expr, position + 1)))
    return tuple(steps)


def expand(steps: Sequence[Step], body: Program) -> Program:
    """Nest steps around body, innermost last.

    BIND  -> bind(expr(scope), lambda v: rest(scope + {pattern: v}))
    LET   -> rest(scope + {pattern: expr(scope)})
    WHEN  -> bind(guard(expr(scope)), lambda _: rest(scope))
    """
    if not steps:
        return body
    step, rest = steps[0], expand(steps[1:], body)
    match step.kind:
        case StepKind.LET:
            def let_step(scope: Scope) -> Any:
                return rest(scope.extend(step.pattern, step.expr(scope)))
            return let_step
        case StepKind.WHEN:
            def when_step(scope: Scope) -> Any:
                return bind(guard(step.expr(scope)), lambda _: rest(scope))
            return when_step
        case _:
            def bind_step(scope: Scope) -> Any:
                return bind(step.expr(scope), lambda v: rest(scope.extend(step.pattern, v)))
            return bind_step


class MLet:
    """A compiled monadic let. Compilation validates everything; calling evaluates.

    Args:
        bindings: Flat binding list (see module docstring)
        body: Callable taking the final scope, returning a context value
    """

    __slots__ = ("steps", "_program")

    def __init__(self, bindings: Sequence[Any], body: Program) -> None:
        if not callable(body):
            raise MalformedBindingsError.create(f"mlet body must be callable, got {type(body).__name__}")
        self.steps = parse_bindings(bindings)
        self._program = expand(self.steps, body)
        log.debug("mlet compiled", steps=len(self.steps))

    def __call__(self, ctx: Context | None = None, /, **seed: Any) -> Any:
        """Evaluate. ctx makes a context ambient first (needed when the first
        step is a WHEN); keyword arguments pre-bind names."""
        scope = Scope(seed)
        if ctx is None:
            return self._program(scope)
        with with_context(ctx):
            return self._program(scope)

    def __repr__(self) -> str:
        return f"MLet({', '.join(s.kind for s in self.steps)})"


def mlet(bindings: Sequence[Any], body: Program, ctx: Context | None = None, /, **seed: Any) -> Any:
    """Compile and evaluate a monadic let in one go."""
    return MLet(bindings, body)(ctx, **seed)


# ─────────────────────────────────────────────────────────────────────────────
# Builder
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Do:
    """Immutable builder accumulating a binding list step by step."""

    bindings: tuple[Any, ...] = ()

    def bind(self, pattern: Pattern, expr: Expr) -> Do:
        return Do((*self.bindings, pattern, expr))

    def let(self, pattern: Pattern, expr: Expr) -> Do:
        return Do((*self.bindings, LET, (pattern, expr)))

    def when(self, predicate: Expr) -> Do:
        return Do((*self.bindings, WHEN, predicate))

    def returning(self, body: Program) -> MLet:
        return MLet(self.bindings, body)


def do() -> Do:
    """Start a builder; finish with ``.returning(body)``."""
    return Do()
