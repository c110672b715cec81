"""Either monad for computations that can fail with a value.

Implements a discriminated union for success (Right) / failure (Left) with
context instances:
- Functor: map over Right, Left passes through
- Applicative: apply, the left operand's failure wins
- Monad: bind (>>=), Left short-circuits
- MonadZero / MonadPlus: Left(None) is the absorbing element, first Right wins
- Foldable / Traversable over the Right payload
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar, cast

from categorica.protocols import Context

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

# Type variables for generic Either
L = TypeVar("L")  # Failure type
R = TypeVar("R")  # Success type
U = TypeVar("U")


class Either(Generic[L, R]):
    """Discriminated union representing failure (Left) or success (Right).

    Examples:
        >>> Right(42)
        Right(42)
        >>> branch(Left("boom"), lambda e: f"failed: {e}", lambda v: v)
        'failed: boom'

        Railway-oriented programming:
        >>> def validate_positive(x: int) -> Either[str, int]:
        ...     return Right(x) if x > 0 else Left("must be positive")
        >>>
        >>> bind(Right(5), validate_positive)
        Right(5)

    Notes:
        - Uses __slots__ for zero overhead
        - Immutable by design (all operations return new values)
    """

    __slots__ = ("_value", "_is_right")
    __match_args__ = ("_value",)

    def __init__(self, value: L | R, is_right: bool) -> None:
        """Private constructor. Use Right() or Left() instead."""
        self._value = value
        self._is_right = is_right

    # ─────────────────────────────────────────────────────────────────
    # Type Checking
    # ─────────────────────────────────────────────────────────────────

    def is_right(self) -> bool:
        return self._is_right

    def is_left(self) -> bool:
        return not self._is_right

    # ─────────────────────────────────────────────────────────────────
    # Value Extraction
    # ─────────────────────────────────────────────────────────────────

    def unwrap(self) -> R:
        """Extract Right value.

        Raises:
            RuntimeError: If Left
        """
        if self._is_right:
            return cast(R, self._value)
        raise RuntimeError(f"Called unwrap() on Left value: {self._value}")

    def unwrap_left(self) -> L:
        """Extract Left value.

        Raises:
            RuntimeError: If Right
        """
        if not self._is_right:
            return cast(L, self._value)
        raise RuntimeError(f"Called unwrap_left() on Right value: {self._value}")

    def unwrap_or(self, default: R) -> R:
        """Extract Right value or return default."""
        return cast(R, self._value) if self._is_right else default

    def get_context(self) -> Context:
        return either_context

    # ─────────────────────────────────────────────────────────────────
    # Dunder Methods
    # ─────────────────────────────────────────────────────────────────

    def __bool__(self) -> bool:
        """Enable truthiness checking (True if Right)."""
        return self._is_right

    def __repr__(self) -> str:
        variant = "Right" if self._is_right else "Left"
        return f"{variant}({self._value!r})"

    def __eq__(self, other: object) -> bool:
        """Structural equality."""
        if not isinstance(other, Either):
            return NotImplemented
        return self._is_right == other._is_right and self._value == other._value

    def __hash__(self) -> int:
        return hash((self._is_right, self._value))

    def __iter__(self) -> Iterator[R]:
        """Iterate over Right value (yields 0 or 1 element)."""
        if self._is_right:
            yield cast(R, self._value)


# ═════════════════════════════════════════════════════════════════════════════
# Constructor Functions
# ═════════════════════════════════════════════════════════════════════════════


def Right(value: R) -> Either[Any, R]:  # noqa: N802
    """Construct Right variant (success)."""
    return Either(value, is_right=True)


def Left(error: L) -> Either[L, Any]:  # noqa: N802
    """Construct Left variant (failure)."""
    return Either(error, is_right=False)


# ═════════════════════════════════════════════════════════════════════════════
# Helpers
# ═════════════════════════════════════════════════════════════════════════════


def branch(ev: Either[L, R], on_left: Callable[[L], U], on_right: Callable[[R], U]) -> U:
    """Case analysis: apply on_left or on_right to the payload."""
    if ev.is_right():
        return on_right(ev.unwrap())
    return on_left(ev.unwrap_left())


def lefts(evs: Iterable[Either[L, R]]) -> list[L]:
    """Payloads of the Left values, in order."""
    return [ev.unwrap_left() for ev in evs if ev.is_left()]


def rights(evs: Iterable[Either[L, R]]) -> list[R]:
    """Payloads of the Right values, in order."""
    return [ev.unwrap() for ev in evs if ev.is_right()]


class EitherContext(Context):
    """Context instances for Either."""

    __slots__ = ()

    def __init__(self) -> None:
        super().__init__("either")

    def fmap(self, f: Callable[[Any], Any], fv: Either[Any, Any]) -> Either[Any, Any]:
        return Right(f(fv.unwrap())) if fv.is_right() else fv

    def pure(self, value: Any) -> Either[Any, Any]:
        return Right(value)

    def fapply(self, af: Either[Any, Any], av: Either[Any, Any]) -> Either[Any, Any]:
        if af.is_left():
            return af
        return self.fmap(af.unwrap(), av)

    def mbind(self, mv: Either[Any, Any], f: Callable[[Any], Either[Any, Any]]) -> Either[Any, Any]:
        return f(mv.unwrap()) if mv.is_right() else mv

    def mzero(self) -> Either[Any, Any]:
        return Left(None)

    def mplus(self, mv: Either[Any, Any], mv2: Either[Any, Any]) -> Either[Any, Any]:
        return mv if mv.is_right() else mv2

    def foldl(self, f: Callable[[Any, Any], Any], z: Any, fv: Either[Any, Any]) -> Any:
        return f(z, fv.unwrap()) if fv.is_right() else z

    def foldr(self, f: Callable[[Any, Any], Any], z: Any, fv: Either[Any, Any]) -> Any:
        return f(fv.unwrap(), z) if fv.is_right() else z

    def traverse(self, f: Callable[[Any], Any], tv: Either[Any, Any]) -> Any:
        from categorica.core import fmap, pure
        if tv.is_right():
            return fmap(Right, f(tv.unwrap()))
        return pure(tv)


either_context = EitherContext()
