"""Maybe monad for optional values.

Implements a discriminated union for presence/absence with full context
instances:
- Functor, Applicative, Monad: absence short-circuits
- MonadZero / MonadPlus: Nothing is the absorbing element, first Just wins
- Monoid: Nothing is the identity, payloads are combined with mappend
- Foldable / Traversable over the (zero or one) payload
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar, cast

from categorica.protocols import Context

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

T = TypeVar("T")
U = TypeVar("U")


class Maybe(Generic[T]):
    """Either a payload (Just) or nothing at all (Nothing).

    Examples:
        >>> Just(2)
        Just(2)
        >>> Nothing().is_nothing()
        True
        >>> from_maybe(Nothing(), 0)
        0

    Notes:
        - Uses __slots__; instances are immutable
        - ``Just(None)`` is a present payload, distinct from ``Nothing()``
    """

    __slots__ = ("_value", "_is_just")
    __match_args__ = ("_value",)

    def __init__(self, value: T | None, is_just: bool) -> None:
        """Private constructor. Use Just() or Nothing() instead."""
        self._value = value
        self._is_just = is_just

    def is_just(self) -> bool:
        return self._is_just

    def is_nothing(self) -> bool:
        return not self._is_just

    def unwrap(self) -> T:
        """Extract the payload.

        Raises:
            RuntimeError: If Nothing
        """
        if self._is_just:
            return cast(T, self._value)
        raise RuntimeError("Called unwrap() on Nothing")

    def get_context(self) -> Context:
        return maybe_context

    def __bool__(self) -> bool:
        return self._is_just

    def __repr__(self) -> str:
        return f"Just({self._value!r})" if self._is_just else "Nothing"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Maybe):
            return NotImplemented
        return self._is_just == other._is_just and self._value == other._value

    def __hash__(self) -> int:
        return hash((self._is_just, self._value))

    def __iter__(self) -> Iterator[T]:
        """Yield the payload if present (0 or 1 element)."""
        if self._is_just:
            yield cast(T, self._value)


_NOTHING: Maybe[Any] = Maybe(None, is_just=False)


def Just(value: T) -> Maybe[T]:  # noqa: N802
    """Construct a present Maybe."""
    return Maybe(value, is_just=True)


def Nothing() -> Maybe[Any]:  # noqa: N802
    """The absent Maybe."""
    return _NOTHING


def from_maybe(mv: Maybe[T], default: U | None = None) -> T | U | None:
    """Payload of mv, or default when absent."""
    return mv.unwrap() if mv.is_just() else default


def cat_maybes(mvs: Iterable[Maybe[T]]) -> list[T]:
    """Payloads of the present values, in order."""
    return [mv.unwrap() for mv in mvs if mv.is_just()]


class MaybeContext(Context):
    """Context instances for Maybe."""

    __slots__ = ()

    def __init__(self) -> None:
        super().__init__("maybe")

    def fmap(self, f: Callable[[Any], Any], fv: Maybe[Any]) -> Maybe[Any]:
        return Just(f(fv.unwrap())) if fv.is_just() else fv

    def pure(self, value: Any) -> Maybe[Any]:
        return Just(value)

    def fapply(self, af: Maybe[Any], av: Maybe[Any]) -> Maybe[Any]:
        if af.is_nothing():
            return af
        return self.fmap(af.unwrap(), av)

    def mbind(self, mv: Maybe[Any], f: Callable[[Any], Maybe[Any]]) -> Maybe[Any]:
        return f(mv.unwrap()) if mv.is_just() else mv

    def mzero(self) -> Maybe[Any]:
        return Nothing()

    def mplus(self, mv: Maybe[Any], mv2: Maybe[Any]) -> Maybe[Any]:
        return mv if mv.is_just() else mv2

    def mempty(self) -> Maybe[Any]:
        return Nothing()

    def mappend(self, sv: Maybe[Any], sv2: Maybe[Any]) -> Maybe[Any]:
        if sv.is_nothing():
            return sv2
        if sv2.is_nothing():
            return sv
        from categorica.core import mappend
        return Just(mappend(sv.unwrap(), sv2.unwrap()))

    def foldl(self, f: Callable[[Any, Any], Any], z: Any, fv: Maybe[Any]) -> Any:
        return f(z, fv.unwrap()) if fv.is_just() else z

    def foldr(self, f: Callable[[Any, Any], Any], z: Any, fv: Maybe[Any]) -> Any:
        return f(fv.unwrap(), z) if fv.is_just() else z

    def traverse(self, f: Callable[[Any], Any], tv: Maybe[Any]) -> Any:
        from categorica.core import fmap, pure
        if tv.is_just():
            return fmap(Just, f(tv.unwrap()))
        return pure(tv)


maybe_context = MaybeContext()
