"""Pair: an ordered 2-tuple used as a product type and as State's result carrier."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar

from categorica.protocols import Context

if TYPE_CHECKING:
    from collections.abc import Iterator

A = TypeVar("A")
B = TypeVar("B")


@dataclass(frozen=True, slots=True)
class Pair(Generic[A, B]):
    """Immutable pair; unpacks like a tuple.

    Example:
        >>> result, state = Pair(1, 2)
        >>> fmap(lambda x: x * 10, Pair("k", 2))
        Pair(first='k', second=20)
    """

    first: A
    second: B

    def get_context(self) -> Context:
        return pair_context

    def __iter__(self) -> Iterator[Any]:
        yield self.first
        yield self.second


class PairContext(Context):
    """Functor, Foldable and Traversable over ``second``; Semigroup componentwise."""

    __slots__ = ()

    def __init__(self) -> None:
        super().__init__("pair")

    def fmap(self, f: Callable[[Any], Any], fv: Pair[Any, Any]) -> Pair[Any, Any]:
        return Pair(fv.first, f(fv.second))

    def foldl(self, f: Callable[[Any, Any], Any], z: Any, fv: Pair[Any, Any]) -> Any:
        return f(z, fv.second)

    def foldr(self, f: Callable[[Any, Any], Any], z: Any, fv: Pair[Any, Any]) -> Any:
        return f(fv.second, z)

    def traverse(self, f: Callable[[Any], Any], tv: Pair[Any, Any]) -> Any:
        from categorica.core import fmap
        return fmap(lambda b: Pair(tv.first, b), f(tv.second))

    def mappend(self, sv: Pair[Any, Any], sv2: Pair[Any, Any]) -> Pair[Any, Any]:
        from categorica.core import mappend
        return Pair(mappend(sv.first, sv2.first), mappend(sv.second, sv2.second))


pair_context = PairContext()
