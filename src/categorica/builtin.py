"""Context instances for Python's builtin containers and explicit monoids.

Builtin values cannot report their own context, so ``register_builtins``
installs these in a ContextRegistry (the process registry does this on
first use):

    list, tuple   Functor, Applicative, Monad, MonadZero, MonadPlus,
                  Monoid, Foldable, Traversable
    set,          Functor, Applicative, Monad, MonadZero, MonadPlus,
    frozenset     Monoid, Foldable
    str           Monoid, Foldable
    dict          Functor (over values), Monoid (right-biased merge)

Numbers and booleans form several monoids each, so those are never
inferred; pass one of ``sum_monoid``, ``product_monoid``, ``any_monoid``
or ``all_monoid`` explicitly:

    >>> mappend(1, 2, 3, ctx=sum_monoid)
    6
"""

from __future__ import annotations

import operator
from functools import reduce
from typing import TYPE_CHECKING, Any, Callable

from categorica.protocols import Context

if TYPE_CHECKING:
    from collections.abc import Iterable

    from categorica.context import ContextRegistry


class SequenceContext(Context):
    """List-like context (nondeterminism monad) producing ``factory`` values."""

    __slots__ = ("_factory",)

    def __init__(self, name: str, factory: Callable[[Iterable[Any]], Any]) -> None:
        super().__init__(name)
        self._factory = factory

    def fmap(self, f: Callable[[Any], Any], fv: Any) -> Any:
        return self._factory(f(x) for x in fv)

    def pure(self, value: Any) -> Any:
        return self._factory((value,))

    def fapply(self, af: Any, av: Any) -> Any:
        return self._factory(f(x) for f in af for x in av)

    def mbind(self, mv: Any, f: Callable[[Any], Any]) -> Any:
        return self._factory(y for x in mv for y in f(x))

    def mzero(self) -> Any:
        return self._factory(())

    def mplus(self, mv: Any, mv2: Any) -> Any:
        return self._factory((*mv, *mv2))

    def mempty(self) -> Any:
        return self._factory(())

    def mappend(self, sv: Any, sv2: Any) -> Any:
        return self._factory((*sv, *sv2))

    def foldl(self, f: Callable[[Any, Any], Any], z: Any, fv: Any) -> Any:
        return reduce(f, fv, z)

    def foldr(self, f: Callable[[Any, Any], Any], z: Any, fv: Any) -> Any:
        return reduce(lambda acc, x: f(x, acc), reversed(tuple(fv)), z)

    def traverse(self, f: Callable[[Any], Any], tv: Any) -> Any:
        """Apply f to each item and combine the results applicatively.

        Short-circuits per the applicative of f's results; an empty input
        lifts an empty container with the ambient ``pure``.
        """
        from categorica.core import fapply, fmap, pure
        items = list(tv)
        if not items:
            return pure(self._factory(()))
        acc = fmap(lambda x: [x], f(items[0]))
        for item in items[1:]:
            acc = fapply(fmap(lambda xs: lambda x: [*xs, x], acc), f(item))
        return fmap(self._factory, acc)


class SetContext(Context):
    """Set context: like list, without ordering or duplicates."""

    __slots__ = ("_factory",)

    def __init__(self, name: str, factory: Callable[[Iterable[Any]], Any]) -> None:
        super().__init__(name)
        self._factory = factory

    def fmap(self, f: Callable[[Any], Any], fv: Any) -> Any:
        return self._factory(f(x) for x in fv)

    def pure(self, value: Any) -> Any:
        return self._factory((value,))

    def fapply(self, af: Any, av: Any) -> Any:
        return self._factory(f(x) for f in af for x in av)

    def mbind(self, mv: Any, f: Callable[[Any], Any]) -> Any:
        return self._factory(y for x in mv for y in f(x))

    def mzero(self) -> Any:
        return self._factory(())

    def mplus(self, mv: Any, mv2: Any) -> Any:
        return self._factory(mv | mv2)

    def mempty(self) -> Any:
        return self._factory(())

    def mappend(self, sv: Any, sv2: Any) -> Any:
        return self._factory(sv | sv2)

    def foldl(self, f: Callable[[Any, Any], Any], z: Any, fv: Any) -> Any:
        return reduce(f, fv, z)

    def foldr(self, f: Callable[[Any, Any], Any], z: Any, fv: Any) -> Any:
        return reduce(lambda acc, x: f(x, acc), reversed(list(fv)), z)


class StringContext(Context):
    __slots__ = ()

    def __init__(self) -> None:
        super().__init__("str")

    def mempty(self) -> str:
        return ""

    def mappend(self, sv: str, sv2: str) -> str:
        return sv + sv2

    def foldl(self, f: Callable[[Any, Any], Any], z: Any, fv: str) -> Any:
        return reduce(f, fv, z)

    def foldr(self, f: Callable[[Any, Any], Any], z: Any, fv: str) -> Any:
        return reduce(lambda acc, x: f(x, acc), reversed(fv), z)


class DictContext(Context):
    __slots__ = ()

    def __init__(self) -> None:
        super().__init__("dict")

    def fmap(self, f: Callable[[Any], Any], fv: dict[Any, Any]) -> dict[Any, Any]:
        return {k: f(v) for k, v in fv.items()}

    def mempty(self) -> dict[Any, Any]:
        return {}

    def mappend(self, sv: dict[Any, Any], sv2: dict[Any, Any]) -> dict[Any, Any]:
        return {**sv, **sv2}


class MonoidContext(Context):
    """A monoid given by an identity element and a binary operation."""

    __slots__ = ("_empty", "_append")

    def __init__(self, name: str, empty: Any, append: Callable[[Any, Any], Any]) -> None:
        super().__init__(name)
        self._empty = empty
        self._append = append

    def mempty(self) -> Any:
        return self._empty

    def mappend(self, sv: Any, sv2: Any) -> Any:
        return self._append(sv, sv2)


list_context = SequenceContext("list", list)
tuple_context = SequenceContext("tuple", tuple)
set_context = SetContext("set", set)
frozenset_context = SetContext("frozenset", frozenset)
str_context = StringContext()
dict_context = DictContext()

sum_monoid = MonoidContext("sum", 0, operator.add)
product_monoid = MonoidContext("product", 1, operator.mul)
any_monoid = MonoidContext("any", False, lambda a, b: bool(a or b))
all_monoid = MonoidContext("all", True, lambda a, b: bool(a and b))


def register_builtins(registry: ContextRegistry) -> None:
    """Install the builtin container contexts in registry."""
    for type_, ctx in (
        (list, list_context),
        (tuple, tuple_context),
        (set, set_context),
        (frozenset, frozenset_context),
        (str, str_context),
        (dict, dict_context),
    ):
        registry.register(type_, ctx)
