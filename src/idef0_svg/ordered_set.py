"""Insertion-ordered, deduplicating collection.

Layout decisions break ties on iteration order, so every collection the
engine walks (boxes, lines, anchors, dependency names) is an ``OrderedSet``
to keep renders reproducible.
"""

from __future__ import annotations

__all__ = ["OrderedSet", "compare_keys"]

from collections.abc import Callable, Hashable, Iterable, Iterator
from functools import cmp_to_key
from typing import Any, Generic, TypeVar

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)


def _compare_values(a: Any, b: Any) -> int:
    # Numbers and strings are unordered against each other.
    if isinstance(a, str) != isinstance(b, str):
        return 0
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def compare_keys(a: tuple, b: tuple) -> int:
    """Compare two precedence tuples element by element.

    Returns a negative, zero or positive number. When one tuple is a prefix
    of the other, the shorter one sorts first.
    """
    for x, y in zip(a, b):
        result = _compare_values(x, y)
        if result:
            return result
    return len(a) - len(b)


def _compare_sort_keys(a: Any, b: Any) -> int:
    if isinstance(a, tuple) and isinstance(b, tuple):
        return compare_keys(a, b)
    return _compare_values(a, b)


class OrderedSet(Generic[T]):
    """A list that refuses duplicates and keeps first-insertion order."""

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._items: list[T] = []
        for item in items:
            self.add(item)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __getitem__(self, index: int) -> T:
        return self._items[index]

    def __repr__(self) -> str:
        return f"OrderedSet({self._items!r})"

    def is_empty(self) -> bool:
        return not self._items

    def add(self, item: T) -> OrderedSet[T]:
        if item not in self._items:
            self._items.append(item)
        return self

    def get(
        self,
        predicate: Callable[[T], bool],
        factory: Callable[[], T] | None = None,
    ) -> T | None:
        """Return the first item matching *predicate*, creating it if absent."""
        item = self.find(predicate)
        if item is None and factory is not None:
            item = factory()
            self.add(item)
        return item

    def find(self, predicate: Callable[[T], bool]) -> T | None:
        for item in self._items:
            if predicate(item):
                return item
        return None

    def any(self, predicate: Callable[[T], bool]) -> bool:
        return any(predicate(item) for item in self._items)

    def insert(self, index: int, item: T) -> OrderedSet[T]:
        """Return a copy with *item* moved (or added) to *index*."""
        items = [i for i in self._items if i != item]
        items.insert(index, item)
        return OrderedSet(items)

    def delete(self, item: T) -> OrderedSet[T]:
        """Return a copy without *item*."""
        return OrderedSet(i for i in self._items if i != item)

    def select(self, predicate: Callable[[T], bool]) -> OrderedSet[T]:
        return OrderedSet(i for i in self._items if predicate(i))

    def reject(self, predicate: Callable[[T], bool]) -> OrderedSet[T]:
        return OrderedSet(i for i in self._items if not predicate(i))

    def sort_by(self, key: Callable[[T], Any]) -> OrderedSet[T]:
        """Return a stably sorted copy; tuple keys use ``compare_keys``."""
        keyed = [(key(item), item) for item in self._items]
        keyed.sort(key=cmp_to_key(lambda a, b: _compare_sort_keys(a[0], b[0])))
        return OrderedSet(item for _, item in keyed)

    def group_by(self, key: Callable[[T], K]) -> dict[K, OrderedSet[T]]:
        groups: dict[K, OrderedSet[T]] = {}
        for item in self._items:
            groups.setdefault(key(item), OrderedSet()).add(item)
        return groups

    def ranks(self) -> dict[T, int]:
        """Map each item to its 0-based position."""
        return {item: index for index, item in enumerate(self._items)}

    def to_list(self) -> list[T]:
        return list(self._items)
