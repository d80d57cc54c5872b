"""A multiset of fruits."""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Iterator

from fruitgift.fruit import Fruit


class Bag:
    """A multiset of :class:`Fruit`, tracking how many of each type are held."""

    __slots__ = ("_counts",)

    def __init__(self, fruits: Iterable[Fruit] = ()) -> None:
        self._counts: Counter[Fruit] = Counter(fruits)

    def insert(self, fruit: Fruit) -> Bag:
        """Add one instance of ``fruit`` and return the bag for chaining."""
        self._counts[fruit] += 1
        return self

    def remove(self, fruit: Fruit) -> bool:
        """Remove one instance of ``fruit``; return ``False`` if it was not present."""
        held = self._counts.get(fruit, 0)
        if held == 0:
            return False
        if held == 1:
            del self._counts[fruit]
        else:
            self._counts[fruit] = held - 1
        return True

    def count(self, fruit: Fruit) -> int:
        """Number of instances of ``fruit`` in the bag."""
        return self._counts.get(fruit, 0)

    def total(self) -> int:
        """Total number of fruits, with multiplicity."""
        return sum(self._counts.values())

    def is_empty(self) -> bool:
        """Whether the bag holds no fruit."""
        return not self._counts

    def copy(self) -> Bag:
        """Return an independent copy of this bag."""
        return Bag(self._counts.elements())

    def __iter__(self) -> Iterator[tuple[Fruit, int]]:
        """Yield each distinct fruit with its count."""
        return iter(list(self._counts.items()))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bag):
            return NotImplemented
        return dict(self._counts) == dict(other._counts)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        inner = ", ".join(f"{fruit.emoji}×{n}" for fruit, n in self._counts.items())
        return f"Bag({inner})"


def bag_value(bag: Bag) -> float:
    """Sum of ``fruit.value() * count`` over every distinct fruit in ``bag``."""
    return sum(fruit.value() * count for fruit, count in bag)