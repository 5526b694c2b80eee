"""
Set of open grid coordinates with O(1) random and keyed removal.
"""

import random
from typing import Dict, Generic, Hashable, Iterable, Iterator, List, Optional, TypeVar

T = TypeVar("T", bound=Hashable)


class RandomRemovalSet(Generic[T]):
    """
    Unordered collection backed by a list plus a reverse index.

    Removal swaps the target with the last element and pops, so both
    uniform-random and keyed removal are constant time.
    """

    def __init__(self, items: Iterable[T] = ()):
        """
        Initialize the set.

        Args:
            items: Initial elements; order becomes the initial slot order

        Raises:
            ValueError: If ``items`` contains duplicates
        """
        self._items: List[T] = list(items)
        self._index: Dict[T, int] = {item: i for i, item in enumerate(self._items)}

        if len(self._index) != len(self._items):
            raise ValueError("RandomRemovalSet items must be unique")

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item) -> bool:
        return item in self._index

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def index_of(self, item: T) -> Optional[int]:
        """Current slot of ``item``, or None if absent."""
        return self._index.get(item)

    def remove_random(self, rng: random.Random) -> Optional[T]:
        """
        Remove and return a uniformly random element.

        Args:
            rng: Random source; exactly one ``randrange`` draw is consumed

        Returns:
            The removed element, or None if the set is empty
        """
        if not self._items:
            return None

        index = rng.randrange(len(self._items))
        item = self._items[index]
        self._swap_remove(index)
        return item

    def remove(self, item: T) -> bool:
        """
        Remove a specific element.

        Returns:
            True if the element was present, False otherwise
        """
        index = self._index.get(item)
        if index is None:
            return False

        self._swap_remove(index)
        return True

    def _swap_remove(self, index: int):
        removed = self._items[index]
        last = self._items.pop()
        del self._index[removed]

        if index != len(self._items):
            self._items[index] = last
            self._index[last] = index
