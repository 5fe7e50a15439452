import logging

from collections import OrderedDict
from threading import RLock
from typing import Callable, ClassVar, Generic, Hashable, Iterator, Optional, TypeVar, Union

from quadint.config import MINIMUM_CACHE_CAPACITY, Settings
from quadint.grouping import ResultsGrouping
from quadint.ring import QuadraticRing

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class LRUCache(Generic[K, V]):
    """
    A bounded map from names to values, evicting the least recently used entry when full.

    for_name() returns the cached value for a name, or creates it with create() the first time:
      - there is at most one entry per name
      - a hit moves the entry to the most recently used position
      - a miss at capacity evicts the least recently used entry first

    All mutation happens under one lock, so a cache can be shared between threads.
    """

    MINIMUM_CAPACITY: ClassVar[int] = MINIMUM_CACHE_CAPACITY

    def __init__(self, capacity: int, create: Optional[Callable[[K], V]] = None) -> None:
        """
        Args:
            capacity: Maximum number of entries, at least MINIMUM_CAPACITY.
            create: Builds the value for a missing name. Subclasses can override create() instead.

        Raises:
            ValueError: If capacity is below MINIMUM_CAPACITY.
        """
        if capacity < self.MINIMUM_CAPACITY:
            raise ValueError(f"Capacity must be at least {self.MINIMUM_CAPACITY}, got {capacity}")

        self._capacity = capacity
        self._create = create
        # least recently used first
        self._entries: OrderedDict[K, V] = OrderedDict()
        self._lock = RLock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def create(self, name: K) -> V:
        """Build the value for a name that is not cached."""
        if self._create is None:
            raise NotImplementedError("Pass create= or override create()")
        return self._create(name)

    def for_name(self, name: K) -> V:
        """The value for name, from the cache or freshly created."""
        with self._lock:
            if name in self._entries:
                self._entries.move_to_end(name)
                return self._entries[name]

            value = self.create(name)
            if len(self._entries) >= self._capacity:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Evicted %s from the cache", evicted)

            self._entries[name] = value
            return value

    def has(self, value: V) -> bool:
        """Whether value is currently cached under any name."""
        with self._lock:
            return any(v == value for v in self._entries.values())

    def names(self) -> list[K]:
        """Cached names, most recently used first."""
        with self._lock:
            return list(reversed(self._entries))

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[K]:
        return iter(self.names())


class ResultsCache(LRUCache[QuadraticRing, ResultsGrouping]):
    """Prime classification results per ring."""

    def __init__(self, capacity: Optional[int] = None, settings: Optional[Settings] = None) -> None:
        self.settings = settings or Settings()
        super().__init__(self.settings.cache_capacity if capacity is None else capacity)

    def create(self, name: QuadraticRing) -> ResultsGrouping:
        logger.debug("Classifying primes up to %d in %s", self.settings.prime_pi, name)
        return ResultsGrouping(name, settings=self.settings)

    def for_name(self, name: Union[QuadraticRing, int]) -> ResultsGrouping:
        """The results for a ring, given as a ring or its radicand."""
        if not isinstance(name, QuadraticRing):
            name = QuadraticRing(int(name))
        return super().for_name(name)
