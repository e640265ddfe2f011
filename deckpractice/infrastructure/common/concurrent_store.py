"""
Thread-safe key/value store with atomic get-or-compute.

Backs the caches shared by concurrently running practice sessions.

Example:
    store: ConcurrentStore[DeckId, CachedKnownCards] = ConcurrentStore()
    entry = store.get_or_compute(deck_id, load, is_fresh=lambda e: e.is_valid(now))
    store.remove_if(lambda key: key == deck_id)
"""

import threading
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from typing import Generic, TypeVar

K = TypeVar("K")
V = TypeVar("V")


class _InFlight:
    """Lock and removal counter for a key with a load in progress."""

    __slots__ = ("lock", "users", "removals")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.users = 0
        self.removals = 0


class ConcurrentStore(Generic[K, V]):
    """
    Dictionary guarded for concurrent readers and writers.

    get_or_compute guarantees:
    - Concurrent misses on the same key run compute once; the other
      callers wait and reuse the stored value
    - A compute that raises stores nothing
    - An entry removed while its compute was running is not stored by that
      compute, so a value read before an invalidation never outlives it.
      Removing other keys does not affect it.

    Per-key state only exists while a load for that key is running.

    Insertion order is kept; when max_size is reached the oldest entry
    is dropped first.
    """

    def __init__(self, max_size: int | None = None) -> None:
        if max_size is not None and max_size <= 0:
            raise ValueError("max_size must be positive")
        self._max_size = max_size
        self._data: dict[K, V] = {}
        self._in_flight: dict[K, _InFlight] = {}
        self._lock = threading.Lock()

    def get(self, key: K) -> V | None:
        with self._lock:
            return self._data.get(key)

    def get_or_compute(
        self,
        key: K,
        compute: Callable[[K], V],
        is_fresh: Callable[[V], bool] | None = None,
    ) -> V:
        """
        Return the stored value for key, computing and storing it on a miss.

        Args:
            key: Cache key
            compute: Called with the key on a miss; exceptions propagate
            is_fresh: Optional predicate; a stored value failing it is a miss

        Returns:
            The stored or freshly computed value
        """
        with self._lock:
            value = self._data.get(key)
            if value is not None and (is_fresh is None or is_fresh(value)):
                return value
            flight = self._join_locked(key)

        try:
            with flight.lock:
                with self._lock:
                    value = self._data.get(key)
                    if value is not None and (is_fresh is None or is_fresh(value)):
                        return value
                    removals = flight.removals

                computed = compute(key)

                with self._lock:
                    if flight.removals == removals:
                        self._put_locked(key, computed)
                return computed
        finally:
            with self._lock:
                self._leave_locked(key, flight)

    @contextmanager
    def guarded_put(self, keys: Iterable[K]) -> Iterator[Callable[[K, V], bool]]:
        """
        Track removals of keys while their values are loaded outside the store.

        Yields a put function that stores a value only if its key was not
        removed since the block was entered, and returns whether it did.

        Example:
            with store.guarded_put(deck_ids) as put:
                loaded = repository.load_many(deck_ids)
                for deck_id in deck_ids:
                    put(deck_id, loaded[deck_id])
        """
        with self._lock:
            flights = {key: self._join_locked(key) for key in dict.fromkeys(keys)}
            marks = {key: flight.removals for key, flight in flights.items()}

        def put(key: K, value: V) -> bool:
            with self._lock:
                flight = flights.get(key)
                if flight is None or flight.removals != marks[key]:
                    return False
                self._put_locked(key, value)
                return True

        try:
            yield put
        finally:
            with self._lock:
                for key, flight in flights.items():
                    self._leave_locked(key, flight)

    def put(self, key: K, value: V) -> None:
        with self._lock:
            self._put_locked(key, value)

    def remove(self, key: K) -> V | None:
        with self._lock:
            flight = self._in_flight.get(key)
            if flight is not None:
                flight.removals += 1
            return self._data.pop(key, None)

    def remove_if(self, predicate: Callable[[K], bool]) -> int:
        """
        Remove every entry whose key matches predicate.

        Loads in progress for matching keys will not store their result.

        Returns:
            Number of entries removed
        """
        with self._lock:
            for key, flight in self._in_flight.items():
                if predicate(key):
                    flight.removals += 1
            doomed = [key for key in self._data if predicate(key)]
            for key in doomed:
                del self._data[key]
            return len(doomed)

    def clear(self) -> None:
        with self._lock:
            for flight in self._in_flight.values():
                flight.removals += 1
            self._data.clear()

    def keys(self) -> list[K]:
        with self._lock:
            return list(self._data)

    @property
    def loads_in_progress(self) -> int:
        """Number of keys with a running compute or guarded put."""
        with self._lock:
            return len(self._in_flight)

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data

    def __iter__(self) -> Iterator[K]:
        return iter(self.keys())

    def _join_locked(self, key: K) -> _InFlight:
        flight = self._in_flight.get(key)
        if flight is None:
            flight = self._in_flight[key] = _InFlight()
        flight.users += 1
        return flight

    def _leave_locked(self, key: K, flight: _InFlight) -> None:
        flight.users -= 1
        if flight.users == 0:
            del self._in_flight[key]

    def _put_locked(self, key: K, value: V) -> None:
        # Re-insert so the entry moves to the newest position
        self._data.pop(key, None)
        self._data[key] = value
        if self._max_size is not None:
            while len(self._data) > self._max_size:
                del self._data[next(iter(self._data))]
