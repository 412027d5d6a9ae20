from __future__ import annotations
import logging
from typing import Any, Callable, Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar

from ..config import (
    GROW_DENOMINATOR,
    GROW_NUMERATOR,
    GROWTH_FACTOR,
    MIN_CAPACITY,
    SHRINK_DENOMINATOR,
    SHRINK_NUMERATOR,
)
from ..errors import KeyNotFound, LengthMismatch
from .bucket import Bucket, Entry
from .cursor import Cursor

K = TypeVar("K")
V = TypeVar("V")

logger = logging.getLogger(__name__)


class HashTable(Generic[K, V]):
    """A separate-chaining hash table with power-of-two capacity.

    Capacity policy:
    - Starts at ``MIN_CAPACITY`` (16) buckets.
    - Doubles when the load factor exceeds 3/4 after an insert.
    - Halves (repeatedly) when the load factor drops below 1/4 after an
      erase, down to a single bucket.
    - Every resize rehashes all live entries into a fresh bucket list.

    ``insert`` and ``erase`` report a missing/duplicate key through their
    boolean result; lookup accessors (``at``, ``bucket_size``,
    ``bucket_index``) raise :class:`KeyNotFound` instead.

    Any structural change (insert, erase, clear, resize, assign)
    invalidates outstanding cursors; using one afterwards raises
    :class:`~hashdict.errors.CursorInvalidated`.
    """

    __slots__ = ("_cap", "_buckets", "_size", "_generation", "_default_factory", "_hash_func")

    def __init__(
        self,
        keys: Optional[Iterable[K]] = None,
        values: Optional[Iterable[V]] = None,
        *,
        default_factory: Optional[Callable[[], V]] = None,
        hash_func: Callable[[Any], int] = hash,
    ) -> None:
        self._default_factory = default_factory
        self._hash_func = hash_func
        self._cap: int = MIN_CAPACITY
        self._buckets: List[Bucket[K, V]] = self._make_buckets(self._cap)
        self._size: int = 0
        self._generation: int = 0

        if keys is None and values is None:
            return

        # Materialize both sides first so a mismatch fails before any insert.
        key_list = list(keys) if keys is not None else []
        value_list = list(values) if values is not None else []
        if len(key_list) != len(value_list):
            raise LengthMismatch(len(key_list), len(value_list))

        for k, v in zip(key_list, value_list):
            # Repeated keys: the last value wins.
            if not self.insert(k, v):
                self[k] = v

    # -----------------------------
    # Internal helpers
    # -----------------------------
    @staticmethod
    def _make_buckets(capacity: int) -> List[Bucket[K, V]]:
        return [Bucket() for _ in range(capacity)]

    def _hash_index(self, key: K) -> int:
        """Compute the bucket index for a key (capacity is a power of two)."""
        return self._hash_func(key) & (self._cap - 1)

    def _bucket_for(self, key: K) -> Bucket[K, V]:
        return self._buckets[self._hash_index(key)]

    def _find(self, key: K) -> Optional[Entry[K, V]]:
        return self._bucket_for(key).find(key)

    def _require(self, key: K) -> Entry[K, V]:
        entry = self._find(key)
        if entry is None:
            raise KeyNotFound(key)
        return entry

    def _above_upper_bound(self) -> bool:
        return self._size * GROW_DENOMINATOR > self._cap * GROW_NUMERATOR

    def _below_lower_bound(self, capacity: int) -> bool:
        return self._size * SHRINK_DENOMINATOR < capacity * SHRINK_NUMERATOR

    def _rehash(self, new_capacity: int) -> None:
        """Move every entry into a fresh list of ``new_capacity`` buckets.

        The count restarts at zero and is rebuilt by replaying each entry
        through :meth:`insert`; the new capacity always keeps the load
        factor within bounds, so the replay never resizes again.
        """
        old_buckets = self._buckets
        old_cap = self._cap
        self._cap = new_capacity
        self._buckets = self._make_buckets(new_capacity)
        self._size = 0
        self._generation += 1

        for bucket in old_buckets:
            for entry in bucket:
                self.insert(entry.key, entry.value)

        logger.debug("Rehashed %d entries: capacity %d -> %d", self._size, old_cap, new_capacity)

    def _grow(self) -> None:
        self._rehash(self._cap * GROWTH_FACTOR)

    def _shrink(self) -> None:
        new_cap = self._cap
        while new_cap > 1 and self._below_lower_bound(new_cap):
            new_cap //= GROWTH_FACTOR
        self._rehash(new_cap)

    # -----------------------------
    # Core operations
    # -----------------------------
    def insert(self, key: K, value: V) -> bool:
        """Insert ``(key, value)`` if *key* is absent.

        Returns False (leaving the stored value untouched) when the key is
        already present, True otherwise. May double the capacity.
        """
        if not self._bucket_for(key).append_if_absent(key, value):
            return False
        self._size += 1
        self._generation += 1
        if self._above_upper_bound():
            self._grow()
        return True

    def erase(self, key: K) -> bool:
        """Remove *key* if present; return True if removed, else False.

        May halve the capacity, possibly several times.
        """
        if not self._bucket_for(key).remove(key):
            return False
        self._size -= 1
        self._generation += 1
        if self._cap > 1 and self._below_lower_bound(self._cap):
            self._shrink()
        return True

    def contains_key(self, key: K) -> bool:
        """Check if key exists in the table."""
        return self._find(key) is not None

    def at(self, key: K) -> V:
        """Return the value stored for *key*.

        Raises:
            KeyNotFound: if the key is absent.
        """
        return self._require(key).value

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        """Retrieve value for key or return default (never inserts)."""
        entry = self._find(key)
        return default if entry is None else entry.value

    def clear(self) -> None:
        """Remove every entry. The capacity is kept as is."""
        for bucket in self._buckets:
            bucket.clear()
        self._size = 0
        self._generation += 1

    # -----------------------------
    # Accessors
    # -----------------------------
    def size(self) -> int:
        return self._size

    def capacity(self) -> int:
        return self._cap

    def empty(self) -> bool:
        return self._size == 0

    def load_factor(self) -> float:
        return self._size / self._cap

    def bucket_size(self, key: K) -> int:
        """Number of entries sharing the bucket of *key*.

        Raises:
            KeyNotFound: if the key is absent.
        """
        self._require(key)
        return len(self._bucket_for(key))

    def bucket_index(self, key: K) -> int:
        """Index of the bucket holding *key*.

        Raises:
            KeyNotFound: if the key is absent.
        """
        self._require(key)
        return self._hash_index(key)

    # -----------------------------
    # Copy / assignment
    # -----------------------------
    def assign(self, other: HashTable[K, V]) -> None:
        """Replace this table's contents with an independent copy of *other*."""
        if other is self:
            return
        self._default_factory = other._default_factory
        self._hash_func = other._hash_func
        self._cap = other._cap
        self._buckets = [bucket.copy() for bucket in other._buckets]
        self._size = other._size
        self._generation += 1

    def copy(self) -> HashTable[K, V]:
        """Return a table with the same capacity and layout but its own storage."""
        clone: HashTable[K, V] = HashTable(default_factory=self._default_factory, hash_func=self._hash_func)
        clone.assign(self)
        return clone

    def __copy__(self) -> HashTable[K, V]:  # pragma: no cover - simple
        return self.copy()

    # -----------------------------
    # Iteration helpers
    # -----------------------------
    def begin(self) -> Cursor[K, V]:
        """Cursor at the first entry of the first non-empty bucket (or end)."""
        return Cursor.begin(self)

    def end(self) -> Cursor[K, V]:
        """Past-the-end cursor, positioned at ``(capacity, 0)``."""
        return Cursor.end(self)

    def items(self) -> Iterator[Tuple[K, V]]:
        return self.begin()

    def keys(self) -> Iterator[K]:
        for k, _ in self.items():
            yield k

    def values(self) -> Iterator[V]:
        for _, v in self.items():
            yield v

    # -----------------------------
    # Standard magic methods
    # -----------------------------
    def __getitem__(self, key: K) -> V:
        """Return the value for *key*, inserting a default one if missing.

        Without a ``default_factory`` nothing is inserted and a missing key
        raises :class:`KeyNotFound`.
        """
        entry = self._find(key)
        if entry is None:
            if self._default_factory is None:
                raise KeyNotFound(key)
            self.insert(key, self._default_factory())
            # Look it up again: the insert may have resized the table.
            entry = self._require(key)
        return entry.value

    def __setitem__(self, key: K, value: V) -> None:
        """Overwrite the value of an existing key, or insert a new one."""
        entry = self._find(key)
        if entry is None:
            self.insert(key, value)
        else:
            entry.value = value

    def __delitem__(self, key: K) -> None:
        if not self.erase(key):
            raise KeyNotFound(key)

    def __contains__(self, key: K) -> bool:  # pragma: no cover - trivial
        return self.contains_key(key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HashTable):
            return NotImplemented
        if self._size != other._size:
            return False
        for bucket in self._buckets:
            for entry in bucket:
                found = other._find(entry.key)
                if found is None or found.value != entry.value:
                    return False
        return True

    __hash__ = None  # type: ignore[assignment]

    def __len__(self) -> int:  # pragma: no cover - trivial
        return self._size

    def __bool__(self) -> bool:  # pragma: no cover - trivial
        return self._size != 0

    def __iter__(self) -> Iterator[K]:  # pragma: no cover - simple
        return self.keys()

    def __repr__(self) -> str:  # pragma: no cover - trivial
        pairs = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"HashTable({{{pairs}}})"
