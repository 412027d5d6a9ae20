from __future__ import annotations
import copy
from typing import Generic, Iterator, List, Optional, Tuple, TypeVar

K = TypeVar("K")
V = TypeVar("V")


class Entry(Generic[K, V]):
    """A single (key, value) pair stored in a bucket.

    The key is fixed at construction; only the value may be replaced.
    """

    __slots__ = ("_key", "value")

    def __init__(self, key: K, value: V) -> None:
        self._key = key
        self.value = value

    @property
    def key(self) -> K:
        return self._key

    def as_pair(self) -> Tuple[K, V]:
        """Return a read-only ``(key, value)`` snapshot."""
        return (self._key, self.value)

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"Entry({self._key!r}, {self.value!r})"


class Bucket(Generic[K, V]):
    """One collision chain of a separate-chaining hash table.

    Entries keep their append order; removing an entry closes the gap so
    positions stay dense (0 .. len-1), which is what cursors index into.
    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: List[Entry[K, V]] = []

    def find(self, key: K) -> Optional[Entry[K, V]]:
        """Return the entry holding *key*, or None if not present."""
        for entry in self._entries:
            if entry.key == key:
                return entry
        return None

    def append_if_absent(self, key: K, value: V) -> bool:
        """Append ``(key, value)`` at the end unless *key* is already present.

        Returns True if a new entry was appended; False if the key existed
        (its value is left untouched).
        """
        if self.find(key) is not None:
            return False
        self._entries.append(Entry(key, value))
        return True

    def remove(self, key: K) -> bool:
        """Delete the entry with *key* if present; return True if deleted, else False."""
        for i, entry in enumerate(self._entries):
            if entry.key == key:
                del self._entries[i]
                return True
        return False

    def clear(self) -> None:
        self._entries.clear()

    def copy(self) -> Bucket[K, V]:
        """Return an independent bucket with fresh entries in the same order.

        Values are deep-copied so in-place changes never leak between copies.
        """
        clone: Bucket[K, V] = Bucket()
        clone._entries = [Entry(e.key, copy.deepcopy(e.value)) for e in self._entries]
        return clone

    def entry_at(self, position: int) -> Entry[K, V]:
        """Return the entry at *position* (0-based, append order)."""
        return self._entries[position]

    def items(self) -> Iterator[Tuple[K, V]]:
        """Yield (key, value) pairs in append order."""
        for entry in self._entries:
            yield entry.as_pair()

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __iter__(self) -> Iterator[Entry[K, V]]:
        return iter(self._entries)

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"Bucket({[e.as_pair() for e in self._entries]!r})"
