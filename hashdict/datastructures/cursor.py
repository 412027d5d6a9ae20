from __future__ import annotations
from typing import TYPE_CHECKING, Generic, Iterator, Tuple, TypeVar

from ..errors import CursorInvalidated

if TYPE_CHECKING:  # pragma: no cover - import for type hints only
    from .hash_table import HashTable

K = TypeVar("K")
V = TypeVar("V")


class Cursor(Generic[K, V]):
    """Forward-only position over the buckets of a :class:`HashTable`.

    A cursor is the pair ``(bucket index, position within that bucket)``
    plus a non-owning reference to its table. The end position is
    ``(capacity, 0)``. Order is bucket order, then append order inside a
    bucket; it says nothing about insertion time.

    The cursor remembers the table's generation when it was created. Once
    the table is structurally mutated the cursor is stale and any further
    use raises :class:`CursorInvalidated`.

    Cursors also follow the iterator protocol: ``next(cursor)`` returns the
    current ``(key, value)`` pair and advances.
    """

    __slots__ = ("_table", "_bucket_index", "_position", "_generation")

    def __init__(self, table: HashTable[K, V], bucket_index: int, position: int = 0) -> None:
        self._table = table
        self._bucket_index = bucket_index
        self._position = position
        self._generation = table._generation

    @classmethod
    def begin(cls, table: HashTable[K, V]) -> Cursor[K, V]:
        return cls(table, cls._skip_empty(table, 0), 0)

    @classmethod
    def end(cls, table: HashTable[K, V]) -> Cursor[K, V]:
        return cls(table, table._cap, 0)

    # -----------------------------
    # Internal helpers
    # -----------------------------
    @staticmethod
    def _skip_empty(table: HashTable[K, V], index: int) -> int:
        """Return the first index >= *index* holding a non-empty bucket, or capacity."""
        buckets = table._buckets
        while index < table._cap and not buckets[index]:
            index += 1
        return index

    def _check_valid(self) -> None:
        if self._generation != self._table._generation:
            raise CursorInvalidated("hash table was structurally modified after this cursor was created")

    def _is_end(self) -> bool:
        return self._bucket_index >= self._table._cap

    # -----------------------------
    # Position
    # -----------------------------
    @property
    def bucket_index(self) -> int:
        return self._bucket_index

    @property
    def position(self) -> int:
        return self._position

    @property
    def at_end(self) -> bool:
        self._check_valid()
        return self._is_end()

    def advance(self) -> Cursor[K, V]:
        """Step to the next entry, skipping empty buckets. No-op at end."""
        self._check_valid()
        if self._is_end():
            return self
        self._position += 1
        if self._position >= len(self._table._buckets[self._bucket_index]):
            self._position = 0
            self._bucket_index = self._skip_empty(self._table, self._bucket_index + 1)
        return self

    def copy(self) -> Cursor[K, V]:
        clone: Cursor[K, V] = Cursor(self._table, self._bucket_index, self._position)
        # A copy of a stale cursor stays stale.
        clone._generation = self._generation
        return clone

    # -----------------------------
    # Dereference
    # -----------------------------
    @property
    def entry(self) -> Tuple[K, V]:
        """Read-only ``(key, value)`` pair under the cursor.

        Raises:
            IndexError: if the cursor is at the end position.
            CursorInvalidated: if the table changed structurally.
        """
        self._check_valid()
        if self._is_end():
            raise IndexError("cannot dereference the end cursor")
        return self._table._buckets[self._bucket_index].entry_at(self._position).as_pair()

    @property
    def key(self) -> K:
        return self.entry[0]

    @property
    def value(self) -> V:
        return self.entry[1]

    # -----------------------------
    # Standard magic methods
    # -----------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cursor):
            return NotImplemented
        return (
            self._table is other._table
            and self._bucket_index == other._bucket_index
            and self._position == other._position
        )

    __hash__ = None  # type: ignore[assignment]

    def __iter__(self) -> Iterator[Tuple[K, V]]:  # pragma: no cover - trivial
        return self

    def __next__(self) -> Tuple[K, V]:
        self._check_valid()
        if self._is_end():
            raise StopIteration
        pair = self.entry
        self.advance()
        return pair

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"Cursor(bucket={self._bucket_index}, position={self._position})"
