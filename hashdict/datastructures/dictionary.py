from __future__ import annotations
import logging
from typing import Any, Iterable, Iterator, Optional, Tuple

from ..errors import KeyNotFound
from .cursor import Cursor
from .hash_table import HashTable

logger = logging.getLogger(__name__)


class StringDictionary:
    """A string-to-string table built on :class:`HashTable`.

    Wraps a ``HashTable[str, str]`` (composition, not inheritance) and
    forwards its operations, with two differences:

    - ``erase`` of a missing key raises :class:`KeyNotFound` instead of
      returning False.
    - ``update`` applies a batch of pairs with assignment semantics, so the
      last value for a repeated key wins.

    Missing keys read through ``d[key]`` are created with an empty string.
    """

    __slots__ = ("_table",)

    def __init__(self, keys: Optional[Iterable[str]] = None, values: Optional[Iterable[str]] = None) -> None:
        self._table: HashTable[str, str] = HashTable(keys, values, default_factory=str)

    # -----------------------------
    # Narrowed / added operations
    # -----------------------------
    def erase(self, key: str) -> bool:
        """Remove *key*; always returns True.

        Raises:
            KeyNotFound: if the key is absent.
        """
        if not self._table.erase(key):
            raise KeyNotFound(key)
        return True

    def update(self, pairs: Any) -> None:
        """Set every ``(key, value)`` from *pairs*, overwriting existing keys.

        Accepts an iterable of pairs or anything exposing ``items()``
        (a ``dict``, another dictionary, a ``HashTable``).
        """
        if hasattr(pairs, "items"):
            pairs = pairs.items()
        # Unpack every pair before the first write.
        batch = [(k, v) for k, v in pairs]
        for k, v in batch:
            self._table[k] = v
        logger.debug("Applied %d pairs; dictionary now holds %d keys", len(batch), self._table.size())

    # -----------------------------
    # Forwarded operations
    # -----------------------------
    def insert(self, key: str, value: str) -> bool:
        return self._table.insert(key, value)

    def contains_key(self, key: str) -> bool:
        return self._table.contains_key(key)

    def at(self, key: str) -> str:
        return self._table.at(key)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._table.get(key, default)

    def clear(self) -> None:
        self._table.clear()

    def size(self) -> int:
        return self._table.size()

    def capacity(self) -> int:
        return self._table.capacity()

    def empty(self) -> bool:
        return self._table.empty()

    def load_factor(self) -> float:
        return self._table.load_factor()

    def bucket_size(self, key: str) -> int:
        return self._table.bucket_size(key)

    def bucket_index(self, key: str) -> int:
        return self._table.bucket_index(key)

    def begin(self) -> Cursor[str, str]:
        return self._table.begin()

    def end(self) -> Cursor[str, str]:
        return self._table.end()

    def items(self) -> Iterator[Tuple[str, str]]:
        return self._table.items()

    def keys(self) -> Iterator[str]:
        return self._table.keys()

    def values(self) -> Iterator[str]:
        return self._table.values()

    def assign(self, other: StringDictionary) -> None:
        self._table.assign(other._table)

    def copy(self) -> StringDictionary:
        clone = StringDictionary()
        clone._table.assign(self._table)
        return clone

    def to_py(self) -> dict[str, str]:
        """Convert to a native *dict*."""
        return dict(self._table.items())

    # -----------------------------
    # Standard magic methods
    # -----------------------------
    def __getitem__(self, key: str) -> str:
        return self._table[key]

    def __setitem__(self, key: str, value: str) -> None:
        self._table[key] = value

    def __delitem__(self, key: str) -> None:
        self.erase(key)

    def __contains__(self, key: str) -> bool:  # pragma: no cover - trivial
        return self._table.contains_key(key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StringDictionary):
            return NotImplemented
        return self._table == other._table

    __hash__ = None  # type: ignore[assignment]

    def __copy__(self) -> StringDictionary:  # pragma: no cover - simple
        return self.copy()

    def __len__(self) -> int:  # pragma: no cover - trivial
        return len(self._table)

    def __bool__(self) -> bool:  # pragma: no cover - trivial
        return bool(self._table)

    def __iter__(self) -> Iterator[str]:  # pragma: no cover - simple
        return iter(self._table)

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"StringDictionary({self.to_py()!r})"
