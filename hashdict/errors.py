"""Exception types raised by the hash table and the string dictionary."""

from __future__ import annotations

from typing import Any

NO_KEY_FOUND = "The key does not exist in the hash table"
DIFFERENT_LENGTHS = "Cannot build a table from key and value sequences of different lengths"


class KeyNotFound(KeyError):
    """Raised when a lookup-style accessor is asked for a key that is absent.

    Subclasses :class:`KeyError` so callers using plain mapping idioms
    (``except KeyError``) keep working.
    """

    def __init__(self, key: Any, message: str = NO_KEY_FOUND) -> None:
        super().__init__(key)
        self.key = key
        self.message = message

    def __str__(self) -> str:
        return f"{self.message}: {self.key!r}"


class LengthMismatch(ValueError):
    """Raised by the parallel-sequence constructor when lengths differ."""

    def __init__(self, keys_len: int, values_len: int) -> None:
        super().__init__(f"{DIFFERENT_LENGTHS} (keys={keys_len}, values={values_len})")
        self.keys_len = keys_len
        self.values_len = values_len


class CursorInvalidated(RuntimeError):
    """Raised when a cursor is used after its table was structurally mutated."""
