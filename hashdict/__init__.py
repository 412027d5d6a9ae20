"""hashdict: a separate-chaining hash table with automatic resizing."""

from .datastructures import Cursor, HashTable, StringDictionary
from .errors import CursorInvalidated, KeyNotFound, LengthMismatch

__version__ = "0.1.0"

__all__ = [
    "Cursor",
    "HashTable",
    "StringDictionary",
    "CursorInvalidated",
    "KeyNotFound",
    "LengthMismatch",
]
