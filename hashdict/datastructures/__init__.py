from .bucket import Bucket, Entry
from .cursor import Cursor
from .hash_table import HashTable
from .dictionary import StringDictionary

__all__ = [
    "Bucket",
    "Entry",
    "Cursor",
    "HashTable",
    "StringDictionary",
]
