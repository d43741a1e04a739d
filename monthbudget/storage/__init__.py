"""Mini README: Persistence for month records.

The ``store`` module exposes the MonthStore used by sessions and interfaces;
``backends`` holds the JSON file and in-memory mappings it writes through.
"""

from .backends import InMemoryStorage, JsonFileStorage, MappingStorage
from .store import MonthStore, store_from_settings

__all__ = [
    "InMemoryStorage",
    "JsonFileStorage",
    "MappingStorage",
    "MonthStore",
    "store_from_settings",
]
