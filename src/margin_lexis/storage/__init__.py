"""Storage backends for the vocabulary stat table."""

from .backends import InMemoryStatStore, JsonStatStore, StatStore
from .loader import open_stat_store

__all__ = [
    "StatStore",
    "InMemoryStatStore",
    "JsonStatStore",
    "open_stat_store",
]
