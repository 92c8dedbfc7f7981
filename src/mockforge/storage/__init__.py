"""In-memory storage for mockforge records."""

from mockforge.storage.memory import Collection, InMemoryStore, coerce_id

__all__ = [
    "Collection",
    "InMemoryStore",
    "coerce_id",
]
