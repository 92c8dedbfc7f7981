"""In-memory record store.

One ordered collection per canonical model name. Rows are plain dicts with an
integer ``id`` assigned by the collection; they are deep-copied on the way in
and on the way out so nothing outside the store can mutate stored state,
nested lists and dicts included.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterator
from typing import Any

from mockforge.core.types import CollectionInfo, StoreInfo
from mockforge.exceptions import RecordNotFoundError, ValidationError

logger = logging.getLogger(__name__)


class Collection:
    """Ordered rows of one model, in identity order.

    A Collection is a live view: holding on to it and iterating later sees
    rows inserted in the meantime.
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self._rows: list[dict[str, Any]] = []
        self._index: dict[int, dict[str, Any]] = {}
        self._last_id = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def last_id(self) -> int | None:
        return self._last_id or None

    @property
    def next_id(self) -> int:
        return self._last_id + 1

    def insert(self, attrs: dict[str, Any]) -> dict[str, Any]:
        """Append a row and assign its identity.

        Args:
            attrs: Row attributes (must not contain ``id``)

        Returns:
            Copy of the stored row, ``id`` first
        """
        if "id" in attrs:
            raise ValidationError(
                f"Cannot insert into '{self._name}' with an explicit id. "
                "Identities are assigned by the store.",
                {"collection": self._name, "id": attrs["id"]},
            )

        self._last_id += 1
        row = {"id": self._last_id, **copy.deepcopy(attrs)}
        self._rows.append(row)
        self._index[row["id"]] = row
        return copy.deepcopy(row)

    def find(self, record_id: Any) -> dict[str, Any] | None:
        """Find a row by identity."""
        row = self._index.get(coerce_id(record_id))
        return copy.deepcopy(row) if row is not None else None

    def where(self, **criteria: Any) -> list[dict[str, Any]]:
        """Rows whose fields equal all given values, in identity order."""
        return [
            copy.deepcopy(row)
            for row in self._rows
            if all(row.get(field) == value for field, value in criteria.items())
        ]

    def update(self, record_id: Any, changes: dict[str, Any]) -> dict[str, Any]:
        """Overwrite fields of an existing row.

        Raises:
            RecordNotFoundError: If the row does not exist
            ValidationError: If changes try to rewrite the identity
        """
        row = self._index.get(coerce_id(record_id))
        if row is None:
            raise RecordNotFoundError(record_id, self._name)
        if "id" in changes and changes["id"] != row["id"]:
            raise ValidationError(
                f"Cannot change the id of a record in '{self._name}'.",
                {"collection": self._name, "id": row["id"]},
            )
        row.update(copy.deepcopy(changes))
        return copy.deepcopy(row)

    def ids(self) -> list[int]:
        return [row["id"] for row in self._rows]

    def to_list(self) -> list[dict[str, Any]]:
        return [copy.deepcopy(row) for row in self._rows]

    def __iter__(self) -> Iterator[dict[str, Any]]:
        # Iterate by position so rows appended mid-iteration are still seen
        position = 0
        while position < len(self._rows):
            yield copy.deepcopy(self._rows[position])
            position += 1

    def __len__(self) -> int:
        return len(self._rows)

    def __getitem__(self, index: int) -> dict[str, Any]:
        return copy.deepcopy(self._rows[index])

    def __repr__(self) -> str:
        return f"Collection({self._name!r}, records={len(self._rows)})"


def coerce_id(record_id: Any) -> Any:
    """Accept "3" as well as 3, the way ids arrive from URLs and JSON."""
    if isinstance(record_id, str) and record_id.isdigit():
        return int(record_id)
    return record_id


class InMemoryStore:
    """All collections of one server session."""

    def __init__(self) -> None:
        self._collections: dict[str, Collection] = {}

    def collection(self, name: str) -> Collection:
        """Get the live collection for a canonical name, creating it if needed."""
        collection = self._collections.get(name)
        if collection is None:
            collection = Collection(name)
            self._collections[name] = collection
        return collection

    def insert(self, name: str, attrs: dict[str, Any]) -> dict[str, Any]:
        row = self.collection(name).insert(attrs)
        logger.debug("Inserted %s #%s", name, row["id"])
        return row

    def by_id(self, name: str, record_id: Any) -> dict[str, Any] | None:
        if record_id is None or name not in self._collections:
            return None
        return self._collections[name].find(record_id)

    def where(self, name: str, **criteria: Any) -> list[dict[str, Any]]:
        if name not in self._collections:
            return []
        return self._collections[name].where(**criteria)

    def update(self, name: str, record_id: Any, changes: dict[str, Any]) -> dict[str, Any]:
        if name not in self._collections:
            raise RecordNotFoundError(record_id, name)
        return self._collections[name].update(record_id, changes)

    def count(self, name: str) -> int:
        """Number of rows in a collection; 0 for one never written to."""
        collection = self._collections.get(name)
        return len(collection) if collection is not None else 0

    def names(self) -> list[str]:
        return list(self._collections)

    def describe(self) -> StoreInfo:
        """Summarize every collection."""
        collections = {
            name: CollectionInfo(name=name, record_count=len(c), last_id=c.last_id)
            for name, c in self._collections.items()
        }
        return StoreInfo(
            collections=collections,
            total_records=sum(info.record_count for info in collections.values()),
        )

    def clear(self) -> None:
        """Discard every collection."""
        self._collections.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._collections
