"""Relationship resolution between records.

Only belongs_to relationships are stored, as a foreign-key field on the
owning row. has_many relationships are always computed by scanning the
target collection, so the two sides cannot drift apart.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from mockforge.core.model import Model, RecordCollection
from mockforge.core.types import RelationshipKind, RelationshipSpec
from mockforge.exceptions import (
    InverseRelationshipError,
    RecordNotFoundError,
    RelationshipNotFoundError,
)
from mockforge.schema.registry import ModelRegistry
from mockforge.storage.memory import InMemoryStore, coerce_id

logger = logging.getLogger(__name__)

# has_many overrides waiting for the owner's id: (relationship, child ids)
PendingChildren = list[tuple[RelationshipSpec, list[Any]]]


class RelationshipResolver:
    """Writes foreign keys on create and reads relationships on access."""

    def __init__(
        self,
        models: ModelRegistry,
        store: InMemoryStore,
        instantiate: Callable[[str, dict[str, Any]], Model],
    ) -> None:
        """Initialize resolver.

        Args:
            models: Registry holding relationship declarations
            store: Store the relationships point into
            instantiate: Wraps a stored row into a model instance
        """
        self._models = models
        self._store = store
        self._instantiate = instantiate

    def resolve(self, name: str, attrs: dict[str, Any]) -> dict[str, Any]:
        """Turn belongs_to overrides into foreign-key fields.

        A Model passed under the relationship name contributes its id; a raw
        value under either the relationship name or the foreign-key field is
        used as the id, with numeric strings stored as int so by-id lookups
        and foreign-key scans agree. Unset foreign keys are stored as None.
        The input dict is not modified.
        """
        resolved = dict(attrs)
        spec = self._models.spec(name)
        if spec is None:
            return resolved

        for relationship in spec.belongs_to:
            fk = relationship.foreign_key
            if relationship.name in resolved:
                value = resolved.pop(relationship.name)
                value = value.id if isinstance(value, Model) else value
            else:
                value = resolved.get(fk)
            resolved[fk] = coerce_id(value)
        return resolved

    def split_children(
        self, name: str, attrs: dict[str, Any]
    ) -> tuple[dict[str, Any], PendingChildren]:
        """Separate has_many overrides from the attributes to store.

        Children are validated here, before anything is inserted.

        Raises:
            RecordNotFoundError: If a child does not exist
            InverseRelationshipError: If the child foreign key is ambiguous
        """
        remaining = dict(attrs)
        pending: PendingChildren = []
        spec = self._models.spec(name)
        if spec is None:
            return remaining, pending

        for relationship in spec.has_many:
            if relationship.name not in remaining:
                continue
            value = remaining.pop(relationship.name) or []
            self.inverse_foreign_key(name, relationship)
            child_ids = [
                child.id if isinstance(child, Model) else coerce_id(child) for child in value
            ]
            for child_id in child_ids:
                if self._store.by_id(relationship.target, child_id) is None:
                    raise RecordNotFoundError(child_id, relationship.target)
            pending.append((relationship, child_ids))
        return remaining, pending

    def link_children(self, name: str, owner_id: int, pending: PendingChildren) -> None:
        """Point each pending child's foreign key at the new owner."""
        for relationship, child_ids in pending:
            fk = self.inverse_foreign_key(name, relationship)
            for child_id in child_ids:
                self._store.update(relationship.target, child_id, {fk: owner_id})
                logger.debug(
                    "Linked %s #%s to %s #%s", relationship.target, child_id, name, owner_id
                )

    def read(self, record: Model, relationship_name: str) -> Model | RecordCollection | None:
        """Value of a relationship accessor on ``record``."""
        spec = self._models.spec(record.model_name)
        relationship = spec.relationship(relationship_name) if spec else None
        if relationship is None:
            available = [r.name for r in spec.relationships] if spec else []
            raise RelationshipNotFoundError(relationship_name, record.model_name, available)

        if relationship.kind == RelationshipKind.BELONGS_TO:
            return self.parent(record, relationship)
        return self.children(record, relationship)

    def parent(self, record: Model, relationship: RelationshipSpec) -> Model | None:
        """Record referenced by a belongs_to foreign key, read from the store."""
        row = self._store.by_id(record.model_name, record.id) or record.attrs
        target_row = self._store.by_id(relationship.target, row.get(relationship.foreign_key))
        if target_row is None:
            return None
        return self._instantiate(relationship.target, target_row)

    def children(self, record: Model, relationship: RelationshipSpec) -> RecordCollection:
        """Records whose foreign key points at ``record``, in creation order."""
        fk = self.inverse_foreign_key(record.model_name, relationship)
        rows = self._store.where(relationship.target, **{fk: record.id})
        return RecordCollection(
            relationship.target, [self._instantiate(relationship.target, row) for row in rows]
        )

    def inverse_foreign_key(self, source: str, relationship: RelationshipSpec) -> str:
        """Foreign-key field on the target that a has_many relationship scans.

        Uses the explicit ``inverse`` when given, otherwise the single
        belongs_to on the target pointing back at ``source``, otherwise
        ``"{source}_id"``.
        """
        target_spec = self._models.spec(relationship.target)
        back_references = target_spec.belongs_to if target_spec else []

        if relationship.inverse:
            for candidate in back_references:
                if candidate.name == relationship.inverse:
                    return candidate.foreign_key
            raise RelationshipNotFoundError(
                relationship.inverse, relationship.target, [r.name for r in back_references]
            )

        candidates = [r for r in back_references if r.target == source]
        if len(candidates) > 1:
            raise InverseRelationshipError(
                relationship.name, source, [r.name for r in candidates]
            )
        if candidates:
            return candidates[0].foreign_key
        return f"{source}_id"
