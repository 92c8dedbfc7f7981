"""Core types and specifications for mockforge.

All types are pydantic models so definitions loaded from a schema file and
definitions declared in Python share one validated shape.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RelationshipKind(StrEnum):
    """Relationship kinds a model can declare."""

    BELONGS_TO = "belongs_to"  # e.g., Post -> Author, stored as author_id on the post
    HAS_MANY = "has_many"  # e.g., Author -> Posts, computed from post.author_id

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid relationship kind values."""
        return [k.value for k in cls]


class TypeKind(StrEnum):
    """What is registered under a canonical name."""

    MODEL_ONLY = "model_only"
    FACTORY_ONLY = "factory_only"
    MODEL_AND_FACTORY = "model_and_factory"


class RelationshipSpec(BaseModel):
    """Specification for a relationship declaration.

    ``target`` and ``foreign_key`` are filled in by the model registry when
    they are not given explicitly.
    """

    name: str = Field(..., description="Relationship name (e.g., 'author' on Post)")
    kind: RelationshipKind = Field(
        default=RelationshipKind.BELONGS_TO, description="Relationship kind"
    )
    target: str | None = Field(default=None, description="Canonical name of the related model")
    foreign_key: str | None = Field(
        default=None,
        description="Field storing the FK (belongs_to only, '{name}_id' if not provided)",
    )
    inverse: str | None = Field(
        default=None,
        description="belongs_to on the target that points back (has_many only)",
    )

    model_config = ConfigDict(frozen=True)


class ModelSpec(BaseModel):
    """A registered model: canonical name plus ordered relationship declarations."""

    name: str
    relationships: list[RelationshipSpec] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def relationship(self, name: str) -> RelationshipSpec | None:
        """Return the relationship declared under ``name``, if any."""
        for spec in self.relationships:
            if spec.name == name:
                return spec
        return None

    @property
    def belongs_to(self) -> list[RelationshipSpec]:
        return [r for r in self.relationships if r.kind == RelationshipKind.BELONGS_TO]

    @property
    def has_many(self) -> list[RelationshipSpec]:
        return [r for r in self.relationships if r.kind == RelationshipKind.HAS_MANY]


class NormalizedName(BaseModel):
    """Result of name normalization."""

    requested: str
    canonical: str
    warning: str | None = None

    model_config = ConfigDict(frozen=True)


class ResolvedType(BaseModel):
    """Canonical name tagged with what is registered for it."""

    name: str
    requested: str
    kind: TypeKind

    model_config = ConfigDict(frozen=True)

    @property
    def has_model(self) -> bool:
        return self.kind in (TypeKind.MODEL_ONLY, TypeKind.MODEL_AND_FACTORY)

    @property
    def has_factory(self) -> bool:
        return self.kind in (TypeKind.FACTORY_ONLY, TypeKind.MODEL_AND_FACTORY)


class CollectionInfo(BaseModel):
    """Information about one store collection (output format)."""

    name: str
    record_count: int
    last_id: int | None = None


class StoreInfo(BaseModel):
    """Information about the whole store (output format)."""

    collections: dict[str, CollectionInfo]
    total_records: int


class TypeInfo(BaseModel):
    """Information about one registered type (output format)."""

    name: str
    kind: TypeKind
    relationships: list[RelationshipSpec] = Field(default_factory=list)
    attributes: list[str] = Field(default_factory=list)
    traits: list[str] = Field(default_factory=list)
    record_count: int = 0


class SchemaInfo(BaseModel):
    """Full schema information (output format)."""

    types: dict[str, TypeInfo]
    total_types: int
    total_records: int

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")
