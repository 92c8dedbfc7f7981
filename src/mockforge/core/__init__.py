"""Core components for mockforge."""

from mockforge.core.types import (
    CollectionInfo,
    ModelSpec,
    NormalizedName,
    RelationshipKind,
    RelationshipSpec,
    ResolvedType,
    SchemaInfo,
    StoreInfo,
    TypeInfo,
    TypeKind,
)

__all__ = [
    "CollectionInfo",
    "ModelSpec",
    "NormalizedName",
    "RelationshipKind",
    "RelationshipSpec",
    "ResolvedType",
    "SchemaInfo",
    "StoreInfo",
    "TypeInfo",
    "TypeKind",
]
