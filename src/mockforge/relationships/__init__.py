"""Relationship resolution for mockforge."""

from mockforge.relationships.resolver import RelationshipResolver

__all__ = ["RelationshipResolver"]
