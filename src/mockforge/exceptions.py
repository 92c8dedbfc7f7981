"""Custom exceptions for mockforge.

Every error carries a human-readable message plus a context dict so callers
(test suites, the CLI) can render it or inspect it programmatically.
"""

from __future__ import annotations

from typing import Any


class MockForgeError(Exception):
    """Base exception for all mockforge errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """Return error as JSON-serializable dict."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
        }


class ModelOrFactoryNotFoundError(MockForgeError):
    """Neither a model nor a factory is registered for the requested name."""

    def __init__(
        self, method: str, requested_name: str, available: list[str] | None = None
    ) -> None:
        available = available or []
        message = (
            f"You called server.{method}('{requested_name}') "
            "but no model or factory was found."
        )
        super().__init__(
            message,
            {"method": method, "requested_name": requested_name, "available": available},
        )
        self.method = method
        self.requested_name = requested_name
        self.available = available


class ModelAlreadyRegisteredError(MockForgeError):
    """A model is already registered under this canonical name."""

    def __init__(self, name: str) -> None:
        message = (
            f"Model '{name}' is already registered. "
            "Models are fixed for the lifetime of a server; create a new server instead."
        )
        super().__init__(message, {"name": name})
        self.name = name


class FactoryAlreadyRegisteredError(MockForgeError):
    """A factory is already registered under this canonical name."""

    def __init__(self, name: str) -> None:
        message = (
            f"Factory '{name}' is already registered. "
            "Use Factory.extend() to derive a variant under a different name."
        )
        super().__init__(message, {"name": name})
        self.name = name


class TraitNotFoundError(MockForgeError):
    """Trait is not defined on the factory."""

    def __init__(self, trait: str, factory_name: str, available: list[str] | None = None) -> None:
        available = available or []
        if available:
            message = (
                f"Trait '{trait}' not found on factory '{factory_name}'. "
                f"Available traits: {', '.join(available)}"
            )
        else:
            message = f"Trait '{trait}' not found on factory '{factory_name}'. No traits defined."
        super().__init__(
            message, {"trait": trait, "factory_name": factory_name, "available": available}
        )
        self.trait = trait
        self.factory_name = factory_name
        self.available = available


class RelationshipNotFoundError(MockForgeError):
    """Relationship does not exist on a model."""

    def __init__(
        self,
        relationship_name: str,
        model_name: str,
        available_relationships: list[str] | None = None,
    ) -> None:
        available = available_relationships or []
        if available:
            message = (
                f"Relationship '{relationship_name}' not found on '{model_name}'. "
                f"Available relationships: {', '.join(available)}"
            )
        else:
            message = (
                f"Relationship '{relationship_name}' not found on '{model_name}'. "
                "No relationships defined."
            )

        super().__init__(
            message,
            {
                "relationship_name": relationship_name,
                "model_name": model_name,
                "available_relationships": available,
            },
        )
        self.relationship_name = relationship_name
        self.model_name = model_name
        self.available_relationships = available


class InvalidRelationshipTypeError(MockForgeError):
    """Invalid relationship kind specified."""

    VALID_TYPES = ["belongs_to", "has_many"]

    def __init__(self, relationship_type: str) -> None:
        message = (
            f"Invalid relationship type '{relationship_type}'. "
            f"Valid types: {', '.join(self.VALID_TYPES)}"
        )
        super().__init__(
            message, {"relationship_type": relationship_type, "valid_types": self.VALID_TYPES}
        )
        self.relationship_type = relationship_type


class InverseRelationshipError(MockForgeError):
    """The foreign key behind a has_many relationship cannot be determined."""

    def __init__(self, relationship_name: str, model_name: str, candidates: list[str]) -> None:
        message = (
            f"Relationship '{relationship_name}' on '{model_name}' matches several "
            f"belongs_to relationships ({', '.join(candidates)}). "
            "Pass inverse=... to pick one."
        )
        super().__init__(
            message,
            {
                "relationship_name": relationship_name,
                "model_name": model_name,
                "candidates": candidates,
            },
        )
        self.relationship_name = relationship_name
        self.model_name = model_name
        self.candidates = candidates


class RecordNotFoundError(MockForgeError):
    """Record with given ID does not exist."""

    def __init__(self, record_id: Any, model_name: str) -> None:
        message = f"Record '{record_id}' not found in '{model_name}'."
        super().__init__(message, {"record_id": record_id, "model_name": model_name})
        self.record_id = record_id
        self.model_name = model_name


class ValidationError(MockForgeError):
    """Caller input failed validation."""

    pass


class SchemaFileError(MockForgeError):
    """Schema file could not be read or validated."""

    def __init__(self, path: str, reason: str) -> None:
        message = f"Invalid schema file '{path}': {reason}"
        super().__init__(message, {"path": path, "reason": reason})
        self.path = path
        self.reason = reason
