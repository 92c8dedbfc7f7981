"""Model and factory registries.

Both registries are keyed by canonical (snake_case, singular) name and are
filled once while a server is set up. Nothing is ever unregistered.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from mockforge.core.model import Model, belongs_to, has_many
from mockforge.core.types import (
    ModelSpec,
    NormalizedName,
    RelationshipKind,
    RelationshipSpec,
    ResolvedType,
    TypeKind,
)
from mockforge.exceptions import (
    FactoryAlreadyRegisteredError,
    ModelAlreadyRegisteredError,
    ModelOrFactoryNotFoundError,
    ValidationError,
)
from mockforge.naming.inflector import underscore
from mockforge.schema.factory import Factory


class ModelRegistry:
    """Canonical name -> model class and its relationship declarations."""

    def __init__(self, singularize: Callable[[str], str]) -> None:
        """Initialize model registry.

        Args:
            singularize: Maps a has_many relationship name to its target name
        """
        self._singularize = singularize
        self._classes: dict[str, type[Model]] = {}
        self._specs: dict[str, ModelSpec] = {}

    def register(self, name: str, model_class: type[Model] = Model) -> ModelSpec:
        """Register a model class under ``name``.

        Returns:
            The ModelSpec with relationship defaults filled in

        Raises:
            ModelAlreadyRegisteredError: If the name is taken
        """
        canonical = underscore(name)
        if canonical in self._specs:
            raise ModelAlreadyRegisteredError(canonical)

        spec = ModelSpec(
            name=canonical,
            relationships=[self._complete(r) for r in model_class.declared_relationships()],
        )
        self._classes[canonical] = model_class
        self._specs[canonical] = spec
        return spec

    def register_spec(self, spec: ModelSpec) -> ModelSpec:
        """Register a model described as data, generating its class."""
        namespace: dict[str, Any] = {}
        for relationship in spec.relationships:
            if relationship.kind == RelationshipKind.BELONGS_TO:
                namespace[relationship.name] = belongs_to(
                    relationship.target, foreign_key=relationship.foreign_key
                )
            else:
                namespace[relationship.name] = has_many(
                    relationship.target, inverse=relationship.inverse
                )
        class_name = "".join(part.title() for part in underscore(spec.name).split("_"))
        model_class = type(class_name, (Model,), namespace)
        return self.register(spec.name, model_class)

    def _complete(self, spec: RelationshipSpec) -> RelationshipSpec:
        if spec.kind == RelationshipKind.BELONGS_TO:
            return spec.model_copy(
                update={
                    "target": underscore(spec.target or spec.name),
                    "foreign_key": spec.foreign_key or f"{spec.name}_id",
                }
            )
        target = spec.target or self._singularize(spec.name)
        return spec.model_copy(update={"target": underscore(target)})

    def spec(self, name: str) -> ModelSpec | None:
        return self._specs.get(name)

    def model_class(self, name: str) -> type[Model]:
        return self._classes.get(name, Model)

    def names(self) -> list[str]:
        return list(self._specs)

    def __contains__(self, name: object) -> bool:
        return name in self._specs


class FactoryRegistry:
    """Canonical name -> Factory."""

    def __init__(self) -> None:
        self._factories: dict[str, Factory] = {}

    def register(self, name: str, factory: Factory) -> str:
        """Register a factory under ``name``.

        Returns:
            The canonical name

        Raises:
            FactoryAlreadyRegisteredError: If the name is taken
            ValidationError: If the factory generates a reserved record attribute
        """
        canonical = underscore(name)
        if canonical in self._factories:
            raise FactoryAlreadyRegisteredError(canonical)

        reserved = sorted(factory.generated_names & Model.RESERVED_ATTRIBUTES)
        if reserved:
            raise ValidationError(
                f"Factory '{canonical}' generates reserved attribute names: "
                f"{', '.join(reserved)}. Rename them; records expose these names themselves.",
                {"factory": canonical, "reserved": reserved},
            )
        self._factories[canonical] = factory
        return canonical

    def get(self, name: str) -> Factory | None:
        return self._factories.get(name)

    def attributes_for(self, name: str, index: int, traits: Iterable[str] = ()) -> dict[str, Any]:
        """Generated attributes for one record, or ``{}`` when no factory exists."""
        factory = self._factories.get(name)
        if factory is None:
            return {}
        return factory.build(index, traits, factory_name=name)

    def names(self) -> list[str]:
        return list(self._factories)

    def __contains__(self, name: object) -> bool:
        return name in self._factories


def resolve_type(
    models: ModelRegistry,
    factories: FactoryRegistry,
    normalized: NormalizedName,
    method: str,
) -> ResolvedType:
    """Tag a normalized name with what is registered for it.

    Raises:
        ModelOrFactoryNotFoundError: If neither a model nor a factory exists.
            The message names the originally requested name.
    """
    name = normalized.canonical
    has_model = name in models
    has_factory = name in factories

    if has_model and has_factory:
        kind = TypeKind.MODEL_AND_FACTORY
    elif has_model:
        kind = TypeKind.MODEL_ONLY
    elif has_factory:
        kind = TypeKind.FACTORY_ONLY
    else:
        available = sorted(set(models.names()) | set(factories.names()))
        raise ModelOrFactoryNotFoundError(method, normalized.requested, available)

    return ResolvedType(name=name, requested=normalized.requested, kind=kind)
