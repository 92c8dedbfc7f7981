"""Main mockforge server: create and create_list."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from mockforge.config import ServerSettings
from mockforge.core.model import Model
from mockforge.core.reporting import NullReporter, Reporter
from mockforge.core.types import ResolvedType, SchemaInfo, TypeInfo
from mockforge.exceptions import TraitNotFoundError, ValidationError
from mockforge.naming.inflector import InflectPluralizer, Pluralizer
from mockforge.naming.resolver import NameResolver
from mockforge.relationships.resolver import RelationshipResolver
from mockforge.schema.factory import Factory
from mockforge.schema.registry import FactoryRegistry, ModelRegistry, resolve_type
from mockforge.storage.memory import Collection, InMemoryStore

logger = logging.getLogger(__name__)

# Method labels as they appear in error and warning messages
METHOD_CREATE = "create"
METHOD_CREATE_LIST = "createList"
METHOD_BUILD = "build"


class Database:
    """Live collections by model name.

    Accepts plural or singular names: ``server.db.posts``,
    ``server.db["posts"]`` and ``server.db["post"]`` are the same collection.
    Only registered models and factories have a collection; other names raise
    KeyError (AttributeError for attribute access).
    """

    def __init__(self, server: MockServer) -> None:
        self._server = server

    def __getitem__(self, name: str) -> Collection:
        canonical = self._server.names.normalize(name).canonical
        if not self._server._is_registered(canonical):
            raise KeyError(name)
        return self._server.store.collection(canonical)

    def __getattr__(self, name: str) -> Collection:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self[name]
        except KeyError:
            raise AttributeError(f"No model or factory named '{name}'") from None

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        return self._server.names.normalize(name).canonical in self._server.store

    def dump(self) -> dict[str, list[dict[str, Any]]]:
        """Every collection as plain rows, keyed by plural name."""
        store = self._server.store
        return {
            self._server.names.pluralize(name): store.collection(name).to_list()
            for name in store.names()
        }


class MockServer:
    """Creates mock records and keeps them in an in-memory store.

    Example:
        server = MockServer(
            models={"post": Post, "author": Author},
            factories={"author": Factory(name=sequence("Author {i}"))},
        )
        author = server.create("author")
        post = server.create("post", author=author)
        assert author.posts.ids == [post.id]
    """

    def __init__(
        self,
        models: Mapping[str, type[Model]] | None = None,
        factories: Mapping[str, Factory] | None = None,
        *,
        settings: ServerSettings | None = None,
        reporter: Reporter | None = None,
        pluralizer: Pluralizer | None = None,
    ) -> None:
        """Initialize server.

        Args:
            models: Model classes by name
            factories: Factories by name
            settings: Server settings
            reporter: Sink for advisory warnings (default: discard)
            pluralizer: Inflection rules (default: inflect-based)
        """
        self.settings = settings or ServerSettings()
        self.reporter: Reporter = reporter or NullReporter()
        self.pluralizer: Pluralizer = pluralizer or InflectPluralizer(
            self.settings.uncountable, self.settings.irregular
        )
        self.store = InMemoryStore()
        self.names = NameResolver(self.pluralizer, self._is_registered)
        self.models = ModelRegistry(self.names.singularize)
        self.factories = FactoryRegistry()
        self.relationships = RelationshipResolver(self.models, self.store, self._instantiate)
        self.db = Database(self)

        for name, model_class in (models or {}).items():
            self.models.register(name, model_class)
        for name, factory in (factories or {}).items():
            self.factories.register(name, factory)

    def _is_registered(self, name: str) -> bool:
        return name in self.models or name in self.factories

    def _instantiate(self, name: str, row: dict[str, Any]) -> Model:
        return self.models.model_class(name)(self, name, row)

    def resolve(self, model_name: str, method: str = METHOD_CREATE) -> ResolvedType:
        """Normalize a requested name and look up what is registered for it.

        Emits the normalization warning, if any, once.

        Raises:
            ModelOrFactoryNotFoundError: If neither a model nor a factory exists
        """
        normalized = self.names.normalize(model_name, method)
        resolved = resolve_type(self.models, self.factories, normalized, method)
        if normalized.warning:
            self.reporter.warn(normalized.warning)
        return resolved

    def create(self, model_name: str, /, *options: Any, **overrides: Any) -> Model:
        """Create and persist one record.

        Args:
            model_name: Model name; plural, dasherized and camelCase forms are accepted
            *options: Trait names and/or override mappings, applied in order
            **overrides: Attribute overrides; belongs_to relationships accept a
                model instance or a raw id

        Returns:
            The persisted record

        Raises:
            ModelOrFactoryNotFoundError: If neither a model nor a factory exists
        """
        resolved = self.resolve(model_name, METHOD_CREATE)
        traits, attrs = _split_options(options, overrides)
        self._check_traits(resolved, traits)
        return self._create_one(resolved, traits, attrs)

    def create_list(
        self, model_name: str, count: int, /, *options: Any, **overrides: Any
    ) -> list[Model]:
        """Create ``count`` records from the same name, traits and overrides.

        The normalization warning, if any, is emitted once per call.

        Raises:
            ModelOrFactoryNotFoundError: If neither a model nor a factory exists
            ValidationError: If count is not a non-negative integer
        """
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise ValidationError(
                f"createList count must be a non-negative integer, got {count!r}",
                {"count": count},
            )
        resolved = self.resolve(model_name, METHOD_CREATE_LIST)
        traits, attrs = _split_options(options, overrides)
        self._check_traits(resolved, traits)
        return [self._create_one(resolved, traits, attrs) for _ in range(count)]

    def build(self, model_name: str, /, *options: Any, **overrides: Any) -> dict[str, Any]:
        """Attributes ``create`` would store next, without storing anything.

        has_many overrides are validated but not applied.
        """
        resolved = self.resolve(model_name, METHOD_BUILD)
        traits, attrs = _split_options(options, overrides)
        self._check_traits(resolved, traits)
        generated = self.factories.attributes_for(
            resolved.name, self.store.count(resolved.name), traits
        )
        stored, _ = self.relationships.split_children(resolved.name, {**generated, **attrs})
        return self.relationships.resolve(resolved.name, stored)

    def _check_traits(self, resolved: ResolvedType, traits: list[str]) -> None:
        factory = self.factories.get(resolved.name)
        for trait in traits:
            if factory is None:
                raise TraitNotFoundError(trait, resolved.name)
            factory.trait(trait, resolved.name)

    def _create_one(
        self, resolved: ResolvedType, traits: list[str], attrs: dict[str, Any]
    ) -> Model:
        name = resolved.name
        generated = self.factories.attributes_for(name, self.store.count(name), traits)
        stored, pending = self.relationships.split_children(name, {**generated, **attrs})
        final = self.relationships.resolve(name, stored)

        row = self.store.insert(name, final)
        self.relationships.link_children(name, row["id"], pending)
        record = self._instantiate(name, row)

        factory = self.factories.get(name)
        if factory is not None:
            for hook in factory.hooks(traits, name):
                hook(record, self)

        if self.settings.logging:
            logger.info("Created %s #%s: %s", name, record.id, record.attrs)
        return record

    def describe(self) -> SchemaInfo:
        """Registered types with their relationships, generators and record counts."""
        types: dict[str, TypeInfo] = {}
        for name in sorted(set(self.models.names()) | set(self.factories.names())):
            spec = self.models.spec(name)
            factory = self.factories.get(name)
            resolved = resolve_type(
                self.models,
                self.factories,
                self.names.normalize(name),
                METHOD_CREATE,
            )
            types[name] = TypeInfo(
                name=name,
                kind=resolved.kind,
                relationships=list(spec.relationships) if spec else [],
                attributes=factory.attribute_names if factory else [],
                traits=factory.trait_names if factory else [],
                record_count=self.store.count(name),
            )
        return SchemaInfo(
            types=types,
            total_types=len(types),
            total_records=self.store.describe().total_records,
        )

    def shutdown(self) -> None:
        """Discard every record. Registered models and factories stay."""
        self.store.clear()
        logger.debug("Server shut down, store cleared")

    def __enter__(self) -> MockServer:
        return self

    def __exit__(self, *args: Any) -> None:
        self.shutdown()


def _split_options(
    options: tuple[Any, ...], overrides: dict[str, Any]
) -> tuple[list[str], dict[str, Any]]:
    """Separate trait names from override mappings; keyword overrides win last."""
    traits: list[str] = []
    attrs: dict[str, Any] = {}
    for option in options:
        if isinstance(option, str):
            traits.append(option)
        elif isinstance(option, Mapping):
            attrs.update(option)
        else:
            raise ValidationError(
                f"Expected a trait name or a mapping of overrides, got {type(option).__name__}",
                {"option": repr(option)},
            )
    attrs.update(overrides)
    return traits, attrs
