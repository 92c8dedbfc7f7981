"""Factories: attribute generators for mock records.

Example:
    contact = Factory(
        name="Yehuda",
        email=sequence("user{i}@example.com"),
        age=lambda i: 20 + i,
        nickname=factory.Faker("first_name"),
        admin=Trait(role="admin"),
    )

Each Factory compiles to a ``factory.DictFactory`` subclass. A generator is a
constant, a callable taking the creation index ``i`` (wrapped in
``factory.Sequence``) or any factory_boy declaration. Traits become
``factory.Trait`` parameters. The sequence counter is forced to the creation
index on every build: 0 for the first record of that model in the session,
1 for the next.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Any

import factory
from factory.declarations import BaseDeclaration

from mockforge.exceptions import TraitNotFoundError

if TYPE_CHECKING:
    from mockforge.core.engine import MockServer
    from mockforge.core.model import Model

# Runs after the record is stored, so it sees the assigned id
AfterCreate = Callable[["Model", "MockServer"], None]


def sequence(template: str) -> factory.Sequence:
    """Sequence formatting ``{i}`` in ``template`` with the creation index."""
    return factory.Sequence(lambda i: template.replace("{i}", str(i)))


def as_declaration(generator: Any) -> Any:
    """Turn a generator into what a factory_boy class attribute expects."""
    if isinstance(generator, BaseDeclaration):
        return generator
    if callable(generator):
        return factory.Sequence(generator)
    return generator


class Trait:
    """Named bundle of extra attributes applied on request."""

    def __init__(self, after_create: AfterCreate | None = None, **attributes: Any) -> None:
        self.attributes = attributes
        self.after_create = after_create

    def to_declaration(self) -> factory.Trait:
        return factory.Trait(
            **{key: as_declaration(value) for key, value in self.attributes.items()}
        )

    def __repr__(self) -> str:
        return f"Trait({', '.join(self.attributes)})"


class Factory:
    """Attribute generators for one model.

    Keyword arguments whose value is a Trait are registered as traits; all
    others are attribute generators. Factories are immutable; ``extend``
    returns a new one.
    """

    def __init__(
        self,
        *,
        after_create: AfterCreate | None = None,
        traits: Mapping[str, Trait] | None = None,
        **attributes: Any,
    ) -> None:
        self._traits: dict[str, Trait] = dict(traits or {})
        self._attributes: dict[str, Any] = {}
        for key, value in attributes.items():
            if isinstance(value, Trait):
                self._traits[key] = value
            else:
                self._attributes[key] = value
        self.after_create = after_create
        self.factory_class = self._compile()

    def _compile(self) -> type[factory.DictFactory]:
        params = type(
            "Params", (), {name: trait.to_declaration() for name, trait in self._traits.items()}
        )
        namespace: dict[str, Any] = {
            key: as_declaration(value) for key, value in self._attributes.items()
        }
        namespace["Params"] = params
        return type("RecordFactory", (factory.DictFactory,), namespace)

    @property
    def attribute_names(self) -> list[str]:
        return list(self._attributes)

    @property
    def trait_names(self) -> list[str]:
        return list(self._traits)

    @property
    def generated_names(self) -> set[str]:
        """Every attribute this factory can produce, traits included."""
        names = set(self._attributes)
        for trait in self._traits.values():
            names.update(trait.attributes)
        return names

    def trait(self, name: str, factory_name: str = "") -> Trait:
        """Get a trait by name.

        Raises:
            TraitNotFoundError: If the trait is not defined
        """
        trait = self._traits.get(name)
        if trait is None:
            raise TraitNotFoundError(name, factory_name, self.trait_names)
        return trait

    def build(
        self, index: int, traits: Iterable[str] = (), factory_name: str = ""
    ) -> dict[str, Any]:
        """Generate the attribute set for one record.

        Args:
            index: Creation index passed to sequence generators
            traits: Trait names to activate
            factory_name: Name used in error messages

        Returns:
            Generated attributes
        """
        flags: dict[str, Any] = {"__sequence": index}
        for name in traits:
            self.trait(name, factory_name)
            flags[name] = True
        return self.factory_class.build(**flags)

    def hooks(self, traits: Iterable[str] = (), factory_name: str = "") -> list[AfterCreate]:
        """after_create callbacks to run, factory first then traits in order."""
        callbacks = [self.after_create] if self.after_create else []
        for name in traits:
            trait = self.trait(name, factory_name)
            if trait.after_create:
                callbacks.append(trait.after_create)
        return callbacks

    def extend(
        self,
        *,
        after_create: AfterCreate | None = None,
        traits: Mapping[str, Trait] | None = None,
        **attributes: Any,
    ) -> Factory:
        """Return a new factory with extra or replaced generators."""
        return Factory(
            after_create=after_create or self.after_create,
            traits={**self._traits, **(traits or {})},
            **{**self._attributes, **attributes},
        )

    def __repr__(self) -> str:
        return f"Factory({', '.join(self._attributes)})"
