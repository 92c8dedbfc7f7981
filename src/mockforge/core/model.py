"""Model base class and relationship declarations.

Example:
    class Post(Model):
        author = belongs_to()

    class Author(Model):
        posts = has_many()

Relationship attributes are read-only accessors. ``post.author`` looks up the
author row by ``post.author_id`` each time it is read, and ``author.posts``
scans the post collection for ``author_id == author.id``. Nothing about the
inverse side is cached on the instance.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Any, ClassVar

from mockforge.core.types import RelationshipKind, RelationshipSpec
from mockforge.exceptions import RecordNotFoundError

if TYPE_CHECKING:
    from mockforge.core.engine import MockServer


class _Relationship:
    """Shared behaviour of belongs_to / has_many declarations."""

    kind: ClassVar[RelationshipKind]

    def __init__(self, target: str | None = None) -> None:
        self.name: str | None = None
        self.target = target

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def to_spec(self) -> RelationshipSpec:
        if self.name is None:
            raise TypeError(f"{type(self).__name__}() must be assigned to a Model class attribute")
        return RelationshipSpec(name=self.name, kind=self.kind, target=self.target)

    def __get__(self, instance: Model | None, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return instance._server.relationships.read(instance, self.name)

    def __set__(self, instance: Model, value: Any) -> None:
        raise AttributeError(
            f"Relationship '{self.name}' is read-only; pass it to create() as an override"
        )


class belongs_to(_Relationship):  # noqa: N801
    """Declare a one-record relationship stored as a foreign key on the owner."""

    kind = RelationshipKind.BELONGS_TO

    def __init__(self, target: str | None = None, *, foreign_key: str | None = None) -> None:
        super().__init__(target)
        self.foreign_key = foreign_key

    def to_spec(self) -> RelationshipSpec:
        return super().to_spec().model_copy(update={"foreign_key": self.foreign_key})


class has_many(_Relationship):  # noqa: N801
    """Declare a one-to-many relationship computed from the target's foreign keys."""

    kind = RelationshipKind.HAS_MANY

    def __init__(self, target: str | None = None, *, inverse: str | None = None) -> None:
        super().__init__(target)
        self.inverse = inverse

    def to_spec(self) -> RelationshipSpec:
        return super().to_spec().model_copy(update={"inverse": self.inverse})


class Model:
    """A persisted record bound to the server that created it.

    Attribute access falls through to the record's attributes, so a contact
    created with ``name="Yehuda"`` reads back as ``contact.name``. Names in
    RESERVED_ATTRIBUTES belong to the record itself; factories may not
    generate them.
    """

    RESERVED_ATTRIBUTES: ClassVar[frozenset[str]] = frozenset(
        {"id", "model_name", "attrs", "reload", "to_dict", "declared_relationships"}
    )

    def __init__(self, server: MockServer, model_name: str, attrs: dict[str, Any]) -> None:
        self._server = server
        self.model_name = model_name
        self.attrs = attrs

    @classmethod
    def declared_relationships(cls) -> list[RelationshipSpec]:
        """Relationship declarations of this class and its bases, in declaration order."""
        specs: dict[str, RelationshipSpec] = {}
        for klass in reversed(cls.__mro__):
            for value in vars(klass).values():
                if isinstance(value, _Relationship):
                    specs[value.name] = value.to_spec()
        return list(specs.values())

    @property
    def id(self) -> int:
        return self.attrs["id"]

    def __getattr__(self, name: str) -> Any:
        attrs = self.__dict__.get("attrs")
        if attrs is not None and name in attrs:
            return attrs[name]
        raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")

    def reload(self) -> Model:
        """Re-read attributes from the store."""
        row = self._server.store.by_id(self.model_name, self.id)
        if row is None:
            raise RecordNotFoundError(self.id, self.model_name)
        self.attrs = row
        return self

    def to_dict(self) -> dict[str, Any]:
        return dict(self.attrs)

    def __deepcopy__(self, memo: dict[int, Any]) -> Model:
        # A record is a handle on stored state; copies share the server
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Model):
            return NotImplemented
        return (self.model_name, self.id) == (other.model_name, other.id)

    def __hash__(self) -> int:
        return hash((self.model_name, self.id))

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.model_name}:{self.attrs.get('id')}>"


class RecordCollection:
    """Ordered models returned by a has_many accessor."""

    def __init__(self, model_name: str, models: list[Model]) -> None:
        self.model_name = model_name
        self.models = models

    @property
    def ids(self) -> list[int]:
        return [model.id for model in self.models]

    def to_list(self) -> list[dict[str, Any]]:
        return [model.to_dict() for model in self.models]

    def __iter__(self) -> Iterator[Model]:
        return iter(self.models)

    def __len__(self) -> int:
        return len(self.models)

    def __getitem__(self, index: int) -> Model:
        return self.models[index]

    def __repr__(self) -> str:
        return f"RecordCollection({self.model_name!r}, ids={self.ids})"
