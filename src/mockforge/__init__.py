"""mockforge - In-memory fixture engine for mock backends.

Resolves loosely written model names, builds records from factories,
stores them in memory and keeps belongs_to / has_many relationships
consistent.

Example:
    from mockforge import Factory, Model, MockServer, belongs_to, has_many

    class Post(Model):
        author = belongs_to()

    class Author(Model):
        posts = has_many()

    server = MockServer(
        models={"post": Post, "author": Author},
        factories={"author": Factory(name="Yehuda")},
    )

    author = server.create("author")
    post = server.create("post", author=author)     # or author_id=author.id
    assert post.author == author
    assert len(author.posts) == 1

    posts = server.create_list("posts", 2)          # warns: singular expected
"""

from mockforge.config import ServerSettings, build_server, load_schema_file
from mockforge.core.engine import Database, MockServer
from mockforge.core.model import Model, RecordCollection, belongs_to, has_many
from mockforge.core.reporting import (
    CapturingReporter,
    LoggingReporter,
    NullReporter,
    Reporter,
)
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
from mockforge.exceptions import (
    FactoryAlreadyRegisteredError,
    InvalidRelationshipTypeError,
    InverseRelationshipError,
    MockForgeError,
    ModelAlreadyRegisteredError,
    ModelOrFactoryNotFoundError,
    RecordNotFoundError,
    RelationshipNotFoundError,
    SchemaFileError,
    TraitNotFoundError,
    ValidationError,
)
from mockforge.naming import InflectPluralizer, NameResolver, Pluralizer
from mockforge.schema import Factory, Trait, sequence
from mockforge.storage import Collection, InMemoryStore

__version__ = "0.1.0"

__all__ = [
    # Main classes
    "MockServer",
    "Database",
    "Model",
    "RecordCollection",
    "belongs_to",
    "has_many",
    "Factory",
    "Trait",
    "sequence",
    # Building blocks
    "Collection",
    "InMemoryStore",
    "NameResolver",
    "Pluralizer",
    "InflectPluralizer",
    # Reporting
    "Reporter",
    "NullReporter",
    "LoggingReporter",
    "CapturingReporter",
    # Configuration
    "ServerSettings",
    "load_schema_file",
    "build_server",
    # Types
    "RelationshipKind",
    "RelationshipSpec",
    "ModelSpec",
    "TypeKind",
    "NormalizedName",
    "ResolvedType",
    "CollectionInfo",
    "StoreInfo",
    "TypeInfo",
    "SchemaInfo",
    # Exceptions
    "MockForgeError",
    "ModelOrFactoryNotFoundError",
    "ModelAlreadyRegisteredError",
    "FactoryAlreadyRegisteredError",
    "TraitNotFoundError",
    "RelationshipNotFoundError",
    "InvalidRelationshipTypeError",
    "InverseRelationshipError",
    "RecordNotFoundError",
    "ValidationError",
    "SchemaFileError",
]
