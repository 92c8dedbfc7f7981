"""Server settings and schema-file loading.

A schema file is JSON:

    {
      "settings": {"uncountable": ["data"]},
      "models": {
        "post": {"relationships": [{"name": "author", "kind": "belongs_to"}]},
        "author": {"relationships": [{"name": "posts", "kind": "has_many"}]}
      },
      "factories": {
        "contact": {
          "attributes": {"name": "Yehuda", "email": "user{i}@example.com"},
          "traits": {"admin": {"role": "admin"}}
        }
      }
    }

String attributes containing ``{i}`` become sequences over the creation index.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from mockforge.core.types import ModelSpec, RelationshipKind, RelationshipSpec
from mockforge.exceptions import InvalidRelationshipTypeError, SchemaFileError
from mockforge.schema.factory import Factory, Trait, sequence

if TYPE_CHECKING:
    from mockforge.core.engine import MockServer
    from mockforge.core.reporting import Reporter

DEFAULT_SCHEMA_PATH = "./mockforge.json"


def get_schema_path(path: str | None) -> str:
    """Resolve schema file path from CLI arg, environment variable, or default.

    Priority:
    1. Explicit path argument
    2. MOCKFORGE_SCHEMA environment variable
    3. Default: ./mockforge.json
    """
    if path:
        return path
    if env_path := os.getenv("MOCKFORGE_SCHEMA"):
        return env_path
    return DEFAULT_SCHEMA_PATH


class ServerSettings(BaseModel):
    """Per-server options."""

    environment: str = Field(default="test", description="Environment label")
    logging: bool = Field(default=False, description="Log every created record at INFO")
    uncountable: list[str] = Field(
        default_factory=list, description="Extra nouns with identical singular and plural"
    )
    irregular: dict[str, str] = Field(
        default_factory=dict, description="Extra irregular nouns, singular -> plural"
    )


class RelationshipEntry(BaseModel):
    """One relationship as written in a schema file."""

    name: str
    kind: str = RelationshipKind.BELONGS_TO.value
    target: str | None = None
    foreign_key: str | None = None
    inverse: str | None = None

    def to_spec(self) -> RelationshipSpec:
        if self.kind not in RelationshipKind.values():
            raise InvalidRelationshipTypeError(self.kind)
        return RelationshipSpec(
            name=self.name,
            kind=RelationshipKind(self.kind),
            target=self.target,
            foreign_key=self.foreign_key,
            inverse=self.inverse,
        )


class ModelEntry(BaseModel):
    relationships: list[RelationshipEntry] = Field(default_factory=list)


class FactoryEntry(BaseModel):
    attributes: dict[str, Any] = Field(default_factory=dict)
    traits: dict[str, dict[str, Any]] = Field(default_factory=dict)

    def to_factory(self) -> Factory:
        return Factory(
            traits={
                name: Trait(**_generators(attributes)) for name, attributes in self.traits.items()
            },
            **_generators(self.attributes),
        )


class SchemaFile(BaseModel):
    """Validated contents of a schema file."""

    settings: ServerSettings = Field(default_factory=ServerSettings)
    models: dict[str, ModelEntry] = Field(default_factory=dict)
    factories: dict[str, FactoryEntry] = Field(default_factory=dict)


def _generators(attributes: dict[str, Any]) -> dict[str, Any]:
    return {
        key: sequence(value) if isinstance(value, str) and "{i}" in value else value
        for key, value in attributes.items()
    }


def load_schema_file(path: str) -> SchemaFile:
    """Read and validate a schema file.

    Raises:
        SchemaFileError: If the file is missing, not JSON, or malformed
    """
    file_path = Path(path)
    if not file_path.exists():
        raise SchemaFileError(path, "file not found")

    try:
        with file_path.open("r") as f:
            data = json.load(f)
        return SchemaFile.model_validate(data)
    except json.JSONDecodeError as e:
        raise SchemaFileError(path, f"invalid JSON on line {e.lineno}: {e.msg}") from e
    except PydanticValidationError as e:
        raise SchemaFileError(path, str(e)) from e


def build_server(schema: SchemaFile, reporter: Reporter | None = None) -> MockServer:
    """Create a server with every model and factory from a schema file."""
    from mockforge.core.engine import MockServer

    server = MockServer(settings=schema.settings, reporter=reporter)
    for name, entry in schema.models.items():
        server.models.register_spec(
            ModelSpec(name=name, relationships=[r.to_spec() for r in entry.relationships])
        )
    for name, entry in schema.factories.items():
        server.factories.register(name, entry.to_factory())
    return server
