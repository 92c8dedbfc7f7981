"""Shared test fixtures for mockforge."""

import json
from collections.abc import Generator
from pathlib import Path

import pytest

from mockforge import CapturingReporter, Factory, MockServer, Model, belongs_to, has_many


class Contact(Model):
    pass


class AmazingContact(Model):
    pass


class Post(Model):
    author = belongs_to()


class Author(Model):
    posts = has_many()


class Data(Model):
    pass


@pytest.fixture
def reporter() -> CapturingReporter:
    """Warning sink that records every advisory message."""
    return CapturingReporter()


@pytest.fixture
def server(reporter: CapturingReporter) -> Generator[MockServer, None, None]:
    """Server with the contact/post/author/data models used across the suite."""
    mock_server = MockServer(
        models={
            "contact": Contact,
            "amazingContact": AmazingContact,
            "post": Post,
            "author": Author,
            "data": Data,
        },
        factories={
            "contact": Factory(name="Yehuda"),
            "amazingContact": Factory(),
        },
        reporter=reporter,
    )
    yield mock_server
    mock_server.shutdown()


@pytest.fixture
def schema_data() -> dict:
    """Schema file contents equivalent to the ``server`` fixture, plus traits."""
    return {
        "settings": {"uncountable": ["data"]},
        "models": {
            "contact": {},
            "amazingContact": {},
            "post": {"relationships": [{"name": "author", "kind": "belongs_to"}]},
            "author": {"relationships": [{"name": "posts", "kind": "has_many"}]},
            "data": {},
        },
        "factories": {
            "contact": {
                "attributes": {"name": "Yehuda", "email": "user{i}@example.com"},
                "traits": {"admin": {"role": "admin"}},
            },
            "amazingContact": {},
        },
    }


@pytest.fixture
def schema_file(tmp_path: Path, schema_data: dict) -> str:
    """Schema file written to a temporary directory."""
    path = tmp_path / "mockforge.json"
    path.write_text(json.dumps(schema_data))
    return str(path)
