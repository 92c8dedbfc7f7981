"""Tests for settings, schema files and warning reporters."""

import json
import logging
from pathlib import Path

import pytest

from mockforge import (
    CapturingReporter,
    InvalidRelationshipTypeError,
    LoggingReporter,
    MockServer,
    NullReporter,
    Reporter,
    SchemaFileError,
    ServerSettings,
    TypeKind,
    build_server,
    load_schema_file,
)
from mockforge.config import DEFAULT_SCHEMA_PATH, get_schema_path


class TestSchemaPath:
    """Tests for get_schema_path()."""

    def test_explicit_path_wins(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("MOCKFORGE_SCHEMA", "/env/schema.json")
        assert get_schema_path("/arg/schema.json") == "/arg/schema.json"

    def test_environment_variable(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("MOCKFORGE_SCHEMA", "/env/schema.json")
        assert get_schema_path(None) == "/env/schema.json"

    def test_default(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("MOCKFORGE_SCHEMA", raising=False)
        assert get_schema_path(None) == DEFAULT_SCHEMA_PATH


class TestLoadSchemaFile:
    """Tests for load_schema_file()."""

    def test_load(self, schema_file: str):
        """A valid file is parsed into typed entries."""
        schema = load_schema_file(schema_file)

        assert schema.settings.uncountable == ["data"]
        assert list(schema.models) == ["contact", "amazingContact", "post", "author", "data"]
        assert schema.factories["contact"].traits == {"admin": {"role": "admin"}}

    def test_missing_file(self, tmp_path: Path):
        """A missing file is a SchemaFileError."""
        with pytest.raises(SchemaFileError) as exc_info:
            load_schema_file(str(tmp_path / "missing.json"))
        assert exc_info.value.reason == "file not found"

    def test_invalid_json(self, tmp_path: Path):
        """Broken JSON is reported with its line."""
        path = tmp_path / "broken.json"
        path.write_text("{\n  \"models\": ,\n}")

        with pytest.raises(SchemaFileError) as exc_info:
            load_schema_file(str(path))
        assert "invalid JSON on line 2" in exc_info.value.reason

    def test_wrong_shape(self, tmp_path: Path):
        """Valid JSON with the wrong structure is rejected."""
        path = tmp_path / "shape.json"
        path.write_text(json.dumps({"models": ["post"]}))

        with pytest.raises(SchemaFileError):
            load_schema_file(str(path))

    def test_empty_object(self, tmp_path: Path):
        """Every section is optional."""
        path = tmp_path / "empty.json"
        path.write_text("{}")

        schema = load_schema_file(str(path))
        assert schema.models == {}
        assert schema.settings == ServerSettings()


class TestBuildServer:
    """Tests for build_server()."""

    def test_registers_models_and_factories(self, schema_file: str):
        """Every entry in the file is registered."""
        server = build_server(load_schema_file(schema_file))

        assert sorted(server.models.names()) == [
            "amazing_contact",
            "author",
            "contact",
            "data",
            "post",
        ]
        assert sorted(server.factories.names()) == ["amazing_contact", "contact"]

    def test_generated_model_classes(self, schema_file: str):
        """Models from a file get generated classes with relationships."""
        server = build_server(load_schema_file(schema_file))

        author = server.create("author")
        post = server.create("post", author=author)

        assert type(author).__name__ == "Author"
        assert type(server.create("amazing-contact")).__name__ == "AmazingContact"
        assert post.author == author
        assert author.posts.ids == [post.id]

    def test_sequences_and_traits(self, schema_file: str):
        """{i} strings become sequences; traits are usable by name."""
        server = build_server(load_schema_file(schema_file))

        first = server.create("contact")
        admin = server.create("contact", "admin")

        assert first.email == "user0@example.com"
        assert admin.email == "user1@example.com"
        assert admin.role == "admin"
        assert not hasattr(first, "role")

    def test_settings_are_applied(self, schema_file: str):
        """Uncountables from the file reach the pluralizer."""
        reporter = CapturingReporter()
        server = build_server(load_schema_file(schema_file), reporter=reporter)

        server.create("data")

        assert server.pluralizer.is_uncountable("data")
        assert reporter.messages == []

    def test_invalid_relationship_kind(self, tmp_path: Path):
        """Unknown relationship kinds are rejected."""
        path = tmp_path / "schema.json"
        path.write_text(
            json.dumps({"models": {"post": {"relationships": [{"name": "tags", "kind": "many"}]}}})
        )

        with pytest.raises(InvalidRelationshipTypeError) as exc_info:
            build_server(load_schema_file(str(path)))
        assert exc_info.value.relationship_type == "many"

    def test_describe(self, schema_file: str):
        """describe() lists types with kinds, generators and counts."""
        server = build_server(load_schema_file(schema_file))
        server.create_list("contact", 2)

        info = server.describe()

        assert info.total_types == 5
        assert info.total_records == 2
        assert info.types["contact"].kind == TypeKind.MODEL_AND_FACTORY
        assert info.types["contact"].attributes == ["name", "email"]
        assert info.types["contact"].traits == ["admin"]
        assert info.types["contact"].record_count == 2
        assert info.types["post"].kind == TypeKind.MODEL_ONLY
        assert info.types["post"].relationships[0].foreign_key == "author_id"
        assert info.to_dict()["types"]["author"]["relationships"][0]["kind"] == "has_many"


class TestSettings:
    """Tests for ServerSettings."""

    def test_defaults(self):
        settings = ServerSettings()
        assert settings.environment == "test"
        assert settings.logging is False
        assert settings.uncountable == []

    def test_irregular_setting(self):
        """Irregular nouns from settings drive normalization."""
        server = MockServer(settings=ServerSettings(irregular={"octopus": "octopodes"}))
        server.models.register("octopus")

        assert server.resolve("octopodes").name == "octopus"

    def test_logging_setting(self, caplog: pytest.LogCaptureFixture):
        """With logging enabled every created record is logged at INFO."""
        server = MockServer(settings=ServerSettings(logging=True))
        server.models.register("post")

        with caplog.at_level(logging.INFO, logger="mockforge.core.engine"):
            server.create("post", title="Hello")

        assert "Created post #1" in caplog.text

    def test_logging_disabled_by_default(self, caplog: pytest.LogCaptureFixture):
        server = MockServer()
        server.models.register("post")

        with caplog.at_level(logging.INFO, logger="mockforge.core.engine"):
            server.create("post")

        assert "Created post" not in caplog.text


class TestReporters:
    """Tests for warning reporters."""

    @pytest.mark.parametrize("reporter_class", [NullReporter, LoggingReporter, CapturingReporter])
    def test_reporters_satisfy_protocol(self, reporter_class):
        assert isinstance(reporter_class(), Reporter)

    def test_default_reporter_discards(self):
        """Without a reporter warnings go nowhere and nothing fails."""
        server = MockServer()
        server.models.register("post")

        assert isinstance(server.reporter, NullReporter)
        assert server.create("posts").model_name == "post"

    def test_logging_reporter(self, caplog: pytest.LogCaptureFixture):
        """LoggingReporter emits warnings through logging."""
        server = MockServer(reporter=LoggingReporter())
        server.models.register("post")

        with caplog.at_level(logging.WARNING):
            server.create_list("posts", 2)

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert [r.getMessage() for r in warnings] == [
            "server.createList was intended to be used with the singularized version of the model"
        ]

    def test_capturing_reporter_clear(self):
        reporter = CapturingReporter()
        reporter.warn("a")
        reporter.clear()
        assert reporter.messages == []
