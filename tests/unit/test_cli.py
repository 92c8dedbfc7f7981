"""CLI command tests for mockforge."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from mockforge.cli.main import app
from mockforge.cli.parsing import parse_assignment, parse_assignments

runner = CliRunner()


class TestVersionCommand:
    """Test the version command."""

    def test_version_output(self) -> None:
        """Test that version command shows version info."""
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "mockforge v" in result.stdout


class TestSchemaCommands:
    """Test schema inspection commands."""

    def test_schema_describe(self, schema_file: str) -> None:
        """Describe lists every registered type."""
        result = runner.invoke(app, ["-s", schema_file, "schema", "describe"])
        assert result.exit_code == 0, result.output
        assert "contact" in result.stdout
        assert "author" in result.stdout

    def test_schema_describe_json(self, schema_file: str) -> None:
        """Describe in JSON mode is machine-readable."""
        result = runner.invoke(app, ["-s", schema_file, "--json", "schema", "describe"])
        assert result.exit_code == 0, result.output

        data = json.loads(result.stdout)
        assert data["total_types"] == 5
        assert data["types"]["contact"]["kind"] == "model_and_factory"
        assert data["types"]["contact"]["traits"] == ["admin"]
        assert data["types"]["post"]["relationships"][0]["foreign_key"] == "author_id"

    def test_schema_from_environment(
        self, schema_file: str, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """The schema path can come from MOCKFORGE_SCHEMA."""
        monkeypatch.setenv("MOCKFORGE_SCHEMA", schema_file)
        result = runner.invoke(app, ["--json", "schema", "describe"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["total_types"] == 5

    def test_schema_missing_file(self, tmp_path: Path) -> None:
        """A missing schema file is reported as an error."""
        missing = str(tmp_path / "nope.json")
        result = runner.invoke(app, ["-s", missing, "--json", "schema", "describe"])
        assert result.exit_code == 1

        data = json.loads(result.stdout)
        assert data["error"] == "SchemaFileError"
        assert data["context"]["reason"] == "file not found"

    def test_schema_resolve_plural(self, schema_file: str) -> None:
        """Resolving a plural shows the canonical name and the warning."""
        result = runner.invoke(app, ["-s", schema_file, "--json", "schema", "resolve", "contacts"])
        assert result.exit_code == 0, result.output

        data = json.loads(result.stdout)
        assert data["success"] is True
        assert data["canonical"] == "contact"
        assert data["kind"] == "model_and_factory"
        assert data["warning"] == (
            "server.create was intended to be used with the singularized version of the model"
        )

    def test_schema_resolve_compound(self, schema_file: str) -> None:
        """Dasherized names resolve to the snake_case model."""
        result = runner.invoke(
            app, ["-s", schema_file, "--json", "schema", "resolve", "amazing-contact"]
        )
        assert result.exit_code == 0, result.output

        data = json.loads(result.stdout)
        assert data["canonical"] == "amazing_contact"
        assert data["warning"] is None

    def test_schema_resolve_unknown(self, schema_file: str) -> None:
        """Unknown names fail with the not-found message."""
        result = runner.invoke(app, ["-s", schema_file, "--json", "schema", "resolve", "foo"])
        assert result.exit_code == 1

        data = json.loads(result.stdout)
        assert data["error"] == "ModelOrFactoryNotFoundError"
        assert data["message"] == (
            "You called server.create('foo') but no model or factory was found."
        )


class TestFixtureCommands:
    """Test fixture generation commands."""

    def test_create_json(self, schema_file: str) -> None:
        """A single record is printed as a one-element list."""
        result = runner.invoke(app, ["-s", schema_file, "--json", "fixtures", "create", "contact"])
        assert result.exit_code == 0, result.output

        data = json.loads(result.stdout)
        assert data == [{"id": 1, "name": "Yehuda", "email": "user0@example.com"}]

    def test_create_table(self, schema_file: str) -> None:
        """Without --json records are rendered as a table."""
        result = runner.invoke(app, ["-s", schema_file, "fixtures", "create", "contact"])
        assert result.exit_code == 0, result.output
        assert "Yehuda" in result.stdout

    def test_create_list_with_trait_and_overrides(self, schema_file: str) -> None:
        """--count, --trait and --set combine."""
        result = runner.invoke(
            app,
            [
                "-s",
                schema_file,
                "--json",
                "fixtures",
                "create",
                "contact",
                "--count",
                "2",
                "--trait",
                "admin",
                "--set",
                "name=Zelda",
                "--set",
                "age=30",
            ],
        )
        assert result.exit_code == 0, result.output

        data = json.loads(result.stdout)
        assert [row["id"] for row in data] == [1, 2]
        assert all(row["role"] == "admin" for row in data)
        assert all(row["name"] == "Zelda" and row["age"] == 30 for row in data)

    def test_create_with_foreign_key(self, schema_file: str) -> None:
        """Foreign keys can be set directly."""
        result = runner.invoke(
            app,
            ["-s", schema_file, "--json", "fixtures", "create", "post", "--set", "author_id=1"],
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == [{"id": 1, "author_id": 1}]

    def test_create_plural_warns(self, schema_file: str) -> None:
        """Pluralized names still work and print a warning."""
        result = runner.invoke(app, ["-s", schema_file, "fixtures", "create", "contacts"])
        assert result.exit_code == 0, result.output
        assert "warning: server.create was intended" in result.output

    def test_create_list_plural_warns_with_create_list_label(self, schema_file: str) -> None:
        """The list form names createList in its warning."""
        result = runner.invoke(
            app, ["-s", schema_file, "fixtures", "create", "contacts", "-n", "3"]
        )
        assert result.exit_code == 0, result.output
        assert result.output.count("warning: server.createList was intended") == 1

    def test_create_unknown_model(self, schema_file: str) -> None:
        """Unknown models exit with code 1."""
        result = runner.invoke(app, ["-s", schema_file, "--json", "fixtures", "create", "foo"])
        assert result.exit_code == 1
        assert json.loads(result.stdout)["error"] == "ModelOrFactoryNotFoundError"

    def test_create_list_unknown_model(self, schema_file: str) -> None:
        """Unknown models in list form name createList."""
        result = runner.invoke(
            app, ["-s", schema_file, "--json", "fixtures", "create", "foo", "-n", "2"]
        )
        assert result.exit_code == 1
        assert json.loads(result.stdout)["context"]["method"] == "createList"

    def test_create_unknown_trait(self, schema_file: str) -> None:
        """Unknown traits are reported."""
        result = runner.invoke(
            app, ["-s", schema_file, "--json", "fixtures", "create", "contact", "-t", "owner"]
        )
        assert result.exit_code == 1
        assert json.loads(result.stdout)["error"] == "TraitNotFoundError"

    def test_create_bad_override(self, schema_file: str) -> None:
        """Overrides without '=' are rejected."""
        result = runner.invoke(
            app, ["-s", schema_file, "--json", "fixtures", "create", "contact", "--set", "name"]
        )
        assert result.exit_code == 1
        assert "Invalid override" in json.loads(result.stdout)["error"]

    def test_build(self, schema_file: str) -> None:
        """build prints attributes without an id."""
        result = runner.invoke(
            app, ["-s", schema_file, "--json", "fixtures", "build", "contact", "-t", "admin"]
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == {
            "name": "Yehuda",
            "email": "user0@example.com",
            "role": "admin",
        }


class TestParsing:
    """Test override parsing."""

    @pytest.mark.parametrize(
        ("assignment", "expected"),
        [
            ("name=Bob", ("name", "Bob")),
            ("author_id=1", ("author_id", 1)),
            ("admin=true", ("admin", True)),
            ("note=null", ("note", None)),
            ("tags=[\"a\"]", ("tags", ["a"])),
            ("equation=a=b", ("equation", "a=b")),
            ("empty=", ("empty", "")),
        ],
    )
    def test_parse_assignment(self, assignment: str, expected: tuple) -> None:
        assert parse_assignment(assignment) == expected

    @pytest.mark.parametrize("assignment", ["name", "=value"])
    def test_parse_assignment_invalid(self, assignment: str) -> None:
        with pytest.raises(ValueError, match="Invalid override"):
            parse_assignment(assignment)

    def test_parse_assignments_later_wins(self) -> None:
        assert parse_assignments(["a=1", "a=2"]) == {"a": 2}
        assert parse_assignments(None) == {}
