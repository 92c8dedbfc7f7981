"""mockforge CLI - Main entry point."""

from typing import Annotated

import typer

import mockforge
from mockforge.cli.context import CLIContext
from mockforge.config import get_schema_path

# Create main Typer app
app = typer.Typer(
    name="mockforge",
    help="mockforge CLI - preview mock fixtures from a schema file",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    schema: Annotated[
        str | None,
        typer.Option(
            "--schema",
            "-s",
            envvar="MOCKFORGE_SCHEMA",
            help="Schema file with models and factories (JSON)",
        ),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            "-j",
            help="Output as JSON (machine-readable)",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log engine activity to stderr",
        ),
    ] = False,
) -> None:
    """Initialize CLI context with global options."""
    ctx.obj = CLIContext(
        schema_path=get_schema_path(schema),
        json_output=json_output,
        verbose=verbose,
    )


@app.command()
def version() -> None:
    """Show version information."""
    typer.echo(f"mockforge v{mockforge.__version__}")


# Register command groups
from mockforge.cli.commands import fixtures, schema  # noqa: E402

app.add_typer(schema.app, name="schema")
app.add_typer(fixtures.app, name="fixtures")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
