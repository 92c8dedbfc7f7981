"""Fixture generation commands."""

from typing import Annotated

import typer

from mockforge.cli.context import CLIContext
from mockforge.cli.output import OutputFormatter
from mockforge.cli.parsing import parse_assignments

# Create fixtures subcommand group
app = typer.Typer(help="Generate fixture records")


@app.command("create")
def fixtures_create(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Model name")],
    count: Annotated[
        int | None,
        typer.Option("--count", "-n", help="Create a list of this many records"),
    ] = None,
    traits: Annotated[
        list[str] | None,
        typer.Option("--trait", "-t", help="Factory trait to apply. Can be repeated."),
    ] = None,
    overrides: Annotated[
        list[str] | None,
        typer.Option("--set", help="Attribute override key=value. Can be repeated."),
    ] = None,
) -> None:
    """Create records and print them.

    Examples:

        mockforge fixtures create contact
        mockforge fixtures create post --count 3 --set author_id=1
    """
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        server = cli_ctx.get_server()
        attrs = parse_assignments(overrides)
        trait_names = traits or []
        if count is None:
            records = [server.create(name, *trait_names, **attrs)]
        else:
            records = server.create_list(name, count, *trait_names, **attrs)

        formatter.print_warnings(cli_ctx.reporter.messages)
        model_name = records[0].model_name if records else name
        formatter.print_records(model_name, [record.to_dict() for record in records])
    except Exception as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)
    finally:
        cli_ctx.close()


@app.command("build")
def fixtures_build(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Model name")],
    traits: Annotated[
        list[str] | None,
        typer.Option("--trait", "-t", help="Factory trait to apply. Can be repeated."),
    ] = None,
    overrides: Annotated[
        list[str] | None,
        typer.Option("--set", help="Attribute override key=value. Can be repeated."),
    ] = None,
) -> None:
    """Print the attributes a record would get, without storing it."""
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        server = cli_ctx.get_server()
        attrs = server.build(name, *(traits or []), **parse_assignments(overrides))
        formatter.print_warnings(cli_ctx.reporter.messages)
        formatter.print_data(attrs)
    except Exception as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)
    finally:
        cli_ctx.close()
