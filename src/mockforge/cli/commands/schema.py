"""Schema inspection commands."""

from typing import Annotated

import typer

from mockforge.cli.context import CLIContext
from mockforge.cli.output import OutputFormatter
from mockforge.schema.registry import resolve_type

# Create schema subcommand group
app = typer.Typer(help="Inspect models and factories from the schema file")


@app.command("describe")
def schema_describe(ctx: typer.Context) -> None:
    """List registered models and factories."""
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        server = cli_ctx.get_server()
        formatter.print_schema_info(server.describe())
    except Exception as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)
    finally:
        cli_ctx.close()


@app.command("resolve")
def schema_resolve(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Model name as a caller would type it")],
) -> None:
    """Show which canonical model a name resolves to.

    Examples:

        mockforge schema resolve contacts
        mockforge schema resolve amazing-contact
    """
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        server = cli_ctx.get_server()
        normalized = server.names.normalize(name)
        resolved = resolve_type(server.models, server.factories, normalized, "create")
        formatter.print_success(
            f"'{name}' resolves to '{resolved.name}'",
            {
                "requested": normalized.requested,
                "canonical": resolved.name,
                "kind": resolved.kind.value,
                "warning": normalized.warning,
            },
        )
    except Exception as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)
    finally:
        cli_ctx.close()
