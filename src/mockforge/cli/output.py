"""Output formatting for CLI commands."""

import json
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from mockforge.core.types import SchemaInfo
from mockforge.exceptions import MockForgeError

console = Console()
err_console = Console(stderr=True)


class OutputFormatter:
    """Formats output for terminal or JSON mode."""

    def __init__(self, json_mode: bool = False) -> None:
        """Initialize formatter.

        Args:
            json_mode: If True, output JSON instead of Rich formatting
        """
        self.json_mode = json_mode

    def print_table(
        self,
        title: str,
        data: list[dict[str, Any]],
        columns: list[str],
    ) -> None:
        """Print data as Rich table or JSON array.

        Args:
            title: Table title
            data: List of row dictionaries
            columns: Column names to display
        """
        if self.json_mode:
            print(json.dumps(data, default=str, indent=2))
        else:
            table = Table(title=title, show_header=True, header_style="bold magenta")
            for col in columns:
                table.add_column(col)
            for row in data:
                table.add_row(*[str(row.get(col, "")) for col in columns])
            console.print(table)

    def print_records(self, model_name: str, records: list[dict[str, Any]]) -> None:
        """Print created records, one column per attribute seen."""
        columns: list[str] = []
        for record in records:
            for key in record:
                if key not in columns:
                    columns.append(key)
        self.print_table(f"{model_name} ({len(records)} records)", records, columns)

    def print_schema_info(self, schema: SchemaInfo) -> None:
        """Print registered models and factories.

        Args:
            schema: Schema information to display
        """
        if self.json_mode:
            print(json.dumps(schema.to_dict(), indent=2))
            return

        table = Table(
            title=f"Types ({schema.total_types} total)",
            show_header=True,
            header_style="bold magenta",
        )
        table.add_column("Name")
        table.add_column("Kind")
        table.add_column("Relationships")
        table.add_column("Attributes")
        table.add_column("Traits")

        for info in schema.types.values():
            relationships = ", ".join(
                f"{r.name} ({r.kind.value} {r.target})" for r in info.relationships
            )
            table.add_row(
                info.name,
                info.kind.value,
                relationships,
                ", ".join(info.attributes),
                ", ".join(info.traits),
            )
        console.print(table)

    def print_success(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Print success message.

        Args:
            message: Success message
            details: Optional details to display
        """
        if self.json_mode:
            output = {"success": True, "message": message}
            if details:
                output.update(details)
            print(json.dumps(output, default=str, indent=2))
        else:
            console.print(f"✓ {message}", style="green")
            if details:
                for key, value in details.items():
                    console.print(f"  {key}: {value}", style="dim")

    def print_warnings(self, messages: list[str]) -> None:
        """Print advisory warnings to stderr."""
        for message in messages:
            err_console.print(
                f"warning: {message}", style="yellow", highlight=False, soft_wrap=True
            )

    def print_error(self, error: Exception) -> None:
        """Print error message.

        Args:
            error: Exception to display
        """
        if self.json_mode:
            if isinstance(error, MockForgeError):
                print(json.dumps(error.to_dict(), default=str, indent=2))
            else:
                print(json.dumps({"error": str(error)}, indent=2))
        else:
            error_text = str(error)
            if isinstance(error, MockForgeError) and error.context:
                context_str = "\n".join(f"{k}: {v}" for k, v in error.context.items())
                error_text = f"{error_text}\n\n{context_str}"

            panel = Panel(
                error_text,
                title="[red]Error[/red]",
                border_style="red",
            )
            console.print(panel)

    def print_data(self, data: Any) -> None:
        """Print generic data (dict, list, etc.).

        Args:
            data: Data to print
        """
        if self.json_mode:
            print(json.dumps(data, default=str, indent=2))
        else:
            console.print_json(json.dumps(data, default=str))
