"""Steps listing command."""

from rich.table import Table

from ..output import get_output_context
from ..steps import build_registry


def list_steps() -> None:
    """List every registered step."""
    ctx = get_output_context()
    registry = build_registry()

    table = Table(title="Steps")
    table.add_column("Identifier", style="cyan")
    table.add_column("Header")
    table.add_column("Requires")
    for step in registry:
        table.add_row(step.identifier, step.header, ", ".join(step.requires) or "-")
    ctx.console.print(table)
