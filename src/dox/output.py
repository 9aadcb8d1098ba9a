"""Output formatting for dox CLI."""

from dataclasses import dataclass

from rich.console import Console
from rich.rule import Rule


@dataclass
class OutputContext:
    """User-facing console output, separate from the log stream."""

    console: Console

    def print(self, message: str, style: str | None = None) -> None:
        """Print a message, optionally styled."""
        self.console.print(message, style=style)

    def section_header(self, title: str) -> None:
        """Print a section divider announcing a step."""
        self.console.print(Rule(f"[bold]{title}[/bold]", align="left"))

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]{message}[/yellow]")

    def error(self, message: str) -> None:
        """Print a fatal error as a single line."""
        self.console.print(f"[red]Error: {message}[/red]")

    def success(self, message: str) -> None:
        self.console.print(f"[green]{message}[/green]")


_current: OutputContext | None = None


def get_output_context() -> OutputContext:
    """Return the context installed by the CLI callback.

    Outside the CLI (library use, tests) a plain stdout context is used.
    """
    return _current if _current is not None else OutputContext(Console())


def set_output_context(ctx: OutputContext) -> None:
    global _current
    _current = ctx
