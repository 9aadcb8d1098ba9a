"""Dox CLI: documentation build-and-deploy pipeline."""

import typer

from dox import __version__

from .commands import deploy, generate, init, links_app, list_steps
from .logging import configure_logging
from .output import OutputContext, set_output_context

# Unknown flags are accepted without effect
LENIENT = {"allow_extra_args": True, "ignore_unknown_options": True}


def _version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"dox {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="dox",
    help="Build, host and deploy DocFX documentation",
    no_args_is_help=True,
)


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase verbosity (-v, -vv)",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress non-error output",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
) -> None:
    """Dox - documentation build-and-deploy pipeline."""
    console = configure_logging(
        verbosity=verbose,
        quiet=quiet,
        no_color=no_color,
    )
    set_output_context(OutputContext(console=console))


app.command(context_settings=LENIENT)(generate)
app.command(context_settings=LENIENT)(deploy)
app.command("steps")(list_steps)
app.command()(init)
app.add_typer(links_app, name="links")


if __name__ == "__main__":
    app()
