"""Link rewrite and check commands."""

from pathlib import Path

import typer
from rich.table import Table

from ..config import ConfigError, DoxConfig, load_config
from ..core import LinkValidator, rewrite_links
from ..models import Host
from ..output import get_output_context

links_app = typer.Typer(help="Rewrite or validate the links of a built site")


def _load_config(input_dir: Path) -> DoxConfig:
    ctx = get_output_context()
    try:
        return load_config(input_dir)
    except ConfigError as e:
        ctx.error(str(e))
        raise typer.Exit(1) from None


def _require_dir(root: Path) -> None:
    if not root.is_dir():
        get_output_context().error(f"Directory not found: {root}")
        raise typer.Exit(1)


@links_app.command("rewrite")
def links_rewrite(
    root: Path = typer.Argument(..., help="Site root directory"),
    host: Host = typer.Option(..., "--host", help="Host to rewrite links for"),
    input_dir: Path = typer.Option(Path("."), "--input", "-i", help="Folder holding dox.toml"),
) -> None:
    """Rewrite host-relative links in place."""
    _require_dir(root)
    modified = rewrite_links(root, host, _load_config(input_dir).site)
    get_output_context().success(f"Rewrote {modified} file(s) for {host.value}.")


@links_app.command("check")
def links_check(
    root: Path = typer.Argument(..., help="Site root directory"),
    host: Host = typer.Option(Host.LOCAL, "--host", help="Host relative links resolve against"),
    input_dir: Path = typer.Option(Path("."), "--input", "-i", help="Folder holding dox.toml"),
    timeout: float | None = typer.Option(None, "--timeout", help="Seconds per probe"),
    strict: bool = typer.Option(False, "--strict", help="Exit non-zero if any link is bad"),
) -> None:
    """Probe every link in a site and summarize the results."""
    ctx = get_output_context()
    _require_dir(root)
    config = _load_config(input_dir)
    validator = LinkValidator(
        config.site, timeout=timeout if timeout is not None else config.links.probe_timeout
    )
    summary = validator.validate(root.resolve(), host)

    if summary.failed:
        table = Table(title="Bad links")
        table.add_column("URL")
        table.add_column("Status", justify="right")
        table.add_column("Pages", justify="right")
        for result in summary.failed:
            table.add_row(result.url, str(result.status_code), str(len(result.occurrences)))
        ctx.console.print(table)

    ctx.print(f"Files checked: {summary.files_checked}")
    ctx.print(f"Good Links: {summary.good}")
    ctx.print(f"GitHub Links: {summary.github}")
    ctx.print(f"Bad Links: {summary.bad}", style="red" if summary.bad else None)

    if strict and summary.bad:
        raise typer.Exit(1)
