"""Init command implementation."""

from pathlib import Path

import typer

from ..config import write_config_template
from ..constants import CONFIG_FILE
from ..output import get_output_context


def init(
    input_dir: Path = typer.Option(
        Path("."), "--input", "-i", help="Documentation input directory"
    ),
) -> None:
    """Write a dox.toml template into the input directory."""
    ctx = get_output_context()

    if not input_dir.is_dir():
        ctx.error(f"Input directory not found: {input_dir}")
        raise typer.Exit(1)

    config_path = input_dir / CONFIG_FILE
    if config_path.exists():
        ctx.warning(f"Config already exists: {config_path}")
        return

    write_config_template(input_dir)
    ctx.success(f"Created config template: {config_path}")
