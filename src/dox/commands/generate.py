"""Generate command implementation."""

import logging
from pathlib import Path

import typer

from ..config import ConfigError, load_config
from ..core import (
    RunContext,
    StepConfigurationError,
    StepError,
    clean_steps,
    parse_step_list,
    resolve_steps,
    run_steps,
)
from ..models import Host
from ..output import get_output_context
from ..steps import ValidateLinksStep, build_registry
from .deploy import run_deploy

logger = logging.getLogger(__name__)


def load_run_context(
    input_dir: Path,
    output_dir: Path | None = None,
    host: Host = Host.LOCAL,
    branch: str | None = None,
    validate_links: bool = False,
    set_teamcity: bool = False,
    set_user_env: bool = False,
) -> RunContext:
    """Load configuration and build the context for one run.

    Exits the process on configuration errors.
    """
    ctx = get_output_context()
    input_dir = input_dir.resolve()
    if not input_dir.is_dir():
        ctx.error(f"Input directory not found: {input_dir}")
        raise typer.Exit(1)

    try:
        config = load_config(input_dir)
    except ConfigError as e:
        ctx.error(str(e))
        raise typer.Exit(1) from None

    context = RunContext(
        config=config,
        input_dir=input_dir,
        output_dir=output_dir.resolve() if output_dir else None,
        host=host,
        branch=branch,
        validate_links=validate_links or config.links.validate_links,
        is_ci=RunContext.detect_ci(config),
        set_teamcity=set_teamcity,
        set_user_env=set_user_env,
    )
    logger.debug(f"Input directory: {context.input_dir}")
    logger.debug(f"CI agent: {context.is_ci}")
    return context


def requested_step_names(context: RunContext, steps: str | None) -> list[str]:
    """Get the step names a run asked for, adding validation when requested."""
    if steps is None:
        names = list(context.config.steps.default)
    else:
        # An explicit empty list stays empty and fails resolution
        names = parse_step_list(steps)
    identifier = ValidateLinksStep.identifier
    if names and context.validate_links and identifier not in (n.lower() for n in names):
        names.append(identifier)
    return names


def generate(
    typer_ctx: typer.Context,
    input_dir: Path = typer.Option(
        Path("."), "--input", "-i", help="Documentation input directory"
    ),
    output_dir: Path | None = typer.Option(
        None, "--output", "-o", help="Folder to copy the built site to"
    ),
    steps: str | None = typer.Option(
        None, "--steps", "-s", help="Comma-separated step identifiers to run, in order"
    ),
    host: Host = typer.Option(Host.LOCAL, "--host", help="Host to rewrite links for"),
    clean: bool = typer.Option(False, "--clean", help="Clean step output before running"),
    validate_links: bool = typer.Option(
        False, "--validate-links", help="Probe every link after rewriting"
    ),
    deploy: bool = typer.Option(False, "--deploy", help="Deploy after a successful run"),
    branch: str | None = typer.Option(None, "--branch", "-b", help="Site branch to deploy to"),
    set_teamcity: bool = typer.Option(
        False, "--set-teamcity", help="Emit TeamCity parameters for exported values"
    ),
    set_user_env: bool = typer.Option(
        False, "--set-user-env", help="Export values to the process environment"
    ),
) -> None:
    """Run the documentation pipeline."""
    ctx = get_output_context()
    if typer_ctx.args:
        logger.debug(f"Ignoring unrecognized arguments: {' '.join(typer_ctx.args)}")

    context = load_run_context(
        input_dir,
        output_dir=output_dir,
        host=host,
        branch=branch,
        validate_links=validate_links,
        set_teamcity=set_teamcity,
        set_user_env=set_user_env,
    )

    registry = build_registry()
    try:
        sequence = resolve_steps(requested_step_names(context, steps), registry)
    except StepConfigurationError as e:
        ctx.error(str(e))
        raise typer.Exit(1) from None

    ctx.print(f"Generating with steps: {', '.join(s.identifier for s in sequence)}")

    try:
        if clean:
            clean_steps(sequence, context)
        run_steps(sequence, context, ctx)
    except StepError as e:
        ctx.error(str(e))
        raise typer.Exit(1) from None

    ctx.success("Generation complete.")

    if deploy:
        if context.is_hosting:
            ctx.print("Skipping deployment as documentation is being served.")
            return
        run_deploy(context)
