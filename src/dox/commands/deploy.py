"""Deploy command implementation."""

from pathlib import Path

import typer

from ..config import ConfigError
from ..core import DeployError, RunContext
from ..core import deploy as deploy_site
from ..output import get_output_context
from ..services import GitError


def run_deploy(context: RunContext) -> str | None:
    """Deploy the built site, exiting the process on failure."""
    ctx = get_output_context()
    ctx.section_header("Deploy")
    try:
        sha = deploy_site(context)
    except (ConfigError, DeployError) as e:
        ctx.error(str(e))
        raise typer.Exit(1) from None
    except GitError as e:
        ctx.error(f"Deployment failed: {e}")
        raise typer.Exit(3) from None

    if sha:
        ctx.success(f"Deployed {sha[:12]} to {context.branch}.")
    else:
        ctx.print("Site repository already up to date.")
    return sha


def deploy(
    branch: str = typer.Option(..., "--branch", "-b", help="Site branch to deploy to"),
    input_dir: Path = typer.Option(
        Path("."), "--input", "-i", help="Documentation input directory"
    ),
    set_teamcity: bool = typer.Option(
        False, "--set-teamcity", help="Emit TeamCity parameters for exported values"
    ),
    set_user_env: bool = typer.Option(
        False, "--set-user-env", help="Export values to the process environment"
    ),
) -> None:
    """Publish a previously built site to the site repository."""
    from .generate import load_run_context

    context = load_run_context(
        input_dir,
        branch=branch,
        set_teamcity=set_teamcity,
        set_user_env=set_user_env,
    )
    run_deploy(context)
