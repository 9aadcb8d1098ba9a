"""Publishing a built site to the versioned site repository.

The staging clone is reused between runs and is not locked; two deploys
against the same input directory at once will trample each other.
"""

import logging
import shutil
from datetime import date
from pathlib import Path

from ..services import git
from .link_rewriter import rewrite_links
from .step import RunContext

logger = logging.getLogger(__name__)

SITE_REPOSITORY_NAME = "site repository"
DEPLOY_COMMIT_VARIABLE = "DOX_DEPLOY_COMMIT"


class DeployError(Exception):
    """Deployment could not proceed."""


def get_staging_dir(context: RunContext) -> Path:
    """Get the folder the site repository is cloned into."""
    return (context.input_dir / context.config.deploy.staging_folder).resolve()


def replace_tree(source: Path, dest: Path) -> None:
    """Make dest's content mirror source, leaving dest/.git untouched."""
    for child in dest.iterdir():
        if child.name == ".git":
            continue
        if child.is_dir() and not child.is_symlink():
            shutil.rmtree(child)
        else:
            child.unlink()
    shutil.copytree(source, dest, dirs_exist_ok=True)


def build_commit_message(template: str, source_sha: str | None) -> str:
    """Build the site repository commit message."""
    message = template.format(date=date.today().isoformat())
    if source_sha:
        message += f"\n\nSource: {source_sha}"
    return message


def _source_sha(input_dir: Path) -> str | None:
    try:
        return git.get_head_sha(input_dir)
    except git.GitError:
        return None


def deploy(context: RunContext) -> str | None:
    """Publish the built site to the branch selected for this run.

    Args:
        context: Run context; ``branch`` selects the site repository branch

    Returns:
        The pushed commit SHA, or None if the site was unchanged

    Raises:
        ConfigError: If the branch maps to no host
        DeployError: If no branch was given or there is no built site
        GitError: If a clone, commit or push fails
    """
    deploy_config = context.config.deploy
    if not context.branch:
        raise DeployError("A deployment branch is required (--branch).")
    host = deploy_config.host_for_branch(context.branch)

    site_dir = context.site_dir
    if not site_dir.is_dir():
        raise DeployError(f"No built site found at {site_dir}. Run the build step first.")

    staging = get_staging_dir(context)
    git.get_or_update(SITE_REPOSITORY_NAME, staging, deploy_config.repository, deploy_config.depth)
    git.checkout(context.branch, staging)

    logger.info(f"Copying {site_dir} to {staging} ...")
    replace_tree(site_dir, staging)
    rewrite_links(staging, host, context.config.site)

    git.stage_all(staging)
    if not git.has_changes(staging):
        logger.info("No changes to deploy.")
        return None

    message = build_commit_message(deploy_config.commit_message, _source_sha(context.input_dir))
    sha = git.commit(message, staging)
    logger.info(f"Pushing {sha[:12]} to {context.branch} ...")
    git.push(context.branch, staging)

    context.set_environment_variable(DEPLOY_COMMIT_VARIABLE, sha)
    return sha
