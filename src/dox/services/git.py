"""Git operations for dox."""

import logging
import subprocess
from pathlib import Path

from ..constants import GIT_TIMEOUT

logger = logging.getLogger(__name__)


class GitError(Exception):
    """Git command failed."""

    pass


def run_git(*args: str, cwd: Path | None = None, check: bool = True) -> str:
    """Run git command and return stdout.

    Args:
        *args: Git command arguments
        cwd: Working directory
        check: Raise GitError on non-zero exit

    Returns:
        Stripped stdout

    Raises:
        GitError: If the command fails (when check=True), times out, or git is missing
    """
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=GIT_TIMEOUT,
        )
    except subprocess.TimeoutExpired as e:
        raise GitError(f"git {args[0]} timed out after {GIT_TIMEOUT} seconds") from e
    except FileNotFoundError:
        raise GitError("git executable not found") from None
    if check and result.returncode != 0:
        raise GitError(f"git {' '.join(args)} failed: {result.stderr.strip()}")
    return result.stdout.strip()


def clone(uri: str, dest: Path, depth: int | None = None) -> None:
    """Clone a repository into dest."""
    args = ["clone"]
    if depth:
        args.append(f"--depth={depth}")
    args.extend(["--no-single-branch", uri, str(dest)])
    dest.parent.mkdir(parents=True, exist_ok=True)
    run_git(*args)


def is_behind(repo: Path) -> bool:
    """Check whether the current branch is behind its upstream."""
    status = run_git("status", "-sb", cwd=repo)
    first_line = status.splitlines()[0] if status else ""
    return "behind" in first_line


def get_or_update(name: str, repo: Path, uri: str, depth: int | None = None) -> None:
    """Clone a repository, or bring an existing clone up to date.

    An existing clone is fetched; when it is behind its upstream it is
    hard-reset and pulled. Reset and pull failures are logged, not raised,
    since a stale-but-usable clone can still be deployed over.

    Raises:
        GitError: If the clone, fetch or status check fails
    """
    if not (repo / ".git").exists():
        logger.info(f"Getting latest {name} source ...")
        clone(uri, repo, depth)
        return

    logger.info(f"Fetching {name} updates ...")
    run_git("fetch", "origin", cwd=repo)

    if not is_behind(repo):
        logger.info(f"{name} is up-to-date.")
        return

    logger.info(f"Resetting local {name} source ...")
    try:
        run_git("reset", "--hard", cwd=repo)
    except GitError as e:
        logger.warning(f"Unable to reset {name} repository: {e}")

    logger.info(f"Getting latest {name} source ...")
    try:
        run_git("pull", cwd=repo)
    except GitError as e:
        logger.warning(f"Unable to pull updates for {name} repository: {e}")


def checkout(branch: str, repo: Path) -> None:
    """Check out a branch, creating it locally from origin if needed."""
    local = run_git("branch", "--list", branch, cwd=repo)
    if local:
        run_git("checkout", branch, cwd=repo)
        return
    remote = run_git("branch", "-r", "--list", f"origin/{branch}", cwd=repo)
    if remote:
        run_git("checkout", "-b", branch, "--track", f"origin/{branch}", cwd=repo)
    else:
        run_git("checkout", "-b", branch, cwd=repo)


def get_head_sha(repo: Path) -> str:
    """Get the commit SHA of HEAD."""
    return run_git("rev-parse", "HEAD", cwd=repo)


def stage_all(repo: Path) -> None:
    """Stage every change in the working tree."""
    run_git("add", "--all", cwd=repo)


def has_changes(repo: Path) -> bool:
    """Check whether the working tree or index differs from HEAD."""
    return bool(run_git("status", "--porcelain", cwd=repo))


def commit(message: str, repo: Path) -> str:
    """Commit staged changes and return the new HEAD SHA."""
    run_git("commit", "-m", message, cwd=repo)
    return get_head_sha(repo)


def push(branch: str, repo: Path) -> None:
    """Push a branch to origin, setting upstream."""
    run_git("push", "--set-upstream", "origin", branch, cwd=repo)
