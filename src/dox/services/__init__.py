"""External service integrations for dox.

This package provides interfaces to the tools dox drives but does not own:
- git: Site repository clone/update/commit/push
- docfx: The external documentation builder
- http: Bounded-timeout HTTP probes
- environment: Variable propagation to CI and the process environment
"""

from .docfx import DocFxError, DocFxMode, run_docfx, serve
from .environment import set_environment_variable, teamcity_message
from .git import (
    GitError,
    checkout,
    clone,
    commit,
    get_head_sha,
    get_or_update,
    has_changes,
    push,
    run_git,
    stage_all,
)
from .http import is_online, is_success, probe, wait_until_ready

__all__ = [
    "DocFxError",
    "DocFxMode",
    "GitError",
    "checkout",
    "clone",
    "commit",
    "get_head_sha",
    "get_or_update",
    "has_changes",
    "is_online",
    "is_success",
    "probe",
    "push",
    "run_docfx",
    "run_git",
    "serve",
    "set_environment_variable",
    "stage_all",
    "teamcity_message",
    "wait_until_ready",
]
