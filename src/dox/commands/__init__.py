"""CLI command implementations for dox.

This package contains the implementation of each CLI command,
separated from the CLI framework setup in cli.py.
"""

from .deploy import deploy, run_deploy
from .generate import generate, load_run_context
from .init import init
from .links import links_app, links_check, links_rewrite
from .steps import list_steps

__all__ = [
    "deploy",
    "generate",
    "init",
    "links_app",
    "links_check",
    "links_rewrite",
    "list_steps",
    "load_run_context",
    "run_deploy",
]
