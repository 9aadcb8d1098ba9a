"""Core pipeline logic for dox.

- step: Step contract and the per-run RunContext
- registry: StepRegistry of known steps
- scheduler: Step selection, cleaning and sequential execution
- link_extractor: Href extraction from generated documents
- link_rewriter: In-place host rewriting of a site tree
- link_validator: Live probing and classification of a site's links
- deployer: Publishing to the versioned site repository
"""

from .deployer import DeployError, deploy
from .link_extractor import extract_links, strip_fragment_and_query
from .link_rewriter import apply_substitutions, rewrite_links
from .link_validator import LinkValidator, classify, relative_directory, resolve_link
from .registry import StepRegistrationError, StepRegistry
from .scheduler import (
    StepConfigurationError,
    clean_steps,
    parse_step_list,
    resolve_steps,
    run_steps,
)
from .step import RunContext, Step, StepError

__all__ = [
    "DeployError",
    "LinkValidator",
    "RunContext",
    "Step",
    "StepConfigurationError",
    "StepError",
    "StepRegistrationError",
    "StepRegistry",
    "apply_substitutions",
    "classify",
    "clean_steps",
    "deploy",
    "extract_links",
    "parse_step_list",
    "relative_directory",
    "resolve_link",
    "resolve_steps",
    "rewrite_links",
    "run_steps",
    "strip_fragment_and_query",
]
