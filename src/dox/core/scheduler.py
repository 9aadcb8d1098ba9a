"""Step selection and sequential execution.

The run order is exactly the order the caller asked for. Declared
prerequisites are never used to reorder or reject steps; a step whose
prerequisites have not completed earlier in the run is reported and
still executed.
"""

import logging
from collections.abc import Sequence

from ..output import OutputContext, get_output_context
from .registry import StepRegistry
from .step import RunContext, Step

logger = logging.getLogger(__name__)


class StepConfigurationError(Exception):
    """The requested step list resolves to nothing runnable."""


def parse_step_list(value: str) -> list[str]:
    """Split a comma-separated step list, dropping blank entries."""
    return [name.strip() for name in value.split(",") if name.strip()]


def resolve_steps(requested: str | Sequence[str], registry: StepRegistry) -> list[Step]:
    """Resolve requested step names into step instances.

    Names are matched case-insensitively. Unknown names are logged and
    dropped; repeated names keep their first position.

    Args:
        requested: Step names, or a comma-separated string of them
        registry: Registered steps

    Returns:
        Steps in requested order

    Raises:
        StepConfigurationError: If no requested name matches a registered step
    """
    names = parse_step_list(requested) if isinstance(requested, str) else requested

    resolved: list[Step] = []
    seen: set[str] = set()
    for name in names:
        key = name.strip().lower()
        if not key:
            continue
        step = registry.get(key)
        if step is None:
            logger.warning(f"Unable to find '{key}' step.")
            continue
        if key in seen:
            logger.debug(f"Ignoring repeated step '{key}'")
            continue
        seen.add(key)
        resolved.append(step)

    if not resolved:
        raise StepConfigurationError("No steps defined.")
    return resolved


def clean_steps(steps: Sequence[Step], context: RunContext) -> None:
    """Ask each step to remove the output of a previous run."""
    for step in steps:
        logger.debug(f"Cleaning {step.identifier}")
        step.clean(context)


def run_steps(
    steps: Sequence[Step],
    context: RunContext,
    output: OutputContext | None = None,
) -> None:
    """Execute steps one at a time, in order.

    A StepError (or any other exception) from a step stops the run and
    propagates to the caller; nothing is retried or rolled back.
    """
    output = output or get_output_context()
    for step in steps:
        output.section_header(step.header)
        missing = step.missing_prerequisites(context)
        if missing:
            logger.warning(
                f"'{step.identifier}' expects {', '.join(missing)} to run first; "
                "its output may be incomplete."
            )
        step.setup(context)
        step.execute(context)
        context.completed.append(step.identifier)
