"""Registry of known steps, keyed by identifier."""

import logging
import re
from collections.abc import Iterable, Iterator

from .step import Step

logger = logging.getLogger(__name__)

IDENTIFIER_PATTERN = re.compile(r"^[a-z0-9][a-z0-9._-]*$")


class StepRegistrationError(Exception):
    """A step could not be registered."""


class StepRegistry:
    """All step instances available to a run, in registration order."""

    def __init__(self, steps: Iterable[Step] = ()) -> None:
        self._steps: dict[str, Step] = {}
        for step in steps:
            self.register(step)

    def register(self, step: Step) -> None:
        """Add a step instance.

        Raises:
            StepRegistrationError: If the identifier is malformed or taken
        """
        identifier = getattr(step, "identifier", "")
        if not IDENTIFIER_PATTERN.match(identifier):
            raise StepRegistrationError(
                f"Invalid step identifier {identifier!r}: use lowercase with no spaces"
            )
        if identifier in self._steps:
            existing = type(self._steps[identifier]).__name__
            raise StepRegistrationError(
                f"Step identifier '{identifier}' is already registered by {existing}"
            )
        self._steps[identifier] = step

    def get(self, identifier: str) -> Step | None:
        """Look up a step; identifiers are matched case-insensitively."""
        return self._steps.get(identifier.strip().lower())

    def identifiers(self) -> list[str]:
        return list(self._steps)

    def check_prerequisites(self) -> list[str]:
        """Warn about declared prerequisites that name no registered step.

        Returns:
            One message per unresolved prerequisite
        """
        problems = []
        for identifier, step in self._steps.items():
            for required in step.requires:
                if required not in self._steps:
                    message = f"Step '{identifier}' requires unknown step '{required}'"
                    logger.warning(message)
                    problems.append(message)
        return problems

    def __contains__(self, identifier: object) -> bool:
        return isinstance(identifier, str) and identifier.strip().lower() in self._steps

    def __iter__(self) -> Iterator[Step]:
        return iter(self._steps.values())

    def __len__(self) -> int:
        return len(self._steps)
