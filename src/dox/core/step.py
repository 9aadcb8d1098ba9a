"""Step contract and per-run context.

A step is one named, independently selectable unit of the documentation
pipeline. Steps are instantiated once per process, executed at most once
per run, and may be asked to clean up their previous output before a
fresh run.
"""

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar

from ..config import DoxConfig
from ..models import Host
from ..services import set_environment_variable


class StepError(Exception):
    """A step failed in a way that invalidates the rest of the run."""


@dataclass
class RunContext:
    """Everything a step needs to know about the current run.

    Built once by the command that starts the run and handed to every
    step.
    """

    config: DoxConfig
    input_dir: Path
    output_dir: Path | None = None
    host: Host = Host.LOCAL
    branch: str | None = None
    validate_links: bool = False
    is_ci: bool = False
    set_teamcity: bool = False
    set_user_env: bool = False
    completed: list[str] = field(default_factory=list)
    is_hosting: bool = False

    @classmethod
    def detect_ci(cls, config: DoxConfig) -> bool:
        """Return True when running on a CI agent."""
        return os.environ.get(config.ci.env_var) is not None

    @property
    def docfx_dir(self) -> Path:
        return self.input_dir / self.config.docfx.folder

    @property
    def docfx_config_path(self) -> Path:
        return self.docfx_dir / self.config.docfx.config_file

    @property
    def site_dir(self) -> Path:
        """Folder DocFX writes the built site to."""
        return self.docfx_dir / self.config.docfx.site_folder

    @property
    def reports_dir(self) -> Path:
        return self.docfx_dir / "reports"

    @property
    def ci_staging_dir(self) -> Path:
        """Folder CI drops report artifacts into."""
        return (self.input_dir / self.config.ci.staging_folder).resolve()

    def require_docfx_config(self) -> Path:
        """Get docfx.json, failing the run if it is missing.

        Raises:
            StepError: If docfx.json does not exist
        """
        path = self.docfx_config_path
        if not path.is_file():
            raise StepError(f"Unable to find required docfx.json at {path}.")
        return path

    def set_environment_variable(self, name: str, value: str) -> None:
        """Propagate a variable according to the run's propagation flags."""
        set_environment_variable(
            name, value, teamcity=self.set_teamcity, user_env=self.set_user_env
        )


class Step(ABC):
    """Base class for pipeline steps.

    Subclasses set ``identifier`` (lowercase, no whitespace), ``header``
    (shown when the step starts) and optionally ``requires``, the
    identifiers of steps expected to have run earlier in the sequence.
    ``requires`` is advisory: the scheduler reports a missing prerequisite
    but still runs the step.
    """

    identifier: ClassVar[str]
    header: ClassVar[str]
    requires: ClassVar[tuple[str, ...]] = ()

    def setup(self, context: RunContext) -> None:
        """Prepare anything execute() needs. Runs right before execute()."""

    @abstractmethod
    def execute(self, context: RunContext) -> None:
        """Do the step's work.

        Raises:
            StepError: If the step cannot produce valid output
        """

    def clean(self, context: RunContext) -> None:
        """Remove whatever a previous execute() produced."""

    def missing_prerequisites(self, context: RunContext) -> list[str]:
        """Get declared prerequisites that have not completed in this run."""
        return [r for r in self.requires if r not in context.completed]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.identifier!r})"
