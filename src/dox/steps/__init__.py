"""Concrete pipeline steps.

``STEP_TYPES`` is the single registration table: adding a step to the
pipeline means adding its class here.
"""

from ..core.registry import StepRegistry
from ..core.step import Step
from .docfx import BuildStep, HostStep, MetadataStep
from .files import ChangelogStep, LicenseStep
from .links import LinksStep, ValidateLinksStep
from .reports import CodeCoverageStep, CodeDuplicationStep, CodeInspectionStep

STEP_TYPES: tuple[type[Step], ...] = (
    ChangelogStep,
    LicenseStep,
    MetadataStep,
    CodeInspectionStep,
    CodeDuplicationStep,
    CodeCoverageStep,
    BuildStep,
    LinksStep,
    HostStep,
    ValidateLinksStep,
)


def build_registry() -> StepRegistry:
    """Instantiate and register every known step."""
    registry = StepRegistry(step_type() for step_type in STEP_TYPES)
    registry.check_prerequisites()
    return registry


__all__ = [
    "STEP_TYPES",
    "BuildStep",
    "ChangelogStep",
    "CodeCoverageStep",
    "CodeDuplicationStep",
    "CodeInspectionStep",
    "HostStep",
    "LicenseStep",
    "LinksStep",
    "MetadataStep",
    "ValidateLinksStep",
    "build_registry",
]
