"""Steps that republish repository files as documentation pages."""

import logging
from pathlib import Path

from ..constants import FRONT_MATTER
from ..core.step import RunContext, Step, StepError

logger = logging.getLogger(__name__)


class RepositoryFileStep(Step):
    """Copy a file from the input directory into the DocFX folder as a page.

    The page gets front matter disabling DocFX's "improve this doc" link,
    since the file is not edited where DocFX would point.
    """

    source_name: str
    page_name: str
    title: str | None = None

    def source_path(self, context: RunContext) -> Path:
        return context.input_dir / self.source_name

    def page_path(self, context: RunContext) -> Path:
        return context.docfx_dir / self.page_name

    def clean(self, context: RunContext) -> None:
        path = self.page_path(context)
        if path.exists():
            logger.info(f"Cleaning up previous {self.page_name}.")
            path.unlink()

    def execute(self, context: RunContext) -> None:
        source = self.source_path(context)
        if not source.is_file():
            raise StepError(f"Unable to find {source}.")

        logger.info(f"Reading {source}.")
        body = source.read_text(encoding="utf-8")
        heading = f"# {self.title}\n" if self.title else ""

        page = self.page_path(context)
        page.parent.mkdir(parents=True, exist_ok=True)
        logger.info(f"Writing {page}.")
        page.write_text(f"{FRONT_MATTER}{heading}{body}", encoding="utf-8")


class ChangelogStep(RepositoryFileStep):
    identifier = "files-changelog"
    header = "Create Changelog"
    source_name = "CHANGELOG.md"
    page_name = "changelog.md"


class LicenseStep(RepositoryFileStep):
    identifier = "files-license"
    header = "License"
    source_name = "LICENSE"
    page_name = "license.md"
    title = "License"
