"""Steps that publish CI-produced reports into the documentation.

These reports only exist on a CI agent. Outside CI each step skips (or
writes a stub so the site's report links still resolve).
"""

import logging
import shutil
import xml.etree.ElementTree as ET
from pathlib import Path

from ..constants import FRONT_MATTER
from ..core.step import RunContext, Step, StepError

logger = logging.getLogger(__name__)

COVERAGE_STUB = "This is a stub for actual content generated by CI/CD"


def _remove_tree(path: Path, label: str) -> None:
    if path.exists():
        shutil.rmtree(path)
        logger.info(f"Removed previous {label}.")


def _table_cell(value: str) -> str:
    return value.replace("|", "\\|").replace("\n", " ").strip()


def render_inspection_report(xml_text: str, title: str) -> str:
    """Render a ReSharper InspectCode XML report as a markdown page.

    Raises:
        ET.ParseError: If the XML is malformed
    """
    root = ET.fromstring(xml_text)
    severities = {
        issue_type.get("Id", ""): issue_type.get("Severity", "")
        for issue_type in root.iter("IssueType")
    }

    rows = []
    for project in root.iter("Project"):
        for issue in project.iter("Issue"):
            type_id = issue.get("TypeId", "")
            rows.append(
                (
                    issue.get("File", ""),
                    issue.get("Line", ""),
                    issue.get("Severity") or severities.get(type_id, ""),
                    type_id,
                    issue.get("Message", ""),
                )
            )

    lines = [f"{FRONT_MATTER}# {title}", "", f"{len(rows)} issue(s) found.", ""]
    if rows:
        lines.append("File | Line | Severity | Type | Message")
        lines.append("---- | ---- | ---- | ---- | ----")
        for row in sorted(rows):
            lines.append(" | ".join(_table_cell(cell) for cell in row))
    return "\n".join(lines) + "\n"


class CodeInspectionStep(Step):
    identifier = "code-inspection"
    header = "Code Inspection"
    title = "Code Inspection"

    def page_path(self, context: RunContext) -> Path:
        return context.reports_dir / "inspection.md"

    def clean(self, context: RunContext) -> None:
        page = self.page_path(context)
        page.parent.mkdir(parents=True, exist_ok=True)
        page.write_text(f"{FRONT_MATTER}# {self.title}\n\nTo be generated.", encoding="utf-8")
        logger.info("Reset inspection report.")

    def execute(self, context: RunContext) -> None:
        if not context.is_ci:
            logger.info("Skipping. Not running inside of CI/CD.")
            return

        artifact = context.ci_staging_dir / context.config.ci.inspection_file
        if not artifact.is_file():
            logger.warning(f"Unable to find code inspection artifacts at {artifact}.")
            return

        try:
            report = render_inspection_report(artifact.read_text(encoding="utf-8"), self.title)
        except ET.ParseError as e:
            logger.warning(f"Unable to read {artifact}: {e}")
            return

        page = self.page_path(context)
        page.parent.mkdir(parents=True, exist_ok=True)
        page.write_text(report, encoding="utf-8")
        logger.info(f"Wrote {page}.")


class CodeDuplicationStep(Step):
    identifier = "code-duplication"
    header = "Code Duplication"

    def report_dir(self, context: RunContext) -> Path:
        return context.reports_dir / "duplicates"

    def clean(self, context: RunContext) -> None:
        _remove_tree(self.report_dir(context), "duplication report")

    def execute(self, context: RunContext) -> None:
        if not context.is_ci:
            logger.info("Skipping. Not running inside of CI/CD.")
            return

        artifact = context.ci_staging_dir / context.config.ci.duplicates_file
        if not artifact.is_file():
            logger.warning(f"Unable to find code duplication artifacts at {artifact}.")
            return

        logger.info("Copying code duplication artifacts.")
        report_dir = self.report_dir(context)
        report_dir.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(artifact, report_dir / "duplicates.xml")


class CodeCoverageStep(Step):
    identifier = "code-coverage"
    header = "Code Coverage"

    def report_dir(self, context: RunContext) -> Path:
        return context.reports_dir / "coverage"

    def clean(self, context: RunContext) -> None:
        _remove_tree(self.report_dir(context), "coverage report")

    def execute(self, context: RunContext) -> None:
        report_dir = self.report_dir(context)
        if not context.is_ci:
            stub_dir = report_dir / "Report"
            stub_dir.mkdir(parents=True, exist_ok=True)
            (stub_dir / "index.html").write_text(COVERAGE_STUB, encoding="utf-8")
            logger.info("Skipping w/ stub created. Not running inside of CI/CD.")
            return

        artifact = context.ci_staging_dir / context.config.ci.coverage_folder
        if not artifact.is_dir():
            raise StepError(f"Unable to find code coverage artifacts at {artifact}.")

        logger.info(f"Copying {artifact} => {report_dir}")
        shutil.copytree(artifact, report_dir, dirs_exist_ok=True)
