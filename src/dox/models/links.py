"""Link models for extraction and validation results.

A validation pass produces one ``ValidationResult`` per distinct absolute
URL. Every file/href pair that resolved to that URL is kept as a
``LinkRecord`` occurrence so a broken link can be traced back to all of
the pages that reference it.
"""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class LinkStatus(str, Enum):
    """Classification of a probed link."""

    GOOD = "good"
    GITHUB = "github"  # Failed against github.com; inconclusive
    BAD = "bad"


class LinkRecord(BaseModel):
    """A single hyperlink found in one document.

    Attributes:
        href: Href as extracted (fragment and query already stripped).
        url: Absolute URL the href resolves to for the validated host.
        source: File the href was found in.
        relative_dir: Directory of ``source`` relative to the document root,
            with a trailing slash (empty for files at the root).
    """

    href: str = Field(description="Extracted href text")
    url: str = Field(description="Resolved absolute URL")
    source: Path = Field(description="Originating file")
    relative_dir: str = Field(default="", description="Source directory relative to root")


class ValidationResult(BaseModel):
    """Probe outcome for one distinct absolute URL."""

    url: str = Field(description="Absolute URL probed")
    status: LinkStatus = Field(description="Classification of the probe")
    status_code: int = Field(description="HTTP status (502 on network failure)")
    occurrences: list[LinkRecord] = Field(
        default_factory=list, description="Every file/href that resolved to this URL"
    )


class ValidationSummary(BaseModel):
    """Totals for one validation pass."""

    files_checked: int = Field(default=0, description="Number of HTML files scanned")
    good: int = Field(default=0, description="Distinct URLs that returned 2xx")
    github: int = Field(default=0, description="Distinct github.com URLs that failed")
    bad: int = Field(default=0, description="Distinct URLs that failed")
    results: list[ValidationResult] = Field(default_factory=list, description="Per-URL results")

    @property
    def failed(self) -> list[ValidationResult]:
        """Results classified as bad."""
        return [r for r in self.results if r.status == LinkStatus.BAD]
