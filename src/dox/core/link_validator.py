"""Live validation of the hyperlinks in a generated site.

Every href in every HTML page is resolved to an absolute URL for the
target host and probed once per pass. Results are cached by literal URL
for the duration of a pass, so a link shared by hundreds of pages costs a
single request. A failing github.com link is reported separately: GitHub
routinely answers scrapers with 404/429, so those are inconclusive rather
than broken.
"""

import logging
from collections.abc import Callable
from pathlib import Path
from urllib.parse import urlparse

from ..config import SiteConfig
from ..constants import PROBE_TIMEOUT
from ..models import Host, LinkRecord, LinkStatus, ValidationResult, ValidationSummary
from ..services import http
from .link_extractor import extract_links

logger = logging.getLogger(__name__)

HTML_SUFFIXES = (".htm", ".html")
GITHUB_HOST = "github.com"

Probe = Callable[[str, float], int]


def relative_directory(path: Path, root: Path) -> str:
    """Get the directory of path relative to root, with a trailing slash.

    Files directly under root yield an empty string.
    """
    relative = path.parent.relative_to(root).as_posix()
    if relative in ("", "."):
        return ""
    return f"{relative}/"


def resolve_link(href: str, base_url: str, relative_dir: str) -> str:
    """Turn an extracted href into an absolute URL.

    Args:
        href: Extracted href
        base_url: Host base URL, ending with a slash
        relative_dir: Directory of the referencing page relative to the site root

    Returns:
        The href unchanged if already absolute; otherwise resolved against
        the site root (leading slash) or the page's directory
    """
    if href.startswith(("http://", "https://")):
        return href
    if href.startswith("/"):
        return f"{base_url}{href[1:]}"
    return f"{base_url}{relative_dir}{href}"


def is_github(url: str) -> bool:
    """Check whether a URL points at github.com or one of its subdomains."""
    hostname = (urlparse(url).hostname or "").lower()
    return hostname == GITHUB_HOST or hostname.endswith(f".{GITHUB_HOST}")


def classify(url: str, status_code: int) -> LinkStatus:
    """Classify a probe result."""
    if http.is_success(status_code):
        return LinkStatus.GOOD
    if is_github(url):
        return LinkStatus.GITHUB
    return LinkStatus.BAD


class LinkValidator:
    """Probes the links of a site tree and tallies the outcome.

    Args:
        site: Domains used to resolve relative links (defaults to SiteConfig())
        probe: Function issuing one GET and returning its status code
        timeout: Seconds allowed per probe
    """

    def __init__(
        self,
        site: SiteConfig | None = None,
        probe: Probe | None = None,
        timeout: float = PROBE_TIMEOUT,
    ) -> None:
        self.site = site or SiteConfig()
        self.probe = probe or http.probe
        self.timeout = timeout
        self._cache: dict[str, ValidationResult] = {}

    def validate(self, root: Path, host: Host) -> ValidationSummary:
        """Check every link found in the HTML pages under root.

        Args:
            root: Site root directory
            host: Host whose base URL relative links resolve against

        Returns:
            Counts per classification (one per distinct URL) and per-URL results
        """
        self._cache = {}
        base_url = self.site.base_url(host)
        files = sorted(
            p for p in root.rglob("*") if p.is_file() and p.suffix.lower() in HTML_SUFFIXES
        )
        logger.info(f"Checking links in {len(files)} files; this will take a while ...")

        for path in files:
            relative_dir = relative_directory(path, root)
            content = path.read_text(encoding="utf-8", errors="replace")
            for href in extract_links(content):
                if not href:
                    continue
                record = LinkRecord(
                    href=href,
                    url=resolve_link(href, base_url, relative_dir),
                    source=path,
                    relative_dir=relative_dir,
                )
                self.check(record)

        results = list(self._cache.values())
        summary = ValidationSummary(
            files_checked=len(files),
            good=sum(1 for r in results if r.status == LinkStatus.GOOD),
            github=sum(1 for r in results if r.status == LinkStatus.GITHUB),
            bad=sum(1 for r in results if r.status == LinkStatus.BAD),
            results=results,
        )
        logger.info(f"Good Links: {summary.good}")
        logger.info(f"GitHub Links: {summary.github}")
        logger.info(f"Bad Links: {summary.bad}")
        return summary

    def check(self, record: LinkRecord) -> ValidationResult:
        """Probe a link unless its URL was already probed in this pass."""
        cached = self._cache.get(record.url)
        if cached is not None:
            cached.occurrences.append(record)
            return cached

        status_code = self.probe(record.url, self.timeout)
        result = ValidationResult(
            url=record.url,
            status=classify(record.url, status_code),
            status_code=status_code,
            occurrences=[record],
        )
        self._cache[record.url] = result

        if result.status == LinkStatus.GITHUB:
            logger.warning(
                f"Unable to access {record.url} first found in {record.source} ({status_code})."
            )
            logger.info(
                "This usually is a false positive due to GitHub fighting scraping "
                "and returning 404."
            )
        elif result.status == LinkStatus.BAD:
            logger.error(
                f"Unable to access {record.url} first found in {record.source} ({status_code})."
            )
        return result
