"""In-place host rewriting of a generated site."""

import codecs
import logging
from collections.abc import Iterator
from pathlib import Path

from ..config import SiteConfig
from ..models import Host

logger = logging.getLogger(__name__)

# UTF-32 marks first: BOM_UTF32_LE begins with BOM_UTF16_LE
BYTE_ORDER_MARKS = (
    (codecs.BOM_UTF8, "utf-8"),
    (codecs.BOM_UTF32_LE, "utf-32-le"),
    (codecs.BOM_UTF32_BE, "utf-32-be"),
    (codecs.BOM_UTF16_LE, "utf-16-le"),
    (codecs.BOM_UTF16_BE, "utf-16-be"),
)


def decode_content(raw: bytes) -> tuple[bytes, str, str]:
    """Decode file bytes, honoring a byte order mark.

    Without a mark the bytes are read as UTF-8 with undecodable bytes
    escaped, so encode_content() gives back the exact original bytes.

    Returns:
        The byte order mark (empty if none), the codec and the text

    Raises:
        UnicodeDecodeError: If the bytes do not match the marked encoding
    """
    for bom, encoding in BYTE_ORDER_MARKS:
        if raw.startswith(bom):
            return bom, encoding, raw[len(bom) :].decode(encoding, errors="surrogateescape")
    return b"", "utf-8", raw.decode("utf-8", errors="surrogateescape")


def encode_content(bom: bytes, encoding: str, text: str) -> bytes:
    """Inverse of decode_content()."""
    return bom + text.encode(encoding, errors="surrogateescape")


def apply_substitutions(content: str, substitutions: list[tuple[str, str]]) -> str:
    """Apply ordered literal replacements to text."""
    for old, new in substitutions:
        content = content.replace(old, new)
    return content


def iter_rewritable_files(root: Path, site: SiteConfig) -> Iterator[Path]:
    """Yield files under root the rewriter is allowed to touch, in sorted order."""
    extensions = {ext.lower() for ext in site.rewrite_extensions}
    excluded = set(site.excluded_files)
    for path in sorted(root.rglob("*")):
        if path.is_file() and path.suffix.lower() in extensions and path.name not in excluded:
            yield path


def rewrite_links(root: Path, host: Host, site: SiteConfig | None = None) -> int:
    """Retarget every host-relative URL under root to a deployment host.

    Args:
        root: Site root directory
        host: Host to rewrite for
        site: Domains and rules (defaults to SiteConfig())

    Returns:
        Number of files whose content changed
    """
    site = site or SiteConfig()
    substitutions = site.substitutions(host)
    files = list(iter_rewritable_files(root, site))
    logger.info(f"Altering {len(files)} files in {host.value} mode ...")

    modified = 0
    for path in files:
        try:
            bom, encoding, content = decode_content(path.read_bytes())
        except UnicodeDecodeError as e:
            logger.warning(f"Skipping {path}: not valid {e.encoding} ({e.reason}).")
            continue
        updated = apply_substitutions(content, substitutions)
        if updated != content:
            path.write_bytes(encode_content(bom, encoding, updated))
            logger.debug(f"Updated {path}.")
            modified += 1

    logger.info(f"Updated {modified} files.")
    return modified
