"""Href extraction from generated documents.

A single left-to-right scan for ``href="..."``; no HTML parsing. Only
double-quoted hrefs are recognized.
"""

HREF_MARKER = 'href="'
SKIPPED_PREFIXES = ("#", "data:", "mailto:")


def strip_fragment_and_query(href: str) -> str:
    """Drop any ``#fragment`` and ``?query`` from an href."""
    return href.split("#", 1)[0].split("?", 1)[0]


def extract_links(content: str) -> list[str]:
    """Find every distinct href in a document.

    Pure fragments, ``data:`` and ``mailto:`` hrefs are skipped. An href
    with no closing quote ends the scan for the document.

    Args:
        content: Document text

    Returns:
        Cleaned hrefs in first-seen order, without duplicates
    """
    links: dict[str, None] = {}
    offset = 0
    while True:
        start = content.find(HREF_MARKER, offset)
        if start == -1:
            break
        start += len(HREF_MARKER)
        end = content.find('"', start)
        if end == -1:
            break

        raw = content[start:end]
        offset = end + 1
        if raw.startswith(SKIPPED_PREFIXES):
            continue
        links.setdefault(strip_fragment_and_query(raw), None)
    return list(links)
