"""Extract assignment links from Themis listing pages."""

from __future__ import annotations

import re
from urllib.parse import urljoin

from pydantic import ValidationError

from themis_tree.exceptions import ParseError
from themis_tree.schemas import AssignmentLink

try:
    from bs4 import BeautifulSoup
    from bs4.element import Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise ParseError(
        "BeautifulSoup4 is required for HTML parsing (pip install beautifulsoup4)."
    ) from exc


# Children of the current assignment are listed inside the ass-children block;
# the breadcrumb and sidebar also use ass-link, so prefer the scoped selector.
_CHILD_LINK_SELECTOR = ".ass-children .ass-link a[href]"
_ANY_LINK_SELECTOR = ".ass-link a[href]"
_WHITESPACE_RE = re.compile(r"\s+")


def parse_assignment_links(html: str, base_url: str) -> list[AssignmentLink]:
    """Return the assignment links on a listing page in document order.

    Args:
        html: Page HTML.
        base_url: URL the page was fetched from, used to resolve relative hrefs.

    Returns:
        Links with absolute URLs. Anchors without text are skipped.

    Raises:
        ParseError: If the input is not text.
    """
    if not isinstance(html, str):
        raise ParseError(f"Expected page HTML as text, got {type(html).__name__}")

    soup = BeautifulSoup(html, "lxml")
    anchors = soup.select(_CHILD_LINK_SELECTOR) or soup.select(_ANY_LINK_SELECTOR)

    links: list[AssignmentLink] = []
    for anchor in anchors:
        link = _link_from_anchor(anchor, base_url)
        if link is not None:
            links.append(link)
    return links


def _link_from_anchor(anchor: Tag, base_url: str) -> AssignmentLink | None:
    name = _WHITESPACE_RE.sub(" ", anchor.get_text(" ", strip=True))
    href = anchor.get("href")
    if not name or not isinstance(href, str) or not href.strip():
        return None
    try:
        return AssignmentLink(name=name, url=urljoin(base_url, href.strip()))
    except ValidationError as exc:
        raise ParseError(f"Invalid assignment link {href!r} on {base_url}") from exc
