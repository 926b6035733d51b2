"""Fetch assignment listings from the portal."""

from __future__ import annotations

import logging
from typing import Callable

import httpx

from themis_tree.http_utils import fetch_page
from themis_tree.page_parser import parse_assignment_links
from themis_tree.schemas import AssignmentLink

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], list[AssignmentLink]]


def get_assignments_on_page(client: httpx.Client, url: str) -> list[AssignmentLink]:
    """List the assignments shown on a portal page.

    Args:
        client: Client carrying the portal session.
        url: Page URL.

    Returns:
        The page's assignment links in page order.

    Raises:
        PageNotFoundError: If the page does not exist.
        ParseError: If the page cannot be parsed.
        FetchError: If the request fails.
    """
    html = fetch_page(url, client=client)
    links = parse_assignment_links(html, url)
    logger.debug("Found %d assignments on %s", len(links), url)
    return links


def make_fetcher(client: httpx.Client) -> Fetcher:
    """Bind a client into the fetch capability used by the tree builder."""

    def fetch(url: str) -> list[AssignmentLink]:
        return get_assignments_on_page(client, url)

    return fetch
