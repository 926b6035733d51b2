"""HTTP utilities for fetching portal pages."""

from __future__ import annotations

from typing import Final

import httpx

from themis_tree.config import (
    THEMIS_TREE_BASE_URL,
    THEMIS_TREE_FETCH_TIMEOUT_S,
    THEMIS_TREE_USER_AGENT,
)
from themis_tree.exceptions import FetchError, PageNotFoundError

SESSION_COOKIE_NAME: Final[str] = "session"

_MAX_REDIRECTS: Final[int] = 5


def build_client(
    *,
    session_cookie: str | None = None,
    base_url: str = THEMIS_TREE_BASE_URL,
    timeout_s: float = THEMIS_TREE_FETCH_TIMEOUT_S,
) -> httpx.Client:
    """Create the blocking client used for a crawl.

    Args:
        session_cookie: Value of an already authenticated portal session.
            Logging in is not handled here.
        base_url: Portal base URL, used to scope the session cookie.
        timeout_s: Per-request timeout in seconds.

    Returns:
        A configured httpx.Client. The caller owns it and must close it.
    """
    cookies = httpx.Cookies()
    if session_cookie:
        domain = httpx.URL(base_url).host
        cookies.set(SESSION_COOKIE_NAME, session_cookie, domain=domain)

    return httpx.Client(
        timeout=httpx.Timeout(timeout_s),
        headers={"User-Agent": THEMIS_TREE_USER_AGENT},
        cookies=cookies,
        follow_redirects=True,
        max_redirects=_MAX_REDIRECTS,
    )


def fetch_page(url: str, *, client: httpx.Client) -> str:
    """Fetch a page and return its decoded text.

    A single request is made; timeouts are whatever the client enforces.

    Args:
        url: The URL to fetch.
        client: The client to send the request with.

    Returns:
        The response body as text.

    Raises:
        PageNotFoundError: If the portal answers 404.
        FetchError: On any other HTTP error status or transport failure.
    """
    try:
        response = client.get(url)
    except httpx.RequestError as exc:
        raise FetchError(f"Failed to fetch {url}: {exc}") from exc

    if response.status_code == 404:
        raise PageNotFoundError(f"Page not found at {url}")

    try:
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise FetchError(f"HTTP {response.status_code} from {url}") from exc

    return response.text
