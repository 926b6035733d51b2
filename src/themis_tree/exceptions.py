"""Custom exceptions for themis-tree."""

from __future__ import annotations


class ThemisTreeError(Exception):
    """Base exception for themis-tree operations."""


class FetchError(ThemisTreeError):
    """Error while listing the assignments of a portal page."""


class PageNotFoundError(FetchError):
    """The portal returned 404 for a page."""


class ParseError(FetchError):
    """A listing page could not be parsed into assignment links."""


class BuildError(ThemisTreeError):
    """Error while building the subtree below a node.

    Wraps the underlying FetchError or nested BuildError as ``__cause__``.
    """

    def __init__(self, message: str, *, node_name: str, url: str) -> None:
        super().__init__(message)
        self.node_name = node_name
        self.url = url


class TreeStructureError(ThemisTreeError):
    """Illegal change to the parent/child relation."""


class TreeIOError(ThemisTreeError):
    """The tree file could not be created, read or closed."""


class EncodeError(ThemisTreeError):
    """A node could not be serialized."""

    def __init__(self, message: str, *, node_name: str) -> None:
        super().__init__(message)
        self.node_name = node_name


class DecodeError(ThemisTreeError):
    """A tree file holds malformed or inconsistent records."""

    def __init__(self, message: str, *, line_number: int | None = None) -> None:
        super().__init__(message)
        self.line_number = line_number
