"""themis-tree: crawl Themis assignments into a tree and persist it."""

from themis_tree.exceptions import (
    BuildError,
    DecodeError,
    EncodeError,
    FetchError,
    PageNotFoundError,
    ParseError,
    ThemisTreeError,
    TreeIOError,
    TreeStructureError,
)
from themis_tree.fetch import get_assignments_on_page, make_fetcher
from themis_tree.persistence import load_tree_from_file, save_tree_to_file
from themis_tree.schemas import AssignmentLink, NodeRecord
from themis_tree.tree import (
    AssignmentNode,
    LoggingTreeObserver,
    TreeObserver,
    build_assignment_node,
    build_root_assignment_node,
    pull_and_build_tree,
)

__all__ = [
    "AssignmentLink",
    "AssignmentNode",
    "BuildError",
    "DecodeError",
    "EncodeError",
    "FetchError",
    "LoggingTreeObserver",
    "NodeRecord",
    "PageNotFoundError",
    "ParseError",
    "ThemisTreeError",
    "TreeIOError",
    "TreeObserver",
    "TreeStructureError",
    "build_assignment_node",
    "build_root_assignment_node",
    "get_assignments_on_page",
    "load_tree_from_file",
    "make_fetcher",
    "pull_and_build_tree",
    "save_tree_to_file",
]
