"""Command line interface for crawling and inspecting assignment trees."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from themis_tree.config import (
    THEMIS_TREE_BASE_URL,
    THEMIS_TREE_DEPTH,
    THEMIS_TREE_LOG_LEVEL,
    THEMIS_TREE_OUTPUT_FILE,
    THEMIS_TREE_ROOT_PATH,
    THEMIS_TREE_SESSION_COOKIE,
)
from themis_tree.exceptions import ThemisTreeError
from themis_tree.fetch import make_fetcher
from themis_tree.http_utils import build_client
from themis_tree.persistence import load_tree_from_file, save_tree_to_file
from themis_tree.tree import AssignmentNode, build_root_assignment_node, pull_and_build_tree
from themis_tree.utils.logging_config import configure_logging, get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="themis-tree",
        description="Crawl Themis assignments into a tree and save it as JSON.",
    )
    parser.add_argument("--log-level", default=THEMIS_TREE_LOG_LEVEL, help="Logging level (default: %(default)s)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    crawl = subparsers.add_parser("crawl", help="Crawl the portal and save the tree")
    crawl.add_argument(
        "url",
        nargs="?",
        default=THEMIS_TREE_BASE_URL + THEMIS_TREE_ROOT_PATH,
        help="Page to start from (default: %(default)s)",
    )
    crawl.add_argument("--name", default="root", help="Name of the root node (default: %(default)s)")
    crawl.add_argument("--depth", type=int, default=THEMIS_TREE_DEPTH, help="Levels to expand (default: %(default)s)")
    crawl.add_argument("--save-depth", type=int, help="Levels to save below the root (default: all)")
    crawl.add_argument("--output", "-o", default=THEMIS_TREE_OUTPUT_FILE, help="Output file (default: %(default)s)")
    crawl.add_argument(
        "--session-cookie",
        default=THEMIS_TREE_SESSION_COOKIE,
        help="Authenticated portal session cookie (default: $THEMIS_TREE_SESSION_COOKIE)",
    )

    show = subparsers.add_parser("show", help="Print a saved tree")
    show.add_argument("file", nargs="?", default=THEMIS_TREE_OUTPUT_FILE, help="Saved tree (default: %(default)s)")
    show.add_argument("--max-depth", type=int, help="Levels to print below the root")
    return parser


def format_tree(root: AssignmentNode, max_depth: int | None = None) -> str:
    """Render a tree as an indented outline, one node per line."""
    return "\n".join(
        f"{'  ' * level}- {node.name} <{node.url}>"
        for node, level in root.iter_preorder(max_depth)
    )


def run_crawl(args: argparse.Namespace) -> int:
    root = build_root_assignment_node(args.name, args.url)
    with build_client(session_cookie=args.session_cookie) as client:
        pull_and_build_tree(make_fetcher(client), args.url, root, args.depth)

    # The crawl leaves nodes at depth + 1 unexpanded, so that is the full height.
    save_depth = args.depth + 1 if args.save_depth is None else args.save_depth
    path = save_tree_to_file(root, save_depth, args.output)
    print(f"Tree written to {path} ({root.count(save_depth)} nodes)")
    return 0


def run_show(args: argparse.Namespace) -> int:
    root = load_tree_from_file(args.file)
    print(format_tree(root, args.max_depth))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        configure_logging(args.log_level)
    except ValueError as exc:
        parser.error(str(exc))

    handlers = {"crawl": run_crawl, "show": run_show}
    try:
        return handlers[args.command](args)
    except ThemisTreeError as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
