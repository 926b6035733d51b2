"""Save assignment trees to disk and load them back.

A saved tree is newline-delimited JSON. Each line is one node in pre-order,
indented by four spaces per level below the saved root::

    {"Name": "CS101", "URL": "https://.../cs101", "Depth": 0}
        {"Name": "HW1", "URL": "https://.../hw1", "Depth": 1}
            {"Name": "Submission", "URL": "https://.../hw1/sub", "Depth": 2}
        {"Name": "HW2", "URL": "https://.../hw2", "Depth": 1}

Parents are not stored. A node's parent is the closest preceding record one
level up.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from themis_tree.config import THEMIS_TREE_OUTPUT_FILE
from themis_tree.exceptions import DecodeError, EncodeError, TreeIOError
from themis_tree.schemas import NodeRecord
from themis_tree.tree import (
    AssignmentNode,
    TreeObserver,
    build_assignment_node,
    build_root_assignment_node,
)

logger = logging.getLogger(__name__)

INDENT = "    "


def save_tree_to_file(
    root: AssignmentNode,
    depth: int,
    path: str | Path | None = None,
) -> Path:
    """Write ``root`` and up to ``depth`` levels below it to a file.

    The file is created or truncated. Records are written as they are
    encoded, so a failed save leaves the records written so far in place;
    such a file must not be trusted as a complete snapshot.

    Args:
        root: Subtree to save.
        depth: Number of levels below ``root`` to include. ``0`` saves only
            ``root``; a negative value saves nothing.
        path: Output file. Defaults to the configured output file.

    Returns:
        Path of the written file.

    Raises:
        TreeIOError: If the file cannot be created, written or closed.
        EncodeError: If a node cannot be serialized.
    """
    target = Path(path or THEMIS_TREE_OUTPUT_FILE)
    written = 0
    try:
        with target.open("w", encoding="utf-8") as handle:
            for node, level in root.iter_preorder(depth):
                handle.write(_encode_record(node, level) + "\n")
                written += 1
    except OSError as exc:
        raise TreeIOError(f"Error writing assignment tree to {target}: {exc}") from exc

    logger.info("Saved %d nodes to %s", written, target)
    return target


def load_tree_from_file(
    path: str | Path | None = None,
    observer: TreeObserver | None = None,
) -> AssignmentNode:
    """Rebuild a tree written by :func:`save_tree_to_file`.

    Args:
        path: File to read. Defaults to the configured output file.
        observer: Receives construction events for the rebuilt nodes.

    Returns:
        The root of the rebuilt tree.

    Raises:
        TreeIOError: If the file is missing or unreadable.
        DecodeError: If the file has no records or a record is malformed or
            out of place.
    """
    target = Path(path or THEMIS_TREE_OUTPUT_FILE)
    try:
        text = target.read_text(encoding="utf-8")
    except OSError as exc:
        raise TreeIOError(f"Error reading assignment tree from {target}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise DecodeError(f"{target} is not UTF-8 text: {exc}") from exc

    root: AssignmentNode | None = None
    # ancestors[d] is the latest node read at depth d
    ancestors: list[AssignmentNode] = []

    # Records end at "\n" only; names may hold U+2028, U+2029 and U+0085.
    for line_number, line in enumerate(text.split("\n"), start=1):
        if not line.strip():
            continue
        record = _decode_record(line, line_number)

        if root is None:
            if record.depth != 0:
                raise DecodeError(
                    f"First record must have depth 0, got {record.depth}",
                    line_number=line_number,
                )
            root = build_root_assignment_node(record.name, record.url, observer)
            ancestors = [root]
            continue

        if record.depth == 0:
            raise DecodeError(
                f"Second root record {record.name!r}", line_number=line_number
            )
        if record.depth > len(ancestors):
            raise DecodeError(
                f"Record {record.name!r} at depth {record.depth} follows a record "
                f"at depth {len(ancestors) - 1}",
                line_number=line_number,
            )

        del ancestors[record.depth :]
        parent = ancestors[-1]
        node = build_assignment_node(parent, record.name, record.url, observer)
        parent.append_child(node, observer)
        ancestors.append(node)

    if root is None:
        raise DecodeError(f"No records in {target}")

    logger.info("Loaded %d nodes from %s", root.count(), target)
    return root


def _record_for(node: AssignmentNode, level: int) -> NodeRecord:
    return NodeRecord(name=node.name, url=node.url, depth=level)


def _encode_record(node: AssignmentNode, level: int) -> str:
    try:
        record = _record_for(node, level)
        payload = json.dumps(record.model_dump(by_alias=True), ensure_ascii=False)
        payload.encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise EncodeError(
            f"Error encoding node {node.name}: {exc}", node_name=str(node.name)
        ) from exc
    return INDENT * level + payload


def _decode_record(line: str, line_number: int) -> NodeRecord:
    indent = len(line) - len(line.lstrip(" "))
    try:
        data = json.loads(line)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"Invalid JSON: {exc.msg}", line_number=line_number) from exc
    if not isinstance(data, dict):
        raise DecodeError("Record is not a JSON object", line_number=line_number)

    try:
        record = NodeRecord.model_validate(data)
    except ValidationError as exc:
        raise DecodeError(f"Invalid record: {exc}", line_number=line_number) from exc

    if indent != len(INDENT) * record.depth:
        raise DecodeError(
            f"Indentation of {indent} spaces does not match depth {record.depth}",
            line_number=line_number,
        )
    return record
