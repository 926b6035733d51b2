"""Assignment tree model and the depth-bounded portal crawler."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Callable, Protocol, Union

from pydantic import ValidationError

from themis_tree.exceptions import BuildError, FetchError, TreeStructureError
from themis_tree.schemas import AssignmentLink

logger = logging.getLogger(__name__)

LinkLike = Union[AssignmentLink, Mapping[str, str]]
FetchCapability = Callable[[str], Sequence[LinkLike]]


class TreeObserver(Protocol):
    """Receives tree construction events."""

    def node_built(self, node: AssignmentNode) -> None: ...

    def child_appended(self, parent: AssignmentNode, child: AssignmentNode) -> None: ...


class LoggingTreeObserver:
    """Report construction events to the module logger."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def node_built(self, node: AssignmentNode) -> None:
        self._log.debug("Building node %s", node.name)

    def child_appended(self, parent: AssignmentNode, child: AssignmentNode) -> None:
        self._log.debug("Appending child %s to parent %s", child.name, parent.name)


_DEFAULT_OBSERVER = LoggingTreeObserver()


@dataclass(eq=False)
class AssignmentNode:
    """A node of the assignment tree.

    ``children`` is owned by the node and only changes through
    :meth:`append_child`. ``parent`` is a plain back-reference used for
    upward navigation.
    """

    name: str
    url: str
    parent: AssignmentNode | None = field(default=None, repr=False)
    children: list[AssignmentNode] = field(default_factory=list, repr=False)
    _attached: bool = field(default=False, init=False, repr=False)

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def level(self) -> int:
        """Number of edges between this node and the root."""
        level = 0
        node = self.parent
        while node is not None:
            level += 1
            node = node.parent
        return level

    def append_child(self, child: AssignmentNode, observer: TreeObserver | None = None) -> None:
        """Attach ``child`` as the last child of this node.

        Raises:
            TreeStructureError: If ``child`` is already attached to a parent,
                or if attaching it would create a cycle.
        """
        if child._attached:
            raise TreeStructureError(
                f"Node {child.name!r} is already a child of {child.parent.name!r}"
            )
        node: AssignmentNode | None = self
        while node is not None:
            if node is child:
                raise TreeStructureError(
                    f"Cannot append {child.name!r} below itself"
                )
            node = node.parent

        (observer or _DEFAULT_OBSERVER).child_appended(self, child)
        child.parent = self
        child._attached = True
        self.children.append(child)

    def iter_preorder(self, max_depth: int | None = None) -> Iterator[tuple[AssignmentNode, int]]:
        """Yield ``(node, level)`` pairs in pre-order.

        ``level`` is relative to this node (0 for the node itself). With
        ``max_depth`` set, nodes deeper than it are skipped; a negative
        ``max_depth`` yields nothing.
        """
        if max_depth is not None and max_depth < 0:
            return
        stack: list[tuple[AssignmentNode, int]] = [(self, 0)]
        while stack:
            node, level = stack.pop()
            yield node, level
            if max_depth is not None and level >= max_depth:
                continue
            for child in reversed(node.children):
                stack.append((child, level + 1))

    def count(self, max_depth: int | None = None) -> int:
        """Number of nodes in this subtree, optionally bounded by depth."""
        return sum(1 for _ in self.iter_preorder(max_depth))


def build_assignment_node(
    parent: AssignmentNode | None,
    name: str,
    url: str,
    observer: TreeObserver | None = None,
) -> AssignmentNode:
    """Create a node that points to ``parent`` without being attached to it."""
    node = AssignmentNode(name=name, url=url, parent=parent)
    (observer or _DEFAULT_OBSERVER).node_built(node)
    return node


def build_root_assignment_node(
    name: str, url: str, observer: TreeObserver | None = None
) -> AssignmentNode:
    """Create a root node (no parent)."""
    return build_assignment_node(None, name, url, observer)


def pull_and_build_tree(
    fetch: FetchCapability,
    url: str,
    root: AssignmentNode,
    depth: int,
    observer: TreeObserver | None = None,
) -> AssignmentNode:
    """Crawl the portal below ``root`` and attach what was found.

    The page at ``url`` is listed and every entry becomes a child of ``root``.
    While ``depth > 0`` each child is expanded in turn with ``depth - 1``;
    children created at ``depth <= 0`` are left unexpanded. Pages are fetched
    one at a time, depth first, in listing order.

    Nothing is attached to ``root`` unless the whole crawl succeeds, so a
    failed call leaves ``root`` as it was.

    Args:
        fetch: Returns the ``{name, url}`` entries listed on a page.
        url: Page listing the children of ``root``.
        root: Node to attach the children to.
        depth: Number of further levels to expand below the children.
        observer: Receives construction events. Defaults to logging them.

    Returns:
        ``root``, now carrying the crawled subtree.

    Raises:
        FetchError: If listing ``url`` itself fails.
        BuildError: If expanding one of the children fails. The chain of
            ``__cause__`` leads down to the failing page.
    """
    observer = observer or _DEFAULT_OBSERVER
    children = _pull_children(fetch, url, root, depth, observer)
    for child in children:
        root.append_child(child, observer)
    return root


def _pull_children(
    fetch: FetchCapability,
    url: str,
    parent: AssignmentNode,
    depth: int,
    observer: TreeObserver,
) -> list[AssignmentNode]:
    links = _list_page(fetch, url)
    children = [build_assignment_node(parent, link.name, link.url, observer) for link in links]

    if depth > 0:
        for child in children:
            try:
                grandchildren = _pull_children(fetch, child.url, child, depth - 1, observer)
            except (FetchError, BuildError) as exc:
                raise BuildError(
                    f"Error building tree below {child.name!r} ({child.url}): {exc}",
                    node_name=child.name,
                    url=child.url,
                ) from exc
            for grandchild in grandchildren:
                child.append_child(grandchild, observer)

    return children


def _list_page(fetch: FetchCapability, url: str) -> list[AssignmentLink]:
    try:
        entries = fetch(url)
        return [
            entry if isinstance(entry, AssignmentLink) else AssignmentLink.model_validate(entry)
            for entry in entries
        ]
    except FetchError:
        raise
    except ValidationError as exc:
        raise FetchError(f"Invalid assignment entry listed on {url}: {exc}") from exc
    except Exception as exc:
        raise FetchError(f"Error getting assignments on page {url}: {exc}") from exc
