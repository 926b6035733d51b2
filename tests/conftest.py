"""Test setup for themis-tree."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from themis_tree.exceptions import FetchError  # noqa: E402
from themis_tree.tree import AssignmentNode  # noqa: E402

BASE = "https://themis.example/course"


class FakePortal:
    """In-memory stand-in for the fetch capability.

    ``pages`` maps a page URL to the ``{name, url}`` entries listed on it;
    unknown URLs list nothing. URLs in ``failing`` raise FetchError.
    """

    def __init__(self, pages: dict[str, list[dict[str, str]]], failing: set[str] | None = None) -> None:
        self.pages = pages
        self.failing = failing or set()
        self.calls: list[str] = []

    def __call__(self, url: str) -> list[dict[str, str]]:
        self.calls.append(url)
        if url in self.failing:
            raise FetchError(f"boom at {url}")
        return list(self.pages.get(url, []))


class RecordingObserver:
    """Collects construction events."""

    def __init__(self) -> None:
        self.events: list[tuple[str, ...]] = []

    def node_built(self, node: AssignmentNode) -> None:
        self.events.append(("built", node.name))

    def child_appended(self, parent: AssignmentNode, child: AssignmentNode) -> None:
        self.events.append(("appended", parent.name, child.name))


def entry(name: str, path: str) -> dict[str, str]:
    return {"name": name, "url": f"{BASE}{path}"}


@pytest.fixture
def cs101_pages() -> dict[str, list[dict[str, str]]]:
    """CS101 with HW1 and HW2, each holding one Submission."""
    return {
        f"{BASE}/cs101": [entry("HW1", "/cs101/hw1"), entry("HW2", "/cs101/hw2")],
        f"{BASE}/cs101/hw1": [entry("Submission", "/cs101/hw1/submission")],
        f"{BASE}/cs101/hw2": [entry("Submission", "/cs101/hw2/submission")],
    }


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()


def names_preorder(root: AssignmentNode, max_depth: int | None = None) -> list[str]:
    return [node.name for node, _ in root.iter_preorder(max_depth)]
