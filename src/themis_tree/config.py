"""Local configuration for themis-tree."""

from __future__ import annotations

import os

DEFAULT_BASE_URL = "https://themis.housing.rug.nl"
DEFAULT_ROOT_PATH = "/course"
DEFAULT_OUTPUT_FILE = "assignment_tree.json"
DEFAULT_DEPTH = 2
DEFAULT_FETCH_TIMEOUT_S = 10.0
DEFAULT_USER_AGENT = "themis-tree/0.1"
DEFAULT_LOG_LEVEL = "INFO"

THEMIS_TREE_BASE_URL = os.getenv("THEMIS_TREE_BASE_URL", DEFAULT_BASE_URL).rstrip("/")
THEMIS_TREE_ROOT_PATH = os.getenv("THEMIS_TREE_ROOT_PATH", DEFAULT_ROOT_PATH)
# Written relative to the working directory unless an absolute path is given.
THEMIS_TREE_OUTPUT_FILE = os.getenv("THEMIS_TREE_OUTPUT_FILE", DEFAULT_OUTPUT_FILE)
THEMIS_TREE_DEPTH = int(os.getenv("THEMIS_TREE_DEPTH", str(DEFAULT_DEPTH)))
THEMIS_TREE_FETCH_TIMEOUT_S = float(os.getenv("THEMIS_TREE_FETCH_TIMEOUT_S", str(DEFAULT_FETCH_TIMEOUT_S)))
THEMIS_TREE_USER_AGENT = os.getenv("THEMIS_TREE_USER_AGENT", DEFAULT_USER_AGENT)
THEMIS_TREE_SESSION_COOKIE = os.getenv("THEMIS_TREE_SESSION_COOKIE") or None
THEMIS_TREE_LOG_LEVEL = os.getenv("THEMIS_TREE_LOG_LEVEL", DEFAULT_LOG_LEVEL)
