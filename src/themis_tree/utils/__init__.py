"""Shared utilities for themis-tree."""
