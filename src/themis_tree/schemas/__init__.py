"""Shared schemas for themis-tree."""

from themis_tree.schemas.assignment import AssignmentLink
from themis_tree.schemas.record import NodeRecord

__all__ = ["AssignmentLink", "NodeRecord"]
