"""Persisted form of a tree node."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class NodeRecord(BaseModel):
    """One line of a saved assignment tree.

    The parent is not stored; it follows from record order and ``depth``.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field(..., alias="Name")
    url: str = Field(..., alias="URL")
    depth: int = Field(..., alias="Depth", ge=0)
