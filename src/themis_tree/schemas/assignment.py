"""Assignment link model returned by the fetch capability."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


class AssignmentLink(BaseModel):
    """An assignment entry found on a listing page.

    Attributes:
        name: Display label of the assignment.
        url: Absolute URL of the assignment page.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    url: str

    @field_validator("name", "url")
    @classmethod
    def _strip_non_empty(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value
