from __future__ import annotations

from pydantic import Field, field_validator

from .base import AppBaseModel

# Parent reference of a term that sits at the top of its vocabulary tree.
ROOT_PARENT_ID = 0

DEFAULT_WEIGHT = 0


class TermCreate(AppBaseModel):
    """Fields accepted when creating a term.

    Omitted ``parent_id`` and ``weight`` fall back to the root sentinel and
    zero, so every stored term carries both.
    """

    name: str = Field(min_length=1, max_length=255, description="Term name")
    parent_id: int = Field(default=ROOT_PARENT_ID, ge=0, description="Parent term id, 0 for a root term")
    weight: int = Field(default=DEFAULT_WEIGHT, description="Sort key among siblings, ascending")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Term name must be non-empty")
        return v


class Term(AppBaseModel):
    """A node of a vocabulary tree."""

    id: int = Field(description="Store-assigned identifier")
    name: str = Field(min_length=1, max_length=255)
    vocabulary_id: int = Field(description="Owning vocabulary")
    parent_id: int = Field(default=ROOT_PARENT_ID, ge=0)
    weight: int = DEFAULT_WEIGHT

    @property
    def is_root(self) -> bool:
        return self.parent_id == ROOT_PARENT_ID

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"id": 3, "name": "Red", "vocabulary_id": 1, "parent_id": 1, "weight": 0}
            ]
        }
    }
