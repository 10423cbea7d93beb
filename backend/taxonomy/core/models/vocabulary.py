from __future__ import annotations

from pydantic import Field, field_validator

from .base import AppBaseModel


class Vocabulary(AppBaseModel):
    """A named classification scheme holding a tree of terms."""

    id: int = Field(description="Store-assigned identifier")
    name: str = Field(min_length=1, max_length=255, description="Unique vocabulary name")

    model_config = {
        "json_schema_extra": {
            "examples": [{"id": 1, "name": "Colors"}]
        }
    }


class VocabularyCreate(AppBaseModel):
    """Fields accepted when creating a vocabulary."""

    name: str = Field(min_length=1, max_length=255, description="Unique vocabulary name")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Vocabulary name must be non-empty")
        return v
