from __future__ import annotations

from pydantic import Field

from taxonomy.core.models.base import AppBaseModel
from taxonomy.core.models.term import DEFAULT_WEIGHT, ROOT_PARENT_ID
from taxonomy.core.models.vocabulary import VocabularyCreate  # noqa: F401


class VocabularyRead(AppBaseModel):
    id: int
    name: str


class TermCreateRequest(AppBaseModel):
    name: str = Field(min_length=1, max_length=255, description="Term name")
    parent_id: int = Field(default=ROOT_PARENT_ID, ge=0, description="Parent term id, 0 for a root term")
    weight: int = Field(default=DEFAULT_WEIGHT, description="Sort key among siblings")


class TermRead(AppBaseModel):
    id: int
    name: str
    vocabulary_id: int
    parent_id: int
    weight: int


class TermOption(AppBaseModel):
    """One entry of a dropdown option list; list order is display order."""

    id: int
    label: str
