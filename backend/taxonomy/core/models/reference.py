"""Vocabulary references.

A vocabulary can be addressed by the entity itself, by its name or by its
id. Each reference form resolves itself against a repository, so callers
never branch on the form they were given.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from pydantic import ConfigDict, Field

from .base import AppBaseModel
from .vocabulary import Vocabulary

if TYPE_CHECKING:
    from taxonomy.core.repositories.vocabulary_repository import VocabularyRepository


class VocabularyRef(AppBaseModel, ABC):
    model_config = ConfigDict(frozen=True)

    @abstractmethod
    def resolve(self, repo: VocabularyRepository) -> Vocabulary | None:
        """Return the referenced vocabulary, or None if it does not exist."""


class ByEntity(VocabularyRef):
    vocabulary: Vocabulary

    def resolve(self, repo: VocabularyRepository) -> Vocabulary | None:
        return self.vocabulary


class ByName(VocabularyRef):
    name: str

    def resolve(self, repo: VocabularyRepository) -> Vocabulary | None:
        return repo.get_by_name(self.name)


class ById(VocabularyRef):
    id: int = Field(ge=0)

    def resolve(self, repo: VocabularyRepository) -> Vocabulary | None:
        return repo.get(self.id)


VocabularyLike = VocabularyRef | Vocabulary | str | int | float


def as_vocabulary_ref(value: Any) -> VocabularyRef | None:
    """Coerce a raw vocabulary reference into its tagged form.

    Ints and integral floats (``3.0``) address a vocabulary by id. Returns
    None for values that cannot name a vocabulary, including bools, negative
    numbers and fractional floats.
    """
    if isinstance(value, VocabularyRef):
        return value
    if isinstance(value, Vocabulary):
        return ByEntity(vocabulary=value)
    if isinstance(value, str):
        return ByName(name=value)
    if isinstance(value, int) and not isinstance(value, bool):
        if value < 0:
            return None
        return ById(id=value)
    if isinstance(value, float) and value.is_integer() and value >= 0:
        return ById(id=int(value))
    return None
