from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from taxonomy.core.models.vocabulary import Vocabulary


class VocabularyRepository(ABC):
    """Abstract repository interface for vocabularies.

    Implementations must enforce name uniqueness themselves and raise
    ``UniqueConstraintError`` when ``create`` would duplicate a name.
    """

    @abstractmethod
    def get(self, vocabulary_id: int) -> Vocabulary | None:  # pragma: no cover - interface only
        """Fetch a vocabulary by id or return None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> Vocabulary | None:  # pragma: no cover
        """Fetch a vocabulary by exact name or return None if not found."""

    @abstractmethod
    def list(self) -> Sequence[Vocabulary]:  # pragma: no cover
        """Return all vocabularies ordered by name."""

    @abstractmethod
    def create(self, name: str) -> Vocabulary:  # pragma: no cover
        """Persist a new vocabulary and return the stored entity."""

    @abstractmethod
    def delete(self, vocabulary_id: int) -> bool:  # pragma: no cover
        """Delete a vocabulary by id. Return True if a row was removed, False otherwise."""
