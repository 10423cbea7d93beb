from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from taxonomy.core.models.term import Term, TermCreate


class TermRepository(ABC):
    """Abstract repository interface for terms.

    Implementations must enforce uniqueness of ``(vocabulary_id, parent_id, name)``
    and raise ``UniqueConstraintError`` when ``create`` would break it.
    """

    @abstractmethod
    def get(self, term_id: int) -> Term | None:  # pragma: no cover - interface only
        """Fetch a term by id or return None if not found."""

    @abstractmethod
    def find_by_name(self, vocabulary_id: int, name: str) -> Term | None:  # pragma: no cover
        """Return the first term of the vocabulary with this exact name."""

    @abstractmethod
    def list(
        self,
        vocabulary_id: int,
        *,
        parent_id: int | None = None,
        order_by_weight: bool = False,
    ) -> Sequence[Term]:  # pragma: no cover
        """Return terms of a vocabulary.

        Args:
            vocabulary_id: Owning vocabulary
            parent_id: Only return direct children of this parent (0 for roots);
                None returns every term of the vocabulary
            order_by_weight: Sort ascending by weight (ties by id) instead of
                store order
        """

    @abstractmethod
    def create(self, vocabulary_id: int, term: TermCreate) -> Term:  # pragma: no cover
        """Persist a new term and return the stored entity."""

    @abstractmethod
    def delete_by_vocabulary(self, vocabulary_id: int) -> int:  # pragma: no cover
        """Delete every term of a vocabulary and return how many were removed."""

    def get_parent(self, term: Term) -> Term | None:
        """Return the parent of a term, or None for roots and missing parents."""
        if term.is_root:
            return None
        return self.get(term.parent_id)

    def list_children(self, term: Term) -> Sequence[Term]:
        """Return the direct children of a term ordered by weight."""
        return self.list(term.vocabulary_id, parent_id=term.id, order_by_weight=True)
