from __future__ import annotations

from typing import TYPE_CHECKING, Any

from taxonomy.core.errors import (
    CycleDetectedError,
    DanglingParentError,
    DuplicateNameError,
    DuplicateTermError,
    InvalidParentError,
    MissingVocabularyError,
    UniqueConstraintError,
)
from taxonomy.core.models.reference import ByName, as_vocabulary_ref
from taxonomy.core.models.term import ROOT_PARENT_ID, Term, TermCreate
from taxonomy.core.models.vocabulary import VocabularyCreate
from taxonomy.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping, Sequence

    from taxonomy.core.models.reference import VocabularyLike
    from taxonomy.core.models.vocabulary import Vocabulary
    from taxonomy.core.repositories.term_repository import TermRepository
    from taxonomy.core.repositories.vocabulary_repository import VocabularyRepository


logger = get_logger(__name__)


class TaxonomyService:
    """Service for managing vocabularies and their term trees.

    Every operation taking a vocabulary accepts a ``Vocabulary``, a name, an
    id or an explicit ``VocabularyRef``. Lookups report misses as empty
    values; mutations raise ``TaxonomyError`` subclasses.
    """

    def __init__(
        self,
        vocabularies: VocabularyRepository,
        terms: TermRepository,
        *,
        depth_marker: str = "-",
    ) -> None:
        self._vocabularies = vocabularies
        self._terms = terms
        self._depth_marker = depth_marker

    # Vocabularies

    def get_vocabulary(self, vocabulary: VocabularyLike) -> Vocabulary | None:
        """Resolve any vocabulary reference to the stored vocabulary, or None."""
        ref = as_vocabulary_ref(vocabulary)
        if ref is None:
            return None
        return ref.resolve(self._vocabularies)

    def list_vocabularies(self) -> Sequence[Vocabulary]:
        return self._vocabularies.list()

    def create_vocabulary(self, name: str) -> Vocabulary:
        name = VocabularyCreate(name=name).name
        try:
            vocabulary = self._vocabularies.create(name)
        except UniqueConstraintError as err:
            logger.warning("Vocabulary %r already exists", name)
            raise DuplicateNameError(name) from err
        logger.info("Created vocabulary %s", name, extra={"vocabulary_id": vocabulary.id})
        return vocabulary

    def delete_vocabulary(self, vocabulary: str | ByName) -> bool:
        """Delete a vocabulary, addressed by name only, along with its terms.

        Ids and entities are refused (False) so that a stale object or a
        mistyped number cannot remove a vocabulary.
        """
        if isinstance(vocabulary, str):
            vocabulary = ByName(name=vocabulary)
        if not isinstance(vocabulary, ByName):
            return False

        existing = vocabulary.resolve(self._vocabularies)
        if existing is None:
            return False

        removed_terms = self._terms.delete_by_vocabulary(existing.id)
        deleted = self._vocabularies.delete(existing.id)
        logger.info(
            "Deleted vocabulary %s",
            existing.name,
            extra={"vocabulary_id": existing.id, "removed_terms": removed_terms, "deleted": deleted},
        )
        return deleted

    # Terms

    def get_term(self, vocabulary: VocabularyLike, name: str) -> Term | None:
        resolved = self.get_vocabulary(vocabulary)
        if resolved is None:
            return None
        return self._terms.find_by_name(resolved.id, name)

    def get_terms(
        self,
        vocabulary: VocabularyLike,
        parent_name: str | bool | None = True,
        include_parent: bool = False,
    ) -> list[Term]:
        """Return terms of a vocabulary.

        Args:
            vocabulary: Vocabulary reference
            parent_name: True for every term of the vocabulary; a term name for
                the direct children of that term; anything falsy for nothing
            include_parent: Append the named parent term after its children
        """
        resolved = self.get_vocabulary(vocabulary)
        if resolved is None:
            return []

        if parent_name is True:
            return list(self._terms.list(resolved.id))

        if parent_name and isinstance(parent_name, str):
            anchor = self._terms.find_by_name(resolved.id, parent_name)
            if anchor is None:
                return []
            terms = list(self._terms.list(resolved.id, parent_id=anchor.id))
            if include_parent:
                terms.append(anchor)
            return terms

        return []

    def get_terms_by_name_as_dict(self, vocabulary: VocabularyLike, field: str = "name") -> dict[int, Any]:
        """Map term id to ``field`` (the name by default) for every term of a vocabulary."""
        if field not in Term.model_fields:
            raise ValueError(f"Unknown term field: {field}")
        resolved = self.get_vocabulary(vocabulary)
        if resolved is None:
            return {}
        return {t.id: getattr(t, field) for t in self._terms.list(resolved.id)}

    def create_term(self, vocabulary: VocabularyLike, term: TermCreate | Mapping[str, Any]) -> Term:
        resolved = self.get_vocabulary(vocabulary)
        if resolved is None:
            raise MissingVocabularyError(vocabulary)

        payload = term if isinstance(term, TermCreate) else TermCreate.model_validate(dict(term))

        if payload.parent_id != ROOT_PARENT_ID:
            parent = self._terms.get(payload.parent_id)
            if parent is None or parent.vocabulary_id != resolved.id:
                raise InvalidParentError(resolved.id, payload.parent_id)

        try:
            created = self._terms.create(resolved.id, payload)
        except UniqueConstraintError as err:
            logger.warning(
                "Term %r already exists under parent %s in vocabulary %s",
                payload.name, payload.parent_id, resolved.name,
            )
            raise DuplicateTermError(resolved.id, payload.parent_id, payload.name) from err

        logger.info(
            "Created term %s",
            created.name,
            extra={"term_id": created.id, "vocabulary_id": resolved.id, "parent_id": created.parent_id},
        )
        return created

    # Tree queries

    def get_vocabulary_options(self, name: str) -> dict[int, str]:
        """Flatten a vocabulary tree into ``{term_id: label}`` for a select control.

        Roots and siblings are ordered by weight, each term is followed by its
        descendants, and labels below the roots are prefixed with one depth
        marker per level, e.g. ``"-- Crimson"``.
        """
        vocabulary = ByName(name=name).resolve(self._vocabularies)
        if vocabulary is None:
            return {}

        roots = self._terms.list(vocabulary.id, parent_id=ROOT_PARENT_ID, order_by_weight=True)
        return {
            term.id: term.name if depth == 0 else f"{self._depth_marker * depth} {term.name}"
            for term, depth in self._walk(roots)
        }

    def get_root_term(self, term: Term) -> Term:
        """Return the root ancestor of a term; a root term is its own root."""
        seen = {term.id}
        current = term
        while not current.is_root:
            parent = self._terms.get_parent(current)
            if parent is None:
                logger.warning("Term %s references missing parent %s", current.id, current.parent_id)
                raise DanglingParentError(current.id, current.parent_id)
            if parent.id in seen:
                logger.warning("Cycle in parent chain of term %s at %s", term.id, parent.id)
                raise CycleDetectedError(parent.id)
            seen.add(parent.id)
            current = parent
        return current

    def _walk(self, roots: Sequence[Term]) -> Iterator[tuple[Term, int]]:
        """Yield ``(term, depth)`` pairs in pre-order starting from ``roots``."""
        visited: set[int] = set()
        stack: list[tuple[Iterator[Term], int]] = [(iter(roots), 0)]
        while stack:
            siblings, depth = stack[-1]
            term = next(siblings, None)
            if term is None:
                stack.pop()
                continue
            if term.id in visited:
                logger.warning("Cycle in term tree of vocabulary %s at %s", term.vocabulary_id, term.id)
                raise CycleDetectedError(term.id)
            visited.add(term.id)
            yield term, depth
            stack.append((iter(self._terms.list_children(term)), depth + 1))
