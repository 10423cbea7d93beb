from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from taxonomy.config import settings
from taxonomy.core.repositories.implementations.memory.term_repository import InMemoryTermRepository
from taxonomy.core.repositories.implementations.memory.vocabulary_repository import (
    InMemoryVocabularyRepository,
)
from taxonomy.core.repositories.term_repository import TermRepository  # noqa: TCH001
from taxonomy.core.repositories.vocabulary_repository import VocabularyRepository  # noqa: TCH001
from taxonomy.core.services.taxonomy_service import TaxonomyService
from taxonomy.utils.logging import get_logger

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def _memory_vocabulary_repository() -> InMemoryVocabularyRepository:
    return InMemoryVocabularyRepository()


@lru_cache(maxsize=1)
def _memory_term_repository() -> InMemoryTermRepository:
    return InMemoryTermRepository()


def get_vocabulary_repository() -> VocabularyRepository:
    """Get the vocabulary repository for the configured storage backend."""
    if settings.storage_backend == "supabase":
        from taxonomy.core.repositories.implementations.supabase.vocabulary_repository import (
            SupabaseVocabularyRepository,
        )
        from taxonomy.db.base import get_supabase_client

        logger.debug("Using Supabase vocabulary store", extra={"table": settings.vocabularies_table})
        return SupabaseVocabularyRepository(get_supabase_client(), settings.vocabularies_table)
    return _memory_vocabulary_repository()


def get_term_repository() -> TermRepository:
    """Get the term repository for the configured storage backend."""
    if settings.storage_backend == "supabase":
        from taxonomy.core.repositories.implementations.supabase.term_repository import (
            SupabaseTermRepository,
        )
        from taxonomy.db.base import get_supabase_client

        return SupabaseTermRepository(get_supabase_client(), settings.terms_table)
    return _memory_term_repository()


def get_taxonomy_service(
    vocabularies: VocabularyRepository = Depends(get_vocabulary_repository),
    terms: TermRepository = Depends(get_term_repository),
) -> TaxonomyService:
    """Get a request-scoped taxonomy service instance."""
    return TaxonomyService(vocabularies, terms, depth_marker=settings.option_depth_marker)
