from __future__ import annotations

from typing import TYPE_CHECKING, Any

from postgrest.exceptions import APIError

from taxonomy.core.errors import UniqueConstraintError
from taxonomy.core.models.vocabulary import Vocabulary
from taxonomy.core.repositories.vocabulary_repository import VocabularyRepository
from taxonomy.utils.logging import get_logger

logger = get_logger(__name__)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from supabase import Client

# PostgreSQL SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


class SupabaseVocabularyRepository(VocabularyRepository):
    """Supabase implementation of the VocabularyRepository.

    Uses Supabase's PostgREST client for CRUD. Assumes a `vocabularies` table
    with a unique index on `name` (see `backend/sql/taxonomy.sql`).
    """

    TABLE_NAME = "vocabularies"

    def __init__(self, client: Client, table_name: str | None = None) -> None:
        self._client: Client = client
        self._table = table_name or self.TABLE_NAME

    def get(self, vocabulary_id: int) -> Vocabulary | None:
        resp = (
            self._client.table(self._table)
            .select("*")
            .eq("id", vocabulary_id)
            .limit(1)
            .execute()
        )
        return self._first_or_none(resp.data)

    def get_by_name(self, name: str) -> Vocabulary | None:
        resp = (
            self._client.table(self._table)
            .select("*")
            .eq("name", name)
            .limit(1)
            .execute()
        )
        return self._first_or_none(resp.data)

    def list(self) -> Sequence[Vocabulary]:
        resp = (
            self._client.table(self._table)
            .select("*")
            .order("name")
            .execute()
        )
        return [self._row_to_vocabulary(r) for r in resp.data or []]

    def create(self, name: str) -> Vocabulary:
        try:
            resp = self._client.table(self._table).insert({"name": name}).execute()
        except APIError as err:
            if err.code == UNIQUE_VIOLATION:
                raise UniqueConstraintError(f"{self._table}_name_key", {"name": name}) from err
            logger.error("Failed to create vocabulary %s: %s", name, err)
            raise
        items = resp.data or []
        if not items:
            raise RuntimeError(f"Insert into {self._table} returned no row")
        return self._row_to_vocabulary(items[0])

    def delete(self, vocabulary_id: int) -> bool:
        resp = (
            self._client.table(self._table)
            .delete()
            .eq("id", vocabulary_id)
            .execute()
        )
        return len(resp.data or []) > 0

    def _first_or_none(self, data: Any) -> Vocabulary | None:
        items = data or []
        if not items:
            return None
        return self._row_to_vocabulary(items[0])

    @staticmethod
    def _row_to_vocabulary(row: dict[str, Any]) -> Vocabulary:
        # Filter out bookkeeping columns that aren't part of the Vocabulary model
        normalized = {k: v for k, v in row.items() if k in Vocabulary.model_fields}
        return Vocabulary.model_validate(normalized)
