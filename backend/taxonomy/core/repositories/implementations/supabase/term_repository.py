from __future__ import annotations

from typing import TYPE_CHECKING, Any

from postgrest.exceptions import APIError

from taxonomy.core.errors import UniqueConstraintError
from taxonomy.core.models.term import Term
from taxonomy.core.repositories.implementations.supabase.vocabulary_repository import (
    UNIQUE_VIOLATION,
)
from taxonomy.core.repositories.term_repository import TermRepository
from taxonomy.utils.logging import get_logger

logger = get_logger(__name__)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from supabase import Client

    from taxonomy.core.models.term import TermCreate


class SupabaseTermRepository(TermRepository):
    """Supabase implementation of the TermRepository.

    Assumes a `terms` table with a unique index on
    `(vocabulary_id, parent_id, name)`. Store order is ascending id.
    """

    TABLE_NAME = "terms"

    def __init__(self, client: Client, table_name: str | None = None) -> None:
        self._client: Client = client
        self._table = table_name or self.TABLE_NAME

    def get(self, term_id: int) -> Term | None:
        resp = (
            self._client.table(self._table)
            .select("*")
            .eq("id", term_id)
            .limit(1)
            .execute()
        )
        items = resp.data or []
        if not items:
            return None
        return self._row_to_term(items[0])

    def find_by_name(self, vocabulary_id: int, name: str) -> Term | None:
        resp = (
            self._client.table(self._table)
            .select("*")
            .eq("vocabulary_id", vocabulary_id)
            .eq("name", name)
            .order("id")
            .limit(1)
            .execute()
        )
        items = resp.data or []
        if not items:
            return None
        return self._row_to_term(items[0])

    def list(
        self,
        vocabulary_id: int,
        *,
        parent_id: int | None = None,
        order_by_weight: bool = False,
    ) -> Sequence[Term]:
        q = self._client.table(self._table).select("*").eq("vocabulary_id", vocabulary_id)
        if parent_id is not None:
            q = q.eq("parent_id", parent_id)
        if order_by_weight:
            q = q.order("weight")
        resp = q.order("id").execute()
        return [self._row_to_term(r) for r in resp.data or []]

    def create(self, vocabulary_id: int, term: TermCreate) -> Term:
        row = {"vocabulary_id": vocabulary_id, **term.model_dump()}
        try:
            resp = self._client.table(self._table).insert(row).execute()
        except APIError as err:
            if err.code == UNIQUE_VIOLATION:
                raise UniqueConstraintError(
                    f"{self._table}_vocabulary_id_parent_id_name_key",
                    {"vocabulary_id": vocabulary_id, "parent_id": term.parent_id, "name": term.name},
                ) from err
            logger.error("Failed to create term %s in vocabulary %s: %s", term.name, vocabulary_id, err)
            raise
        items = resp.data or []
        if not items:
            raise RuntimeError(f"Insert into {self._table} returned no row")
        return self._row_to_term(items[0])

    def delete_by_vocabulary(self, vocabulary_id: int) -> int:
        resp = (
            self._client.table(self._table)
            .delete()
            .eq("vocabulary_id", vocabulary_id)
            .execute()
        )
        return len(resp.data or [])

    @staticmethod
    def _row_to_term(row: dict[str, Any]) -> Term:
        normalized = {k: v for k, v in row.items() if k in Term.model_fields}
        # Legacy rows may carry NULL for the defaulted columns
        if normalized.get("parent_id") is None:
            normalized.pop("parent_id", None)
        if normalized.get("weight") is None:
            normalized.pop("weight", None)
        return Term.model_validate(normalized)
