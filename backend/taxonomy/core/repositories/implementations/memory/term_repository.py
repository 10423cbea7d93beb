from __future__ import annotations

import itertools
import threading
from typing import TYPE_CHECKING

from taxonomy.core.errors import UniqueConstraintError
from taxonomy.core.models.term import Term
from taxonomy.core.repositories.term_repository import TermRepository

if TYPE_CHECKING:
    from collections.abc import Sequence

    from taxonomy.core.models.term import TermCreate


class InMemoryTermRepository(TermRepository):
    """Process-local term store with a unique index on (vocabulary, parent, name).

    Store order is insertion order.
    """

    UNIQUE_SIBLING_NAME = "terms_vocabulary_id_parent_id_name_key"

    def __init__(self) -> None:
        self._rows: dict[int, Term] = {}
        self._siblings: dict[tuple[int, int, str], int] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def get(self, term_id: int) -> Term | None:
        with self._lock:
            return self._rows.get(term_id)

    def find_by_name(self, vocabulary_id: int, name: str) -> Term | None:
        for term in self._snapshot():
            if term.vocabulary_id == vocabulary_id and term.name == name:
                return term
        return None

    def list(
        self,
        vocabulary_id: int,
        *,
        parent_id: int | None = None,
        order_by_weight: bool = False,
    ) -> Sequence[Term]:
        terms = [
            t for t in self._snapshot()
            if t.vocabulary_id == vocabulary_id and (parent_id is None or t.parent_id == parent_id)
        ]
        if order_by_weight:
            terms.sort(key=lambda t: (t.weight, t.id))
        return terms

    def _snapshot(self) -> list[Term]:
        with self._lock:
            return [*self._rows.values()]

    def create(self, vocabulary_id: int, term: TermCreate) -> Term:
        key = (vocabulary_id, term.parent_id, term.name)
        with self._lock:
            if key in self._siblings:
                raise UniqueConstraintError(
                    self.UNIQUE_SIBLING_NAME,
                    {"vocabulary_id": vocabulary_id, "parent_id": term.parent_id, "name": term.name},
                )
            stored = Term(
                id=next(self._ids),
                vocabulary_id=vocabulary_id,
                **term.model_dump(),
            )
            self._rows[stored.id] = stored
            self._siblings[key] = stored.id
        return stored

    def delete_by_vocabulary(self, vocabulary_id: int) -> int:
        with self._lock:
            doomed = [t for t in self._rows.values() if t.vocabulary_id == vocabulary_id]
            for term in doomed:
                del self._rows[term.id]
                self._siblings.pop((term.vocabulary_id, term.parent_id, term.name), None)
        return len(doomed)
