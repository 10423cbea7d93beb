from __future__ import annotations

import itertools
import threading
from typing import TYPE_CHECKING

from taxonomy.core.errors import UniqueConstraintError
from taxonomy.core.models.vocabulary import Vocabulary
from taxonomy.core.repositories.vocabulary_repository import VocabularyRepository

if TYPE_CHECKING:
    from collections.abc import Sequence


class InMemoryVocabularyRepository(VocabularyRepository):
    """Process-local vocabulary store.

    Rows live in a dict keyed by id with a unique index on name. Both are
    updated under one lock so concurrent creates cannot slip past the index.
    """

    UNIQUE_NAME = "vocabularies_name_key"

    def __init__(self) -> None:
        self._rows: dict[int, Vocabulary] = {}
        self._by_name: dict[str, int] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def get(self, vocabulary_id: int) -> Vocabulary | None:
        with self._lock:
            return self._rows.get(vocabulary_id)

    def get_by_name(self, name: str) -> Vocabulary | None:
        with self._lock:
            vocabulary_id = self._by_name.get(name)
            if vocabulary_id is None:
                return None
            return self._rows.get(vocabulary_id)

    def list(self) -> Sequence[Vocabulary]:
        with self._lock:
            rows = [*self._rows.values()]
        return sorted(rows, key=lambda v: (v.name, v.id))

    def create(self, name: str) -> Vocabulary:
        with self._lock:
            if name in self._by_name:
                raise UniqueConstraintError(self.UNIQUE_NAME, {"name": name})
            vocabulary = Vocabulary(id=next(self._ids), name=name)
            self._rows[vocabulary.id] = vocabulary
            self._by_name[name] = vocabulary.id
        return vocabulary

    def delete(self, vocabulary_id: int) -> bool:
        with self._lock:
            vocabulary = self._rows.pop(vocabulary_id, None)
            if vocabulary is None:
                return False
            self._by_name.pop(vocabulary.name, None)
        return True
