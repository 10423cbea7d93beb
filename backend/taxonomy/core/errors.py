"""Domain errors raised by the taxonomy service and its stores."""

from __future__ import annotations

from typing import Any


class TaxonomyError(Exception):
    """Base exception for all taxonomy errors."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__.upper()
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary format."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"{self.error_code}: {self.message}"


class UniqueConstraintError(TaxonomyError):
    """A store rejected a write that would break a unique index."""

    def __init__(self, constraint: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            f"Unique constraint '{constraint}' violated",
            error_code="UNIQUE_CONSTRAINT",
            details={"constraint": constraint, **(details or {})},
        )
        self.constraint = constraint


class DuplicateNameError(TaxonomyError):
    """A vocabulary with the same name already exists."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Vocabulary '{name}' already exists",
            error_code="DUPLICATE_VOCABULARY",
            details={"name": name},
        )
        self.name = name


class MissingVocabularyError(TaxonomyError):
    def __init__(self, reference: Any) -> None:
        super().__init__(
            f"Vocabulary {reference!r} does not exist",
            error_code="MISSING_VOCABULARY",
            details={"reference": str(reference)},
        )


class DuplicateTermError(TaxonomyError):
    """A sibling term with the same name already exists under the parent."""

    def __init__(self, vocabulary_id: int, parent_id: int, name: str) -> None:
        super().__init__(
            f"Term '{name}' already exists under parent {parent_id}",
            error_code="DUPLICATE_TERM",
            details={"vocabulary_id": vocabulary_id, "parent_id": parent_id, "name": name},
        )


class InvalidParentError(TaxonomyError):
    """The requested parent is missing or belongs to another vocabulary."""

    def __init__(self, vocabulary_id: int, parent_id: int) -> None:
        super().__init__(
            f"Parent term {parent_id} is not a term of vocabulary {vocabulary_id}",
            error_code="INVALID_PARENT",
            details={"vocabulary_id": vocabulary_id, "parent_id": parent_id},
        )


class CycleDetectedError(TaxonomyError):
    """A term was reached twice while walking a vocabulary tree."""

    def __init__(self, term_id: int) -> None:
        super().__init__(
            f"Cycle detected in term tree at term {term_id}",
            error_code="CYCLE_DETECTED",
            details={"term_id": term_id},
        )
        self.term_id = term_id


class DanglingParentError(TaxonomyError):
    """A term points at a parent that does not exist."""

    def __init__(self, term_id: int, parent_id: int) -> None:
        super().__init__(
            f"Term {term_id} references missing parent {parent_id}",
            error_code="DANGLING_PARENT",
            details={"term_id": term_id, "parent_id": parent_id},
        )
        self.term_id = term_id
        self.parent_id = parent_id
