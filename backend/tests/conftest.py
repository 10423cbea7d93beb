import pytest
from fastapi.testclient import TestClient

from taxonomy.core.repositories.implementations.memory.term_repository import InMemoryTermRepository
from taxonomy.core.repositories.implementations.memory.vocabulary_repository import (
    InMemoryVocabularyRepository,
)
from taxonomy.core.services.taxonomy_service import TaxonomyService
from taxonomy.dependencies import get_taxonomy_service
from taxonomy.main import app


@pytest.fixture
def vocabulary_repo() -> InMemoryVocabularyRepository:
    return InMemoryVocabularyRepository()


@pytest.fixture
def term_repo() -> InMemoryTermRepository:
    return InMemoryTermRepository()


@pytest.fixture
def service(vocabulary_repo, term_repo) -> TaxonomyService:
    return TaxonomyService(vocabulary_repo, term_repo)


@pytest.fixture
def colors(service):
    """Colors: Warm (weight 0) > Red, Cool (weight 1)."""
    vocabulary = service.create_vocabulary("Colors")
    warm = service.create_term(vocabulary, {"name": "Warm", "weight": 0})
    cool = service.create_term(vocabulary, {"name": "Cool", "weight": 1})
    red = service.create_term(vocabulary, {"name": "Red", "parent_id": warm.id})
    return {"vocabulary": vocabulary, "warm": warm, "cool": cool, "red": red}


@pytest.fixture
def client(service):
    app.dependency_overrides[get_taxonomy_service] = lambda: service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
