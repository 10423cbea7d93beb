import pytest

from taxonomy.core.errors import CycleDetectedError, DanglingParentError
from taxonomy.core.models.term import Term, TermCreate
from taxonomy.core.repositories.term_repository import TermRepository
from taxonomy.core.services.taxonomy_service import TaxonomyService


class StubTermRepository(TermRepository):
    """Serves a fixed, possibly malformed, set of terms."""

    def __init__(self, terms, children=None):
        self._terms = {t.id: t for t in terms}
        self._children = children

    def get(self, term_id):
        return self._terms.get(term_id)

    def find_by_name(self, vocabulary_id, name):
        return next((t for t in self._terms.values() if t.name == name), None)

    def list(self, vocabulary_id, *, parent_id=None, order_by_weight=False):
        if self._children is not None and parent_id is not None:
            return [self._terms[i] for i in self._children.get(parent_id, [])]
        return [t for t in self._terms.values() if parent_id is None or t.parent_id == parent_id]

    def create(self, vocabulary_id, term):
        raise NotImplementedError

    def delete_by_vocabulary(self, vocabulary_id):
        raise NotImplementedError


def make_term(term_id, parent_id=0, name=None, weight=0):
    return Term(id=term_id, name=name or f"T{term_id}", vocabulary_id=1, parent_id=parent_id, weight=weight)


def test_options_scenario(service, colors):
    options = service.get_vocabulary_options("Colors")

    assert list(options.items()) == [
        (colors["warm"].id, "Warm"),
        (colors["red"].id, "- Red"),
        (colors["cool"].id, "Cool"),
    ]


def test_options_three_level_chain(service):
    service.create_vocabulary("Chain")
    t1 = service.create_term("Chain", {"name": "T1"})
    t2 = service.create_term("Chain", {"name": "T2", "parent_id": t1.id})
    t3 = service.create_term("Chain", {"name": "T3", "parent_id": t2.id})

    assert list(service.get_vocabulary_options("Chain").items()) == [
        (t1.id, "T1"),
        (t2.id, "- T2"),
        (t3.id, "-- T3"),
    ]


def test_options_children_ordered_by_weight(service):
    service.create_vocabulary("Colors")
    warm = service.create_term("Colors", {"name": "Warm"})
    service.create_term("Colors", {"name": "Red", "parent_id": warm.id, "weight": 5})
    service.create_term("Colors", {"name": "Orange", "parent_id": warm.id, "weight": -1})
    service.create_term("Colors", {"name": "Yellow", "parent_id": warm.id, "weight": 5})

    labels = list(service.get_vocabulary_options("Colors").values())

    assert labels == ["Warm", "- Orange", "- Red", "- Yellow"]


def test_options_unknown_vocabulary(service):
    assert service.get_vocabulary_options("Nope") == {}


def test_options_only_by_exact_name(service, colors):
    assert service.get_vocabulary_options("colors") == {}


def test_options_custom_depth_marker(vocabulary_repo, term_repo):
    service = TaxonomyService(vocabulary_repo, term_repo, depth_marker="*")
    service.create_vocabulary("Colors")
    warm = service.create_term("Colors", {"name": "Warm"})
    service.create_term("Colors", {"name": "Red", "parent_id": warm.id})

    assert list(service.get_vocabulary_options("Colors").values()) == ["Warm", "* Red"]


def test_options_deep_tree_does_not_recurse(service):
    service.create_vocabulary("Deep")
    parent = service.create_term("Deep", {"name": "n0"})
    for i in range(1, 1500):
        parent = service.create_term("Deep", {"name": f"n{i}", "parent_id": parent.id})

    options = service.get_vocabulary_options("Deep")

    assert len(options) == 1500
    assert options[parent.id] == "-" * 1499 + " n1499"


def test_options_cycle_detected(vocabulary_repo):
    vocabulary_repo.create("Loop")
    a, b = make_term(1), make_term(2, parent_id=1)
    stub = StubTermRepository([a, b], children={0: [1], 1: [2], 2: [1]})
    service = TaxonomyService(vocabulary_repo, stub)

    with pytest.raises(CycleDetectedError) as excinfo:
        service.get_vocabulary_options("Loop")

    assert excinfo.value.term_id == 1


def test_root_of_chain(service):
    service.create_vocabulary("Chain")
    t1 = service.create_term("Chain", {"name": "T1"})
    t2 = service.create_term("Chain", {"name": "T2", "parent_id": t1.id})
    t3 = service.create_term("Chain", {"name": "T3", "parent_id": t2.id})

    assert service.get_root_term(t3) == t1
    assert service.get_root_term(t1) is t1


def test_root_dangling_parent(service, term_repo):
    vocabulary = service.create_vocabulary("Colors")
    orphan = term_repo.create(vocabulary.id, TermCreate(name="Orphan", parent_id=42))

    with pytest.raises(DanglingParentError) as excinfo:
        service.get_root_term(orphan)

    assert excinfo.value.parent_id == 42


def test_root_cycle_detected(vocabulary_repo):
    a, b = make_term(1, parent_id=2), make_term(2, parent_id=1)
    service = TaxonomyService(vocabulary_repo, StubTermRepository([a, b]))

    with pytest.raises(CycleDetectedError):
        service.get_root_term(a)
