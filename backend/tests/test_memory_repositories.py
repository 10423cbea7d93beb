import threading

import pytest

from taxonomy.core.errors import UniqueConstraintError
from taxonomy.core.models.term import TermCreate


def test_vocabulary_ids_are_assigned_in_order(vocabulary_repo):
    first = vocabulary_repo.create("Colors")
    second = vocabulary_repo.create("Shapes")

    assert (first.id, second.id) == (1, 2)
    assert vocabulary_repo.get(2) == second
    assert vocabulary_repo.get_by_name("Colors") == first


def test_vocabulary_name_unique(vocabulary_repo):
    vocabulary_repo.create("Colors")

    with pytest.raises(UniqueConstraintError) as excinfo:
        vocabulary_repo.create("Colors")

    assert excinfo.value.constraint == "vocabularies_name_key"


def test_vocabulary_delete_frees_name(vocabulary_repo):
    vocabulary = vocabulary_repo.create("Colors")

    assert vocabulary_repo.delete(vocabulary.id) is True
    assert vocabulary_repo.delete(vocabulary.id) is False
    assert vocabulary_repo.get_by_name("Colors") is None
    assert vocabulary_repo.create("Colors").id == 2


def test_concurrent_vocabulary_creates_admit_one(vocabulary_repo):
    results = []
    barrier = threading.Barrier(8)

    def create():
        barrier.wait()
        try:
            results.append(vocabulary_repo.create("Colors"))
        except UniqueConstraintError:
            results.append(None)

    threads = [threading.Thread(target=create) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sum(r is not None for r in results) == 1


def test_term_sibling_name_unique(term_repo):
    term_repo.create(1, TermCreate(name="Warm"))

    with pytest.raises(UniqueConstraintError):
        term_repo.create(1, TermCreate(name="Warm"))

    assert term_repo.create(2, TermCreate(name="Warm")).vocabulary_id == 2
    assert term_repo.create(1, TermCreate(name="Warm", parent_id=1)).parent_id == 1


def test_term_list_filters_and_orders(term_repo):
    heavy = term_repo.create(1, TermCreate(name="Heavy", weight=10))
    light = term_repo.create(1, TermCreate(name="Light", weight=-3))
    child = term_repo.create(1, TermCreate(name="Child", parent_id=heavy.id))
    term_repo.create(2, TermCreate(name="Elsewhere"))

    assert term_repo.list(1) == [heavy, light, child]
    assert term_repo.list(1, parent_id=0) == [heavy, light]
    assert term_repo.list(1, parent_id=0, order_by_weight=True) == [light, heavy]
    assert term_repo.list_children(heavy) == [child]
    assert term_repo.get_parent(child) == heavy
    assert term_repo.get_parent(heavy) is None


def test_term_find_by_name_returns_first(term_repo):
    first = term_repo.create(1, TermCreate(name="Red"))
    term_repo.create(1, TermCreate(name="Red", parent_id=first.id))

    assert term_repo.find_by_name(1, "Red") == first
    assert term_repo.find_by_name(2, "Red") is None


def test_term_delete_by_vocabulary(term_repo):
    term_repo.create(1, TermCreate(name="Warm"))
    term_repo.create(1, TermCreate(name="Cool"))
    kept = term_repo.create(2, TermCreate(name="Warm"))

    assert term_repo.delete_by_vocabulary(1) == 2
    assert term_repo.list(1) == []
    assert term_repo.list(2) == [kept]
    # Index entries are released with the rows
    assert term_repo.create(1, TermCreate(name="Warm")).name == "Warm"


def test_reads_while_another_thread_writes(term_repo, vocabulary_repo):
    errors = []
    done = threading.Event()

    def write():
        try:
            for i in range(2000):
                term_repo.create(1, TermCreate(name=f"n{i}"))
                vocabulary_repo.create(f"v{i}")
        finally:
            done.set()

    def read():
        try:
            while not done.is_set():
                term_repo.list(1)
                term_repo.find_by_name(1, "missing")
                vocabulary_repo.list()
                vocabulary_repo.get_by_name("missing")
        except RuntimeError as err:
            errors.append(repr(err))

    writer = threading.Thread(target=write)
    reader = threading.Thread(target=read)
    reader.start()
    writer.start()
    writer.join()
    reader.join()

    assert errors == []
    assert len(term_repo.list(1)) == 2000
