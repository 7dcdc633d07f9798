import pytest
from rdflib import Literal, Namespace

from converters.errors import RepositoryError, RepositoryNotEmptyError
from converters.sinks import StoreSink
from converters.vocabularies import RDF

BASE = "http://example.org/data/"
EX = Namespace(BASE)


class FakeRepository:
    """In-memory stand-in for AllegroGraphRepository."""

    def __init__(self, quads=(), fail_on_insert=None):
        self.quads = list(quads)
        self.cleared = 0
        self.fail_on_insert = fail_on_insert
        self.insert_attempts = 0

    def size(self):
        return len(self.quads)

    def clear(self):
        self.cleared += 1
        self.quads = []

    def insert(self, quad):
        self.insert_attempts += 1
        if self.insert_attempts == self.fail_on_insert:
            raise RepositoryError("insert failed")
        self.quads.append(quad)


EXISTING = [(EX.a, EX.b, EX.c, EX.g)]


def test_empty_repository_is_accepted():
    repository = FakeRepository()
    StoreSink(repository, BASE)
    assert repository.cleared == 0


def test_non_empty_repository_is_refused():
    repository = FakeRepository(EXISTING * 3)

    with pytest.raises(RepositoryNotEmptyError) as excinfo:
        StoreSink(repository, BASE)

    assert excinfo.value.size == 3
    assert "size = 3" in str(excinfo.value)
    assert "--clean" in str(excinfo.value) and "--append" in str(excinfo.value)
    assert repository.insert_attempts == 0
    assert repository.quads == EXISTING * 3


def test_clean_empties_repository_before_first_insert():
    repository = FakeRepository(EXISTING)

    sink = StoreSink(repository, BASE, clean=True)

    assert repository.cleared == 1
    assert repository.size() == 0
    assert sink.inserted == 0


def test_clean_takes_precedence_over_append():
    repository = FakeRepository(EXISTING)
    StoreSink(repository, BASE, clean=True, append=True)
    assert repository.size() == 0


def test_append_keeps_existing_data():
    repository = FakeRepository(EXISTING)

    sink = StoreSink(repository, BASE, append=True)
    sink.save("ctx", [("s", RDF.type, "o")])

    assert repository.cleared == 0
    assert repository.quads == EXISTING + [(EX.s, RDF.type, EX.o, EX.ctx)]


def test_save_inserts_each_quad_immediately():
    repository = FakeRepository()
    sink = StoreSink(repository, BASE)

    sink.save("ctx", [("s", "p", Literal("one")), ("s", "p", Literal("two"))])

    assert repository.quads == [
        (EX.s, EX.p, Literal("one"), EX.ctx),
        (EX.s, EX.p, Literal("two"), EX.ctx),
    ]
    assert sink.inserted == 2
    assert sink.finalize() is None


def test_insert_failure_propagates_without_rollback():
    repository = FakeRepository(fail_on_insert=2)
    sink = StoreSink(repository, BASE)

    with pytest.raises(RepositoryError):
        sink.save("ctx", [("s", "p", "o1"), ("s", "p", "o2"), ("s", "p", "o3")])

    assert repository.quads == [(EX.s, EX.p, EX.o1, EX.ctx)]
    assert repository.insert_attempts == 2
