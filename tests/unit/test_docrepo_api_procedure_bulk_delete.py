"""Unit tests for the bulk delete procedure against the mongomock backend."""

import pytest

from docrepo.api.database._mongomock._Impl import _Impl
from docrepo.api.procedure.bulk_delete import bulk_delete
from docrepo.api.procedure.ExecutionBudget import ExecutionBudget
from docrepo.api.procedure.ProcedureContext import ProcedureContext


@pytest.fixture
def backend(database_config):
    with _Impl(database_config, "users") as impl:
        yield impl


def _fill(backend, count: int) -> None:
    for number in range(count):
        backend.create_document({"id": f"user-{number:03d}", "key": f"key-{number}"})


def _context(backend, max_operations: int | None = None, page_size: int = 100) -> ProcedureContext:
    return ProcedureContext(backend, ExecutionBudget(timeout_secs=60, max_operations=max_operations), page_size)


def test_empty_collection_deletes_nothing(backend):
    assert bulk_delete(_context(backend)) == {"deleted": 0, "continuation": False}


def test_deletes_everything_in_one_invocation(backend):
    _fill(backend, 7)
    assert bulk_delete(_context(backend)) == {"deleted": 7, "continuation": False}
    assert backend.count_documents() == 0


def test_follows_pages(backend):
    _fill(backend, 7)
    assert bulk_delete(_context(backend, page_size=2)) == {"deleted": 7, "continuation": False}
    assert backend.count_documents() == 0


def test_only_touches_its_own_collection(backend, database_config):
    _fill(backend, 3)
    with _Impl(database_config, "others") as others:
        others.create_document({"id": "keep"})
        assert bulk_delete(_context(backend)) == {"deleted": 3, "continuation": False}
        assert others.count_documents() == 1


def test_budget_stop_mid_page_reports_continuation(backend):
    _fill(backend, 5)
    # One query plus two deletes.
    body = bulk_delete(_context(backend, max_operations=3))
    assert body == {"deleted": 2, "continuation": True}
    assert backend.count_documents() == 3


def test_budget_stop_before_next_query_reports_continuation(backend):
    _fill(backend, 4)
    # Query, two deletes, then the second query is declined.
    body = bulk_delete(_context(backend, max_operations=3, page_size=2))
    assert body == {"deleted": 2, "continuation": True}
    assert backend.count_documents() == 2


def test_budget_refusing_first_query_reports_continuation(backend):
    _fill(backend, 2)
    assert bulk_delete(_context(backend, max_operations=0)) == {"deleted": 0, "continuation": True}
    assert backend.count_documents() == 2


def test_reinvocation_finishes_the_job(backend):
    _fill(backend, 5)
    total = 0
    invocations = 0
    while True:
        body = bulk_delete(_context(backend, max_operations=3, page_size=2))
        invocations += 1
        total += body["deleted"]
        if not body["continuation"]:
            break
    assert total == 5
    assert invocations == 3
    assert backend.count_documents() == 0
