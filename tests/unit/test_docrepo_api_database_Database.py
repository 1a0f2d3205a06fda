"""Database public API coverage with mongomock backend (no mocks)."""

import pytest

from docrepo.api.database.Database import Database
from docrepo.api.database.DatabaseConfig import DatabaseConfig
from docrepo.api.database.ProcedureRef import ProcedureRef
from docrepo.api.errors import ConcurrencyConflictError, StoreError
from docrepo.api.procedure.ProcedureConfig import ProcedureConfig


def _paged_config(database_config: DatabaseConfig, page_size: int) -> DatabaseConfig:
    return database_config.model_copy(update={"page_size": page_size})


def test_create_stamps_system_fields(database_config):
    with Database(database_config, "users") as db:
        raw = db.create_document({"id": "1", "key": "test", "_etag": "forged"})
        assert raw["id"] == "1"
        assert raw["key"] == "test"
        assert raw["_self"] == f"dbs/{database_config.prefix}/colls/users/docs/1"
        assert raw["_etag"] != "forged"
        assert isinstance(raw["_ts"], int)
        assert "_id" not in raw
        assert db.read_document("1") == raw


def test_create_generates_missing_id(database_config):
    with Database(database_config, "users") as db:
        raw = db.create_document({"key": "generated"})
        assert raw["id"]
        assert db.read_document(raw["id"]) == raw


def test_create_duplicate_id_conflicts(database_config):
    with Database(database_config, "users") as db:
        db.create_document({"id": "1"})
        with pytest.raises(StoreError) as exc_info:
            db.create_document({"id": "1"})
        assert exc_info.value.code == 409


def test_create_rejects_non_string_id(database_config):
    with Database(database_config, "users") as db:
        with pytest.raises(StoreError) as exc_info:
            db.create_document({"id": 7})
        assert exc_info.value.code == 400


def test_read_missing_document(database_config):
    with Database(database_config, "users") as db:
        assert db.read_document("missing") is None


def test_replace_with_current_etag(database_config):
    with Database(database_config, "users") as db:
        raw = db.create_document({"id": "1", "key": "old"})
        replaced = db.replace_document(raw["_self"], {**raw, "key": "new"}, etag=raw["_etag"])
        assert replaced["key"] == "new"
        assert replaced["_etag"] != raw["_etag"]
        assert db.read_document("1") == replaced


def test_replace_with_stale_etag_conflicts(database_config):
    with Database(database_config, "users") as db:
        raw = db.create_document({"id": "1", "key": "old"})
        db.replace_document(raw["_self"], {"key": "first"}, etag=raw["_etag"])
        with pytest.raises(ConcurrencyConflictError) as exc_info:
            db.replace_document(raw["_self"], {"key": "second"}, etag=raw["_etag"])
        assert exc_info.value.code == 412
        assert db.read_document("1")["key"] == "first"


def test_replace_missing_document(database_config):
    with Database(database_config, "users") as db:
        with pytest.raises(StoreError) as exc_info:
            db.replace_document(db.document_link("missing"), {"key": "x"}, etag="e")
        assert exc_info.value.code == 404
        assert not isinstance(exc_info.value, ConcurrencyConflictError)


@pytest.mark.parametrize("link", ["", "dbs/other/colls/users/docs/1", "dbs/x/colls/users/docs/"])
def test_bad_document_link(database_config, link):
    with Database(database_config, "users") as db:
        with pytest.raises(StoreError) as exc_info:
            db.delete_document(link)
        assert exc_info.value.code == 400


def test_delete(database_config):
    with Database(database_config, "users") as db:
        raw = db.create_document({"id": "1"})
        db.delete_document(raw["_self"])
        assert db.count_documents() == 0
        with pytest.raises(StoreError) as exc_info:
            db.delete_document(raw["_self"])
        assert exc_info.value.code == 404


def test_query_pages_follow_continuation(database_config):
    with Database(_paged_config(database_config, 2), "users") as db:
        for number in range(5):
            db.create_document({"id": f"user-{number}", "group": "a" if number % 2 else "b"})

        first = db.query_page()
        assert [raw["id"] for raw in first.documents] == ["user-0", "user-1"]
        assert first.continuation

        second = db.query_page(continuation=first.continuation)
        assert [raw["id"] for raw in second.documents] == ["user-2", "user-3"]

        last = db.query_page(continuation=second.continuation)
        assert [raw["id"] for raw in last.documents] == ["user-4"]
        assert last.continuation is None

        assert [raw["id"] for raw in db.iter_documents({"group": "b"})] == ["user-0", "user-2", "user-4"]
        assert len(db.query_all()) == 5
        assert db.count_documents({"group": "a"}) == 2


def test_exact_page_has_no_continuation(database_config):
    with Database(_paged_config(database_config, 2), "users") as db:
        db.create_document({"id": "1"})
        db.create_document({"id": "2"})
        page = db.query_page()
        assert len(page.documents) == 2
        assert page.continuation is None


def test_empty_collection_query(database_config):
    with Database(database_config, "users") as db:
        page = db.query_page()
        assert page.documents == []
        assert page.continuation is None
        assert db.query_all() == []


def test_invalid_continuation_token(database_config):
    with Database(database_config, "users") as db:
        with pytest.raises(StoreError) as exc_info:
            db.query_page(continuation="not a token")
        assert exc_info.value.code == 400


def test_collections_are_isolated(database_config):
    with Database(database_config, "users") as users:
        users.create_document({"id": "1"})
    with Database(database_config, "others") as others:
        assert others.count_documents() == 0
        assert others.read_document("1") is None


def test_get_or_create_procedure_is_idempotent(database_config):
    with Database(database_config, "users") as db:
        first = db.get_or_create_procedure("update")
        second = db.get_or_create_procedure("update")
        assert first == second
        assert first == ProcedureRef(id="update", self_link=f"{db.collection_link}/sprocs/update")


def test_get_or_create_unknown_procedure(database_config):
    with Database(database_config, "users") as db:
        with pytest.raises(ValueError, match="Unknown procedure"):
            db.get_or_create_procedure("dropDatabase")


def test_get_or_create_procedure_survives_registration_race(database_config, monkeypatch):
    with Database(database_config, "users") as db:
        impl = db._impl
        create_procedure = impl.create_procedure

        def racing_create(procedure_id):
            create_procedure(procedure_id)
            return create_procedure(procedure_id)

        monkeypatch.setattr(impl, "create_procedure", racing_create)
        assert db.get_or_create_procedure("bulkDelete").id == "bulkDelete"


def test_execute_procedure(database_config):
    with Database(database_config, "users") as db:
        db.create_document({"id": "1", "tags": ["a"]})
        ref = db.get_or_create_procedure("update")
        result = db.execute_procedure(ref, "1", {"$push": {"tags": "b"}})
        assert result["tags"] == ["a", "b"]


def test_execute_procedure_uses_procedure_config(database_config):
    with Database(database_config, "users", ProcedureConfig(max_operations=3)) as db:
        for number in range(5):
            db.create_document({"id": str(number)})
        ref = db.get_or_create_procedure("bulkDelete")
        assert db.execute_procedure(ref) == {"deleted": 2, "continuation": True}


def test_execute_unregistered_procedure(database_config):
    with Database(database_config, "users") as db:
        ref = ProcedureRef(id="update", self_link=f"{db.collection_link}/sprocs/update")
        with pytest.raises(StoreError) as exc_info:
            db.execute_procedure(ref, "1", {})
        assert exc_info.value.code == 404


def test_execute_procedure_of_other_collection(database_config):
    with Database(database_config, "others") as others:
        ref = others.get_or_create_procedure("update")
    with Database(database_config, "users") as db:
        db.get_or_create_procedure("update")
        with pytest.raises(StoreError) as exc_info:
            db.execute_procedure(ref, "1", {})
        assert exc_info.value.code == 400


def test_procedures_are_registered_per_collection(database_config):
    with Database(database_config, "others") as others:
        others.get_or_create_procedure("update")
    with Database(database_config, "users") as db:
        ref = ProcedureRef(id="update", self_link=f"{db.collection_link}/sprocs/update")
        with pytest.raises(StoreError) as exc_info:
            db.execute_procedure(ref, "1", {})
        assert exc_info.value.code == 404


def test_database_requires_context(database_config):
    db = Database(database_config, "users")
    with pytest.raises(RuntimeError) as exc_info:
        db.read_document("1")
    assert str(exc_info.value) == "Collection not initialized. Use as context manager first."
    # __exit__ with no _impl should simply return False
    assert db.__exit__(None, None, None) is False


def test_database_unsupported_backend(database_config):
    cfg = DatabaseConfig.model_construct(type="unsupported", prefix="docrepo", data=database_config.data)
    with pytest.raises(ValueError, match="Unsupported backend type"):
        Database(cfg, "users").__enter__()
