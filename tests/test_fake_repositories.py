"""
Unit tests for fake repository implementations.

These tests verify that fake repositories:
- Support seeding and reset for test isolation
- Return expected values for all operations
- Inject failures the way the real adapters report them
"""
import pytest

from application.exceptions import PersistenceError
from application.ports import LEDGER_COMPLETED, LEDGER_FAILED, LEDGER_PENDING
from tests.fakes import (
    FakeClientLinkRepository,
    FakeConversionLedgerRepository,
    FakeExerciseCatalogRepository,
    FakeProgramRepository,
    FakeRoutineRepository,
    create_client_link_repo,
    create_exercise_catalog_repo,
)

# All tests in this module are pure logic tests (no TestClient) - mark as unit
pytestmark = pytest.mark.unit


# =============================================================================
# Client links
# =============================================================================


class TestFakeClientLinkRepository:
    def test_get_client_scoped_by_trainer(self):
        repo = create_client_link_repo(trainer_id="t1", client_id="c1", user_id="u1")

        assert repo.get_client("t1", "c1")["user_id"] == "u1"
        assert repo.get_client("t2", "c1") is None

    def test_list_clients_sorted_by_name(self):
        repo = FakeClientLinkRepository()
        repo.seed([
            {"id": "c1", "trainer_id": "t1", "name": "Morgan"},
            {"id": "c2", "trainer_id": "t1", "name": "Alex"},
        ])

        assert [c["name"] for c in repo.list_clients("t1")] == ["Alex", "Morgan"]

    def test_fail_with(self):
        repo = create_client_link_repo()
        repo.fail_with = "down"

        with pytest.raises(PersistenceError, match="down"):
            repo.get_client("trainer-1", "client-doc-1")
        assert repo.calls == 1

    def test_reset(self):
        repo = create_client_link_repo()
        repo.reset()
        assert repo.list_clients("trainer-1") == []


# =============================================================================
# Exercise catalog
# =============================================================================


class TestFakeExerciseCatalogRepository:
    def test_factory_seeds_global_catalog(self):
        repo = create_exercise_catalog_repo()

        row = repo.find_global_by_name_key("back squat")

        assert row["name"] == "Back Squat"
        assert row["owner_id"] is None

    def test_custom_catalog_is_per_owner(self):
        repo = FakeExerciseCatalogRepository()
        ids = repo.seed_custom("u1", ["Zercher Squat"])

        assert repo.find_custom_by_name_key("u1", "zercher squat")["id"] == ids["Zercher Squat"]
        assert repo.find_custom_by_name_key("u2", "zercher squat") is None

    def test_create_custom_is_idempotent(self):
        repo = FakeExerciseCatalogRepository()

        first = repo.create_custom("u1", "Zercher Squat", "zercher squat", created_by="t1")
        second = repo.create_custom("u1", "zercher squat", "zercher squat")

        assert first["id"] == second["id"]
        assert first["created_by"] == "t1"
        assert len(repo.get_custom("u1")) == 1
        assert repo.create_calls == 2

    def test_failing_keys(self):
        repo = create_exercise_catalog_repo()
        repo.failing_keys.add("deadlift")

        with pytest.raises(PersistenceError):
            repo.find_global_by_name_key("deadlift")
        assert repo.find_global_by_name_key("bench press") is not None


# =============================================================================
# Routines & programs
# =============================================================================


class TestFakeRoutineRepository:
    def test_create_and_read(self):
        repo = FakeRoutineRepository()

        repo.create("u1", {"id": "r1", "name": "Day A"})

        assert repo.get_by_id("u1", "r1")["name"] == "Day A"
        assert repo.get_by_id("u2", "r1") is None

    def test_list_by_ids_skips_missing(self):
        repo = FakeRoutineRepository()
        repo.seed([{"id": "r1", "user_id": "u1"}, {"id": "r2", "user_id": "u2"}])

        assert [r["id"] for r in repo.list_by_ids("u1", ["r1", "r2", "r3"])] == ["r1"]

    def test_fail_after(self):
        repo = FakeRoutineRepository(fail_after=1)
        repo.create("u1", {"id": "r1"})

        with pytest.raises(PersistenceError):
            repo.create("u1", {"id": "r2"})
        assert repo.create_calls == 2
        assert len(repo.get_all()) == 1


class TestFakeProgramRepository:
    def test_get_by_user_newest_first(self):
        repo = FakeProgramRepository()
        repo.create("u1", {"id": "p1", "created_at": "2026-01-01T00:00:00+00:00"})
        repo.create("u1", {"id": "p2", "created_at": "2026-02-01T00:00:00+00:00"})

        assert [p["id"] for p in repo.get_by_user("u1")] == ["p2", "p1"]

    def test_fail_with(self):
        repo = FakeProgramRepository()
        repo.fail_with = "timeout"

        with pytest.raises(PersistenceError, match="timeout"):
            repo.create("u1", {"id": "p1"})
        assert repo.get_all() == []


# =============================================================================
# Conversion ledger
# =============================================================================


class TestFakeConversionLedgerRepository:
    def test_lifecycle(self):
        repo = FakeConversionLedgerRepository()

        record = repo.begin("k1", "u1", trainer_id="t1")
        assert record["status"] == LEDGER_PENDING

        repo.record_routine("k1", "1:1", "r1")
        repo.complete("k1", "p1", {"success": True})

        stored = repo.get("k1")
        assert stored["status"] == LEDGER_COMPLETED
        assert stored["routine_slots"] == {"1:1": "r1"}
        assert stored["result"] == {"success": True}

    def test_begin_resumes_failed_record(self):
        repo = FakeConversionLedgerRepository()
        repo.seed([{
            "idempotency_key": "k1",
            "user_id": "u1",
            "status": LEDGER_FAILED,
            "error": "timeout",
            "routine_slots": {"1:1": "r1"},
        }])

        record = repo.begin("k1", "u1")

        assert record["status"] == LEDGER_PENDING
        assert record["error"] is None
        assert record["routine_slots"] == {"1:1": "r1"}

    def test_list_incomplete(self):
        repo = FakeConversionLedgerRepository()
        repo.seed([
            {"idempotency_key": "k1", "user_id": "u1", "status": LEDGER_FAILED},
            {"idempotency_key": "k2", "user_id": "u1", "status": LEDGER_COMPLETED},
            {"idempotency_key": "k3", "user_id": "u2", "status": LEDGER_PENDING},
        ])

        assert [r["idempotency_key"] for r in repo.list_incomplete("u1")] == ["k1"]

    def test_failure_switches(self):
        repo = FakeConversionLedgerRepository()
        repo.begin("k1", "u1")

        repo.fail_updates = True
        with pytest.raises(PersistenceError):
            repo.mark_failed("k1", "boom")

        repo.fail_reads = True
        with pytest.raises(PersistenceError):
            repo.get("k1")
