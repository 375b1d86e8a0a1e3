"""
Unit tests for the programs router.

Tests the endpoints under /programs with every repository replaced by an
in-memory fake:
- POST /programs/send-to-client status mapping (200/404/422/502/503)
- camelCase response body
- Replay of an identical request
- POST /programs/toggle-periodization
- GET /programs/conversions/orphans
"""

import pytest
from fastapi.testclient import TestClient

from backend.main import create_app
from backend.settings import Settings
from tests.fakes.conftest import override_conversion_deps

TRAINER_ID = "trainer-1"
SEND = "/programs/send-to-client"
TOGGLE = "/programs/toggle-periodization"
ORPHANS = "/programs/conversions/orphans"

PROGRAM = {
    "title": "Full Body",
    "durationWeeks": 2,
    "routines": [
        {"name": "Day A", "exercises": [{"name": "Back Squat", "sets": [{"reps": "5"}]}]},
        {"name": "Day B", "exercises": [{"name": "Deadlift", "sets": [{"reps": "3"}]}]},
    ],
}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def app():
    return create_app(settings=Settings(environment="test", _env_file=None))


@pytest.fixture
def fakes(app):
    return override_conversion_deps(app, trainer_id=TRAINER_ID)


@pytest.fixture
def client(app, fakes) -> TestClient:
    return TestClient(app)


def _send(client, program=PROGRAM, **extra):
    return client.post(SEND, json={"clientId": "client-doc-1", "program": program, **extra})


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestSendToClient:
    def test_success(self, client, fakes):
        resp = _send(client, message="Have fun")
        assert resp.status_code == 200, resp.text

        data = resp.json()
        assert data["success"] is True
        assert data["routinesCreated"] == 4
        assert data["routinesFailed"] == 0
        assert data["errors"] == []
        assert data["programId"] == fakes.programs.get_all()[0]["id"]
        assert data["replayed"] is False

    def test_partial_success_is_200(self, client):
        program = {"routines": [
            {"name": "Good", "exercises": [{"name": "Back Squat"}]},
            {"name": "Bad", "exercises": [{"name": ""}]},
        ]}

        resp = _send(client, program=program)

        assert resp.status_code == 200
        assert resp.json()["routinesFailed"] == 1
        assert len(resp.json()["errors"]) == 1

    def test_identical_request_is_replayed(self, client, fakes):
        first = _send(client).json()
        second = _send(client).json()

        assert second["replayed"] is True
        assert second["programId"] == first["programId"]
        assert fakes.programs.create_calls == 1

    def test_missing_schedule_is_422(self, client, fakes):
        resp = _send(client, program={"title": "Empty"})

        assert resp.status_code == 422
        assert resp.json()["detail"] == "missing schedule"
        assert fakes.clients.calls == 0

    def test_missing_client_id_is_422(self, client):
        resp = client.post(SEND, json={"program": PROGRAM})
        assert resp.status_code == 422

    def test_unlinked_client_is_404(self, client):
        resp = client.post(SEND, json={"clientId": "unknown", "program": PROGRAM})
        assert resp.status_code == 404

    def test_nothing_created_is_502(self, client):
        resp = _send(client, program={"routines": [{"name": "Bad", "exercises": [{"name": ""}]}]})

        assert resp.status_code == 502
        data = resp.json()
        assert data["success"] is False
        assert data["programId"] is None
        assert "No routines could be created; program was not sent" in data["errors"]

    def test_envelope_failure_is_502(self, client, fakes):
        fakes.programs.fail_with = "timeout"

        resp = _send(client)

        assert resp.status_code == 502
        assert resp.json()["routinesCreated"] == 4

    def test_database_unavailable_is_503(self, client, fakes):
        fakes.clients.fail_with = "connection refused"

        resp = _send(client)

        assert resp.status_code == 503

    def test_idempotency_disabled_creates_duplicates(self, app):
        fakes = override_conversion_deps(
            app,
            trainer_id=TRAINER_ID,
            settings=Settings(environment="test", conversion_idempotency_enabled=False, _env_file=None),
        )
        client = TestClient(app)

        _send(client)
        second = _send(client).json()

        assert second["replayed"] is False
        assert fakes.programs.create_calls == 2
        assert fakes.ledger.get_all() == []


@pytest.mark.unit
class TestTogglePeriodization:
    def test_flat_to_periodized(self, client):
        resp = client.post(TOGGLE, json={"program": PROGRAM})

        assert resp.status_code == 200
        program = resp.json()["program"]
        assert [w["weekNumber"] for w in program["weeks"]] == [1, 2]
        assert "routines" not in program

    def test_periodized_to_flat(self, client):
        periodized = {"weeks": [
            {"weekNumber": 1, "routines": [{"name": "A", "exercises": []}]},
            {"weekNumber": 4, "routines": [{"name": "B", "exercises": []}]},
        ]}

        resp = client.post(TOGGLE, json={"program": periodized})

        program = resp.json()["program"]
        assert program["durationWeeks"] == 4
        assert [r["name"] for r in program["routines"]] == ["A"]

    def test_invalid_program_is_422(self, client):
        resp = client.post(TOGGLE, json={"program": {"routines": []}})
        assert resp.status_code == 422


@pytest.mark.unit
class TestOrphanReport:
    def test_reports_orphans_after_envelope_failure(self, client, fakes):
        fakes.programs.fail_with = "timeout"
        _send(client)

        resp = client.get(ORPHANS, params={"client_id": "client-doc-1"})

        assert resp.status_code == 200
        data = resp.json()
        assert data["userId"] == "client-user-1"
        assert data["orphanCount"] == 4
        assert {o["slot"] for o in data["orphans"]} == {"1:1", "1:2", "2:1", "2:2"}

    def test_empty_report(self, client):
        resp = client.get(ORPHANS, params={"client_id": "client-doc-1"})
        assert resp.json()["orphanCount"] == 0

    def test_unknown_client_is_404(self, client):
        resp = client.get(ORPHANS, params={"client_id": "unknown"})
        assert resp.status_code == 404
