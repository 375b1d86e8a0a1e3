"""
Unit tests for RoutineMaterializer and the set helpers.

Tests for:
- Set notes composition ("RPE: 8 | Rest: 90s")
- Set flattening (warm-up type, weight, reps)
- Dropping unresolvable exercises vs failing the whole routine
- Empty routines, default names and notes
- Per-week set overrides (periodized only; flat programs repeat week 1)
"""

import pytest

from application.services import (
    ExerciseResolver,
    MaterializedRoutine,
    RoutineFailure,
    RoutineMaterializer,
    compose_set_notes,
)
from application.services.program_normalizer import NormalizedEntry, normalize_program
from application.services.routine_materializer import estimate_duration_minutes
from domain.models import Routine, SetPrescription
from tests.fakes import create_exercise_catalog_repo

USER_ID = "client-user-1"


def _entry(routine_data, week=1, position=1) -> NormalizedEntry:
    return NormalizedEntry(week, position, Routine.model_validate(routine_data))


@pytest.fixture
def catalog():
    return create_exercise_catalog_repo(global_names=["Back Squat", "Bench Press"])


@pytest.fixture
def materializer(catalog) -> RoutineMaterializer:
    return RoutineMaterializer(ExerciseResolver(catalog), program_title="Strength Block")


@pytest.mark.unit
class TestComposeSetNotes:
    def test_rpe_and_rest(self):
        assert compose_set_notes("8", "90s") == "RPE: 8 | Rest: 90s"

    def test_rpe_only(self):
        assert compose_set_notes("8", None) == "RPE: 8"

    def test_rest_only(self):
        assert compose_set_notes(None, "2min") == "Rest: 2min"

    def test_neither(self):
        assert compose_set_notes(None, None) == ""


@pytest.mark.unit
class TestEstimateDuration:
    def test_floor_is_fifteen_minutes(self):
        assert estimate_duration_minutes([SetPrescription(reps="5")]) == 15

    def test_sets_and_rest_add_up(self):
        sets = [SetPrescription(reps="5", rest="120s") for _ in range(6)]
        # 6 * (2 + 2) + 5
        assert estimate_duration_minutes(sets) == 29


@pytest.mark.unit
class TestMaterialize:
    def test_sets_are_flattened(self, materializer):
        outcome = materializer.materialize(
            _entry({
                "name": "Day A",
                "exercises": [{
                    "name": "Back Squat",
                    "notes": "Belt on top sets",
                    "sets": [
                        {"reps": "5", "weight": "60kg", "isWarmup": True},
                        {"reps": "5", "weight": "100kg", "rpe": "8", "rest": "90s"},
                    ],
                }],
            }),
            USER_ID,
        )

        assert isinstance(outcome, MaterializedRoutine)
        exercise = outcome.routine.exercises[0]
        assert exercise.name == "Back Squat"
        assert exercise.notes == "Belt on top sets"
        assert [s.type.value for s in exercise.sets] == ["warmup", "normal"]
        assert exercise.sets[1].weight == "100kg"
        assert exercise.sets[1].notes == "RPE: 8 | Rest: 90s"
        assert exercise.sets[0].notes == ""
        assert outcome.errors == []

    def test_exercise_ids_come_from_resolver(self, catalog, materializer):
        outcome = materializer.materialize(
            _entry({"name": "Day A", "exercises": [{"name": "bench press"}]}), USER_ID
        )
        assert outcome.routine.exercises[0].exercise_id == catalog.find_global_by_name_key("bench press")["id"]

    def test_unresolvable_exercise_is_dropped(self, materializer):
        outcome = materializer.materialize(
            _entry(
                {"name": "Day B", "exercises": [{"name": "Back Squat"}, {"name": "  "}]},
                week=2,
            ),
            USER_ID,
        )

        assert isinstance(outcome, MaterializedRoutine)
        assert len(outcome.routine.exercises) == 1
        assert len(outcome.skipped) == 1
        assert outcome.errors == [
            "Week 2, routine 'Day B': Exercise '  ' could not be resolved: exercise name is empty"
        ]

    def test_all_exercises_failing_is_routine_failure(self, materializer):
        outcome = materializer.materialize(
            _entry({"name": "Day C", "exercises": [{"name": ""}]}, week=2),
            USER_ID,
        )

        assert isinstance(outcome, RoutineFailure)
        assert outcome.week_number == 2
        assert outcome.routine_name == "Day C"
        assert len(outcome.errors) == 1
        assert outcome.errors[0].startswith("Week 2, routine 'Day C': no exercises could be resolved")

    def test_empty_routine_is_materialized(self, materializer):
        outcome = materializer.materialize(_entry({"name": "Rest Day", "exercises": []}), USER_ID)

        assert isinstance(outcome, MaterializedRoutine)
        assert outcome.routine.exercises == []
        assert outcome.routine.total_sets == 0

    def test_default_name_and_notes(self, materializer):
        outcome = materializer.materialize(_entry({"exercises": []}, week=3, position=2), USER_ID)

        assert outcome.routine.name == "Week 3 - Routine 2"
        assert outcome.routine.notes == "Week 3 routine from program: Strength Block"

    def test_authored_notes_kept(self, materializer):
        outcome = materializer.materialize(
            _entry({"name": "Day A", "notes": "Go heavy", "exercises": []}), USER_ID
        )
        assert outcome.routine.notes == "Go heavy"

    def test_week_override_sets_used(self, materializer):
        routine = {
            "name": "Day A",
            "exercises": [{
                "name": "Back Squat",
                "sets": [{"reps": "5"}],
                "weeks": [{"weekNumber": 4, "sets": [{"reps": "3"}, {"reps": "3"}, {"reps": "3"}]}],
            }],
        }

        week_1 = materializer.materialize(_entry(routine, week=1), USER_ID)
        week_4 = materializer.materialize(_entry(routine, week=4), USER_ID)

        assert [s.reps for s in week_1.routine.exercises[0].sets] == ["5"]
        assert [s.reps for s in week_4.routine.exercises[0].sets] == ["3", "3", "3"]

    def test_flat_program_repeats_week_one_sets(self, materializer):
        program = {
            "durationWeeks": 3,
            "routines": [{
                "name": "Day A",
                "exercises": [{
                    "name": "Back Squat",
                    "sets": [{"reps": "5"}],
                    "weeks": [
                        {"weekNumber": 1, "sets": [{"reps": "5"}]},
                        {"weekNumber": 2, "sets": [{"reps": "3"}, {"reps": "3"}]},
                    ],
                }],
            }],
        }

        entries = normalize_program(program)
        reps_by_week = {
            entry.week_number: [s.reps for s in materializer.materialize(entry, USER_ID).routine.exercises[0].sets]
            for entry in entries
        }

        assert reps_by_week == {1: ["5"], 2: ["5"], 3: ["5"]}

    def test_outcome_keeps_slot(self, materializer):
        outcome = materializer.materialize(_entry({"exercises": []}, week=5, position=3), USER_ID)
        assert (outcome.week_number, outcome.position) == (5, 3)
