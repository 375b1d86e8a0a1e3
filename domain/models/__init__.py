"""
Domain models for the Program Conversion Engine.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).

These models represent the core business concepts:
- FlatProgram / PeriodizedProgram: the two trainer-authored payload shapes
- Routine, ExerciseEntry, SetPrescription: authoring shapes
- ExerciseRecord: a resolved exercise in the global or custom catalog
- PersistedRoutine, PersistedExercise, PersistedSet: client routine documents
- ProgramEnvelope, RoutineIndexEntry: the program record indexing routines

Usage:
    >>> from domain.models import PeriodizedProgram

    >>> program = PeriodizedProgram.model_validate({
    ...     "title": "Hypertrophy Block",
    ...     "weeks": [{"weekNumber": 1, "routines": [{"name": "Push", "exercises": []}]}],
    ... })
    >>> program.weeks[0].week_number
    1
"""

from domain.models.envelope import ProgramEnvelope, RoutineIndexEntry, slot_key
from domain.models.exercise import GLOBAL_SCOPE, ExerciseRecord, exercise_name_key
from domain.models.program import (
    DEFAULT_PROGRAM_TITLE,
    ExerciseEntry,
    FlatProgram,
    PeriodizedProgram,
    ProgramPayload,
    ProgramWeek,
    Routine,
    SetPrescription,
    WeekSets,
)
from domain.models.routine import (
    PersistedExercise,
    PersistedRoutine,
    PersistedSet,
    SetType,
)

__all__ = [
    # Authoring payload
    "FlatProgram",
    "PeriodizedProgram",
    "ProgramPayload",
    "ProgramWeek",
    "Routine",
    "ExerciseEntry",
    "SetPrescription",
    "WeekSets",
    "DEFAULT_PROGRAM_TITLE",
    # Exercise catalog
    "ExerciseRecord",
    "GLOBAL_SCOPE",
    "exercise_name_key",
    # Persisted documents
    "PersistedRoutine",
    "PersistedExercise",
    "PersistedSet",
    "SetType",
    "ProgramEnvelope",
    "RoutineIndexEntry",
    "slot_key",
]
