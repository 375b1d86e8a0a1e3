"""
Domain layer for the Program Conversion Engine.

This package contains pure domain models that are
independent of infrastructure concerns (database, API, external services).
"""

from domain.models import (
    ExerciseEntry,
    FlatProgram,
    PeriodizedProgram,
    PersistedRoutine,
    ProgramEnvelope,
    ProgramPayload,
    Routine,
    SetPrescription,
)

__all__ = [
    "ExerciseEntry",
    "FlatProgram",
    "PeriodizedProgram",
    "PersistedRoutine",
    "ProgramEnvelope",
    "ProgramPayload",
    "Routine",
    "SetPrescription",
]
