"""
Application services for the Program Conversion Engine.

Leaf-first:
- program_normalizer: both program shapes -> ordered (week, routine) entries
- exercise_resolver: exercise name -> id over global and custom catalogs
- routine_materializer: one entry -> PersistedRoutine or RoutineFailure
- schedule_writer: routines first, then the program envelope
- client_directory: trainer client document -> linked client user id
"""

from application.services.client_directory import ClientDirectory, LinkedClient
from application.services.exercise_resolver import ExerciseResolver
from application.services.program_normalizer import (
    NormalizedEntry,
    normalize_program,
    parse_program_payload,
    program_duration_weeks,
    serialize_program,
    toggle_periodization,
)
from application.services.routine_materializer import (
    MaterializationOutcome,
    MaterializedRoutine,
    RoutineFailure,
    RoutineMaterializer,
    compose_set_notes,
)
from application.services.schedule_writer import (
    ProgramMeta,
    ScheduleWriteResult,
    ScheduleWriter,
)

__all__ = [
    # Normalizer
    "NormalizedEntry",
    "normalize_program",
    "parse_program_payload",
    "program_duration_weeks",
    "serialize_program",
    "toggle_periodization",
    # Resolver
    "ExerciseResolver",
    # Materializer
    "MaterializationOutcome",
    "MaterializedRoutine",
    "RoutineFailure",
    "RoutineMaterializer",
    "compose_set_notes",
    # Writer
    "ProgramMeta",
    "ScheduleWriteResult",
    "ScheduleWriter",
    # Client linking
    "ClientDirectory",
    "LinkedClient",
]
