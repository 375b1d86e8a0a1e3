"""
Routine materializer: one normalized routine -> one persisted routine document.

For each authored exercise the materializer resolves an exercise id and
flattens the set prescriptions for the entry's week into PersistedSet
values. RPE and rest are packed into the set's single ``notes`` string.

Outcomes:
- MaterializedRoutine: routine ready to write. Exercises that failed to
  resolve were dropped and are listed in ``skipped``.
- RoutineFailure: every exercise of a non-empty routine failed to resolve.
  A routine with no exercises at all is a valid rest day, not a failure.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Union

from application.exceptions import ResolutionError
from application.services.exercise_resolver import ExerciseResolver
from application.services.program_normalizer import NormalizedEntry
from domain.models.program import DEFAULT_PROGRAM_TITLE, SetPrescription
from domain.models.routine import (
    PersistedExercise,
    PersistedRoutine,
    PersistedSet,
    SetType,
)

logger = logging.getLogger(__name__)

NOTES_SEPARATOR = " | "

# Duration estimate: minutes per set, fixed warm-up/cool-down, floor
MINUTES_PER_SET = 2
WARMUP_COOLDOWN_MINUTES = 5
MIN_ROUTINE_MINUTES = 15

_DIGITS = re.compile(r"(\d+)")


def compose_set_notes(rpe: Optional[str], rest: Optional[str]) -> str:
    """
    Pack RPE and rest annotations into one notes string.

    Examples:
        >>> compose_set_notes("8", "90s")
        'RPE: 8 | Rest: 90s'
        >>> compose_set_notes("8", None)
        'RPE: 8'
        >>> compose_set_notes(None, None)
        ''
    """
    parts = []
    if rpe:
        parts.append(f"RPE: {rpe}")
    if rest:
        parts.append(f"Rest: {rest}")
    return NOTES_SEPARATOR.join(parts)


def to_persisted_set(prescription: SetPrescription) -> PersistedSet:
    """Flatten one authored set prescription."""
    return PersistedSet(
        type=SetType.WARMUP if prescription.is_warmup else SetType.NORMAL,
        weight=prescription.weight or "",
        reps=prescription.reps or "",
        notes=compose_set_notes(prescription.rpe, prescription.rest),
    )


def estimate_duration_minutes(prescriptions: Iterable[SetPrescription]) -> int:
    """
    Rough routine duration: 2 minutes per set plus prescribed rest
    (leading number read as seconds), plus 5 minutes, never under 15.
    """
    total = 0.0
    for prescription in prescriptions:
        total += MINUTES_PER_SET
        if prescription.rest:
            match = _DIGITS.search(prescription.rest)
            if match:
                total += int(match.group(1)) / 60
    total += WARMUP_COOLDOWN_MINUTES
    return max(int(round(total)), MIN_ROUTINE_MINUTES)


@dataclass
class MaterializedRoutine:
    """A routine ready to be written, plus the exercises it had to drop."""

    entry: NormalizedEntry
    routine: PersistedRoutine
    skipped: List[ResolutionError] = field(default_factory=list)

    @property
    def week_number(self) -> int:
        return self.entry.week_number

    @property
    def position(self) -> int:
        return self.entry.position

    @property
    def errors(self) -> List[str]:
        return [
            f"Week {self.week_number}, routine '{self.routine.name}': {error.message}"
            for error in self.skipped
        ]


@dataclass
class RoutineFailure:
    """Every exercise of the routine failed to resolve."""

    entry: NormalizedEntry
    routine_name: str
    reasons: List[ResolutionError] = field(default_factory=list)

    @property
    def week_number(self) -> int:
        return self.entry.week_number

    @property
    def position(self) -> int:
        return self.entry.position

    @property
    def message(self) -> str:
        detail = "; ".join(reason.message for reason in self.reasons)
        return (
            f"Week {self.week_number}, routine '{self.routine_name}': "
            f"no exercises could be resolved ({detail})"
        )

    @property
    def errors(self) -> List[str]:
        return [self.message]


MaterializationOutcome = Union[MaterializedRoutine, RoutineFailure]


class RoutineMaterializer:
    """
    Converts normalized routines into persisted routine documents.

    Usage:
        >>> materializer = RoutineMaterializer(resolver, program_title="Strength")
        >>> outcome = materializer.materialize(entry, "client-user-1")
        >>> if isinstance(outcome, RoutineFailure):
        ...     print(outcome.message)
    """

    def __init__(
        self,
        resolver: ExerciseResolver,
        *,
        program_title: str = DEFAULT_PROGRAM_TITLE,
    ) -> None:
        self._resolver = resolver
        self._program_title = program_title

    def materialize(self, entry: NormalizedEntry, client_user_id: str) -> MaterializationOutcome:
        """
        Materialize one (week, routine) entry.

        Args:
            entry: Normalized entry from the program normalizer
            client_user_id: Owner of the routine and of new custom exercises

        Returns:
            MaterializedRoutine or RoutineFailure
        """
        routine_name = self._routine_name(entry)
        exercises: List[PersistedExercise] = []
        skipped: List[ResolutionError] = []
        prescriptions: List[SetPrescription] = []

        for authored in entry.routine.exercises:
            try:
                exercise_id = self._resolver.resolve(authored.name, client_user_id)
            except ResolutionError as e:
                logger.warning(
                    "Dropping exercise from week %d routine '%s': %s",
                    entry.week_number,
                    routine_name,
                    e.message,
                )
                skipped.append(e)
                continue

            week_sets = authored.sets_for_week(entry.prescription_week)
            prescriptions.extend(week_sets)
            exercises.append(
                PersistedExercise(
                    exercise_id=exercise_id,
                    name=authored.name.strip(),
                    notes=authored.notes or "",
                    sets=[to_persisted_set(prescription) for prescription in week_sets],
                )
            )

        if entry.routine.exercises and not exercises:
            logger.warning(
                "Routine '%s' for week %d failed: none of its %d exercises resolved",
                routine_name,
                entry.week_number,
                len(entry.routine.exercises),
            )
            return RoutineFailure(entry=entry, routine_name=routine_name, reasons=skipped)

        routine = PersistedRoutine(
            name=routine_name,
            notes=entry.routine.notes
            or f"Week {entry.week_number} routine from program: {self._program_title}",
            exercises=exercises,
            estimated_duration_minutes=estimate_duration_minutes(prescriptions),
        )
        return MaterializedRoutine(entry=entry, routine=routine, skipped=skipped)

    @staticmethod
    def _routine_name(entry: NormalizedEntry) -> str:
        return entry.routine.name or f"Week {entry.week_number} - Routine {entry.position}"
