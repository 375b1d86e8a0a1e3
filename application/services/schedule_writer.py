"""
Schedule writer: materialized routines -> persisted routines + program envelope.

Write order is the only ordering guarantee of the engine:

1. Each successful routine is written as an independent document
2. The routine index is built from (week, position) of each routine
3. The program envelope is written last

No multi-document transaction is used. A reader therefore never sees an
envelope that references a routine which does not exist, but a crash between
steps 1 and 3 can leave routines without an envelope. Those are tracked by
the conversion ledger through ``on_routine_written`` and reused through
``existing_slots`` on retry.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

from application.exceptions import PersistenceError, WriteError
from application.ports import ProgramRepository, RoutineRepository
from application.services.routine_materializer import (
    MaterializationOutcome,
    RoutineFailure,
)
from domain.models.envelope import ProgramEnvelope, RoutineIndexEntry, slot_key
from domain.models.program import ProgramPayload

logger = logging.getLogger(__name__)

RoutineWrittenCallback = Callable[[str, str], None]


@dataclass
class ProgramMeta:
    """Envelope metadata carried from the authored program."""

    title: str
    duration_weeks: int
    notes: str = ""
    message: str = ""
    created_by: Optional[str] = None

    @property
    def envelope_notes(self) -> str:
        if self.notes:
            return self.notes
        return f"Program imported from trainer. {self.message}".strip()

    @classmethod
    def from_program(
        cls,
        program: ProgramPayload,
        duration_weeks: int,
        *,
        message: Optional[str] = None,
        created_by: Optional[str] = None,
    ) -> "ProgramMeta":
        return cls(
            title=program.title,
            duration_weeks=duration_weeks,
            notes=program.notes or "",
            message=message or "",
            created_by=created_by,
        )


@dataclass
class ScheduleWriteResult:
    """Outcome of writing one program schedule."""

    program_id: Optional[str]
    routines_created: int
    routines_failed: int
    routine_index: List[RoutineIndexEntry] = field(default_factory=list)
    routines_reused: int = 0


class ScheduleWriter:
    """
    Persists routines, then the envelope that indexes them.

    Usage:
        >>> writer = ScheduleWriter(routine_repo, program_repo)
        >>> result = writer.write(meta, outcomes, "client-user-1")
        >>> result.routines_created
        6
    """

    def __init__(
        self,
        routine_repo: RoutineRepository,
        program_repo: ProgramRepository,
    ) -> None:
        self._routine_repo = routine_repo
        self._program_repo = program_repo

    def write(
        self,
        program_meta: ProgramMeta,
        materialized: Sequence[MaterializationOutcome],
        client_user_id: str,
        *,
        existing_slots: Optional[Dict[str, str]] = None,
        on_routine_written: Optional[RoutineWrittenCallback] = None,
    ) -> ScheduleWriteResult:
        """
        Write the schedule for one client.

        Args:
            program_meta: Envelope metadata
            materialized: Materializer outcomes in schedule order
            client_user_id: Owner of the routines and the envelope
            existing_slots: "<week>:<order>" -> routine id written by an
                earlier attempt of the same conversion; those are reused
            on_routine_written: Called with (slot, routine_id) after each
                new routine write

        Returns:
            ScheduleWriteResult. ``program_id`` is None when no routine could
            be created, in which case no envelope is written.

        Raises:
            WriteError: If a routine or the envelope cannot be written.
                Routines written before the failure are kept.
        """
        existing_slots = existing_slots or {}
        routine_index: List[RoutineIndexEntry] = []
        failed = 0
        reused = 0

        for outcome in materialized:
            slot = slot_key(outcome.week_number, outcome.position)
            routine_id = existing_slots.get(slot)

            if routine_id:
                reused += 1
                logger.info("Reusing routine %s written by an earlier attempt (slot %s)", routine_id, slot)
            elif isinstance(outcome, RoutineFailure):
                failed += 1
                continue
            else:
                routine = outcome.routine
                try:
                    self._routine_repo.create(client_user_id, routine.to_record(client_user_id))
                except PersistenceError as e:
                    logger.exception("Failed to write routine '%s' (slot %s)", routine.name, slot)
                    raise WriteError(
                        f"Failed to write routine '{routine.name}' for week {outcome.week_number}: {e.message}",
                        routines_created=len(routine_index),
                        routines_failed=failed,
                    ) from e
                routine_id = routine.id
                if on_routine_written is not None:
                    on_routine_written(slot, routine_id)

            routine_index.append(
                RoutineIndexEntry(
                    routine_id=routine_id,
                    week=outcome.week_number,
                    order=outcome.position,
                )
            )

        if not routine_index:
            logger.warning("No routines created for '%s'; envelope not written", program_meta.title)
            return ScheduleWriteResult(
                program_id=None,
                routines_created=0,
                routines_failed=failed,
            )

        envelope = ProgramEnvelope(
            name=program_meta.title,
            notes=program_meta.envelope_notes,
            message=program_meta.message,
            duration_weeks=program_meta.duration_weeks,
            created_by=program_meta.created_by,
            routine_index=routine_index,
        )
        try:
            self._program_repo.create(client_user_id, envelope.to_record(client_user_id))
        except PersistenceError as e:
            logger.exception("Failed to write program envelope '%s'", program_meta.title)
            raise WriteError(
                f"Failed to write program '{program_meta.title}': {e.message}",
                routines_created=len(routine_index),
                routines_failed=failed,
            ) from e

        logger.info(
            "Wrote program %s for user %s: %d routines (%d reused, %d failed)",
            envelope.id,
            client_user_id,
            len(routine_index),
            reused,
            failed,
        )
        return ScheduleWriteResult(
            program_id=envelope.id,
            routines_created=len(routine_index),
            routines_failed=failed,
            routine_index=routine_index,
            routines_reused=reused,
        )
