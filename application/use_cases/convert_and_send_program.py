"""
ConvertAndSendProgram Use Case.

Public entry point of the program conversion engine. Converts a
trainer-authored program into routine documents and a program envelope in
the client's own namespace.

Pipeline:
1. Validate the payload shape (before any read or write)
2. Resolve the trainer's client document to the client user id
3. Normalize the program into (week, routine) entries
4. Consult the idempotency ledger (replay or resume)
5. Resolve exercise names concurrently
6. Materialize each entry
7. Write routines, then the envelope
8. Record the outcome in the ledger and return an aggregate result
"""

import asyncio
import hashlib
import json
import logging
from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import asdict, dataclass, field
from functools import partial
from typing import Any, Dict, List, Mapping, Optional, Union

from application.exceptions import PersistenceError, WriteError
from application.ports import (
    ClientLinkRepository,
    ConversionLedgerRepository,
    ExerciseCatalogRepository,
    LEDGER_COMPLETED,
    ProgramRepository,
    RoutineRepository,
)
from application.services.client_directory import ClientDirectory
from application.services.exercise_resolver import ExerciseResolver
from application.services.program_normalizer import (
    normalize_program,
    parse_program_payload,
    program_duration_weeks,
    serialize_program,
)
from application.services.routine_materializer import (
    MaterializationOutcome,
    RoutineMaterializer,
)
from application.services.schedule_writer import ProgramMeta, ScheduleWriter
from domain.models.program import ProgramPayload

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    """Aggregate result of one conversion.

    ``success`` is True iff at least one routine was created and the
    envelope was written. Partial success keeps ``success`` True and lists
    what was dropped in ``errors``.
    """

    success: bool
    program_id: Optional[str] = None
    routines_created: int = 0
    routines_failed: int = 0
    errors: List[str] = field(default_factory=list)
    idempotency_key: Optional[str] = None
    replayed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, replayed: bool = False) -> "ConversionResult":
        return cls(
            success=bool(data.get("success")),
            program_id=data.get("program_id"),
            routines_created=int(data.get("routines_created") or 0),
            routines_failed=int(data.get("routines_failed") or 0),
            errors=list(data.get("errors") or []),
            idempotency_key=data.get("idempotency_key"),
            replayed=replayed,
        )


def compute_idempotency_key(
    client_user_id: str,
    program: ProgramPayload,
    message: Optional[str] = None,
) -> str:
    """SHA-256 over the canonical JSON of client, parsed program and message."""
    canonical = json.dumps(
        {
            "user_id": client_user_id,
            "program": serialize_program(program),
            "message": message or "",
        },
        sort_keys=True,
        separators=(",", ":"),
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


class ConvertAndSendProgramUseCase:
    """
    Use case for sending a trainer-authored program to a client.

    Dependencies are injected via constructor for testability. The ledger is
    optional; without it every call is treated as a new conversion.

    Usage:
        >>> use_case = ConvertAndSendProgramUseCase(
        ...     client_repo=client_repo,
        ...     exercise_repo=exercise_repo,
        ...     routine_repo=routine_repo,
        ...     program_repo=program_repo,
        ...     ledger_repo=ledger_repo,
        ... )
        >>> result = await use_case.execute(
        ...     trainer_id="trainer-1",
        ...     client_id="client-doc-1",
        ...     program_payload={"title": "Strength", "durationWeeks": 4, "routines": [...]},
        ... )
    """

    def __init__(
        self,
        client_repo: ClientLinkRepository,
        exercise_repo: ExerciseCatalogRepository,
        routine_repo: RoutineRepository,
        program_repo: ProgramRepository,
        ledger_repo: Optional[ConversionLedgerRepository] = None,
        *,
        executor: Optional[Executor] = None,
        max_workers: int = 4,
    ) -> None:
        """
        Initialize the use case with required dependencies.

        Args:
            client_repo: Trainer client documents (client -> user link)
            exercise_repo: Global and custom exercise catalogs
            routine_repo: Client routine documents
            program_repo: Client program envelopes
            ledger_repo: Idempotency ledger (None disables replay/resume)
            executor: Shared executor for repository calls; a private
                thread pool of ``max_workers`` threads is created when omitted
                and released by :meth:`close`
            max_workers: Threads used for repository calls
        """
        self._clients = ClientDirectory(client_repo)
        self._exercise_repo = exercise_repo
        self._writer = ScheduleWriter(routine_repo, program_repo)
        self._ledger = ledger_repo

        # Thread pool for running sync repository calls from async context
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="program_convert_"
        )

    def close(self) -> None:
        """Shut down the private thread pool. An injected executor is left running."""
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    async def _run(self, func, *args, **kwargs):
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(self._executor, partial(func, *args, **kwargs))

    async def execute(
        self,
        trainer_id: str,
        client_id: str,
        program_payload: Union[Mapping[str, Any], ProgramPayload],
        custom_message: Optional[str] = None,
    ) -> ConversionResult:
        """
        Convert a program and send it to a client.

        Args:
            trainer_id: Authenticated trainer sending the program
            client_id: Trainer-side client document id
            program_payload: Flat or periodized program (raw JSON or parsed)
            custom_message: Optional note shown to the client

        Returns:
            ConversionResult

        Raises:
            ValidationError: Malformed payload, raised before any repository call
            NotFoundError: The client has no linked user account
            PersistenceError: The client link or the ledger could not be read
        """
        program = parse_program_payload(program_payload)
        entries = normalize_program(program)

        client_user_id = await self._run(self._clients.resolve_client_user_id, trainer_id, client_id)
        logger.info(
            "Converting program '%s' for client %s (user %s): %d routine entries",
            program.title,
            client_id,
            client_user_id,
            len(entries),
        )

        idempotency_key = compute_idempotency_key(client_user_id, program, custom_message)
        existing_slots: Dict[str, str] = {}

        if self._ledger is not None:
            record = await self._run(self._ledger.get, idempotency_key)
            if record and record.get("status") == LEDGER_COMPLETED and record.get("result"):
                logger.info("Replaying completed conversion %s", idempotency_key)
                return ConversionResult.from_dict(record["result"], replayed=True)

            record = await self._run(self._ledger.begin, idempotency_key, client_user_id, trainer_id)
            existing_slots = dict(record.get("routine_slots") or {})
            if existing_slots:
                logger.info(
                    "Resuming conversion %s with %d routines already written",
                    idempotency_key,
                    len(existing_slots),
                )

        resolver = ExerciseResolver(self._exercise_repo, created_by=trainer_id)
        await resolver.resolve_many(
            [exercise.name for entry in entries for exercise in entry.routine.exercises],
            client_user_id,
            executor=self._executor,
        )

        materializer = RoutineMaterializer(resolver, program_title=program.title)
        outcomes: List[MaterializationOutcome] = []
        for entry in entries:
            outcomes.append(await self._run(materializer.materialize, entry, client_user_id))

        errors = [message for outcome in outcomes for message in outcome.errors]
        meta = ProgramMeta.from_program(
            program,
            program_duration_weeks(program),
            message=custom_message,
            created_by=trainer_id,
        )

        try:
            written = await self._run(
                self._writer.write,
                meta,
                outcomes,
                client_user_id,
                existing_slots=existing_slots,
                on_routine_written=partial(self._record_routine, idempotency_key),
            )
        except WriteError as e:
            errors.append(e.message)
            await self._mark_failed(idempotency_key, e.message)
            return ConversionResult(
                success=False,
                routines_created=e.routines_created,
                routines_failed=e.routines_failed,
                errors=errors,
                idempotency_key=idempotency_key,
            )

        if written.program_id is None:
            errors.append("No routines could be created; program was not sent")
            await self._mark_failed(idempotency_key, errors[-1])
            return ConversionResult(
                success=False,
                routines_failed=written.routines_failed,
                errors=errors,
                idempotency_key=idempotency_key,
            )

        result = ConversionResult(
            success=True,
            program_id=written.program_id,
            routines_created=written.routines_created,
            routines_failed=written.routines_failed,
            errors=errors,
            idempotency_key=idempotency_key,
        )
        await self._mark_completed(idempotency_key, result)

        logger.info(
            "Program %s sent to user %s: %d routines created, %d failed, %d errors",
            result.program_id,
            client_user_id,
            result.routines_created,
            result.routines_failed,
            len(result.errors),
        )
        return result

    # -------------------------------------------------------------------------
    # Ledger bookkeeping (runs after writes started; never aborts the result)
    # -------------------------------------------------------------------------

    def _record_routine(self, idempotency_key: str, slot: str, routine_id: str) -> None:
        if self._ledger is None:
            return
        try:
            self._ledger.record_routine(idempotency_key, slot, routine_id)
        except PersistenceError:
            logger.exception("Could not record routine %s in ledger %s", routine_id, idempotency_key)

    async def _mark_completed(self, idempotency_key: str, result: ConversionResult) -> None:
        if self._ledger is None:
            return
        try:
            await self._run(self._ledger.complete, idempotency_key, result.program_id, result.to_dict())
        except PersistenceError:
            logger.exception("Could not mark conversion %s completed", idempotency_key)

    async def _mark_failed(self, idempotency_key: str, error: str) -> None:
        if self._ledger is None:
            return
        try:
            await self._run(self._ledger.mark_failed, idempotency_key, error)
        except PersistenceError:
            logger.exception("Could not mark conversion %s failed", idempotency_key)
