"""
ReconcileConversions Use Case.

Reports routines left behind by conversions that wrote some routines but
never their program envelope (crash, write failure, abandoned retry).

The report is read-only: the engine never deletes. An operator can soft
delete the listed routines, or the trainer can resend the same program, in
which case the conversion resumes and adopts them into the new envelope.
"""

import logging
from dataclasses import dataclass, field
from typing import List

from application.ports import ConversionLedgerRepository, RoutineRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrphanedRoutine:
    """A routine written by an unfinished conversion."""

    routine_id: str
    slot: str
    idempotency_key: str
    conversion_status: str


@dataclass
class ReconciliationReport:
    """Orphaned routines of one client user."""

    user_id: str
    conversions_checked: int = 0
    orphans: List[OrphanedRoutine] = field(default_factory=list)

    @property
    def orphan_count(self) -> int:
        return len(self.orphans)


class ReconcileConversionsUseCase:
    """
    Use case for finding routines orphaned by partial conversions.

    Usage:
        >>> use_case = ReconcileConversionsUseCase(ledger_repo, routine_repo)
        >>> report = use_case.execute(user_id="client-user-1")
        >>> report.orphan_count
        0
    """

    def __init__(
        self,
        ledger_repo: ConversionLedgerRepository,
        routine_repo: RoutineRepository,
    ) -> None:
        self._ledger = ledger_repo
        self._routine_repo = routine_repo

    def execute(self, user_id: str) -> ReconciliationReport:
        """
        Build the orphan report for a client user.

        Only routines that still exist are reported.
        """
        report = ReconciliationReport(user_id=user_id)

        for record in self._ledger.list_incomplete(user_id):
            report.conversions_checked += 1
            slots = record.get("routine_slots") or {}
            if not slots:
                continue

            existing = {
                routine["id"]
                for routine in self._routine_repo.list_by_ids(user_id, list(slots.values()))
            }
            for slot, routine_id in sorted(slots.items()):
                if routine_id not in existing:
                    continue
                report.orphans.append(
                    OrphanedRoutine(
                        routine_id=routine_id,
                        slot=slot,
                        idempotency_key=record["idempotency_key"],
                        conversion_status=record.get("status", ""),
                    )
                )

        if report.orphans:
            logger.warning(
                "User %s has %d orphaned routines across %d unfinished conversions",
                user_id,
                report.orphan_count,
                report.conversions_checked,
            )
        return report
