"""
Conversion Ledger Repository Interface (Port).

The ledger records every conversion attempt under an idempotency key
(hash of client user id, payload and message) before any routine is
written. It lets the engine:
- short-circuit an exact replay of a completed conversion
- resume a conversion that wrote some routines but never its envelope
- report routines orphaned by such partial runs

Record shape:
    {
        "idempotency_key": str,
        "user_id": str,
        "trainer_id": Optional[str],
        "status": "pending" | "completed" | "failed",
        "program_id": Optional[str],
        "routine_slots": {"<week>:<order>": routine_id, ...},
        "result": Optional[dict],
        "error": Optional[str],
        "created_at": str,
        "updated_at": str,
    }
"""
from typing import Any, Dict, List, Optional, Protocol


LEDGER_PENDING = "pending"
LEDGER_COMPLETED = "completed"
LEDGER_FAILED = "failed"


class ConversionLedgerRepository(Protocol):
    """
    Abstract interface for the conversion idempotency ledger.

    Implementations raise PersistenceError when the backing store fails.
    """

    def get(self, idempotency_key: str) -> Optional[Dict[str, Any]]:
        """
        Get a ledger record.

        Args:
            idempotency_key: The conversion's idempotency key

        Returns:
            Ledger record or None if never seen
        """
        ...

    def begin(
        self,
        idempotency_key: str,
        user_id: str,
        trainer_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Record the start of a conversion attempt.

        Creates a pending record, or moves an existing non-completed record
        back to pending while keeping its ``routine_slots``.

        Returns:
            The pending ledger record
        """
        ...

    def record_routine(self, idempotency_key: str, slot: str, routine_id: str) -> None:
        """
        Record that the routine for a (week, order) slot was written.

        Args:
            idempotency_key: The conversion's idempotency key
            slot: Slot key "<week>:<order>"
            routine_id: ID of the written routine
        """
        ...

    def complete(
        self,
        idempotency_key: str,
        program_id: str,
        result: Dict[str, Any],
    ) -> None:
        """
        Mark a conversion completed and store its result for replay.
        """
        ...

    def mark_failed(self, idempotency_key: str, error: str) -> None:
        """
        Mark a conversion failed. Recorded routine slots are kept.
        """
        ...

    def list_incomplete(self, user_id: str) -> List[Dict[str, Any]]:
        """
        List pending or failed conversions of a user.

        Args:
            user_id: The client user ID

        Returns:
            Ledger records whose envelope was never written
        """
        ...
