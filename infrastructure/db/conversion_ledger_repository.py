"""
Supabase implementation of ConversionLedgerRepository.

Ledger records live in the ``program_conversions`` table keyed by
``idempotency_key``. ``routine_slots`` and ``result`` are JSON columns.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from supabase import Client

from application.exceptions import PersistenceError
from application.ports.conversion_ledger_repository import (
    LEDGER_COMPLETED,
    LEDGER_FAILED,
    LEDGER_PENDING,
)

logger = logging.getLogger(__name__)

TABLE = "program_conversions"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class SupabaseConversionLedgerRepository:
    """
    Supabase implementation of ConversionLedgerRepository protocol.

    ``record_routine`` is a read-modify-write of ``routine_slots``. Routines
    of one conversion are written sequentially, so there is a single writer
    per key.
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
        """
        self._client = client

    def get(self, idempotency_key: str) -> Optional[Dict[str, Any]]:
        try:
            result = (
                self._client.table(TABLE)
                .select("*")
                .eq("idempotency_key", idempotency_key)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to read conversion ledger {idempotency_key}: {e}")
            raise PersistenceError(f"Ledger read failed: {e}") from e
        return result.data[0] if result.data else None

    def begin(
        self,
        idempotency_key: str,
        user_id: str,
        trainer_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        existing = self.get(idempotency_key)
        if existing is not None and existing.get("status") == LEDGER_COMPLETED:
            return existing

        if existing is None:
            record = {
                "idempotency_key": idempotency_key,
                "user_id": user_id,
                "trainer_id": trainer_id,
                "status": LEDGER_PENDING,
                "program_id": None,
                "routine_slots": {},
                "result": None,
                "error": None,
                "created_at": _now(),
                "updated_at": _now(),
            }
            return self._write(
                lambda table: table.insert(record),
                f"Ledger insert failed for {idempotency_key}",
            ) or record

        updated = self._write(
            lambda table: table.update(
                {"status": LEDGER_PENDING, "error": None, "updated_at": _now()}
            ).eq("idempotency_key", idempotency_key),
            f"Ledger update failed for {idempotency_key}",
        )
        return updated or {**existing, "status": LEDGER_PENDING, "error": None}

    def record_routine(self, idempotency_key: str, slot: str, routine_id: str) -> None:
        existing = self.get(idempotency_key)
        if existing is None:
            raise PersistenceError(f"No conversion ledger record for {idempotency_key}")
        slots = dict(existing.get("routine_slots") or {})
        slots[slot] = routine_id
        self._write(
            lambda table: table.update(
                {"routine_slots": slots, "updated_at": _now()}
            ).eq("idempotency_key", idempotency_key),
            f"Ledger slot update failed for {idempotency_key}",
        )

    def complete(self, idempotency_key: str, program_id: str, result: Dict[str, Any]) -> None:
        self._write(
            lambda table: table.update(
                {
                    "status": LEDGER_COMPLETED,
                    "program_id": program_id,
                    "result": result,
                    "error": None,
                    "updated_at": _now(),
                }
            ).eq("idempotency_key", idempotency_key),
            f"Ledger completion failed for {idempotency_key}",
        )

    def mark_failed(self, idempotency_key: str, error: str) -> None:
        self._write(
            lambda table: table.update(
                {"status": LEDGER_FAILED, "error": error, "updated_at": _now()}
            ).eq("idempotency_key", idempotency_key),
            f"Ledger failure update failed for {idempotency_key}",
        )

    def list_incomplete(self, user_id: str) -> List[Dict[str, Any]]:
        try:
            result = (
                self._client.table(TABLE)
                .select("*")
                .eq("user_id", user_id)
                .in_("status", [LEDGER_PENDING, LEDGER_FAILED])
                .order("created_at")
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to list incomplete conversions for {user_id}: {e}")
            raise PersistenceError(f"Ledger read failed: {e}") from e
        return result.data or []

    def _write(self, build_query, failure_message: str) -> Optional[Dict[str, Any]]:
        try:
            result = build_query(self._client.table(TABLE)).execute()
        except Exception as e:
            logger.error(f"{failure_message}: {e}")
            raise PersistenceError(f"{failure_message}: {e}") from e
        return result.data[0] if result.data else None
