"""
Supabase implementation of ProgramRepository.

Program envelopes live in the ``client_programs`` table, scoped by
``user_id``. ``routine_index`` is stored as a JSON array of
{routine_id, week, order} objects.
"""
import logging
from typing import Any, Dict, List, Optional

from supabase import Client

from application.exceptions import PersistenceError

logger = logging.getLogger(__name__)

TABLE = "client_programs"


class SupabaseProgramRepository:
    """
    Supabase implementation of ProgramRepository protocol.
    """

    def __init__(self, client: Client):
        self._client = client

    def create(self, user_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        row = {**data, "user_id": user_id}
        try:
            result = self._client.table(TABLE).insert(row).execute()
        except Exception as e:
            logger.error(f"Failed to create program for user {user_id}: {e}")
            raise PersistenceError(f"Program insert failed: {e}") from e
        if not result.data:
            raise PersistenceError("Program insert returned no row")
        logger.info(f"Program {result.data[0].get('id')} saved for user {user_id}")
        return result.data[0]

    def get_by_id(self, user_id: str, program_id: str) -> Optional[Dict[str, Any]]:
        try:
            result = (
                self._client.table(TABLE)
                .select("*")
                .eq("id", program_id)
                .eq("user_id", user_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to get program {program_id}: {e}")
            raise PersistenceError(f"Program read failed: {e}") from e
        return result.data[0] if result.data else None

    def get_by_user(self, user_id: str) -> List[Dict[str, Any]]:
        try:
            result = (
                self._client.table(TABLE)
                .select("*")
                .eq("user_id", user_id)
                .order("created_at", desc=True)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to list programs for user {user_id}: {e}")
            raise PersistenceError(f"Program read failed: {e}") from e
        return result.data or []
