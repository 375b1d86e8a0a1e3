"""
Supabase implementation of RoutineRepository.

Client routines live in the ``client_routines`` table, one row per routine,
scoped by ``user_id``. The ``exercises`` column holds the nested
exercises/sets document as JSON.
"""
import logging
from typing import Any, Dict, List, Optional

from supabase import Client

from application.exceptions import PersistenceError

logger = logging.getLogger(__name__)

TABLE = "client_routines"


class SupabaseRoutineRepository:
    """
    Supabase implementation of RoutineRepository protocol.

    The client is injected via constructor for testability.
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
        """
        self._client = client

    def create(self, user_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """Insert one routine row owned by ``user_id``."""
        row = {**data, "user_id": user_id}
        try:
            result = self._client.table(TABLE).insert(row).execute()
        except Exception as e:
            error_msg = str(e)
            logger.error(f"Failed to create routine for user {user_id}: {e}")
            if "PGRST" in error_msg or "row-level security" in error_msg.lower():
                logger.error("RLS/Permissions error: Consider using SUPABASE_SERVICE_ROLE_KEY for backend API")
            raise PersistenceError(f"Routine insert failed: {e}") from e
        if not result.data:
            raise PersistenceError("Routine insert returned no row")
        return result.data[0]

    def get_by_id(self, user_id: str, routine_id: str) -> Optional[Dict[str, Any]]:
        """Get a routine by ID."""
        try:
            result = (
                self._client.table(TABLE)
                .select("*")
                .eq("id", routine_id)
                .eq("user_id", user_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to get routine {routine_id}: {e}")
            raise PersistenceError(f"Routine read failed: {e}") from e
        return result.data[0] if result.data else None

    def list_by_ids(self, user_id: str, routine_ids: List[str]) -> List[Dict[str, Any]]:
        """Get several routines of one user; missing ids are skipped."""
        if not routine_ids:
            return []
        try:
            result = (
                self._client.table(TABLE)
                .select("*")
                .eq("user_id", user_id)
                .in_("id", routine_ids)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to list routines for user {user_id}: {e}")
            raise PersistenceError(f"Routine read failed: {e}") from e
        return result.data or []
