"""
Supabase implementation of ExerciseCatalogRepository.

Two tables back the two catalog namespaces:
- ``exercises``: the global catalog, shared by every user
- ``custom_exercises``: one private catalog per user, unique on
  (owner_id, name_key)

Both tables carry a ``name_key`` column (trimmed, case-folded name) so lookups
are exact matches on an indexed column rather than ``ilike`` scans.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from supabase import Client

from application.exceptions import PersistenceError

logger = logging.getLogger(__name__)

GLOBAL_TABLE = "exercises"
CUSTOM_TABLE = "custom_exercises"
CUSTOM_CONFLICT_COLUMNS = "owner_id,name_key"


class SupabaseExerciseCatalogRepository:
    """
    Supabase implementation of ExerciseCatalogRepository protocol.

    Custom exercise creation is an upsert that ignores duplicates, followed by
    a re-read. Two conversions creating the same name for the same user
    therefore end up with one row and the same id.
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
        """
        self._client = client

    def find_global_by_name_key(self, name_key: str) -> Optional[Dict[str, Any]]:
        """Find a global exercise by normalized name."""
        try:
            result = (
                self._client.table(GLOBAL_TABLE)
                .select("*")
                .eq("name_key", name_key)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to look up global exercise '{name_key}': {e}")
            raise PersistenceError(f"Global exercise lookup failed: {e}") from e
        return result.data[0] if result.data else None

    def find_custom_by_name_key(self, owner_id: str, name_key: str) -> Optional[Dict[str, Any]]:
        """Find an exercise in a user's custom catalog by normalized name."""
        try:
            result = (
                self._client.table(CUSTOM_TABLE)
                .select("*")
                .eq("owner_id", owner_id)
                .eq("name_key", name_key)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to look up custom exercise '{name_key}' for {owner_id}: {e}")
            raise PersistenceError(f"Custom exercise lookup failed: {e}") from e
        return result.data[0] if result.data else None

    def create_custom(
        self,
        owner_id: str,
        name: str,
        name_key: str,
        *,
        created_by: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Create a custom exercise, or return the one that won a creation race."""
        data = {
            "owner_id": owner_id,
            "name": name,
            "name_key": name_key,
            "created_by": created_by,
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        try:
            result = (
                self._client.table(CUSTOM_TABLE)
                .upsert(data, on_conflict=CUSTOM_CONFLICT_COLUMNS, ignore_duplicates=True)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to create custom exercise '{name}' for {owner_id}: {e}")
            raise PersistenceError(f"Custom exercise creation failed: {e}") from e

        if result.data:
            logger.info(f"Custom exercise '{name}' created for {owner_id}")
            return result.data[0]

        # Duplicate ignored: another writer created it first
        existing = self.find_custom_by_name_key(owner_id, name_key)
        if existing is None:
            raise PersistenceError(f"Custom exercise '{name}' was neither created nor found")
        return existing
