"""
Supabase implementation of ClientLinkRepository.

Reads the trainer's client documents from the ``trainer_clients`` table.
A client document is linked to the client's own account through ``user_id``.
"""
import logging
from typing import Any, Dict, List, Optional

from supabase import Client

from application.exceptions import PersistenceError

logger = logging.getLogger(__name__)

TABLE = "trainer_clients"


class SupabaseClientLinkRepository:
    """
    Supabase implementation of ClientLinkRepository protocol.

    Every query is scoped by ``trainer_id`` so a trainer can only reach
    their own clients.
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
        """
        self._client = client

    def get_client(self, trainer_id: str, client_id: str) -> Optional[Dict[str, Any]]:
        """Get one client document of a trainer."""
        try:
            result = (
                self._client.table(TABLE)
                .select("*")
                .eq("id", client_id)
                .eq("trainer_id", trainer_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to get client {client_id} for trainer {trainer_id}: {e}")
            raise PersistenceError(f"Could not read client {client_id}: {e}") from e
        return result.data[0] if result.data else None

    def list_clients(self, trainer_id: str) -> List[Dict[str, Any]]:
        """List a trainer's client documents, alphabetically."""
        try:
            result = (
                self._client.table(TABLE)
                .select("*")
                .eq("trainer_id", trainer_id)
                .order("name")
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to list clients for trainer {trainer_id}: {e}")
            raise PersistenceError(f"Could not list clients: {e}") from e
        return result.data or []
