"""
Client Link Repository Interface (Port).

A trainer keeps one client document per client. Once the client signs up,
the document is linked to the client's user account through ``user_id``.
The conversion engine reads this link to find whose namespace it writes to.
"""
from typing import Any, Dict, List, Optional, Protocol


class ClientLinkRepository(Protocol):
    """
    Abstract interface for reading a trainer's client documents.

    Client documents are dictionaries with at least ``id``, ``trainer_id``,
    ``name``, ``email``, ``status`` and an optional ``user_id``.
    """

    def get_client(self, trainer_id: str, client_id: str) -> Optional[Dict[str, Any]]:
        """
        Get one client document of a trainer.

        Args:
            trainer_id: The trainer's user ID
            client_id: The client document ID

        Returns:
            Client dictionary or None if not found
        """
        ...

    def list_clients(self, trainer_id: str) -> List[Dict[str, Any]]:
        """
        List all client documents of a trainer.

        Args:
            trainer_id: The trainer's user ID

        Returns:
            List of client dictionaries
        """
        ...
