"""
Client directory: trainer client documents -> linked client user ids.

The conversion engine writes into the client's own namespace, so it needs
the user id the client signed up with, not the trainer-side client document
id.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from application.exceptions import NotFoundError
from application.ports import ClientLinkRepository

logger = logging.getLogger(__name__)

ACTIVE_STATUS = "active"


@dataclass(frozen=True)
class LinkedClient:
    """A client that has a linked user account."""

    id: str
    name: str
    user_id: str
    email: Optional[str] = None


class ClientDirectory:
    """Looks up client-to-user links for a trainer."""

    def __init__(self, client_repo: ClientLinkRepository) -> None:
        self._client_repo = client_repo

    def resolve_client_user_id(self, trainer_id: str, client_id: str) -> str:
        """
        Resolve a trainer's client document to the client's user id.

        Raises:
            NotFoundError: If the client document does not exist or has no
                linked user account
        """
        client = self._client_repo.get_client(trainer_id, client_id)
        if not client:
            raise NotFoundError(f"Client {client_id} not found")

        user_id = client.get("user_id")
        if not user_id:
            raise NotFoundError(f"Client {client_id} does not have a linked user account")

        logger.debug("Client %s of trainer %s is linked to user %s", client_id, trainer_id, user_id)
        return str(user_id)

    def list_linked_clients(self, trainer_id: str) -> List[LinkedClient]:
        """Active clients of a trainer that can receive programs."""
        linked = []
        for client in self._client_repo.list_clients(trainer_id):
            status = str(client.get("status") or "").lower()
            if status != ACTIVE_STATUS or not client.get("user_id"):
                continue
            linked.append(
                LinkedClient(
                    id=str(client["id"]),
                    name=client.get("name") or "Unnamed Client",
                    user_id=str(client["user_id"]),
                    email=client.get("email") or None,
                )
            )
        logger.info("Trainer %s has %d linked active clients", trainer_id, len(linked))
        return linked
