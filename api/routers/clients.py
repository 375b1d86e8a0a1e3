"""
Clients router.

Lists the trainer's clients that can receive programs.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from api.deps import get_client_link_repo, get_current_user
from api.schemas.programs import LinkedClientResponse
from application.exceptions import PersistenceError
from application.ports import ClientLinkRepository
from application.services import ClientDirectory

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/clients",
    tags=["Clients"],
)


@router.get("/linked", response_model=List[LinkedClientResponse])
def list_linked_clients(
    user_id: str = Depends(get_current_user),
    client_repo: ClientLinkRepository = Depends(get_client_link_repo),
):
    """Active clients of the authenticated trainer that have a linked account."""
    try:
        clients = ClientDirectory(client_repo).list_linked_clients(user_id)
    except PersistenceError as e:
        logger.error(f"Client listing unavailable: {e.message}")
        raise HTTPException(status_code=503, detail="Database unavailable. Please retry.")
    return [
        LinkedClientResponse(id=c.id, name=c.name, user_id=c.user_id, email=c.email)
        for c in clients
    ]
