"""
Programs router.

This router provides:
- Sending a trainer-authored program to a client (conversion into routines)
- Toggling a program between the flat and periodized shapes
- Reporting routines orphaned by unfinished conversions
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse

from api.deps import (
    get_client_link_repo,
    get_convert_program_use_case,
    get_current_user,
    get_reconcile_conversions_use_case,
)
from api.schemas.programs import (
    ConversionResponse,
    ReconciliationResponse,
    SendToClientRequest,
    TogglePeriodizationRequest,
)
from application.exceptions import NotFoundError, PersistenceError, ValidationError
from application.ports import ClientLinkRepository
from application.services import ClientDirectory, serialize_program, toggle_periodization
from application.use_cases import (
    ConvertAndSendProgramUseCase,
    ReconcileConversionsUseCase,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/programs",
    tags=["Programs"],
)


@router.post("/send-to-client", response_model=ConversionResponse)
async def send_program_to_client(
    request: SendToClientRequest,
    user_id: str = Depends(get_current_user),
    use_case: ConvertAndSendProgramUseCase = Depends(get_convert_program_use_case),
):
    """
    Convert a program into routines in the client's account.

    Partial success (some exercises or routines dropped) is a 200 with a
    non-empty ``errors`` list. A conversion that created nothing, or whose
    envelope write failed, is a 502 carrying the same body.
    """
    try:
        result = await use_case.execute(
            trainer_id=user_id,
            client_id=request.client_id,
            program_payload=request.program,
            custom_message=request.message,
        )
    except ValidationError as e:
        logger.warning(f"Rejected program from trainer {user_id}: {e.message}")
        raise HTTPException(status_code=422, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except PersistenceError as e:
        logger.error(f"Program conversion unavailable: {e.message}")
        raise HTTPException(status_code=503, detail="Database unavailable. Please retry.")

    response = ConversionResponse.from_result(result)
    if not result.success:
        return JSONResponse(status_code=502, content=response.model_dump(mode="json", by_alias=True))
    return response


@router.post("/toggle-periodization")
def toggle_program_periodization(
    request: TogglePeriodizationRequest,
    user_id: str = Depends(get_current_user),
):
    """Return the program converted to the other shape (flat <-> periodized)."""
    try:
        toggled = toggle_periodization(request.program)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.message)
    return {"program": serialize_program(toggled)}


@router.get("/conversions/orphans", response_model=ReconciliationResponse)
def list_orphaned_routines(
    client_id: str = Query(..., min_length=1, description="Trainer-side client document id"),
    user_id: str = Depends(get_current_user),
    client_repo: ClientLinkRepository = Depends(get_client_link_repo),
    use_case: ReconcileConversionsUseCase = Depends(get_reconcile_conversions_use_case),
):
    """Routines of a client written by conversions that never finished."""
    try:
        client_user_id = ClientDirectory(client_repo).resolve_client_user_id(user_id, client_id)
        report = use_case.execute(client_user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except PersistenceError as e:
        logger.error(f"Orphan report unavailable: {e.message}")
        raise HTTPException(status_code=503, detail="Database unavailable. Please retry.")
    return ReconciliationResponse.from_report(report)
