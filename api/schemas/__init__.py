"""
Pydantic schemas for API requests and responses.

Organized by feature/domain:
- programs: Program conversion, periodization toggle and client listing
"""

from api.schemas.programs import (
    ConversionResponse,
    LinkedClientResponse,
    OrphanedRoutineResponse,
    ReconciliationResponse,
    SendToClientRequest,
    TogglePeriodizationRequest,
)

__all__ = [
    "ConversionResponse",
    "LinkedClientResponse",
    "OrphanedRoutineResponse",
    "ReconciliationResponse",
    "SendToClientRequest",
    "TogglePeriodizationRequest",
]
