"""
Pydantic models for the program conversion API.

Request bodies accept the camelCase keys sent by the web client. Responses
are serialized with camelCase aliases.
"""

from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from application.use_cases import ConversionResult, ReconciliationReport


class SendToClientRequest(BaseModel):
    """Send a trainer-authored program to one client."""

    model_config = ConfigDict(populate_by_name=True)

    client_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("clientId", "client_id"),
        description="Trainer-side client document id",
    )
    program: Dict[str, Any] = Field(..., description="Flat or periodized program")
    message: Optional[str] = Field(None, description="Optional note shown to the client")


class ConversionResponse(BaseModel):
    """Aggregate conversion outcome."""

    success: bool
    program_id: Optional[str] = Field(None, serialization_alias="programId")
    routines_created: int = Field(0, serialization_alias="routinesCreated")
    routines_failed: int = Field(0, serialization_alias="routinesFailed")
    errors: List[str] = []
    idempotency_key: Optional[str] = Field(None, serialization_alias="idempotencyKey")
    replayed: bool = False

    @classmethod
    def from_result(cls, result: ConversionResult) -> "ConversionResponse":
        return cls(**result.to_dict())


class TogglePeriodizationRequest(BaseModel):
    """Switch a program between the flat and periodized shapes."""

    program: Dict[str, Any]


class OrphanedRoutineResponse(BaseModel):
    routine_id: str = Field(..., serialization_alias="routineId")
    slot: str
    idempotency_key: str = Field(..., serialization_alias="idempotencyKey")
    conversion_status: str = Field(..., serialization_alias="conversionStatus")


class ReconciliationResponse(BaseModel):
    """Routines written by conversions that never wrote their envelope."""

    user_id: str = Field(..., serialization_alias="userId")
    conversions_checked: int = Field(0, serialization_alias="conversionsChecked")
    orphan_count: int = Field(0, serialization_alias="orphanCount")
    orphans: List[OrphanedRoutineResponse] = []

    @classmethod
    def from_report(cls, report: ReconciliationReport) -> "ReconciliationResponse":
        return cls(
            user_id=report.user_id,
            conversions_checked=report.conversions_checked,
            orphan_count=report.orphan_count,
            orphans=[
                OrphanedRoutineResponse(
                    routine_id=orphan.routine_id,
                    slot=orphan.slot,
                    idempotency_key=orphan.idempotency_key,
                    conversion_status=orphan.conversion_status,
                )
                for orphan in report.orphans
            ],
        )


class LinkedClientResponse(BaseModel):
    """An active client with a linked user account."""

    id: str
    name: str
    user_id: str = Field(..., serialization_alias="userId")
    email: Optional[str] = None
