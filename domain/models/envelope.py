"""
Program envelope - the top-level persisted program record.

The envelope indexes its routines through ``routine_index`` and never embeds
them. Each index entry places one routine at a (week, order) slot.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from pydantic import BaseModel, Field, model_validator


class RoutineIndexEntry(BaseModel):
    """Places one routine in the weekly schedule."""

    routine_id: str
    week: int = Field(..., ge=1)
    order: int = Field(..., ge=1, description="1-based position within the week")

    @property
    def slot(self) -> str:
        return slot_key(self.week, self.order)


def slot_key(week: int, order: int) -> str:
    """Stable string key for a (week, order) slot."""
    return f"{week}:{order}"


class ProgramEnvelope(BaseModel):
    """A program as seen by the client, owned by the client's user id."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    notes: str = ""
    message: str = ""
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    duration_weeks: int = Field(..., ge=1)
    is_active: bool = True
    created_by: Optional[str] = None
    routine_index: List[RoutineIndexEntry] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_unique_slots(self) -> "ProgramEnvelope":
        """(week, order) pairs must be unique within one envelope."""
        seen = set()
        for entry in self.routine_index:
            if entry.slot in seen:
                raise ValueError(f"Duplicate routine slot week={entry.week} order={entry.order}")
            seen.add(entry.slot)
        return self

    @property
    def routine_ids(self) -> List[str]:
        return [entry.routine_id for entry in self.routine_index]

    def to_record(self, user_id: str) -> Dict[str, Any]:
        """Serialize for the program repository."""
        record = self.model_dump(mode="json")
        record["user_id"] = user_id
        return record
