"""
Persisted routine documents.

A PersistedRoutine is what a client's app reads: resolved exercise ids and
flattened sets. Routines are independent documents; the program envelope
only indexes them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional
from uuid import uuid4

from pydantic import BaseModel, Field


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid4())


class SetType(str, Enum):
    """Set classification shown in the client app."""

    NORMAL = "normal"
    WARMUP = "warmup"


class PersistedSet(BaseModel):
    """
    One flattened set.

    ``notes`` packs the authored RPE and rest annotations into one string,
    e.g. "RPE: 8 | Rest: 90s". The original values are not recoverable
    separately.
    """

    id: str = Field(default_factory=_new_id)
    type: SetType = SetType.NORMAL
    weight: str = ""
    reps: str = ""
    notes: str = ""


class PersistedExercise(BaseModel):
    """An exercise reference inside a routine, with its sets."""

    exercise_id: str
    name: str
    notes: str = ""
    sets: List[PersistedSet] = Field(default_factory=list)


class PersistedRoutine(BaseModel):
    """A routine document owned by a client."""

    id: str = Field(default_factory=_new_id)
    name: str
    notes: str = ""
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)
    deleted_at: Optional[datetime] = None
    source_type: str = "program"
    estimated_duration_minutes: int = Field(default=15, ge=0)
    exercises: List[PersistedExercise] = Field(default_factory=list)

    @property
    def total_sets(self) -> int:
        return sum(len(ex.sets) for ex in self.exercises)

    def to_record(self, user_id: str) -> Dict[str, Any]:
        """Serialize for the routine repository."""
        record = self.model_dump(mode="json")
        record["user_id"] = user_id
        return record
